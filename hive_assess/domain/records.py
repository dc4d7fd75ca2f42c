"""Stored records: apiaries, hives and inspections.

These are the persistence-side shapes.  The engine never sees them; the
store converts a Hive into a HiveContext and past inspections into
HistoryPoints before analysis.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from hive_assess.domain.enums import ColorCode, RiskLevel
from hive_assess.domain.snapshot import HiveContext, Snapshot
from hive_assess.foundation.identifiers import new_id


class ApiaryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=128)
    location: Optional[str] = Field(default=None, max_length=256)


class Apiary(ApiaryCreate):
    apiary_id: UUID = Field(default_factory=new_id)
    created_at: datetime


class HiveCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=128)
    hive_type: str = Field(default="langstroth", min_length=1, max_length=64)
    frame_count: int = Field(default=10, ge=0, le=100)
    colony_age_months: int = Field(default=0, ge=0)
    queen_age_months: int = Field(default=0, ge=0)


class Hive(HiveCreate):
    hive_id: UUID = Field(default_factory=new_id)
    apiary_id: UUID
    created_at: datetime

    def context(self, location: Optional[str] = None) -> HiveContext:
        """Project this record onto the engine's read-only input."""
        return HiveContext(
            frame_count=self.frame_count,
            colony_age_months=self.colony_age_months,
            queen_age_months=self.queen_age_months,
            location=location,
            hive_type=self.hive_type,
        )


class InspectionRecord(BaseModel):
    """A recorded inspection plus the analysis fields written back onto it."""

    inspection_id: UUID = Field(default_factory=new_id)
    hive_id: UUID
    inspected_at: datetime
    snapshot: Snapshot

    auto_score: Optional[int] = Field(default=None, ge=0, le=100)
    overall_status: Optional[ColorCode] = None
    risk_level: Optional[RiskLevel] = None
    recommendations: list[str] = Field(default_factory=list)
    next_inspection_date: Optional[datetime] = None

    @property
    def analysed(self) -> bool:
        return self.auto_score is not None
