"""Snapshot, HiveContext and HistoryPoint: the engine's input contract.

A Snapshot is one inspection's structured observation of a hive.  It is
validated at the boundary and immutable afterwards; the engine reads it
and never re-checks enum domains.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from hive_assess.domain.enums import (
    BroodPattern,
    FoodStores,
    PopulationStrength,
    QueenLaying,
    QueenPresence,
)
from hive_assess.foundation.clock import ensure_aware

# Keys of the five quick-inspection questions, in scoring order.
REQUIRED_FIELDS: tuple[str, ...] = (
    "queen_present",
    "queen_laying",
    "brood_pattern",
    "population_strength",
    "food_stores",
)

DETAIL_BLOCKS: tuple[str, ...] = (
    "queen_details",
    "brood_details",
    "population_details",
    "food_details",
)


def _clean_labels(labels: list[str]) -> list[str]:
    """Strip, drop blanks and de-duplicate while keeping first-seen order."""
    seen: dict[str, None] = {}
    for label in labels:
        text = label.strip()
        if text:
            seen.setdefault(text, None)
    return list(seen)


class Snapshot(BaseModel):
    """A single inspection observation.

    The five quick-inspection fields are optional: ``None`` means the
    beekeeper did not answer, which lowers confidence but never fails
    the analysis.
    """

    queen_present: Optional[QueenPresence] = None
    queen_laying: Optional[QueenLaying] = None
    brood_pattern: Optional[BroodPattern] = None
    population_strength: Optional[PopulationStrength] = None
    food_stores: Optional[FoodStores] = None

    diseases_found: list[str] = Field(default_factory=list, max_length=50)
    pests_found: list[str] = Field(default_factory=list, max_length=50)

    queen_details: dict[str, Any] = Field(default_factory=dict)
    brood_details: dict[str, Any] = Field(default_factory=dict)
    population_details: dict[str, Any] = Field(default_factory=dict)
    food_details: dict[str, Any] = Field(default_factory=dict)

    weather: Optional[dict[str, Any]] = None
    notes: Optional[str] = Field(default=None, max_length=5000)

    model_config = {"frozen": True}

    @field_validator("diseases_found", "pests_found")
    @classmethod
    def labels_must_be_clean(cls, v: list[str]) -> list[str]:
        return _clean_labels(v)

    @property
    def health_issue_count(self) -> int:
        return len(self.diseases_found) + len(self.pests_found)

    @property
    def has_health_issues(self) -> bool:
        return bool(self.diseases_found or self.pests_found)


class HiveContext(BaseModel):
    """Static facts about the hive the snapshot was taken from."""

    frame_count: int = Field(default=10, ge=0, le=100)
    colony_age_months: int = Field(default=0, ge=0)
    queen_age_months: int = Field(default=0, ge=0)
    location: Optional[str] = None
    hive_type: str = Field(default="langstroth", min_length=1, max_length=64)

    model_config = {"frozen": True}


class HistoryPoint(BaseModel):
    """One prior inspection's composite score."""

    date: datetime
    composite_score: int = Field(..., ge=0, le=100)
    notes: Optional[str] = None

    model_config = {"frozen": True}

    @field_validator("date")
    @classmethod
    def date_must_be_aware(cls, v: datetime) -> datetime:
        return ensure_aware(v)


def chronological(history: list[HistoryPoint]) -> list[HistoryPoint]:
    """Return history oldest-first regardless of the caller's ordering."""
    return sorted(history, key=lambda point: point.date)
