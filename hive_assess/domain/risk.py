"""Risk models: typed, leveled, timed hazards with mitigations."""

from __future__ import annotations

from pydantic import BaseModel, Field

from hive_assess.domain.enums import RiskLevel, Timeframe


class Risk(BaseModel):
    """A single hazard identified for the hive.  Created fresh per analysis."""

    type: str = Field(..., min_length=3, max_length=64)
    level: RiskLevel
    probability: int = Field(..., ge=0, le=100)
    impact: str
    description: str
    timeframe: Timeframe
    mitigation: list[str] = Field(default_factory=list)
    seasonal: bool = False

    model_config = {"frozen": True}


class MonitoringTask(BaseModel):
    risk_type: str
    task: str
    frequency: str
    duration: str

    model_config = {"frozen": True}


RiskMatrix = dict[RiskLevel, dict[Timeframe, list[Risk]]]


def empty_risk_matrix() -> RiskMatrix:
    """All sixteen level × timeframe buckets, empty, highest level first."""
    levels = sorted(RiskLevel, key=lambda level: level.rank, reverse=True)
    return {level: {tf: [] for tf in Timeframe} for level in levels}


class RiskAnalysis(BaseModel):
    overall_risk_level: RiskLevel
    risk_score: int = Field(..., ge=0)
    identified_risks: list[Risk] = Field(default_factory=list)
    risk_matrix: RiskMatrix = Field(default_factory=empty_risk_matrix)
    monitoring_schedule: list[MonitoringTask] = Field(default_factory=list)

    model_config = {"frozen": True}
