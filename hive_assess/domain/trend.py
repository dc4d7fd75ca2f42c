"""Trend models: direction of change across historical snapshots."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from hive_assess.domain.enums import TrendDirection


class DimensionTrend(BaseModel):
    direction: TrendDirection
    change: float = Field(..., description="Second-half mean minus first-half mean")
    first_half_mean: float
    second_half_mean: float
    margin: float = Field(..., gt=0.0, description="Points of change needed to leave 'stable'")

    model_config = {"frozen": True}


class Anomaly(BaseModel):
    date: datetime
    score: int
    expected_mean: float
    standard_deviation: float
    deviation: float

    model_config = {"frozen": True}


class TrendAnalysis(BaseModel):
    """Trend summary.  When ``trend_available`` is False only ``message`` is set."""

    trend_available: bool
    message: Optional[str] = None
    data_points: int = 0
    health_trend: Optional[DimensionTrend] = None
    population_trend: Optional[DimensionTrend] = None
    productivity_trend: Optional[DimensionTrend] = None
    overall_direction: Optional[TrendDirection] = None
    anomalies: list[Anomaly] = Field(default_factory=list)

    model_config = {"frozen": True}
