"""AnalysisResult: the aggregate returned by the assessment orchestrator.

It exists only for the duration of one analysis call; the caller decides
what, if anything, to persist (see HiveStore.apply_analysis).
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from hive_assess.domain.enums import Season
from hive_assess.domain.forecast import Predictions
from hive_assess.domain.recommendation import Alert, Recommendation
from hive_assess.domain.risk import RiskAnalysis
from hive_assess.domain.scoring import ScoreAnalysis
from hive_assess.domain.trend import TrendAnalysis


class ConfidenceMetrics(BaseModel):
    overall_confidence: int = Field(..., ge=0, le=100)
    data_completeness: int = Field(..., ge=0, le=100)
    prediction_reliability: int = Field(..., ge=0, le=100)

    model_config = {"frozen": True}


class SeasonalExpectations(BaseModel):
    population: str
    brood: str
    food_consumption: str
    activity: str

    model_config = {"frozen": True}


class SeasonalContext(BaseModel):
    season: Season
    month: int = Field(..., ge=1, le=12)
    expectations: SeasonalExpectations
    optimal_activities: list[str] = Field(default_factory=list)

    model_config = {"frozen": True}


class AnalysisResult(BaseModel):
    """Composite of every engine output for one snapshot.

    ``predictions`` and ``seasonal_context`` are None only when
    ``is_fallback`` is True.
    """

    score_analysis: ScoreAnalysis
    risk_analysis: RiskAnalysis
    trend_analysis: TrendAnalysis
    predictions: Optional[Predictions] = None
    recommendations: list[Recommendation] = Field(default_factory=list)
    alerts: list[Alert] = Field(default_factory=list)
    seasonal_context: Optional[SeasonalContext] = None
    next_inspection_date: datetime
    confidence_metrics: ConfidenceMetrics
    is_fallback: bool = False

    model_config = {"frozen": True}
