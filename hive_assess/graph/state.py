"""AssessmentState: the sole state object that LangGraph nodes read and write.

Every node receives the full state and returns a partial update.  No node
reads anything outside this state (no store, no clock, no I/O).
"""

from __future__ import annotations

from datetime import datetime
from typing import TypedDict

from hive_assess.domain.analysis import ConfidenceMetrics, SeasonalContext
from hive_assess.domain.forecast import Predictions
from hive_assess.domain.recommendation import Alert, Recommendation
from hive_assess.domain.risk import RiskAnalysis
from hive_assess.domain.scoring import ScoreAnalysis
from hive_assess.domain.snapshot import HistoryPoint, HiveContext, Snapshot
from hive_assess.domain.trend import TrendAnalysis


class AssessmentState(TypedDict, total=False):
    """LangGraph state for one hive assessment.

    Inputs (seeded by the runner):
        snapshot: The validated inspection observation.
        context: Static hive facts.
        history: Prior composite scores, any order.
        now: The injected analysis time.

    Outputs (one per pipeline stage):
        score_analysis, risk_analysis, trend_analysis, predictions,
        recommendations, alerts, seasonal_context, next_inspection_date,
        confidence_metrics.
    """

    snapshot: Snapshot
    context: HiveContext
    history: list[HistoryPoint]
    now: datetime

    score_analysis: ScoreAnalysis
    risk_analysis: RiskAnalysis
    trend_analysis: TrendAnalysis
    predictions: Predictions
    recommendations: list[Recommendation]
    alerts: list[Alert]
    seasonal_context: SeasonalContext
    next_inspection_date: datetime
    confidence_metrics: ConfidenceMetrics
