"""AnalysisOrchestrator: composes the engine into one AnalysisResult.

The orchestrator compiles the LangGraph pipeline once and invokes it per
analysis.  It is the only place engine failures are caught: any
exception raised inside the pipeline is logged and converted into a
conservative fallback result.  ``analyze`` itself never raises.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Optional

from hive_assess.core.confidence import FALLBACK_METRICS
from hive_assess.core.score_calculator import PERFORMANCE_BY_GRADE, grade_for
from hive_assess.core.trend_analyzer import NO_HISTORY_MESSAGE
from hive_assess.domain.analysis import AnalysisResult
from hive_assess.domain.enums import ColorCode, Priority, RiskLevel
from hive_assess.domain.recommendation import Recommendation
from hive_assess.domain.risk import RiskAnalysis
from hive_assess.domain.scoring import ScoreAnalysis
from hive_assess.domain.snapshot import HistoryPoint, HiveContext, Snapshot
from hive_assess.domain.trend import TrendAnalysis
from hive_assess.graph.builder import build_assessment_graph
from hive_assess.graph.runner import run_assessment

logger = logging.getLogger(__name__)

DEFAULT_FALLBACK_SCORE = 70
DEFAULT_FALLBACK_INTERVAL_DAYS = 14
FALLBACK_ACTION = "Re-check this inspection manually: automatic analysis was unavailable"


class AnalysisOrchestrator:
    """Runs the assessment pipeline and guarantees a result."""

    def __init__(
        self,
        fallback_score: int = DEFAULT_FALLBACK_SCORE,
        fallback_interval_days: int = DEFAULT_FALLBACK_INTERVAL_DAYS,
    ) -> None:
        self._graph = build_assessment_graph()
        self._fallback_score = fallback_score
        self._fallback_interval = timedelta(days=fallback_interval_days)

    def analyze(
        self,
        snapshot: Snapshot,
        context: HiveContext,
        history: list[HistoryPoint],
        now: datetime,
        last_known_score: Optional[int] = None,
    ) -> AnalysisResult:
        try:
            state = run_assessment(self._graph, snapshot, context, history, now)
            return AnalysisResult(
                score_analysis=state["score_analysis"],
                risk_analysis=state["risk_analysis"],
                trend_analysis=state["trend_analysis"],
                predictions=state["predictions"],
                recommendations=state["recommendations"],
                alerts=state["alerts"],
                seasonal_context=state["seasonal_context"],
                next_inspection_date=state["next_inspection_date"],
                confidence_metrics=state["confidence_metrics"],
            )
        except Exception:
            logger.exception("Hive analysis failed; returning fallback analysis")
            return self.fallback(now, last_known_score)

    def fallback(self, now: datetime, last_known_score: Optional[int] = None) -> AnalysisResult:
        """Conservative result used when the pipeline cannot complete."""
        score = last_known_score if last_known_score is not None else self._fallback_score
        grade = grade_for(score)
        return AnalysisResult(
            score_analysis=ScoreAnalysis(
                composite_score=score,
                weighted_score=score,
                grade=grade,
                performance_level=PERFORMANCE_BY_GRADE[grade],
                color_code=ColorCode.YELLOW,
                confidence_level=50,
            ),
            risk_analysis=RiskAnalysis(overall_risk_level=RiskLevel.MEDIUM, risk_score=0),
            trend_analysis=TrendAnalysis(trend_available=False, message=NO_HISTORY_MESSAGE),
            recommendations=[
                Recommendation(type="general", priority=Priority.MEDIUM, action=FALLBACK_ACTION),
            ],
            next_inspection_date=now + self._fallback_interval,
            confidence_metrics=FALLBACK_METRICS,
            is_fallback=True,
        )
