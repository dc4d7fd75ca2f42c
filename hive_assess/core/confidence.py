"""Confidence metrics attached to every analysis result."""

from __future__ import annotations

from hive_assess.domain.analysis import ConfidenceMetrics
from hive_assess.domain.scoring import ScoreAnalysis
from hive_assess.domain.snapshot import DETAIL_BLOCKS, REQUIRED_FIELDS, Snapshot
from hive_assess.domain.trend import TrendAnalysis

# Dimensions whose strength lends the analysis extra confidence.
CONFIDENCE_DIMENSIONS: tuple[str, ...] = (
    "queen_assessment",
    "brood_assessment",
    "population_assessment",
)

FALLBACK_METRICS = ConfidenceMetrics(
    overall_confidence=50,
    data_completeness=60,
    prediction_reliability=40,
)


def overall_confidence(scores: ScoreAnalysis, trend: TrendAnalysis) -> int:
    confidence = 70
    for name in CONFIDENCE_DIMENSIONS:
        if scores.score_breakdown[name].percentage > 80:
            confidence += 5
    if trend.trend_available:
        confidence += 10
    return min(100, confidence)


def data_completeness(snapshot: Snapshot) -> int:
    required = sum(1 for name in REQUIRED_FIELDS if getattr(snapshot, name) is not None)
    details = sum(1 for name in DETAIL_BLOCKS if getattr(snapshot, name))
    return round(required / len(REQUIRED_FIELDS) * 70 + details / len(DETAIL_BLOCKS) * 30)


def prediction_reliability(history_points: int) -> int:
    if history_points == 0:
        return 40
    if history_points < 3:
        return 60
    if history_points < 5:
        return 75
    return 90


def confidence_metrics(
    snapshot: Snapshot,
    scores: ScoreAnalysis,
    trend: TrendAnalysis,
    history_points: int,
) -> ConfidenceMetrics:
    return ConfidenceMetrics(
        overall_confidence=overall_confidence(scores, trend),
        data_completeness=data_completeness(snapshot),
        prediction_reliability=prediction_reliability(history_points),
    )
