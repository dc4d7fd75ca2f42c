"""TrendAnalyzer: direction of change across a hive's composite-score history.

The series is the historical scores oldest-first with the current
snapshot's composite appended as the newest point.  It is split at
``n // 2``; a dimension is improving when the second-half mean beats
the first-half mean by more than its margin, declining when it trails
by more than the margin, otherwise stable.

Anomalies: a historical point with at least ``ANOMALY_MIN_WINDOW``
predecessors is anomalous when it lies outside the trailing
mean ± 2 × standard deviation of all points before it.
"""

from __future__ import annotations

import math

from hive_assess.core.score_calculator import ScoreCalculator
from hive_assess.domain.enums import TrendDirection
from hive_assess.domain.snapshot import HistoryPoint, Snapshot, chronological
from hive_assess.domain.trend import Anomaly, DimensionTrend, TrendAnalysis

HEALTH_MARGIN = 5.0
POPULATION_MARGIN = 8.0
PRODUCTIVITY_MARGIN = 10.0

ANOMALY_SIGMA = 2.0
ANOMALY_MIN_WINDOW = 3

NO_HISTORY_MESSAGE = "Not enough historical data to analyse trends"


def _mean(values: list[float]) -> float:
    return sum(values) / len(values)


def _pstdev(values: list[float]) -> float:
    mu = _mean(values)
    return math.sqrt(sum((v - mu) ** 2 for v in values) / len(values))


def classify(series: list[float], margin: float) -> DimensionTrend:
    """Compare the two halves of *series* (needs at least two points)."""
    split = len(series) // 2
    first = _mean(series[:split])
    second = _mean(series[split:])
    change = second - first

    if change > margin:
        direction = TrendDirection.IMPROVING
    elif change < -margin:
        direction = TrendDirection.DECLINING
    else:
        direction = TrendDirection.STABLE

    return DimensionTrend(
        direction=direction,
        change=round(change, 2),
        first_half_mean=round(first, 2),
        second_half_mean=round(second, 2),
        margin=margin,
    )


def detect_anomalies(history: list[HistoryPoint]) -> list[Anomaly]:
    """Flag historical points outside the trailing mean ± 2σ (oldest-first input)."""
    anomalies: list[Anomaly] = []
    scores = [float(p.composite_score) for p in history]

    for i in range(ANOMALY_MIN_WINDOW, len(history)):
        window = scores[:i]
        mu = _mean(window)
        sigma = _pstdev(window)
        deviation = scores[i] - mu
        if abs(deviation) > ANOMALY_SIGMA * sigma:
            anomalies.append(Anomaly(
                date=history[i].date,
                score=history[i].composite_score,
                expected_mean=round(mu, 2),
                standard_deviation=round(sigma, 2),
                deviation=round(deviation, 2),
            ))
    return anomalies


class TrendAnalyzer:
    """Stateless trend classifier."""

    def __init__(self, calculator: ScoreCalculator | None = None) -> None:
        self._calculator = calculator or ScoreCalculator()

    def analyze(self, snapshot: Snapshot, history: list[HistoryPoint]) -> TrendAnalysis:
        if not history:
            return TrendAnalysis(trend_available=False, message=NO_HISTORY_MESSAGE)

        ordered = chronological(history)
        series = [float(p.composite_score) for p in ordered]
        series.append(float(self._calculator.composite(snapshot)))

        health = classify(series, HEALTH_MARGIN)

        return TrendAnalysis(
            trend_available=True,
            data_points=len(series),
            health_trend=health,
            population_trend=classify(series, POPULATION_MARGIN),
            productivity_trend=classify(series, PRODUCTIVITY_MARGIN),
            overall_direction=health.direction,
            anomalies=detect_anomalies(ordered),
        )
