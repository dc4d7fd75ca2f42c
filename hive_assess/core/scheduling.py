"""SchedulingPolicy: when to look at the hive again.

Score band first, then a downward-only clamp by risk level.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from hive_assess.domain.enums import RiskLevel

BASE_INTERVAL_DAYS = 14

# (exclusive upper bound on composite score, interval in days)
SCORE_BANDS: tuple[tuple[int, int], ...] = (
    (50, 3),
    (70, 7),
    (85, 10),
)
TOP_BAND_DAYS = 21

RISK_CEILING_DAYS: dict[RiskLevel, int] = {
    RiskLevel.CRITICAL: 2,
    RiskLevel.HIGH: 5,
}


def inspection_interval_days(composite_score: int, risk_level: RiskLevel) -> int:
    interval = BASE_INTERVAL_DAYS
    for upper, days in SCORE_BANDS:
        if composite_score < upper:
            interval = days
            break
    else:
        interval = TOP_BAND_DAYS

    ceiling = RISK_CEILING_DAYS.get(risk_level)
    if ceiling is not None:
        interval = min(interval, ceiling)
    return interval


def next_inspection_date(now: datetime, composite_score: int, risk_level: RiskLevel) -> datetime:
    return now + timedelta(days=inspection_interval_days(composite_score, risk_level))
