"""Tests for the next-inspection scheduling policy."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from hive_assess.core.scheduling import inspection_interval_days, next_inspection_date
from hive_assess.domain.enums import RiskLevel

_T = datetime(2026, 7, 15, 9, 0, tzinfo=timezone.utc)


class TestScheduling:
    def test_top_band_low_risk(self) -> None:
        assert next_inspection_date(_T, 95, RiskLevel.LOW) == _T + timedelta(days=21)

    def test_critical_clamp_wins(self) -> None:
        assert next_inspection_date(_T, 40, RiskLevel.CRITICAL) == _T + timedelta(days=2)

    @pytest.mark.parametrize(
        ("score", "days"),
        [(0, 3), (49, 3), (50, 7), (69, 7), (70, 10), (84, 10), (85, 21), (100, 21)],
    )
    def test_score_bands(self, score: int, days: int) -> None:
        assert inspection_interval_days(score, RiskLevel.LOW) == days
        assert inspection_interval_days(score, RiskLevel.MEDIUM) == days

    @pytest.mark.parametrize(
        ("score", "risk", "days"),
        [
            (100, RiskLevel.HIGH, 5),
            (60, RiskLevel.HIGH, 5),
            (45, RiskLevel.HIGH, 3),
            (100, RiskLevel.CRITICAL, 2),
        ],
    )
    def test_risk_only_shortens(self, score: int, risk: RiskLevel, days: int) -> None:
        assert inspection_interval_days(score, risk) == days
