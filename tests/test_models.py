"""Tests for the domain models and enumerations."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from hive_assess.domain.enums import FoodStores, Priority, RiskLevel, Season
from hive_assess.domain.records import Hive
from hive_assess.domain.snapshot import HistoryPoint, HiveContext, Snapshot, chronological


def test_snapshot_validates_enums() -> None:
    snap = Snapshot(food_stores="low")
    assert snap.food_stores == FoodStores.LOW
    assert snap.queen_present is None


def test_snapshot_rejects_out_of_domain_value() -> None:
    with pytest.raises(ValidationError):
        Snapshot(brood_pattern="spotty")


def test_snapshot_is_immutable() -> None:
    snap = Snapshot()
    with pytest.raises(ValidationError):
        snap.food_stores = FoodStores.NONE


def test_labels_are_stripped_and_deduplicated() -> None:
    snap = Snapshot(diseases_found=[" nosema", "nosema ", "", "chalkbrood"], pests_found=["varroa", "varroa"])
    assert snap.diseases_found == ["nosema", "chalkbrood"]
    assert snap.pests_found == ["varroa"]
    assert snap.health_issue_count == 3
    assert snap.has_health_issues is True


def test_hive_context_defaults() -> None:
    context = HiveContext()
    assert context.frame_count == 10
    assert context.queen_age_months == 0
    assert context.hive_type == "langstroth"


def test_history_point_bounds_and_timezone() -> None:
    point = HistoryPoint(date=datetime(2026, 3, 1, 12, 0), composite_score=55)
    assert point.date.tzinfo == timezone.utc
    with pytest.raises(ValidationError):
        HistoryPoint(date=datetime(2026, 3, 1, tzinfo=timezone.utc), composite_score=101)


def test_chronological_sorts_oldest_first() -> None:
    late = HistoryPoint(date=datetime(2026, 5, 1, tzinfo=timezone.utc), composite_score=80)
    early = HistoryPoint(date=datetime(2026, 4, 1, tzinfo=timezone.utc), composite_score=60)
    assert chronological([late, early]) == [early, late]


def test_hive_projects_to_context() -> None:
    hive = Hive(
        name="H7",
        apiary_id="9c0f8a52-5d3e-4b53-9a8f-0c4a1f3a2b11",
        created_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
        frame_count=20,
        hive_type="warre",
    )
    context = hive.context(location="Ridge")
    assert (context.frame_count, context.hive_type, context.location) == (20, "warre", "Ridge")


def test_risk_level_order() -> None:
    assert RiskLevel.highest(RiskLevel.MEDIUM, RiskLevel.CRITICAL, RiskLevel.LOW) == RiskLevel.CRITICAL
    assert RiskLevel.highest(RiskLevel.LOW) == RiskLevel.LOW
    assert RiskLevel.HIGH.rank > RiskLevel.MEDIUM.rank
    assert Priority.CRITICAL.rank > Priority.LOW.rank


@pytest.mark.parametrize(
    ("month", "season"),
    [(1, Season.WINTER), (3, Season.SPRING), (5, Season.SPRING), (6, Season.SUMMER),
     (8, Season.SUMMER), (9, Season.AUTUMN), (11, Season.AUTUMN), (12, Season.WINTER)],
)
def test_season_for_month(month: int, season: Season) -> None:
    assert Season.for_month(month) == season
