"""Shared fixtures for the hive-assess test suite."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable

import pytest

from hive_assess.domain.snapshot import HistoryPoint, HiveContext, Snapshot

SUMMER = datetime(2026, 7, 15, 9, 0, 0, tzinfo=timezone.utc)

# Composite 84: every answer present, nothing that triggers a rule.
_TYPICAL: dict[str, Any] = {
    "queen_present": "yes",
    "queen_laying": "yes",
    "brood_pattern": "good",
    "population_strength": "moderate",
    "food_stores": "adequate",
    "diseases_found": [],
    "pests_found": [],
}

# Composite 100.
_PERFECT: dict[str, Any] = {
    "queen_present": "yes",
    "queen_laying": "yes",
    "brood_pattern": "excellent",
    "population_strength": "very_strong",
    "food_stores": "abundant",
    "diseases_found": [],
    "pests_found": [],
}


@pytest.fixture
def now() -> datetime:
    return SUMMER


@pytest.fixture
def make_snapshot() -> Callable[..., Snapshot]:
    """Typical healthy snapshot with keyword overrides."""

    def _make(**overrides: Any) -> Snapshot:
        return Snapshot.model_validate({**_TYPICAL, **overrides})

    return _make


@pytest.fixture
def perfect_snapshot() -> Snapshot:
    return Snapshot.model_validate(_PERFECT)


@pytest.fixture
def context() -> HiveContext:
    return HiveContext()


@pytest.fixture
def make_history() -> Callable[..., list[HistoryPoint]]:
    """History points one week apart, oldest first, ending before SUMMER."""

    def _make(*scores: int, notes: str | None = None) -> list[HistoryPoint]:
        return [
            HistoryPoint(
                date=datetime(2026, 5, 1 + 7 * i, tzinfo=timezone.utc),
                composite_score=score,
                notes=notes,
            )
            for i, score in enumerate(scores)
        ]

    return _make
