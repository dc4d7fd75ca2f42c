"""Tests for the HiveStore repository."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from hive_assess.core.orchestrator import AnalysisOrchestrator
from hive_assess.domain.enums import ColorCode, RiskLevel
from hive_assess.domain.records import ApiaryCreate, HiveCreate
from hive_assess.store.hive_store import (
    ApiaryNotFoundError,
    HiveNotFoundError,
    HiveStore,
    InspectionNotFoundError,
    RecordNotFoundError,
)

_BASE = datetime(2026, 5, 1, 9, 0, 0, tzinfo=timezone.utc)

_fallback = AnalysisOrchestrator().fallback


@pytest.fixture
def store() -> HiveStore:
    return HiveStore()


async def _hive(store: HiveStore, **kw):
    apiary = await store.create_apiary(ApiaryCreate(name="North field", location="Valley"), _BASE)
    return await store.create_hive(apiary.apiary_id, HiveCreate(name="H1", **kw), _BASE)


class TestApiariesAndHives:
    @pytest.mark.asyncio
    async def test_create_and_list(self, store: HiveStore) -> None:
        hive = await _hive(store)
        assert [a.name for a in await store.list_apiaries()] == ["North field"]
        assert (await store.get_hive(hive.hive_id)).name == "H1"

    @pytest.mark.asyncio
    async def test_create_hive_in_unknown_apiary(self, store: HiveStore) -> None:
        with pytest.raises(ApiaryNotFoundError):
            await store.create_hive(uuid4(), HiveCreate(name="orphan"), _BASE)

    @pytest.mark.asyncio
    async def test_not_found_errors_share_a_base(self, store: HiveStore) -> None:
        with pytest.raises(RecordNotFoundError):
            await store.get_hive(uuid4())
        with pytest.raises(LookupError):
            await store.get_apiary(uuid4())
        with pytest.raises(InspectionNotFoundError):
            await store.get_inspection(uuid4())

    @pytest.mark.asyncio
    async def test_list_hives_filtered_by_apiary(self, store: HiveStore) -> None:
        first = await _hive(store)
        other = await store.create_apiary(ApiaryCreate(name="South"), _BASE)
        await store.create_hive(other.apiary_id, HiveCreate(name="S1"), _BASE)

        assert len(await store.list_hives()) == 2
        only = await store.list_hives(first.apiary_id)
        assert [h.hive_id for h in only] == [first.hive_id]

    @pytest.mark.asyncio
    async def test_hive_context_carries_apiary_location(self, store: HiveStore) -> None:
        hive = await _hive(store, frame_count=20, queen_age_months=14, hive_type="top_bar")
        context = await store.hive_context(hive.hive_id)
        assert context.frame_count == 20
        assert context.queen_age_months == 14
        assert context.hive_type == "top_bar"
        assert context.location == "Valley"

    @pytest.mark.asyncio
    async def test_delete_hive_removes_inspections(self, store: HiveStore, make_snapshot) -> None:
        hive = await _hive(store)
        record = await store.record_inspection(hive.hive_id, make_snapshot(), _BASE)
        await store.delete_hive(hive.hive_id)

        with pytest.raises(HiveNotFoundError):
            await store.get_hive(hive.hive_id)
        with pytest.raises(InspectionNotFoundError):
            await store.get_inspection(record.inspection_id)


class TestInspections:
    @pytest.mark.asyncio
    async def test_record_requires_hive(self, store: HiveStore, make_snapshot) -> None:
        with pytest.raises(HiveNotFoundError):
            await store.record_inspection(uuid4(), make_snapshot(), _BASE)

    @pytest.mark.asyncio
    async def test_list_newest_first_with_limit(self, store: HiveStore, make_snapshot) -> None:
        hive = await _hive(store)
        for day in range(3):
            await store.record_inspection(hive.hive_id, make_snapshot(), _BASE + timedelta(days=day))

        records = await store.list_inspections(hive.hive_id)
        assert [r.inspected_at.day for r in records] == [3, 2, 1]
        assert len(await store.list_inspections(hive.hive_id, limit=2)) == 2

    @pytest.mark.asyncio
    async def test_apply_analysis_persists_subset(self, store: HiveStore, make_snapshot) -> None:
        hive = await _hive(store)
        record = await store.record_inspection(hive.hive_id, make_snapshot(), _BASE)
        assert record.analysed is False

        updated = await store.apply_analysis(record.inspection_id, _fallback(_BASE, 80))
        assert updated.analysed is True
        assert updated.auto_score == 80
        assert updated.overall_status == ColorCode.YELLOW
        assert updated.risk_level == RiskLevel.MEDIUM
        assert len(updated.recommendations) == 1
        assert updated.next_inspection_date == _BASE + timedelta(days=14)

    @pytest.mark.asyncio
    async def test_history_only_analysed_newest_first(self, store: HiveStore, make_snapshot) -> None:
        hive = await _hive(store)
        for day, score in ((0, 60), (1, 70), (2, None), (3, 80)):
            record = await store.record_inspection(
                hive.hive_id, make_snapshot(notes=f"day {day}"), _BASE + timedelta(days=day),
            )
            if score is not None:
                await store.apply_analysis(record.inspection_id, _fallback(_BASE, score))

        history = await store.history(hive.hive_id)
        assert [p.composite_score for p in history] == [80, 70, 60]
        assert history[0].notes == "day 3"

        before = await store.history(hive.hive_id, before=_BASE + timedelta(days=3), limit=1)
        assert [p.composite_score for p in before] == [70]

    @pytest.mark.asyncio
    async def test_overdue_uses_latest_inspection(self, store: HiveStore, make_snapshot) -> None:
        hive = await _hive(store)
        record = await store.record_inspection(hive.hive_id, make_snapshot(), _BASE)
        await store.apply_analysis(record.inspection_id, _fallback(_BASE, 75))

        assert await store.overdue_inspections(_BASE + timedelta(days=13)) == []
        overdue = await store.overdue_inspections(_BASE + timedelta(days=15))
        assert [r.inspection_id for r in overdue] == [record.inspection_id]

        await store.record_inspection(hive.hive_id, make_snapshot(), _BASE + timedelta(days=15))
        assert await store.overdue_inspections(_BASE + timedelta(days=16)) == []
