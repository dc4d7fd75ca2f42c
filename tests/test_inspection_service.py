"""Tests for the inspection workflow and alert dispatch."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import uuid4

import pytest

from hive_assess.api.dependencies import alert_dispatcher
from hive_assess.api.ws_alerts import stream_alerts
from hive_assess.core.orchestrator import AnalysisOrchestrator
from hive_assess.domain.enums import RiskLevel
from hive_assess.domain.records import ApiaryCreate, HiveCreate
from hive_assess.domain.recommendation import Alert
from hive_assess.services.alert_dispatcher import AlertDispatcher
from hive_assess.services.inspection_service import InspectionService
from hive_assess.store.hive_store import HiveNotFoundError, HiveStore

_BASE = datetime(2026, 7, 1, 9, 0, 0, tzinfo=timezone.utc)


class FakeSocket:
    """Stands in for a Starlette WebSocket."""

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.accepted = False
        self.sent: list[dict[str, Any]] = []

    async def accept(self) -> None:
        self.accepted = True

    async def send_json(self, data: dict[str, Any]) -> None:
        if self.fail:
            raise RuntimeError("connection reset")
        self.sent.append(data)

    async def receive_text(self) -> str:
        raise RuntimeError("connection reset")


def _alert(action_required: bool = True) -> Alert:
    return Alert(
        level=RiskLevel.CRITICAL,
        type="queen_loss",
        title="Queen lost",
        message="no queen",
        action_required=action_required,
        timeline="within 24 hours",
    )


@pytest.fixture(scope="module")
def orchestrator() -> AnalysisOrchestrator:
    return AnalysisOrchestrator()


@pytest.fixture
def store() -> HiveStore:
    return HiveStore()


async def _hive_id(store: HiveStore):
    apiary = await store.create_apiary(ApiaryCreate(name="Home"), _BASE)
    hive = await store.create_hive(apiary.apiary_id, HiveCreate(name="H1"), _BASE)
    return hive.hive_id


class TestAlertDispatcher:
    @pytest.mark.asyncio
    async def test_only_action_required_alerts_are_sent(self) -> None:
        dispatcher = AlertDispatcher()
        ws = FakeSocket()
        await dispatcher.connect(ws)

        hive_id, inspection_id = uuid4(), uuid4()
        sent = await dispatcher.dispatch(hive_id, inspection_id, [_alert(), _alert(False)])

        assert ws.accepted is True
        assert sent == 1
        assert ws.sent[0]["hive_id"] == str(hive_id)
        assert ws.sent[0]["inspection_id"] == str(inspection_id)
        assert [a["type"] for a in ws.sent[0]["alerts"]] == ["queen_loss"]
        assert ws.sent[0]["alerts"][0]["level"] == "critical"

    @pytest.mark.asyncio
    async def test_nothing_to_send(self) -> None:
        dispatcher = AlertDispatcher()
        ws = FakeSocket()
        await dispatcher.connect(ws)
        assert await dispatcher.dispatch(uuid4(), uuid4(), [_alert(False)]) == 0
        assert ws.sent == []

    @pytest.mark.asyncio
    async def test_failing_client_is_dropped(self) -> None:
        dispatcher = AlertDispatcher()
        good, bad = FakeSocket(), FakeSocket(fail=True)
        await dispatcher.connect(bad)
        await dispatcher.connect(good)

        await dispatcher.dispatch(uuid4(), uuid4(), [_alert()])

        assert dispatcher.active_count == 1
        assert len(good.sent) == 1

    @pytest.mark.asyncio
    async def test_stream_releases_client_on_receive_error(self) -> None:
        ws = FakeSocket()
        before = alert_dispatcher.active_count

        with pytest.raises(RuntimeError):
            await stream_alerts(ws)

        assert ws.accepted is True
        assert alert_dispatcher.active_count == before


class TestInspectionService:
    @pytest.mark.asyncio
    async def test_record_and_analyze(self, store, orchestrator, make_snapshot) -> None:
        dispatcher = AlertDispatcher()
        ws = FakeSocket()
        await dispatcher.connect(ws)
        service = InspectionService(store, orchestrator, dispatcher)
        hive_id = await _hive_id(store)

        record, result = await service.record_and_analyze(
            hive_id, make_snapshot(queen_present="no"), _BASE,
        )

        assert record.auto_score == result.score_analysis.weighted_score == 59
        assert record.risk_level == RiskLevel.CRITICAL
        assert record.next_inspection_date == _BASE + timedelta(days=2)
        assert record.recommendations[0] == "Introduce a new queen immediately"
        assert len(ws.sent) == 1
        assert ws.sent[0]["inspection_id"] == str(record.inspection_id)

    @pytest.mark.asyncio
    async def test_second_inspection_sees_history(self, store, orchestrator, make_snapshot) -> None:
        service = InspectionService(store, orchestrator)
        hive_id = await _hive_id(store)

        await service.record_and_analyze(hive_id, make_snapshot(), _BASE)
        _, result = await service.record_and_analyze(
            hive_id, make_snapshot(), _BASE + timedelta(days=10),
        )

        assert result.trend_analysis.trend_available is True
        assert result.trend_analysis.data_points == 2
        assert result.confidence_metrics.prediction_reliability == 60

    @pytest.mark.asyncio
    async def test_history_limit(self, store, orchestrator, make_snapshot) -> None:
        service = InspectionService(store, orchestrator, history_limit=1)
        hive_id = await _hive_id(store)
        for day in range(3):
            _, result = await service.record_and_analyze(
                hive_id, make_snapshot(), _BASE + timedelta(days=day),
            )
        assert result.trend_analysis.data_points == 2

    @pytest.mark.asyncio
    async def test_unknown_hive(self, store, orchestrator, make_snapshot) -> None:
        service = InspectionService(store, orchestrator)
        with pytest.raises(HiveNotFoundError):
            await service.record_and_analyze(uuid4(), make_snapshot(), _BASE)
