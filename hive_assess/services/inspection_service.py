"""Inspection workflow: record, analyse, persist, dispatch.

This is the boundary where data access happens before the engine runs:
context and history are read from the store, the engine analyses the
snapshot synchronously, and the persisted subset is written back.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional
from uuid import UUID

from hive_assess.core.orchestrator import AnalysisOrchestrator
from hive_assess.domain.analysis import AnalysisResult
from hive_assess.domain.records import InspectionRecord
from hive_assess.domain.snapshot import Snapshot
from hive_assess.services.alert_dispatcher import AlertDispatcher
from hive_assess.store.hive_store import HiveStore

logger = logging.getLogger(__name__)


class InspectionService:
    """Coordinates one inspection from submission to stored result.

    Args:
        store: Hive repository.
        orchestrator: Assessment engine entry point.
        dispatcher: Optional alert broadcaster; None disables dispatch.
        history_limit: How many prior inspections the engine sees.
    """

    def __init__(
        self,
        store: HiveStore,
        orchestrator: AnalysisOrchestrator,
        dispatcher: Optional[AlertDispatcher] = None,
        history_limit: int = 10,
    ) -> None:
        self._store = store
        self._orchestrator = orchestrator
        self._dispatcher = dispatcher
        self._history_limit = history_limit

    async def record_and_analyze(
        self,
        hive_id: UUID,
        snapshot: Snapshot,
        now: datetime,
    ) -> tuple[InspectionRecord, AnalysisResult]:
        """Raises HiveNotFoundError for an unknown hive; otherwise always completes."""
        context = await self._store.hive_context(hive_id)
        history = await self._store.history(hive_id, before=now, limit=self._history_limit)
        last_score = history[0].composite_score if history else None

        record = await self._store.record_inspection(hive_id, snapshot, now)
        result = self._orchestrator.analyze(
            snapshot, context, history, now, last_known_score=last_score,
        )
        record = await self._store.apply_analysis(record.inspection_id, result)

        if result.is_fallback:
            logger.warning("Inspection %s stored with fallback analysis", record.inspection_id)

        if self._dispatcher is not None:
            await self._dispatcher.dispatch(hive_id, record.inspection_id, result.alerts)

        return record, result
