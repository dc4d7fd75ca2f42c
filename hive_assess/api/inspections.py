"""REST endpoints for recording and listing inspections.

Paths:
    POST /api/hives/{hive_id}/inspections   record + analyse one snapshot
    GET  /api/hives/{hive_id}/inspections   newest first
    GET  /api/inspections/overdue           hives past their next check-in
"""

from __future__ import annotations

import logging
from typing import Any, Optional
from uuid import UUID

from fastapi import APIRouter, HTTPException

from hive_assess.domain.snapshot import Snapshot
from hive_assess.foundation.clock import utc_now
from hive_assess.services.inspection_service import InspectionService
from hive_assess.store.hive_store import HiveStore, RecordNotFoundError

logger = logging.getLogger(__name__)


def create_inspections_router(store: HiveStore, service: InspectionService) -> APIRouter:
    """Factory that wires the inspection endpoints to store + workflow."""

    router = APIRouter(prefix="/api", tags=["inspections"])

    @router.post("/hives/{hive_id}/inspections", status_code=201)
    async def record_inspection(hive_id: UUID, snapshot: Snapshot) -> dict[str, Any]:
        try:
            record, result = await service.record_and_analyze(hive_id, snapshot, utc_now())
        except RecordNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc

        logger.info(
            "Inspection %s analysed: score=%s risk=%s fallback=%s",
            record.inspection_id, record.auto_score,
            result.risk_analysis.overall_risk_level.value, result.is_fallback,
        )
        return {
            "inspection": record.model_dump(mode="json"),
            "analysis": result.model_dump(mode="json"),
        }

    @router.get("/hives/{hive_id}/inspections")
    async def list_inspections(hive_id: UUID, limit: Optional[int] = None) -> dict[str, Any]:
        try:
            records = await store.list_inspections(hive_id, limit)
        except RecordNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        return {
            "inspections": [rec.model_dump(mode="json") for rec in records],
            "count": len(records),
        }

    @router.get("/inspections/overdue")
    async def overdue_inspections() -> dict[str, Any]:
        records = await store.overdue_inspections(utc_now())
        return {
            "inspections": [rec.model_dump(mode="json") for rec in records],
            "count": len(records),
        }

    return router
