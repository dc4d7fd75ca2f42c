"""REST endpoint for stateless analysis.

Path: POST /api/analyze

Runs the assessment engine on a caller-supplied snapshot, hive context
and history without touching the store.  ``now`` defaults to the
current UTC time; pass it explicitly for reproducible results.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field

from hive_assess.core.orchestrator import AnalysisOrchestrator
from hive_assess.domain.snapshot import HistoryPoint, HiveContext, Snapshot
from hive_assess.foundation.clock import ensure_aware, utc_now


class AnalyzeRequest(BaseModel):
    snapshot: Snapshot
    context: HiveContext = Field(default_factory=HiveContext)
    history: list[HistoryPoint] = Field(default_factory=list, max_length=500)
    now: Optional[datetime] = None


def create_analyze_router(orchestrator: AnalysisOrchestrator) -> APIRouter:
    """Factory that wires the analyze endpoint to an orchestrator."""

    router = APIRouter(prefix="/api", tags=["analysis"])

    @router.post("/analyze")
    async def analyze(body: AnalyzeRequest) -> dict[str, Any]:
        now = ensure_aware(body.now) if body.now is not None else utc_now()
        result = orchestrator.analyze(body.snapshot, body.context, body.history, now)
        return result.model_dump(mode="json")

    return router
