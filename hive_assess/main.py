"""hive-assess: hive records, inspection analysis and alert streaming.

This is the application entry point.  It wires the HiveStore,
AnalysisOrchestrator, InspectionService, AlertDispatcher and the REST and
WebSocket routers together.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI

from hive_assess.api.analyze import create_analyze_router
from hive_assess.api.dependencies import alert_dispatcher
from hive_assess.api.hives import create_hives_router
from hive_assess.api.inspections import create_inspections_router
from hive_assess.api.ws_alerts import router as ws_alerts_router
from hive_assess.config import settings
from hive_assess.core.orchestrator import AnalysisOrchestrator
from hive_assess.services.inspection_service import InspectionService
from hive_assess.store.hive_store import HiveStore

# ── Logging ──────────────────────────────────────────────────────────────────

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)

# ── Assessment Engine ────────────────────────────────────────────────────────

orchestrator = AnalysisOrchestrator(
    fallback_score=settings.fallback_score,
    fallback_interval_days=settings.default_inspection_interval_days,
)

# ── State ────────────────────────────────────────────────────────────────────

store = HiveStore()

inspection_service = InspectionService(
    store,
    orchestrator,
    dispatcher=alert_dispatcher if settings.dispatch_alerts else None,
    history_limit=settings.history_limit,
)

# ── App ──────────────────────────────────────────────────────────────────────

app = FastAPI(
    title=settings.app_name,
    description="Hive records, inspection analysis and alert streaming",
    version="0.1.0",
    debug=settings.debug,
)

# ── Routes ───────────────────────────────────────────────────────────────────

app.include_router(create_hives_router(store))
app.include_router(create_inspections_router(store, inspection_service))
app.include_router(create_analyze_router(orchestrator))
app.include_router(ws_alerts_router)


# ── Health ───────────────────────────────────────────────────────────────────

@app.get("/health")
async def health() -> dict:
    apiaries = await store.list_apiaries()
    hives = await store.list_hives()
    return {
        "status": "ok",
        "apiaries": len(apiaries),
        "hives": len(hives),
        "alert_clients": alert_dispatcher.active_count,
        "alert_dispatch": settings.dispatch_alerts,
    }
