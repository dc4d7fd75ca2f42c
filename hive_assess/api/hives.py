"""REST endpoints for apiaries and hives.

Paths:
    POST   /api/apiaries
    GET    /api/apiaries
    POST   /api/apiaries/{apiary_id}/hives
    GET    /api/hives
    GET    /api/hives/{hive_id}
    DELETE /api/hives/{hive_id}
"""

from __future__ import annotations

from typing import Any, Optional
from uuid import UUID

from fastapi import APIRouter, HTTPException

from hive_assess.domain.records import Apiary, ApiaryCreate, Hive, HiveCreate
from hive_assess.foundation.clock import utc_now
from hive_assess.store.hive_store import HiveStore, RecordNotFoundError


def create_hives_router(store: HiveStore) -> APIRouter:
    """Factory that wires the apiary/hive endpoints to a concrete HiveStore."""

    router = APIRouter(prefix="/api", tags=["hives"])

    @router.post("/apiaries", status_code=201)
    async def create_apiary(body: ApiaryCreate) -> Apiary:
        return await store.create_apiary(body, utc_now())

    @router.get("/apiaries")
    async def list_apiaries() -> dict[str, Any]:
        apiaries = await store.list_apiaries()
        return {"apiaries": apiaries, "count": len(apiaries)}

    @router.post("/apiaries/{apiary_id}/hives", status_code=201)
    async def create_hive(apiary_id: UUID, body: HiveCreate) -> Hive:
        try:
            return await store.create_hive(apiary_id, body, utc_now())
        except RecordNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc

    @router.get("/hives")
    async def list_hives(apiary_id: Optional[UUID] = None) -> dict[str, Any]:
        hives = await store.list_hives(apiary_id)
        return {"hives": hives, "count": len(hives)}

    @router.get("/hives/{hive_id}")
    async def get_hive(hive_id: UUID) -> Hive:
        try:
            return await store.get_hive(hive_id)
        except RecordNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc

    @router.delete("/hives/{hive_id}", status_code=204)
    async def delete_hive(hive_id: UUID) -> None:
        try:
            await store.delete_hive(hive_id)
        except RecordNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc

    return router
