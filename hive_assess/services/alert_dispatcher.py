"""Pushes actionable hive alerts to connected WebSocket clients."""

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from fastapi import WebSocket

from hive_assess.domain.recommendation import Alert

logger = logging.getLogger(__name__)


class AlertDispatcher:
    """Tracks alert subscribers and broadcasts alerts that need action.

    A client that fails to receive a message is dropped; a failed send
    never propagates to the caller.
    """

    def __init__(self) -> None:
        self._connections: list[WebSocket] = []

    async def connect(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self._connections.append(websocket)

    def disconnect(self, websocket: WebSocket) -> None:
        if websocket in self._connections:
            self._connections.remove(websocket)

    @property
    def active_count(self) -> int:
        return len(self._connections)

    async def dispatch(self, hive_id: UUID, inspection_id: UUID, alerts: list[Alert]) -> int:
        """Broadcast the action-required alerts; return how many were sent."""
        actionable = [alert for alert in alerts if alert.action_required]
        if not actionable:
            return 0

        payload: dict[str, Any] = {
            "hive_id": str(hive_id),
            "inspection_id": str(inspection_id),
            "alerts": [alert.model_dump(mode="json") for alert in actionable],
        }
        await self.broadcast_json(payload)
        logger.info(
            "Dispatched %d alert(s) for hive %s to %d client(s)",
            len(actionable), hive_id, self.active_count,
        )
        return len(actionable)

    async def broadcast_json(self, data: dict[str, Any]) -> None:
        """Send a JSON payload to every connected client."""
        for ws in list(self._connections):
            try:
                await ws.send_json(data)
            except Exception:
                logger.warning("Dropping alert client after failed send", exc_info=True)
                self.disconnect(ws)
