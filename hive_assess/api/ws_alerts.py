"""WebSocket endpoint: streams hive alerts to subscribed clients."""

from __future__ import annotations

import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from hive_assess.api.dependencies import alert_dispatcher

router = APIRouter()
logger = logging.getLogger(__name__)


@router.websocket("/ws/alerts")
async def stream_alerts(websocket: WebSocket) -> None:
    """Clients connect here to receive alerts as inspections are analysed."""
    await alert_dispatcher.connect(websocket)
    logger.info("Alert client connected, total: %d", alert_dispatcher.active_count)

    try:
        while True:
            # Keep the connection alive; alerts are pushed server-side
            await websocket.receive_text()

    except WebSocketDisconnect:
        logger.info("Alert client disconnected")

    finally:
        alert_dispatcher.disconnect(websocket)
        logger.info("Alert clients remaining: %d", alert_dispatcher.active_count)
