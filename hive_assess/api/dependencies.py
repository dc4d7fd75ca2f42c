"""FastAPI dependency injection for shared resources."""

from __future__ import annotations

from hive_assess.services.alert_dispatcher import AlertDispatcher

# Singleton dispatcher for alert WebSocket clients
alert_dispatcher = AlertDispatcher()
