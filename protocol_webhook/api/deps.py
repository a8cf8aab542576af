"""FastAPI dependency injection: components built at startup live on ``app.state``."""
from __future__ import annotations

from fastapi import Request

from protocol_webhook.lifecycle.service import LifecycleService
from protocol_webhook.notification.webhook import WebhookDispatcher
from protocol_webhook.store.base import ProtocolStore


def get_store(request: Request) -> ProtocolStore:
    """Return the protocol store selected at startup."""
    return request.app.state.store


def get_dispatcher(request: Request) -> WebhookDispatcher:
    """Return the process-wide webhook dispatcher."""
    return request.app.state.dispatcher


def get_lifecycle_service(request: Request) -> LifecycleService:
    """Return the lifecycle service bound to the store and dispatcher."""
    return request.app.state.lifecycle
