"""GET /api/health: liveness check."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from protocol_webhook.api.deps import get_store
from protocol_webhook.core.settings import get_settings
from protocol_webhook.store.base import ProtocolStore

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health", summary="Basic health check")
def health_check(store: ProtocolStore = Depends(get_store)) -> dict:
    settings = get_settings()
    return {
        "ok": True,
        "service": settings.app_name,
        "database": store.backend,
    }
