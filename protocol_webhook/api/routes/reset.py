"""POST /api/reset: restore the demo seed data."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from protocol_webhook.api.deps import get_store
from protocol_webhook.store.base import ProtocolStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["reset"])


@router.post("/reset", summary="Reset mock data")
def reset_data(store: ProtocolStore = Depends(get_store)):
    count = store.reset()
    logger.info("Mock data reset: %d protocols", count)
    return {"message": "Mock data reset", "protocolCount": count}
