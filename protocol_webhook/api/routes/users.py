"""GET /api/users: list technicians."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from protocol_webhook.api.deps import get_store
from protocol_webhook.store.base import ProtocolStore

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("", summary="List users")
def list_users(store: ProtocolStore = Depends(get_store)):
    return [u.to_dict() for u in store.get_users()]
