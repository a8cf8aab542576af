"""Protocol routes.

GET  /api/protocols?userId=&status= : list protocols (AND filters)
GET  /api/protocols/{id}            : protocol + assignee + open count
POST /api/protocols/{id}/complete   : close the protocol, send the webhook
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from protocol_webhook.api.deps import get_lifecycle_service, get_store
from protocol_webhook.lifecycle.service import LifecycleService
from protocol_webhook.store.base import ProtocolStore

router = APIRouter(prefix="/api/protocols", tags=["protocols"])


@router.get("", summary="List protocols")
def list_protocols(
    user_id: str | None = Query(default=None, alias="userId"),
    status: str | None = Query(default=None),
    store: ProtocolStore = Depends(get_store),
):
    # Empty query values mean "no filter".
    protocols = store.get_protocols(user_id=user_id or None, status=status or None)
    return [p.to_dict() for p in protocols]


@router.get("/{protocol_id}", summary="Get protocol detail")
def get_protocol(
    protocol_id: str,
    service: LifecycleService = Depends(get_lifecycle_service),
):
    return service.describe(protocol_id).to_dict()


@router.post("/{protocol_id}/complete", summary="Complete a protocol and notify the webhook")
def complete_protocol(
    protocol_id: str,
    service: LifecycleService = Depends(get_lifecycle_service),
):
    return service.complete(protocol_id).to_dict()
