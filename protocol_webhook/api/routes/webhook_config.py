"""Runtime webhook configuration.

GET  /api/webhook-config: effective URL, enabled flag and where the URL came from
POST /api/webhook-config: set ``url`` and/or ``enabled``; omitted fields are kept
"""
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends
from pydantic import BaseModel

from protocol_webhook.api.deps import get_dispatcher
from protocol_webhook.notification.webhook import WebhookDispatcher

router = APIRouter(prefix="/api/webhook-config", tags=["webhook"])


class WebhookConfigBody(BaseModel):
    # Loosely typed: a field of the wrong type is ignored, not rejected.
    url: Any = None
    enabled: Any = None


@router.get("", summary="Show webhook config")
def get_webhook_config(dispatcher: WebhookDispatcher = Depends(get_dispatcher)):
    return dispatcher.describe()


@router.post("", summary="Update webhook config")
def update_webhook_config(
    body: WebhookConfigBody | None = Body(default=None),
    dispatcher: WebhookDispatcher = Depends(get_dispatcher),
):
    body = body or WebhookConfigBody()
    return dispatcher.set_config(
        url=body.url if isinstance(body.url, str) else None,
        enabled=body.enabled if isinstance(body.enabled, bool) else None,
    )
