"""FastAPI application.

Builds the store, webhook dispatcher and lifecycle service at startup and
mounts the API routers.  ``protocol_webhook.main`` re-exports ``app``.
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from protocol_webhook.api.errors import register_error_handlers
from protocol_webhook.api.routes.health import router as health_router
from protocol_webhook.api.routes.protocols import router as protocols_router
from protocol_webhook.api.routes.reset import router as reset_router
from protocol_webhook.api.routes.users import router as users_router
from protocol_webhook.api.routes.webhook_config import router as webhook_config_router
from protocol_webhook.core.config_file import load_app_config
from protocol_webhook.core.logging import setup_logging
from protocol_webhook.core.settings import get_settings
from protocol_webhook.lifecycle.service import LifecycleService
from protocol_webhook.notification.webhook import WebhookConfig, WebhookDispatcher
from protocol_webhook.store import create_store

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    settings = get_settings()
    app_config = load_app_config(settings)

    store = create_store(settings.database_url)
    store.init()
    dispatcher = WebhookDispatcher(
        WebhookConfig.from_app_config(app_config),
        timeout_s=settings.webhook_timeout_s,
    )

    app.state.app_config = app_config
    app.state.store = store
    app.state.dispatcher = dispatcher
    app.state.lifecycle = LifecycleService(store, dispatcher)

    logger.info("Store backend: %s", store.backend)
    if not dispatcher.get_effective_url():
        logger.info(
            "No webhook URL set. Use POST /api/webhook-config, config.json, or WEBHOOK_URL."
        )
    yield


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(health_router)
app.include_router(users_router)
app.include_router(protocols_router)
app.include_router(webhook_config_router)
app.include_router(reset_router)
