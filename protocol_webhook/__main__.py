"""Run the API server: ``python -m protocol_webhook``."""
from __future__ import annotations

import logging

import uvicorn

from protocol_webhook.core.config_file import load_app_config
from protocol_webhook.core.logging import setup_logging
from protocol_webhook.core.settings import get_settings
from protocol_webhook.store import backend_label

logger = logging.getLogger("protocol_webhook")

_ENDPOINTS = (
    "GET  /api/health",
    "GET  /api/users",
    "GET  /api/protocols",
    "GET  /api/protocols/{id}",
    "POST /api/protocols/{id}/complete  -> triggers webhook",
    "GET  /api/webhook-config",
    "POST /api/webhook-config  body: {url, enabled}",
    "POST /api/reset  -> reset mock data",
)


def main() -> None:
    setup_logging()
    settings = get_settings()
    app_config = load_app_config(settings)

    logger.info("%s starting on http://localhost:%d", settings.app_name, app_config.port)
    logger.info("Database: %s", backend_label(settings.database_url))
    for endpoint in _ENDPOINTS:
        logger.info("  %s", endpoint)

    uvicorn.run(
        "protocol_webhook.main:app",
        host="0.0.0.0",
        port=app_config.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
