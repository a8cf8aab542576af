"""Startup configuration loader.

Resolves the port and the static webhook settings from three layers, lowest
precedence first:

1. built-in defaults (``port=3099``, webhook url unset, webhook enabled)
2. an optional JSON file (``CONFIG_PATH``, default ``config.json``)
3. environment variables (``LOCAL_WEBHOOK_URL`` / ``WEBHOOK_URL``, ``PORT``)

The runtime override set through ``POST /api/webhook-config`` sits above all
three and lives in :class:`protocol_webhook.notification.webhook.WebhookConfig`.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from protocol_webhook.core.settings import Settings

logger = logging.getLogger(__name__)

DEFAULT_PORT = 3099

WebhookSource = Literal["env", "config.json"]


@dataclass(frozen=True)
class AppConfig:
    """Resolved static configuration."""

    port: int
    webhook_url: str
    webhook_enabled: bool
    webhook_source: WebhookSource


def read_config_file(path: str | Path) -> dict:
    """Return the parsed JSON mapping at *path*, or ``{}`` if it does not exist.

    Raises
    ------
    ValueError
        If the file is not valid JSON or does not hold a JSON object.
    """
    path = Path(path)
    if not path.is_file():
        return {}

    with open(path, "r", encoding="utf-8") as fh:
        try:
            data = json.load(fh)
        except json.JSONDecodeError as exc:
            raise ValueError(f"{path}: invalid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object, got {type(data).__name__}")
    return data


def load_app_config(settings: Settings) -> AppConfig:
    """Merge defaults, the config file and the environment into an ``AppConfig``."""
    port = DEFAULT_PORT
    webhook_url = ""
    webhook_enabled = True

    data = read_config_file(settings.config_path)
    if data:
        logger.info("Loaded config file %s", settings.config_path)
    if "port" in data:
        port = int(data["port"])
    webhook = data.get("webhook") or {}
    if not isinstance(webhook, dict):
        raise ValueError(f"{settings.config_path}: 'webhook' must be an object")
    if isinstance(webhook.get("url"), str):
        webhook_url = webhook["url"].strip()
    if isinstance(webhook.get("enabled"), bool):
        webhook_enabled = webhook["enabled"]

    source: WebhookSource = "config.json"
    if settings.webhook_url and settings.webhook_url.strip():
        webhook_url = settings.webhook_url.strip()
        source = "env"
    if settings.port is not None:
        port = settings.port

    return AppConfig(
        port=port,
        webhook_url=webhook_url,
        webhook_enabled=webhook_enabled,
        webhook_source=source,
    )
