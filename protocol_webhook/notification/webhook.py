"""Outbound webhook delivery for protocol completion events.

A single ``POST`` of the JSON payload to the effective URL, using ``httpx``
for a synchronous call (routes run in FastAPI's thread pool).  Delivery is
best-effort:

- no URL configured, or webhook disabled: nothing is sent, the payload is
  logged instead.  This is a normal operating mode for local demos.
- transport failure (connection refused, DNS, timeout): reported in the
  result, never raised.
- any HTTP response, including non-2xx: counts as sent.

There is no retry and no outbox.
"""
from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass
from typing import Any

import httpx

from protocol_webhook.core.config_file import AppConfig
from protocol_webhook.core.errors import WebhookTransportError

logger = logging.getLogger(__name__)

REASON_NO_URL = "no url"
REASON_DISABLED = "disabled"

SOURCE_RUNTIME = "runtime"


# ---------------------------------------------------------------------------
# DispatchResult
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DispatchResult:
    """Outcome of a single delivery attempt."""

    sent: bool
    status: int | None = None
    reason: str | None = None
    error: str | None = None

    def to_dict(self) -> dict:
        detail: dict[str, Any] = {"sent": self.sent}
        if self.status is not None:
            detail["status"] = self.status
        if self.reason is not None:
            detail["reason"] = self.reason
        if self.error is not None:
            detail["error"] = self.error
        return detail


# ---------------------------------------------------------------------------
# WebhookConfig
# ---------------------------------------------------------------------------

class WebhookConfig:
    """Process-wide webhook settings with a runtime override.

    The static URL comes from the startup configuration chain.  A URL set
    through :meth:`update` overrides it until the process restarts.
    """

    def __init__(
        self,
        static_url: str = "",
        enabled: bool = True,
        static_source: str = "config.json",
    ) -> None:
        self._lock = threading.Lock()
        self._static_url = static_url.strip()
        self._static_source = static_source
        self._runtime_url: str | None = None
        self._enabled = enabled

    @classmethod
    def from_app_config(cls, app_config: AppConfig) -> WebhookConfig:
        return cls(
            static_url=app_config.webhook_url,
            enabled=app_config.webhook_enabled,
            static_source=app_config.webhook_source,
        )

    def effective_url(self) -> str:
        with self._lock:
            return self._runtime_url or self._static_url

    def snapshot(self) -> tuple[str, bool, str]:
        """Return ``(effective_url, enabled, source)`` read under one lock."""
        with self._lock:
            if self._runtime_url:
                return self._runtime_url, self._enabled, SOURCE_RUNTIME
            return self._static_url, self._enabled, self._static_source

    def update(self, url: str | None = None, enabled: bool | None = None) -> None:
        """Change only the fields given; *url* is trimmed, empty clears the override."""
        with self._lock:
            if url is not None:
                self._runtime_url = url.strip() or None
            if enabled is not None:
                self._enabled = enabled


# ---------------------------------------------------------------------------
# WebhookDispatcher
# ---------------------------------------------------------------------------

class WebhookDispatcher:
    """Send completion payloads to the configured webhook URL.

    Parameters
    ----------
    config:
        The shared :class:`WebhookConfig`.
    timeout_s:
        Per-request timeout handed to ``httpx``.
    """

    def __init__(self, config: WebhookConfig, timeout_s: float = 10.0) -> None:
        self.config = config
        self.timeout_s = timeout_s

    # -- configuration ------------------------------------------------------

    def get_effective_url(self) -> str:
        return self.config.effective_url()

    def describe(self) -> dict:
        url, enabled, source = self.config.snapshot()
        return {"url": url or None, "enabled": enabled, "source": source}

    def set_config(self, url: str | None = None, enabled: bool | None = None) -> dict:
        self.config.update(url=url, enabled=enabled)
        url, enabled, _ = self.config.snapshot()
        logger.info("Webhook config updated: url=%s enabled=%s", url or "(none)", enabled)
        return {"url": url or None, "enabled": enabled}

    # -- delivery -----------------------------------------------------------

    def send(self, payload: dict) -> DispatchResult:
        """Attempt one delivery of *payload*.  Never raises."""
        url, enabled, _ = self.config.snapshot()
        if not url or not enabled:
            reason = REASON_DISABLED if url else REASON_NO_URL
            logger.info(
                "Webhook not sent (%s). Payload: %s",
                reason,
                json.dumps(payload, indent=2),
            )
            return DispatchResult(sent=False, reason=reason)

        try:
            status = self._post(url, payload)
        except WebhookTransportError as exc:
            logger.error("Webhook delivery to %s failed: %s", url, exc)
            return DispatchResult(sent=False, error=str(exc))

        logger.info("Webhook sent to %s status=%d", url, status)
        return DispatchResult(sent=True, status=status)

    def _post(self, url: str, payload: dict) -> int:
        try:
            response = httpx.post(
                url,
                json=payload,
                headers={"Content-Type": "application/json"},
                timeout=self.timeout_s,
            )
        except httpx.TimeoutException as exc:
            raise WebhookTransportError(
                f"Webhook request timed out after {self.timeout_s}s"
            ) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise WebhookTransportError(str(exc) or exc.__class__.__name__) from exc
        except Exception as exc:
            # Host encoding and resolver errors surface outside httpx's hierarchy.
            raise WebhookTransportError(
                f"{exc.__class__.__name__}: {exc}" if str(exc) else exc.__class__.__name__
            ) from exc
        return response.status_code
