"""Tests for protocol_webhook/notification/webhook.py.

All network calls are mocked via ``unittest.mock.patch`` on ``httpx.post``.
"""
from __future__ import annotations

from unittest.mock import MagicMock, patch

import httpx
import pytest

from protocol_webhook.core.config_file import AppConfig
from protocol_webhook.notification.webhook import (
    DispatchResult,
    WebhookConfig,
    WebhookDispatcher,
)

POST = "protocol_webhook.notification.webhook.httpx.post"
PAYLOAD = {"event": "protocol_completed", "protocolId": "p1", "remainingCount": 2}


def _dispatcher(url: str = "http://hooks.local/in", enabled: bool = True) -> WebhookDispatcher:
    return WebhookDispatcher(WebhookConfig(static_url=url, enabled=enabled), timeout_s=3.0)


# ===========================================================================
# send
# ===========================================================================

class TestSend:
    def test_no_url_skips_network(self):
        with patch(POST) as mock_post:
            result = _dispatcher(url="").send(PAYLOAD)

        mock_post.assert_not_called()
        assert result == DispatchResult(sent=False, reason="no url")

    def test_disabled_skips_network(self):
        with patch(POST) as mock_post:
            result = _dispatcher(enabled=False).send(PAYLOAD)

        mock_post.assert_not_called()
        assert result.to_dict() == {"sent": False, "reason": "disabled"}

    def test_success_posts_json_once(self):
        with patch(POST, return_value=MagicMock(status_code=200)) as mock_post:
            result = _dispatcher().send(PAYLOAD)

        mock_post.assert_called_once_with(
            "http://hooks.local/in",
            json=PAYLOAD,
            headers={"Content-Type": "application/json"},
            timeout=3.0,
        )
        assert result.to_dict() == {"sent": True, "status": 200}

    def test_non_2xx_still_counts_as_sent(self):
        with patch(POST, return_value=MagicMock(status_code=503)):
            result = _dispatcher().send(PAYLOAD)

        assert result.sent is True
        assert result.status == 503

    def test_connection_error_is_reported_not_raised(self):
        with patch(POST, side_effect=httpx.ConnectError("Connection refused")) as mock_post:
            result = _dispatcher().send(PAYLOAD)

        assert mock_post.call_count == 1
        assert result.sent is False
        assert result.error == "Connection refused"
        assert result.to_dict() == {"sent": False, "error": "Connection refused"}

    def test_timeout_is_reported_not_raised(self):
        with patch(POST, side_effect=httpx.ReadTimeout("read timed out")):
            result = _dispatcher().send(PAYLOAD)

        assert result.sent is False
        assert "timed out after 3.0s" in result.error

    def test_invalid_url_is_reported_not_raised(self):
        result = _dispatcher(url="not-a-url").send(PAYLOAD)

        assert result.sent is False
        assert result.error

    def test_host_encoding_error_is_reported_not_raised(self):
        error = UnicodeError("encoding with 'idna' codec failed (UnicodeError: label empty or too long)")

        with patch(POST, side_effect=error):
            result = _dispatcher(url="http://a..b/").send(PAYLOAD)

        assert result.sent is False
        assert result.error.startswith("UnicodeError: ")
        assert "label empty or too long" in result.error

    def test_unexpected_error_is_reported_not_raised(self):
        with patch(POST, side_effect=ValueError()):
            result = _dispatcher().send(PAYLOAD)

        assert result.to_dict() == {"sent": False, "error": "ValueError"}

    def test_uses_runtime_override(self):
        dispatcher = _dispatcher(url="http://static.local")
        dispatcher.set_config(url="http://runtime.local")

        with patch(POST, return_value=MagicMock(status_code=204)) as mock_post:
            dispatcher.send(PAYLOAD)

        assert mock_post.call_args.args[0] == "http://runtime.local"


# ===========================================================================
# configuration
# ===========================================================================

class TestConfig:
    def test_nothing_configured(self):
        dispatcher = _dispatcher(url="")

        assert dispatcher.get_effective_url() == ""
        assert dispatcher.describe() == {"url": None, "enabled": True, "source": "config.json"}

    def test_static_source_from_app_config(self):
        config = WebhookConfig.from_app_config(
            AppConfig(port=3099, webhook_url="http://env.local", webhook_enabled=True, webhook_source="env")
        )
        dispatcher = WebhookDispatcher(config)

        assert dispatcher.describe() == {"url": "http://env.local", "enabled": True, "source": "env"}

    def test_runtime_url_wins_and_is_trimmed(self):
        dispatcher = _dispatcher(url="http://static.local")

        assert dispatcher.set_config(url="  http://x  ") == {"url": "http://x", "enabled": True}
        assert dispatcher.describe() == {"url": "http://x", "enabled": True, "source": "runtime"}

    def test_only_given_fields_change(self):
        dispatcher = _dispatcher(url="")
        dispatcher.set_config(url="http://x")

        assert dispatcher.set_config(enabled=False) == {"url": "http://x", "enabled": False}
        assert dispatcher.set_config(url="http://y") == {"url": "http://y", "enabled": False}

    def test_empty_url_clears_runtime_override(self):
        dispatcher = _dispatcher(url="http://static.local")
        dispatcher.set_config(url="http://x")

        dispatcher.set_config(url="   ")

        assert dispatcher.describe() == {
            "url": "http://static.local",
            "enabled": True,
            "source": "config.json",
        }

    @pytest.mark.parametrize(
        "result,expected",
        [
            (DispatchResult(sent=True, status=201), {"sent": True, "status": 201}),
            (DispatchResult(sent=False, reason="no url"), {"sent": False, "reason": "no url"}),
            (DispatchResult(sent=False, error="boom"), {"sent": False, "error": "boom"}),
        ],
    )
    def test_result_dict_omits_unset_keys(self, result, expected):
        assert result.to_dict() == expected
