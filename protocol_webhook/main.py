from protocol_webhook.api.main import app

__all__ = ["app"]
