import logging
import logging.config
import re

# Webhook URLs frequently embed credentials (basic-auth userinfo, Slack/Discord
# style tokens in the query string); they are logged on every dispatch.
SECRET_PATTERNS = [
    re.compile(r"(?i)(\bhttps?://)[^/\s:@]+:[^/\s@]+@"),
    re.compile(r"(?i)([?&](?:token|key|api_key|apikey|secret|signature|sig|access_token)=)[^&\s\"']+"),
]


class SecretSafeFilter(logging.Filter):
    def _sanitize(self, value: object) -> object:
        if not isinstance(value, str):
            return value

        redacted = SECRET_PATTERNS[0].sub(r"\1[REDACTED]@", value)
        redacted = SECRET_PATTERNS[1].sub(r"\1[REDACTED]", redacted)
        return redacted

    def filter(self, record: logging.LogRecord) -> bool:
        record.msg = self._sanitize(record.msg)

        if isinstance(record.args, tuple):
            record.args = tuple(self._sanitize(item) for item in record.args)
        elif isinstance(record.args, dict):
            record.args = {key: self._sanitize(value) for key, value in record.args.items()}

        return True


def setup_logging() -> None:
    from protocol_webhook.core.settings import get_settings

    settings = get_settings()
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "filters": {
                "secret_safe": {
                    "()": "protocol_webhook.core.logging.SecretSafeFilter",
                }
            },
            "formatters": {
                "default": {
                    "format": "%(asctime)s %(levelname)s %(name)s %(message)s",
                }
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                    "filters": ["secret_safe"],
                }
            },
            "loggers": {
                "": {
                    "handlers": ["console"],
                    "level": settings.log_level.upper(),
                },
                "uvicorn.access": {
                    "handlers": ["console"],
                    "level": "WARNING",
                    "propagate": False,
                },
                "httpx": {
                    "level": "WARNING",
                },
            },
        }
    )
