from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = Field(default="protocol-webhook-demo", alias="APP_NAME")
    app_env: str = Field(default="local", alias="APP_ENV")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    database_url: str | None = Field(default=None, alias="DATABASE_URL")
    config_path: str = Field(default="config.json", alias="CONFIG_PATH")
    webhook_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("LOCAL_WEBHOOK_URL", "WEBHOOK_URL"),
    )
    webhook_timeout_s: float = Field(default=10.0, alias="WEBHOOK_TIMEOUT_S")
    port: int | None = Field(default=None, alias="PORT")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
