import pytest
from fastapi.testclient import TestClient

from protocol_webhook.db.session import create_db_engine
from protocol_webhook.store.memory import MemoryProtocolStore
from protocol_webhook.store.sql import SqlProtocolStore

_ENV_VARS = (
    "DATABASE_URL",
    "WEBHOOK_URL",
    "LOCAL_WEBHOOK_URL",
    "PORT",
    "CONFIG_PATH",
    "WEBHOOK_TIMEOUT_S",
    "APP_NAME",
)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path):
    """Strip config env vars and point CONFIG_PATH at a file that does not exist."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("CONFIG_PATH", str(tmp_path / "missing-config.json"))

    from protocol_webhook.core.settings import get_settings

    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()


@pytest.fixture
def client(clean_env) -> TestClient:
    from protocol_webhook.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def sql_client(clean_env) -> TestClient:
    clean_env.setenv("DATABASE_URL", "sqlite+pysqlite:///:memory:")

    from protocol_webhook.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture(params=["memory", "sql"])
def store(request):
    """An initialised store, once per backend."""
    if request.param == "memory":
        s = MemoryProtocolStore()
    else:
        s = SqlProtocolStore(create_db_engine("sqlite+pysqlite:///:memory:"))
    s.init()
    return s
