from __future__ import annotations

import sys
from pathlib import Path

import pytest
import redis

# Make the clubapi package importable during local test runs
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from clubapi.core import config as core_config  # noqa: E402
from clubapi.core.config import Settings  # noqa: E402
from clubapi.repositories.document_store import DocumentStore  # noqa: E402
from clubapi.repositories.json_storage import LocalFileBackend  # noqa: E402
from clubapi.repositories.kv_storage import RemoteKVBackend  # noqa: E402


class FakeKVClient:
    """In-memory stand-in for a redis client, with switchable failures."""

    def __init__(self) -> None:
        self.data: dict[str, str] = {}
        self.fail_ping = False
        self.fail_get = False
        self.fail_set = False
        self.fail_exists = False
        self.set_calls = 0

    def ping(self):
        if self.fail_ping:
            raise redis.ConnectionError("connection refused")
        return True

    def get(self, key):
        if self.fail_get:
            raise redis.TimeoutError("read timed out")
        return self.data.get(key)

    def set(self, key, value):
        self.set_calls += 1
        if self.fail_set:
            raise redis.ConnectionError("connection reset")
        self.data[key] = value
        return True

    def exists(self, key):
        if self.fail_exists:
            raise redis.ConnectionError("connection reset")
        return int(key in self.data)


def make_settings(data_dir: Path, **overrides) -> Settings:
    values = dict(
        app_env="test",
        public_base_url="http://testserver",
        kv_url="",
        kv_token="",
        kv_timeout_seconds=1,
        data_dir=data_dir,
        super_admin_username="admin",
        super_admin_password="password123",
        log_level="WARNING",
        login_rate_limit=100,
    )
    values.update(overrides)
    return Settings(**values)


@pytest.fixture(autouse=True)
def _isolate_settings(monkeypatch, tmp_path):
    """Keep every test away from the real environment and data directory."""
    for var in ("KV_REST_API_URL", "KV_REST_API_TOKEN", "SUPER_ADMIN_USERNAME", "SUPER_ADMIN_PASSWORD"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("DATA_DIR", str(tmp_path / "env-data"))
    monkeypatch.setenv("APP_ENV", "test")
    core_config.get_settings.cache_clear()
    yield
    core_config.get_settings.cache_clear()


@pytest.fixture()
def data_dir(tmp_path) -> Path:
    return tmp_path / "data"


@pytest.fixture()
def kv_client() -> FakeKVClient:
    return FakeKVClient()


@pytest.fixture()
def local_store(data_dir) -> DocumentStore:
    return DocumentStore(LocalFileBackend(data_dir))


@pytest.fixture()
def remote_store(data_dir, kv_client) -> DocumentStore:
    return DocumentStore(LocalFileBackend(data_dir), RemoteKVBackend(kv_client))


@pytest.fixture(params=["local", "remote"])
def any_store(request, data_dir, kv_client) -> DocumentStore:
    if request.param == "remote":
        return DocumentStore(LocalFileBackend(data_dir), RemoteKVBackend(kv_client))
    return DocumentStore(LocalFileBackend(data_dir))
