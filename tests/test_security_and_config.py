from __future__ import annotations

from pathlib import Path

from clubapi.core import config as core_config
from clubapi.core.rate_limiter import RequestThrottle
from clubapi.core.security import hash_password, is_hashed, needs_upgrade, verify_password


def test_hash_and_verify_round_trip():
    stored = hash_password("s3cret")
    assert is_hashed(stored)
    assert verify_password("s3cret", stored)
    assert not verify_password("other", stored)


def test_plaintext_legacy_values_still_verify():
    assert verify_password("password123", "password123")
    assert not verify_password("password", "password123")
    assert not verify_password("", None)
    assert not verify_password("x", "argon2$not-a-hash")


def test_settings_read_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("KV_REST_API_URL", "https://kv.example.com")
    monkeypatch.setenv("KV_REST_API_TOKEN", "tok")
    monkeypatch.setenv("DATA_DIR", str(tmp_path / "docs"))
    monkeypatch.setenv("SUPER_ADMIN_USERNAME", "boss")
    monkeypatch.setenv("KV_TIMEOUT_SECONDS", "not-a-number")
    core_config.get_settings.cache_clear()

    settings = core_config.get_settings()
    assert settings.remote_configured is True
    assert settings.data_dir == Path(tmp_path / "docs")
    assert settings.super_admin_username == "boss"
    assert settings.super_admin_password == "password123"
    assert settings.kv_timeout_seconds == 5


def test_remote_requires_both_credentials(monkeypatch):
    monkeypatch.setenv("KV_REST_API_URL", "https://kv.example.com")
    core_config.get_settings.cache_clear()
    assert core_config.get_settings().remote_configured is False


def test_throttle_blocks_until_window_expires():
    now = [1000.0]
    throttle = RequestThrottle(2, window_seconds=60, clock=lambda: now[0])
    assert throttle.hit("login:1.2.3.4") is None
    assert throttle.hit("login:1.2.3.4") is None
    assert throttle.hit("login:1.2.3.4") == 60
    assert throttle.hit("login:5.6.7.8") is None
    now[0] += 60
    assert throttle.hit("login:1.2.3.4") is None


def test_upgrade_needed_for_plaintext_and_weak_hashes():
    from argon2 import PasswordHasher

    assert needs_upgrade("password123")
    assert needs_upgrade(None)
    assert not needs_upgrade(hash_password("s3cret"))
    weak = "argon2$" + PasswordHasher(time_cost=1, memory_cost=8, parallelism=1).hash("s3cret")
    assert verify_password("s3cret", weak)
    assert needs_upgrade(weak)
