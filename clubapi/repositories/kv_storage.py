"""
Remote key-value persistence adapter (Redis protocol, e.g. Upstash/Vercel KV).

Each document is stored under its own key as a JSON string.
"""

from __future__ import annotations

import json
from typing import Any
from urllib.parse import quote, urlparse

import redis

from .errors import BackendUnreachable, MalformedDocument, StorageError

UPSTASH_TLS_PORT = 6379


def redis_url_from_endpoint(endpoint: str, credential: str) -> str:
    """
    Build a redis URL from the configured endpoint.

    KV providers hand out an ``https://`` REST endpoint plus a token; the same
    database answers the Redis protocol over TLS with the token as password.
    """
    endpoint = (endpoint or "").strip()
    parsed = urlparse(endpoint)
    if parsed.scheme in ("redis", "rediss", "unix"):
        return endpoint
    host = parsed.hostname or endpoint.split("/", 1)[0]
    port = parsed.port or UPSTASH_TLS_PORT
    return f"rediss://default:{quote(credential or '', safe='')}@{host}:{port}"


def build_client(endpoint: str, credential: str, *, timeout_seconds: int = 5) -> redis.Redis:
    return redis.from_url(
        redis_url_from_endpoint(endpoint, credential),
        socket_timeout=timeout_seconds,
        socket_connect_timeout=timeout_seconds,
        decode_responses=True,
    )


class RemoteKVBackend:
    """Reads and writes whole documents as JSON values in a Redis-compatible store."""

    source = "remote"

    def __init__(self, client: Any) -> None:
        self.client = client

    def ping(self) -> bool:
        try:
            return bool(self.client.ping())
        except (redis.RedisError, OSError) as exc:
            raise BackendUnreachable(f"ping failed: {exc}") from exc

    def exists(self, name: str) -> bool:
        try:
            return bool(self.client.exists(name))
        except (redis.RedisError, OSError) as exc:
            raise BackendUnreachable(f"exists {name} failed: {exc}") from exc

    def get(self, name: str) -> Any | None:
        try:
            raw = self.client.get(name)
        except (redis.RedisError, OSError) as exc:
            raise BackendUnreachable(f"get {name} failed: {exc}") from exc
        if raw is None:
            return None
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")
        try:
            return json.loads(raw)
        except ValueError as exc:
            raise MalformedDocument(name, f"kv:{name}", str(exc)) from exc

    def set(self, name: str, value: Any) -> None:
        try:
            payload = json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            raise StorageError(f"{name} is not JSON serializable: {exc}") from exc
        try:
            self.client.set(name, payload)
        except (redis.RedisError, OSError) as exc:
            raise BackendUnreachable(f"set {name} failed: {exc}") from exc
