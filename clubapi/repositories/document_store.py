"""
Document store shared by every service.

Callers read and write whole named documents (``members``, ``news``,
``admins``, ``slider``, ``club``). A remote key-value backend is the primary
when it was configured and answered the startup ping; the local JSON files
are the fallback for every call the primary cannot serve.

Reads never raise: any failure resolves to the document's empty default.
Writes raise :class:`PersistenceError` only when no backend stored the value.
A write that lands on the local fallback is not copied back to the remote
store later, so the two can diverge until ``POST /api/sync-database`` or
``scripts/migrate_to_kv.py`` is run.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Callable, Mapping, Optional, Protocol

from clubapi.core.config import Settings
from clubapi.domain.documents import empty_default, item_count

from .errors import MalformedDocument, PersistenceError, StorageError
from .json_storage import LocalFileBackend
from .kv_storage import RemoteKVBackend, build_client

logger = logging.getLogger(__name__)

_NAME_PATTERN = re.compile(r"[a-z][a-z0-9_-]{0,63}")


class DocumentBackend(Protocol):
    """Capability shared by the remote and local backends."""

    source: str

    def exists(self, name: str) -> bool:
        ...

    def get(self, name: str) -> Any | None:
        """Return the stored value or None when the document is absent."""
        ...

    def set(self, name: str, value: Any) -> None:
        ...


class DocumentStore:
    """Try the primary backend, then the local fallback, once per call."""

    def __init__(
        self,
        fallback: LocalFileBackend,
        primary: Optional[DocumentBackend] = None,
        *,
        remote_configured: bool = False,
    ) -> None:
        self._fallback = fallback
        self._primary = primary
        self._remote_configured = remote_configured or primary is not None
        self._last_source: dict[str, str] = {}
        self._fallback.ensure_directory()

    # -------------------------------------- state --------------------------------------
    @property
    def remote_available(self) -> bool:
        return self._primary is not None

    @property
    def remote_configured(self) -> bool:
        return self._remote_configured

    @property
    def primary(self) -> Optional[DocumentBackend]:
        return self._primary

    @property
    def fallback(self) -> LocalFileBackend:
        return self._fallback

    def last_source(self, name: str) -> Optional[str]:
        """Backend that served the most recent read/write of ``name``."""
        return self._last_source.get(name)

    @staticmethod
    def _check_name(name: str) -> None:
        if not isinstance(name, str) or not _NAME_PATTERN.fullmatch(name):
            raise ValueError(f"Invalid document name: {name!r}")

    # -------------------------------------- reads --------------------------------------
    def read(self, name: str) -> Any:
        self._check_name(name)
        if self._primary is not None:
            try:
                value = self._primary.get(name)
            except StorageError as exc:
                logger.error("Failed to read %s from %s, using local file: %s", name, self._primary.source, exc)
            else:
                self._last_source[name] = self._primary.source
                if value is None:
                    logger.info("%s not found in %s store, returning default", name, self._primary.source)
                    return empty_default(name)
                logger.debug("Read %s from %s (%d items)", name, self._primary.source, item_count(value))
                return value

        self._last_source[name] = self._fallback.source
        try:
            value = self._fallback.get(name)
        except MalformedDocument as exc:
            logger.warning("Ignoring corrupt document %s: %s", name, exc)
            return empty_default(name)
        except StorageError as exc:
            logger.error("Failed to read %s from local file: %s", name, exc)
            return empty_default(name)
        if value is None:
            return empty_default(name)
        logger.debug("Read %s from local file (%d items)", name, item_count(value))
        return value

    # -------------------------------------- writes -------------------------------------
    def write(self, name: str, value: Any) -> None:
        self._check_name(name)
        if self._primary is not None:
            try:
                self._primary.set(name, value)
            except StorageError as exc:
                logger.error("Failed to write %s to %s, falling back to local file: %s", name, self._primary.source, exc)
            else:
                self._last_source[name] = self._primary.source
                logger.info("Saved %s to %s store (%d items)", name, self._primary.source, item_count(value))
                return

        try:
            self._fallback.set(name, value)
        except StorageError as exc:
            logger.error("Failed to write %s to local file: %s", name, exc)
            raise PersistenceError(name, f"Could not persist {name}: {exc}") from exc
        self._last_source[name] = self._fallback.source
        if self._primary is not None:
            logger.warning("%s saved to local file only; the %s copy is now stale", name, self._primary.source)
        else:
            logger.info("Saved %s to local file (%d items)", name, item_count(value))

    # -------------------------------------- seeding ------------------------------------
    def exists(self, name: str) -> bool:
        """True when the document is stored somewhere, even if it is empty."""
        self._check_name(name)
        if self._primary is not None:
            try:
                return self._primary.exists(name)
            except StorageError as exc:
                logger.error("Failed to check %s in %s, using local file: %s", name, self._primary.source, exc)
        return self._fallback.exists(name)

    def seed(self, defaults: Mapping[str, Any]) -> list[str]:
        """Write each default whose document is absent; return the names written."""
        written: list[str] = []
        for name, value in defaults.items():
            try:
                if self.exists(name):
                    continue
                self.write(name, value)
            except StorageError as exc:
                logger.warning("Could not initialize %s: %s", name, exc)
                continue
            logger.info("Created initial %s data", name)
            written.append(name)
        return written


def open_store(settings: Settings, client_factory: Callable[..., Any] = build_client) -> DocumentStore:
    """
    Build the process-wide store from settings.

    The remote backend is kept only when both credentials are present and the
    ping succeeds; availability is decided here once and never re-probed.
    """
    fallback = LocalFileBackend(settings.data_dir)
    primary: Optional[RemoteKVBackend] = None
    if settings.remote_configured:
        try:
            candidate = RemoteKVBackend(
                client_factory(settings.kv_url, settings.kv_token, timeout_seconds=settings.kv_timeout_seconds)
            )
            if candidate.ping():
                primary = candidate
                logger.info("Remote KV connection initialized and tested")
            else:
                logger.error("Remote KV ping returned a falsy reply, using local files")
        except (StorageError, ValueError) as exc:
            logger.error("Remote KV connection test failed, using local files: %s", exc)
    else:
        logger.warning("Remote KV credentials not configured, using local files in %s", settings.data_dir)
    return DocumentStore(fallback, primary, remote_configured=settings.remote_configured)
