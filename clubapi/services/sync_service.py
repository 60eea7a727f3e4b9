"""Storage diagnostics and local-to-remote reconciliation."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable

from clubapi.domain.documents import DOCUMENT_NAMES, item_count
from clubapi.repositories.document_store import DocumentStore
from clubapi.repositories.errors import StorageError

logger = logging.getLogger(__name__)


@dataclass
class SyncResult:
    synced: dict[str, int] = field(default_factory=dict)
    skipped: list[str] = field(default_factory=list)
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict:
        return {
            name: {
                "synced": self.synced.get(name, 0),
                "skipped": name in self.skipped,
                "error": self.errors.get(name),
            }
            for name in [*self.synced, *self.skipped, *self.errors]
        }


def _sample(value: Any) -> Any:
    if isinstance(value, list):
        return value[:1]
    return value


class StorageSyncService:
    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    def status(self, names: Iterable[str] = DOCUMENT_NAMES) -> dict:
        data = {}
        for name in names:
            value = self.store.read(name)
            data[name] = {
                "source": self.store.last_source(name),
                "count": item_count(value),
                "sample": _sample(value),
            }
        return {
            "remote": {
                "configured": self.store.remote_configured,
                "available": self.store.remote_available,
            },
            "data": data,
        }

    def sync_to_remote(self, names: Iterable[str] = DOCUMENT_NAMES) -> SyncResult:
        """
        Copy every local document file into the remote store.

        Local files are the only place fallback writes land, so this is how an
        operator brings the remote copy back in line after an outage.
        """
        result = SyncResult()
        primary = self.store.primary
        if primary is None:
            raise StorageError("Remote store is not available")
        local = self.store.fallback
        for name in names:
            try:
                value = local.get(name)
                if value is None:
                    result.skipped.append(name)
                    logger.info("No local %s to sync, skipping", name)
                    continue
                primary.set(name, value)
            except StorageError as exc:
                logger.error("Error syncing %s: %s", name, exc)
                result.errors[name] = str(exc)
                continue
            result.synced[name] = item_count(value)
            logger.info("Synced %d %s to remote store", result.synced[name], name)
        return result
