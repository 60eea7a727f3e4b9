"""
Persistence adapters.

These modules encapsulate how documents are stored/retrieved (remote KV
service or local JSON files). Services depend on the DocumentStore instead
of touching files or the KV client.
"""

from .document_store import DocumentStore, open_store
from .errors import BackendUnreachable, MalformedDocument, PersistenceError, StorageError

__all__ = [
    "DocumentStore",
    "open_store",
    "BackendUnreachable",
    "MalformedDocument",
    "PersistenceError",
    "StorageError",
]
