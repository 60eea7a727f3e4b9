"""Errors raised by the document storage backends."""
from __future__ import annotations


class StorageError(Exception):
    """Base class for storage failures."""


class BackendUnreachable(StorageError):
    """The remote key-value service could not be reached or answered with an error."""


class MalformedDocument(StorageError):
    """A local document file exists but does not contain valid JSON."""

    def __init__(self, name: str, path: str, reason: str):
        super().__init__(f"{path} is not valid JSON: {reason}")
        self.name = name
        self.path = path
        self.reason = reason


class PersistenceError(StorageError):
    """No backend accepted the write; the change did not take effect anywhere."""

    def __init__(self, name: str, message: str):
        super().__init__(message)
        self.name = name
        self.message = message
