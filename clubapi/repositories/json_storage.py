"""
Local JSON-file persistence adapter.

One pretty-printed UTF-8 file per document (``<name>.json``) inside the data
directory. Writes go to ``<name>.json.tmp`` first and are renamed over the
target, so readers only ever see a complete file.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from .errors import MalformedDocument, StorageError

logger = logging.getLogger(__name__)


class LocalFileBackend:
    """Stores each document as a JSON file under ``directory``."""

    source = "local"

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def ensure_directory(self) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)

    def path_for(self, name: str) -> Path:
        return self.directory / f"{name}.json"

    def exists(self, name: str) -> bool:
        return self.path_for(name).exists()

    def get(self, name: str) -> Any | None:
        """Return the parsed document, or None when the file is missing or blank."""
        path = self.path_for(name)
        if not path.exists():
            logger.debug("%s does not exist", path.name)
            return None
        try:
            raw = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedDocument(name, str(path), str(exc)) from exc
        except OSError as exc:
            raise StorageError(f"Could not read {path}: {exc}") from exc
        if not raw.strip():
            logger.debug("%s is empty", path.name)
            return None
        try:
            return json.loads(raw)
        except ValueError as exc:
            raise MalformedDocument(name, str(path), str(exc)) from exc

    def set(self, name: str, value: Any) -> None:
        path = self.path_for(name)
        tmp_path = path.with_name(path.name + ".tmp")
        try:
            payload = json.dumps(value, ensure_ascii=False, indent=2)
        except (TypeError, ValueError) as exc:
            raise StorageError(f"{name} is not JSON serializable: {exc}") from exc
        try:
            self.ensure_directory()
            with tmp_path.open("w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, path)
        except OSError as exc:
            self._discard(tmp_path)
            raise StorageError(f"Could not write {path}: {exc}") from exc

    @staticmethod
    def _discard(tmp_path: Path) -> None:
        try:
            tmp_path.unlink()
        except FileNotFoundError:
            pass
        except OSError as exc:
            logger.warning("Could not remove temporary file %s: %s", tmp_path, exc)
