#!/usr/bin/env python3
"""
Copy the local JSON documents (data/*.json) into the remote KV store.

Usage:
  KV_REST_API_URL=... KV_REST_API_TOKEN=... python scripts/migrate_to_kv.py [--data-dir data] [--only members news]
"""
from __future__ import annotations

import argparse
import dataclasses
import sys
from pathlib import Path

# Make the clubapi package importable when run directly
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from clubapi.core.config import get_settings  # noqa: E402
from clubapi.core.logging_config import setup_logging  # noqa: E402
from clubapi.domain.documents import DOCUMENT_NAMES  # noqa: E402
from clubapi.repositories.document_store import open_store  # noqa: E402
from clubapi.services.sync_service import StorageSyncService  # noqa: E402


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Migrate local JSON documents to the remote KV store")
    ap.add_argument("--data-dir", help="Directory holding <document>.json files (default: DATA_DIR)")
    ap.add_argument("--only", nargs="+", choices=DOCUMENT_NAMES, help="Documents to migrate (default: all)")
    args = ap.parse_args(argv)

    settings = get_settings()
    if args.data_dir:
        settings = dataclasses.replace(settings, data_dir=Path(args.data_dir))
    setup_logging(settings.log_level)
    if not settings.remote_configured:
        sys.stderr.write("KV_REST_API_URL and KV_REST_API_TOKEN are required\n")
        return 1

    store = open_store(settings)
    if not store.remote_available:
        sys.stderr.write("Could not connect to the remote KV store\n")
        return 1

    result = StorageSyncService(store).sync_to_remote(args.only or DOCUMENT_NAMES)
    for name, count in result.synced.items():
        print(f"OK: {name} ({count} items)")
    for name in result.skipped:
        print(f"SKIP: {name} (no local file)")
    for name, error in result.errors.items():
        print(f"ERROR: {name}: {error}")
    return 0 if result.ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
