#!/usr/bin/env python3
"""
Check a running deployment: API reachable and remote KV store connected.

Usage:
  python scripts/check_deployment.py https://amsal-fc.example.com [--timeout 10]
"""
from __future__ import annotations

import argparse
import sys

import httpx


def check(base_url: str, timeout: float = 10.0) -> int:
    url = base_url.rstrip("/") + "/api/debug"
    print(f"1. Testing connectivity to {url} ...")
    try:
        response = httpx.get(url, timeout=timeout)
        response.raise_for_status()
        debug = response.json()
    except httpx.HTTPError as exc:
        print(f"[FAIL] Cannot reach deployment: {exc}")
        return 2
    except ValueError:
        print("[FAIL] /api/debug did not return JSON")
        return 2
    print("[OK] API accessible")

    print("2. Checking remote KV store ...")
    ready = True
    if debug.get("remoteAvailable"):
        print("[OK] Remote store connected")
    elif debug.get("remoteConfigured"):
        print("[FAIL] Remote store configured but not reachable; writes go to local files")
        ready = False
    else:
        print("[FAIL] Remote store not configured; set KV_REST_API_URL and KV_REST_API_TOKEN")
        ready = False

    print(f"3. Environment: {debug.get('environment', 'unknown')}")
    if ready:
        print("Deployment ready. Run POST /api/sync-database to push local data to the remote store.")
        return 0
    return 1


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Check a deployed club API")
    ap.add_argument("base_url", help="Public URL of the deployment")
    ap.add_argument("--timeout", type=float, default=10.0, help="HTTP timeout in seconds")
    args = ap.parse_args(argv)
    return check(args.base_url, args.timeout)


if __name__ == "__main__":
    sys.exit(main())
