#!/usr/bin/env python3
"""Trigger the pending-invoice sweep, as the scheduler does every few minutes.

Usage:
    export API_URL=http://localhost:8000 CRON_SECRET=...
    uv run python scripts/run_invoice_sweep.py
"""
from __future__ import annotations

import os
import sys

import httpx


def main() -> int:
    api_url = os.environ.get("API_URL", "http://localhost:8000").rstrip("/")
    secret = os.environ.get("CRON_SECRET", "")
    if not secret:
        print("CRON_SECRET is not set", file=sys.stderr)
        return 2

    try:
        r = httpx.post(
            f"{api_url}/v1/jobs/invoice-payments",
            headers={"Authorization": f"Bearer {secret}"},
            timeout=120.0,
        )
    except httpx.HTTPError as e:
        print(f"Request failed: {e}", file=sys.stderr)
        return 1
    if r.status_code != 200:
        print(f"Sweep failed: {r.status_code} {r.text}", file=sys.stderr)
        return 1

    result = r.json()
    print(f"Processed: {result['processed']}")
    for error in result["errors"]:
        print(f"  error: {error}")
    return 1 if result["errors"] else 0


if __name__ == "__main__":
    sys.exit(main())
