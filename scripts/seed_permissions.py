#!/usr/bin/env python3
"""Seed permission profiles and migrate users with legacy roles.

Safe to run repeatedly.

Usage:
    export DATABASE_URL=postgresql://...
    uv run python scripts/seed_permissions.py [--users users.csv]

users.csv holds one "user_id,role" per line (role: ADMIN, OPERADOR, ...).
"""
from __future__ import annotations

import argparse
import asyncio
import csv
import sys

from motorent.application.catalog import build_catalog
from motorent.application.use_cases.permission.seed_permissions import SeedPermissionsUseCase
from motorent.config import get_settings
from motorent.domain.value_objects import Identity
from motorent.infrastructure.persistence.postgres.connection import create_pool
from motorent.infrastructure.persistence.postgres.unit_of_work import create_uow_factory
from motorent.logging_config import configure_logging


def read_users(path: str) -> list[Identity]:
    with open(path, newline="", encoding="utf-8") as f:
        return [
            Identity(user_id=row[0].strip(), role=row[1].strip().upper())
            for row in csv.reader(f)
            if len(row) >= 2 and row[0].strip()
        ]


async def seed(users: list[Identity]) -> int:
    settings = get_settings()
    pool = create_pool(settings.database_url, min_size=1, max_size=2)
    await pool.open()
    try:
        use_case = SeedPermissionsUseCase(create_uow_factory(pool), build_catalog())
        result = await use_case.execute(users)
    finally:
        await pool.close()

    print(f"Operations in catalog: {result.operations}")
    for name, count in result.grants_by_profile.items():
        print(f"  {name}: {count} grants")
    print(f"Users migrated: {result.migrated_users}")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Seed permission profiles")
    parser.add_argument("--users", type=str, default=None, help="CSV of user_id,role to migrate")
    args = parser.parse_args()

    configure_logging(get_settings().log_level)
    users = read_users(args.users) if args.users else []
    return asyncio.run(seed(users))


if __name__ == "__main__":
    sys.exit(main())
