#!/usr/bin/env python3
"""
Load the sample rewards and tournaments into Supabase.
Run: python scripts/seed_catalog.py [--force]

Skips a table that already has rows unless --force is given.
"""

import sys
import os

# Add parent dir to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Load env
from dotenv import load_dotenv
load_dotenv()

from config.settings import settings
from infrastructure.catalog import SAMPLE_REWARDS, SAMPLE_TOURNAMENTS
from infrastructure.database import create_supabase_client


def seed_table(client, table: str, rows: list, force: bool):
    existing = client.table(table).select("id", count="exact").limit(1).execute()
    if existing.count and not force:
        print(f"⏭️  {table}: {existing.count} rows already present, skipping")
        return

    response = client.table(table).insert(rows).execute()
    print(f"✅ {table}: inserted {len(response.data or [])} rows")


def main():
    force = "--force" in sys.argv[1:]
    client = create_supabase_client(settings)
    print(f"🔌 Connected to {settings.supabase_url} (schema={settings.db_schema})")

    seed_table(client, "rewards", SAMPLE_REWARDS, force)
    seed_table(client, "tournaments", SAMPLE_TOURNAMENTS, force)


if __name__ == "__main__":
    main()
