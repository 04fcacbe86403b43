"""
Data Seeder for the Data Portal.
Resets the database and fills it with the demo accounts, the item catalog
and some random checkbox activity for demo purposes.
"""

import asyncio
import sys
import random
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from portal import DataPortal
from portal.domain.demo_data import DEMO_OWNERS
from portal.infra.config import DB_FILENAME, get_settings
from portal.infra.db import DatabaseEngine


async def reset_database():
    """Delete the existing database file to ensure a fresh seed"""
    db_path = get_settings().data_dir / DB_FILENAME
    if db_path.exists():
        print(f"Removing existing database at: {db_path}")
        try:
            db_path.unlink()
            print("Database removed.")
        except PermissionError:
            print("ERROR: Could not remove database. It might be in use.")
            sys.exit(1)
    else:
        print(f"No existing database found at: {db_path}")


async def seed():
    await reset_database()
    print("Starting data seeding...")

    portal = await DataPortal.open()

    # 1. Accounts (seeded on first use) and the catalog (generated on first read)
    await portal.auth.ensure_demo_users()
    items = await portal.get_all_items()
    print(f"Catalog has {len(items)} items")

    # 2. Random activity: each owner ticks off a few items, some get unticked again
    for owner in DEMO_OWNERS:
        owned = [item for item in items if item.owner_email == owner]
        for item in random.sample(owned, k=3):
            await portal.set_state(owner, item.id, True)
            if random.random() < 0.3:
                await portal.set_state(owner, item.id, False)
        print(f"Generated checkbox activity for {owner}")

    await DatabaseEngine.reset_instance()
    print("Seeding complete.")

if __name__ == "__main__":
    asyncio.run(seed())
