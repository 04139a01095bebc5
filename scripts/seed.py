"""
Menu Seed Script

Loads a tenant menu document into the database. Safe to rerun: the
tenant's previous menu is replaced in a single transaction.
Run from project root: python scripts/seed.py --file data/seed_menu.estafeten.json
"""

import asyncio
import sys
import os
import argparse

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
# Windows event loop fix
if sys.platform == "win32":
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

from storefront.core.config import get_settings, setup_logging
from storefront.database import async_session_maker, engine, init_db
from storefront.services.seeding import SeedDataError, load_seed_document, seed_tenant


async def run_seed(path: str, create_tables: bool = False) -> bool:
    """Seed one document; returns False on failure."""
    print("=" * 60)
    print(f"🌱 Seeding menu from {path}")
    print("=" * 60)

    try:
        document = load_seed_document(path)
    except SeedDataError as e:
        print(f"\n❌ {e}")
        return False

    try:
        if create_tables:
            await init_db()

        async with async_session_maker() as session:
            result = await seed_tenant(session, document)
    except Exception as e:
        print(f"\n❌ Seed failed, nothing was changed: {e}")
        return False
    finally:
        await engine.dispose()

    action = "created" if result.tenant_created else "updated"
    print(f"\n✅ Tenant {action}: {document.tenant.name} ({result.tenant_slug})")
    print(f"   Stores: {result.stores}")
    print(f"   Categories: {result.categories}")
    print(f"   Products: {result.products}")
    print(f"   Modifier groups: {result.modifier_groups} ({result.modifier_options} options)")
    print("\n🎉 Seed completed")
    return True


if __name__ == "__main__":
    settings = get_settings()
    setup_logging()

    parser = argparse.ArgumentParser(description="Seed a tenant menu")
    parser.add_argument("--file", default=settings.seed_file, help="Seed document (JSON)")
    parser.add_argument("--create-tables", action="store_true", help="Create missing tables first")
    args = parser.parse_args()

    ok = asyncio.run(run_seed(args.file, create_tables=args.create_tables))
    sys.exit(0 if ok else 1)
