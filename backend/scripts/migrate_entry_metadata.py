"""taxon_entry metadata migration: เติม genus/species/family/... ที่ว่างจากตารางใน content_html"""

import argparse
import logging
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from portal.config import settings  # noqa: E402
from portal.database import Database  # noqa: E402
import portal.models  # noqa: E402,F401
from portal.services.metadata_migration_service import migrate_entry_metadata  # noqa: E402


def migrate(url: str, dry_run: bool = False):
    database = Database(url)
    try:
        stats = migrate_entry_metadata(database, dry_run=dry_run)
    finally:
        database.close()
    print(
        f"done. scanned={stats['scanned']} pending={stats['pending']} "
        f"updated={stats['updated']} conflicts={stats['conflicts']}"
    )


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--dry-run", action="store_true")
    parser.add_argument("--database-url", default=settings.DATABASE_URL)
    args = parser.parse_args()
    logging.basicConfig(level=settings.LOG_LEVEL.upper(), format="%(levelname)s %(message)s")
    migrate(args.database_url, dry_run=args.dry_run)
