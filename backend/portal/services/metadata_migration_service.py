"""Migration ครั้งเดียว: เติมคอลัมน์ metadata ที่ว่างของ taxon_entry จาก content_html รุ่นเก่า

ทุกการแก้ไขผ่าน EntryVersionStore จึงได้ snapshot และเลขเวอร์ชันใหม่เหมือนการแก้จากหน้าเว็บ
"""

import logging
from typing import Dict

from portal.database import Database
from portal.exceptions import VersionConflictError
from portal.models.taxon_entry import TaxonEntry
from portal.services.version_service import EntryVersionStore
from portal.utils.helpers import html_to_text
from portal.utils.legacy_metadata import extract_metadata

logger = logging.getLogger(__name__)

MIGRATION_USER = "metadata-migration"


def pending_updates(entry: TaxonEntry) -> Dict[str, str]:
    updates = {
        field: value
        for field, value in extract_metadata(entry.content_html).items()
        if not getattr(entry, field)
    }
    if entry.content_html and not entry.content_text:
        updates["content_text"] = html_to_text(entry.content_html)
    return updates


def migrate_entry_metadata(database: Database, dry_run: bool = False) -> Dict[str, int]:
    stats = {"scanned": 0, "pending": 0, "updated": 0, "conflicts": 0}
    with database.session() as db:
        targets = []
        for entry in db.query(TaxonEntry).order_by(TaxonEntry.id.asc()).all():
            stats["scanned"] += 1
            updates = pending_updates(entry)
            if updates:
                targets.append((entry.id, entry.version, updates))
    stats["pending"] = len(targets)

    for entry_id, version, updates in targets:
        if dry_run:
            logger.info("[migration] entry %s would set %s", entry_id, ", ".join(sorted(updates)))
            continue
        with database.session() as db:
            try:
                EntryVersionStore(db).save(entry_id, updates, base_version=version, changed_by=MIGRATION_USER)
            except VersionConflictError:
                stats["conflicts"] += 1
                logger.warning("[migration] entry %s changed during migration, skipped", entry_id)
                continue
        stats["updated"] += 1
        logger.info("[migration] entry %s set %s", entry_id, ", ".join(sorted(updates)))
    return stats
