"""บันทึก TaxonEntry แบบมีเวอร์ชันและอ่านเวอร์ชันย้อนหลัง

ทุกการบันทึกจะ snapshot สถานะก่อนแก้ลง ``taxon_entry_version`` แล้วจึงอัปเดตแถวจริง
และเพิ่ม ``version`` ทีละ 1 ภายใน transaction เดียว ผู้บันทึกต้องส่งเวอร์ชันฐาน
(``base_version``) ที่ตนเปิดมาแก้ ถ้าไม่ใช่เวอร์ชันล่าสุดจะถูกปฏิเสธด้วย
:class:`~portal.exceptions.VersionConflictError` โดยไม่มีการเขียนใด ๆ
"""

import logging
from typing import Any, Dict, List, Optional, Union

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from portal.exceptions import NotFoundError, ValidationError, VersionConflictError
from portal.models.taxonomy import Taxon
from portal.models.taxon_entry import CONTENT_FIELDS, TaxonEntry, TaxonEntryVersion
from portal.services.entry_service import derive_content_text, get_entry
from portal.utils.helpers import utcnow

logger = logging.getLogger(__name__)

LATEST = "latest"

VersionRef = Union[int, str]


def parse_version_ref(raw: str) -> VersionRef:
    value = (raw or "").strip().lower()
    if value == LATEST:
        return LATEST
    try:
        number = int(value)
    except ValueError:
        raise ValidationError(f"เลขเวอร์ชันไม่ถูกต้อง: {raw}")
    if number < 1:
        raise ValidationError(f"เลขเวอร์ชันไม่ถูกต้อง: {raw}")
    return number


def _content_of(source: Any) -> Dict[str, Any]:
    return {field: getattr(source, field) for field in CONTENT_FIELDS}


class EntryVersionStore:
    def __init__(self, db: Session):
        self.db = db

    def save(
        self,
        entry_id: int,
        fields: Dict[str, Any],
        base_version: int,
        changed_by: Optional[str] = None,
    ) -> TaxonEntry:
        entry = get_entry(self.db, entry_id)
        updates = self._validated_updates(dict(fields))
        if entry.version != base_version:
            logger.info(
                "[version] rejected save of entry %s: base %s, live %s",
                entry_id,
                base_version,
                entry.version,
            )
            raise VersionConflictError(entry_id, base_version, entry.version)

        now = utcnow()
        snapshot = TaxonEntryVersion(
            entry_id=entry.id,
            version=entry.version,
            changed_at=entry.updated_at or entry.created_at,
            changed_by=entry.updated_by,
            superseded_at=now,
            **_content_of(entry),
        )
        updates.update(version=TaxonEntry.version + 1, updated_at=now, updated_by=changed_by)
        try:
            self.db.add(snapshot)
            self.db.flush()
            # อัปเดตแบบมีเงื่อนไข: ถ้าผู้อื่นบันทึกไปก่อน จะไม่มีแถวใดตรง
            matched = (
                self.db.query(TaxonEntry)
                .filter(TaxonEntry.id == entry_id, TaxonEntry.version == base_version)
                .update(updates, synchronize_session=False)
            )
            if matched != 1:
                raise VersionConflictError(entry_id, base_version)
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            logger.info("[version] concurrent save lost race on entry %s at base %s", entry_id, base_version)
            raise VersionConflictError(entry_id, base_version)
        except VersionConflictError:
            self.db.rollback()
            logger.info("[version] concurrent save lost race on entry %s at base %s", entry_id, base_version)
            raise

        self.db.refresh(entry)
        logger.info("[version] saved entry %s: version %s -> %s", entry_id, base_version, entry.version)
        return entry

    def get_version(self, entry_id: int, version: VersionRef = LATEST) -> Dict[str, Any]:
        entry = get_entry(self.db, entry_id)
        if version == LATEST or version == entry.version:
            return self._version_response(
                entry,
                entry_id=entry.id,
                version=entry.version,
                is_latest=True,
                changed_at=entry.updated_at or entry.created_at,
                changed_by=entry.updated_by,
            )

        row = (
            self.db.query(TaxonEntryVersion)
            .filter(TaxonEntryVersion.entry_id == entry_id, TaxonEntryVersion.version == version)
            .first()
        )
        if not row:
            raise NotFoundError(f"ไม่พบเวอร์ชัน {version} ของรายการ {entry_id}")
        return self._version_response(
            row,
            entry_id=entry.id,
            version=row.version,
            is_latest=False,
            changed_at=row.changed_at,
            changed_by=row.changed_by,
        )

    def list_versions(self, entry_id: int) -> Dict[str, Any]:
        entry = get_entry(self.db, entry_id)
        rows = (
            self.db.query(TaxonEntryVersion)
            .filter(TaxonEntryVersion.entry_id == entry_id)
            .order_by(TaxonEntryVersion.version.desc())
            .all()
        )
        versions: List[Dict[str, Any]] = [
            {
                "version": entry.version,
                "is_latest": True,
                "changed_at": entry.updated_at or entry.created_at,
                "changed_by": entry.updated_by,
            }
        ]
        versions.extend(
            {
                "version": row.version,
                "is_latest": False,
                "changed_at": row.changed_at,
                "changed_by": row.changed_by,
            }
            for row in rows
        )
        return {"entry_id": entry.id, "latest_version": entry.version, "versions": versions}

    def _validated_updates(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        updates = {k: v for k, v in fields.items() if k in CONTENT_FIELDS}
        if not updates:
            raise ValidationError("ไม่มีฟิลด์ที่แก้ไขได้ในคำขอ")

        if "title" in updates:
            title = (updates["title"] or "").strip()
            if not title:
                raise ValidationError("กรุณาระบุชื่อเรื่อง")
            updates["title"] = title

        if "is_published" in updates and updates["is_published"] is None:
            del updates["is_published"]

        if "taxon_id" in updates:
            taxon_id = updates["taxon_id"]
            if taxon_id is None or not self.db.query(Taxon.id).filter(Taxon.id == taxon_id).first():
                raise ValidationError(f"ไม่พบ taxon {taxon_id}")

        if not updates:
            raise ValidationError("ไม่มีฟิลด์ที่แก้ไขได้ในคำขอ")
        return derive_content_text(updates)

    @staticmethod
    def _version_response(source: Any, **extra: Any) -> Dict[str, Any]:
        payload = _content_of(source)
        payload.update(extra)
        return payload
