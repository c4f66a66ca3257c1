"""สร้าง/อ่าน TaxonEntry การแก้ไขเนื้อหาทั้งหมดต้องผ่าน EntryVersionStore.save"""

import logging
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session, joinedload

from portal.exceptions import NotFoundError, ValidationError
from portal.models.taxonomy import Taxon
from portal.models.taxon_entry import TaxonEntry
from portal.schemas.taxon_entry import TaxonEntryCreate
from portal.utils.helpers import html_to_text, utcnow

logger = logging.getLogger(__name__)


def get_entry(db: Session, entry_id: int) -> TaxonEntry:
    entry = (
        db.query(TaxonEntry)
        .options(joinedload(TaxonEntry.taxon))
        .filter(TaxonEntry.id == entry_id)
        .first()
    )
    if not entry:
        raise NotFoundError(f"ไม่พบรายการ {entry_id}")
    return entry


def derive_content_text(fields: Dict[str, Any]) -> Dict[str, Any]:
    if "content_html" in fields and fields.get("content_text") is None:
        fields["content_text"] = html_to_text(fields["content_html"])
    return fields


def create_entry(
    db: Session,
    taxon_id: int,
    data: TaxonEntryCreate,
    created_by: Optional[str] = None,
) -> TaxonEntry:
    taxon = db.query(Taxon).filter(Taxon.id == taxon_id).first()
    if not taxon:
        raise NotFoundError(f"ไม่พบ taxon {taxon_id}")
    payload = derive_content_text(data.model_dump())
    payload["title"] = (payload.get("title") or "").strip()
    if not payload["title"]:
        raise ValidationError("กรุณาระบุชื่อเรื่อง")
    if not payload.get("scientific_name"):
        payload["scientific_name"] = taxon.scientific_name

    entry = TaxonEntry(
        taxon_id=taxon.id,
        version=1,
        updated_at=utcnow(),
        updated_by=created_by,
        **payload,
    )
    db.add(entry)
    db.commit()
    db.refresh(entry)
    logger.info("[entry] created entry %s under taxon %s", entry.id, taxon.id)
    return entry
