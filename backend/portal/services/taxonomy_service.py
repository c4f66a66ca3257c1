"""จัดการ Taxonomy และ Taxon สำหรับหน้าผู้ดูแล"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from portal.config import settings
from portal.exceptions import ConflictError, NotFoundError, ValidationError
from portal.models.taxonomy import TAXON_RANKS, Taxon, Taxonomy
from portal.schemas.taxonomy import TaxonCreate, TaxonomyCreate, TaxonomyUpdate
from portal.utils.helpers import total_pages

logger = logging.getLogger(__name__)

# ชื่อลำดับชั้นภาษาไทย/คำพ้องที่พบในข้อมูลนำเข้า
RANK_ALIASES = {
    "DIVISION": "PHYLUM",
    "อาณาจักร": "KINGDOM",
    "ไฟลัม": "PHYLUM",
    "หมวด": "PHYLUM",
    "ชั้น": "CLASS",
    "อันดับ": "ORDER",
    "วงศ์": "FAMILY",
    "สกุล": "GENUS",
    "ชนิด": "SPECIES",
    "ชนิดย่อย": "SUBSPECIES",
    "พันธุ์": "VARIETY",
}


def normalize_rank(value: Optional[str]) -> str:
    if not value:
        return "SPECIES"
    key = value.strip().upper()
    if key in TAXON_RANKS:
        return key
    return RANK_ALIASES.get(key, RANK_ALIASES.get(value.strip(), "SPECIES"))


def _required(value: Optional[str], message: str) -> str:
    text = (value or "").strip()
    if not text:
        raise ValidationError(message)
    return text


def _taxonomy_response(row: Taxonomy, taxa_count: int) -> Dict[str, Any]:
    return {
        "id": row.id,
        "title": row.title,
        "domain": row.domain,
        "kingdom": row.kingdom,
        "description": row.description,
        "source_url": row.source_url,
        "taxa_count": taxa_count,
        "created_at": row.created_at,
        "updated_at": row.updated_at,
    }


def _count_taxa(db: Session, taxonomy_id: int) -> int:
    return db.query(func.count(Taxon.id)).filter(Taxon.taxonomy_id == taxonomy_id).scalar() or 0


def _get_taxonomy(db: Session, taxonomy_id: int) -> Taxonomy:
    row = db.query(Taxonomy).filter(Taxonomy.id == taxonomy_id).first()
    if not row:
        raise NotFoundError("ไม่พบข้อมูลอนุกรมวิธาน")
    return row


def list_taxonomies(db: Session, q: Optional[str] = None, page: int = 1, page_size: int = 10) -> Dict[str, Any]:
    page = max(1, page)
    page_size = min(settings.ADMIN_MAX_PAGE_SIZE, max(1, page_size))
    query = db.query(Taxonomy)
    q = (q or "").strip()
    if q:
        query = query.filter(or_(Taxonomy.title.icontains(q, autoescape=True), Taxonomy.domain.icontains(q, autoescape=True)))
    total = query.count()
    rows = (
        query.order_by(Taxonomy.updated_at.desc(), Taxonomy.id.asc())
        .offset((page - 1) * page_size)
        .limit(page_size)
        .all()
    )
    counts = dict(
        db.query(Taxon.taxonomy_id, func.count(Taxon.id))
        .filter(Taxon.taxonomy_id.in_([row.id for row in rows] or [0]))
        .group_by(Taxon.taxonomy_id)
        .all()
    )
    return {
        "items": [_taxonomy_response(row, counts.get(row.id, 0)) for row in rows],
        "pagination": {
            "page": page,
            "page_size": page_size,
            "total": total,
            "total_pages": total_pages(total, page_size),
        },
    }


def get_taxonomy(db: Session, taxonomy_id: int) -> Dict[str, Any]:
    row = _get_taxonomy(db, taxonomy_id)
    return _taxonomy_response(row, _count_taxa(db, row.id))


def create_taxonomy(db: Session, data: TaxonomyCreate) -> Dict[str, Any]:
    row = Taxonomy(
        title=_required(data.title, "กรุณาระบุชื่อ"),
        domain=_required(data.domain, "กรุณาระบุโดเมน"),
        kingdom=(data.kingdom or "").strip() or None,
        description=data.description,
        source_url=data.source_url,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    logger.info("[taxonomy] created taxonomy %s (%s)", row.id, row.domain)
    return _taxonomy_response(row, 0)


def update_taxonomy(db: Session, taxonomy_id: int, data: TaxonomyUpdate) -> Dict[str, Any]:
    row = _get_taxonomy(db, taxonomy_id)
    payload = data.model_dump(exclude_unset=True)
    if "title" in payload:
        row.title = _required(payload["title"], "กรุณาระบุชื่อ")
    if "domain" in payload:
        row.domain = _required(payload["domain"], "กรุณาระบุโดเมน")
    if "kingdom" in payload:
        row.kingdom = _required(payload["kingdom"], "กรุณาระบุราชอาณาจักร (Kingdom)")
    for key in ("description", "source_url"):
        if key in payload:
            setattr(row, key, payload[key])
    db.commit()
    db.refresh(row)
    return _taxonomy_response(row, _count_taxa(db, row.id))


def delete_taxonomy(db: Session, taxonomy_id: int) -> None:
    row = _get_taxonomy(db, taxonomy_id)
    if _count_taxa(db, row.id):
        raise ConflictError("ลบไม่สำเร็จ มีข้อมูล taxon ที่เกี่ยวข้องอยู่")
    db.delete(row)
    db.commit()
    logger.info("[taxonomy] deleted taxonomy %s", taxonomy_id)


def list_taxa(db: Session, taxonomy_id: int) -> List[Taxon]:
    _get_taxonomy(db, taxonomy_id)
    return (
        db.query(Taxon)
        .filter(Taxon.taxonomy_id == taxonomy_id)
        .order_by(Taxon.scientific_name.asc(), Taxon.id.asc())
        .all()
    )


def create_taxon(db: Session, taxonomy_id: int, data: TaxonCreate) -> Taxon:
    _get_taxonomy(db, taxonomy_id)
    scientific_name = _required(data.scientific_name, "กรุณาระบุชื่อวิทยาศาสตร์")

    parent_id = data.parent_id
    if parent_id is None and data.parent_scientific_name:
        parent = (
            db.query(Taxon)
            .filter(Taxon.taxonomy_id == taxonomy_id, Taxon.scientific_name == data.parent_scientific_name.strip())
            .first()
        )
        if not parent:
            raise ValidationError(f"ไม่พบ taxon แม่: {data.parent_scientific_name}")
        parent_id = parent.id
    elif parent_id is not None:
        parent = db.query(Taxon).filter(Taxon.id == parent_id, Taxon.taxonomy_id == taxonomy_id).first()
        if not parent:
            raise ValidationError(f"ไม่พบ taxon แม่: {parent_id}")

    existing = (
        db.query(Taxon.id)
        .filter(Taxon.taxonomy_id == taxonomy_id, Taxon.scientific_name == scientific_name)
        .first()
    )
    if existing:
        raise ConflictError(f"มี taxon ชื่อ {scientific_name} ในอนุกรมวิธานนี้แล้ว")

    row = Taxon(
        taxonomy_id=taxonomy_id,
        parent_id=parent_id,
        rank=normalize_rank(data.rank),
        scientific_name=scientific_name,
        thai_name=data.thai_name,
        status=data.status,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    return row
