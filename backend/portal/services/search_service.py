"""ค้นหา taxon entry แบบ substring ในฐานข้อมูล แบ่งหน้า แล้วไฮไลต์ฟิลด์ที่แสดงผล"""

from typing import Any, Dict, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session, contains_eager

from portal.config import settings
from portal.exceptions import ValidationError
from portal.models.taxonomy import Taxon
from portal.models.taxon_entry import TaxonEntry
from portal.services.highlight_service import SearchHighlighter
from portal.utils.helpers import normalize_whitespace, total_pages

SEARCH_COLUMNS = (
    TaxonEntry.title,
    TaxonEntry.official_name_th,
    TaxonEntry.official,
    TaxonEntry.scientific_name,
    TaxonEntry.genus,
    TaxonEntry.species,
    TaxonEntry.family,
    TaxonEntry.synonyms,
    TaxonEntry.other_names,
    TaxonEntry.author,
    TaxonEntry.authors_display,
    TaxonEntry.short_description,
    TaxonEntry.content_text,
    TaxonEntry.content_html,
    Taxon.scientific_name,
)

RESULT_FIELDS = (
    "id",
    "taxon_id",
    "title",
    "slug",
    "order_index",
    "version",
    "updated_at",
    "official_name_th",
    "short_description",
    "content_html",
    "content_text",
    "family",
    "synonyms",
    "official",
    "scientific_name",
    "genus",
    "species",
    "other_names",
    "author",
    "authors_display",
    "authors_period",
)


def _result_row(entry: TaxonEntry) -> Dict[str, Any]:
    row = {field: getattr(entry, field) for field in RESULT_FIELDS}
    row["taxon"] = (
        {"id": entry.taxon.id, "scientific_name": entry.taxon.scientific_name}
        if entry.taxon
        else None
    )
    return row


def build_pagination(page: int, page_size: int, total: int) -> Dict[str, Any]:
    pages = total_pages(total, page_size)
    return {
        "current_page": page,
        "total_pages": pages,
        "page_size": page_size,
        "total": total,
        "has_prev_page": page > 1,
        "has_next_page": page < pages,
        "prev_page": page - 1 if page > 1 else None,
        "next_page": page + 1 if page < pages else None,
    }


def search_entries(
    db: Session,
    *,
    q: Optional[str] = None,
    page: int = 1,
    page_size: Optional[int] = None,
    taxonomy_id: Optional[int] = None,
    taxon_id: Optional[int] = None,
    include_unpublished: bool = False,
    highlighter: Optional[SearchHighlighter] = None,
) -> Dict[str, Any]:
    if page < 1:
        raise ValidationError("หมายเลขหน้าต้องมากกว่าหรือเท่ากับ 1")
    if page_size is None:
        page_size = settings.default_page_size()
    if page_size not in settings.SEARCH_PAGE_SIZES:
        allowed = ", ".join(str(size) for size in settings.SEARCH_PAGE_SIZES)
        raise ValidationError(f"จำนวนต่อหน้าต้องเป็นหนึ่งใน {allowed}")

    query_text = normalize_whitespace(q)
    query = db.query(TaxonEntry).outerjoin(Taxon, TaxonEntry.taxon_id == Taxon.id)
    if taxonomy_id:
        query = query.filter(Taxon.taxonomy_id == taxonomy_id)
    if taxon_id:
        query = query.filter(TaxonEntry.taxon_id == taxon_id)
    if not include_unpublished:
        query = query.filter(TaxonEntry.is_published == True)  # noqa: E712
    if query_text:
        query = query.filter(or_(*(column.icontains(query_text, autoescape=True) for column in SEARCH_COLUMNS)))

    total = query.count()
    if query_text:
        query = query.order_by(TaxonEntry.updated_at.desc(), TaxonEntry.id.desc())
    else:
        query = query.order_by(TaxonEntry.order_index.asc(), TaxonEntry.id.asc())
    entries = (
        query.options(contains_eager(TaxonEntry.taxon))
        .offset((page - 1) * page_size)
        .limit(page_size)
        .all()
    )

    highlighter = highlighter or SearchHighlighter()
    results = highlighter.decorate_all([_result_row(entry) for entry in entries], query_text)
    return {
        "query": query_text,
        "results": results,
        "pagination": build_pagination(page, page_size, total),
    }
