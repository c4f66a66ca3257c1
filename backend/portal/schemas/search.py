"""ผลการค้นหา taxon entry พร้อมฟิลด์ไฮไลต์ (*_marked) และข้อมูลแบ่งหน้า"""

from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime

from portal.schemas.taxonomy import TaxonRef


class Pagination(BaseModel):
    current_page: int
    total_pages: int
    page_size: int
    total: int
    has_prev_page: bool
    has_next_page: bool
    prev_page: Optional[int] = None
    next_page: Optional[int] = None


class TaxonSearchResult(BaseModel):
    id: int
    taxon_id: int
    title: str
    slug: Optional[str] = None
    order_index: Optional[int] = None
    version: int
    updated_at: Optional[datetime] = None
    taxon: Optional[TaxonRef] = None

    official_name_th: Optional[str] = None
    short_description: Optional[str] = None
    content_html: Optional[str] = None
    content_text: Optional[str] = None
    family: Optional[str] = None
    synonyms: Optional[str] = None
    official: Optional[str] = None
    scientific_name: Optional[str] = None
    genus: Optional[str] = None
    species: Optional[str] = None
    other_names: Optional[str] = None
    author: Optional[str] = None
    authors_display: Optional[str] = None
    authors_period: Optional[str] = None

    official_name_th_marked: Optional[str] = None
    title_marked: Optional[str] = None
    short_description_marked: Optional[str] = None
    content_html_marked: Optional[str] = None
    family_marked: Optional[str] = None
    synonyms_marked: Optional[str] = None


class TaxonSearchPage(BaseModel):
    query: str
    results: List[TaxonSearchResult]
    pagination: Pagination
