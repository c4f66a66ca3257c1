"""TaxonEntry request-response schema"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from portal.schemas.taxonomy import TaxonRef


class TaxonEntryFields(BaseModel):
    title: Optional[str] = Field(None, max_length=300)
    slug: Optional[str] = Field(None, max_length=300)
    order_index: Optional[int] = None
    content_html: Optional[str] = None
    content_text: Optional[str] = None
    short_description: Optional[str] = None
    official_name_th: Optional[str] = Field(None, max_length=300)
    official: Optional[str] = Field(None, max_length=300)
    scientific_name: Optional[str] = Field(None, max_length=300)
    genus: Optional[str] = Field(None, max_length=200)
    species: Optional[str] = Field(None, max_length=200)
    family: Optional[str] = Field(None, max_length=200)
    synonyms: Optional[str] = None
    other_names: Optional[str] = None
    author: Optional[str] = Field(None, max_length=300)
    authors_display: Optional[str] = Field(None, max_length=300)
    authors_period: Optional[str] = Field(None, max_length=100)


class TaxonEntryCreate(TaxonEntryFields):
    title: str = Field(..., max_length=300)
    is_published: bool = True


class TaxonEntrySave(TaxonEntryFields):
    """บันทึกแบบมีเวอร์ชัน: ``base_version`` คือเวอร์ชันที่ผู้แก้ไขเปิดมาแก้"""

    base_version: int = Field(..., ge=1)
    taxon_id: Optional[int] = None
    is_published: Optional[bool] = None
    changed_by: Optional[str] = Field(None, max_length=100)

    def editable_fields(self) -> dict:
        return self.model_dump(exclude_unset=True, exclude={"base_version", "changed_by"})


class TaxonEntryOut(TaxonEntryFields):
    id: int
    taxon_id: int
    title: str
    version: int
    is_published: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    taxon: Optional[TaxonRef] = None

    model_config = {"from_attributes": True}
