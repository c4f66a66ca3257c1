"""Taxonomy/Taxon request-response schema"""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime


class TaxonomyCreate(BaseModel):
    title: str = Field(..., max_length=200)
    domain: str = Field(..., max_length=50)
    kingdom: Optional[str] = None
    description: Optional[str] = None
    source_url: Optional[str] = None


class TaxonomyUpdate(BaseModel):
    title: Optional[str] = Field(None, max_length=200)
    domain: Optional[str] = Field(None, max_length=50)
    kingdom: Optional[str] = None
    description: Optional[str] = None
    source_url: Optional[str] = None


class TaxonomyOut(BaseModel):
    id: int
    title: str
    domain: str
    kingdom: Optional[str] = None
    description: Optional[str] = None
    source_url: Optional[str] = None
    taxa_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class TaxonomyListPagination(BaseModel):
    page: int
    page_size: int
    total: int
    total_pages: int


class TaxonomyList(BaseModel):
    items: List[TaxonomyOut]
    pagination: TaxonomyListPagination


class TaxonCreate(BaseModel):
    scientific_name: str = Field(..., max_length=200)
    rank: Optional[str] = None
    thai_name: Optional[str] = None
    status: Optional[str] = None
    parent_id: Optional[int] = None
    parent_scientific_name: Optional[str] = None


class TaxonOut(BaseModel):
    id: int
    taxonomy_id: int
    parent_id: Optional[int] = None
    rank: str
    scientific_name: str
    thai_name: Optional[str] = None
    status: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class TaxonRef(BaseModel):
    id: int
    scientific_name: str

    model_config = {"from_attributes": True}
