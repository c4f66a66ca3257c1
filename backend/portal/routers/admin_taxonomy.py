"""API ผู้ดูแลสำหรับจัดการอนุกรมวิธานและ taxon"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from portal.database import get_db
from portal.schemas.taxonomy import TaxonCreate, TaxonOut, TaxonomyCreate, TaxonomyList, TaxonomyOut, TaxonomyUpdate
from portal.services import taxonomy_service

router = APIRouter(prefix="/api/admin/taxonomies", tags=["admin-taxonomy"])


@router.get("", response_model=TaxonomyList)
def list_taxonomies(
    q: Optional[str] = None,
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1),
    db: Session = Depends(get_db),
):
    return taxonomy_service.list_taxonomies(db, q=q, page=page, page_size=page_size)


@router.post("", response_model=TaxonomyOut)
def create_taxonomy(data: TaxonomyCreate, db: Session = Depends(get_db)):
    return taxonomy_service.create_taxonomy(db, data)


@router.get("/{taxonomy_id}", response_model=TaxonomyOut)
def get_taxonomy(taxonomy_id: int, db: Session = Depends(get_db)):
    return taxonomy_service.get_taxonomy(db, taxonomy_id)


@router.patch("/{taxonomy_id}", response_model=TaxonomyOut)
def update_taxonomy(taxonomy_id: int, data: TaxonomyUpdate, db: Session = Depends(get_db)):
    return taxonomy_service.update_taxonomy(db, taxonomy_id, data)


@router.delete("/{taxonomy_id}")
def delete_taxonomy(taxonomy_id: int, db: Session = Depends(get_db)):
    taxonomy_service.delete_taxonomy(db, taxonomy_id)
    return {"message": "ลบเรียบร้อยแล้ว"}


@router.get("/{taxonomy_id}/taxa", response_model=List[TaxonOut])
def list_taxa(taxonomy_id: int, db: Session = Depends(get_db)):
    return taxonomy_service.list_taxa(db, taxonomy_id)


@router.post("/{taxonomy_id}/taxa", response_model=TaxonOut)
def create_taxon(taxonomy_id: int, data: TaxonCreate, db: Session = Depends(get_db)):
    return taxonomy_service.create_taxon(db, taxonomy_id, data)
