"""API ค้นหาและแก้ไขรายการสารานุกรม taxon แบบมีเวอร์ชัน"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional
from portal.database import get_db
from portal.schemas.search import TaxonSearchPage
from portal.schemas.taxon_entry import TaxonEntryCreate, TaxonEntryOut, TaxonEntrySave
from portal.schemas.version import EntryVersionList, EntryVersionOut
from portal.services import entry_service, search_service
from portal.services.version_service import EntryVersionStore, parse_version_ref

router = APIRouter(prefix="/api/taxonomy", tags=["taxonomy"])


@router.get("/search", response_model=TaxonSearchPage)
def search(
    q: Optional[str] = None,
    page: int = Query(1, ge=1),
    page_size: Optional[int] = None,
    taxonomy_id: Optional[int] = Query(None, ge=1),
    taxon_id: Optional[int] = Query(None, ge=1),
    include_unpublished: bool = False,
    db: Session = Depends(get_db),
):
    return search_service.search_entries(
        db,
        q=q,
        page=page,
        page_size=page_size,
        taxonomy_id=taxonomy_id,
        taxon_id=taxon_id,
        include_unpublished=include_unpublished,
    )


@router.post("/taxa/{taxon_id}/entries", response_model=TaxonEntryOut)
def create_entry(
    taxon_id: int,
    data: TaxonEntryCreate,
    created_by: Optional[str] = Query(None, max_length=100),
    db: Session = Depends(get_db),
):
    entry = entry_service.create_entry(db, taxon_id, data, created_by=created_by)
    return entry_service.get_entry(db, entry.id)


@router.get("/entries/{entry_id}", response_model=TaxonEntryOut)
def get_entry(entry_id: int, db: Session = Depends(get_db)):
    return entry_service.get_entry(db, entry_id)


@router.put("/entries/{entry_id}", response_model=TaxonEntryOut)
def save_entry(entry_id: int, data: TaxonEntrySave, db: Session = Depends(get_db)):
    EntryVersionStore(db).save(
        entry_id,
        data.editable_fields(),
        base_version=data.base_version,
        changed_by=data.changed_by,
    )
    return entry_service.get_entry(db, entry_id)


@router.get("/entries/{entry_id}/versions", response_model=EntryVersionList)
def list_entry_versions(entry_id: int, db: Session = Depends(get_db)):
    return EntryVersionStore(db).list_versions(entry_id)


@router.get("/entries/{entry_id}/versions/{version}", response_model=EntryVersionOut)
def get_entry_version(entry_id: int, version: str, db: Session = Depends(get_db)):
    return EntryVersionStore(db).get_version(entry_id, parse_version_ref(version))
