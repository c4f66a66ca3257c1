"""ประวัติเวอร์ชันของ TaxonEntry"""

from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime

from portal.schemas.taxon_entry import TaxonEntryFields


class EntryVersionInfo(BaseModel):
    version: int
    is_latest: bool
    changed_at: Optional[datetime] = None
    changed_by: Optional[str] = None


class EntryVersionList(BaseModel):
    entry_id: int
    latest_version: int
    versions: List[EntryVersionInfo]


class EntryVersionOut(TaxonEntryFields):
    entry_id: int
    taxon_id: int
    title: str
    version: int
    is_latest: bool
    is_published: bool
    changed_at: Optional[datetime] = None
    changed_by: Optional[str] = None
