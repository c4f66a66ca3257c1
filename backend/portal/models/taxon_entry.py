"""บทความสารานุกรมของ taxon และตารางประวัติเวอร์ชันแบบ append-only"""

from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from portal.database import Base


# ฟิลด์เนื้อหาที่แก้ไขได้และถูก snapshot ทุกครั้งก่อนบันทึก
CONTENT_FIELDS = (
    "taxon_id",
    "title",
    "slug",
    "order_index",
    "content_html",
    "content_text",
    "short_description",
    "official_name_th",
    "official",
    "scientific_name",
    "genus",
    "species",
    "family",
    "synonyms",
    "other_names",
    "author",
    "authors_display",
    "authors_period",
    "is_published",
)


class EntryContentMixin:
    title = Column(String(300), nullable=False)
    slug = Column(String(300))
    order_index = Column(Integer)
    content_html = Column(Text)
    content_text = Column(Text)
    short_description = Column(Text)
    official_name_th = Column(String(300))
    official = Column(String(300))
    scientific_name = Column(String(300))
    genus = Column(String(200))
    species = Column(String(200))
    family = Column(String(200))
    synonyms = Column(Text)
    other_names = Column(Text)
    author = Column(String(300))
    authors_display = Column(String(300))
    authors_period = Column(String(100))
    is_published = Column(Boolean, default=True, nullable=False)


class TaxonEntry(EntryContentMixin, Base):
    __tablename__ = "taxon_entry"

    id = Column(Integer, primary_key=True, autoincrement=True)
    taxon_id = Column(Integer, ForeignKey("taxon.id"), nullable=False)
    version = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now())
    updated_by = Column(String(100))  # ผู้บันทึกเวอร์ชันปัจจุบัน

    taxon = relationship("Taxon", back_populates="entries")
    versions = relationship(
        "TaxonEntryVersion",
        back_populates="entry",
        order_by="TaxonEntryVersion.version.desc()",
    )

    __table_args__ = (
        Index("idx_taxon_entry_taxon", "taxon_id", "order_index"),
        Index("idx_taxon_entry_updated", "updated_at"),
    )


class TaxonEntryVersion(EntryContentMixin, Base):
    __tablename__ = "taxon_entry_version"

    id = Column(Integer, primary_key=True, autoincrement=True)
    entry_id = Column(Integer, ForeignKey("taxon_entry.id"), nullable=False)
    version = Column(Integer, nullable=False)  # เวอร์ชันที่ถูกแทนที่
    taxon_id = Column(Integer, nullable=False)
    changed_at = Column(DateTime)  # เวลาที่เวอร์ชันนี้เริ่มเป็นเวอร์ชันปัจจุบัน
    changed_by = Column(String(100))
    superseded_at = Column(DateTime, server_default=func.now())

    entry = relationship("TaxonEntry", back_populates="versions")

    __table_args__ = (
        UniqueConstraint("entry_id", "version", name="uq_taxon_entry_version"),
    )
