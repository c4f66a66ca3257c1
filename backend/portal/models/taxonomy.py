"""อนุกรมวิธาน (Taxonomy) และหน่วยอนุกรมวิธาน (Taxon) แบบลำดับชั้น"""

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from portal.database import Base


TAXON_RANKS = (
    "KINGDOM",
    "PHYLUM",
    "CLASS",
    "ORDER",
    "FAMILY",
    "GENUS",
    "SPECIES",
    "SUBSPECIES",
    "VARIETY",
)


class Taxonomy(Base):
    __tablename__ = "taxonomy"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(200), nullable=False)
    domain = Column(String(50), nullable=False)  # plant/animal/...
    kingdom = Column(String(100))
    description = Column(Text)
    source_url = Column(String(500))
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    taxa = relationship("Taxon", back_populates="taxonomy")


class Taxon(Base):
    __tablename__ = "taxon"

    id = Column(Integer, primary_key=True, autoincrement=True)
    taxonomy_id = Column(Integer, ForeignKey("taxonomy.id"), nullable=False)
    parent_id = Column(Integer, ForeignKey("taxon.id"), nullable=True)
    rank = Column(String(20), nullable=False, default="SPECIES")
    scientific_name = Column(String(200), nullable=False)
    thai_name = Column(String(200))
    status = Column(String(30))  # accepted/synonym/...
    created_at = Column(DateTime, server_default=func.now())

    taxonomy = relationship("Taxonomy", back_populates="taxa")
    parent = relationship("Taxon", remote_side=[id])
    entries = relationship("TaxonEntry", back_populates="taxon")

    __table_args__ = (
        UniqueConstraint("taxonomy_id", "scientific_name", name="uq_taxon_taxonomy_name"),
        Index("idx_taxon_parent", "parent_id"),
    )
