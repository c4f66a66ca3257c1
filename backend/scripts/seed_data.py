"""Seed the database with sample taxonomies, lineages and Thai entries."""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from portal.config import settings
from portal.database import Database
import portal.models  # noqa: F401

from portal.models.taxonomy import Taxonomy, Taxon
from portal.models.taxon_entry import TaxonEntry
from portal.utils.helpers import html_to_text, utcnow


def _lineage(db, taxonomy, rows):
    parent = None
    created = []
    for rank, scientific_name, thai_name in rows:
        taxon = Taxon(
            taxonomy_id=taxonomy.id,
            parent_id=parent.id if parent else None,
            rank=rank,
            scientific_name=scientific_name,
            thai_name=thai_name,
            status="accepted",
        )
        db.add(taxon)
        db.flush()
        created.append(taxon)
        parent = taxon
    return created


def _entry(taxon, order_index, **fields):
    fields.setdefault("content_text", html_to_text(fields.get("content_html")))
    return TaxonEntry(
        taxon_id=taxon.id,
        order_index=order_index,
        version=1,
        updated_at=utcnow(),
        updated_by="seed",
        **fields,
    )


def seed(url: str = settings.DATABASE_URL):
    database = Database(url)
    database.create_all()
    try:
        with database.session() as db:
            if db.query(Taxonomy).count() > 0:
                print("Database already seeded. Skipping.")
                return

            plants = Taxonomy(
                title="อนุกรมวิธานพืช",
                domain="plant",
                kingdom="Plantae",
                description="ลำดับชั้นอนุกรมวิธานสำหรับพืช",
                source_url="https://lst.nectec.or.th/encyclopedia/",
            )
            animals = Taxonomy(
                title="อนุกรมวิธานสัตว์",
                domain="animal",
                kingdom="Animalia",
                description="ลำดับชั้นอนุกรมวิธานสำหรับสัตว์",
                source_url="https://lst.nectec.or.th/encyclopedia/",
            )
            db.add_all([plants, animals])
            db.flush()

            *_, rice = _lineage(db, plants, [
                ("KINGDOM", "Plantae", "พืช"),
                ("FAMILY", "Poaceae", "วงศ์หญ้า"),
                ("GENUS", "Oryza", "ข้าว (สกุล)"),
                ("SPECIES", "Oryza sativa", "ข้าวเจ้า/ข้าวปลูก"),
            ])
            banana_family = Taxon(
                taxonomy_id=plants.id,
                parent_id=db.query(Taxon).filter(Taxon.scientific_name == "Plantae").one().id,
                rank="FAMILY",
                scientific_name="Musaceae",
                thai_name="วงศ์กล้วย",
                status="accepted",
            )
            db.add(banana_family)
            db.flush()
            banana = Taxon(
                taxonomy_id=plants.id,
                parent_id=banana_family.id,
                rank="SPECIES",
                scientific_name="Musa × paradisiaca",
                thai_name="กล้วยน้ำว้า",
                status="accepted",
            )
            db.add(banana)
            db.flush()

            *_, tiger = _lineage(db, animals, [
                ("KINGDOM", "Animalia", "สัตว์"),
                ("FAMILY", "Felidae", "วงศ์แมว"),
                ("GENUS", "Panthera", "สกุลเสือใหญ่"),
                ("SPECIES", "Panthera tigris", "เสือโคร่ง"),
            ])

            db.add_all([
                _entry(
                    rice,
                    1,
                    title="ข้าว",
                    slug="oryza-sativa",
                    official_name_th="ข้าว",
                    scientific_name="Oryza sativa L.",
                    genus="Oryza",
                    species="sativa",
                    family="POACEAE",
                    other_names="ข้าวเจ้า, ข้าวเหนียว",
                    short_description="พืชล้มลุกใบเลี้ยงเดี่ยว ธัญพืชหลักของประเทศไทย",
                    content_html="<p><strong>ข้าว</strong> เป็นพืชในวงศ์หญ้า ลำต้นตั้งตรง สูง 0.5-2 เมตร</p>",
                ),
                _entry(
                    banana,
                    1,
                    title="กล้วยน้ำว้า",
                    slug="musa-paradisiaca",
                    official_name_th="กล้วยน้ำว้า",
                    scientific_name="Musa × paradisiaca L.",
                    genus="Musa",
                    family="MUSACEAE",
                    synonyms="Musa sapientum L.",
                    other_names="กล้วยใต้, กล้วยมะลิอ่อง",
                    short_description="ไม้ล้มลุกอายุหลายปี มีลำต้นเทียมจากกาบใบ",
                    content_html=(
                        "<p><strong>กล้วยน้ำว้า</strong> ลำต้นเทียมสูง 3-4 เมตร "
                        "ผลเรียงเป็นหวี <em>เนื้อผลสุกสีขาว</em></p>"
                    ),
                ),
                _entry(
                    banana,
                    2,
                    title="กล้วยน้ำไทย",
                    slug="musa-nam-thai",
                    official_name_th="กล้วยน้ำไทย",
                    genus="Musa",
                    family="MUSACEAE",
                    short_description="กล้วยพื้นเมือง ผลขนาดกลาง เปลือกบาง",
                    content_html="<p>กล้วยน้ำไทยเป็นกล้วยพื้นเมืองของไทย ผลสุกมีกลิ่นหอม</p>",
                ),
                _entry(
                    tiger,
                    1,
                    title="เสือโคร่ง",
                    slug="panthera-tigris",
                    official_name_th="เสือโคร่ง",
                    scientific_name="Panthera tigris (Linnaeus, 1758)",
                    genus="Panthera",
                    species="tigris",
                    family="FELIDAE",
                    short_description="สัตว์กินเนื้อขนาดใหญ่ที่สุดในวงศ์แมว",
                    content_html="<p>เสือโคร่งมีลายพาดกลอนสีดำบนพื้นขนสีส้ม</p>",
                ),
            ])
        print("Database seeded successfully!")
    finally:
        database.close()


if __name__ == "__main__":
    seed()
