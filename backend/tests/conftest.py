import pytest
from fastapi.testclient import TestClient
from portal.database import Database
from portal.main import create_app
from portal.models.taxonomy import Taxonomy, Taxon
from portal.models.taxon_entry import TaxonEntry
from portal.utils.helpers import html_to_text, utcnow


@pytest.fixture
def database(tmp_path):
    database = Database(f"sqlite:///{tmp_path / 'test_portal.db'}")
    database.create_all()
    yield database
    database.drop_all()
    database.close()


@pytest.fixture
def db(database):
    db = database.SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client(database):
    app = create_app(database=database)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def seed_taxonomy(db):
    taxonomy = Taxonomy(title="อนุกรมวิธานพืช", domain="plant", kingdom="Plantae")
    db.add(taxonomy)
    db.commit()
    db.refresh(taxonomy)
    return taxonomy


@pytest.fixture
def seed_taxon(db, seed_taxonomy):
    family = Taxon(taxonomy_id=seed_taxonomy.id, rank="FAMILY", scientific_name="Musaceae", thai_name="วงศ์กล้วย")
    db.add(family)
    db.flush()
    taxon = Taxon(
        taxonomy_id=seed_taxonomy.id,
        parent_id=family.id,
        rank="SPECIES",
        scientific_name="Musa × paradisiaca",
        thai_name="กล้วยน้ำว้า",
    )
    db.add(taxon)
    db.commit()
    db.refresh(taxon)
    return taxon


@pytest.fixture
def make_entry(db, seed_taxon):
    def _make(**fields):
        fields.setdefault("title", "กล้วยน้ำไทย")
        fields.setdefault("taxon_id", seed_taxon.id)
        if "content_html" in fields:
            fields.setdefault("content_text", html_to_text(fields["content_html"]))
        entry = TaxonEntry(version=1, updated_at=utcnow(), **fields)
        db.add(entry)
        db.commit()
        db.refresh(entry)
        return entry
    return _make
