"""Test admin taxonomy API: CRUD, การตรวจข้อมูล และการสร้าง taxon"""

import pytest


def _create(client, **overrides):
    payload = {"title": "อนุกรมวิธานพืช", "domain": "plant", "kingdom": "Plantae"}
    payload.update(overrides)
    resp = client.post("/api/admin/taxonomies", json=payload)
    assert resp.status_code == 200, resp.text
    return resp.json()


def test_taxonomy_crud(client):
    created = _create(client, description="พืชมีท่อลำเลียง")
    assert created["taxa_count"] == 0
    taxonomy_id = created["id"]

    fetched = client.get(f"/api/admin/taxonomies/{taxonomy_id}")
    assert fetched.status_code == 200
    assert fetched.json()["title"] == "อนุกรมวิธานพืช"

    updated = client.patch(f"/api/admin/taxonomies/{taxonomy_id}", json={"title": "  พืชในประเทศไทย  "})
    assert updated.status_code == 200
    assert updated.json()["title"] == "พืชในประเทศไทย"
    assert updated.json()["domain"] == "plant"

    deleted = client.delete(f"/api/admin/taxonomies/{taxonomy_id}")
    assert deleted.status_code == 200
    assert client.get(f"/api/admin/taxonomies/{taxonomy_id}").status_code == 404


@pytest.mark.parametrize("overrides", [{"title": "   "}, {"domain": ""}, {"title": None}])
def test_create_taxonomy_requires_title_and_domain(client, overrides):
    payload = {"title": "อนุกรมวิธานพืช", "domain": "plant"}
    payload.update(overrides)
    resp = client.post("/api/admin/taxonomies", json=payload)
    assert resp.status_code == 400


def test_update_rejects_blank_kingdom(client):
    created = _create(client)
    resp = client.patch(f"/api/admin/taxonomies/{created['id']}", json={"kingdom": " "})
    assert resp.status_code == 400
    assert client.get(f"/api/admin/taxonomies/{created['id']}").json()["kingdom"] == "Plantae"


def test_missing_taxonomy_is_not_found(client):
    assert client.get("/api/admin/taxonomies/9999").status_code == 404
    assert client.patch("/api/admin/taxonomies/9999", json={"title": "x"}).status_code == 404
    assert client.delete("/api/admin/taxonomies/9999").status_code == 404
    assert client.get("/api/admin/taxonomies/9999/taxa").status_code == 404


def test_delete_taxonomy_with_taxa_is_conflict(client):
    created = _create(client)
    client.post(f"/api/admin/taxonomies/{created['id']}/taxa", json={"scientific_name": "Oryza sativa"})

    resp = client.delete(f"/api/admin/taxonomies/{created['id']}")

    assert resp.status_code == 409
    assert client.get(f"/api/admin/taxonomies/{created['id']}").json()["taxa_count"] == 1


def test_list_taxonomies_with_search_and_pagination(client):
    for i in range(3):
        _create(client, title=f"พืชกลุ่ม {i}")
    _create(client, title="สัตว์ป่า", domain="animal", kingdom="Animalia")

    page = client.get("/api/admin/taxonomies", params={"page": 1, "page_size": 2}).json()
    assert len(page["items"]) == 2
    assert page["pagination"] == {"page": 1, "page_size": 2, "total": 4, "total_pages": 2}

    animals = client.get("/api/admin/taxonomies", params={"q": "animal"}).json()
    assert [row["title"] for row in animals["items"]] == ["สัตว์ป่า"]


def test_create_taxa_normalizes_rank_and_resolves_parent(client):
    taxonomy_id = _create(client)["id"]
    base = f"/api/admin/taxonomies/{taxonomy_id}/taxa"

    division = client.post(base, json={"scientific_name": "Magnoliophyta", "rank": "division"})
    family = client.post(
        base,
        json={"scientific_name": "Musaceae", "rank": "วงศ์", "parent_scientific_name": "Magnoliophyta"},
    )
    species = client.post(base, json={"scientific_name": "Musa acuminata", "parent_id": family.json()["id"]})

    assert division.json()["rank"] == "PHYLUM"
    assert family.json()["rank"] == "FAMILY"
    assert family.json()["parent_id"] == division.json()["id"]
    assert species.json()["rank"] == "SPECIES"
    assert species.json()["parent_id"] == family.json()["id"]

    names = [row["scientific_name"] for row in client.get(base).json()]
    assert names == ["Magnoliophyta", "Musa acuminata", "Musaceae"]
    assert client.get(f"/api/admin/taxonomies/{taxonomy_id}").json()["taxa_count"] == 3


def test_create_taxon_errors(client):
    taxonomy_id = _create(client)["id"]
    base = f"/api/admin/taxonomies/{taxonomy_id}/taxa"
    assert client.post(base, json={"scientific_name": "Oryza sativa"}).status_code == 200

    assert client.post(base, json={"scientific_name": "Oryza sativa"}).status_code == 409
    assert client.post(base, json={"scientific_name": " "}).status_code == 400
    assert client.post(base, json={"scientific_name": "Oryza glaberrima", "parent_id": 9999}).status_code == 400
    missing_parent = client.post(base, json={"scientific_name": "Zea mays", "parent_scientific_name": "Poaceae"})
    assert missing_parent.status_code == 400
    assert client.post("/api/admin/taxonomies/9999/taxa", json={"scientific_name": "Zea mays"}).status_code == 404
