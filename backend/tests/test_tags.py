"""Tag catalogue, entity tag assignment and FRIENDLINESS verification."""

from tahoak.models.tag import EntityTag
from tests.conftest import auth_headers


def test_list_tags_localized(client, seed_tags):
    resp = client.get("/api/tags?locale=es")
    assert resp.status_code == 200
    names = {t["slug"]: t["name"] for t in resp.json()}
    assert names["wifi"] == "Wifi gratis"
    assert names["kid-friendly"] == "Kid-friendly"


def test_list_tags_by_category(client, seed_tags):
    resp = client.get("/api/tags?category=IDENTITY")
    assert [t["slug"] for t in resp.json()] == ["women-owned"]


def test_owner_friendliness_tag_needs_verification(client, seed_entity, seed_tags):
    owner = auth_headers(client, "owner@example.com")
    resp = client.post(f"/api/entities/{seed_entity.id}/tags", json={"tag_id": seed_tags["kid"].id}, headers=owner)
    assert resp.status_code == 201
    assert resp.json()["verified"] is False

    resp = client.post(f"/api/entities/{seed_entity.id}/tags", json={"tag_id": seed_tags["wifi"].id}, headers=owner)
    assert resp.json()["verified"] is True


def test_admin_friendliness_tag_is_verified(client, seed_entity, seed_tags):
    admin = auth_headers(client, "admin@example.com")
    resp = client.post(f"/api/entities/{seed_entity.id}/tags", json={"tag_id": seed_tags["kid"].id}, headers=admin)
    assert resp.json()["verified"] is True


def test_duplicate_assignment_conflicts(client, seed_entity, seed_tags):
    owner = auth_headers(client, "owner@example.com")
    url = f"/api/entities/{seed_entity.id}/tags"
    assert client.post(url, json={"tag_id": seed_tags["wifi"].id}, headers=owner).status_code == 201
    assert client.post(url, json={"tag_id": seed_tags["wifi"].id}, headers=owner).status_code == 409


def test_unknown_tag_is_404(client, seed_entity):
    owner = auth_headers(client, "owner@example.com")
    resp = client.post(f"/api/entities/{seed_entity.id}/tags", json={"tag_id": "ghost"}, headers=owner)
    assert resp.status_code == 404


def test_non_owner_cannot_tag(client, seed_entity, seed_tags):
    user = auth_headers(client, "user@example.com")
    resp = client.post(f"/api/entities/{seed_entity.id}/tags", json={"tag_id": seed_tags["wifi"].id}, headers=user)
    assert resp.status_code == 403


def test_remove_entity_tag(client, db, seed_entity, seed_tags):
    db.add(EntityTag(entity_id=seed_entity.id, tag_id=seed_tags["wifi"].id, verified=True))
    db.commit()
    owner = auth_headers(client, "owner@example.com")

    url = f"/api/entities/{seed_entity.id}/tags?tag_id={seed_tags['wifi'].id}"
    assert client.delete(url, headers=owner).status_code == 200
    assert client.delete(url, headers=owner).status_code == 404
    assert client.get(f"/api/entities/{seed_entity.id}/tags").json() == []


def test_admin_verifies_pending_assignment(client, seed_entity, seed_tags):
    owner = auth_headers(client, "owner@example.com")
    client.post(f"/api/entities/{seed_entity.id}/tags", json={"tag_id": seed_tags["kid"].id}, headers=owner)

    admin = auth_headers(client, "admin@example.com")
    pending = client.get("/api/admin/entity-tags?verified=false", headers=admin).json()
    assert len(pending) == 1
    assert pending[0]["entity_name"] == "Oak Park Coffee"

    resp = client.put(f"/api/admin/entity-tags/{pending[0]['id']}/verify", headers=admin)
    assert resp.status_code == 200
    assert resp.json()["verified"] is True
    assert client.get("/api/admin/entity-tags?verified=false", headers=admin).json() == []

    assert client.put("/api/admin/entity-tags/ghost/verify", headers=admin).status_code == 404


def test_admin_creates_and_deletes_tag(client, db, seed_entity, seed_tags):
    admin = auth_headers(client, "admin@example.com")
    resp = client.post("/api/admin/tags", json={"name": "Dog Friendly!", "category": "FRIENDLINESS"}, headers=admin)
    assert resp.status_code == 201
    assert resp.json()["slug"] == "dog-friendly"

    dup = client.post("/api/admin/tags", json={"name": "dog friendly", "category": "AMENITY"}, headers=admin)
    assert dup.status_code == 409

    db.add(EntityTag(entity_id=seed_entity.id, tag_id=seed_tags["wifi"].id, verified=True))
    db.commit()
    resp = client.delete(f"/api/admin/tags/{seed_tags['wifi'].id}", headers=admin)
    assert resp.status_code == 200
    assert resp.json()["removed_assignments"] == 1
    db.expire_all()
    assert db.query(EntityTag).count() == 0


def test_tag_admin_requires_admin(client, seed_users, seed_tags):
    owner = auth_headers(client, "owner@example.com")
    assert client.post("/api/admin/tags", json={"name": "X", "category": "AMENITY"}, headers=owner).status_code == 403


def test_tag_search_is_literal(client, seed_tags):
    assert client.get("/api/tags?search=_").json() == []
    assert [t["slug"] for t in client.get("/api/tags?search=wi").json()] == ["wifi"]
