"""Owner-submitted changes, the admin moderation queue and approval side effects."""

from datetime import datetime

from tahoak.models.entity import Entity
from tahoak.models.pending_change import PendingChange
from tahoak.models.tag import EntityTag
from tests.conftest import auth_headers


def _queue(db, entity, change_type, new_value, submitted_by=None, created_at=None):
    change = PendingChange(
        entity_id=entity.id,
        change_type=change_type,
        new_value=new_value,
        submitted_by=submitted_by,
        status="PENDING",
        created_at=created_at or datetime(2024, 1, 1),
    )
    db.add(change)
    db.commit()
    db.refresh(change)
    return change


def test_owner_submits_description_change_and_admin_approves(client, db, seed_entity):
    owner = auth_headers(client, "owner@example.com")
    resp = client.post(
        f"/api/entities/{seed_entity.id}/submit-change",
        json={"change_type": "UPDATE_ENTITY", "new_value": {"description": "New text"}},
        headers=owner,
    )
    assert resp.status_code == 201, resp.text
    change = resp.json()
    assert change["status"] == "PENDING"
    assert change["new_value"] == {"description": "New text"}

    # nothing is applied before review
    public = client.get(f"/api/entities/{seed_entity.id}").json()
    assert public["description"] == "Old text"

    admin = auth_headers(client, "admin@example.com")
    resp = client.put(f"/api/admin/pending-changes/{change['id']}", json={"action": "APPROVE"}, headers=admin)
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["status"] == "APPROVED"
    assert body["reviewed_by"] is not None
    assert body["reviewed_at"] is not None

    public = client.get(f"/api/entities/{seed_entity.id}").json()
    assert public["description"] == "New text"


def test_reject_leaves_entity_untouched(client, db, seed_entity):
    change = _queue(db, seed_entity, "UPDATE_ENTITY", {"description": "Spam"})
    admin = auth_headers(client, "admin@example.com")

    resp = client.put(
        f"/api/admin/pending-changes/{change.id}",
        json={"action": "REJECT", "notes": "not accurate"},
        headers=admin,
    )
    assert resp.status_code == 200
    assert resp.json()["status"] == "REJECTED"
    assert resp.json()["notes"] == "not accurate"

    db.expire_all()
    assert db.query(Entity).filter(Entity.id == seed_entity.id).first().description == "Old text"


def test_second_review_is_conflict_and_keeps_first_decision(client, db, seed_entity, seed_users):
    change = _queue(db, seed_entity, "UPDATE_ENTITY", {"description": "First"})
    admin = auth_headers(client, "admin@example.com")

    first = client.put(f"/api/admin/pending-changes/{change.id}", json={"action": "APPROVE"}, headers=admin)
    assert first.status_code == 200
    reviewed_at = first.json()["reviewed_at"]

    second = client.put(
        f"/api/admin/pending-changes/{change.id}",
        json={"action": "REJECT", "notes": "changed my mind"},
        headers=admin,
    )
    assert second.status_code == 409

    db.expire_all()
    stored = db.query(PendingChange).filter(PendingChange.id == change.id).first()
    assert stored.status == "APPROVED"
    assert stored.notes is None
    assert stored.reviewed_by == seed_users["admin"].id
    assert stored.reviewed_at.isoformat().startswith(reviewed_at[:19])


def test_add_tag_approved_twice_yields_one_verified_row(client, db, seed_entity, seed_tags):
    kid = seed_tags["kid"]
    # an unverified self-service assignment already exists
    db.add(EntityTag(entity_id=seed_entity.id, tag_id=kid.id, verified=False))
    db.commit()

    first = _queue(db, seed_entity, "ADD_TAG", {"tag_id": kid.id})
    second = _queue(db, seed_entity, "ADD_TAG", {"tag_id": kid.id}, created_at=datetime(2024, 1, 2))
    admin = auth_headers(client, "admin@example.com")

    assert client.put(f"/api/admin/pending-changes/{first.id}", json={"action": "APPROVE"}, headers=admin).status_code == 200
    assert client.put(f"/api/admin/pending-changes/{second.id}", json={"action": "APPROVE"}, headers=admin).status_code == 200

    db.expire_all()
    rows = db.query(EntityTag).filter(EntityTag.entity_id == seed_entity.id, EntityTag.tag_id == kid.id).all()
    assert len(rows) == 1
    assert rows[0].verified is True


def test_add_tag_creates_verified_assignment_attributed_to_submitter(client, db, seed_entity, seed_tags, seed_users):
    change = _queue(db, seed_entity, "ADD_TAG", {"tag_id": seed_tags["women"].id}, submitted_by=seed_users["owner"].id)
    admin = auth_headers(client, "admin@example.com")

    resp = client.put(f"/api/admin/pending-changes/{change.id}", json={"action": "APPROVE"}, headers=admin)
    assert resp.status_code == 200

    db.expire_all()
    row = db.query(EntityTag).filter(EntityTag.entity_id == seed_entity.id).one()
    assert row.verified is True
    assert row.created_by == seed_users["owner"].id


def test_add_tag_with_missing_tag_is_404_and_stays_pending(client, db, seed_entity):
    change = _queue(db, seed_entity, "ADD_TAG", {"tag_id": "does-not-exist"})
    admin = auth_headers(client, "admin@example.com")

    resp = client.put(f"/api/admin/pending-changes/{change.id}", json={"action": "APPROVE"}, headers=admin)
    assert resp.status_code == 404

    db.expire_all()
    stored = db.query(PendingChange).filter(PendingChange.id == change.id).first()
    assert stored.status == "PENDING"
    assert stored.reviewed_by is None


def test_remove_tag_that_was_never_assigned_is_noop(client, db, seed_entity, seed_tags):
    change = _queue(db, seed_entity, "REMOVE_TAG", {"tag_id": seed_tags["wifi"].id})
    admin = auth_headers(client, "admin@example.com")

    resp = client.put(f"/api/admin/pending-changes/{change.id}", json={"action": "APPROVE"}, headers=admin)
    assert resp.status_code == 200
    assert resp.json()["status"] == "APPROVED"


def test_remove_tag_deletes_assignment(client, db, seed_entity, seed_tags):
    db.add(EntityTag(entity_id=seed_entity.id, tag_id=seed_tags["wifi"].id, verified=True))
    db.commit()
    change = _queue(db, seed_entity, "REMOVE_TAG", {"tag_id": seed_tags["wifi"].id})
    admin = auth_headers(client, "admin@example.com")

    assert client.put(f"/api/admin/pending-changes/{change.id}", json={"action": "APPROVE"}, headers=admin).status_code == 200
    db.expire_all()
    assert db.query(EntityTag).filter(EntityTag.entity_id == seed_entity.id).count() == 0


def test_update_image_replaces_image_map(client, db, seed_entity):
    seed_entity.images = {"logo": "/uploads/old-logo.png", "hero": "/uploads/old-hero.png"}
    db.commit()
    change = _queue(db, seed_entity, "UPDATE_IMAGE", {"logo": "/uploads/new-logo.png"})
    admin = auth_headers(client, "admin@example.com")

    assert client.put(f"/api/admin/pending-changes/{change.id}", json={"action": "APPROVE"}, headers=admin).status_code == 200
    assert client.get(f"/api/entities/{seed_entity.id}").json()["images"] == {"logo": "/uploads/new-logo.png"}


def test_queue_is_oldest_first_with_entity_identity(client, db, seed_entity):
    newer = _queue(db, seed_entity, "UPDATE_ENTITY", {"phone": "555-0101"}, created_at=datetime(2024, 3, 1))
    older = _queue(db, seed_entity, "UPDATE_ENTITY", {"phone": "555-0100"}, created_at=datetime(2024, 2, 1))
    admin = auth_headers(client, "admin@example.com")

    resp = client.get("/api/admin/pending-changes", headers=admin)
    assert resp.status_code == 200
    data = resp.json()
    assert [c["id"] for c in data] == [older.id, newer.id]
    assert data[0]["entity"] == {"id": seed_entity.id, "name": "Oak Park Coffee", "slug": "oak-park-coffee"}


def test_queue_filters_by_status(client, db, seed_entity):
    change = _queue(db, seed_entity, "UPDATE_ENTITY", {"phone": "555-0100"})
    admin = auth_headers(client, "admin@example.com")
    client.put(f"/api/admin/pending-changes/{change.id}", json={"action": "REJECT"}, headers=admin)

    assert client.get("/api/admin/pending-changes", headers=admin).json() == []
    rejected = client.get("/api/admin/pending-changes?status=REJECTED", headers=admin).json()
    assert [c["id"] for c in rejected] == [change.id]


def test_invalid_action_is_rejected(client, db, seed_entity):
    change = _queue(db, seed_entity, "UPDATE_ENTITY", {"phone": "555-0100"})
    admin = auth_headers(client, "admin@example.com")

    resp = client.put(f"/api/admin/pending-changes/{change.id}", json={"action": "MAYBE"}, headers=admin)
    assert resp.status_code == 400
    db.expire_all()
    assert db.query(PendingChange).filter(PendingChange.id == change.id).first().status == "PENDING"


def test_missing_or_null_action_is_rejected(client, db, seed_entity):
    change = _queue(db, seed_entity, "UPDATE_ENTITY", {"phone": "555-0100"})
    admin = auth_headers(client, "admin@example.com")

    resp = client.put(f"/api/admin/pending-changes/{change.id}", json={"notes": "n"}, headers=admin)
    assert resp.status_code == 400
    resp = client.put(f"/api/admin/pending-changes/{change.id}", json={"action": None}, headers=admin)
    assert resp.status_code == 400

    db.expire_all()
    assert db.query(PendingChange).filter(PendingChange.id == change.id).first().status == "PENDING"


def test_review_unknown_change_is_404(client, seed_users):
    admin = auth_headers(client, "admin@example.com")
    resp = client.put("/api/admin/pending-changes/missing", json={"action": "APPROVE"}, headers=admin)
    assert resp.status_code == 404


def test_submit_rejects_unknown_patch_key(client, seed_entity):
    owner = auth_headers(client, "owner@example.com")
    resp = client.post(
        f"/api/entities/{seed_entity.id}/submit-change",
        json={"change_type": "UPDATE_ENTITY", "new_value": {"favorite_color": "green"}},
        headers=owner,
    )
    assert resp.status_code == 400


def test_submit_rejects_invalid_change_type(client, seed_entity):
    owner = auth_headers(client, "owner@example.com")
    resp = client.post(
        f"/api/entities/{seed_entity.id}/submit-change",
        json={"change_type": "DELETE_EVERYTHING", "new_value": {}},
        headers=owner,
    )
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Invalid change_type"


def test_submit_add_tag_requires_tag_id(client, seed_entity):
    owner = auth_headers(client, "owner@example.com")
    resp = client.post(
        f"/api/entities/{seed_entity.id}/submit-change",
        json={"change_type": "ADD_TAG", "new_value": {}},
        headers=owner,
    )
    assert resp.status_code == 400


def test_submit_requires_change_type_and_new_value(client, seed_entity):
    owner = auth_headers(client, "owner@example.com")
    url = f"/api/entities/{seed_entity.id}/submit-change"

    assert client.post(url, json={"change_type": "UPDATE_ENTITY"}, headers=owner).status_code == 400
    assert client.post(url, json={"change_type": "UPDATE_ENTITY", "new_value": None}, headers=owner).status_code == 400
    assert client.post(url, json={"new_value": {"phone": "555"}}, headers=owner).status_code == 400


def test_submit_for_unknown_entity_is_404(client, seed_users):
    owner = auth_headers(client, "owner@example.com")
    resp = client.post(
        "/api/entities/missing/submit-change",
        json={"change_type": "UPDATE_ENTITY", "new_value": {"phone": "555"}},
        headers=owner,
    )
    assert resp.status_code == 404


def test_non_admin_cannot_review_or_list(client, db, seed_entity):
    change = _queue(db, seed_entity, "UPDATE_ENTITY", {"phone": "555-0100"})
    owner = auth_headers(client, "owner@example.com")

    assert client.get("/api/admin/pending-changes", headers=owner).status_code == 403
    resp = client.put(f"/api/admin/pending-changes/{change.id}", json={"action": "APPROVE"}, headers=owner)
    assert resp.status_code == 403
