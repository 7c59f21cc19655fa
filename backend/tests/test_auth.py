"""Registration, login and bearer-token access."""

from tests.conftest import auth_headers


def test_login_success(client, seed_users):
    resp = client.post("/api/auth/login", json={"email": "admin@example.com", "password": "password123"})
    assert resp.status_code == 200
    data = resp.json()
    assert "access_token" in data
    assert "ADMIN" in data["user"]["roles"]


def test_login_wrong_password(client, seed_users):
    resp = client.post("/api/auth/login", json={"email": "admin@example.com", "password": "nope-nope"})
    assert resp.status_code == 401


def test_login_unknown_email(client, seed_users):
    resp = client.post("/api/auth/login", json={"email": "ghost@example.com", "password": "password123"})
    assert resp.status_code == 401


def test_register_then_login(client):
    resp = client.post(
        "/api/auth/register",
        json={"email": "New@Example.com", "password": "longenough", "name": "New"},
    )
    assert resp.status_code == 201
    assert resp.json()["email"] == "new@example.com"
    assert resp.json()["roles"] == ["USER"]

    login = client.post("/api/auth/login", json={"email": "new@example.com", "password": "longenough"})
    assert login.status_code == 200


def test_register_rejects_short_password_and_bad_email(client):
    assert client.post("/api/auth/register", json={"email": "a@b.co", "password": "short"}).status_code == 400
    assert client.post("/api/auth/register", json={"email": "not-an-email", "password": "longenough"}).status_code == 400


def test_register_duplicate_email(client, seed_users):
    resp = client.post("/api/auth/register", json={"email": "user@example.com", "password": "longenough"})
    assert resp.status_code == 409


def test_me_authenticated(client, seed_users):
    headers = auth_headers(client, "owner@example.com")
    resp = client.get("/api/auth/me", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["email"] == "owner@example.com"


def test_me_unauthenticated(client):
    resp = client.get("/api/auth/me")
    assert resp.status_code in (401, 403)  # HTTPBearer raises 401 or 403 depending on version


def test_me_with_bad_token(client, seed_users):
    resp = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-token"})
    assert resp.status_code == 401


def test_inactive_user_cannot_login(client, db, seed_users):
    seed_users["user"].is_active = False
    db.commit()
    resp = client.post("/api/auth/login", json={"email": "user@example.com", "password": "password123"})
    assert resp.status_code == 401


def test_health(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_logout(client, seed_users):
    headers = auth_headers(client, "admin@example.com")
    resp = client.post("/api/auth/logout", headers=headers)
    assert resp.status_code == 200
