import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from tahoak.database import Base, get_db
from tahoak.main import app
from tahoak.models.user import User
from tahoak.models.entity import Category, Entity
from tahoak.models.tag import Tag
from tahoak.services.auth_service import hash_password

TEST_DB_URL = "sqlite:///./test_tahoak.db"
TEST_PASSWORD = "password123"

engine = create_engine(TEST_DB_URL, connect_args={"check_same_thread": False})
TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def seed_users(db):
    password_hash = hash_password(TEST_PASSWORD)
    users = {
        "admin": User(email="admin@example.com", name="Admin", password_hash=password_hash, roles=["USER", "ADMIN"]),
        "owner": User(email="owner@example.com", name="Owner", password_hash=password_hash,
                      roles=["USER", "BUSINESS_OWNER"]),
        "user": User(email="user@example.com", name="Neighbor", password_hash=password_hash, roles=["USER"]),
    }
    for u in users.values():
        db.add(u)
    db.commit()
    for u in users.values():
        db.refresh(u)
    return users


@pytest.fixture
def seed_categories(db):
    categories = {
        "restaurants": Category(
            name="Restaurants",
            slug="restaurants",
            description="Places to eat",
            name_translations={"en": "Restaurants", "es": "Restaurantes"},
        ),
        "parks": Category(name="Parks", slug="parks", featured=True),
    }
    for c in categories.values():
        db.add(c)
    db.commit()
    for c in categories.values():
        db.refresh(c)
    return categories


@pytest.fixture
def seed_entity(db, seed_users, seed_categories):
    entity = Entity(
        name="Oak Park Coffee",
        slug="oak-park-coffee",
        description="Old text",
        address="3500 Broadway",
        entity_type="COMMERCE",
        status="ACTIVE",
        category_id=seed_categories["restaurants"].id,
        owner_id=seed_users["owner"].id,
        name_translations={"en": "Oak Park Coffee", "es": "Café Oak Park"},
    )
    db.add(entity)
    db.commit()
    db.refresh(entity)
    return entity


@pytest.fixture
def seed_tags(db):
    tags = {
        "wifi": Tag(name="WiFi", slug="wifi", category="AMENITY",
                    name_translations={"en": "WiFi", "es": "Wifi gratis"}),
        "kid": Tag(name="Kid-friendly", slug="kid-friendly", category="FRIENDLINESS"),
        "women": Tag(name="Women-owned", slug="women-owned", category="IDENTITY"),
    }
    for t in tags.values():
        db.add(t)
    db.commit()
    for t in tags.values():
        db.refresh(t)
    return tags


def get_token(client, email: str, password: str = TEST_PASSWORD) -> str:
    resp = client.post("/api/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.text
    return resp.json()["access_token"]


def auth_headers(client, email: str) -> dict:
    return {"Authorization": f"Bearer {get_token(client, email)}"}
