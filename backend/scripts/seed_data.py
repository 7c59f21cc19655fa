"""Seed the database with the canonical categories, tags and demo accounts."""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from tahoak.database import SessionLocal, engine, Base
import tahoak.models  # noqa: F401

from tahoak.models.entity import Category, Entity
from tahoak.models.tag import Tag
from tahoak.models.user import User
from tahoak.services.auth_service import hash_password
from tahoak.services.tag_service import tag_slug

CATEGORIES = [
    ("Food & Drink", "food-drink", "Restaurants, cafes, bars, bakeries, food trucks, catering", "Comida y Bebida"),
    ("Shopping", "shopping", "Retail stores, boutiques, markets, vintage, gifts", "Compras"),
    ("Beauty & Personal Care", "beauty", "Hair salons, barbers, nails, tattoo, spa, estheticians",
     "Belleza y Cuidado Personal"),
    ("Health & Wellness", "health-wellness", "Gyms, yoga, martial arts, massage, mental health, clinics",
     "Salud y Bienestar"),
    ("Pets", "pets", "Pet grooming, vets, boarding, pet stores, dog walkers", "Mascotas"),
    ("Home & Auto", "home-auto", "Lawn care, plumbing, electrical, cleaning, auto repair, car wash", "Hogar y Auto"),
    ("Professional Services", "professional", "Accounting, legal, real estate, insurance, tech, photography",
     "Servicios Profesionales"),
    ("Arts & Culture", "arts-culture", "Galleries, music venues, comedy, dance, theater, art classes",
     "Arte y Cultura"),
    ("Kids & Education", "kids-education", "Schools, tutoring, daycare, camps, kids activities, youth sports",
     "Niños y Educación"),
    ("Community & Faith", "community-faith", "Neighborhood groups, non-profits, churches, temples, mutual aid",
     "Comunidad y Fe"),
    ("Social Services", "social-services", "Food banks, health clinics, homeless services, job training",
     "Servicios Sociales"),
    ("Government", "government", "Elected officials, city offices, public services", "Gobierno"),
    ("Parks", "parks", "Parks, gardens, plazas, outdoor recreation spaces", "Parques"),
]

TAGS = {
    "IDENTITY": ["Black-owned", "LGBTQ-owned", "Women-owned", "Veteran-owned", "Asian-owned",
                 "Latinx-owned", "Indigenous-owned"],
    "FRIENDLINESS": ["Kid-friendly", "Dog-friendly", "Neurodiversity-friendly", "Wheelchair-accessible",
                     "Senior-friendly", "Sensory-friendly"],
    "AMENITY": ["WiFi", "Outdoor Seating", "Parking Available", "Public Restroom", "Accepts Cash",
                "Accepts Cards", "Gender-neutral Restrooms", "Changing Tables"],
}

DEMO_PASSWORD = "changeme123"


def seed():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        if db.query(User).count() > 0:
            print("Database already seeded. Skipping.")
            return

        categories = {}
        for name, slug, description, name_es in CATEGORIES:
            category = Category(
                name=name,
                slug=slug,
                description=description,
                name_translations={"en": name, "es": name_es},
            )
            db.add(category)
            categories[slug] = category

        for category, names in TAGS.items():
            for name in names:
                db.add(Tag(name=name, slug=tag_slug(name), category=category))

        admin = User(email="admin@tahoak.local", name="Admin", password_hash=hash_password(DEMO_PASSWORD),
                     roles=["USER", "ADMIN"])
        owner = User(email="owner@tahoak.local", name="Business Owner",
                     password_hash=hash_password(DEMO_PASSWORD), roles=["USER", "BUSINESS_OWNER"])
        db.add_all([admin, owner])
        db.flush()

        db.add(Entity(
            name="Oak Park Coffee",
            slug="oak-park-coffee",
            description="Neighborhood coffee shop",
            address="3500 Broadway",
            entity_type="COMMERCE",
            status="ACTIVE",
            featured=True,
            category_id=categories["food-drink"].id,
            owner_id=owner.id,
            name_translations={"en": "Oak Park Coffee", "es": "Café Oak Park"},
            description_translations={"en": "Neighborhood coffee shop", "es": "Cafetería del barrio"},
        ))

        db.commit()
        print("Seed data created successfully!")
        print(f"  Admin login: admin@tahoak.local / {DEMO_PASSWORD}")
        print(f"  Owner login: owner@tahoak.local / {DEMO_PASSWORD}")
    except Exception as e:
        db.rollback()
        print(f"Error seeding data: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed()
