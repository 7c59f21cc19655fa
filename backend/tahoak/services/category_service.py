"""Category service: localized category listing and admin maintenance."""

from typing import List, Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from tahoak.models.entity import Category
from tahoak.schemas.entity import CategoryCreate
from tahoak.services.entity_service import category_to_response, count_active_by_category, unique_slug
from tahoak.utils.helpers import generate_slug


def get_categories(db: Session, locale: str, featured: Optional[bool] = None) -> List[dict]:
    q = db.query(Category)
    if featured is not None:
        q = q.filter(Category.featured == featured)
    counts = count_active_by_category(db)
    return [
        category_to_response(c, locale, counts.get(c.id, 0))
        for c in q.order_by(Category.name.asc()).all()
    ]


def create_category(db: Session, data: CategoryCreate, locale: str) -> dict:
    name = data.name.strip()
    if not name:
        raise HTTPException(status_code=400, detail="Category name is required")

    if data.slug:
        slug = generate_slug(data.slug)
        if db.query(Category.id).filter(Category.slug == slug).first():
            raise HTTPException(status_code=409, detail="Category slug already exists")
    else:
        slug = unique_slug(db, Category, generate_slug(name))

    category = Category(
        name=name,
        slug=slug,
        description=data.description,
        name_translations=data.name_translations,
        description_translations=data.description_translations,
        featured=data.featured,
    )
    db.add(category)
    db.commit()
    db.refresh(category)
    return category_to_response(category, locale)


def set_featured(db: Session, category_id: str, featured: bool, locale: str) -> dict:
    category = db.query(Category).filter(Category.id == category_id).first()
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    category.featured = featured
    db.commit()
    db.refresh(category)
    return category_to_response(category, locale, count_active_by_category(db).get(category.id, 0))
