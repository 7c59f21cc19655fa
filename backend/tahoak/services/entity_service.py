"""Entity service: directory listing, keyword search, localized views and owner CRUD."""

import random
from typing import List, Optional

from fastapi import HTTPException
from sqlalchemy import func, or_
from sqlalchemy.orm import Session, joinedload

from tahoak.models.entity import Category, Entity
from tahoak.models.enums import EntityStatus, EntityType
from tahoak.models.tag import EntityTag
from tahoak.models.user import User
from tahoak.schemas.entity import EntityCreate, EntityUpdate
from tahoak.utils.helpers import LIKE_ESCAPE, generate_slug, like_pattern
from tahoak.utils.keyword_search import expand_search_query, get_matching_categories
from tahoak.utils.permissions import can_change_entity_status, ensure_can_manage_entity, is_admin
from tahoak.utils.translations import resolve_optional, resolve_translation


def entity_query(db: Session):
    return db.query(Entity).options(
        joinedload(Entity.category),
        joinedload(Entity.owner),
        joinedload(Entity.tags).joinedload(EntityTag.tag),
    )


def category_to_response(category: Category, locale: Optional[str], entity_count: int = 0) -> dict:
    return {
        "id": category.id,
        "name": resolve_translation(category.name_translations, locale, category.name),
        "slug": category.slug,
        "description": resolve_optional(category.description_translations, locale, category.description),
        "featured": bool(category.featured),
        "entity_count": entity_count,
        "created_at": category.created_at,
    }


def tag_brief(entity_tag: EntityTag, locale: Optional[str]) -> dict:
    tag = entity_tag.tag
    return {
        "id": entity_tag.id,
        "tag_id": entity_tag.tag_id,
        "name": resolve_translation(tag.name_translations, locale, tag.name),
        "slug": tag.slug,
        "category": tag.category,
        "verified": bool(entity_tag.verified),
    }


def to_response(entity: Entity, locale: Optional[str]) -> dict:
    """Flatten an entity into its localized public representation."""
    owner = entity.owner
    return {
        "id": entity.id,
        "name": resolve_translation(entity.name_translations, locale, entity.name),
        "slug": entity.slug,
        "description": resolve_optional(entity.description_translations, locale, entity.description),
        "address": entity.address,
        "phone": entity.phone,
        "website": entity.website,
        "email": entity.email,
        "entity_type": entity.entity_type,
        "status": entity.status,
        "featured": bool(entity.featured),
        "category_id": entity.category_id,
        "category": category_to_response(entity.category, locale) if entity.category else None,
        "owner_id": entity.owner_id,
        "owner": {"id": owner.id, "name": owner.name, "email": owner.email} if owner else None,
        "latitude": entity.latitude,
        "longitude": entity.longitude,
        "images": dict(entity.images or {}),
        "hours": entity.hours,
        "social_media": entity.social_media,
        "seo_title": resolve_optional(entity.seo_title_translations, locale, None),
        "seo_description": resolve_optional(entity.seo_description_translations, locale, None),
        "tags": [tag_brief(et, locale) for et in entity.tags if et.tag is not None],
        "spot_check_date": entity.spot_check_date,
        "created_at": entity.created_at,
        "updated_at": entity.updated_at,
    }


def search_condition(db: Session, query: str):
    """Disjunctive match for a free-text query, widened by category synonyms."""
    terms = expand_search_query(query)
    conditions = []
    for term in terms:
        pattern = like_pattern(term)
        conditions.extend([
            Entity.name.ilike(pattern, escape=LIKE_ESCAPE),
            Entity.description.ilike(pattern, escape=LIKE_ESCAPE),
            Entity.address.ilike(pattern, escape=LIKE_ESCAPE),
        ])

    slugs = get_matching_categories(query)
    if slugs:
        category_ids = [row[0] for row in db.query(Category.id).filter(Category.slug.in_(slugs)).all()]
        if category_ids:
            conditions.append(Entity.category_id.in_(category_ids))
    return or_(*conditions)


def resolve_category_id(db: Session, category: Optional[str]) -> Optional[str]:
    if not category:
        return None
    found = db.query(Category.id).filter(Category.slug == category).first()
    return found[0] if found else category


def list_entities(
    db: Session,
    locale: str,
    q: Optional[str] = None,
    category: Optional[str] = None,
    category_id: Optional[str] = None,
    entity_type: Optional[str] = None,
    status: Optional[str] = None,
    featured: bool = False,
    sort: str = "random",
) -> List[dict]:
    query = entity_query(db).filter(Entity.status == (status or EntityStatus.ACTIVE.value))
    if featured:
        query = query.filter(Entity.featured == True)  # noqa: E712
    if entity_type:
        query = query.filter(Entity.entity_type == entity_type)

    final_category_id = category_id or resolve_category_id(db, category)
    if final_category_id:
        query = query.filter(Entity.category_id == final_category_id)

    if q and q.strip():
        query = query.filter(search_condition(db, q.strip()))

    if sort == "name":
        query = query.order_by(Entity.name.asc())
    elif sort == "featured":
        query = query.order_by(Entity.featured.desc(), Entity.name.asc())
    else:
        query = query.order_by(Entity.created_at.desc())

    entities = query.all()
    if sort not in ("name", "featured", "newest"):
        random.shuffle(entities)
    return [to_response(e, locale) for e in entities]


def get_featured(db: Session, locale: str) -> List[dict]:
    entities = (
        entity_query(db)
        .filter(Entity.featured == True, Entity.status == EntityStatus.ACTIVE.value)  # noqa: E712
        .order_by(Entity.created_at.desc())
        .all()
    )
    return [to_response(e, locale) for e in entities]


def get_entity_or_404(db: Session, entity_id: str) -> Entity:
    entity = entity_query(db).filter(Entity.id == entity_id).first()
    if not entity:
        raise HTTPException(status_code=404, detail="Entity not found")
    return entity


def get_entity(db: Session, entity_id: str, locale: str) -> dict:
    return to_response(get_entity_or_404(db, entity_id), locale)


def get_by_slug(db: Session, slug: str, locale: str) -> dict:
    entity = (
        entity_query(db)
        .filter(Entity.slug == slug, Entity.status == EntityStatus.ACTIVE.value)
        .first()
    )
    if not entity:
        raise HTTPException(status_code=404, detail="Entity not found")
    return to_response(entity, locale)


def get_owned(db: Session, current_user: User, locale: str) -> List[dict]:
    entities = (
        entity_query(db)
        .filter(Entity.owner_id == current_user.id)
        .order_by(Entity.created_at.desc())
        .all()
    )
    return [to_response(e, locale) for e in entities]


def unique_slug(db: Session, model, base: str) -> str:
    base = base or "item"
    slug = base
    counter = 1
    while db.query(model.id).filter(model.slug == slug).first():
        slug = f"{base}-{counter}"
        counter += 1
    return slug


def _ensure_category(db: Session, category_id: Optional[str]):
    if category_id and not db.query(Category.id).filter(Category.id == category_id).first():
        raise HTTPException(status_code=400, detail="Category not found")


def create_entity(db: Session, data: EntityCreate, current_user: User, locale: str) -> dict:
    name = (data.name or "").strip()
    if not name:
        raise HTTPException(status_code=400, detail="Entity name is required")

    owner_id = current_user.id
    if data.owner_id and is_admin(current_user):
        if not db.query(User.id).filter(User.id == data.owner_id).first():
            raise HTTPException(status_code=400, detail="Specified owner not found")
        owner_id = data.owner_id

    _ensure_category(db, data.category_id)

    status = EntityStatus.PENDING.value
    if data.status is not None and is_admin(current_user):
        status = data.status.value

    entity = Entity(
        name=name,
        slug=unique_slug(db, Entity, generate_slug(name)),
        description=data.description,
        address=data.address,
        phone=data.phone,
        website=data.website,
        email=data.email,
        category_id=data.category_id or None,
        entity_type=(data.entity_type or EntityType.COMMERCE).value,
        status=status,
        owner_id=owner_id,
        hours=data.hours,
        social_media=data.social_media,
    )
    db.add(entity)
    db.commit()
    return get_entity(db, entity.id, locale)


def update_entity(db: Session, entity_id: str, data: EntityUpdate, current_user: User, locale: str) -> dict:
    entity = get_entity_or_404(db, entity_id)
    ensure_can_manage_entity(current_user, entity, detail="Forbidden: You can only update your own entity")

    updates = data.model_dump(exclude_unset=True, mode="json")
    if "status" in updates and not can_change_entity_status(current_user):
        raise HTTPException(status_code=403, detail="Forbidden: Only admins can change entity status")
    if "name" in updates and not (updates["name"] or "").strip():
        raise HTTPException(status_code=400, detail="Entity name cannot be empty")
    if "category_id" in updates:
        updates["category_id"] = updates["category_id"] or None
        _ensure_category(db, updates["category_id"])

    for key, value in updates.items():
        setattr(entity, key, value)
    db.commit()
    db.expire_all()
    return get_entity(db, entity_id, locale)


def delete_entity(db: Session, entity_id: str, current_user: User):
    entity = get_entity_or_404(db, entity_id)
    ensure_can_manage_entity(current_user, entity, detail="Forbidden: You can only delete your own entity")
    db.delete(entity)
    db.commit()


def count_active_by_category(db: Session) -> dict:
    rows = (
        db.query(Entity.category_id, func.count(Entity.id))
        .filter(Entity.status == EntityStatus.ACTIVE.value)
        .group_by(Entity.category_id)
        .all()
    )
    return {category_id: count for category_id, count in rows if category_id}
