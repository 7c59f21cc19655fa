"""Tag service: tag catalogue, entity tag assignment and admin verification."""

import re
from typing import List, Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session, joinedload

from tahoak.models.entity import Entity
from tahoak.models.enums import TagCategory
from tahoak.models.tag import EntityTag, Tag
from tahoak.models.user import User
from tahoak.schemas.tag import TagCreate
from tahoak.utils.helpers import LIKE_ESCAPE, like_pattern
from tahoak.utils.permissions import can_verify_tags, ensure_can_manage_entity
from tahoak.utils.translations import resolve_translation


def tag_slug(name: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


def tag_to_response(tag: Tag, locale: Optional[str]) -> dict:
    return {
        "id": tag.id,
        "name": resolve_translation(tag.name_translations, locale, tag.name),
        "slug": tag.slug,
        "category": tag.category,
        "created_at": tag.created_at,
    }


def entity_tag_to_response(entity_tag: EntityTag, locale: Optional[str]) -> dict:
    entity = entity_tag.entity
    return {
        "id": entity_tag.id,
        "entity_id": entity_tag.entity_id,
        "tag_id": entity_tag.tag_id,
        "verified": bool(entity_tag.verified),
        "created_by": entity_tag.created_by,
        "created_at": entity_tag.created_at,
        "tag": tag_to_response(entity_tag.tag, locale),
        "entity_name": resolve_translation(entity.name_translations, locale, entity.name) if entity else None,
    }


def get_tags(db: Session, locale: str, category: Optional[str] = None, search: Optional[str] = None) -> List[dict]:
    q = db.query(Tag)
    if category and category in {c.value for c in TagCategory}:
        q = q.filter(Tag.category == category)
    if search:
        q = q.filter(Tag.name.ilike(like_pattern(search.strip()), escape=LIKE_ESCAPE))
    return [tag_to_response(t, locale) for t in q.order_by(Tag.name.asc()).all()]


def create_tag(db: Session, data: TagCreate, locale: str) -> dict:
    name = data.name.strip()
    slug = tag_slug(name)
    if not slug:
        raise HTTPException(status_code=400, detail="Name and category are required")
    if db.query(Tag.id).filter(Tag.slug == slug).first():
        raise HTTPException(status_code=409, detail="Tag already exists")

    tag = Tag(name=name, slug=slug, category=data.category.value, name_translations=data.name_translations)
    db.add(tag)
    db.commit()
    db.refresh(tag)
    return tag_to_response(tag, locale)


def delete_tag(db: Session, tag_id: str) -> int:
    """Delete a tag and its assignments. Returns how many assignments went with it."""
    tag = db.query(Tag).filter(Tag.id == tag_id).first()
    if not tag:
        raise HTTPException(status_code=404, detail="Tag not found")
    removed = len(tag.entities)
    db.delete(tag)
    db.commit()
    return removed


def _get_entity(db: Session, entity_id: str) -> Entity:
    entity = db.query(Entity).filter(Entity.id == entity_id).first()
    if not entity:
        raise HTTPException(status_code=404, detail="Entity not found")
    return entity


def _entity_tag_query(db: Session):
    return db.query(EntityTag).options(joinedload(EntityTag.tag), joinedload(EntityTag.entity))


def get_entity_tags(db: Session, entity_id: str, locale: str) -> List[dict]:
    _get_entity(db, entity_id)
    rows = (
        _entity_tag_query(db)
        .filter(EntityTag.entity_id == entity_id)
        .order_by(EntityTag.created_at.asc())
        .all()
    )
    return [entity_tag_to_response(et, locale) for et in rows]


def add_entity_tag(db: Session, entity_id: str, tag_id: str, current_user: User, locale: str) -> dict:
    entity = _get_entity(db, entity_id)
    ensure_can_manage_entity(current_user, entity)

    tag = db.query(Tag).filter(Tag.id == tag_id).first()
    if not tag:
        raise HTTPException(status_code=404, detail="Tag not found")

    existing = (
        db.query(EntityTag.id)
        .filter(EntityTag.entity_id == entity_id, EntityTag.tag_id == tag_id)
        .first()
    )
    if existing:
        raise HTTPException(status_code=409, detail="Entity already has this tag")

    # FRIENDLINESS claims need admin verification unless an admin made them
    verified = not (tag.category == TagCategory.FRIENDLINESS.value and not can_verify_tags(current_user))

    entity_tag = EntityTag(entity_id=entity_id, tag_id=tag_id, verified=verified, created_by=current_user.id)
    db.add(entity_tag)
    db.commit()
    db.refresh(entity_tag)
    return entity_tag_to_response(entity_tag, locale)


def remove_entity_tag(db: Session, entity_id: str, tag_id: str, current_user: User):
    entity = _get_entity(db, entity_id)
    ensure_can_manage_entity(current_user, entity, detail="Forbidden")

    entity_tag = (
        db.query(EntityTag)
        .filter(EntityTag.entity_id == entity_id, EntityTag.tag_id == tag_id)
        .first()
    )
    if not entity_tag:
        raise HTTPException(status_code=404, detail="Tag not found on this entity")
    db.delete(entity_tag)
    db.commit()


def get_entity_tag_assignments(db: Session, locale: str, verified: Optional[bool] = None) -> List[dict]:
    q = _entity_tag_query(db)
    if verified is not None:
        q = q.filter(EntityTag.verified == verified)
    return [entity_tag_to_response(et, locale) for et in q.order_by(EntityTag.created_at.asc()).all()]


def verify_entity_tag(db: Session, entity_tag_id: str, locale: str) -> dict:
    entity_tag = _entity_tag_query(db).filter(EntityTag.id == entity_tag_id).first()
    if not entity_tag:
        raise HTTPException(status_code=404, detail="Entity tag assignment not found")
    entity_tag.verified = True
    db.commit()
    db.refresh(entity_tag)
    return entity_tag_to_response(entity_tag, locale)
