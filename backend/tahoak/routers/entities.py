"""Entities API router: public directory reads, owner CRUD, entity tags and change submission."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from tahoak.database import get_db
from tahoak.schemas.entity import EntityCreate, EntityOut, EntityUpdate
from tahoak.schemas.pending_change import PendingChangeCreate, PendingChangeOut
from tahoak.schemas.tag import EntityTagCreate, EntityTagOut
from tahoak.services import entity_service, pending_change_service, tag_service
from tahoak.middleware.auth_middleware import get_current_user
from tahoak.models.user import User
from tahoak.utils.translations import get_locale_from_request

router = APIRouter(prefix="/api/entities", tags=["entities"])


@router.get("", response_model=List[EntityOut])
def list_entities(
    q: Optional[str] = Query(None, max_length=200),
    search: Optional[str] = Query(None, max_length=200),
    category: Optional[str] = None,
    category_id: Optional[str] = None,
    entity_type: Optional[str] = None,
    status: Optional[str] = None,
    featured: bool = False,
    sort: str = "random",
    locale: str = Depends(get_locale_from_request),
    db: Session = Depends(get_db),
):
    return entity_service.list_entities(
        db,
        locale,
        q=q or search,
        category=category,
        category_id=category_id,
        entity_type=entity_type,
        status=status,
        featured=featured,
        sort=sort,
    )


@router.get("/featured", response_model=List[EntityOut])
def featured_entities(locale: str = Depends(get_locale_from_request), db: Session = Depends(get_db)):
    return entity_service.get_featured(db, locale)


@router.get("/owned", response_model=List[EntityOut])
def owned_entities(
    locale: str = Depends(get_locale_from_request),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return entity_service.get_owned(db, current_user, locale)


@router.get("/slug/{slug}", response_model=EntityOut)
def get_entity_by_slug(slug: str, locale: str = Depends(get_locale_from_request), db: Session = Depends(get_db)):
    return entity_service.get_by_slug(db, slug, locale)


@router.get("/{entity_id}", response_model=EntityOut)
def get_entity(entity_id: str, locale: str = Depends(get_locale_from_request), db: Session = Depends(get_db)):
    return entity_service.get_entity(db, entity_id, locale)


@router.post("", response_model=EntityOut, status_code=201)
def create_entity(
    data: EntityCreate,
    locale: str = Depends(get_locale_from_request),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return entity_service.create_entity(db, data, current_user, locale)


@router.put("/{entity_id}", response_model=EntityOut)
def update_entity(
    entity_id: str,
    data: EntityUpdate,
    locale: str = Depends(get_locale_from_request),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return entity_service.update_entity(db, entity_id, data, current_user, locale)


@router.delete("/{entity_id}")
def delete_entity(entity_id: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    entity_service.delete_entity(db, entity_id, current_user)
    return {"message": "Entity deleted"}


@router.get("/{entity_id}/tags", response_model=List[EntityTagOut])
def list_entity_tags(entity_id: str, locale: str = Depends(get_locale_from_request), db: Session = Depends(get_db)):
    return tag_service.get_entity_tags(db, entity_id, locale)


@router.post("/{entity_id}/tags", response_model=EntityTagOut, status_code=201)
def add_entity_tag(
    entity_id: str,
    data: EntityTagCreate,
    locale: str = Depends(get_locale_from_request),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return tag_service.add_entity_tag(db, entity_id, data.tag_id, current_user, locale)


@router.delete("/{entity_id}/tags")
def remove_entity_tag(
    entity_id: str,
    tag_id: str = Query(..., min_length=1),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    tag_service.remove_entity_tag(db, entity_id, tag_id, current_user)
    return {"message": "Tag removed"}


@router.post("/{entity_id}/submit-change", response_model=PendingChangeOut, status_code=201)
def submit_change(
    entity_id: str,
    data: PendingChangeCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return pending_change_service.submit_change(db, entity_id, data, current_user)
