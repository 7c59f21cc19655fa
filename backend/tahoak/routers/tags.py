"""Tags API router: localized public tag catalogue."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from tahoak.database import get_db
from tahoak.schemas.tag import TagOut
from tahoak.services import tag_service
from tahoak.utils.translations import get_locale_from_request

router = APIRouter(prefix="/api/tags", tags=["tags"])


@router.get("", response_model=List[TagOut])
def list_tags(
    category: Optional[str] = None,
    search: Optional[str] = Query(None, max_length=100),
    locale: str = Depends(get_locale_from_request),
    db: Session = Depends(get_db),
):
    return tag_service.get_tags(db, locale, category=category, search=search)
