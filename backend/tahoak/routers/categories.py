"""Categories API router: localized public category listing."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional
from tahoak.database import get_db
from tahoak.schemas.entity import CategoryOut
from tahoak.services import category_service
from tahoak.utils.translations import get_locale_from_request

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.get("", response_model=List[CategoryOut])
def list_categories(
    featured: Optional[bool] = None,
    locale: str = Depends(get_locale_from_request),
    db: Session = Depends(get_db),
):
    return category_service.get_categories(db, locale, featured=featured)
