"""Entity image API router: logo/hero uploads stored under UPLOAD_DIR."""

from typing import Dict

from fastapi import APIRouter, Depends, File, Query, UploadFile
from sqlalchemy.orm import Session

from tahoak.database import get_db
from tahoak.middleware.auth_middleware import get_current_user
from tahoak.models.user import User
from tahoak.schemas.entity import ImageUploadOut
from tahoak.services import image_service

router = APIRouter(prefix="/api/entities", tags=["images"])


@router.post("/{entity_id}/images", response_model=ImageUploadOut)
async def upload_image(
    entity_id: str,
    slot: str = Query(...),
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return await image_service.upload_entity_image(db, entity_id, slot, file, current_user)


@router.delete("/{entity_id}/images/{slot}", response_model=Dict[str, str])
def delete_image(
    entity_id: str,
    slot: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return image_service.delete_entity_image(db, entity_id, slot, current_user)
