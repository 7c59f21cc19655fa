"""Entity image slots (logo, hero): upload to local storage and removal."""

import logging
import os
import time

from fastapi import HTTPException, UploadFile
from sqlalchemy.orm import Session

from tahoak.config import settings
from tahoak.models.entity import Entity
from tahoak.models.user import User
from tahoak.utils.helpers import save_image, validate_image
from tahoak.utils.permissions import ensure_can_manage_entity

logger = logging.getLogger(__name__)

IMAGE_SLOTS = ("logo", "hero")


def _check_slot(slot: str):
    if slot not in IMAGE_SLOTS:
        raise HTTPException(status_code=400, detail="Invalid image slot. Must be 'logo' or 'hero'")


def _get_managed_entity(db: Session, entity_id: str, current_user: User) -> Entity:
    entity = db.query(Entity).filter(Entity.id == entity_id).first()
    if not entity:
        raise HTTPException(status_code=404, detail="Entity not found")
    ensure_can_manage_entity(
        current_user, entity, detail="Forbidden: You can only upload images for your own entity"
    )
    return entity


def _remove_slot_files(entity_id: str, slot: str):
    folder = os.path.join(settings.UPLOAD_DIR, "entities", entity_id)
    if not os.path.isdir(folder):
        return
    for name in os.listdir(folder):
        if os.path.splitext(name)[0] != slot:
            continue
        try:
            os.remove(os.path.join(folder, name))
        except OSError as exc:
            logger.warning("[images] could not remove %s for entity %s: %s", name, entity_id, exc)


async def upload_entity_image(
    db: Session, entity_id: str, slot: str, file: UploadFile, current_user: User
) -> dict:
    _check_slot(slot)
    validate_image(file)
    entity = _get_managed_entity(db, entity_id, current_user)

    # a re-upload may change the extension, so clear the old file first
    _remove_slot_files(entity_id, slot)
    saved = await save_image(file, subfolder=f"entities/{entity_id}", basename=slot)

    url = f"{saved['url']}?t={int(time.time() * 1000)}"
    images = dict(entity.images or {})
    images[slot] = url
    entity.images = images
    db.commit()
    return {"slot": slot, "url": url, "size": saved["size"]}


def delete_entity_image(db: Session, entity_id: str, slot: str, current_user: User) -> dict:
    _check_slot(slot)
    entity = _get_managed_entity(db, entity_id, current_user)

    images = dict(entity.images or {})
    if slot not in images:
        raise HTTPException(status_code=404, detail="Image not found")
    images.pop(slot)
    entity.images = images
    db.commit()
    _remove_slot_files(entity_id, slot)
    return images
