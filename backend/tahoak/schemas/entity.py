"""Pydantic request/response contracts for entities and categories."""

from pydantic import BaseModel
from typing import Any, Dict, List, Optional
from datetime import datetime

from tahoak.models.enums import EntityStatus, EntityType


class CategoryOut(BaseModel):
    id: str
    name: str
    slug: str
    description: Optional[str] = None
    featured: bool = False
    entity_count: int = 0
    created_at: Optional[datetime] = None


class CategoryCreate(BaseModel):
    name: str
    slug: Optional[str] = None
    description: Optional[str] = None
    name_translations: Optional[Dict[str, str]] = None
    description_translations: Optional[Dict[str, str]] = None
    featured: bool = False


class EntityOwnerOut(BaseModel):
    id: str
    name: Optional[str] = None
    email: str

    model_config = {"from_attributes": True}


class EntityTagBrief(BaseModel):
    id: str
    tag_id: str
    name: str
    slug: str
    category: str
    verified: bool


class EntityCreate(BaseModel):
    name: str
    description: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    email: Optional[str] = None
    category_id: Optional[str] = None
    owner_id: Optional[str] = None
    entity_type: Optional[EntityType] = None
    status: Optional[EntityStatus] = None
    hours: Optional[Dict[str, Any]] = None
    social_media: Optional[Dict[str, str]] = None


class EntityUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    email: Optional[str] = None
    category_id: Optional[str] = None
    entity_type: Optional[EntityType] = None
    status: Optional[EntityStatus] = None
    hours: Optional[Dict[str, Any]] = None
    social_media: Optional[Dict[str, str]] = None
    name_translations: Optional[Dict[str, str]] = None
    description_translations: Optional[Dict[str, str]] = None


class AdminEntityUpdate(BaseModel):
    status: Optional[EntityStatus] = None
    featured: Optional[bool] = None
    entity_type: Optional[EntityType] = None


class EntityOut(BaseModel):
    id: str
    name: str
    slug: str
    description: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    email: Optional[str] = None
    entity_type: str
    status: str
    featured: bool = False
    category_id: Optional[str] = None
    category: Optional[CategoryOut] = None
    owner_id: Optional[str] = None
    owner: Optional[EntityOwnerOut] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    images: Dict[str, str] = {}
    hours: Optional[Dict[str, Any]] = None
    social_media: Optional[Dict[str, str]] = None
    seo_title: Optional[str] = None
    seo_description: Optional[str] = None
    tags: List[EntityTagBrief] = []
    spot_check_date: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class EntityIdentity(BaseModel):
    id: str
    name: str
    slug: str

    model_config = {"from_attributes": True}


class ImageUploadOut(BaseModel):
    slot: str
    url: str
    size: int


class CategoryFeaturedUpdate(BaseModel):
    featured: bool
