"""Pydantic contracts for pending changes.

The proposed value of a change is a tagged union keyed by ``change_type``;
every variant carries its own payload shape so that approval never has to
guess at missing keys.
"""

from datetime import datetime
from typing import Annotated, Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, Field, RootModel, TypeAdapter

from tahoak.models.enums import EntityStatus, EntityType
from tahoak.schemas.entity import EntityIdentity


class EntityFieldsPatch(BaseModel):
    """Mutable entity fields an owner may propose. Unknown keys are rejected."""

    model_config = {"extra": "forbid"}

    name: Optional[str] = Field(default=None, min_length=1)
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
    name_translations: Optional[Dict[str, str]] = None
    description_translations: Optional[Dict[str, str]] = None
    seo_title_translations: Optional[Dict[str, str]] = None
    seo_description_translations: Optional[Dict[str, str]] = None

    def changed_fields(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True, mode="json")


class TagReference(BaseModel):
    tag_id: str = Field(min_length=1)


class ImageMap(RootModel[Dict[str, str]]):
    pass


class UpdateEntityChange(BaseModel):
    change_type: Literal["UPDATE_ENTITY"]
    new_value: EntityFieldsPatch


class AddTagChange(BaseModel):
    change_type: Literal["ADD_TAG"]
    new_value: TagReference


class RemoveTagChange(BaseModel):
    change_type: Literal["REMOVE_TAG"]
    new_value: TagReference


class UpdateImageChange(BaseModel):
    change_type: Literal["UPDATE_IMAGE"]
    new_value: ImageMap


ChangePayload = Annotated[
    Union[UpdateEntityChange, AddTagChange, RemoveTagChange, UpdateImageChange],
    Field(discriminator="change_type"),
]

change_payload_adapter = TypeAdapter(ChangePayload)


def payload_to_json(payload) -> Any:
    if isinstance(payload, UpdateEntityChange):
        return payload.new_value.changed_fields()
    return payload.new_value.model_dump(mode="json")


class PendingChangeCreate(BaseModel):
    change_type: Optional[str] = None
    field_name: Optional[str] = None
    old_value: Optional[Any] = None
    new_value: Any = None


class PendingChangeReview(BaseModel):
    action: Optional[str] = None
    notes: Optional[str] = None


class PendingChangeOut(BaseModel):
    id: str
    entity_id: str
    change_type: str
    field_name: Optional[str] = None
    old_value: Optional[Any] = None
    new_value: Any
    submitted_by: Optional[str] = None
    submitter_email: Optional[str] = None
    status: str
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    notes: Optional[str] = None
    created_at: datetime
    entity: Optional[EntityIdentity] = None

    model_config = {"from_attributes": True}
