"""Role and ownership checks shared by routers and services."""

from fastapi import HTTPException

from tahoak.models.entity import Entity
from tahoak.models.enums import Role
from tahoak.models.user import User


ADMIN = Role.ADMIN.value
BUSINESS_OWNER = Role.BUSINESS_OWNER.value
USER = Role.USER.value


def is_admin(user: User | None) -> bool:
    return user is not None and user.has_role(ADMIN)


def owns_entity(user: User, entity: Entity) -> bool:
    return entity.owner_id is not None and entity.owner_id == user.id


def can_manage_entity(user: User, entity: Entity) -> bool:
    return is_admin(user) or owns_entity(user, entity)


def ensure_can_manage_entity(user: User, entity: Entity, detail: str = "Forbidden: You do not own this entity"):
    if not can_manage_entity(user, entity):
        raise HTTPException(status_code=403, detail=detail)


def can_change_entity_status(user: User) -> bool:
    return is_admin(user)


def can_verify_tags(user: User) -> bool:
    return is_admin(user)
