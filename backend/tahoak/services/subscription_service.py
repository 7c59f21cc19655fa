"""Subscription service: magic links, newsletter subscribe/verify, preferences and unsubscribe."""

import logging
import secrets
from datetime import timedelta
from typing import List, Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from tahoak.config import settings
from tahoak.models.enums import MagicLinkPurpose
from tahoak.models.subscription import MagicLink, Subscriber
from tahoak.services import email_service
from tahoak.utils.helpers import LIKE_ESCAPE, is_valid_email, like_pattern, utcnow

logger = logging.getLogger(__name__)

SUBSCRIBER_FILTERS = ("all", "verified", "unverified", "unsubscribed")


def issue_magic_link(db: Session, email: str, purpose: MagicLinkPurpose) -> MagicLink:
    link = MagicLink(
        email=email,
        token=secrets.token_hex(32),
        purpose=purpose.value,
        expires_at=utcnow() + timedelta(days=settings.MAGIC_LINK_TTL_DAYS),
    )
    db.add(link)
    db.flush()
    return link


def consume_magic_link(
    db: Session,
    token: Optional[str],
    purpose: MagicLinkPurpose,
    single_use: bool = True,
) -> MagicLink:
    """Look up ``token`` and check it is live for ``purpose``.

    Single-use links are rejected once used; the caller marks them used
    with :func:`mark_used` inside its own transaction.
    """
    if not token:
        raise HTTPException(status_code=400, detail="Token is required")
    link = db.query(MagicLink).filter(MagicLink.token == token).first()
    if not link:
        raise HTTPException(status_code=400, detail="Invalid token")
    if link.expires_at < utcnow():
        raise HTTPException(status_code=400, detail="Token expired")
    if single_use and link.used:
        raise HTTPException(status_code=400, detail="Token already used")
    if link.purpose != purpose.value:
        raise HTTPException(status_code=400, detail="Invalid token purpose")
    return link


def mark_used(link: MagicLink):
    link.used = True
    link.used_at = utcnow()


def _normalize_email(email: Optional[str]) -> str:
    email = (email or "").strip().lower()
    if not is_valid_email(email):
        raise HTTPException(status_code=400, detail="Valid email is required")
    return email


def subscribe(db: Session, email: str, preferences: Optional[dict] = None):
    email = _normalize_email(email)
    subscriber = db.query(Subscriber).filter(Subscriber.email == email).first()
    if subscriber and subscriber.verified and not subscriber.unsubscribed:
        raise HTTPException(status_code=409, detail="Email is already subscribed")

    if not subscriber:
        subscriber = Subscriber(email=email, preferences=preferences or {}, verified=False)
        db.add(subscriber)
    elif subscriber.unsubscribed:
        # re-subscribing requires a fresh verification
        subscriber.unsubscribed = False
        subscriber.unsubscribed_at = None
        subscriber.verified = False
        subscriber.verified_at = None
        if preferences is not None:
            subscriber.preferences = preferences

    link = issue_magic_link(db, email, MagicLinkPurpose.VERIFY_SUBSCRIPTION)
    db.commit()

    if not email_service.send_magic_link_email(email, link.token, MagicLinkPurpose.VERIFY_SUBSCRIPTION):
        raise HTTPException(status_code=502, detail="Failed to send verification email")


def verify_subscription(db: Session, token: Optional[str]) -> Subscriber:
    link = consume_magic_link(db, token, MagicLinkPurpose.VERIFY_SUBSCRIPTION)
    subscriber = db.query(Subscriber).filter(Subscriber.email == link.email).first()
    if not subscriber:
        raise HTTPException(status_code=404, detail="Subscriber not found")

    subscriber.verified = True
    subscriber.verified_at = utcnow()
    mark_used(link)
    db.commit()
    db.refresh(subscriber)
    return subscriber


def send_manage_link(db: Session, email: str):
    email = _normalize_email(email)
    subscriber = db.query(Subscriber).filter(Subscriber.email == email).first()
    if not subscriber:
        raise HTTPException(status_code=404, detail="Subscriber not found")

    link = issue_magic_link(db, email, MagicLinkPurpose.MANAGE_PREFERENCES)
    db.commit()
    if not email_service.send_magic_link_email(email, link.token, MagicLinkPurpose.MANAGE_PREFERENCES):
        raise HTTPException(status_code=502, detail="Failed to send preferences email")


def _subscriber_for_manage_token(db: Session, token: Optional[str]) -> Subscriber:
    # manage links stay valid until expiry so a subscriber can revisit their settings
    link = consume_magic_link(db, token, MagicLinkPurpose.MANAGE_PREFERENCES, single_use=False)
    subscriber = db.query(Subscriber).filter(Subscriber.email == link.email).first()
    if not subscriber:
        raise HTTPException(status_code=404, detail="Subscriber not found")
    return subscriber


def preferences_view(subscriber: Subscriber) -> dict:
    return {
        "email": subscriber.email,
        "preferences": subscriber.preferences or {},
        "verified": bool(subscriber.verified),
        "unsubscribed": bool(subscriber.unsubscribed),
    }


def get_preferences(db: Session, token: Optional[str]) -> dict:
    return preferences_view(_subscriber_for_manage_token(db, token))


def update_preferences(db: Session, token: Optional[str], preferences: Optional[dict]) -> dict:
    subscriber = _subscriber_for_manage_token(db, token)
    subscriber.preferences = preferences or {}
    db.commit()
    db.refresh(subscriber)
    return preferences_view(subscriber)


def unsubscribe(db: Session, token: Optional[str]):
    if not token:
        raise HTTPException(status_code=400, detail="Token is required")
    link = db.query(MagicLink).filter(MagicLink.token == token).first()
    if not link:
        raise HTTPException(status_code=400, detail="Invalid token")
    subscriber = db.query(Subscriber).filter(Subscriber.email == link.email).first()
    if not subscriber:
        raise HTTPException(status_code=404, detail="Subscriber not found")

    subscriber.unsubscribed = True
    subscriber.unsubscribed_at = utcnow()
    db.commit()
    logger.info("[subscription] %s unsubscribed", subscriber.email)


def list_subscribers(db: Session, filter_by: str = "all", search: Optional[str] = None) -> List[Subscriber]:
    if filter_by not in SUBSCRIBER_FILTERS:
        raise HTTPException(status_code=400, detail=f"filter must be one of: {', '.join(SUBSCRIBER_FILTERS)}")

    q = db.query(Subscriber)
    if filter_by == "verified":
        q = q.filter(Subscriber.verified == True, Subscriber.unsubscribed == False)  # noqa: E712
    elif filter_by == "unverified":
        q = q.filter(Subscriber.verified == False, Subscriber.unsubscribed == False)  # noqa: E712
    elif filter_by == "unsubscribed":
        q = q.filter(Subscriber.unsubscribed == True)  # noqa: E712
    if search:
        q = q.filter(Subscriber.email.ilike(like_pattern(search.strip()), escape=LIKE_ESCAPE))
    return q.order_by(Subscriber.created_at.desc()).all()
