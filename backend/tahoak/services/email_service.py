"""Outbound email via the Resend HTTP API.

Every send returns ``True``/``False``; delivery problems are logged and never
raised. Without ``RESEND_API_KEY`` messages are only logged.
"""

import html
import logging

import httpx

from tahoak.config import settings
from tahoak.models.enums import MagicLinkPurpose

logger = logging.getLogger(__name__)

LINK_EXPIRY_NOTE = "<p>This link will expire in 7 days.</p>"


def send_email(to: str, subject: str, body_html: str) -> bool:
    message = {"from": settings.MAIL_FROM, "to": [to], "subject": subject, "html": body_html}
    if not settings.RESEND_API_KEY:
        logger.info("[email] mock send to=%s subject=%s", to, subject)
        return True

    try:
        response = httpx.post(
            settings.RESEND_API_URL,
            headers={"Authorization": f"Bearer {settings.RESEND_API_KEY}"},
            json=message,
            timeout=float(settings.EMAIL_TIMEOUT_SECONDS),
        )
        response.raise_for_status()
    except httpx.HTTPError as exc:
        logger.warning("[email] send to %s failed: %s", to, exc)
        return False
    return True


def magic_link_url(token: str, purpose: MagicLinkPurpose, entity_id: str | None = None) -> str:
    base = settings.PUBLIC_BASE_URL.rstrip("/")
    if purpose == MagicLinkPurpose.MANAGE_PREFERENCES:
        return f"{base}/subscribe/manage?token={token}"
    if purpose == MagicLinkPurpose.CLAIM_ENTITY:
        if entity_id:
            return f"{base}/public/claim/verify?token={token}&entity_id={entity_id}"
        return f"{base}/public/claim/verify?token={token}"
    return f"{base}/subscribe/verify?token={token}"


MAGIC_LINK_SUBJECTS = {
    MagicLinkPurpose.VERIFY_SUBSCRIPTION: "Verify your TahOak Park Collective subscription",
    MagicLinkPurpose.MANAGE_PREFERENCES: "Manage your TahOak Park Collective preferences",
    MagicLinkPurpose.CLAIM_ENTITY: "Verify your entity claim for TahOak Park Collective",
}


def send_magic_link_email(email: str, token: str, purpose: MagicLinkPurpose, entity_id: str | None = None) -> bool:
    subject = MAGIC_LINK_SUBJECTS[purpose]
    url = html.escape(magic_link_url(token, purpose, entity_id))
    body = (
        f"<h1>{subject}</h1>"
        "<p>Click the link below to verify your identity:</p>"
        f'<a href="{url}">{url}</a>'
        f"{LINK_EXPIRY_NOTE}"
    )
    return send_email(email, subject, body)


def send_claim_notification_email(admin_email: str, entity_name: str, submitter_email: str) -> bool:
    body = (
        "<h1>New Entity Claim Request</h1>"
        f"<p>A user ({html.escape(submitter_email)}) has requested to claim the entity: "
        f"<strong>{html.escape(entity_name)}</strong>.</p>"
        "<p>Please review this claim in the admin dashboard.</p>"
    )
    return send_email(admin_email, f"New Entity Claim Request for {entity_name}", body)
