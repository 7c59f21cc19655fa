"""Locale resolution for stored multi-locale JSON blobs."""

from typing import Any, Optional
from urllib.parse import urlparse

from fastapi import Request

from tahoak.config import settings


def resolve_translation(translations: Any, locale: Optional[str], fallback: str) -> str:
    """Pick the display string for ``locale`` out of a ``{locale: text}`` blob.

    Order: requested locale, then "en", then the first key in insertion order,
    then ``fallback``. Never raises.
    """
    if not translations or not isinstance(translations, dict):
        return fallback

    value = translations.get(locale) if locale is not None else None
    if value and isinstance(value, str):
        return value

    value = translations.get("en")
    if value and isinstance(value, str):
        return value

    first_key = next(iter(translations), None)
    if first_key is not None:
        value = translations[first_key]
        if isinstance(value, str):
            return value

    return fallback


def resolve_optional(translations: Any, locale: Optional[str], fallback: Optional[str]) -> Optional[str]:
    if fallback is None and not translations:
        return None
    return resolve_translation(translations, locale, fallback or "")


def is_valid_locale(locale: Optional[str]) -> bool:
    return locale is not None and locale in settings.SUPPORTED_LOCALES


def get_locale_from_request(request: Request) -> str:
    locale = request.query_params.get("locale")
    if is_valid_locale(locale):
        return locale

    referer = request.headers.get("referer")
    if referer:
        segments = [seg for seg in urlparse(referer).path.split("/") if seg]
        if segments and is_valid_locale(segments[0]):
            return segments[0]

    return settings.DEFAULT_LOCALE
