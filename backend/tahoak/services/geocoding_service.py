"""Address lookups against OpenStreetMap Nominatim.

Nominatim allows at most one request per second; batch callers must pace
themselves. Failures return ``None``.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from tahoak.config import settings

logger = logging.getLogger(__name__)


@dataclass
class GeocodeResult:
    latitude: float
    longitude: float
    display_name: str


def _headers() -> dict:
    return {"User-Agent": settings.GEOCODER_USER_AGENT}


def geocode_address(address: Optional[str]) -> Optional[GeocodeResult]:
    if not address or not address.strip():
        return None

    query = f"{address.strip()}{settings.GEOCODER_CITY_SUFFIX}"
    try:
        response = httpx.get(
            f"{settings.GEOCODER_URL.rstrip('/')}/search",
            params={"q": query, "format": "json", "limit": 1, "addressdetails": 1},
            headers=_headers(),
            timeout=float(settings.GEOCODER_TIMEOUT_SECONDS),
        )
        response.raise_for_status()
        data = response.json()
    except (httpx.HTTPError, ValueError) as exc:
        logger.warning("[geocode] lookup for %r failed: %s", query, exc)
        return None

    if not isinstance(data, list) or not data:
        return None

    first = data[0]
    try:
        return GeocodeResult(
            latitude=float(first["lat"]),
            longitude=float(first["lon"]),
            display_name=first.get("display_name") or query,
        )
    except (KeyError, TypeError, ValueError) as exc:
        logger.warning("[geocode] unexpected response for %r: %s", query, exc)
        return None


def reverse_geocode(lat: float, lng: float) -> Optional[str]:
    try:
        response = httpx.get(
            f"{settings.GEOCODER_URL.rstrip('/')}/reverse",
            params={"lat": lat, "lon": lng, "format": "json", "addressdetails": 1},
            headers=_headers(),
            timeout=float(settings.GEOCODER_TIMEOUT_SECONDS),
        )
        response.raise_for_status()
        data = response.json()
    except (httpx.HTTPError, ValueError) as exc:
        logger.warning("[geocode] reverse lookup for %s,%s failed: %s", lat, lng, exc)
        return None

    if not isinstance(data, dict):
        return None
    return data.get("display_name") or None
