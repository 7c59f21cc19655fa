"""Fill in latitude/longitude for entities that have an address but no coordinates.

Nominatim's usage policy allows one request per second, so lookups are paced.
"""
import sys
import os
import time
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from tahoak.database import SessionLocal
import tahoak.models  # noqa: F401

from tahoak.models.entity import Entity
from tahoak.services.geocoding_service import geocode_address

REQUEST_INTERVAL_SECONDS = 1.0
PO_BOX_MARKERS = ("PO Box", "P.O. Box")


def geocode_missing(db, sleep=time.sleep) -> dict:
    entities = (
        db.query(Entity)
        .filter(Entity.address.isnot(None), Entity.latitude.is_(None), Entity.longitude.is_(None))
        .order_by(Entity.created_at.asc())
        .all()
    )
    counts = {"total": len(entities), "geocoded": 0, "skipped": 0}

    for index, entity in enumerate(entities):
        if any(marker in entity.address for marker in PO_BOX_MARKERS):
            print(f"Skipping PO Box: {entity.name} - {entity.address}")
            counts["skipped"] += 1
            continue

        if index:
            sleep(REQUEST_INTERVAL_SECONDS)
        result = geocode_address(entity.address)
        if result is None:
            print(f"Could not geocode: {entity.name} - {entity.address}")
            counts["skipped"] += 1
            continue

        entity.latitude = result.latitude
        entity.longitude = result.longitude
        db.commit()
        counts["geocoded"] += 1
        print(f"Geocoded: {entity.name} -> {result.latitude}, {result.longitude}")

    return counts


def main():
    db = SessionLocal()
    try:
        counts = geocode_missing(db)
    finally:
        db.close()
    print(f"Done. Geocoded: {counts['geocoded']}  Skipped/failed: {counts['skipped']}  Total: {counts['total']}")


if __name__ == "__main__":
    main()
