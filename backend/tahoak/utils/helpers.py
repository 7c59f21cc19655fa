import os
import re
import uuid
from datetime import datetime, timezone

from fastapi import UploadFile, HTTPException

from tahoak.config import settings

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

IMAGE_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
}


def new_id() -> str:
    return uuid.uuid4().hex


def utcnow() -> datetime:
    # Naive UTC; SQLite drops tzinfo on the way back.
    return datetime.now(timezone.utc).replace(tzinfo=None)


def is_valid_email(value: str | None) -> bool:
    return bool(value) and EMAIL_RE.match(value) is not None


LIKE_ESCAPE = "\\"


def like_pattern(term: str) -> str:
    """Substring pattern for ``ilike(..., escape=LIKE_ESCAPE)``; user text never acts as a wildcard."""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def generate_slug(text: str) -> str:
    slug = str(text or "").lower().strip()
    slug = re.sub(r"[^\w\s-]", "", slug)
    slug = re.sub(r"[\s_-]+", "-", slug)
    return slug.strip("-")


def validate_image(file: UploadFile) -> str:
    content_type = (file.content_type or "").lower()
    if content_type not in settings.ALLOWED_IMAGE_TYPES:
        raise HTTPException(status_code=400, detail="Invalid file type. Allowed: JPEG, PNG, WebP")
    return IMAGE_EXTENSIONS.get(content_type, "png")


async def save_image(file: UploadFile, subfolder: str, basename: str) -> dict:
    ext = validate_image(file)
    content = await file.read()
    if len(content) > settings.MAX_IMAGE_SIZE:
        raise HTTPException(status_code=400, detail="File size exceeds 5MB limit")

    folder = os.path.join(settings.UPLOAD_DIR, subfolder)
    os.makedirs(folder, exist_ok=True)

    filename = f"{basename}.{ext}"
    path = os.path.join(folder, filename)

    with open(path, "wb") as f:
        f.write(content)

    return {
        "filename": file.filename,
        "path": path,
        "url": f"/uploads/{subfolder}/{filename}".replace("\\", "/"),
        "size": len(content),
    }
