"""FastAPI application entry point. Registers middleware, API routers and upload serving."""

import logging
import os
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from tahoak.config import settings
from tahoak.database import Base, engine
import tahoak.models  # noqa: F401 - registers model metadata
from tahoak.routers import (
    auth, entities, images, categories, tags, pending_changes, public, admin,
)

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="TahOak Park Collective Directory",
    description="Bilingual local directory with owner-submitted changes and admin moderation",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(entities.router)
app.include_router(images.router)
app.include_router(categories.router)
app.include_router(tags.router)
app.include_router(pending_changes.router)
app.include_router(public.router)
app.include_router(admin.router)


@app.on_event("startup")
def ensure_schema():
    Base.metadata.create_all(bind=engine)


@app.get("/api/health")
def health_check():
    return {"status": "ok", "service": "TahOak Park Collective Directory"}


os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")
