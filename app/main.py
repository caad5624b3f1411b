from __future__ import annotations
"""
Main FastAPI application entry point for the Carpet Ninja site service.

This module configures the API, CORS, the startup content reconciliation,
and a health endpoint reporting store reachability.
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from sqlalchemy.orm import Session

from app import models  # noqa: F401  registers tables on Base
from app.database import Base, SessionLocal, engine, get_db
from app.errors import StoreError
from app.routers import admin, auth, contact, site
from app.seeding.reset import read_development_flags
from app.settings import get_settings
from app.startup_seed import run_reconciliation
from app.store import ContentStore

_settings = get_settings()
_log = logging.getLogger("startup")


@asynccontextmanager
async def lifespan(_: FastAPI):
    """
    App lifecycle: create the schema and reconcile seed content before serving.
    """
    try:
        Base.metadata.create_all(bind=engine)
    except Exception as exc:
        # Non-fatal: the site serves fallback content until the store is reachable
        _log.error("Could not create database schema: %s", exc)
    if _settings.seed_on_startup:
        report = run_reconciliation(SessionLocal, _settings)
        if not report.ok:
            _log.warning("Seeding incomplete, will retry on next start: %s", report.error)
    yield


app = FastAPI(redirect_slashes=True, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(site.router)
app.include_router(contact.router)
app.include_router(auth.router)
app.include_router(admin.router)


@app.get("/health")
def health(db: Session = Depends(get_db)) -> JSONResponse:
    """Return service status, store reachability and the seed counter."""
    store = ContentStore(db)
    store_ok = True
    try:
        services = store.count("services")
    except StoreError:
        store_ok = False
        services = None
    flags = read_development_flags(store)
    payload = {
        "status": "ok",
        "environment": _settings.environment,
        "store_ok": store_ok,
        "services": services,
        "seed_count": flags.seed_count,
    }
    return JSONResponse(payload)


@app.get("/")
def root_index() -> Response:
    return Response(content="API OK", media_type="text/plain")


if __name__ == "__main__":
    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=True)
