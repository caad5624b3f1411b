"""
Public read API for the marketing site.

Pages render from these endpoints. When the content store cannot be read the
routes answer with the compiled-in default dataset instead of an error, so
the public site never breaks just because seeding has not run yet.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.errors import StoreError
from app.seeding import defaults
from app.store import ContentStore

router = APIRouter(prefix="/api", tags=["Site"])
_log = logging.getLogger("site")

_LIST_LIMIT = 50

_PUBLIC_GLOBALS = {
    "site-settings": lambda: defaults.site_settings({}),
    "hero": lambda: defaults.hero({}),
    "before-after": lambda: defaults.before_after({}),
    "section-visibility": defaults.section_visibility,
}


def _fallback_collection(collection: str) -> List[Dict[str, Any]]:
    if collection == "services":
        return [dict(item, id=i, image=None) for i, item in enumerate(defaults.SERVICES, start=1)]
    if collection == "reviews":
        return [dict(item, id=i) for i, item in enumerate(defaults.REVIEWS, start=1)]
    return [dict(item, id=i) for i, item in enumerate(defaults.PRICING, start=1)]


def _read_collection(db: Session, collection: str) -> List[Dict[str, Any]]:
    try:
        rows = ContentStore(db).find(collection, limit=_LIST_LIMIT, sort="order")
    except StoreError as exc:
        _log.warning("Serving fallback %s: %s", collection, exc)
        return _fallback_collection(collection)
    return [row.to_dict() for row in rows]


def _read_global(db: Session, slug: str) -> Dict[str, Any]:
    payload = _PUBLIC_GLOBALS[slug]()
    try:
        stored = ContentStore(db).find_global(slug)
    except StoreError as exc:
        _log.warning("Serving fallback %s: %s", slug, exc)
        return payload
    payload.update(stored or {})
    return payload


@router.get("/services")
def list_services(db: Session = Depends(get_db)) -> List[Dict[str, Any]]:
    return _read_collection(db, "services")


@router.get("/reviews")
def list_reviews(db: Session = Depends(get_db)) -> List[Dict[str, Any]]:
    return _read_collection(db, "reviews")


@router.get("/pricing")
def list_pricing(db: Session = Depends(get_db)) -> List[Dict[str, Any]]:
    return _read_collection(db, "pricing")


@router.get("/globals/{slug}")
def get_global(slug: str, db: Session = Depends(get_db)) -> Dict[str, Any]:
    """Return one public configuration singleton merged over its defaults."""
    if slug not in _PUBLIC_GLOBALS:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Unknown global")
    return _read_global(db, slug)


@router.get("/site")
def get_site(db: Session = Depends(get_db)) -> Dict[str, Any]:
    """Return everything the homepage renders in one payload."""
    return {
        "site_settings": _read_global(db, "site-settings"),
        "hero": _read_global(db, "hero"),
        "before_after": _read_global(db, "before-after"),
        "section_visibility": _read_global(db, "section-visibility"),
        "services": _read_collection(db, "services"),
        "reviews": _read_collection(db, "reviews"),
        "pricing": _read_collection(db, "pricing"),
    }


@router.get("/media/{media_id}")
def get_media(media_id: int, db: Session = Depends(get_db)) -> Response:
    """Stream a stored media payload with its MIME type."""
    try:
        row = ContentStore(db).get("media", media_id)
    except StoreError:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Media store unavailable")
    if row is None or row.data is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Media not found")
    return Response(content=row.data, media_type=row.mime_type)
