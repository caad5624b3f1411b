"""
Public contact form intake.
"""

from __future__ import annotations

import logging
import math
import threading
import time
from typing import Dict

from fastapi import APIRouter, Body, Depends, HTTPException, status
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app import crud, schemas
from app.database import get_db
from app.settings import get_settings

router = APIRouter(prefix="/api", tags=["Contact"])
_log = logging.getLogger("contact")

_settings = get_settings()

# submission key -> time of the last accepted submission
_RECENT_SUBMISSIONS: Dict[str, float] = {}
_RECENT_LOCK = threading.Lock()
_DUPLICATE_WINDOW_SECONDS = _settings.contact_duplicate_window_seconds


def _submission_key(payload: schemas.ContactRequestCreate) -> str:
    return f"{str(payload.email).lower()}:{payload.message.strip()[:50]}"


def _reserve_submission(key: str) -> None:
    """Reserve ``key`` for this submission or raise HTTPException(429).

    Raises if ``key`` was accepted within the window. Entries older than the
    window are pruned on every call. Must be called with ``_RECENT_LOCK`` held.
    """
    now = time.time()
    window_start = now - _DUPLICATE_WINDOW_SECONDS
    for old_key in [k for k, ts in _RECENT_SUBMISSIONS.items() if ts < window_start]:
        del _RECENT_SUBMISSIONS[old_key]
    last = _RECENT_SUBMISSIONS.get(key)
    if last is not None:
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail={
                "error": "Duplicate submission detected. Please wait before submitting again.",
                "wait_seconds": math.ceil(_DUPLICATE_WINDOW_SECONDS - (now - last)),
            },
        )
    _RECENT_SUBMISSIONS[key] = now


@router.post("/contact", status_code=status.HTTP_201_CREATED)
def submit_contact(payload: dict = Body(...), db: Session = Depends(get_db)):
    """
    Store a contact request from the public form.

    Missing fields and malformed emails answer 400; a repeated submission of
    the same email and message within the duplicate window answers 429.
    """
    missing = [k for k in ("name", "email", "message") if not str(payload.get(k) or "").strip()]
    if missing:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Name, email, and message are required")
    try:
        data = schemas.ContactRequestCreate(**payload)
    except ValidationError as exc:
        fields = sorted({str(err["loc"][0]) for err in exc.errors() if err.get("loc")})
        detail = "Invalid email address" if fields == ["email"] else f"Invalid fields: {', '.join(fields)}"
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)

    key = _submission_key(data)
    with _RECENT_LOCK:
        _reserve_submission(key)
    try:
        row = crud.create_contact_request(db, data)
    except SQLAlchemyError as exc:
        db.rollback()
        # Only stored submissions count towards the window.
        with _RECENT_LOCK:
            _RECENT_SUBMISSIONS.pop(key, None)
        _log.error("Failed to store contact request: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to submit contact request. Please try again.",
        )
    _log.info("Contact request %s received from %s", row.id, row.email)
    return {"success": True, "message": "Thank you! We'll get back to you soon.", "id": row.id}
