"""CRUD helpers for operator accounts, site content and contact requests.

Public content reads go through ``ContentStore`` so store failures surface as
``StoreError`` and the routers can fall back to the default dataset. The
helpers here back the authenticated operator routes.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from app import models, schemas


def get_user_by_email(db: Session, email: str) -> Optional[models.User]:
    """
    Return the operator with the given email.

    Parameters
    ----------
    db : sqlalchemy.orm.Session
        Database session.
    email : str
        Login email; compared lower-cased.

    Returns
    -------
    app.models.User | None
        User instance if found, otherwise None.
    """
    return db.query(models.User).filter(models.User.email == email.strip().lower()).first()


def list_users(db: Session) -> List[models.User]:
    return db.query(models.User).order_by(models.User.id.asc()).all()


def create_contact_request(db: Session, payload: schemas.ContactRequestCreate) -> models.ContactRequest:
    """
    Persist a new contact request with status ``new``.

    Parameters
    ----------
    db : sqlalchemy.orm.Session
        Database session.
    payload : app.schemas.ContactRequestCreate
        Validated form payload.

    Returns
    -------
    app.models.ContactRequest
        Newly created request.
    """
    row = models.ContactRequest(
        name=payload.name.strip(),
        email=str(payload.email).strip().lower(),
        phone=(payload.phone or "").strip() or None,
        message=payload.message.strip(),
        source=payload.source or "website",
        status="new",
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def list_contact_requests(db: Session, status: Optional[str] = None, limit: int = 100) -> List[models.ContactRequest]:
    """
    Return contact requests, newest first, optionally filtered by status.
    """
    query = db.query(models.ContactRequest)
    if status:
        query = query.filter(models.ContactRequest.status == status)
    return query.order_by(models.ContactRequest.id.desc()).limit(limit).all()
