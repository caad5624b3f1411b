"""
Admin API (admin role required).

Exposes the development settings that arm the force-reseed switch, a manual
reconciliation trigger, and read access to contact requests and operators.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app import crud, models, schemas
from app.database import get_db
from app.errors import StoreError
from app.seeding.reset import DEVELOPMENT_SETTINGS, DevelopmentFlags
from app.startup_seed import reconcile_session
from app.store import ContentStore
from app.utils.security import get_admin_user

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.get("/development-settings")
def admin_get_development_settings(
    _: models.User = Depends(get_admin_user),
    db: Session = Depends(get_db),
):
    try:
        payload = ContentStore(db).find_global(DEVELOPMENT_SETTINGS)
    except StoreError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc))
    return DevelopmentFlags.from_payload(payload).to_payload()


@router.patch("/development-settings")
def admin_update_development_settings(
    body: schemas.DevelopmentSettingsUpdate,
    _: models.User = Depends(get_admin_user),
    db: Session = Depends(get_db),
):
    """Toggle development mode and the force-reseed switch; other fields are read-only."""
    changes = body.model_dump(exclude_none=True)
    store = ContentStore(db)
    try:
        if changes:
            store.update_global(DEVELOPMENT_SETTINGS, changes)
        payload = store.find_global(DEVELOPMENT_SETTINGS)
    except StoreError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc))
    return DevelopmentFlags.from_payload(payload).to_payload()


@router.post("/reseed")
def admin_run_reconciliation(
    _: models.User = Depends(get_admin_user),
    db: Session = Depends(get_db),
):
    """Run the startup reconciliation now and return its report."""
    return reconcile_session(db).to_dict()


@router.get("/contact-requests", response_model=List[schemas.ContactRequestRead])
def admin_list_contact_requests(
    status_filter: Optional[str] = None,
    limit: int = 100,
    _: models.User = Depends(get_admin_user),
    db: Session = Depends(get_db),
):
    rows = crud.list_contact_requests(db, status=status_filter, limit=max(1, min(limit, 500)))
    return [r.to_dict() for r in rows]


@router.get("/users", response_model=List[schemas.UserRead])
def admin_list_users(
    _: models.User = Depends(get_admin_user),
    db: Session = Depends(get_db),
):
    return [u.to_dict() for u in crud.list_users(db)]
