"""Startup entry point for the content store reconciliation.

Wires settings, a database session, the local asset source and the
configured operator accounts into ``reconcile``. Used by the application
lifespan, the admin reseed endpoint and ``scripts/seed_site.py``.
"""

from typing import Callable, Optional

from sqlalchemy.orm import Session

from app.database import SessionLocal
from app.seeding.admins import resolve_accounts
from app.seeding.assets import AssetLoader
from app.seeding.reconciler import SeedReport, reconcile
from app.settings import Settings, get_settings
from app.store import ContentStore


def reconcile_session(db: Session, settings: Optional[Settings] = None) -> SeedReport:
    """
    Run one reconciliation pass on an open session.

    Parameters
    ----------
    db : sqlalchemy.orm.Session
        Session owned by the caller.
    settings : Settings | None
        Runtime settings; the cached application settings when omitted.

    Returns
    -------
    SeedReport
        Outcome of the pass. Failures are reported, never raised.
    """
    settings = settings or get_settings()
    return reconcile(
        ContentStore(db),
        accounts=resolve_accounts(settings),
        loader=AssetLoader(settings.assets_dir),
        wipe_limit=settings.seed_wipe_limit,
    )


def run_reconciliation(
    session_factory: Callable[[], Session] = SessionLocal,
    settings: Optional[Settings] = None,
) -> SeedReport:
    """Run one reconciliation pass in a fresh session that is closed afterwards."""
    db = session_factory()
    try:
        return reconcile_session(db, settings)
    finally:
        db.close()
