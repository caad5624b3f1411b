"""Startup reconciliation of the content store.

Runs on every process start and is safe to repeat:

1. ensure the operator accounts exist;
2. read the development flags and, when the force-reset switch is armed,
   wipe the content collections;
3. seed only when the services collection is empty or a wipe just ran:
   upload the seed images, upsert the site globals, create the default
   services, reviews and pricing tiers, then record the seed.

Nothing escapes ``reconcile``: a failure is logged and reported so the web
server still starts and serves whatever content exists.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, Iterable, List, Optional

from app.seeding import defaults
from app.seeding.admins import ProvisionResult, provision_admins
from app.seeding.assets import AssetLoader
from app.seeding.media import MediaRegistrar
from app.seeding.reset import WipeReport, mark_seeded, read_development_flags, wipe_collections
from app.settings import AdminAccount
from app.store import ContentStore

log = logging.getLogger("seed")


class ReconcileState(str, Enum):
    NEEDS_ADMIN = "needs_admin"
    CHECK_RESET_FLAG = "check_reset_flag"
    CHECK_CONTENT_EMPTY = "check_content_empty"
    SKIP = "skip"
    SEED = "seed"
    DONE = "done"


@dataclass
class SeedReport:
    states: List[ReconcileState] = field(default_factory=list)
    accounts: List[ProvisionResult] = field(default_factory=list)
    wipe: Optional[WipeReport] = None
    seeded: bool = False
    media: Dict[str, Optional[int]] = field(default_factory=dict)
    seed_count: Optional[int] = None
    error: Optional[str] = None

    def enter(self, state: ReconcileState) -> None:
        self.states.append(state)

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        return {
            "states": [s.value for s in self.states],
            "accounts": [{"email": r.email, "outcome": r.outcome.value} for r in self.accounts],
            "wiped": dict(self.wipe.deleted) if self.wipe else {},
            "wipe_failures": [f.collection for f in self.wipe.failures] if self.wipe else [],
            "seeded": self.seeded,
            "media": dict(self.media),
            "seed_count": self.seed_count,
            "error": self.error,
        }


def _register_assets(registrar: MediaRegistrar, loader: AssetLoader) -> Dict[str, Optional[int]]:
    return {spec.key: registrar.register_asset(loader, spec) for spec in defaults.SEED_ASSETS}


def _seed_globals(store: ContentStore, media: Dict[str, Optional[int]]) -> None:
    store.update_global("site-settings", defaults.site_settings(media))
    store.update_global("hero", defaults.hero(media))
    store.update_global("before-after", defaults.before_after(media))
    store.update_global("section-visibility", defaults.section_visibility())


def _seed_collections(store: ContentStore, media: Dict[str, Optional[int]]) -> None:
    for service in defaults.SERVICES:
        store.create("services", dict(service, image_id=media.get(f"service:{service['slug']}")))
    for review in defaults.REVIEWS:
        store.create("reviews", review)
    for tier in defaults.PRICING:
        store.create("pricing", tier)


def reconcile(
    store: ContentStore,
    *,
    accounts: Iterable[AdminAccount],
    loader: AssetLoader,
    wipe_limit: int = 1000,
    now: Optional[datetime] = None,
) -> SeedReport:
    """
    Bring the content store to its seeded baseline without duplicating data.

    Parameters
    ----------
    store : app.store.ContentStore
        Content store.
    accounts : iterable of AdminAccount
        Operator accounts to ensure.
    loader : app.seeding.assets.AssetLoader
        Source of the seed images.
    wipe_limit : int
        Page cap per collection when a force reset wipes data.
    now : datetime | None
        Timestamp recorded as the seed date; current UTC time when omitted.

    Returns
    -------
    SeedReport
        What ran; ``error`` is set when the run stopped early.
    """
    report = SeedReport()
    try:
        report.enter(ReconcileState.NEEDS_ADMIN)
        report.accounts = provision_admins(store, accounts)

        report.enter(ReconcileState.CHECK_RESET_FLAG)
        flags = read_development_flags(store)
        if flags.force_reset_armed:
            log.warning("Force reseed requested, wiping content collections")
            report.wipe = wipe_collections(store, limit=wipe_limit)
        elif flags.force_reseed_on_next_start:
            log.warning("Force reseed ignored: development mode is off")

        report.enter(ReconcileState.CHECK_CONTENT_EMPTY)
        if report.wipe is None and store.count("services") > 0:
            log.info("Data already exists, skipping seed")
            report.enter(ReconcileState.SKIP)
            report.seed_count = flags.seed_count
            report.enter(ReconcileState.DONE)
            return report

        report.enter(ReconcileState.SEED)
        log.info("Seeding initial data (version %s)...", defaults.SEED_VERSION)
        registrar = MediaRegistrar(store)
        report.media = _register_assets(registrar, loader)
        _seed_globals(store, report.media)
        _seed_collections(store, report.media)
        flags = mark_seeded(store, flags, now)
        report.seeded = True
        report.seed_count = flags.seed_count
        log.info("Seed data created successfully (seed #%d)", flags.seed_count)
        report.enter(ReconcileState.DONE)
    except Exception as exc:
        log.exception("Content reconciliation failed: %s", exc)
        report.error = str(exc)
    return report
