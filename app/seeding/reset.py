"""Force-reset switch stored in the ``development-settings`` global.

Operators arm the switch by setting ``is_development`` and
``force_reseed_on_next_start``. The reconciler wipes the content collections
on the next start, reseeds, then clears the flag so one operator action
wipes exactly once.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from app.errors import PartialCollectionWipeFailure, SeedError
from app.seeding.defaults import SEED_VERSION
from app.store import ContentStore

log = logging.getLogger("seed")

DEVELOPMENT_SETTINGS = "development-settings"

WIPE_ORDER = ("services", "reviews", "pricing", "contact-requests", "media")

# Global slug -> top-level fields that hold media ids.
_MEDIA_FIELDS = {
    "site-settings": ("logo", "favicon"),
    "hero": ("hero_image", "logo"),
}


@dataclass
class DevelopmentFlags:
    is_development: bool = False
    allow_data_reset: bool = False
    force_reseed_on_next_start: bool = False
    last_seed_date: Optional[str] = None
    seed_count: int = 0
    seed_version: Optional[str] = None

    @property
    def force_reset_armed(self) -> bool:
        return self.is_development and self.force_reseed_on_next_start

    @classmethod
    def from_payload(cls, payload: Optional[Dict[str, Any]]) -> "DevelopmentFlags":
        payload = payload or {}
        try:
            seed_count = int(payload.get("seed_count") or 0)
        except (TypeError, ValueError):
            seed_count = 0
        return cls(
            is_development=bool(payload.get("is_development")),
            allow_data_reset=bool(payload.get("allow_data_reset")),
            force_reseed_on_next_start=bool(payload.get("force_reseed_on_next_start")),
            last_seed_date=payload.get("last_seed_date"),
            seed_count=seed_count,
            seed_version=payload.get("seed_version"),
        )

    def to_payload(self) -> Dict[str, Any]:
        return {
            "is_development": self.is_development,
            "allow_data_reset": self.allow_data_reset,
            "force_reseed_on_next_start": self.force_reseed_on_next_start,
            "last_seed_date": self.last_seed_date,
            "seed_count": self.seed_count,
            "seed_version": self.seed_version,
        }


@dataclass
class WipeReport:
    deleted: Dict[str, int] = field(default_factory=dict)
    failures: List[PartialCollectionWipeFailure] = field(default_factory=list)


def read_development_flags(store: ContentStore) -> DevelopmentFlags:
    """
    Read the development flags, failing open to "no development, no reset".
    """
    try:
        payload = store.find_global(DEVELOPMENT_SETTINGS)
    except SeedError as exc:
        log.warning("Could not read %s, assuming defaults: %s", DEVELOPMENT_SETTINGS, exc)
        return DevelopmentFlags()
    return DevelopmentFlags.from_payload(payload)


def wipe_collection(store: ContentStore, collection: str, limit: int) -> int:
    """
    Delete up to ``limit`` records of one collection.

    Raises
    ------
    app.errors.PartialCollectionWipeFailure
        If fetching or deleting fails part way.
    """
    deleted = 0
    try:
        for row in store.find(collection, limit=limit):
            if store.delete(collection, row.id):
                deleted += 1
    except SeedError as exc:
        raise PartialCollectionWipeFailure(collection, deleted, exc) from exc
    return deleted


def prune_media_references(store: ContentStore) -> None:
    """
    Null out media ids in the site globals that point at deleted media.
    """
    for slug, fields in _MEDIA_FIELDS.items():
        payload = store.find_global(slug)
        if payload is None:
            continue
        stale = {
            name: None
            for name in fields
            if payload.get(name) is not None and store.get("media", payload[name]) is None
        }
        if stale:
            store.update_global(slug, stale)

    gallery = store.find_global("before-after")
    if gallery is not None:
        comparisons = gallery.get("comparisons") or []
        kept = [
            c for c in comparisons
            if store.get("media", c.get("before_image") or 0) is not None
            and store.get("media", c.get("after_image") or 0) is not None
        ]
        if len(kept) != len(comparisons):
            store.update_global("before-after", {"comparisons": kept})


def wipe_collections(store: ContentStore, limit: int = 1000) -> WipeReport:
    """
    Wipe every content collection independently, then repair media references.

    Parameters
    ----------
    store : app.store.ContentStore
        Content store.
    limit : int
        Page cap per collection.

    Returns
    -------
    WipeReport
        Rows deleted per collection and the collections that failed.
    """
    report = WipeReport()
    for collection in WIPE_ORDER:
        try:
            report.deleted[collection] = wipe_collection(store, collection, limit)
            log.info("Wiped %s: %d records", collection, report.deleted[collection])
        except PartialCollectionWipeFailure as exc:
            report.deleted[collection] = exc.deleted
            report.failures.append(exc)
            log.warning("%s", exc)
    try:
        prune_media_references(store)
    except SeedError as exc:
        log.warning("Could not prune media references after wipe: %s", exc)
    return report


def mark_seeded(store: ContentStore, flags: DevelopmentFlags, now: Optional[datetime] = None) -> DevelopmentFlags:
    """
    Record a successful seed: clear the switch, stamp the date, bump the counter.
    """
    now = now or datetime.now(timezone.utc)
    flags.force_reseed_on_next_start = False
    flags.last_seed_date = now.isoformat()
    flags.seed_count += 1
    flags.seed_version = SEED_VERSION
    store.update_global(DEVELOPMENT_SETTINGS, flags.to_payload())
    return flags
