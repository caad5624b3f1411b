r"""Arm the force-reseed switch so the next start wipes and reseeds content.

Sets ``is_development`` and ``force_reseed_on_next_start`` on the
development-settings global. Pass ``--now`` to run the reconciliation
immediately instead of waiting for a restart.

Usage:
  python scripts/force_reseed.py [--now]
"""
import argparse
import logging
import sys
from pathlib import Path

# Ensure repo root is on sys.path when running directly
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app import models  # noqa: F401,E402
from app.database import Base, SessionLocal, engine  # noqa: E402
from app.seeding.reset import DEVELOPMENT_SETTINGS  # noqa: E402
from app.startup_seed import run_reconciliation  # noqa: E402
from app.store import ContentStore  # noqa: E402

log = logging.getLogger("reseed")
logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--now", action="store_true", help="run the reconciliation right away")
    args = parser.parse_args()

    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        ContentStore(db).update_global(
            DEVELOPMENT_SETTINGS,
            {"is_development": True, "force_reseed_on_next_start": True},
        )
    finally:
        db.close()
    log.info("Force reseed armed; ALL content will be wiped on the next start")

    if not args.now:
        return 0
    report = run_reconciliation(SessionLocal)
    log.info("Reseed ran: seeded=%s seed_count=%s error=%s", report.seeded, report.seed_count, report.error)
    return 0 if report.ok else 1


if __name__ == "__main__":
    sys.exit(main())
