"""Run the content store reconciliation once, outside the web server.

This script is safe to run multiple times; it provisions missing operator
accounts and seeds content only when the services collection is empty or the
force-reseed switch is armed.

Usage:
  python scripts/seed_site.py
"""
import json
import logging
import sys
from pathlib import Path

# Ensure repo root is importable
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app import models  # noqa: F401,E402
from app.database import Base, SessionLocal, engine  # noqa: E402
from app.startup_seed import run_reconciliation  # noqa: E402

logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")


def main() -> int:
    # Ensure tables exist
    Base.metadata.create_all(bind=engine)
    report = run_reconciliation(SessionLocal)
    print(json.dumps(report.to_dict(), indent=2))
    return 0 if report.ok else 1


if __name__ == "__main__":
    sys.exit(main())
