"""Print row counts of every content collection and the stored globals.

Usage:
  python scripts/db_inspect.py

Optional env:
  SITE_DB_PATH: override path to the SQLite content store
"""
import json
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.database import SQLALCHEMY_DATABASE_URL, SessionLocal  # noqa: E402
from app.errors import StoreError  # noqa: E402
from app.store import COLLECTIONS, GLOBAL_SLUGS, ContentStore  # noqa: E402


def inspect_store() -> None:
    print("=== Inspecting:", SQLALCHEMY_DATABASE_URL)
    db = SessionLocal()
    try:
        store = ContentStore(db)
        print("Row counts:")
        for collection in COLLECTIONS:
            try:
                print(f"  - {collection}: {store.count(collection)} rows")
            except StoreError as e:
                print(f"  - {collection}: error -> {e}")
        print("Globals:")
        for slug in GLOBAL_SLUGS:
            try:
                payload = store.find_global(slug)
            except StoreError as e:
                print(f"  - {slug}: error -> {e}")
                continue
            print(f"  - {slug}: {json.dumps(payload, ensure_ascii=False) if payload is not None else 'missing'}")
    finally:
        db.close()


if __name__ == "__main__":
    inspect_store()
