"""List operator accounts in the content store.

Usage:
  python scripts/list_users.py

Optional env:
  SITE_DB_PATH: override path to the SQLite content store
"""
from __future__ import annotations

import sys
from collections import Counter
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from sqlalchemy.orm import Session  # noqa: E402

from app import crud  # noqa: E402
from app.database import SessionLocal  # noqa: E402


def main() -> None:
    db: Session = SessionLocal()
    try:
        users = crud.list_users(db)
        domains = Counter()
        admin_count = 0
        for u in users:
            domain = u.email.split("@", 1)[1] if "@" in u.email else ""
            if domain:
                domains[domain] += 1
            if "admin" in u.role_list:
                admin_count += 1

        print(f"Users: {len(users)} (admins: {admin_count})")
        if domains:
            print("Domains:")
            for dom, cnt in domains.most_common(10):
                print(f"  - {dom}: {cnt}")
        print("\nUser details (id | email | roles | created):")
        for u in users:
            created = u.created_at.isoformat(timespec="seconds") if u.created_at else "-"
            print(f"  {u.id:>3} | {u.email:<30} | {','.join(u.role_list):<12} | {created}")
    finally:
        db.close()


if __name__ == "__main__":
    main()
