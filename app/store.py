"""Document-store facade over the SQLAlchemy session.

The seeding routine and the public read API talk to the database through
``ContentStore`` using collection names (``services``, ``media``, ...) and
global slugs (``site-settings``, ``hero``, ...), mirroring the
create/find/update-global/delete operations of a headless CMS.

Every write commits on its own. SQLAlchemy failures are translated into
``StoreUnavailable`` (operational: database unreachable, table missing) or
``StoreError`` (anything else) after rolling the session back.
"""

from __future__ import annotations

import json
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session

from app import models
from app.errors import StoreError, StoreUnavailable


COLLECTIONS = {
    "services": models.Service,
    "reviews": models.Review,
    "pricing": models.PricingTier,
    "contact-requests": models.ContactRequest,
    "media": models.Media,
    "users": models.User,
}

GLOBAL_SLUGS = (
    "site-settings",
    "hero",
    "before-after",
    "section-visibility",
    "development-settings",
)

_JSON_FIELDS = {"features", "roles"}


class ContentStore:
    """
    Collection- and global-oriented access to the content database.

    Parameters
    ----------
    db : sqlalchemy.orm.Session
        Session used for every call; owned by the caller.
    """

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _guard(self, action: str) -> Iterator[None]:
        try:
            yield
        except OperationalError as exc:
            self.db.rollback()
            raise StoreUnavailable(f"{action} failed: {exc.orig}") from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StoreError(f"{action} failed: {exc}") from exc

    @staticmethod
    def _model(collection: str):
        try:
            return COLLECTIONS[collection]
        except KeyError:
            raise ValueError(f"Unknown collection: {collection}") from None

    def count(self, collection: str) -> int:
        """Return the total number of records in a collection."""
        model = self._model(collection)
        with self._guard(f"count {collection}"):
            return self.db.query(model).count()

    def find(
        self,
        collection: str,
        where: Optional[Dict[str, Any]] = None,
        limit: int = 100,
        sort: Optional[str] = None,
    ) -> List[Any]:
        """
        Return up to ``limit`` records matching equality filters.

        Parameters
        ----------
        collection : str
            Collection name.
        where : dict | None
            Column name to value equality filters.
        limit : int
            Maximum rows to return.
        sort : str | None
            Column to sort by before the primary key; primary key order when None.

        Returns
        -------
        list
            Matching ORM rows.
        """
        model = self._model(collection)
        with self._guard(f"find {collection}"):
            query = self.db.query(model)
            for key, value in (where or {}).items():
                query = query.filter(getattr(model, key) == value)
            if sort:
                query = query.order_by(getattr(model, sort).asc(), model.id.asc())
            else:
                query = query.order_by(model.id.asc())
            return query.limit(limit).all()

    def get(self, collection: str, record_id: int) -> Optional[Any]:
        model = self._model(collection)
        with self._guard(f"get {collection}/{record_id}"):
            return self.db.get(model, record_id)

    def create(self, collection: str, data: Dict[str, Any]) -> Any:
        """
        Insert one record and return it with its assigned id.
        """
        model = self._model(collection)
        values = {
            key: json.dumps(value, ensure_ascii=False) if key in _JSON_FIELDS and not isinstance(value, str) else value
            for key, value in data.items()
        }
        with self._guard(f"create {collection}"):
            row = model(**values)
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
            return row

    def delete(self, collection: str, record_id: int) -> bool:
        """Delete one record by id; return False when it was already gone."""
        model = self._model(collection)
        with self._guard(f"delete {collection}/{record_id}"):
            row = self.db.get(model, record_id)
            if row is None:
                return False
            self.db.delete(row)
            self.db.commit()
            return True

    def find_global(self, slug: str) -> Optional[Dict[str, Any]]:
        """Return the payload of a singleton, or None when it was never written."""
        with self._guard(f"find global {slug}"):
            row = self.db.query(models.GlobalRecord).filter(models.GlobalRecord.slug == slug).first()
            return row.to_dict() if row is not None else None

    def update_global(self, slug: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Update-or-create a singleton, merging ``data`` into the stored payload.

        Returns
        -------
        dict
            The stored payload after the merge.
        """
        with self._guard(f"update global {slug}"):
            row = self.db.query(models.GlobalRecord).filter(models.GlobalRecord.slug == slug).first()
            if row is None:
                row = models.GlobalRecord(slug=slug, data="{}")
                self.db.add(row)
            payload = row.to_dict()
            payload.update(data)
            row.data = json.dumps(payload, ensure_ascii=False)
            self.db.commit()
            return payload
