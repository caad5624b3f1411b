import json
import os
import tempfile
from typing import Dict

# Settings are read once at import time; configure them before importing app.
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-carpet-ninja-site-0123456789")
os.environ["ENVIRONMENT"] = "test"
os.environ["SEED_ON_STARTUP"] = "false"
os.environ["ASSETS_DIR"] = ""
os.environ.setdefault("SITE_DB_PATH", os.path.join(tempfile.mkdtemp(prefix="site-test-"), "site.db"))
os.environ.setdefault(
    "ADMIN_ACCOUNTS",
    "owner@carpet-ninja.com:Owner!Pass123;editor@carpet-ninja.com:Editor!Pass123:editor",
)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app import models
from app.database import Base, get_db
from app.seeding.defaults import SEED_ASSETS
from app.settings import AdminAccount
from app.store import ContentStore
from app.utils.security import create_access_token, hash_password

from app.main import app


def _memory_engine(create_schema: bool = True):
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    if create_schema:
        Base.metadata.create_all(bind=engine)
    return engine


@pytest.fixture
def session_factory():
    """Sessions bound to a fresh in-memory database with the full schema."""
    engine = _memory_engine()
    try:
        yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    finally:
        engine.dispose()


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def store(db_session) -> ContentStore:
    return ContentStore(db_session)


@pytest.fixture
def broken_store():
    """A store whose database has no tables, so every call is unavailable."""
    engine = _memory_engine(create_schema=False)
    db = sessionmaker(bind=engine)()
    try:
        yield ContentStore(db)
    finally:
        db.close()
        engine.dispose()


@pytest.fixture
def accounts():
    return (AdminAccount(email="owner@carpet-ninja.com", password="Owner!Pass123"),)


@pytest.fixture
def assets_dir(tmp_path):
    """A local asset source holding a small fake file for every seed asset."""
    for spec in SEED_ASSETS:
        (tmp_path / spec.filename).write_bytes(b"\x89PNG\r\n\x1a\n" + spec.filename.encode())
    return tmp_path


@pytest.fixture
def client(session_factory):
    """TestClient whose get_db dependency uses the in-memory database."""

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_db, None)


def _create_operator(db, email: str, password: str, roles) -> models.User:
    user = models.User(email=email, hashed_password=hash_password(password), roles=json.dumps(list(roles)))
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def admin_auth_header(db_session) -> Dict[str, str]:
    """Authorization header for an operator holding the admin role."""
    admin = _create_operator(db_session, "test_admin@carpet-ninja.com", "Admin!Pass123", ["admin"])
    token = create_access_token({"sub": admin.email})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def editor_auth_header(db_session) -> Dict[str, str]:
    editor = _create_operator(db_session, "test_editor@carpet-ninja.com", "Editor!Pass123", ["editor"])
    token = create_access_token({"sub": editor.email})
    return {"Authorization": f"Bearer {token}"}
