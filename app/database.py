"""Database setup for the site content store."""

from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from app.settings import get_settings


def _resolve_site_db_path() -> Path:
    path = Path(get_settings().site_db_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


SQLALCHEMY_DATABASE_URL = f"sqlite:///{_resolve_site_db_path()}"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
