"""
Centralized runtime settings for the Carpet Ninja site service.

This module provides a single validated settings object used across the
application. All configuration is sourced from environment variables and
optional .env files.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from dotenv import load_dotenv


VALID_ROLES = ("admin", "editor")
DEVELOPMENT_ENVIRONMENTS = {"dev", "development", "test"}


def _to_bool(value: Optional[str]) -> bool:
    """
    Convert a string environment value to a boolean.

    Parameters
    ----------
    value : Optional[str]
        The environment variable value.

    Returns
    -------
    bool
        True if the value represents a truthy string, otherwise False.
    """
    if value is None:
        return False
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class AdminAccount:
    """
    One operator account to provision at startup.

    Attributes
    ----------
    email : str
        Unique login email, lower-cased.
    password : str
        Plain-text password, hashed before it is stored.
    roles : tuple[str, ...]
        Role set granted on creation.
    generated : bool
        True when the password was generated because none was configured.
    """

    email: str
    password: str
    roles: Tuple[str, ...] = ("admin",)
    generated: bool = False


@dataclass(frozen=True)
class Settings:
    """
    Parsed and validated runtime settings.

    Attributes
    ----------
    environment : str
        Deployment environment name; dev and test count as development.
    secret_key : str
        Application secret key used to sign access tokens.
    access_token_expire_minutes : int
        JWT access token lifetime in minutes.
    site_db_path : str
        Filesystem path of the SQLite content store.
    assets_dir : Optional[str]
        Directory holding seed images, or None when no filesystem is available.
    admin_accounts : tuple[AdminAccount, ...]
        Operator accounts ensured on every start.
    seed_on_startup : bool
        Run the content reconciliation during application startup.
    seed_wipe_limit : int
        Maximum rows fetched per collection when a force reseed wipes data.
    contact_duplicate_window_seconds : int
        Window in which an identical contact submission is rejected.
    allowed_origins : List[str]
        CORS allowlist.
    """

    environment: str
    secret_key: str
    access_token_expire_minutes: int
    site_db_path: str
    assets_dir: Optional[str]
    admin_accounts: Tuple[AdminAccount, ...]
    seed_on_startup: bool
    seed_wipe_limit: int
    contact_duplicate_window_seconds: int
    allowed_origins: List[str] = field(default_factory=list)

    @property
    def is_development(self) -> bool:
        return self.environment.lower() in DEVELOPMENT_ENVIRONMENTS

    def validate(self) -> None:
        """
        Validate required settings and cross-field constraints.

        Raises
        ------
        ValueError
            If required fields are missing or constraints are violated.
        """
        if not self.secret_key or len(self.secret_key) < 32:
            raise ValueError("SECRET_KEY must be set and at least 32 characters long.")
        if self.access_token_expire_minutes <= 0:
            raise ValueError("ACCESS_TOKEN_EXPIRE_MINUTES must be a positive integer.")
        if self.seed_wipe_limit <= 0:
            raise ValueError("SEED_WIPE_LIMIT must be a positive integer.")
        if not self.is_development and not self.admin_accounts:
            raise ValueError(
                "ADMIN_ACCOUNTS or ADMIN_EMAIL/ADMIN_PASSWORD must be set outside development."
            )
        for account in self.admin_accounts:
            if "@" not in account.email:
                raise ValueError(f"Invalid admin email: {account.email!r}")
            if not account.password:
                raise ValueError(f"Admin password missing for {account.email}")
            unknown = [r for r in account.roles if r not in VALID_ROLES]
            if unknown:
                raise ValueError(f"Unknown roles for {account.email}: {', '.join(unknown)}")


_settings: Optional[Settings] = None


def _default_allowed_origins() -> List[str]:
    """
    Provide default CORS origins for local development and the deployed site.

    Returns
    -------
    list[str]
        Default allowed origins.
    """
    return [
        "http://localhost:3000",
        "http://localhost:8000",
        "https://carpet-ninja.vercel.app",
    ]


def _repo_root() -> Path:
    return Path(__file__).resolve().parents[1]


def _resolve_assets_dir() -> Optional[str]:
    """
    Resolve the seed asset directory from the environment or the repo public folder.

    Returns
    -------
    str | None
        Directory path, or None when no local asset source exists.
    """
    env_dir = os.getenv("ASSETS_DIR")
    if env_dir is not None:
        return env_dir.strip() or None
    public = _repo_root() / "public"
    return str(public) if public.is_dir() else None


def _resolve_site_db_path() -> str:
    """
    Resolve the SQLite path from the environment, a writable /data mount,
    or fall back to the repo-local data directory.
    """
    env_path = os.getenv("SITE_DB_PATH")
    if env_path:
        return str(Path(env_path).expanduser().resolve())
    data_mount = Path("/data")
    if data_mount.exists() and os.access(data_mount, os.W_OK):
        return str(data_mount / "site.db")
    return str(_repo_root() / "data" / "site.db")


def parse_admin_accounts(raw: str) -> List[AdminAccount]:
    """
    Parse ``email:password[:role+role]`` entries separated by semicolons.

    The password may itself contain colons; a trailing segment is only
    treated as roles when every ``+``-separated name is a known role.

    Parameters
    ----------
    raw : str
        Raw ADMIN_ACCOUNTS value.

    Returns
    -------
    list[AdminAccount]
        Parsed accounts in declaration order.
    """
    accounts: List[AdminAccount] = []
    for entry in raw.split(";"):
        entry = entry.strip()
        if not entry:
            continue
        email, _, rest = entry.partition(":")
        password, sep, tail = rest.rpartition(":")
        roles: Tuple[str, ...] = ("admin",)
        candidate = tuple(r.strip() for r in tail.split("+") if r.strip())
        if sep and candidate and all(r in VALID_ROLES for r in candidate):
            roles = candidate
        else:
            password = rest
        accounts.append(AdminAccount(email=email.strip().lower(), password=password, roles=roles))
    return accounts


def _load_admin_accounts() -> Tuple[AdminAccount, ...]:
    accounts = parse_admin_accounts(os.getenv("ADMIN_ACCOUNTS", ""))
    single_email = (os.getenv("ADMIN_EMAIL") or "").strip().lower()
    if single_email and all(a.email != single_email for a in accounts):
        accounts.append(AdminAccount(email=single_email, password=os.getenv("ADMIN_PASSWORD", "")))
    return tuple(accounts)


def _load_settings() -> Settings:
    """
    Load and validate settings from environment variables.

    Returns
    -------
    Settings
        The validated settings instance.
    """
    load_dotenv(override=False)

    allowed_raw = os.getenv("ALLOWED_ORIGINS", "")
    allowed = [o.strip() for o in allowed_raw.split(",") if o.strip()] or _default_allowed_origins()

    settings = Settings(
        environment=os.getenv("ENVIRONMENT", "dev").strip() or "dev",
        secret_key=os.getenv("SECRET_KEY", ""),
        access_token_expire_minutes=int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60") or "0"),
        site_db_path=_resolve_site_db_path(),
        assets_dir=_resolve_assets_dir(),
        admin_accounts=_load_admin_accounts(),
        seed_on_startup=_to_bool(os.getenv("SEED_ON_STARTUP", "true")),
        seed_wipe_limit=int(os.getenv("SEED_WIPE_LIMIT", "1000") or "0"),
        contact_duplicate_window_seconds=int(os.getenv("CONTACT_DUPLICATE_WINDOW_SECONDS", "60") or "0"),
        allowed_origins=allowed,
    )
    settings.validate()
    return settings


def get_settings() -> Settings:
    """
    Return a cached settings instance.

    Returns
    -------
    Settings
        The validated settings object.
    """
    global _settings
    if _settings is None:
        _settings = _load_settings()
    return _settings
