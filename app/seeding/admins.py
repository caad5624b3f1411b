"""Operator account provisioning.

Accounts are keyed by email. Missing accounts are created; existing accounts
are never touched, so credentials changed by an operator after the first boot
survive every restart.
"""

from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from app.settings import AdminAccount, Settings
from app.store import ContentStore
from app.utils.security import hash_password

log = logging.getLogger("seed")

DEV_ADMIN_EMAIL = "admin@carpet-ninja.com"


class ProvisionOutcome(str, Enum):
    CREATED = "created"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class ProvisionResult:
    email: str
    outcome: ProvisionOutcome
    detail: Optional[str] = None


def resolve_accounts(settings: Settings) -> Tuple[AdminAccount, ...]:
    """
    Return the configured accounts, or one generated account in development.

    Settings validation already rejects an empty list outside development.
    """
    if settings.admin_accounts:
        return settings.admin_accounts
    if not settings.is_development:
        return ()
    return (AdminAccount(email=DEV_ADMIN_EMAIL, password=secrets.token_urlsafe(12), generated=True),)


def provision_admins(store: ContentStore, accounts: Iterable[AdminAccount]) -> List[ProvisionResult]:
    """
    Ensure one operator account exists per email.

    Parameters
    ----------
    store : app.store.ContentStore
        Content store.
    accounts : iterable of AdminAccount
        Accounts to ensure, processed in order.

    Returns
    -------
    list[ProvisionResult]
        One result per account; a failure never stops the remaining entries.
    """
    results: List[ProvisionResult] = []
    for account in accounts:
        email = account.email.strip().lower()
        try:
            if store.find("users", where={"email": email}, limit=1):
                log.info("Admin user %s already exists", email)
                results.append(ProvisionResult(email, ProvisionOutcome.SKIPPED))
                continue
            store.create(
                "users",
                {
                    "email": email,
                    "hashed_password": hash_password(account.password),
                    "roles": list(account.roles),
                },
            )
        except Exception as exc:
            log.error("Failed to create admin user %s: %s", email, exc)
            results.append(ProvisionResult(email, ProvisionOutcome.FAILED, str(exc)))
            continue
        if account.generated:
            log.warning("Created development admin %s with generated password %s", email, account.password)
        else:
            log.info("Created admin user %s (roles: %s)", email, ", ".join(account.roles))
        results.append(ProvisionResult(email, ProvisionOutcome.CREATED))
    return results
