"""
Security utilities for operator password hashing and JWT-based authentication.

- Uses bcrypt_sha256 for new password hashes (solves bcrypt 72-byte limit).
- Still verifies plain bcrypt hashes for accounts created by older tooling.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from app import crud, database, models
from app.settings import get_settings

_pwd_context = CryptContext(
    schemes=["bcrypt_sha256", "bcrypt"],
    default="bcrypt_sha256",
    deprecated="auto",
)

_settings = get_settings()

_ALGORITHM = "HS256"

_oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")


def hash_password(password: str) -> str:
    """
    Return a secure hash for the given plain-text password.
    """
    return _pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Return True if the plain-text password matches the stored hash.
    """
    return _pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict, *, minutes: Optional[int] = None) -> str:
    """
    Create and sign a JWT access token with an expiration claim.
    """
    exp_minutes = minutes if minutes is not None else _settings.access_token_expire_minutes
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + timedelta(minutes=exp_minutes)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, _settings.secret_key, algorithm=_ALGORITHM)


def _decode_token(token: str) -> dict:
    return jwt.decode(token, _settings.secret_key, algorithms=[_ALGORITHM])


def get_current_user(
    token: str = Depends(_oauth2_scheme),
    db: Session = Depends(database.get_db),
) -> models.User:
    """
    Return the operator derived from a bearer token.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = _decode_token(token)
        email = payload.get("sub")
        if not email:
            raise credentials_exception
    except JWTError:
        raise credentials_exception
    user = crud.get_user_by_email(db, email=email)
    if user is None:
        raise credentials_exception
    return user


def get_admin_user(current_user: models.User = Depends(get_current_user)) -> models.User:
    """Require that the authenticated operator holds the admin role."""
    if "admin" not in current_user.role_list:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin privileges required")
    return current_user
