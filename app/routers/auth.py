"""
Authentication routes for operator login.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app import crud, models, schemas
from app.database import get_db
from app.routers.deps import get_credentials
from app.utils.security import create_access_token, get_current_user, verify_password

router = APIRouter(prefix="/auth", tags=["Auth"])
_log = logging.getLogger("auth")


@router.post("/login", response_model=schemas.TokenResponse)
async def login_for_access_token(
    credentials: schemas.Credentials = Depends(get_credentials),
    db: Session = Depends(get_db),
) -> dict:
    """
    Authenticate an operator and return a JWT access token.
    """
    user = crud.get_user_by_email(db, email=credentials.email)
    if not user or not verify_password(credentials.password, user.hashed_password):
        _log.info("Failed login for %s", credentials.email)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Incorrect email or password")

    access_token = create_access_token(data={"sub": user.email, "roles": user.role_list})
    return {
        "user_id": user.id,
        "email": user.email,
        "roles": user.role_list,
        "access_token": access_token,
        "token_type": "bearer",
    }


@router.get("/me", response_model=schemas.UserRead)
async def auth_me(current_user: models.User = Depends(get_current_user)) -> dict:
    """Return the current operator's account summary."""
    return current_user.to_dict()
