"""
Pydantic schemas for request and response validation.
"""

from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator


class Credentials(BaseModel):
    """
    Operator login payload.
    """

    email: str
    password: str


class TokenResponse(BaseModel):
    user_id: int
    email: str
    roles: List[str]
    access_token: str
    token_type: str = "bearer"


class UserRead(BaseModel):
    """
    Response schema representing an operator account.
    """

    id: int
    email: str
    roles: List[str] = Field(default_factory=list)


class ContactRequestCreate(BaseModel):
    """
    Public contact form submission.
    """

    name: str = Field(min_length=1, max_length=200)
    email: EmailStr
    phone: Optional[str] = Field(default=None, max_length=50)
    message: str = Field(min_length=1, max_length=5000)
    source: Optional[str] = Field(default="website", max_length=100)

    @field_validator("name", "message")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


class ContactRequestRead(BaseModel):
    id: int
    name: str
    email: str
    phone: Optional[str] = None
    message: str
    status: str
    source: Optional[str] = None
    created_at: Optional[str] = None


class DevelopmentSettingsUpdate(BaseModel):
    """
    Operator toggles of the development settings global; omitted fields are unchanged.
    """

    is_development: Optional[bool] = None
    allow_data_reset: Optional[bool] = None
    force_reseed_on_next_start: Optional[bool] = None
