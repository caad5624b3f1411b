"""
Router-level dependencies for request parsing and validation.
"""
from fastapi import HTTPException, Request
from app.schemas import Credentials


async def get_credentials(request: Request) -> Credentials:
    """
    Extracts credentials from JSON or form data and validates them into a Credentials model.

    OAuth2 password forms send the email in the ``username`` field; both names are accepted.
    """
    content_type = (request.headers.get("content-type") or "").lower()
    if "application/json" in content_type:
        data = await request.json()
        if not isinstance(data, dict):
            raise HTTPException(status_code=422, detail="Email and password required")
    elif "application/x-www-form-urlencoded" in content_type or "multipart/form-data" in content_type:
        data = dict(await request.form())
    else:
        raise HTTPException(status_code=415, detail="Unsupported Media Type")
    email = data.get("email") or data.get("username")
    password = data.get("password")
    if not email or not password:
        raise HTTPException(status_code=422, detail="Email and password required")
    return Credentials(email=str(email), password=str(password))
