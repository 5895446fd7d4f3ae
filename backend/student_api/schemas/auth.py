"""
Student API — Auth Schemas
===========================

Both fields are optional at the schema level: a missing email or password
is reported by the service as a 400 "All fields are required", not as a
FastAPI 422.
"""

from typing import Optional

from pydantic import BaseModel, Field


class Credentials(BaseModel):
    """Body of POST /auth/register and POST /auth/login."""
    email: Optional[str] = Field(default=None, description="Login email (unique per user)")
    password: Optional[str] = Field(default=None, description="Plaintext password")


class TokenResponse(BaseModel):
    """Body of a successful POST /auth/login."""
    token: str = Field(description="Signed bearer token, valid for one hour")
