"""
CarValue Backend — User & Auth Schemas
========================================

What:  Request bodies for signup/signin/update and the public user shape.
Why:   The password hash must never leave the service, so responses are
       built from UserResponse (id + email) rather than the ORM row.
"""

from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class CredentialsRequest(BaseModel):
    """Body of POST /auth/signup and POST /auth/signin."""
    email: EmailStr = Field(description="Account email address")
    password: str = Field(min_length=1, max_length=256, description="Plain-text password")


class UpdateUserRequest(BaseModel):
    """Body of PATCH /auth/{id}. Omitted fields are left unchanged."""
    email: Optional[EmailStr] = Field(default=None)
    password: Optional[str] = Field(default=None, min_length=1, max_length=256)


class UserResponse(BaseModel):
    id: int = Field(description="User identifier")
    email: str = Field(description="Account email address")

    model_config = {"from_attributes": True}
