"""
Devotionals API - User Registration Schemas
===========================================
"""

from pydantic import BaseModel, EmailStr, Field


class UserRegister(BaseModel):
    """Body of POST /api/users/register."""
    email: EmailStr = Field(..., description="Account email address")
    password: str = Field(..., description="Plain-text password; only its hash is stored")


class UserRegisteredResponse(BaseModel):
    """Returned with HTTP 201 Created. Never includes the password hash."""
    message: str = Field(default="User registered successfully")
    id: int
    email: EmailStr
