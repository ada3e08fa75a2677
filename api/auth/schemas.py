"""
Auth API schemas (request models).
"""

from __future__ import annotations

from pydantic import BaseModel, EmailStr, Field


class SignupRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    name: str = Field(..., min_length=3)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
