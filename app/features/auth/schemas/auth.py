from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6, description="Password must be at least 6 characters")


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class PasswordResetRequest(BaseModel):
    email: EmailStr = Field(..., description="Email address of the user")


class AuthUser(BaseModel):
    """User returned by the identity provider after registration"""
    uid: str
    email: str
    id_token: Optional[str] = None
    refresh_token: Optional[str] = None


class LoginResult(BaseModel):
    uid: str
    email: str
