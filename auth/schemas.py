"""
Pydantic schemas for request/response models in the auth module.
"""

from typing import Any, Optional

from pydantic import BaseModel


class UserRegister(BaseModel):
    """Schema for registration payload. Emptiness is checked by the service (400, not 422)."""
    username: Optional[str] = None
    password: Optional[str] = None


class UserLogin(BaseModel):
    """Schema for login request payload."""
    username: Optional[str] = None
    password: Optional[str] = None


class UserOut(BaseModel):
    """Public user record; the password hash has no field here."""
    id: Any
    username: str


class RegisterOut(BaseModel):
    message: str
    user: UserOut


class TokenOut(BaseModel):
    message: str
    token: str
