"""
Pydantic schemas for authentication requests and responses
"""
from typing import Optional

from app.schemas.common import CamelModel


class RegisterRequest(CamelModel):
    """Email/password registration"""
    email: Optional[str] = None
    password: Optional[str] = None
    name: Optional[str] = None


class LoginRequest(CamelModel):
    email: Optional[str] = None
    password: Optional[str] = None


class GoogleAuthRequest(CamelModel):
    """Profile forwarded by the frontend after Google sign-in"""
    email: Optional[str] = None
    google_id: Optional[str] = None
    name: Optional[str] = None
    picture: Optional[str] = None


class AuthUser(CamelModel):
    """Public view of an authenticated identity (user or guest)"""
    id: str
    email: Optional[str] = None
    name: Optional[str] = None
    role: str
    picture: Optional[str] = None


class AuthResponse(CamelModel):
    user: AuthUser
    token: str


class VerifyResponse(CamelModel):
    user: AuthUser
