"""
Pydantic schemas for user profile endpoints
"""
from datetime import datetime
from typing import Optional

from app.schemas.common import CamelModel


class UserProfile(CamelModel):
    id: str
    email: str
    name: Optional[str] = None
    role: str
    picture: Optional[str] = None
    created_at: Optional[datetime] = None


class UserUpdate(CamelModel):
    """Partial profile update - only provided fields change"""
    name: Optional[str] = None
    picture: Optional[str] = None
