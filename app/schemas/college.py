"""
Pydantic schemas for the college directory
"""
from datetime import datetime
from typing import Any, Dict, Optional

from app.schemas.common import CamelModel


class CollegeCreate(CamelModel):
    name: Optional[str] = None
    rank_india: Optional[int] = None
    location: Optional[str] = None
    tier: Optional[str] = None
    cutoff: Optional[Dict[str, Any]] = None
    placements: Optional[Dict[str, Any]] = None
    diversity: Optional[Dict[str, Any]] = None


class CollegeOut(CamelModel):
    id: str
    name: str
    rank_india: Optional[int] = None
    location: Optional[str] = None
    tier: Optional[str] = None
    cutoff: Optional[Dict[str, Any]] = None
    placements: Optional[Dict[str, Any]] = None
    diversity: Optional[Dict[str, Any]] = None
    created_at: Optional[datetime] = None
