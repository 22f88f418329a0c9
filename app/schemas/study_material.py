"""
Pydantic schemas for study materials
"""
from datetime import datetime
from typing import Optional

from app.schemas.common import CamelModel


class StudyMaterialCreate(CamelModel):
    title: Optional[str] = None
    section: Optional[str] = None
    content: Optional[str] = None
    file_url: Optional[str] = None


class StudyMaterialOut(CamelModel):
    id: str
    title: str
    section: str
    content: Optional[str] = None
    file_url: Optional[str] = None
    created_at: Optional[datetime] = None
