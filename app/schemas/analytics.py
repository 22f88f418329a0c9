"""
Pydantic schemas for analytics endpoints
"""
from datetime import datetime
from typing import Optional

from app.schemas.common import CamelModel


class AnalyticsUpdate(CamelModel):
    """Result of a completed test, folded into the user's aggregate"""
    test_id: Optional[str] = None
    score: Optional[float] = None
    total_marks: Optional[float] = None
    time_taken: Optional[int] = None


class AnalyticsOut(CamelModel):
    """Per-user rolling aggregate"""
    id: str
    user_id: str
    total_tests: int
    total_score: float
    total_time_spent: int
    accuracy: float
    average_score: float
    updated_at: Optional[datetime] = None
