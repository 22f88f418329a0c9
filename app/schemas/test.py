"""
Pydantic schemas for test and question endpoints
"""
from datetime import datetime
from typing import List, Optional

from app.schemas.common import CamelModel


class QuestionCreate(CamelModel):
    """Question as submitted by an admin, including its answer"""
    question_text: str
    options: Optional[List[str]] = None
    correct_answer: Optional[str] = None
    marks: float = 1.0
    explanation: Optional[str] = None


class TestCreate(CamelModel):
    """Schema for publishing a new test with its questions"""
    title: Optional[str] = None
    section: Optional[str] = None
    difficulty: Optional[str] = None
    duration: Optional[int] = None
    total_marks: Optional[float] = None
    questions: List[QuestionCreate] = []


class QuestionPublic(CamelModel):
    """Question as delivered to test takers - no correct answer"""
    id: str
    question_text: str
    options: Optional[List[str]] = None
    marks: Optional[float] = None
    explanation: Optional[str] = None


class TestOut(CamelModel):
    id: str
    title: str
    section: str
    difficulty: Optional[str] = None
    duration: Optional[int] = None
    total_marks: Optional[float] = None
    created_at: Optional[datetime] = None


class TestSummary(TestOut):
    """Test listing entry"""
    question_count: int = 0
    attempt_count: Optional[int] = None


class TestDetail(TestOut):
    questions: List[QuestionPublic] = []


class TestBrief(CamelModel):
    """Reduced projection embedded in attempt listings"""
    id: str
    title: str
    section: str
    duration: Optional[int] = None
