"""
Database models package
"""
from app.models.user import User
from app.models.test import Test, Question
from app.models.test_attempt import TestAttempt, QuestionAttempt
from app.models.analytics import Analytics
from app.models.college import College
from app.models.study_material import StudyMaterial

__all__ = [
    "User",
    "Test",
    "Question",
    "TestAttempt",
    "QuestionAttempt",
    "Analytics",
    "College",
    "StudyMaterial",
]
