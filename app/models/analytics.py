"""
Analytics model - per-user rolling aggregate over completed attempts
"""
from sqlalchemy import Column, String, Integer, Float, DateTime, ForeignKey
from app.database import Base, utcnow
import uuid


class Analytics(Base):
    """
    Analytics table - exactly one row per user, created lazily
    """
    __tablename__ = "analytics"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id"), unique=True, nullable=False)
    total_tests = Column(Integer, nullable=False, default=0)
    total_score = Column(Float, nullable=False, default=0.0)
    total_time_spent = Column(Integer, nullable=False, default=0)
    accuracy = Column(Float, nullable=False, default=0.0)
    average_score = Column(Float, nullable=False, default=0.0)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    def __repr__(self):
        return f"<Analytics(user_id={self.user_id}, tests={self.total_tests}, accuracy={self.accuracy})>"
