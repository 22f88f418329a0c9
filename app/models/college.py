"""
College model - directory entries with cutoff and placement data
"""
from sqlalchemy import Column, String, Integer, JSON, DateTime
from app.database import Base, utcnow
import uuid


class College(Base):
    __tablename__ = "colleges"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(255), nullable=False, index=True)
    rank_india = Column(Integer)
    location = Column(String(255))
    tier = Column(String(20))
    cutoff = Column(JSON)  # {"general": 99.6, "obc": 97.5, ...}
    placements = Column(JSON)  # {"averageCTC": 34, "medianCTC": 31, ...}
    diversity = Column(JSON)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    def __repr__(self):
        return f"<College(id={self.id}, name={self.name})>"
