"""
StudyMaterial model - reading material grouped by exam section
"""
from sqlalchemy import Column, String, Text, DateTime
from app.database import Base, utcnow
import uuid


class StudyMaterial(Base):
    __tablename__ = "study_materials"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(String(255), nullable=False)
    section = Column(String(50), nullable=False, index=True)
    content = Column(Text)
    file_url = Column(String(1024))
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)

    def __repr__(self):
        return f"<StudyMaterial(id={self.id}, title={self.title}, section={self.section})>"
