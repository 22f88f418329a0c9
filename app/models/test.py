"""
Test and Question models - published tests and their ordered questions
"""
from sqlalchemy import Column, String, Integer, Float, Text, JSON, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from app.database import Base, utcnow
import uuid


class Test(Base):
    """
    Tests table - immutable once created by an admin
    """
    __tablename__ = "tests"
    __test__ = False  # keep pytest from collecting the model

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(String(255), nullable=False)
    section = Column(String(50), nullable=False, index=True)
    difficulty = Column(String(20))
    duration = Column(Integer)  # minutes
    total_marks = Column(Float)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    questions = relationship(
        "Question",
        back_populates="test",
        order_by="Question.position",
        cascade="all, delete-orphan"
    )

    def __repr__(self):
        return f"<Test(id={self.id}, title={self.title}, section={self.section})>"


class Question(Base):
    """
    Questions table - correct_answer is never serialized on public reads
    """
    __tablename__ = "questions"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    test_id = Column(String(36), ForeignKey("tests.id"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    question_text = Column(Text, nullable=False)
    options = Column(JSON)  # ["A", "B", "C", "D"]
    correct_answer = Column(String(255))
    marks = Column(Float, default=1.0)
    explanation = Column(Text)

    test = relationship("Test", back_populates="questions")

    def __repr__(self):
        return f"<Question(id={self.id}, test_id={self.test_id}, position={self.position})>"
