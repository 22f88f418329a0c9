"""
User model - registered and OAuth-provisioned accounts
"""
from sqlalchemy import Column, String, DateTime
from app.database import Base, utcnow
import uuid


class User(Base):
    """
    Users table - a null password marks an OAuth-provisioned account
    """
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String(255), unique=True, nullable=False, index=True)
    password = Column(String(255), nullable=True)
    name = Column(String(255))
    role = Column(String(20), nullable=False, default="student")
    google_id = Column(String(255), unique=True, nullable=True)
    picture = Column(String(1024))
    created_at = Column(DateTime(timezone=True), default=utcnow)

    @property
    def is_oauth_only(self) -> bool:
        return not self.password

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"
