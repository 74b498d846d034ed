"""Mentoring session model definitions."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from backend.database import Base


class SessionRecord(Base):
    """Represents a mentoring session between a student and a mentor."""
    __tablename__ = "sessions"

    id = Column(String, primary_key=True)
    student_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    mentor_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    topic = Column(String, nullable=False)
    description = Column(Text)
    scheduled_at = Column(DateTime(timezone=True), nullable=False)
    duration = Column(Integer, nullable=False)  # minutes
    status = Column(String, nullable=False, default="pending")
    created_at = Column(DateTime(timezone=True), nullable=False)
