"""User model definitions."""

from sqlalchemy import JSON, Column, DateTime, Integer, String, Text
from backend.database import Base


class UserRecord(Base):
    """Represents a registered student or mentor."""
    __tablename__ = "users"

    id = Column(String, primary_key=True)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    user_type = Column(String, nullable=False, index=True)  # student/mentor
    area = Column(String, nullable=False)
    bio = Column(Text)
    skills = Column(JSON, default=list)
    hourly_rate = Column(Integer)
    rating = Column(Integer, default=0)  # tenths of a star, 0-50
    review_count = Column(Integer, default=0)
    avatar_url = Column(String)
    created_at = Column(DateTime(timezone=True), nullable=False)
