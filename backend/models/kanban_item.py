"""Kanban board model definitions."""

from sqlalchemy import Column, DateTime, Integer, String, Text
from backend.database import Base


class KanbanItemRecord(Base):
    """Represents a card on the project Kanban board."""
    __tablename__ = "kanban_items"

    id = Column(String, primary_key=True)
    title = Column(String, nullable=False)
    description = Column(Text)
    type = Column(String, nullable=False)
    status = Column(String, nullable=False, default="backlog")
    points = Column(Integer, default=0)
    assignee = Column(String)
    priority = Column(String, default="medium")
    progress = Column(Integer, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False)
