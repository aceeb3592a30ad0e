"""
Storage row for a whole entity collection.

Each named collection (projects, tasks, notes, settings) is persisted as a
single JSON array in one row, so replacing a collection is one UPDATE inside
one transaction.
"""

import enum

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin


class CollectionName(str, enum.Enum):
    """The four fixed collections the store knows about."""

    PROJECTS = "eos_projects"
    TASKS = "eos_tasks"
    NOTES = "eos_notes"
    SETTINGS = "eos_settings"


class CollectionRecord(Base, TimestampMixin):
    """One persisted collection."""

    __tablename__ = "collections"

    name: Mapped[str] = mapped_column(String(64), primary_key=True)
    payload: Mapped[str] = mapped_column(Text, nullable=False, default="[]")

    def __repr__(self) -> str:
        return f"<CollectionRecord(name={self.name}, size={len(self.payload or '')})>"
