"""Second-brain note record. Notes carry no System Laws."""

import enum
from typing import Optional

from pydantic import Field

from .common import EntityModel


class NoteType(str, enum.Enum):
    IDEA = "Idea"
    INSIGHT = "Insight"
    PLANNING = "Planning"
    REFLECTION = "Reflection"
    LESSON = "Lesson"


class Note(EntityModel):
    note_id: str = Field("", alias="NoteID")
    title: str = Field("", alias="Title")
    type: NoteType = Field(NoteType.IDEA, alias="Type")
    # Weak references; either may point at a record that no longer exists.
    related_project_id: Optional[str] = Field(None, alias="RelatedProjectID")
    related_task_id: Optional[str] = Field(None, alias="RelatedTaskID")
    content: str = Field("", alias="Content")
    date: str = Field("", alias="Date")
