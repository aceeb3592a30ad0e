"""Task record.

``project_id`` is a weak reference: an empty string means the task sits in
the Inbox, and a non-empty id is not guaranteed to resolve to a project.
"""

import enum
from typing import Optional

from pydantic import Field, field_validator

from .common import EntityModel

VALID_ESTIMATED_TIMES = (15, 30, 60, 90)
MIN_TASK_NAME_LENGTH = 3


class TaskStatus(str, enum.Enum):
    INBOX = "Inbox"
    NEXT = "Next"
    DOING = "Doing"
    BLOCKED = "Blocked"
    DONE = "Done"


class EnergyLevel(str, enum.Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


SCHEDULED_STATUSES = frozenset({TaskStatus.NEXT, TaskStatus.DOING})


class Task(EntityModel):
    task_id: str = Field("", alias="TaskID")
    task_name: str = Field("", alias="TaskName")
    project_id: str = Field("", alias="ProjectID")
    status: TaskStatus = Field(TaskStatus.INBOX, alias="Status")
    priority: Optional[int] = Field(None, alias="Priority")
    energy: EnergyLevel = Field(EnergyLevel.MEDIUM, alias="Energy")
    estimated_time: Optional[int] = Field(None, alias="EstimatedTime")
    due_date: str = Field("", alias="DueDate")
    notes: str = Field("", alias="Notes")
    blocked_date: Optional[str] = Field(None, alias="BlockedDate")
    created_date: Optional[str] = Field(None, alias="CreatedDate")

    @field_validator("priority", mode="before")
    @classmethod
    def priority_in_range(cls, v):
        if v in (None, 0, ""):
            return None
        v = int(v)
        if not 1 <= v <= 5:
            raise ValueError(f"Priority must be between 1 and 5, got {v}")
        return v

    @field_validator("estimated_time", mode="before")
    @classmethod
    def estimated_time_valid(cls, v):
        if v in (None, 0, ""):
            return None
        v = int(v)
        if v not in VALID_ESTIMATED_TIMES:
            raise ValueError(
                f"EstimatedTime must be one of {VALID_ESTIMATED_TIMES}, got {v}"
            )
        return v

    @field_validator("notes", mode="before")
    @classmethod
    def notes_not_null(cls, v):
        return "" if v is None else v

    @property
    def is_inbox(self) -> bool:
        return not self.project_id

    @property
    def is_fully_defined(self) -> bool:
        """Has a project, a priority and an estimate."""
        return bool(self.project_id) and self.priority is not None and self.estimated_time is not None
