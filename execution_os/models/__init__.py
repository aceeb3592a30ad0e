from .base import Base, TimestampMixin
from .collection_record import CollectionName, CollectionRecord
from .common import EntityModel, new_id, parse_timestamp, utc_timestamp
from .note import Note, NoteType
from .project import (
    MAX_ACTIVE_PROJECTS,
    Project,
    ProjectArea,
    ProjectFile,
    ProjectPriority,
    ProjectStatus,
)
from .setting import Setting
from .task import (
    MIN_TASK_NAME_LENGTH,
    SCHEDULED_STATUSES,
    VALID_ESTIMATED_TIMES,
    EnergyLevel,
    Task,
    TaskStatus,
)

__all__ = [
    "Base",
    "TimestampMixin",
    "CollectionName",
    "CollectionRecord",
    "EntityModel",
    "new_id",
    "parse_timestamp",
    "utc_timestamp",
    "Note",
    "NoteType",
    "MAX_ACTIVE_PROJECTS",
    "Project",
    "ProjectArea",
    "ProjectFile",
    "ProjectPriority",
    "ProjectStatus",
    "Setting",
    "MIN_TASK_NAME_LENGTH",
    "SCHEDULED_STATUSES",
    "VALID_ESTIMATED_TIMES",
    "EnergyLevel",
    "Task",
    "TaskStatus",
]
