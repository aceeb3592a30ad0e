"""Project record and its embedded file attachments."""

import enum
from typing import List

from pydantic import Field

from .common import EntityModel

MAX_ACTIVE_PROJECTS = 5


class ProjectArea(str, enum.Enum):
    FAITH = "Faith"
    WORK = "Work"
    MONEY = "Money"
    HEALTH = "Health"
    LEARNING = "Learning"


class ProjectStatus(str, enum.Enum):
    IDEA = "Idea"
    ACTIVE = "Active"
    ON_HOLD = "On Hold"
    COMPLETED = "Completed"


class ProjectPriority(str, enum.Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class ProjectFile(EntityModel):
    """An attachment owned by exactly one project.

    ``data`` holds the whole file as a ``data:<mime>;base64,...`` URL.
    """

    file_id: str = Field("", alias="FileID")
    file_name: str = Field(alias="FileName")
    file_type: str = Field("", alias="FileType")
    file_size: int = Field(0, alias="FileSize", ge=0)
    upload_date: str = Field("", alias="UploadDate")
    data: str = Field("", alias="Data")


class Project(EntityModel):
    """A project. Deleting it deletes its files, tasks and related notes."""

    project_id: str = Field("", alias="ProjectID")
    project_name: str = Field("", alias="ProjectName")
    area: ProjectArea = Field(ProjectArea.WORK, alias="Area")
    status: ProjectStatus = Field(ProjectStatus.IDEA, alias="Status")
    priority: ProjectPriority = Field(ProjectPriority.MEDIUM, alias="Priority")
    start_date: str = Field("", alias="StartDate")
    deadline: str = Field("", alias="Deadline")
    success_definition: str = Field("", alias="SuccessDefinition")
    why_this_matters: str = Field("", alias="WhyThisMatters")
    project_notes: str = Field("", alias="ProjectNotes")
    files: List[ProjectFile] = Field(default_factory=list, alias="Files")
