"""
Typed domain errors for Execution OS.

Callers distinguish a broken System Law (``ValidationError``) from a storage
failure (``StorageError``) and show the message to the user as-is. Every
error here is raised before any write happens, or in place of a write that
did not happen, so persisted state is never half-updated.
"""

import enum


class DomainError(Exception):
    """Base class for all domain-specific errors."""


# ---------------------------------------------------------------------------
# System Laws
# ---------------------------------------------------------------------------


class ValidationErrorKind(str, enum.Enum):
    """Which System Law a rejected save violated."""

    SUCCESS_DEFINITION_REQUIRED = "success-definition-required"
    ACTIVE_PROJECT_LIMIT = "active-project-limit"
    NAME_TOO_SHORT = "name-too-short"
    SINGLE_ACTIVE_TASK = "single-active-task"
    INCOMPLETE_DEFINITION = "incomplete-definition"


LAW_MESSAGES = {
    ValidationErrorKind.SUCCESS_DEFINITION_REQUIRED: (
        "System Law: Projects without Success Definition are invalid."
    ),
    ValidationErrorKind.ACTIVE_PROJECT_LIMIT: (
        "You already have 5 active projects. Complete or pause one first."
    ),
    ValidationErrorKind.NAME_TOO_SHORT: "System Law: No vague task names.",
    ValidationErrorKind.SINGLE_ACTIVE_TASK: "Finish what you started.",
    ValidationErrorKind.INCOMPLETE_DEFINITION: (
        "Define project, priority, and time before scheduling this task."
    ),
}


class ValidationError(DomainError):
    """A save was rejected because it would break a System Law."""

    def __init__(self, kind) -> None:
        self.kind = ValidationErrorKind(kind)
        super().__init__(LAW_MESSAGES[self.kind])


# ---------------------------------------------------------------------------
# Storage
# ---------------------------------------------------------------------------


class StorageErrorKind(str, enum.Enum):
    QUOTA_EXCEEDED = "QuotaExceeded"
    WRITE_DENIED = "WriteDenied"


class StorageError(DomainError):
    """The store refused to persist a collection; nothing was written."""

    kind: StorageErrorKind = StorageErrorKind.WRITE_DENIED

    def __init__(self, collection: str, detail: str = "") -> None:
        self.collection = collection
        self.detail = detail
        message = f"Failed to save collection {collection} ({self.kind.value})"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class QuotaExceeded(StorageError):
    """The write would exceed the storage medium's size limit."""

    kind = StorageErrorKind.QUOTA_EXCEEDED


class WriteDenied(StorageError):
    """Any other write failure (permissions, locked database, ...)."""

    kind = StorageErrorKind.WRITE_DENIED


# ---------------------------------------------------------------------------
# Attachments
# ---------------------------------------------------------------------------


class ProjectNotFound(DomainError):
    """Project with the given ID does not exist."""

    def __init__(self, project_id: str) -> None:
        self.project_id = project_id
        super().__init__(f"Project {project_id} not found")


class AttachmentTooLarge(DomainError):
    """An uploaded file is over the per-file size cap."""

    def __init__(self, file_name: str, size: int, limit: int) -> None:
        self.file_name = file_name
        self.size = size
        self.limit = limit
        super().__init__(
            f"File too large. Max size is {limit // 1024}KB for app storage."
        )
