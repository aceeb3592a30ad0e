"""
Consistency engine: the only write path for projects, tasks, notes and
settings.

Every save is checked against the System Laws before anything is written;
a rejected save raises ``ValidationError`` and leaves every collection
untouched. Deleting a project cascades to its tasks and to notes related to
it, in that order, each collection written as a whole.
"""

import logging
from datetime import date, datetime, timezone
from typing import Callable, List, Optional

from ..domain.errors import ValidationError, ValidationErrorKind
from ..domain.repositories import EntityRepository
from ..models import (
    MAX_ACTIVE_PROJECTS,
    MIN_TASK_NAME_LENGTH,
    SCHEDULED_STATUSES,
    Note,
    Project,
    ProjectArea,
    ProjectPriority,
    ProjectStatus,
    Setting,
    Task,
    TaskStatus,
    new_id,
    utc_timestamp,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

SEED_PROJECT_NAME = "Setup Execution OS"
SEED_SUCCESS_DEFINITION = (
    "The app is configured and I have entered my top 3 active projects."
)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ConsistencyEngine:
    """Mediates every read and write of the four collections.

    Args:
        projects: Repository owning the Projects collection.
        tasks: Repository owning the Tasks collection.
        notes: Repository owning the Notes collection.
        settings: Repository owning the Settings collection.
        clock: Source of "now" for derived timestamps (injectable for tests).
        max_active_projects: Cap on simultaneously Active projects.
    """

    def __init__(
        self,
        projects: EntityRepository[Project],
        tasks: EntityRepository[Task],
        notes: EntityRepository[Note],
        settings: EntityRepository[Setting],
        clock: Optional[Clock] = None,
        max_active_projects: int = MAX_ACTIVE_PROJECTS,
    ) -> None:
        self._projects = projects
        self._tasks = tasks
        self._notes = notes
        self._settings = settings
        self._clock = clock or _utc_now
        self._max_active_projects = max_active_projects

    def now(self) -> datetime:
        return self._clock()

    def today(self) -> date:
        return self.now().date()

    # -- initialization --------------------------------------------------

    def initialize(self) -> Optional[Project]:
        """Seed the default project the first time Projects is absent."""
        if self._projects.exists():
            return None

        today = self.today().isoformat()
        seed = Project(
            project_name=SEED_PROJECT_NAME,
            area=ProjectArea.WORK,
            status=ProjectStatus.ACTIVE,
            priority=ProjectPriority.HIGH,
            start_date=today,
            deadline=today,
            success_definition=SEED_SUCCESS_DEFINITION,
            why_this_matters="To reduce cognitive load and start executing.",
            project_notes="Initial setup notes.",
        )
        saved = self.save_project(seed)
        logger.info(f"Seeded default project {saved.project_id}")
        return saved

    # -- projects --------------------------------------------------------

    def get_projects(self) -> List[Project]:
        return self._projects.all()

    def find_project(self, project_id: str) -> Optional[Project]:
        """Resolve a (possibly dangling) project reference."""
        if not project_id:
            return None
        return self._projects.get(project_id)

    def save_project(self, project: Project) -> Project:
        """Validate and upsert a project.

        Raises:
            ValidationError: success-definition-required or
                active-project-limit.
            StorageError: The store rejected the write.
        """
        if not project.success_definition.strip():
            raise ValidationError(ValidationErrorKind.SUCCESS_DEFINITION_REQUIRED)

        projects = self._projects.all()
        if project.status is ProjectStatus.ACTIVE:
            active = sum(
                1
                for p in projects
                if p.status is ProjectStatus.ACTIVE and p.project_id != project.project_id
            )
            if active >= self._max_active_projects:
                raise ValidationError(ValidationErrorKind.ACTIVE_PROJECT_LIMIT)

        if not project.project_id:
            project = project.model_copy(update={"project_id": new_id()})
        else:
            project = project.model_copy(deep=True)

        self._projects.upsert(project)
        logger.info(f"Saved project {project.project_id} ({project.status.value})")
        return project

    def delete_project(self, project_id: str) -> None:
        """Delete a project with its tasks and related notes.

        Order is tasks, then notes, then the project, so an interruption can
        only leave extra orphans behind, never a project missing some of its
        own cascade. Deleting an unknown id is a no-op, and so is the empty
        id, which marks Inbox tasks rather than naming a project.
        """
        if not project_id:
            return

        removed_tasks = self._tasks.remove_where(lambda t: t.project_id == project_id)
        removed_notes = self._notes.remove_where(
            lambda n: n.related_project_id == project_id
        )
        removed = self._projects.remove(project_id)
        if removed or removed_tasks or removed_notes:
            logger.info(
                f"Deleted project {project_id}: {removed_tasks} task(s), "
                f"{removed_notes} note(s)"
            )

    # -- tasks -----------------------------------------------------------

    def get_tasks(self) -> List[Task]:
        return self._tasks.all()

    def find_task(self, task_id: str) -> Optional[Task]:
        if not task_id:
            return None
        return self._tasks.get(task_id)

    def tasks_for_project(self, project_id: str) -> List[Task]:
        return [t for t in self._tasks.all() if t.project_id == project_id]

    def save_task(self, task: Task) -> Task:
        """Validate, derive dates, and upsert a task.

        Raises:
            ValidationError: name-too-short, single-active-task or
                incomplete-definition.
            StorageError: The store rejected the write.
        """
        if len(task.task_name) < MIN_TASK_NAME_LENGTH:
            raise ValidationError(ValidationErrorKind.NAME_TOO_SHORT)

        tasks = self._tasks.all()
        existing = None
        if task.task_id:
            existing = next((t for t in tasks if t.task_id == task.task_id), None)

        if task.status is TaskStatus.DOING:
            if any(
                t.status is TaskStatus.DOING and t.task_id != task.task_id for t in tasks
            ):
                raise ValidationError(ValidationErrorKind.SINGLE_ACTIVE_TASK)

        if task.status in SCHEDULED_STATUSES and not task.is_fully_defined:
            raise ValidationError(ValidationErrorKind.INCOMPLETE_DEFINITION)

        now = utc_timestamp(self.now())
        updates = {}
        if not task.task_id:
            updates["task_id"] = new_id()

        if task.status is TaskStatus.BLOCKED:
            if not task.blocked_date:
                updates["blocked_date"] = now
        elif task.blocked_date is not None:
            updates["blocked_date"] = None

        if existing is not None and existing.created_date:
            updates["created_date"] = existing.created_date
        elif not task.created_date:
            updates["created_date"] = now

        task = task.model_copy(update=updates)
        self._tasks.upsert(task)
        logger.info(f"Saved task {task.task_id} ({task.status.value})")
        return task

    def delete_task(self, task_id: str) -> None:
        """Delete a task. Notes pointing at it keep their dangling reference."""
        if self._tasks.remove(task_id):
            logger.info(f"Deleted task {task_id}")

    # -- notes -----------------------------------------------------------

    def get_notes(self) -> List[Note]:
        return self._notes.all()

    def find_note(self, note_id: str) -> Optional[Note]:
        if not note_id:
            return None
        return self._notes.get(note_id)

    def notes_for_project(self, project_id: str) -> List[Note]:
        return [n for n in self._notes.all() if n.related_project_id == project_id]

    def save_note(self, note: Note) -> Note:
        if not note.note_id:
            note = note.model_copy(update={"note_id": new_id()})
        else:
            note = note.model_copy()
        self._notes.upsert(note)
        return note

    def delete_note(self, note_id: str) -> None:
        self._notes.remove(note_id)

    # -- settings --------------------------------------------------------

    def get_setting(self, key: str) -> Optional[str]:
        setting = self._settings.get(key)
        return setting.value if setting is not None else None

    def save_setting(self, key: str, value: str) -> None:
        self._settings.upsert(Setting(key=key, value=value))
