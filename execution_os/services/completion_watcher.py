"""
Offers to complete a project once every one of its tasks is Done.

This is advisory: the engine never runs it on its own. Callers invoke
``check`` right after saving a task as Done.
"""

import logging
from typing import Callable, Optional

from ..models import Project, ProjectStatus, Task, TaskStatus
from .consistency_engine import ConsistencyEngine

logger = logging.getLogger(__name__)

Confirm = Callable[[Project], bool]


def confirmation_message(project: Project) -> str:
    return (
        f'All tasks for "{project.project_name}" are completed. '
        "Mark project as Completed?"
    )


class CompletionWatcher:
    def __init__(self, engine: ConsistencyEngine) -> None:
        self._engine = engine

    def find_completable_project(self, task: Task) -> Optional[Project]:
        """Return the task's project if it is Active and all its tasks are Done."""
        if task.status is not TaskStatus.DONE or not task.project_id:
            return None

        project_tasks = self._engine.tasks_for_project(task.project_id)
        if not project_tasks:
            return None
        if any(t.status is not TaskStatus.DONE for t in project_tasks):
            return None

        project = self._engine.find_project(task.project_id)
        if project is None or project.status is not ProjectStatus.ACTIVE:
            return None
        return project

    def check(self, task: Task, confirm: Confirm) -> Optional[Project]:
        """Run the rule; on confirmation save the project as Completed.

        Args:
            task: The task that was just saved.
            confirm: Called with the candidate project; return True to complete it.

        Returns:
            The completed project, or None when nothing changed.
        """
        project = self.find_completable_project(task)
        if project is None:
            return None

        if not confirm(project):
            logger.debug(f"Completion of project {project.project_id} declined")
            return None

        completed = self._engine.save_project(
            project.model_copy(update={"status": ProjectStatus.COMPLETED})
        )
        logger.info(f"Project {completed.project_id} marked Completed")
        return completed
