"""Read-side rules behind the Today view and project cards.

No writes happen here except the daily focus statement, which goes through
the engine's settings upsert.
"""

import logging
import math
from datetime import date, datetime, timedelta
from typing import List, Optional

from ..models import ProjectStatus, Task, TaskStatus, SCHEDULED_STATUSES, parse_timestamp
from .consistency_engine import ConsistencyEngine

logger = logging.getLogger(__name__)

DAILY_FOCUS_KEY_PREFIX = "daily_focus_"
DEFAULT_AVOIDANCE_DAYS = 3


def daily_focus_key(day: date) -> str:
    return f"{DAILY_FOCUS_KEY_PREFIX}{day.isoformat()}"


def _due_by(due_date: str, day: date) -> bool:
    """A task with no due date is always due."""
    if not due_date:
        return True
    try:
        return date.fromisoformat(due_date[:10]) <= day
    except ValueError:
        logger.debug(f"Ignoring unparseable due date {due_date!r}")
        return False


class AgendaService:
    def __init__(
        self,
        engine: ConsistencyEngine,
        avoidance_threshold_days: int = DEFAULT_AVOIDANCE_DAYS,
    ) -> None:
        self._engine = engine
        self._avoidance_threshold = timedelta(days=avoidance_threshold_days)

    def todays_tasks(self, today: Optional[date] = None) -> List[Task]:
        """Next/Doing tasks due today or earlier.

        Doing comes first, then higher priority; ties keep collection order.
        """
        today = today or self._engine.today()
        due = [
            t
            for t in self._engine.get_tasks()
            if t.status in SCHEDULED_STATUSES and _due_by(t.due_date, today)
        ]
        return sorted(
            due,
            key=lambda t: (t.status is not TaskStatus.DOING, -(t.priority or 0)),
        )

    def has_stale_inbox(self, today: Optional[date] = None) -> bool:
        """True when an Inbox task was captured before today and never sorted."""
        today = today or self._engine.today()
        for task in self._engine.get_tasks():
            if task.status is not TaskStatus.INBOX:
                continue
            created = parse_timestamp(task.created_date)
            if created is not None and created.date() < today:
                return True
        return False

    def is_avoidance(self, task: Task, now: Optional[datetime] = None) -> bool:
        """A task left Blocked longer than the threshold."""
        if task.status is not TaskStatus.BLOCKED:
            return False
        blocked_at = parse_timestamp(task.blocked_date)
        if blocked_at is None:
            return False
        now = now or self._engine.now()
        return now - blocked_at > self._avoidance_threshold

    def blocked_tasks_in_avoidance(self, now: Optional[datetime] = None) -> List[Task]:
        now = now or self._engine.now()
        return [t for t in self._engine.get_tasks() if self.is_avoidance(t, now)]

    def get_daily_focus(self, day: Optional[date] = None) -> Optional[str]:
        return self._engine.get_setting(daily_focus_key(day or self._engine.today()))

    def set_daily_focus(self, text: str, day: Optional[date] = None) -> None:
        self._engine.save_setting(daily_focus_key(day or self._engine.today()), text)

    def project_progress(self, project_id: str) -> int:
        """Percentage of the project's tasks that are Done, rounded half up."""
        tasks = self._engine.tasks_for_project(project_id)
        if not tasks:
            return 0
        done = sum(1 for t in tasks if t.status is TaskStatus.DONE)
        return math.floor(done * 100 / len(tasks) + 0.5)

    def active_project_count(self) -> int:
        return sum(
            1 for p in self._engine.get_projects() if p.status is ProjectStatus.ACTIVE
        )
