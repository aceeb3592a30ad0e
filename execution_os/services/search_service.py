"""
Context-weighted search across projects, tasks and notes.

Nothing is indexed ahead of time: each query scans the three collections,
scores substring matches and returns the full ranked list.
"""

import enum
import logging
from dataclasses import dataclass
from typing import List, Union

from .consistency_engine import ConsistencyEngine

logger = logging.getLogger(__name__)

PROJECT_NAME_SCORE = 10
TASK_NAME_SCORE = 8
TASK_NOTES_SCORE = 4
NOTE_TITLE_SCORE = 6
NOTE_CONTENT_SCORE = 3
CONTEXT_MULTIPLIER = 2


class SearchContext(str, enum.Enum):
    """Screen the query was issued from."""

    PROJECTS = "projects"
    TASKS = "tasks"
    BRAIN = "brain"
    GLOBAL = "global"


class ResultKind(str, enum.Enum):
    PROJECT = "Project"
    TASK = "Task"
    NOTE = "Note"


_CONTEXT_KIND = {
    SearchContext.PROJECTS: ResultKind.PROJECT,
    SearchContext.TASKS: ResultKind.TASK,
    SearchContext.BRAIN: ResultKind.NOTE,
}


@dataclass(frozen=True)
class SearchResult:
    kind: ResultKind
    id: str
    title: str
    subtitle: str
    score: int


def resolve_context(context: Union[SearchContext, str, None]) -> SearchContext:
    """Coerce a context name, falling back to GLOBAL for anything unknown."""
    if context is None:
        return SearchContext.GLOBAL
    try:
        return SearchContext(context)
    except ValueError:
        logger.debug(f"Unknown search context {context!r}, using global")
        return SearchContext.GLOBAL


class SearchService:
    def __init__(self, engine: ConsistencyEngine) -> None:
        self._engine = engine

    def search(
        self, query: str, context: Union[SearchContext, str, None] = SearchContext.GLOBAL
    ) -> List[SearchResult]:
        """Rank every matching entity, highest score first.

        Ties keep discovery order: projects, then tasks, then notes, each in
        collection order.
        """
        needle = (query or "").strip().lower()
        if not needle:
            return []

        boosted = _CONTEXT_KIND.get(resolve_context(context))

        def weight(kind: ResultKind, base: int) -> int:
            return base * (CONTEXT_MULTIPLIER if kind is boosted else 1)

        results: List[SearchResult] = []

        for project in self._engine.get_projects():
            if needle in project.project_name.lower():
                results.append(
                    SearchResult(
                        kind=ResultKind.PROJECT,
                        id=project.project_id,
                        title=project.project_name,
                        subtitle=project.status.value,
                        score=weight(ResultKind.PROJECT, PROJECT_NAME_SCORE),
                    )
                )

        for task in self._engine.get_tasks():
            if needle in task.task_name.lower():
                base = TASK_NAME_SCORE
            elif task.notes and needle in task.notes.lower():
                base = TASK_NOTES_SCORE
            else:
                continue
            results.append(
                SearchResult(
                    kind=ResultKind.TASK,
                    id=task.task_id,
                    title=task.task_name,
                    subtitle=task.status.value,
                    score=weight(ResultKind.TASK, base),
                )
            )

        for note in self._engine.get_notes():
            if needle in note.title.lower():
                base = NOTE_TITLE_SCORE
            elif needle in note.content.lower():
                base = NOTE_CONTENT_SCORE
            else:
                continue
            results.append(
                SearchResult(
                    kind=ResultKind.NOTE,
                    id=note.note_id,
                    title=note.title,
                    subtitle=note.type.value,
                    score=weight(ResultKind.NOTE, base),
                )
            )

        # sorted() is stable, which preserves discovery order on ties
        return sorted(results, key=lambda r: r.score, reverse=True)
