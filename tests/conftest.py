import logging
import os
from datetime import datetime, timedelta, timezone

import pytest

# Set test environment variables
os.environ["EOS_LOG_LEVEL"] = "WARNING"

from execution_os.core.database import create_session_factory, create_store_engine
from execution_os.infrastructure.repositories import (
    CollectionRepository,
    SqlAlchemyCollectionStore,
)
from execution_os.models import (
    CollectionName,
    EnergyLevel,
    Note,
    NoteType,
    Project,
    ProjectArea,
    ProjectPriority,
    ProjectStatus,
    Setting,
    Task,
    TaskStatus,
)
from execution_os.services import ConsistencyEngine

START = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)


class FakeClock:
    """Deterministic clock; call ``advance`` to move time forward."""

    def __init__(self, start: datetime = START) -> None:
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> datetime:
        self.current += timedelta(**kwargs)
        return self.current


@pytest.fixture(autouse=True)
def _strip_file_handlers():
    """Remove file handlers from root logger so tests never write to logs/app.log."""
    root = logging.getLogger()
    saved = [h for h in root.handlers if isinstance(h, logging.FileHandler)]
    for h in saved:
        root.removeHandler(h)
    yield
    for h in list(root.handlers):
        if isinstance(h, logging.FileHandler):
            root.removeHandler(h)
    for h in saved:
        root.addHandler(h)


@pytest.fixture
def db_engine():
    """In-memory SQLite engine with the collections table."""
    engine = create_store_engine("sqlite://")
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return create_session_factory(db_engine)


@pytest.fixture
def store(session_factory):
    return SqlAlchemyCollectionStore(session_factory)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def repositories(store):
    return {
        "projects": CollectionRepository(store, CollectionName.PROJECTS, Project, "project_id"),
        "tasks": CollectionRepository(store, CollectionName.TASKS, Task, "task_id"),
        "notes": CollectionRepository(store, CollectionName.NOTES, Note, "note_id"),
        "settings": CollectionRepository(store, CollectionName.SETTINGS, Setting, "key"),
    }


@pytest.fixture
def engine(repositories, clock):
    return ConsistencyEngine(
        repositories["projects"],
        repositories["tasks"],
        repositories["notes"],
        repositories["settings"],
        clock=clock,
    )


@pytest.fixture
def make_project():
    """Build (unsaved) projects with sensible defaults."""

    def _make(**overrides) -> Project:
        fields = dict(
            project_name="Launch newsletter",
            area=ProjectArea.WORK,
            status=ProjectStatus.IDEA,
            priority=ProjectPriority.MEDIUM,
            start_date="2026-03-01",
            deadline="2026-04-01",
            success_definition="First issue sent to 100 readers",
        )
        fields.update(overrides)
        return Project(**fields)

    return _make


@pytest.fixture
def make_task():
    """Build (unsaved) tasks; Next/Doing tasks need project_id passed in."""

    def _make(**overrides) -> Task:
        fields = dict(
            task_name="Draft outline",
            status=TaskStatus.INBOX,
            priority=3,
            energy=EnergyLevel.MEDIUM,
            estimated_time=30,
            due_date="2026-03-02",
        )
        fields.update(overrides)
        return Task(**fields)

    return _make


@pytest.fixture
def make_note():
    def _make(**overrides) -> Note:
        fields = dict(
            title="Weekly reflection",
            type=NoteType.REFLECTION,
            content="Mornings are best for deep work.",
            date="2026-03-02",
        )
        fields.update(overrides)
        return Note(**fields)

    return _make
