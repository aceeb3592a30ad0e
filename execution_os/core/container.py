"""
Dependency Injection Container.

Holds the single set of store, repositories and services for a process.
Repositories are built once here and handed to the engine by reference.

Usage:
    from execution_os.core.container import build_container

    container = build_container()
    engine = container.get("engine")
    results = container.get("search").search("launch", "projects")
"""

import logging
from datetime import datetime
from typing import Any, Callable, Dict, Optional, Union

from ..infrastructure.repositories import CollectionRepository, SqlAlchemyCollectionStore
from ..models import CollectionName, Note, Project, Setting, Task
from ..services import (
    AgendaService,
    AttachmentService,
    CompletionWatcher,
    ConsistencyEngine,
    SearchService,
)
from ..utils.logging import setup_logging
from .config import Settings, get_settings
from .database import create_session_factory, create_store_engine

logger = logging.getLogger(__name__)

# Factory type: either a class or a callable that takes the container
Factory = Union[type, Callable[["ServiceContainer"], Any]]


class ServiceContainer:
    """
    Dependency injection container for managing service lifecycles.

    Services are created lazily on first access and cached; registering a
    name again replaces its factory, which is how tests override services.
    """

    def __init__(self):
        self._factories: Dict[str, Factory] = {}
        self._instances: Dict[str, Any] = {}

    def register(self, name: str, factory: Factory) -> None:
        """
        Register a service factory.

        Args:
            name: Service name/key
            factory: Class or callable that creates the service.
                     If callable, receives the container as argument.
        """
        self._factories[name] = factory
        # Clear any cached instance if overriding
        self._instances.pop(name, None)
        logger.debug(f"Registered service: {name}")

    def register_instance(self, name: str, instance: Any) -> None:
        """Register a pre-existing instance."""
        self._instances[name] = instance
        logger.debug(f"Registered instance: {name}")

    def get(self, name: str) -> Any:
        """
        Get a service by name.

        Raises:
            KeyError: If service is not registered
        """
        if name in self._instances:
            return self._instances[name]

        if name not in self._factories:
            raise KeyError(f"Service '{name}' is not registered")

        factory = self._factories[name]
        if callable(factory) and not isinstance(factory, type):
            instance = factory(self)
        else:
            instance = factory()

        self._instances[name] = instance
        logger.debug(f"Created instance: {name}")
        return instance

    def clear(self) -> None:
        """Clear all registrations and instances."""
        self._factories.clear()
        self._instances.clear()
        logger.debug("Container cleared")


def build_container(
    settings: Optional[Settings] = None,
    clock: Optional[Callable[[], datetime]] = None,
    initialize: bool = True,
) -> ServiceContainer:
    """Set up logging, wire store, repositories and services; seed storage on first run."""
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_to_file, settings.logs_dir)

    container = ServiceContainer()
    container.register_instance("settings", settings)

    container.register(
        "db_engine", lambda c: create_store_engine(c.get("settings").database_url)
    )
    container.register(
        "store",
        lambda c: SqlAlchemyCollectionStore(
            create_session_factory(c.get("db_engine")),
            quota_chars=c.get("settings").storage_quota_chars,
        ),
    )
    container.register(
        "projects",
        lambda c: CollectionRepository(c.get("store"), CollectionName.PROJECTS, Project, "project_id"),
    )
    container.register(
        "tasks",
        lambda c: CollectionRepository(c.get("store"), CollectionName.TASKS, Task, "task_id"),
    )
    container.register(
        "notes",
        lambda c: CollectionRepository(c.get("store"), CollectionName.NOTES, Note, "note_id"),
    )
    container.register(
        "preferences",
        lambda c: CollectionRepository(c.get("store"), CollectionName.SETTINGS, Setting, "key"),
    )
    container.register(
        "engine",
        lambda c: ConsistencyEngine(
            c.get("projects"),
            c.get("tasks"),
            c.get("notes"),
            c.get("preferences"),
            clock=clock,
        ),
    )
    container.register("search", lambda c: SearchService(c.get("engine")))
    container.register("completion_watcher", lambda c: CompletionWatcher(c.get("engine")))
    container.register(
        "agenda",
        lambda c: AgendaService(
            c.get("engine"),
            avoidance_threshold_days=c.get("settings").avoidance_threshold_days,
        ),
    )
    container.register(
        "attachments",
        lambda c: AttachmentService(
            c.get("engine"), max_bytes=c.get("settings").max_attachment_bytes
        ),
    )

    if initialize:
        container.get("engine").initialize()
    return container


# Global container instance
_container: Optional[ServiceContainer] = None


def get_container() -> ServiceContainer:
    """Get the global service container, building it on first use."""
    global _container
    if _container is None:
        _container = build_container()
    return _container


def reset_container() -> None:
    """Drop the global container (useful for testing)."""
    global _container
    if _container is not None:
        _container.clear()
    _container = None
    logger.debug("Global container reset")
