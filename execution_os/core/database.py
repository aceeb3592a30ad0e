import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from sqlalchemy import Engine, create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from ..models.base import Base

logger = logging.getLogger(__name__)


def _is_memory_sqlite(database_url: str) -> bool:
    url = make_url(database_url)
    return url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:")


def create_store_engine(database_url: str) -> Engine:
    """Create the engine backing the collection store and ensure tables exist."""
    logger.info(f"Initializing database: {database_url}")

    url = make_url(database_url)
    kwargs = {}
    if url.get_backend_name() == "sqlite":
        kwargs["connect_args"] = {"check_same_thread": False}
        if _is_memory_sqlite(database_url):
            # One shared connection, otherwise every session sees an empty db
            kwargs["poolclass"] = StaticPool
        else:
            Path(url.database).expanduser().parent.mkdir(parents=True, exist_ok=True)

    engine = create_engine(database_url, echo=False, **kwargs)
    Base.metadata.create_all(engine)
    logger.info("Database tables created/verified")
    return engine


def create_session_factory(engine: Engine) -> sessionmaker:
    """Session factory used by the store; objects stay readable after commit."""
    return sessionmaker(engine, class_=Session, expire_on_commit=False)


@contextmanager
def session_scope(session_factory: sessionmaker) -> Iterator[Session]:
    """Transactional scope: commit on success, roll back and re-raise on error."""
    session = session_factory()
    try:
        yield session
        session.commit()
    except Exception as e:
        session.rollback()
        logger.error(f"Database session error: {e}")
        raise
    finally:
        session.close()
