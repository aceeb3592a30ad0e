"""SQLAlchemy implementation of CollectionStore."""

import json
import logging
from typing import Any, Dict, List, Sequence, Union

from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from ...core.database import session_scope
from ...domain.errors import QuotaExceeded, WriteDenied
from ...models.collection_record import CollectionName, CollectionRecord
from ...utils.logging import StoreOperationLogContext, get_store_logger

logger = logging.getLogger(__name__)

_DISK_FULL_MARKERS = ("database or disk is full", "disk full", "no space left")


def _collection_key(name: Union[CollectionName, str]) -> str:
    return CollectionName(name).value


def _is_disk_full(error: OperationalError) -> bool:
    message = str(error.orig if error.orig is not None else error).lower()
    return any(marker in message for marker in _DISK_FULL_MARKERS)


class SqlAlchemyCollectionStore:
    """Concrete CollectionStore: one row per collection, JSON array payload.

    Args:
        session_factory: Sessions bound to the store engine.
        quota_chars: Upper bound on the summed payload size of all
            collections. ``0`` disables the check.
    """

    def __init__(self, session_factory: sessionmaker, quota_chars: int = 0) -> None:
        self._session_factory = session_factory
        self._quota_chars = quota_chars
        self._log = get_store_logger()

    def load(self, name: Union[CollectionName, str]) -> List[Dict[str, Any]]:
        """Load a collection; absent or corrupt collections come back empty."""
        key = _collection_key(name)
        try:
            with self._session_factory() as session:
                row = session.get(CollectionRecord, key)
                payload = None if row is None else row.payload
        except SQLAlchemyError as e:
            logger.error(f"Failed to load {key}: {e}")
            return []

        if payload is None:
            return []

        try:
            data = json.loads(payload)
        except json.JSONDecodeError as e:
            logger.error(f"Failed to load {key}: corrupt payload ({e})")
            return []

        if not isinstance(data, list) or not all(isinstance(r, dict) for r in data):
            logger.error(f"Failed to load {key}: payload is not a list of records")
            return []

        return data

    def exists(self, name: Union[CollectionName, str]) -> bool:
        key = _collection_key(name)
        try:
            with self._session_factory() as session:
                return session.get(CollectionRecord, key) is not None
        except SQLAlchemyError as e:
            logger.error(f"Failed to check {key}: {e}")
            return False

    def save(
        self, name: Union[CollectionName, str], records: Sequence[Dict[str, Any]]
    ) -> None:
        """Replace the whole collection in one transaction.

        Raises:
            QuotaExceeded: The write would push the store past its quota, or
                the database reported a full disk.
            WriteDenied: Any other failure; the previous payload is untouched.
        """
        key = _collection_key(name)
        try:
            payload = json.dumps(list(records), ensure_ascii=False, separators=(",", ":"))
        except (TypeError, ValueError) as e:
            raise WriteDenied(key, f"records are not JSON-serializable: {e}") from e

        with StoreOperationLogContext(
            "save_collection",
            logger=self._log,
            collection=key,
            records=len(records),
            size=len(payload),
        ):
            try:
                with session_scope(self._session_factory) as session:
                    if self._quota_chars:
                        used = self._used_by_others(session, key)
                        if used + len(payload) > self._quota_chars:
                            raise QuotaExceeded(
                                key,
                                f"{used + len(payload)} of {self._quota_chars} characters",
                            )

                    row = session.get(CollectionRecord, key)
                    if row is None:
                        session.add(CollectionRecord(name=key, payload=payload))
                    else:
                        row.payload = payload
            except OperationalError as e:
                if _is_disk_full(e):
                    raise QuotaExceeded(key, "database or disk is full") from e
                raise WriteDenied(key, str(e.orig if e.orig is not None else e)) from e
            except SQLAlchemyError as e:
                raise WriteDenied(key, str(e)) from e

    @staticmethod
    def _used_by_others(session, key: str) -> int:
        stmt = select(
            func.coalesce(func.sum(func.length(CollectionRecord.payload)), 0)
        ).where(CollectionRecord.name != key)
        return int(session.execute(stmt).scalar_one())
