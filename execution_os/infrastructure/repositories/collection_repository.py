"""Repository objects that each own one persisted collection."""

import logging
from typing import Any, Callable, Dict, Generic, List, Optional, Type, TypeVar

from pydantic import ValidationError as SchemaError

from ...domain.repositories import CollectionStore
from ...models.collection_record import CollectionName
from ...models.common import EntityModel

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=EntityModel)

Row = Dict[str, Any]


class CollectionRepository(Generic[T]):
    """Concrete EntityRepository over a CollectionStore.

    Every call reads the collection fresh from the store and every mutation
    writes the whole collection back (read-modify-write at collection
    granularity, last write wins).

    Writes operate on the stored rows, not on parsed records: a row that
    fails validation is hidden from readers but written back untouched.
    """

    def __init__(
        self,
        store: CollectionStore,
        collection: CollectionName,
        model: Type[T],
        id_field: str,
    ) -> None:
        self._store = store
        self._collection = collection
        self._model = model
        self._id_field = id_field
        self._id_key = model.model_fields[id_field].alias or id_field

    @property
    def collection(self) -> CollectionName:
        return self._collection

    def identity(self, record: T) -> str:
        return getattr(record, self._id_field)

    def exists(self) -> bool:
        """True once the collection has ever been written."""
        return self._store.exists(self._collection)

    def _parse(self, index: int, row: Row) -> Optional[T]:
        try:
            return self._model.model_validate(row)
        except SchemaError as e:
            logger.warning(
                f"Skipping invalid record #{index} in {self._collection.value}: "
                f"{e.error_count()} error(s)"
            )
            return None

    def all(self) -> List[T]:
        records: List[T] = []
        for index, row in enumerate(self._store.load(self._collection)):
            record = self._parse(index, row)
            if record is not None:
                records.append(record)
        return records

    def get(self, record_id: str) -> Optional[T]:
        for record in self.all():
            if self.identity(record) == record_id:
                return record
        return None

    def upsert(self, record: T) -> T:
        """Replace the row with the same identity in place, otherwise append."""
        rows = self._store.load(self._collection)
        record_id = self.identity(record)
        new_row = record.to_record()
        for index, row in enumerate(rows):
            if row.get(self._id_key) == record_id:
                rows[index] = new_row
                break
        else:
            rows.append(new_row)
        self._store.save(self._collection, rows)
        return record

    def remove(self, record_id: str) -> bool:
        """Remove by stored identity, whether or not the row is valid."""
        return self._remove_rows(lambda index, row: row.get(self._id_key) == record_id) > 0

    def remove_where(self, predicate: Callable[[T], bool]) -> int:
        """Remove every valid record matching *predicate*; invalid rows stay."""

        def matches(index: int, row: Row) -> bool:
            record = self._parse(index, row)
            return record is not None and predicate(record)

        return self._remove_rows(matches)

    def _remove_rows(self, matches: Callable[[int, Row], bool]) -> int:
        rows = self._store.load(self._collection)
        kept = [row for index, row in enumerate(rows) if not matches(index, row)]
        removed = len(rows) - len(kept)
        if removed:
            self._store.save(self._collection, kept)
            logger.debug(f"Removed {removed} record(s) from {self._collection.value}")
        return removed
