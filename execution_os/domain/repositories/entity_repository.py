"""EntityRepository protocol: per-collection record access."""

from typing import Callable, List, Optional, Protocol, TypeVar, runtime_checkable

T = TypeVar("T")


@runtime_checkable
class EntityRepository(Protocol[T]):
    """Repository owning one collection of records keyed by identity."""

    def exists(self) -> bool:
        """True once the collection has ever been written."""
        ...

    def all(self) -> List[T]:
        """Return every record in collection order."""
        ...

    def get(self, record_id: str) -> Optional[T]:
        """Return the record with *record_id*, or None if it does not resolve."""
        ...

    def upsert(self, record: T) -> T:
        """Replace the record with the same identity, or append it."""
        ...

    def remove(self, record_id: str) -> bool:
        """Remove by identity. Returns False (and writes nothing) if absent."""
        ...

    def remove_where(self, predicate: Callable[[T], bool]) -> int:
        """Remove every matching record. Returns the number removed."""
        ...
