"""CollectionStore protocol: whole-collection load/save contract."""

from typing import Any, Dict, List, Protocol, Sequence, runtime_checkable


@runtime_checkable
class CollectionStore(Protocol):
    """Durable key-value persistence of whole named collections."""

    def load(self, name: str) -> List[Dict[str, Any]]:
        """Load a collection.

        Args:
            name: One of the fixed collection names.

        Returns:
            The records in stored order; an empty list when the collection is
            absent or its payload is corrupt. Never raises.
        """
        ...

    def save(self, name: str, records: Sequence[Dict[str, Any]]) -> None:
        """Replace a collection atomically.

        Raises:
            QuotaExceeded: The medium rejected the write for size reasons.
            WriteDenied: Any other write failure.
        """
        ...

    def exists(self, name: str) -> bool:
        """True once the collection has been written at least once."""
        ...
