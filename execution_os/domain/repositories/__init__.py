from .collection_store import CollectionStore
from .entity_repository import EntityRepository

__all__ = ["CollectionStore", "EntityRepository"]
