from .collection_repository import CollectionRepository
from .sqlalchemy_collection_store import SqlAlchemyCollectionStore

__all__ = [
    "CollectionRepository",
    "SqlAlchemyCollectionStore",
]
