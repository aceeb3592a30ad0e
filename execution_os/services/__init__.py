from .agenda_service import AgendaService
from .attachment_service import AttachmentService
from .completion_watcher import CompletionWatcher
from .consistency_engine import ConsistencyEngine
from .search_service import SearchContext, SearchResult, SearchService

__all__ = [
    "AgendaService",
    "AttachmentService",
    "CompletionWatcher",
    "ConsistencyEngine",
    "SearchContext",
    "SearchResult",
    "SearchService",
]
