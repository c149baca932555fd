"""Manager classes for list view state."""

from .list_session import ListSession
from .paged_cache_loader import LoadResult, PagedCacheLoader
from .pagination_controller import PaginationController

__all__ = [
    "PaginationController",
    "PagedCacheLoader",
    "LoadResult",
    "ListSession",
]
