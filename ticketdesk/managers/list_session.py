"""List session - One paged list view's controller, loader and items."""

from dataclasses import dataclass
from typing import Optional

from ticketdesk.config import PaginationSettings
from ticketdesk.core.observable import ObservableList
from ticketdesk.core.protocols import RecordSource
from ticketdesk.interfaces.scheduler import UiScheduler
from ticketdesk.managers.paged_cache_loader import PagedCacheLoader
from ticketdesk.managers.pagination_controller import PaginationController


@dataclass
class ListSession:
    kind: str
    controller: PaginationController
    loader: PagedCacheLoader

    @property
    def items(self) -> ObservableList:
        return self.loader.items

    @classmethod
    def create(
        cls,
        kind: str,
        source: RecordSource,
        pagination: Optional[PaginationSettings] = None,
        scheduler: Optional[UiScheduler] = None,
    ) -> "ListSession":
        pagination = pagination or PaginationSettings()
        controller = PaginationController(
            page_size_options=pagination.page_size_options,
            page_size=pagination.default_page_size,
            scheduler=scheduler,
        )
        loader = PagedCacheLoader(
            controller,
            fetch=source.fetch_page,
            count=source.count,
        )
        return cls(kind=kind, controller=controller, loader=loader)
