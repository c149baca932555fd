"""Pagination state and navigation for paged list views."""

import logging
from typing import Any, Iterable, Optional, Tuple

from ticketdesk.core.observable import Signal
from ticketdesk.core.scheduling import SynchronousScheduler
from ticketdesk.interfaces.scheduler import UiScheduler

logger = logging.getLogger("TicketDesk.PaginationController")

DEFAULT_PAGE_SIZE_OPTIONS: Tuple[int, ...] = (25, 50, 75, 100)

CAPABILITY_PROPERTIES = (
    "can_go_first",
    "can_go_previous",
    "can_go_next",
    "can_go_last",
)


class PaginationController:
    """Owns the page, page size and loading state of one list view.

    Signals:
        page_changed: the current page changed after initialization
        page_size_changed: the page size changed and state is consistent
        cache_invalidated: cached pages no longer match the page size
        reset_requested: the view was reset to an empty first page
        property_changed: emitted with the name of each changed property
    """

    def __init__(
        self,
        page_size_options: Iterable[int] = DEFAULT_PAGE_SIZE_OPTIONS,
        page_size: Optional[int] = None,
        scheduler: Optional[UiScheduler] = None,
    ):
        """Initialize PaginationController.

        Args:
            page_size_options: Allowed page sizes
            page_size: Initial page size (defaults to the first option)
            scheduler: Scheduler used to defer page-changed dispatch
        """
        options = tuple(page_size_options)
        if not options or any(size <= 0 for size in options):
            raise ValueError(f"Invalid page size options: {options}")
        if page_size is None:
            page_size = options[0]
        if page_size not in options:
            raise ValueError(
                f"Page size {page_size} is not one of {options}"
            )

        self.page_size_options = options
        self.scheduler = scheduler or SynchronousScheduler()

        self._page_size = page_size
        self._current_page = 1
        self._total_items = 0
        self._total_pages = 1
        self._is_loading = False
        self._is_initialized = False

        self.page_changed = Signal("page-changed")
        self.page_size_changed = Signal("page-size-changed")
        self.cache_invalidated = Signal("cache-invalidated")
        self.reset_requested = Signal("reset")
        self.property_changed = Signal("property-changed")

    # State

    @property
    def current_page(self) -> int:
        return self._current_page

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def total_items(self) -> int:
        return self._total_items

    @property
    def total_pages(self) -> int:
        return self._total_pages

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def is_initialized(self) -> bool:
        return self._is_initialized

    @property
    def can_go_first(self) -> bool:
        return self._current_page > 1

    @property
    def can_go_previous(self) -> bool:
        return self._current_page > 1

    @property
    def can_go_next(self) -> bool:
        return self._current_page < self._total_pages

    @property
    def can_go_last(self) -> bool:
        return self._current_page < self._total_pages

    @property
    def status_text(self) -> str:
        return (
            f"Page {self._current_page} of {self._total_pages} "
            f"({self._total_items} items)"
        )

    # Mutation

    def set_total_items(self, total_items: int) -> None:
        """Set the record count and recompute the page bound."""
        if total_items < 0:
            logger.warning(f"Negative total item count {total_items}, using 0")
            total_items = 0

        self._set("total_items", total_items)
        self._recalculate_total_pages()

    def set_page_size(self, page_size: int) -> bool:
        """Switch to another configured page size.

        Returns:
            bool: True if the page size changed
        """
        if page_size not in self.page_size_options:
            logger.debug(f"Rejected page size {page_size}")
            return False
        if page_size == self._page_size:
            return False

        self.set_loading(True)
        self._set("page_size", page_size)
        self.cache_invalidated.emit()
        self._recalculate_total_pages()

        logger.info(
            f"Page size changed to {page_size} "
            f"(page {self._current_page} of {self._total_pages})"
        )
        self.page_size_changed.emit()
        return True

    def go_to_page(self, page: int) -> bool:
        """Navigate to a page within ``[1, total_pages]``.

        Returns:
            bool: True if the navigation was accepted
        """
        if not isinstance(page, int) or page < 1 or page > self._total_pages:
            logger.debug(
                f"Rejected navigation to page {page} "
                f"(total pages: {self._total_pages})"
            )
            return False
        if page == self._current_page:
            return False

        if self._is_initialized:
            self.set_loading(True)
        self._set("current_page", page)
        self.notify_capabilities()

        if self._is_initialized:
            self.scheduler.idle_add(self._dispatch_page_changed, page)
        return True

    def first_page(self) -> bool:
        if not self.can_go_first:
            return False
        return self.go_to_page(1)

    def previous_page(self) -> bool:
        if not self.can_go_previous:
            return False
        return self.go_to_page(self._current_page - 1)

    def next_page(self) -> bool:
        if not self.can_go_next:
            return False
        return self.go_to_page(self._current_page + 1)

    def last_page(self) -> bool:
        if not self.can_go_last:
            return False
        return self.go_to_page(self._total_pages)

    def move_to_first_page(self) -> None:
        """Reposition on page 1 without raising page-changed."""
        self._set("current_page", 1)
        self.notify_capabilities()

    def mark_initialized(self) -> None:
        self._set("is_initialized", True)

    def set_loading(self, loading: bool) -> None:
        self._set("is_loading", loading)

    def reset(self) -> None:
        """Return to an empty first page without recreating the view."""
        self._set("current_page", 1)
        self._set("total_items", 0)
        self._set("total_pages", 1)
        self._set("is_initialized", False)
        self.set_loading(False)
        self.reset_requested.emit()
        self.notify_capabilities()

    def notify_capabilities(self) -> None:
        """Re-publish the navigation capability flags."""
        for name in CAPABILITY_PROPERTIES:
            self.property_changed.emit(name)

    # Internals

    def _set(self, name: str, value: Any) -> None:
        attribute = f"_{name}"
        if getattr(self, attribute) == value:
            return
        setattr(self, attribute, value)
        self.property_changed.emit(name)

    def _recalculate_total_pages(self) -> None:
        pages = (self._total_items + self._page_size - 1) // self._page_size
        self._set("total_pages", max(1, pages))

        if self._current_page > self._total_pages:
            self._set("current_page", self._total_pages)
        self.notify_capabilities()

    def _dispatch_page_changed(self, page: int) -> None:
        # A reset between scheduling and dispatch cancels the notification
        if not self._is_initialized:
            logger.debug(f"Dropped page-changed for page {page} after reset")
            return
        self.page_changed.emit()
