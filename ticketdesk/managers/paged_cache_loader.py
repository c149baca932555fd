"""Paged Cache Loader - Fetches pages on demand and applies them to a list."""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from ticketdesk.core.errors import FetchError
from ticketdesk.core.observable import ObservableList, Signal
from ticketdesk.core.scheduling import run_blocking
from ticketdesk.interfaces.scheduler import UiScheduler
from ticketdesk.managers.pagination_controller import PaginationController

logger = logging.getLogger("TicketDesk.PagedCacheLoader")

FetchFunction = Callable[[int, int], Sequence[Any]]
CountFunction = Callable[[], int]


@dataclass
class LoadResult:
    """Outcome of one page load, reported on the UI thread."""

    page: int
    page_size: int
    records: List[Any] = field(default_factory=list)
    from_cache: bool = False
    applied: bool = False
    # Set when a reset made the load obsolete before it completed
    dropped: bool = False
    error: Optional[FetchError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


LoadCallback = Callable[[LoadResult], None]
RefreshCallback = Callable[[Optional[FetchError]], None]


class PagedCacheLoader:
    """Resolves the records of the current page and commits them to ``items``.

    Pages are served from an instance-owned cache when it holds an entry
    fetched at the current page size; otherwise the fetch function runs on
    a worker and its result is applied back on the UI thread. Results for a
    page or page size that is no longer current are never applied.
    """

    def __init__(
        self,
        controller: PaginationController,
        fetch: FetchFunction,
        count: CountFunction,
        items: Optional[ObservableList] = None,
        scheduler: Optional[UiScheduler] = None,
    ):
        """Initialize PagedCacheLoader.

        Args:
            controller: Pagination state of the owning view
            fetch: Returns the records of (page, page_size); may be a coroutine function
            count: Returns the total number of records; may be a coroutine function
            items: Observable collection shown by the view
            scheduler: Scheduler for worker and UI thread hand-off
                (defaults to the controller's)
        """
        self.controller = controller
        self.fetch = fetch
        self.count = count
        self.items = items if items is not None else ObservableList()
        self.scheduler = scheduler or controller.scheduler

        self._cache: Dict[int, List[Any]] = {}
        self._cached_page_size = controller.page_size
        # Bumped on reset so fetches started before it are dropped
        self._generation = 0
        self._in_flight: Dict[Tuple[int, int, int], List[Optional[LoadCallback]]] = {}
        # query_all counts that have not reported back yet
        self._pending_queries = 0

        self.load_failed = Signal("load-failed")

        controller.page_changed.connect(self._on_page_changed)
        controller.page_size_changed.connect(self._on_page_size_changed)
        controller.cache_invalidated.connect(self._on_cache_invalidated)
        controller.reset_requested.connect(self._on_reset)

    @property
    def cached_page_size(self) -> int:
        return self._cached_page_size

    @property
    def cached_pages(self) -> List[int]:
        return sorted(self._cache)

    def get_cached_page(self, page: int) -> Optional[List[Any]]:
        """Return the cached records of a page if valid for the current size."""
        if self._cached_page_size != self.controller.page_size:
            return None
        return self._cache.get(page)

    def is_fetching(self) -> bool:
        return bool(self._in_flight) or self._pending_queries > 0

    def clear_cache(self) -> None:
        if self._cache:
            logger.debug(f"Clearing {len(self._cache)} cached pages")
        self._cache.clear()

    # Loading

    def load_current_page(self, on_complete: Optional[LoadCallback] = None) -> None:
        """Show the records of the controller's current page.

        Args:
            on_complete: Called on the UI thread with the LoadResult
        """
        controller = self.controller
        page = controller.current_page
        page_size = controller.page_size
        controller.set_loading(True)

        cached = self.get_cached_page(page)
        if cached is not None:
            logger.debug(f"Cache hit for page {page} (size {page_size})")
            try:
                self._apply(cached)
            finally:
                controller.set_loading(False)
                controller.notify_capabilities()
            self._finish(
                [on_complete],
                LoadResult(
                    page, page_size, list(cached), from_cache=True, applied=True
                ),
            )
            return

        key = (self._generation, page, page_size)
        waiters = self._in_flight.get(key)
        if waiters is not None:
            logger.debug(f"Page {page} (size {page_size}) already being fetched")
            waiters.append(on_complete)
            return

        self._in_flight[key] = [on_complete]
        logger.debug(f"Fetching page {page} (size {page_size})")
        self.scheduler.run_in_background(
            self._fetch_in_background, self._generation, page, page_size
        )

    def refresh_in_background(
        self, on_complete: Optional[RefreshCallback] = None
    ) -> None:
        """Re-count records without showing a loading state.

        Used after a record is added elsewhere. The displayed page is left
        alone unless the new count moves the current page.

        Args:
            on_complete: Called on the UI thread with None or the FetchError
        """
        self.scheduler.run_in_background(
            self._count_in_background,
            self._on_background_count,
            self._generation,
            on_complete,
        )

    def query_all(self, on_complete: Optional[LoadCallback] = None) -> None:
        """Count the records and show the first page.

        Args:
            on_complete: Called on the UI thread with the LoadResult of page 1
        """
        controller = self.controller
        controller.set_loading(True)
        controller.move_to_first_page()
        self.clear_cache()
        self._pending_queries += 1
        self.scheduler.run_in_background(
            self._count_in_background,
            self._on_query_all_count,
            self._generation,
            on_complete,
        )

    # Worker side

    def _fetch_in_background(self, generation: int, page: int, page_size: int) -> None:
        records = None
        error = None
        try:
            records = list(run_blocking(self.fetch, page, page_size))
        except Exception as e:
            error = FetchError(
                f"Failed to load page {page} (size {page_size}): {e}",
                page=page,
                page_size=page_size,
            )
            error.__cause__ = e

        self.scheduler.idle_add(
            self._on_fetch_done, generation, page, page_size, records, error
        )

    def _count_in_background(
        self, handler: Callable[..., None], generation: int, on_complete: Any
    ) -> None:
        total = None
        error = None
        try:
            total = int(run_blocking(self.count))
        except Exception as e:
            error = FetchError(f"Failed to count records: {e}")
            error.__cause__ = e

        self.scheduler.idle_add(handler, total, error, generation, on_complete)

    # UI thread side

    def _on_fetch_done(
        self,
        generation: int,
        page: int,
        page_size: int,
        records: Optional[List[Any]],
        error: Optional[FetchError],
    ) -> None:
        controller = self.controller
        waiters = self._in_flight.pop((generation, page, page_size), [])
        result = LoadResult(page, page_size, error=error)

        try:
            if generation != self._generation:
                logger.debug(f"Dropped page {page} fetched before reset")
                result.dropped = True
            elif error is not None:
                logger.error(f"{error}")
                self.load_failed.emit(error)
            else:
                result.records = records
                if page_size == controller.page_size:
                    self._cache[page] = list(records)
                    self._cached_page_size = page_size

                if page == controller.current_page and page_size == controller.page_size:
                    self._apply(records)
                    result.applied = True
                else:
                    logger.debug(
                        f"Discarded stale page {page} (size {page_size}), "
                        f"showing page {controller.current_page}"
                    )
        finally:
            current = (self._generation, controller.current_page, controller.page_size)
            if current not in self._in_flight:
                controller.set_loading(False)
            controller.notify_capabilities()

        self._finish(waiters, result)

    def _on_background_count(
        self,
        total: Optional[int],
        error: Optional[FetchError],
        generation: int,
        on_complete: Optional[RefreshCallback],
    ) -> None:
        controller = self.controller
        if error is not None:
            logger.error(f"Background refresh failed: {error}")
            self.load_failed.emit(error)
        elif generation == self._generation:
            previous_page = controller.current_page
            self.clear_cache()
            controller.set_total_items(total)
            logger.info(
                f"Background refresh: {total} items, {controller.total_pages} pages"
            )
            if controller.is_initialized and controller.current_page != previous_page:
                self.load_current_page()

        if on_complete is not None:
            on_complete(error)

    def _on_query_all_count(
        self,
        total: Optional[int],
        error: Optional[FetchError],
        generation: int,
        on_complete: Optional[LoadCallback],
    ) -> None:
        controller = self.controller
        self._pending_queries -= 1
        stale = generation != self._generation
        if error is not None or stale:
            if stale:
                logger.debug("Dropped record count queried before reset")
            else:
                logger.error(f"Query failed: {error}")
                self.load_failed.emit(error)
            if not self.is_fetching():
                controller.set_loading(False)
            controller.notify_capabilities()
            self._finish(
                [on_complete],
                LoadResult(1, controller.page_size, dropped=stale, error=error),
            )
            return

        controller.set_total_items(total)
        controller.move_to_first_page()

        def on_first_page(result: LoadResult) -> None:
            if result.dropped or generation != self._generation:
                result.dropped = True
            elif result.ok:
                controller.mark_initialized()
                if not result.applied:
                    # Page size changed while the first page was in flight
                    self.load_current_page(on_complete)
                    return
            self._finish([on_complete], result)

        self.load_current_page(on_first_page)

    def _on_page_changed(self) -> None:
        self.load_current_page()

    def _on_page_size_changed(self) -> None:
        if self.controller.is_initialized:
            self.load_current_page()
        elif not self.is_fetching():
            self.controller.set_loading(False)

    def _on_cache_invalidated(self) -> None:
        self.clear_cache()
        self._cached_page_size = self.controller.page_size

    def _on_reset(self) -> None:
        self._generation += 1
        self.clear_cache()
        self._cached_page_size = self.controller.page_size
        self.items.clear()

    def _apply(self, records: Sequence[Any]) -> None:
        """Diff-or-replace: overwrite changed positions when lengths match."""
        items = self.items
        if len(items) != len(records):
            self._replace(records)
            return

        for index, record in enumerate(records):
            if len(items) != len(records):
                logger.warning(
                    "Target list changed size during update, replacing contents"
                )
                self._replace(records)
                return
            if items[index] != record:
                items[index] = record

    def _replace(self, records: Sequence[Any]) -> None:
        self.items.clear()
        self.items.extend(records)

    @staticmethod
    def _finish(callbacks: List[Optional[Callable[..., None]]], result: Any) -> None:
        for callback in callbacks:
            if callback is not None:
                callback(result)
