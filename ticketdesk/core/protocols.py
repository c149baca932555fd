"""Protocol definitions for dependency injection."""

from typing import Any, Awaitable, Protocol, Sequence, Union


class RecordSource(Protocol):
    def fetch_page(
        self, page: int, page_size: int
    ) -> Union[Sequence[Any], Awaitable[Sequence[Any]]]: ...

    def count(self) -> Union[int, Awaitable[int]]: ...
