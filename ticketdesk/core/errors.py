"""Exceptions raised by the TicketDesk core."""

from typing import Optional


class TicketDeskError(Exception):
    """Base class for TicketDesk errors"""
    pass


class FetchError(TicketDeskError):
    """Raised when a page fetch or a count query fails.

    The original exception is chained as ``__cause__``.
    """

    def __init__(
        self,
        message: str,
        page: Optional[int] = None,
        page_size: Optional[int] = None,
    ):
        super().__init__(message)
        self.page = page
        self.page_size = page_size


class RemoteProtocolError(TicketDeskError):
    """Raised when the remote record server answers with an unexpected message"""
    pass
