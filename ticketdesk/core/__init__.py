"""Core wiring and shared primitives."""

from .errors import FetchError, RemoteProtocolError, TicketDeskError
from .observable import ObservableList, Signal
from .scheduling import SynchronousScheduler, run_blocking

__all__ = [
    "TicketDeskError",
    "FetchError",
    "RemoteProtocolError",
    "ObservableList",
    "Signal",
    "SynchronousScheduler",
    "run_blocking",
]
