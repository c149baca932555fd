"""GLib main loop implementation of the UI scheduler."""

import logging
import threading
from typing import Any, Callable

from gi.repository import GLib

from ticketdesk.interfaces.scheduler import UiScheduler

logger = logging.getLogger("TicketDesk.GLibScheduler")


class GLibScheduler(UiScheduler):
    """Workers are daemon threads; results return via ``GLib.idle_add``."""

    def idle_add(self, callback: Callable[..., Any], *args: Any) -> None:
        def run_once():
            callback(*args)
            return False  # Don't repeat

        GLib.idle_add(run_once)

    def run_in_background(self, func: Callable[..., Any], *args: Any) -> None:
        thread = threading.Thread(target=func, args=args, daemon=True)
        thread.start()
