"""Scheduling helpers for fetch work and headless UI loops."""

import asyncio
import inspect
import logging
from collections import deque
from typing import Any, Callable, Deque, Tuple

logger = logging.getLogger("TicketDesk.Scheduling")


def run_blocking(func: Callable[..., Any], *args: Any) -> Any:
    """Call ``func`` and, if it returns an awaitable, drive it to completion.

    Coroutine fetchers get a private event loop for the duration of the
    call, the same way worker threads run IPC coroutines.
    """
    result = func(*args)
    if not inspect.isawaitable(result):
        return result

    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(result)
    finally:
        loop.close()
        asyncio.set_event_loop(None)


class SynchronousScheduler:
    """Runs background work inline and drains idle callbacks in FIFO order.

    An idle callback queued while another one is running waits until the
    running one returns, like a main loop would.
    """

    def __init__(self):
        self._queue: Deque[Tuple[Callable[..., Any], Tuple[Any, ...]]] = deque()
        self._draining = False

    def idle_add(self, callback: Callable[..., Any], *args: Any) -> None:
        self._queue.append((callback, args))
        if self._draining:
            return
        self._draining = True
        try:
            while self._queue:
                queued, queued_args = self._queue.popleft()
                queued(*queued_args)
        finally:
            self._draining = False

    def run_in_background(self, func: Callable[..., Any], *args: Any) -> None:
        func(*args)
