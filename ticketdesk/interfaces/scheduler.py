"""UI thread scheduling interface."""

from typing import Any, Callable, Protocol


class UiScheduler(Protocol):
    """Interface for moving work between the UI thread and workers."""

    def idle_add(self, callback: Callable[..., Any], *args: Any) -> None:
        """
        Run a callback on the UI thread at the next idle tick.

        Args:
            callback: Function to call on the UI thread
            *args: Arguments passed to the callback
        """
        ...

    def run_in_background(self, func: Callable[..., Any], *args: Any) -> None:
        """
        Run a function on a worker context.

        The function must not touch UI-owned state; it hands its result
        back through ``idle_add``.

        Args:
            func: Function to run off the UI thread
            *args: Arguments passed to the function
        """
        ...
