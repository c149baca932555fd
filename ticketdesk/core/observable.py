"""Observable primitives shared by the list views.

``Signal`` follows the GObject connect/disconnect/emit shape and
``ObservableList`` reports changes the way ``Gio.ListModel::items-changed``
does, so a GTK list model can mirror it without translation.
"""

import logging
from collections.abc import MutableSequence
from typing import Any, Callable, Dict, Iterable, List, Optional

logger = logging.getLogger("TicketDesk.Observable")


class Signal:
    """A named notification with any number of handlers."""

    def __init__(self, name: str):
        self.name = name
        self._handlers: Dict[int, Callable[..., Any]] = {}
        self._next_id = 1

    def connect(self, handler: Callable[..., Any]) -> int:
        handler_id = self._next_id
        self._next_id += 1
        self._handlers[handler_id] = handler
        return handler_id

    def disconnect(self, handler_id: int) -> None:
        self._handlers.pop(handler_id, None)

    def emit(self, *args: Any) -> None:
        # Copy so handlers may disconnect themselves while being called
        for handler in list(self._handlers.values()):
            handler(*args)

    def __len__(self) -> int:
        return len(self._handlers)


class ObservableList(MutableSequence):
    """Mutable sequence that emits ``items-changed(position, removed, added)``."""

    def __init__(self, items: Optional[Iterable[Any]] = None):
        self._items: List[Any] = list(items) if items is not None else []
        self.items_changed = Signal("items-changed")

    def __getitem__(self, index):
        return self._items[index]

    def __setitem__(self, index: int, value: Any) -> None:
        if isinstance(index, slice):
            raise TypeError("ObservableList does not support slice assignment")
        if index < 0:
            index += len(self._items)
        self._items[index] = value
        self.items_changed.emit(index, 1, 1)

    def __delitem__(self, index: int) -> None:
        if isinstance(index, slice):
            raise TypeError("ObservableList does not support slice deletion")
        if index < 0:
            index += len(self._items)
        del self._items[index]
        self.items_changed.emit(index, 1, 0)

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ObservableList):
            return self._items == other._items
        if isinstance(other, list):
            return self._items == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"ObservableList({self._items!r})"

    def insert(self, index: int, value: Any) -> None:
        if index < 0:
            index = max(0, index + len(self._items))
        index = min(index, len(self._items))
        self._items.insert(index, value)
        self.items_changed.emit(index, 0, 1)

    def clear(self) -> None:
        removed = len(self._items)
        if not removed:
            return
        self._items.clear()
        self.items_changed.emit(0, removed, 0)

    def extend(self, values: Iterable[Any]) -> None:
        values = list(values)
        if not values:
            return
        position = len(self._items)
        self._items.extend(values)
        self.items_changed.emit(position, 0, len(values))

    def snapshot(self) -> List[Any]:
        """Return a shallow copy of the current contents."""
        return list(self._items)
