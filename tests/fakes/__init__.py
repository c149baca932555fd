"""In-memory fakes for tests."""

from .fake_record_source import FakeRecordSource, make_tickets
from .fake_websocket import FakeWebSocket, fake_connect
from .manual_scheduler import ManualScheduler

__all__ = [
    "FakeRecordSource",
    "make_tickets",
    "FakeWebSocket",
    "fake_connect",
    "ManualScheduler",
]
