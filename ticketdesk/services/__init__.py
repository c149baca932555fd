"""Persistence and record source services."""

from .database_service import DatabaseService
from .record_sources import CollectionSource, StationSource, TicketSource
from .remote_source import RemoteRecordSource

__all__ = [
    "DatabaseService",
    "TicketSource",
    "StationSource",
    "CollectionSource",
    "RemoteRecordSource",
]
