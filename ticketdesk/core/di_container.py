"""Dependency injection container."""

from dataclasses import dataclass, field
from typing import Optional

from ticketdesk.config import AppPaths, AppSettings
from ticketdesk.core.protocols import RecordSource
from ticketdesk.interfaces.scheduler import UiScheduler
from ticketdesk.managers.list_session import ListSession
from ticketdesk.models import Station, Ticket, TicketCollection
from ticketdesk.services import (
    CollectionSource,
    DatabaseService,
    RemoteRecordSource,
    StationSource,
    TicketSource,
)

LIST_KINDS = {
    "tickets": (TicketSource, Ticket),
    "stations": (StationSource, Station),
    "collections": (CollectionSource, TicketCollection),
}


@dataclass
class AppContainer:
    settings: AppSettings
    paths: AppPaths

    _db_service: Optional[DatabaseService] = field(
        default=None, init=False, repr=False
    )

    @property
    def db_service(self) -> DatabaseService:
        if self._db_service is None:
            db_path = self.settings.database.path or str(self.paths.db_path)
            self._db_service = DatabaseService(db_path)
        return self._db_service

    def record_source(self, kind: str) -> RecordSource:
        if kind not in LIST_KINDS:
            raise ValueError(f"Unknown list kind: {kind}")

        source_class, record_class = LIST_KINDS[kind]
        remote = self.settings.remote
        if remote.enabled:
            return RemoteRecordSource(
                uri=remote.uri,
                kind=kind,
                record_factory=record_class.from_row,
                max_size=remote.max_size,
            )
        return source_class(self.db_service)

    def create_list_session(
        self, kind: str, scheduler: Optional[UiScheduler] = None
    ) -> ListSession:
        return ListSession.create(
            kind,
            self.record_source(kind),
            pagination=self.settings.pagination,
            scheduler=scheduler,
        )

    @classmethod
    def create(
        cls,
        settings: Optional[AppSettings] = None,
        paths: Optional[AppPaths] = None,
    ) -> "AppContainer":
        paths = paths or AppPaths.default()
        settings = settings or AppSettings.load(str(paths.config_path))
        return cls(settings=settings, paths=paths)
