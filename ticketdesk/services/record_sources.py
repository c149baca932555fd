"""Record sources backed by the local database."""

from typing import List

from ticketdesk.models import Station, Ticket, TicketCollection
from ticketdesk.services.database_service import DatabaseService


class TicketSource:
    def __init__(self, db_service: DatabaseService):
        self.db_service = db_service

    def fetch_page(self, page: int, page_size: int) -> List[Ticket]:
        return [Ticket.from_row(row) for row in self.db_service.get_tickets(page, page_size)]

    def count(self) -> int:
        return self.db_service.get_ticket_count()


class StationSource:
    def __init__(self, db_service: DatabaseService):
        self.db_service = db_service

    def fetch_page(self, page: int, page_size: int) -> List[Station]:
        return [Station.from_row(row) for row in self.db_service.get_stations(page, page_size)]

    def count(self) -> int:
        return self.db_service.get_station_count()


class CollectionSource:
    def __init__(self, db_service: DatabaseService):
        self.db_service = db_service

    def fetch_page(self, page: int, page_size: int) -> List[TicketCollection]:
        return [
            TicketCollection.from_row(row)
            for row in self.db_service.get_collections(page, page_size)
        ]

    def count(self) -> int:
        return self.db_service.get_collection_count()
