"""
Database Service - Thread-safe wrapper for database operations
"""
import logging
import threading
from typing import Any, Dict, List, Optional

from ticketdesk.database import TicketDB

logger = logging.getLogger("TicketDesk.DatabaseService")


class DatabaseService:
    """Serializes database access; pages are fetched from worker threads"""

    def __init__(self, db_path: Optional[str] = None):
        logger.info(f"Connecting to database: {db_path or 'default path'}")
        self.db = TicketDB(db_path)
        self.lock = threading.Lock()
        logger.info(f"Database initialized or already exists at: {self.db.db_path}")

    def add_ticket(self, **fields) -> int:
        with self.lock:
            return self.db.add_ticket(**fields)

    def get_tickets(self, page: int, page_size: int) -> List[Dict[str, Any]]:
        with self.lock:
            return self.db.get_tickets(page, page_size)

    def get_ticket_count(self) -> int:
        with self.lock:
            return self.db.get_ticket_count()

    def delete_ticket(self, ticket_id: int) -> bool:
        with self.lock:
            return self.db.delete_ticket(ticket_id)

    def add_station(self, **fields) -> int:
        with self.lock:
            return self.db.add_station(**fields)

    def get_stations(self, page: int, page_size: int) -> List[Dict[str, Any]]:
        with self.lock:
            return self.db.get_stations(page, page_size)

    def get_station_count(self) -> int:
        with self.lock:
            return self.db.get_station_count()

    def add_collection(self, **fields) -> int:
        with self.lock:
            return self.db.add_collection(**fields)

    def get_collections(self, page: int, page_size: int) -> List[Dict[str, Any]]:
        with self.lock:
            return self.db.get_collections(page, page_size)

    def get_collection_count(self) -> int:
        with self.lock:
            return self.db.get_collection_count()

    def close(self) -> None:
        with self.lock:
            self.db.close()
