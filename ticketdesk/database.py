"""
Database layer for TicketDesk
Handles SQLite storage of tickets, stations and ticket collections
"""

import logging
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

logger = logging.getLogger("TicketDesk.Database")

TICKET_COLUMNS = (
    "ticket_number",
    "train_no",
    "depart_station",
    "arrive_station",
    "depart_date",
    "depart_time",
    "coach_no",
    "seat_no",
    "seat_type",
    "money",
)

STATION_COLUMNS = (
    "station_name",
    "province",
    "city",
    "district",
    "station_code",
    "station_pinyin",
    "longitude",
    "latitude",
)

COLLECTION_COLUMNS = (
    "collection_name",
    "description",
    "ticket_count",
    "sort_order",
    "importance",
    "created_at",
)


class TicketDB:
    """SQLite database for ticket, station and collection records"""

    def __init__(self, db_path: str = None):
        if db_path is None:
            # Default to ~/.local/share/ticketdesk/tickets.db
            db_dir = Path.home() / ".local" / "share" / "ticketdesk"
            db_dir.mkdir(parents=True, exist_ok=True)
            db_path = db_dir / "tickets.db"

        self.db_path = str(db_path)
        self.conn = sqlite3.connect(self.db_path, check_same_thread=False)
        self.conn.row_factory = sqlite3.Row
        self._init_db()

    def _init_db(self):
        """Initialize database schema"""
        cursor = self.conn.cursor()
        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS tickets (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                ticket_number TEXT,
                train_no TEXT,
                depart_station TEXT,
                arrive_station TEXT,
                depart_date TEXT,
                depart_time TEXT,
                coach_no TEXT,
                seat_no TEXT,
                seat_type TEXT,
                money REAL
            )
        """
        )
        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS stations (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                station_name TEXT NOT NULL,
                province TEXT,
                city TEXT,
                district TEXT,
                station_code TEXT,
                station_pinyin TEXT,
                longitude TEXT,
                latitude TEXT
            )
        """
        )
        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS collections (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                collection_name TEXT NOT NULL,
                description TEXT,
                ticket_count INTEGER DEFAULT 0,
                sort_order INTEGER DEFAULT 0,
                importance INTEGER DEFAULT 0,
                created_at TEXT
            )
        """
        )
        cursor.execute(
            """
            CREATE INDEX IF NOT EXISTS idx_station_name
            ON stations(station_name)
        """
        )
        self.conn.commit()

    def _insert(self, table: str, columns: tuple, values: Dict) -> int:
        unknown = set(values) - set(columns)
        if unknown:
            raise ValueError(f"Unknown {table} columns: {sorted(unknown)}")

        names = [name for name in columns if name in values]
        placeholders = ",".join("?" * len(names))
        cursor = self.conn.cursor()
        cursor.execute(
            f"INSERT INTO {table} ({', '.join(names)}) VALUES ({placeholders})",
            tuple(values[name] for name in names),
        )
        self.conn.commit()
        return cursor.lastrowid

    def _get_page(self, table: str, page: int, page_size: int) -> List[Dict]:
        """Return one page of rows ordered by id.

        Args:
            table: Table name
            page: 1-based page number
            page_size: Rows per page
        """
        if page < 1 or page_size < 1:
            raise ValueError(f"Invalid page request: page={page}, page_size={page_size}")

        cursor = self.conn.cursor()
        cursor.execute(
            f"SELECT * FROM {table} ORDER BY id ASC LIMIT ? OFFSET ?",
            (page_size, (page - 1) * page_size),
        )
        return [dict(row) for row in cursor.fetchall()]

    def _count(self, table: str) -> int:
        cursor = self.conn.cursor()
        cursor.execute(f"SELECT COUNT(*) as count FROM {table}")
        return cursor.fetchone()["count"]

    # Tickets

    def add_ticket(self, **fields) -> int:
        return self._insert("tickets", TICKET_COLUMNS, fields)

    def get_tickets(self, page: int, page_size: int) -> List[Dict]:
        return self._get_page("tickets", page, page_size)

    def get_ticket_count(self) -> int:
        return self._count("tickets")

    def delete_ticket(self, ticket_id: int) -> bool:
        cursor = self.conn.cursor()
        cursor.execute("DELETE FROM tickets WHERE id = ?", (ticket_id,))
        self.conn.commit()
        return cursor.rowcount > 0

    # Stations

    def add_station(self, **fields) -> int:
        return self._insert("stations", STATION_COLUMNS, fields)

    def get_stations(self, page: int, page_size: int) -> List[Dict]:
        return self._get_page("stations", page, page_size)

    def get_station_count(self) -> int:
        return self._count("stations")

    # Collections

    def add_collection(self, **fields) -> int:
        fields.setdefault("created_at", datetime.now().isoformat(timespec="seconds"))
        return self._insert("collections", COLLECTION_COLUMNS, fields)

    def get_collections(self, page: int, page_size: int) -> List[Dict]:
        return self._get_page("collections", page, page_size)

    def get_collection_count(self) -> int:
        return self._count("collections")

    def close(self):
        """Close database connection"""
        if self.conn:
            self.conn.close()
            self.conn = None
