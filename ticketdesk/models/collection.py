"""Ticket collection record."""

from dataclasses import asdict, dataclass, fields
from typing import Any, Mapping, Optional


@dataclass
class TicketCollection:
    id: int
    collection_name: str
    description: Optional[str] = None
    ticket_count: int = 0
    sort_order: int = 0
    importance: int = 0
    created_at: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "TicketCollection":
        names = {f.name for f in fields(cls)}
        return cls(**{key: row[key] for key in row.keys() if key in names})

    def to_dict(self) -> dict:
        return asdict(self)
