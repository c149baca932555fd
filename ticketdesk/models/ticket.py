"""Railway ticket record."""

from dataclasses import asdict, dataclass, fields
from typing import Any, Mapping, Optional


@dataclass
class Ticket:
    id: int
    ticket_number: Optional[str] = None
    train_no: Optional[str] = None
    depart_station: Optional[str] = None
    arrive_station: Optional[str] = None
    depart_date: Optional[str] = None
    depart_time: Optional[str] = None
    coach_no: Optional[str] = None
    seat_no: Optional[str] = None
    seat_type: Optional[str] = None
    money: Optional[float] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Ticket":
        names = {f.name for f in fields(cls)}
        return cls(**{key: row[key] for key in row.keys() if key in names})

    def to_dict(self) -> dict:
        return asdict(self)

    @property
    def route(self) -> str:
        return f"{self.depart_station or '?'} → {self.arrive_station or '?'}"
