"""Railway station record."""

from dataclasses import asdict, dataclass, fields
from typing import Any, Mapping, Optional


@dataclass
class Station:
    id: int
    station_name: str
    province: Optional[str] = None
    city: Optional[str] = None
    district: Optional[str] = None
    station_code: Optional[str] = None
    station_pinyin: Optional[str] = None
    longitude: Optional[str] = None
    latitude: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Station":
        names = {f.name for f in fields(cls)}
        return cls(**{key: row[key] for key in row.keys() if key in names})

    def to_dict(self) -> dict:
        return asdict(self)
