"""Application paths configuration."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class AppPaths:
    db_path: Path
    config_path: Path

    @classmethod
    def default(cls) -> "AppPaths":
        data_dir = Path.home() / ".local" / "share" / "ticketdesk"

        return cls(
            db_path=data_dir / "tickets.db",
            config_path=Path("settings.yml"),
        )
