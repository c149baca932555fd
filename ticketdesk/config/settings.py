"""Application settings configuration.

Settings are read from ``settings.yml`` and validated with pydantic. A
missing, unreadable or invalid file yields the defaults.
"""

import logging
from typing import Optional, Tuple

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

logger = logging.getLogger("TicketDesk.Settings")


class PaginationSettings(BaseModel):
    """Page size choices offered by every list view"""

    model_config = ConfigDict(frozen=True)

    page_size_options: Tuple[int, ...] = Field(
        default=(25, 50, 75, 100),
        description="Page sizes the user can pick from",
    )
    default_page_size: int = Field(
        default=25,
        description="Page size used when a list view opens",
    )

    @field_validator("page_size_options")
    @classmethod
    def validate_page_size_options(cls, v: Tuple[int, ...]) -> Tuple[int, ...]:
        """Ensure options are positive, unique and sorted"""
        if not v:
            raise ValueError("page_size_options must not be empty")
        if any(size < 1 for size in v):
            raise ValueError("page sizes must be at least 1")
        return tuple(sorted(set(v)))

    @model_validator(mode="after")
    def validate_default_page_size(self) -> "PaginationSettings":
        if self.default_page_size not in self.page_size_options:
            raise ValueError(
                f"default_page_size {self.default_page_size} "
                f"is not one of {self.page_size_options}"
            )
        return self


class DatabaseSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: Optional[str] = Field(
        default=None,
        description="SQLite database file (defaults to the user data directory)",
    )


class RemoteSettings(BaseModel):
    """Remote record server"""

    model_config = ConfigDict(frozen=True)

    enabled: bool = False
    uri: str = "ws://localhost:8765"
    max_size: int = Field(default=5 * 1024 * 1024, ge=1024)


class AppSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    pagination: PaginationSettings = Field(default_factory=PaginationSettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    remote: RemoteSettings = Field(default_factory=RemoteSettings)

    @classmethod
    def load(cls, path: Optional[str] = None) -> "AppSettings":
        if path is None:
            path = "settings.yml"

        config = cls._load_yaml(str(path))
        try:
            return cls(**config)
        except ValidationError as e:
            logger.warning(f"Invalid settings in {path}, using defaults: {e}")
            return cls()

    @staticmethod
    def _load_yaml(path: str) -> dict:
        try:
            with open(path, "r") as f:
                data = yaml.safe_load(f) or {}
        except FileNotFoundError:
            return {}
        except yaml.YAMLError as e:
            logger.warning(f"Error parsing settings YAML {path}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Settings file {path} is not a mapping, using defaults")
            return {}
        return data
