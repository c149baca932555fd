"""Configuration management."""

from .paths import AppPaths
from .settings import AppSettings, DatabaseSettings, PaginationSettings, RemoteSettings

__all__ = [
    "AppSettings",
    "PaginationSettings",
    "DatabaseSettings",
    "RemoteSettings",
    "AppPaths",
]
