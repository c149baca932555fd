"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest

from tests.fakes import FakeRecordSource, ManualScheduler


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    return tmp_path / "test.db"


@pytest.fixture
def temp_config_path(tmp_path: Path) -> Path:
    return tmp_path / "settings.yml"


@pytest.fixture
def source() -> FakeRecordSource:
    return FakeRecordSource(total=100)


@pytest.fixture
def manual_scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def session(source):
    """Paging session over 100 fake tickets with inline scheduling."""
    from ticketdesk.managers import ListSession

    return ListSession.create("tickets", source)


@pytest.fixture
def manual_session(source, manual_scheduler):
    """Paging session whose workers and idle callbacks run on demand."""
    from ticketdesk.managers import ListSession

    return ListSession.create("tickets", source, scheduler=manual_scheduler)


@pytest.fixture
def temp_db():
    """Create a temporary in-memory database for testing."""
    from ticketdesk.database import TicketDB

    db = TicketDB(":memory:")
    yield db
    db.close()


@pytest.fixture
def db_service(temp_db_path: Path):
    from ticketdesk.services import DatabaseService

    service = DatabaseService(str(temp_db_path))
    yield service
    service.close()
