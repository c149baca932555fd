"""Tests for RemoteRecordSource over a fake WebSocket."""

import asyncio

import pytest

from tests.fakes import FakeWebSocket, fake_connect


@pytest.fixture
def remote(monkeypatch):
    """Build a remote ticket source whose connections go to a fake socket."""
    from ticketdesk.models import Ticket
    from ticketdesk.services import RemoteRecordSource

    def build(responses):
        websocket = FakeWebSocket(responses)
        calls = []
        monkeypatch.setattr(
            "ticketdesk.services.remote_source.websockets.connect",
            fake_connect(websocket, calls),
        )
        source = RemoteRecordSource(
            uri="ws://localhost:8765",
            kind="tickets",
            record_factory=Ticket.from_row,
            max_size=2048,
        )
        return source, websocket, calls

    return build


def test_fetch_page_request_and_records(remote):
    from ticketdesk.models import Ticket

    source, websocket, calls = remote(
        [
            {
                "type": "page",
                "items": [
                    {"id": 26, "ticket_number": "T026"},
                    {"id": 27, "ticket_number": "T027", "extra": "ignored"},
                ],
            }
        ]
    )

    records = asyncio.run(source.fetch_page(2, 25))

    assert records == [
        Ticket(id=26, ticket_number="T026"),
        Ticket(id=27, ticket_number="T027"),
    ]
    assert websocket.get_sent_json() == {
        "action": "get_page",
        "kind": "tickets",
        "page": 2,
        "page_size": 25,
    }
    assert websocket.closed is True
    assert calls == [{"uri": "ws://localhost:8765", "max_size": 2048, "open_timeout": 5}]


def test_count(remote):
    source, websocket, _ = remote([{"type": "count", "total_count": 137}])

    assert asyncio.run(source.count()) == 137
    assert websocket.get_sent_json() == {"action": "count", "kind": "tickets"}


def test_error_response_raises(remote):
    from ticketdesk.core.errors import RemoteProtocolError

    source, _, _ = remote([{"type": "error", "message": "database locked"}])

    with pytest.raises(RemoteProtocolError, match="database locked"):
        asyncio.run(source.count())


def test_unexpected_response_type_raises(remote):
    from ticketdesk.core.errors import RemoteProtocolError

    source, _, _ = remote([{"type": "count", "total_count": 3}])

    with pytest.raises(RemoteProtocolError, match="Expected 'page'"):
        asyncio.run(source.fetch_page(1, 25))


def test_remote_source_drives_a_list_session(remote):
    from ticketdesk.managers import ListSession

    source, _, _ = remote(
        [
            {"type": "count", "total_count": 2},
            {"type": "page", "items": [{"id": 1}, {"id": 2}]},
        ]
    )
    session = ListSession.create("tickets", source)
    results = []

    session.loader.query_all(results.append)

    assert results[0].applied is True
    assert [ticket.id for ticket in session.items] == [1, 2]
    assert session.controller.status_text == "Page 1 of 1 (2 items)"
