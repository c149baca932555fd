"""Record source served by a remote TicketDesk server over WebSocket."""

import json
import logging
from typing import Any, Callable, Dict, List, Mapping

import websockets

from ticketdesk.core.errors import RemoteProtocolError

logger = logging.getLogger("TicketDesk.RemoteRecordSource")


class RemoteRecordSource:
    """Fetches pages and counts with one request/response exchange each.

    Request:  {"action": "get_page", "kind": ..., "page": n, "page_size": n}
    Response: {"type": "page", "items": [...]}
    Request:  {"action": "count", "kind": ...}
    Response: {"type": "count", "total_count": n}
    """

    def __init__(
        self,
        uri: str,
        kind: str,
        record_factory: Callable[[Mapping[str, Any]], Any],
        max_size: int = 5 * 1024 * 1024,
        open_timeout: float = 5,
    ):
        self.uri = uri
        self.kind = kind
        self.record_factory = record_factory
        self.max_size = max_size
        self.open_timeout = open_timeout

    async def fetch_page(self, page: int, page_size: int) -> List[Any]:
        data = await self._request(
            {
                "action": "get_page",
                "kind": self.kind,
                "page": page,
                "page_size": page_size,
            },
            expected_type="page",
        )
        items = data.get("items", [])
        logger.debug(f"Received {len(items)} {self.kind} for page {page}")
        return [self.record_factory(item) for item in items]

    async def count(self) -> int:
        data = await self._request(
            {"action": "count", "kind": self.kind}, expected_type="count"
        )
        return int(data.get("total_count", 0))

    async def _request(self, request: Dict[str, Any], expected_type: str) -> Dict[str, Any]:
        async with websockets.connect(
            self.uri, max_size=self.max_size, open_timeout=self.open_timeout
        ) as websocket:
            await websocket.send(json.dumps(request))
            response = await websocket.recv()

        data = json.loads(response)
        msg_type = data.get("type")
        if msg_type == "error":
            raise RemoteProtocolError(data.get("message", "Remote server error"))
        if msg_type != expected_type:
            raise RemoteProtocolError(
                f"Expected '{expected_type}' response, got {msg_type!r}"
            )
        return data
