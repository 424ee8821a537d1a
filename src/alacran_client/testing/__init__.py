"""Testing utilities for code built on the Alacran client.

``FakeAlacranServer`` is an ``httpx.MockTransport`` handler that records every
request and answers with scripted envelopes, so tests can exercise the real
transport without a network.

Example:
    ```python
    from alacran_client.testing import FakeAlacranServer, create_envelope_response


    async def test_lists_nodes():
        server = FakeAlacranServer()
        server.queue("/user/system/nodes", create_envelope_response(data={"nodes": []}))

        client = AlacranClient("https://alacran.test", provider, http_client=server.http_client())
        assert await client.get_all_nodes() == {"nodes": []}
    ```
"""

import json
from collections import defaultdict, deque
from collections.abc import Callable
from typing import Any

import httpx

from alacran_client.config import ApiStatus

Responder = httpx.Response | Callable[[httpx.Request], httpx.Response]


def create_envelope(status: int = ApiStatus.OK, data: Any = None, description: str = "") -> dict[str, Any]:
    """Build an envelope body; ``data`` is omitted when None."""
    body: dict[str, Any] = {"status": int(status), "description": description}
    if data is not None:
        body["data"] = data
    return body


def create_envelope_response(
    status: int = ApiStatus.OK,
    data: Any = None,
    description: str = "",
    http_status: int = 200,
) -> httpx.Response:
    """Build an HTTP response carrying an envelope."""
    return httpx.Response(http_status, json=create_envelope(status, data, description))


def create_error_response(http_status: int, text: str = "") -> httpx.Response:
    """Build a non-envelope HTTP error response."""
    return httpx.Response(http_status, text=text)


class FakeAlacranServer:
    """Scripted stand-in for an Alacran server.

    Responses are queued per path (relative to ``api_root``). Each request
    pops the next queued response for its path; once a path has a single
    response left, that response is reused. Paths with nothing queued answer
    with an ``OK`` envelope without data.

    Attributes:
        requests: Every request received, in order.
    """

    def __init__(self, api_root: str = "/api/v1") -> None:
        self.api_root = api_root
        self.requests: list[httpx.Request] = []
        self._responses: dict[str, deque[Responder]] = defaultdict(deque)

    def queue(self, path: str, *responses: Responder) -> None:
        self._responses[path].extend(responses)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        path = request.url.path.removeprefix(self.api_root)
        pending = self._responses.get(path)
        if not pending:
            return create_envelope_response()

        responder = pending.popleft() if len(pending) > 1 else pending[0]
        if isinstance(responder, httpx.Response):
            # Fresh copy, since a queued response may be served more than once
            return httpx.Response(responder.status_code, headers=responder.headers, content=responder.content)
        return responder(request)

    def requests_to(self, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path == self.api_root + path]

    @staticmethod
    def json_body(request: httpx.Request) -> Any:
        return json.loads(request.content)

    def http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


__all__ = [
    "FakeAlacranServer",
    "create_envelope",
    "create_envelope_response",
    "create_error_response",
]
