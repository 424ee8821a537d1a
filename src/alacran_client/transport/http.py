"""Authenticated request transport for the Alacran API.

``HttpTransport.fetch`` turns a logical ``(method, endpoint, payload)`` request
into an HTTP call and returns the ``data`` field of the response envelope:

1. Headers are built: the namespace marker, plus the auth token when the
   provider holds one.
2. The request is sent. Non-2xx responses and network failures raise a
   ``TransportError`` and are never retried.
3. If the envelope reports an invalid token, the ``Reauthenticator`` logs in
   again and the request is sent once more with rebuilt headers. A second
   invalid-token envelope is not retried.
4. Envelopes outside the success family raise an ``AlacranError``.

Once ``destroy()`` has been called, results of calls still in flight are not
delivered: the awaiting coroutine never completes, or raises
``TransportDestroyedError`` when ``TransportConfig.cancel_on_destroy`` is set.
Destroying does not abort the network calls themselves.

Example:
    ```python
    transport = HttpTransport("https://alacran.example.com/api/v1", provider)
    transport.reauthenticator = Reauthenticator(provider)

    nodes = await transport.fetch(transport.GET, "/user/system/nodes", {})
    ```
"""

import asyncio
import io
import logging
from collections.abc import Mapping
from typing import Any

import httpx

from alacran_client.auth.provider import AuthenticationProvider
from alacran_client.config import DEFAULT_CONFIG, TransportConfig
from alacran_client.errors.exceptions import TransportDestroyedError, TransportError
from alacran_client.errors.handler import raise_for_envelope, raise_for_status
from alacran_client.errors.models import Envelope
from alacran_client.transport.reauth import Reauthenticator

logger = logging.getLogger(__name__)


def is_file_value(value: Any) -> bool:
    """Return True for payload values that must be sent as multipart file parts."""
    if isinstance(value, bytes | bytearray | io.IOBase):
        return True
    # (filename, content) or (filename, content, content_type), as accepted by httpx
    if isinstance(value, tuple) and len(value) in (2, 3):
        return isinstance(value[1], bytes | bytearray | io.IOBase)
    return False


class HttpTransport:
    """Issue authenticated requests and unwrap the response envelope.

    Args:
        base_url: API root, e.g. ``https://alacran.example.com/api/v1``
        auth_provider: Supplies the current token
        reauthenticator: Logs in again when the token is rejected. Without
            one, an invalid-token envelope is raised as an error.
        config: Header names, status taxonomy and destroy behavior
        http_client: Shared ``httpx.AsyncClient``. When omitted the transport
            creates and owns one.
    """

    GET = "GET"
    POST = "POST"

    def __init__(
        self,
        base_url: str,
        auth_provider: AuthenticationProvider,
        *,
        reauthenticator: Reauthenticator | None = None,
        config: TransportConfig = DEFAULT_CONFIG,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        if not base_url:
            raise ValueError("base_url must be provided.")

        self.base_url = base_url.rstrip("/")
        self.auth_provider = auth_provider
        self.reauthenticator = reauthenticator
        self.config = config
        self.is_destroyed = False

        self._owns_http = http_client is None
        self.http = http_client or httpx.AsyncClient(timeout=config.timeout)

    async def __aenter__(self) -> "HttpTransport":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    def destroy(self) -> None:
        """Stop delivering results of calls that are still in flight."""
        if not self.is_destroyed:
            logger.debug("Transport destroyed")
        self.is_destroyed = True

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this transport created it."""
        if self._owns_http:
            await self.http.aclose()

    async def create_headers(self) -> dict[str, str]:
        headers = {self.config.namespace_header: self.config.namespace_value}

        auth_token = await self.auth_provider.on_auth_token_requested()
        if auth_token:
            headers[self.config.token_header] = auth_token

        return headers

    async def fetch(
        self,
        method: str,
        endpoint: str,
        payload: Any = None,
        *,
        allow_reauth: bool = True,
    ) -> Any:
        """Send a request and return the ``data`` field of its envelope.

        Args:
            method: ``GET`` or ``POST``
            endpoint: Path below the base URL; may already contain a query string
            payload: Query parameters for GET, body for POST
            allow_reauth: Re-authenticate and retry once on an invalid token

        Returns:
            The envelope's ``data`` (None when the server sent none)

        Raises:
            ValueError: If ``method`` is not GET or POST
            TransportError: On non-2xx responses or network failures
            AlacranError: On envelopes outside the success family
        """
        method = method.upper()

        try:
            if method not in (self.GET, self.POST):
                raise ValueError(f"Unknown method: {method}")

            envelope = await self._send(method, endpoint, payload)

            if self.config.is_token_invalid(envelope.status) and allow_reauth and self.reauthenticator:
                logger.info(f"Auth token invalid for {method} {endpoint}, re-authenticating")
                await self.reauthenticator.reauthenticate(self)
                envelope = await self._send(method, endpoint, payload)

            raise_for_envelope(envelope, self.config)
        except Exception:
            if self.is_destroyed:
                await self._withhold(method, endpoint, "error")
            raise

        if self.is_destroyed:
            await self._withhold(method, endpoint, "result")
        return envelope.data

    async def _send(self, method: str, endpoint: str, payload: Any) -> Envelope:
        headers = await self.create_headers()
        url = self.base_url + endpoint

        logger.debug(f"Sending {method} {url}")
        try:
            if method == self.GET:
                if payload:
                    # Merged so a query string already in the endpoint is kept
                    url = httpx.URL(url).copy_merge_params(payload)
                response = await self.http.get(url, headers=headers)
            else:
                response = await self.http.post(url, headers=headers, **self._encode_body(payload))
        except httpx.HTTPError as e:
            logger.warning(f"Request {method} {url} failed with {e!r}")
            raise TransportError(f"{method} {url} failed: {e}") from e

        if not response.is_success:
            logger.warning(f"Request {method} {url} failed with HTTP {response.status_code}")
        raise_for_status(response)

        return Envelope.from_response(response)

    def _encode_body(self, payload: Any) -> dict[str, Any]:
        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            return {"json": payload}

        files = {key: value for key, value in payload.items() if is_file_value(value)}
        if not files:
            return {"json": dict(payload)}

        data = {key: value for key, value in payload.items() if key not in files}
        return {"data": data, "files": files}

    async def _withhold(self, method: str, endpoint: str, outcome: str) -> None:
        """Keep a finished call's outcome from reaching a destroyed caller."""
        if self.config.cancel_on_destroy:
            raise TransportDestroyedError(f"Transport destroyed before {method} {endpoint} completed")

        logger.debug(f"Withholding {outcome} of {method} {endpoint}: transport destroyed")
        # Never resolved; the caller stays suspended until its task is cancelled
        await asyncio.get_running_loop().create_future()
