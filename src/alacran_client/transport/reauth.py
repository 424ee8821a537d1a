"""Re-authentication after the server rejects the auth token.

When an envelope reports ``AUTH_TOKEN_INVALID`` the transport hands control to
a ``Reauthenticator``, which asks the authentication provider for credentials,
exchanges them for a token at the login endpoint and stores the token back in
the provider. The transport then retries the original request once.

The login request is sent with re-authentication disabled, so a rejected
login is final and can never start another login.

## Concurrent callers

By default every request that sees an invalid token logs in on its own, so
several requests failing at once cause several logins. With
``single_flight=True`` the first caller starts the login and the others wait
for its outcome:

```python
reauthenticator = Reauthenticator(provider, single_flight=True)
```
"""

import asyncio
import logging
import weakref
from typing import TYPE_CHECKING, Any

from alacran_client.auth.provider import AuthenticationContent, AuthenticationProvider
from alacran_client.errors.exceptions import AuthenticationError
from alacran_client.models import LoginResponse

if TYPE_CHECKING:
    from alacran_client.transport.http import HttpTransport

logger = logging.getLogger(__name__)


class Reauthenticator:
    """Exchange provider credentials for a fresh token.

    Args:
        auth_provider: Source of credentials and sink for the new token.
        single_flight: Share one in-flight login among concurrent callers.
    """

    def __init__(self, auth_provider: AuthenticationProvider, *, single_flight: bool = False) -> None:
        self.auth_provider = auth_provider
        self.single_flight = single_flight
        self._inflight: "weakref.WeakKeyDictionary[HttpTransport, asyncio.Future[None]]" = weakref.WeakKeyDictionary()

    async def login(self, transport: "HttpTransport", content: AuthenticationContent) -> str:
        """Log in with ``content`` and store the issued token in the provider.

        Args:
            transport: Transport used to reach the login endpoint
            content: Credentials to send

        Returns:
            The new token

        Raises:
            AlacranError: If the server rejects the login (including an
                invalid-token status, which is never retried here)
            AuthenticationError: If the login succeeds without returning a token
        """
        payload: dict[str, Any] = {"password": content.password}
        if content.otp_token:
            payload["otpToken"] = content.otp_token

        data: LoginResponse | None = await transport.fetch(
            transport.POST, transport.config.login_endpoint, payload, allow_reauth=False
        )

        token = data.get("token") if isinstance(data, dict) else None
        if not token:
            raise AuthenticationError("Login succeeded but the response carried no token")

        self.auth_provider.on_auth_token_updated(token)
        logger.info("Obtained new auth token")
        return token

    async def reauthenticate(self, transport: "HttpTransport") -> None:
        """Request credentials from the provider and log in with them.

        Any failure, whether from the provider or the login call, propagates
        unchanged so the caller can report it as the result of the original
        request.

        With ``single_flight`` a login is shared only among callers using the
        same transport; another transport starts its own login through its own
        HTTP client.
        """
        if not self.single_flight:
            await self._reauthenticate(transport)
            return

        inflight = self._inflight.get(transport)
        if inflight is None or inflight.done():
            inflight = asyncio.ensure_future(self._reauthenticate(transport))
            self._inflight[transport] = inflight
        else:
            logger.debug("Joining re-authentication already in progress")

        # Shielded so one cancelled waiter does not abort the login for the rest
        await asyncio.shield(inflight)

    async def _reauthenticate(self, transport: "HttpTransport") -> None:
        logger.info("Auth token rejected, requesting credentials")
        content = await self.auth_provider.on_credentials_requested()
        await self.login(transport, content)
