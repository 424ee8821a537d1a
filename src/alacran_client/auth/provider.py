"""Authentication providers supplying tokens and login credentials.

The transport never stores tokens itself. It asks a provider for the current
token before every request, asks it for credentials when the server rejects
the token, and hands it the token issued by the login endpoint.
"""

import inspect
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from alacran_client.auth.credentials import CredentialResolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthenticationContent:
    """Credentials sent to the login endpoint."""

    password: str
    otp_token: str | None = None

    def __repr__(self) -> str:
        return f"AuthenticationContent(password='***', otp_token={'***' if self.otp_token else None})"


CredentialsCallback = Callable[[], "AuthenticationContent | Awaitable[AuthenticationContent]"]


@runtime_checkable
class AuthenticationProvider(Protocol):
    """Capability the transport uses to read, refresh and store the auth token."""

    async def on_auth_token_requested(self) -> str | None:
        """Return the current token, or None/empty when not logged in."""
        ...

    async def on_credentials_requested(self) -> AuthenticationContent:
        """Return credentials for a fresh login. May wait on user input."""
        ...

    def on_auth_token_updated(self, auth_token: str) -> None:
        """Store the token issued by a successful login."""
        ...


class SimpleAuthenticationProvider:
    """Keeps the token in memory and delegates credential prompts to a callback.

    Example:
        ```python
        provider = SimpleAuthenticationProvider(lambda: AuthenticationContent(password="alacran42"))
        ```
    """

    def __init__(self, on_credentials_requested: CredentialsCallback):
        self._on_credentials_requested = on_credentials_requested
        self._auth_token = ""

    async def on_auth_token_requested(self) -> str | None:
        return self._auth_token

    async def on_credentials_requested(self) -> AuthenticationContent:
        result = self._on_credentials_requested()
        if inspect.isawaitable(result):
            result = await result
        return result

    def on_auth_token_updated(self, auth_token: str) -> None:
        self._auth_token = auth_token


class EnvAuthenticationProvider(SimpleAuthenticationProvider):
    """In-memory provider that reads the password from the environment.

    The password comes from ``ALACRAN_PASSWORD`` (or the file named by
    ``ALACRAN_PASSWORD_FILE``) and the optional one-time password from
    ``ALACRAN_OTP_TOKEN``. Lookup happens on every credential request, so a
    rotated secret is picked up on the next re-login.
    """

    def __init__(
        self,
        resolver: CredentialResolver | None = None,
        *,
        password: str | None = None,
    ):
        super().__init__(self._credentials_from_env)
        self._resolver = resolver or CredentialResolver()
        self._password = password

    def _credentials_from_env(self) -> AuthenticationContent:
        password = self._resolver.resolve_secret("PASSWORD", value=self._password, required=True)
        otp_token = self._resolver.resolve("OTP_TOKEN", secret=True)
        logger.debug("Credentials requested, resolved password from environment")
        return AuthenticationContent(password=password, otp_token=otp_token)
