"""Alacran Client - async Python client for the Alacran platform-management API.

This library provides:
- An authenticated transport that re-logs in once when the token expires
- Typed errors for HTTP failures and error envelopes
- Pluggable authentication providers and multi-source setting resolution
- A client with one method per API operation, plus a generic escape hatch

Example:
    ```python
    from alacran_client import AlacranClient, AuthenticationContent, SimpleAuthenticationProvider

    provider = SimpleAuthenticationProvider(lambda: AuthenticationContent(password="alacran42"))

    async with AlacranClient("https://alacran.example.com", provider) as client:
        nodes = await client.get_all_nodes()
        registries = await client.execute_generic_api_command("GET", "/user/registries")
    ```
"""

from alacran_client.auth import (
    AuthenticationContent,
    AuthenticationProvider,
    EnvAuthenticationProvider,
    SimpleAuthenticationProvider,
)
from alacran_client.client import AlacranClient
from alacran_client.config import ApiStatus, TransportConfig
from alacran_client.errors import AlacranError, TransportError

__version__ = "0.1.0"

__all__ = [
    "AlacranClient",
    "AlacranError",
    "ApiStatus",
    "AuthenticationContent",
    "AuthenticationProvider",
    "EnvAuthenticationProvider",
    "SimpleAuthenticationProvider",
    "TransportConfig",
    "TransportError",
    "__version__",
]
