"""Authentication components for the Alacran client.

This module provides:
- The authentication provider contract used by the transport
- An in-memory provider and an environment-backed provider
- Multi-source setting resolution (value → env → .env → file → default)

Example:
    ```python
    from alacran_client.auth import AuthenticationContent, SimpleAuthenticationProvider

    provider = SimpleAuthenticationProvider(lambda: AuthenticationContent(password="alacran42"))
    ```
"""

from alacran_client.auth.credentials import CredentialResolver
from alacran_client.auth.exceptions import (
    CredentialError,
    CredentialFileError,
    CredentialNotFoundError,
)
from alacran_client.auth.provider import (
    AuthenticationContent,
    AuthenticationProvider,
    EnvAuthenticationProvider,
    SimpleAuthenticationProvider,
)

__all__ = [
    "AuthenticationContent",
    "AuthenticationProvider",
    "CredentialError",
    "CredentialFileError",
    "CredentialNotFoundError",
    "CredentialResolver",
    "EnvAuthenticationProvider",
    "SimpleAuthenticationProvider",
]
