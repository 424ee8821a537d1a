"""Exceptions raised while resolving Alacran credentials and settings.

Example:
    ```python
    from alacran_client.auth.exceptions import CredentialNotFoundError

    if not password:
        raise CredentialNotFoundError("Password not found", env_var_name="ALACRAN_PASSWORD")
    ```
"""


class CredentialError(Exception):
    """Base exception for credential resolution failures."""

    pass


class CredentialNotFoundError(CredentialError):
    """Raised when a required setting is missing from every source.

    Attributes:
        env_var_name: The environment variable that was checked, if any.
    """

    def __init__(self, message: str, env_var_name: str | None = None):
        super().__init__(message)
        self.env_var_name = env_var_name


class CredentialFileError(CredentialError):
    """Raised when a credential file exists in configuration but cannot be read.

    Attributes:
        path: The path that was tried, if one was determined.
    """

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path
