"""Structured exceptions for transport and API errors."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx


class TransportError(Exception):
    """Raised when the HTTP exchange itself fails (non-2xx or network error)."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response: "httpx.Response | None" = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response = response


class ClientError(TransportError):
    """4xx HTTP responses."""

    pass


class ServerError(TransportError):
    """5xx HTTP responses."""

    pass


class AlacranError(Exception):
    """Base exception for envelopes whose status is outside the success family.

    Attributes:
        status: Numeric status code from the response envelope.
        description: Human-readable description from the response envelope.
    """

    def __init__(self, status: int, description: str = ""):
        super().__init__(description)
        self.status = status
        self.description = description

    def __repr__(self) -> str:
        return f"{type(self).__name__}(status={self.status}, description={self.description!r})"


class AuthTokenInvalidError(AlacranError):
    """1106: the auth token was rejected."""

    pass


class NotAuthorizedError(AlacranError):
    """1102: the caller is not allowed to perform the operation."""

    pass


class AlreadyExistsError(AlacranError):
    """1103: the resource already exists."""

    pass


class BadNameError(AlacranError):
    """1104: the supplied name is not acceptable."""

    pass


class WrongPasswordError(AlacranError):
    """1105: the password was rejected."""

    pass


class IllegalOperationError(AlacranError):
    """1108: the operation is not allowed in the current state."""

    pass


class BuildError(AlacranError):
    """1109: building the app failed."""

    pass


class IllegalParameterError(AlacranError):
    """1110: a request parameter was rejected."""

    pass


class NotFoundError(AlacranError):
    """1111: the resource does not exist."""

    pass


class AuthenticationFailedError(AlacranError):
    """1112: authentication failed."""

    pass


class OtpRequiredError(AlacranError):
    """1114: a one-time password is required to log in."""

    pass


class AuthenticationError(Exception):
    """Raised when a login succeeds but the response carries no token."""

    pass


class TransportDestroyedError(Exception):
    """Raised for in-flight calls when the transport is destroyed.

    Only used when ``TransportConfig.cancel_on_destroy`` is enabled; otherwise
    such calls never complete.
    """

    pass
