"""Status codes and transport configuration for the Alacran API."""

from dataclasses import dataclass
from enum import IntEnum


class ApiStatus(IntEnum):
    """Status codes carried in the ``status`` field of every response envelope."""

    OK = 100
    OK_DEPLOY_STARTED = 101
    OK_PARTIALLY = 102

    ERROR_GENERIC = 1000
    ERROR_ALACRAN_NOT_INITIALIZED = 1001
    ERROR_USER_NOT_INITIALIZED = 1101
    ERROR_NOT_AUTHORIZED = 1102
    ERROR_ALREADY_EXIST = 1103
    ERROR_BAD_NAME = 1104
    WRONG_PASSWORD = 1105
    AUTH_TOKEN_INVALID = 1106
    VERIFICATION_FAILED = 1107
    ILLEGAL_OPERATION = 1108
    BUILD_ERROR = 1109
    ILLEGAL_PARAMETER = 1110
    NOT_FOUND = 1111
    AUTHENTICATION_FAILED = 1112
    PASSWORD_BACK_OFF = 1113
    ERROR_OTP_REQUIRED = 1114

    UNKNOWN_ERROR = 1999


SUCCESS_STATUSES: frozenset[int] = frozenset(
    [ApiStatus.OK, ApiStatus.OK_DEPLOY_STARTED, ApiStatus.OK_PARTIALLY]
)


@dataclass(frozen=True)
class TransportConfig:
    """Immutable settings shared by the transport and the client.

    Attributes:
        token_header: Header carrying the current auth token.
        namespace_header: Header marking requests as belonging to Alacran.
        namespace_value: Constant value sent in ``namespace_header``.
        api_prefix: Path appended to the base domain to form the API root.
        login_endpoint: Endpoint used to exchange a password for a token.
        success_statuses: Envelope statuses treated as success.
        token_invalid_status: Envelope status that triggers re-authentication.
        timeout: HTTP timeout in seconds for the owned ``httpx.AsyncClient``.
        cancel_on_destroy: If True, calls still in flight when the transport is
            destroyed raise ``TransportDestroyedError`` instead of never
            completing.
    """

    token_header: str = "x-alacran-auth"
    namespace_header: str = "x-namespace"
    namespace_value: str = "alacran"
    api_prefix: str = "/api/v1"
    login_endpoint: str = "/login"
    success_statuses: frozenset[int] = SUCCESS_STATUSES
    token_invalid_status: int = ApiStatus.AUTH_TOKEN_INVALID
    timeout: float = 30.0
    cancel_on_destroy: bool = False

    def is_success(self, status: int) -> bool:
        return status in self.success_statuses

    def is_token_invalid(self, status: int) -> bool:
        return status == self.token_invalid_status


DEFAULT_CONFIG = TransportConfig()
