"""Error handling for the Alacran API envelope and HTTP transport."""

from alacran_client.errors.exceptions import (
    AlacranError,
    AlreadyExistsError,
    AuthenticationError,
    AuthenticationFailedError,
    AuthTokenInvalidError,
    BadNameError,
    BuildError,
    ClientError,
    IllegalOperationError,
    IllegalParameterError,
    NotAuthorizedError,
    NotFoundError,
    OtpRequiredError,
    ServerError,
    TransportDestroyedError,
    TransportError,
    WrongPasswordError,
)
from alacran_client.errors.handler import create_error, raise_for_envelope, raise_for_status
from alacran_client.errors.models import Envelope

__all__ = [
    "AlacranError",
    "AlreadyExistsError",
    "AuthTokenInvalidError",
    "AuthenticationError",
    "AuthenticationFailedError",
    "BadNameError",
    "BuildError",
    "ClientError",
    "Envelope",
    "IllegalOperationError",
    "IllegalParameterError",
    "NotAuthorizedError",
    "NotFoundError",
    "OtpRequiredError",
    "ServerError",
    "TransportDestroyedError",
    "TransportError",
    "WrongPasswordError",
    "create_error",
    "raise_for_envelope",
    "raise_for_status",
]
