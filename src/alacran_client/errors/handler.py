"""Error handling utilities for HTTP responses and API envelopes."""

import httpx

from alacran_client.config import DEFAULT_CONFIG, ApiStatus, TransportConfig
from alacran_client.errors.exceptions import (
    AlacranError,
    AlreadyExistsError,
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
    TransportError,
    WrongPasswordError,
)
from alacran_client.errors.models import Envelope

ERROR_CLASSES: dict[int, type[AlacranError]] = {
    ApiStatus.AUTH_TOKEN_INVALID: AuthTokenInvalidError,
    ApiStatus.ERROR_NOT_AUTHORIZED: NotAuthorizedError,
    ApiStatus.ERROR_ALREADY_EXIST: AlreadyExistsError,
    ApiStatus.ERROR_BAD_NAME: BadNameError,
    ApiStatus.WRONG_PASSWORD: WrongPasswordError,
    ApiStatus.ILLEGAL_OPERATION: IllegalOperationError,
    ApiStatus.BUILD_ERROR: BuildError,
    ApiStatus.ILLEGAL_PARAMETER: IllegalParameterError,
    ApiStatus.NOT_FOUND: NotFoundError,
    ApiStatus.AUTHENTICATION_FAILED: AuthenticationFailedError,
    ApiStatus.ERROR_OTP_REQUIRED: OtpRequiredError,
}


def raise_for_status(response: httpx.Response) -> None:
    """Raise a transport error for non-2xx HTTP responses.

    Args:
        response: HTTP response object

    Raises:
        TransportError subclass based on status code
    """
    if response.is_success:
        return

    status_code = response.status_code

    if 400 <= status_code < 500:
        exc_class = ClientError
    elif 500 <= status_code < 600:
        exc_class = ServerError
    else:
        exc_class = TransportError

    raise exc_class(
        message=f"HTTP {status_code}: {response.text}",
        status_code=status_code,
        response=response,
    )


def create_error(status: int, description: str = "") -> AlacranError:
    """Build the exception for an envelope status outside the success family.

    Args:
        status: Envelope status code
        description: Envelope description, used as the exception message

    Returns:
        AlacranError subclass registered for the status, or AlacranError itself
    """
    exc_class = ERROR_CLASSES.get(status, AlacranError)
    return exc_class(status, description)


def raise_for_envelope(envelope: Envelope, config: TransportConfig = DEFAULT_CONFIG) -> None:
    """Raise the API error for an envelope unless its status is a success."""
    if config.is_success(envelope.status):
        return
    raise create_error(envelope.status or ApiStatus.UNKNOWN_ERROR, envelope.description)
