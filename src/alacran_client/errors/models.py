"""Response envelope model."""

from dataclasses import dataclass
from typing import Any

import httpx

from alacran_client.config import ApiStatus


@dataclass(frozen=True)
class Envelope:
    """The uniform ``{status, description, data}`` wrapper of every API response."""

    status: int
    description: str = ""
    data: Any = None

    @classmethod
    def from_response(cls, response: httpx.Response) -> "Envelope":
        """Parse the envelope from an HTTP response body.

        Bodies that are not a JSON object with an integer ``status`` are mapped
        to ``UNKNOWN_ERROR`` so they surface as an API error instead of
        being mistaken for a payload.

        Args:
            response: HTTP response object

        Returns:
            Envelope parsed from the body
        """
        try:
            body = response.json()
        except (ValueError, TypeError):
            # JSON decode errors on empty or non-JSON bodies
            return cls(status=ApiStatus.UNKNOWN_ERROR, description=response.text[:200])

        return cls.from_dict(body)

    @classmethod
    def from_dict(cls, body: Any) -> "Envelope":
        if not isinstance(body, dict):
            return cls(status=ApiStatus.UNKNOWN_ERROR, description=f"Unexpected response body: {body!r}"[:200])

        status = body.get("status")
        # bool is an int subclass but never a valid status
        if not isinstance(status, int) or isinstance(status, bool):
            status = ApiStatus.UNKNOWN_ERROR

        description = body.get("description")
        return cls(
            status=status,
            description=description if isinstance(description, str) else "",
            data=body.get("data"),
        )
