"""Response port definition (DTO)."""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["ResponseRecord"]


@dataclass(slots=True, frozen=True)
class ResponseRecord:
    """Immutable result of one completed HTTP exchange.

    HTTP error statuses (4xx/5xx) are recorded like any other response.

    Attributes:
        status: HTTP status code.
        status_text: Reason phrase sent by the server ("" if none).
        method: Verb actually used for the request.
        url: Fully composed request URL.
        server_response_time_ms: Milliseconds from send to response headers.
        response_body: Body decoded as text ("" if it could not be decoded).
    """

    status: int
    status_text: str
    method: str
    url: str
    server_response_time_ms: int
    response_body: str
