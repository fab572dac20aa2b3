"""HTTP port definition (DTOs)."""

from __future__ import annotations

from dataclasses import dataclass, field

__all__ = ["EncodedBody", "HttpPort", "HttpReply"]


@dataclass(slots=True, frozen=True)
class EncodedBody:
    """Request body in a transport-neutral form.

    Exactly one of the attributes is set.

    Attributes:
        form_fields: Pairs to be sent as ``key=value&...``.
        text: Raw body text sent verbatim.
    """

    form_fields: tuple[tuple[str, str], ...] | None = None
    text: str | None = None


@dataclass
class HttpPort:
    """HTTP request to be sent by the dispatcher.

    Decouples the dispatch engine from HTTP implementation details.

    Attributes:
        method: HTTP verb.
        url: Fully composed target URL.
        headers: Headers set verbatim on the request.
        body: Optional encoded body.
    """

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: EncodedBody | None = None


@dataclass(slots=True, frozen=True)
class HttpReply:
    """Raw outcome of one HTTP exchange as seen by the transport.

    Attributes:
        status: HTTP status code.
        status_text: Reason phrase ("" if none).
        elapsed_ms: Milliseconds from send until the response headers arrived.
        body: Response body as text.
    """

    status: int
    status_text: str
    elapsed_ms: int
    body: str
