"""Per-request dispatch: verb selection, URL composition and result building."""

import logging
from collections.abc import Awaitable, Callable

from sapi.core.body_encoding import encode_body
from sapi.core.errors import BodyEncodingError, UnsupportedMethodError
from sapi.ports.http import HttpPort, HttpReply
from sapi.ports.request import RequestSpec
from sapi.ports.response import ResponseRecord

__all__ = [
    "BODYLESS_METHODS",
    "BODY_METHODS",
    "RequestFn",
    "compose_url",
    "build_http_request",
    "dispatch_request",
]

logger = logging.getLogger(__name__)

BODYLESS_METHODS = frozenset({"GET", "HEAD", "DELETE"})
BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})

RequestFn = Callable[[HttpPort], Awaitable[HttpReply]]


def compose_url(spec: RequestSpec) -> str:
    """Compose the plain-HTTP URL of a request without encoding any part."""
    return f"http://{spec.target}:{spec.port}{spec.endpoint}"


def build_http_request(spec: RequestSpec) -> HttpPort:
    """Translate a request spec into a transport request.

    Args:
        spec: Request described in the input document.

    Returns:
        Request ready to be sent.

    Raises:
        UnsupportedMethodError: If the verb is not one the runner sends.
        BodyEncodingError: If the declared body cannot be encoded.
    """
    if spec.method in BODYLESS_METHODS:
        body = None
    elif spec.method in BODY_METHODS:
        body = encode_body(spec.headers, spec.data)
    else:
        raise UnsupportedMethodError(spec.method)

    return HttpPort(
        method=spec.method,
        url=compose_url(spec),
        headers=dict(spec.headers or {}),
        body=body,
    )


async def dispatch_request(spec: RequestSpec, request_fn: RequestFn) -> ResponseRecord | None:
    """Perform one HTTP exchange for a request spec.

    Unsupported verbs and unencodable bodies are logged and skipped.
    HTTP error statuses are recorded like successful responses.

    Args:
        spec: Request described in the input document.
        request_fn: Async function used to send one HTTP request.

    Returns:
        The response record, or None if the request was skipped.

    Raises:
        TransportError: Propagated from request_fn on connection failure.
    """
    try:
        http_request = build_http_request(spec)
    except UnsupportedMethodError as e:
        logger.warning(f"{e}, skipping request to {compose_url(spec)}")
        return None
    except BodyEncodingError as e:
        logger.error(f"Cannot build body for {spec.method} {compose_url(spec)}: {e}, skipping")
        return None

    reply = await request_fn(http_request)

    logger.info(
        "Sent request to %s and got response: %s %s",
        http_request.url,
        reply.status,
        reply.status_text,
    )
    return ResponseRecord(
        status=reply.status,
        status_text=reply.status_text,
        method=http_request.method,
        url=http_request.url,
        server_response_time_ms=reply.elapsed_ms,
        response_body=reply.body,
    )
