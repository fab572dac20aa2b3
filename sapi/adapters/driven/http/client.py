"""HTTP client adapter with timing and metrics integration."""

import asyncio
import logging
from types import TracebackType

import aiohttp
from aiohttp import ClientResponse, FormData
from yarl import URL

from sapi.core.errors import TransportError
from sapi.ports.http import EncodedBody, HttpPort, HttpReply
from sapi.ports.metrics import HttpAttemptDto, MetricsPort

__all__ = ["HttpClient", "TRANSPORT_ERRORS"]

logger = logging.getLogger(__name__)

FIRST_FAILING_HTTP_CODE = 400

# Exceptions that mean no HTTP response was obtained
TRANSPORT_ERRORS = (
    aiohttp.ClientError,  # Connection refused, DNS failed, protocol errors
    asyncio.TimeoutError,  # Transport timeout
    ValueError,  # URL or header value refused by aiohttp/yarl before sending
)

# Exceptions that mean the body could not be turned into text
BODY_DECODE_ERRORS = (
    UnicodeDecodeError,  # Body is not valid in its charset
    LookupError,  # Unknown charset
    aiohttp.ClientPayloadError,  # Truncated or malformed body
)


def _to_request_data(body: EncodedBody | None) -> FormData | str | None:
    """Map a transport-neutral body to aiohttp's ``data`` argument."""
    if body is None:
        return None
    if body.form_fields is not None:
        return FormData(list(body.form_fields))
    return body.text


class HttpClient:
    """HTTP client performing one timed exchange per request.

    Features:
    - Single session reused for the whole run.
    - Response time measured up to the response headers.
    - HTTP error statuses returned like any other response.
    - Metrics collection (response time, error statuses).
    """

    def __init__(self, metrics: MetricsPort | None = None) -> None:
        """Initialize HTTP client.

        Args:
            metrics: Optional metrics collector to track exchanges.
        """
        self.metrics = metrics
        self.session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> "HttpClient":
        """Enter async context manager (start session).

        Returns:
            Self for use in async with statement.
        """
        self.session = aiohttp.ClientSession()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        """Exit async context manager (close session).

        Args:
            exc_type: Exception type if raised in context.
            exc: Exception instance if raised in context.
            tb: Traceback if raised in context.
        """
        if self.session:
            await self.session.close()

    async def _send(self, req: HttpPort) -> ClientResponse:
        """Send the request and return once the response headers arrived.

        Args:
            req: HTTP request to send.

        Returns:
            HTTP response with the body not yet read.

        Raises:
            RuntimeError: If session not initialized.
            TransportError: If no HTTP response could be obtained.
        """
        if self.session is None:
            raise RuntimeError("Session not initialized; use 'async with' context manager")

        try:
            return await self.session.request(
                req.method,
                URL(req.url, encoded=True),
                headers=req.headers,
                data=_to_request_data(req.body),
            )
        except TRANSPORT_ERRORS as e:
            raise TransportError(req.url, e) from e

    @staticmethod
    async def _read_text(resp: ClientResponse) -> str:
        """Read the response body as text.

        Returns:
            Decoded body, or "" if it cannot be decoded.
        """
        try:
            return await resp.text()
        except BODY_DECODE_ERRORS as e:
            logger.debug(f"Response body from {resp.url} is not readable as text: {e!r}")
            return ""
        finally:
            resp.release()

    async def request(self, req: HttpPort) -> HttpReply:
        """Send HTTP request, time it and record metrics.

        The clock stops as soon as the response object is available,
        before the body is read.

        Args:
            req: HTTP request object.

        Returns:
            Status, reason phrase, response time and body text.

        Raises:
            TransportError: If no HTTP response could be obtained.
        """
        loop = asyncio.get_running_loop()
        started = loop.time()

        resp = await self._send(req)

        elapsed_ms = max(0, int((loop.time() - started) * 1_000))
        body = await self._read_text(resp)

        if self.metrics:
            self.metrics.update(
                HttpAttemptDto(
                    elapsed_ms=elapsed_ms,
                    status_code=resp.status,
                    is_failed=resp.status >= FIRST_FAILING_HTTP_CODE,
                )
            )
            logger.debug(f"HTTP metrics: {self.metrics}")

        return HttpReply(
            status=resp.status,
            status_text=resp.reason or "",
            elapsed_ms=elapsed_ms,
            body=body,
        )
