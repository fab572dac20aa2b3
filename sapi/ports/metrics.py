"""Metrics port definition (interface and DTO)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

__all__ = ["HttpAttemptDto", "MetricsPort"]


@dataclass(slots=True, frozen=True)
class HttpAttemptDto:
    """Immutable snapshot of a single HTTP exchange.

    Attributes:
        elapsed_ms: Milliseconds until the response headers arrived.
        status_code: HTTP status code of the response.
        is_failed: True if the server answered with an error status.
    """

    elapsed_ms: int
    status_code: int
    is_failed: bool = False


class MetricsPort(Protocol):
    """Interface for recording HTTP exchange metrics.

    The HTTP adapter calls update() after each exchange; the entrypoint
    calls __str__() to render the run summary.
    """

    def update(self, attempt: HttpAttemptDto, /) -> None:
        """Record a finished HTTP exchange.

        Args:
            attempt: The exchange to record.
        """
        ...

    def __str__(self) -> str:
        """Return concise textual summary for humans.

        Returns:
            Formatted metrics string.
        """
        ...
