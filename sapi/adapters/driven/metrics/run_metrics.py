"""In-memory metrics for the HTTP exchanges of one run."""

from __future__ import annotations

import statistics
from dataclasses import dataclass

from sapi.ports.metrics import HttpAttemptDto, MetricsPort

__all__ = ["Metrics"]


@dataclass(slots=True, frozen=True)
class _Sample:
    """Internal record for one HTTP exchange."""

    elapsed_ms: int
    failed: bool
    status_code: int


class Metrics(MetricsPort):
    """Run-wide metrics for sequential dispatch.

    Tracks:
    - Mean and max response time.
    - Share of HTTP error statuses (>= 400).
    - Last status code.
    - Total exchanges seen.

    Not thread-safe; create one instance per run.
    """

    def __init__(self) -> None:
        self._samples: list[_Sample] = []

    def update(self, attempt: HttpAttemptDto) -> None:
        """Record a finished HTTP exchange.

        Args:
            attempt: HTTP exchange with timing and status.
        """
        self._samples.append(
            _Sample(
                elapsed_ms=attempt.elapsed_ms,
                failed=attempt.is_failed,
                status_code=attempt.status_code,
            )
        )

    def __str__(self) -> str:
        """Return human-readable one-line summary for logging.

        Returns:
            Formatted metrics string.
        """
        if not self._samples:
            return "Metrics: no responses recorded"

        total = len(self._samples)
        failures = sum(1 for s in self._samples if s.failed)
        error_pct = (failures / total) * 100
        avg_ms = statistics.fmean(s.elapsed_ms for s in self._samples)
        max_ms = max(s.elapsed_ms for s in self._samples)
        last = self._samples[-1]

        return (
            f"avg={avg_ms:7.1f} ms | "
            f"max={max_ms:5d} ms | "
            f"status={last.status_code:3d} | "
            f"errors={error_pct:5.1f}% | "
            f"total={total}"
        )
