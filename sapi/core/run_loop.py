"""Sequential run loop that dispatches every request of a document."""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from sapi.core.dispatch import RequestFn, dispatch_request
from sapi.core.errors import TransportError
from sapi.ports.request import RequestSpec
from sapi.ports.response import ResponseRecord

__all__ = ["RunOutcome", "run_requests"]

logger = logging.getLogger(__name__)


@dataclass
class RunOutcome:
    """Result of a run.

    Attributes:
        records: Response records in dispatch order.
        transport_error: Connection failure that ended the run, if any.
        stopped_early: True if a stop was requested before all requests ran.
    """

    records: list[ResponseRecord] = field(default_factory=list)
    transport_error: TransportError | None = None
    stopped_early: bool = False


def _never_stop() -> bool:
    return False


async def run_requests(
    specs: Sequence[RequestSpec],
    request_fn: RequestFn,
    stop_fn: Callable[[], bool] = _never_stop,
) -> RunOutcome:
    """Dispatch requests one at a time, in input order.

    Each request completes before the next one starts. The loop:
    1. Checks stop_fn() and stops if it returns True.
    2. Dispatches the request and appends its record, if any.
    3. Stops at the first TransportError and returns it on the outcome.

    Args:
        specs: Requests loaded from the input document.
        request_fn: Async function used to send one HTTP request.
        stop_fn: Callable that returns True when the run should stop.

    Returns:
        Collected records plus the reason the run ended early, if any.

    Notes:
        The loop never decides what a transport failure means for the
        collected records; the caller applies the configured policy.
    """
    outcome = RunOutcome()

    for index, spec in enumerate(specs):
        if stop_fn():
            logger.info(f"Stop requested, skipping {len(specs) - index} remaining request(s)")
            outcome.stopped_early = True
            break

        try:
            record = await dispatch_request(spec, request_fn)
        except TransportError as e:
            logger.error(str(e))
            outcome.transport_error = e
            break

        if record is not None:
            outcome.records.append(record)

    logger.debug(f"Run finished with {len(outcome.records)} record(s)")
    return outcome
