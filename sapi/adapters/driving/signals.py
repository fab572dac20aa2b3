"""Stop flag raised by SIGTERM/SIGINT between two requests."""

import asyncio
import logging
import signal
from collections.abc import Callable

__all__ = ["STOP_SIGNALS", "make_stop_on_sigterm"]

logger = logging.getLogger(__name__)

STOP_SIGNALS = (signal.SIGTERM, signal.SIGINT)


def make_stop_on_sigterm() -> Callable[[], bool]:
    """Create the stop_fn polled by the run loop before each request.

    A SIGTERM or Ctrl+C does not interrupt the request in flight: its
    record is still collected, the remaining requests are skipped and
    main() saves what the run gathered. Handlers live on the running
    event loop and go away with it.

    Returns:
        Callable that returns True once a stop signal was received.
    """
    stop = asyncio.Event()
    loop = asyncio.get_running_loop()

    def handle_signal(sig: signal.Signals) -> None:
        if stop.is_set():
            return
        logger.info(f"{sig.name} received, finishing current request and saving results...")
        stop.set()

    for sig in STOP_SIGNALS:
        loop.add_signal_handler(sig, handle_signal, sig)

    return stop.is_set
