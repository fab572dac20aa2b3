"""Console logging for a sapi run."""

import logging

__all__ = ["configure_logs", "LOG_FORMAT"]

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d - %(message)s"
DATE_FORMAT = "%d/%m/%y %H:%M:%S"

# Marks the handler installed here so repeated calls do not stack handlers
_HANDLER_NAME = "sapi-console"


def configure_logs(verbose: bool = False) -> None:
    """Route runner output to stderr.

    Every per-request summary line ("Sent request to ... and got
    response: ...") and every diagnostic goes through the ``sapi``
    loggers, so stdout stays free. aiohttp and asyncio are kept at
    WARNING. ``--verbose`` adds request counts, body decode fallbacks and
    per-exchange metrics at DEBUG.

    Safe to call more than once (``sapi new`` and runs share it).

    Args:
        verbose: Enable DEBUG output for the sapi loggers.
    """
    root = logging.getLogger()
    root.setLevel(logging.INFO)

    if not any(h.get_name() == _HANDLER_NAME for h in root.handlers):
        handler = logging.StreamHandler()
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        root.addHandler(handler)

    logging.getLogger("aiohttp").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    logging.getLogger("sapi").setLevel(logging.DEBUG if verbose else logging.INFO)
