"""Serialization of response records to a JSON document."""

import json
import logging
from collections.abc import Sequence
from dataclasses import asdict

from sapi.core.errors import OutputWriteError
from sapi.ports.response import ResponseRecord

__all__ = ["save_responses"]

logger = logging.getLogger(__name__)


def save_responses(records: Sequence[ResponseRecord], path: str) -> None:
    """Write records as a pretty-printed JSON array, in order.

    Args:
        records: Response records of the run.
        path: Output file path.

    Raises:
        OutputWriteError: If the file cannot be written.
    """
    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump([asdict(r) for r in records], f, indent=2, ensure_ascii=False)
    except OSError as e:
        raise OutputWriteError(path, e) from e
    logger.info(f"Saved full requests data to {path} file")
