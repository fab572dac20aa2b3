"""Loading of the YAML request document."""

import logging

import yaml
from pydantic import TypeAdapter, ValidationError

from sapi.core.errors import SpecError
from sapi.ports.request import RequestSpec

__all__ = ["load_requests"]

logger = logging.getLogger(__name__)
_requests_adapter = TypeAdapter(list[RequestSpec])


def load_requests(path: str) -> list[RequestSpec]:
    """Load and validate every request of a YAML document.

    The batch is all-or-nothing: one malformed entry rejects the document.

    Args:
        path: Path of the YAML document.

    Returns:
        Requests in document order.

    Raises:
        SpecError: If the file cannot be read, is not valid YAML, is empty,
            or any entry is missing a field or has a field of the wrong shape.
    """
    try:
        with open(path, encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except OSError as e:
        raise SpecError(path, f"cannot open file: {e}") from e
    except yaml.YAMLError as e:
        raise SpecError(path, f"invalid YAML: {e}") from e

    if raw is None:
        raise SpecError(path, "document is empty")

    try:
        requests = _requests_adapter.validate_python(raw)
    except ValidationError as e:
        raise SpecError(path, e) from e

    logger.debug(f"Loaded {len(requests)} request(s) from {path}")
    return requests
