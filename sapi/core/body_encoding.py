"""Request body encoding selected by the declared Content-Type."""

import json
from collections.abc import Callable, Mapping

from sapi.core.errors import BodyEncodingError
from sapi.ports.http import EncodedBody

__all__ = [
    "FORM_URLENCODED",
    "JSON",
    "TEXT_PLAIN",
    "PLAIN_TEXT_FIELD",
    "find_content_type",
    "encode_body",
]

FORM_URLENCODED = "application/x-www-form-urlencoded"
JSON = "application/json"
TEXT_PLAIN = "text/plain"

# Field of ``data`` holding the body of a text/plain request
PLAIN_TEXT_FIELD = "txt"


def _encode_form(data: Mapping[str, str]) -> EncodedBody:
    return EncodedBody(form_fields=tuple(data.items()))


def _encode_json(data: Mapping[str, str]) -> EncodedBody:
    return EncodedBody(text=json.dumps(dict(data), separators=(",", ":"), ensure_ascii=False))


def _encode_plain_text(data: Mapping[str, str]) -> EncodedBody:
    try:
        return EncodedBody(text=data[PLAIN_TEXT_FIELD])
    except KeyError as e:
        raise BodyEncodingError(
            f"{TEXT_PLAIN} body requires a '{PLAIN_TEXT_FIELD}' field in data"
        ) from e


# Checked in order, first matching prefix wins
_ENCODERS: tuple[tuple[str, Callable[[Mapping[str, str]], EncodedBody]], ...] = (
    (FORM_URLENCODED, _encode_form),
    (JSON, _encode_json),
    (TEXT_PLAIN, _encode_plain_text),
)


def find_content_type(headers: Mapping[str, str] | None) -> str | None:
    """Return the Content-Type header value, matching the name case-insensitively.

    Args:
        headers: Request headers (may be None).

    Returns:
        Header value, or None if absent.
    """
    if not headers:
        return None
    for name, value in headers.items():
        if name.lower() == "content-type":
            return value
    return None


def encode_body(
    headers: Mapping[str, str] | None,
    data: Mapping[str, str] | None,
) -> EncodedBody | None:
    """Build the request body for POST/PUT/PATCH requests.

    Args:
        headers: Request headers, searched for Content-Type.
        data: Body fields declared in the document.

    Returns:
        Encoded body, or None when there is no data or the Content-Type
        is missing or not recognized.

    Raises:
        BodyEncodingError: If text/plain is declared without a ``txt`` field.
    """
    if data is None:
        return None

    content_type = find_content_type(headers)
    if content_type is None:
        return None

    for prefix, encoder in _ENCODERS:
        if content_type.startswith(prefix):
            return encoder(data)
    return None
