"""Tests for loading the YAML request document."""

from pathlib import Path

import pytest

from sapi.adapters.driven.document.request_document import load_requests
from sapi.core.errors import SpecError

__all__ = []

VALID_DOCUMENT = """\
- target: 127.0.0.1
  port: 8080
  endpoint: /ping
  method: GET
- target: api.local
  port: 80
  endpoint: /users
  method: POST
  headers:
    Content-Type: application/json
    Authorization: Bearer token
  data:
    name: alice
    age: 42
"""


def write(tmp_path: Path, content: str) -> str:
    """Write a document and return its path."""
    path = tmp_path / "sapi.yml"
    path.write_text(content, encoding="utf-8")
    return str(path)


def test_load_requests_keeps_document_order(tmp_path: Path) -> None:
    """Requests should be returned in document order with their fields."""
    specs = load_requests(write(tmp_path, VALID_DOCUMENT))

    assert [s.endpoint for s in specs] == ["/ping", "/users"]
    assert specs[0].headers is None
    assert specs[1].headers == {"Content-Type": "application/json", "Authorization": "Bearer token"}
    assert specs[1].data == {"name": "alice", "age": "42"}


def test_load_requests_accepts_unsupported_method(tmp_path: Path) -> None:
    """Unsupported verbs are a dispatch concern, not a document error."""
    specs = load_requests(
        write(tmp_path, "- {target: h, port: 1, endpoint: /, method: OPTIONS}\n")
    )

    assert specs[0].method == "OPTIONS"


def test_load_requests_rejects_whole_batch_on_missing_field(tmp_path: Path) -> None:
    """One entry without a method should reject the document."""
    path = write(tmp_path, VALID_DOCUMENT + "- {target: h, port: 1, endpoint: /}\n")

    with pytest.raises(SpecError, match="sapi.yml") as exc_info:
        load_requests(path)

    assert "method" in str(exc_info.value)


def test_load_requests_rejects_port_out_of_range(tmp_path: Path) -> None:
    """Ports above 65535 should be rejected."""
    path = write(tmp_path, "- {target: h, port: 70000, endpoint: /, method: GET}\n")

    with pytest.raises(SpecError):
        load_requests(path)


def test_load_requests_rejects_nested_data(tmp_path: Path) -> None:
    """Data values must be scalars."""
    path = write(
        tmp_path,
        "- {target: h, port: 1, endpoint: /, method: POST, data: {a: {b: c}}}\n",
    )

    with pytest.raises(SpecError):
        load_requests(path)


def test_load_requests_rejects_invalid_yaml(tmp_path: Path) -> None:
    """Broken YAML should be reported as such."""
    with pytest.raises(SpecError, match="invalid YAML"):
        load_requests(write(tmp_path, "- target: [unclosed\n"))


def test_load_requests_rejects_empty_document(tmp_path: Path) -> None:
    """An empty document is not a request list."""
    with pytest.raises(SpecError, match="empty"):
        load_requests(write(tmp_path, ""))


def test_load_requests_rejects_mapping_document(tmp_path: Path) -> None:
    """The top level must be a list."""
    with pytest.raises(SpecError):
        load_requests(write(tmp_path, "target: h\nport: 1\n"))


def test_load_requests_rejects_missing_file(tmp_path: Path) -> None:
    """A missing file should be reported with its name."""
    with pytest.raises(SpecError, match="cannot open"):
        load_requests(str(tmp_path / "nope.yml"))
