"""Generation of a skeleton request document."""

import logging

from sapi.core.errors import OutputWriteError

__all__ = ["SKELETON", "write_skeleton"]

logger = logging.getLogger(__name__)

SKELETON = """\
- target: <target>
  port: <port>
  endpoint: <path>
  method: <method>
#  headers:
  #  Authorization: Bearer <token>
  #  Content-Type: application/x-www-form-urlencoded
  #  Content-Type: application/json
  #  Content-Type: text/plain
  #  <header_name>: <header_value>
#  data:
  #  txt: <plain text body, used with Content-Type text/plain>
  #  <value_name>: <value>
"""


def write_skeleton(path: str) -> None:
    """Write a commented request document template, replacing any existing file.

    Raises:
        OutputWriteError: If the file cannot be written.
    """
    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write(SKELETON)
    except OSError as e:
        raise OutputWriteError(path, e) from e
    logger.info(f"{path} created successfully!")
