"""Configuration loading from environment variables."""

import logging
import os
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from sapi.ports.settings import ABORT, KEEP_PARTIAL

__all__ = ["Settings", "load_settings"]

load_dotenv()

logger = logging.getLogger(__name__)


class Settings(BaseModel):
    """Runtime configuration for the request runner.

    Attributes:
        output_path: JSON file that receives the response records.
        skeleton_path: YAML file written by ``sapi new``.
        transport_error_policy: What happens to collected records when a
            connection failure ends the run.
    """

    output_path: str = Field(default="sapi.json", description="Results file path.")
    skeleton_path: str = Field(default="sapi.yml", description="Skeleton file path.")
    transport_error_policy: Literal["keep_partial", "abort"] = Field(
        default=KEEP_PARTIAL,
        description=(
            f"'{KEEP_PARTIAL}' saves records gathered before a connection failure, "
            f"'{ABORT}' saves nothing."
        ),
    )

    @field_validator("output_path", "skeleton_path")
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Validate that a file path is not blank.

        Args:
            v: Path to validate.

        Returns:
            The path with surrounding whitespace removed.

        Raises:
            ValueError: If the path is empty.
        """
        v = v.strip()
        if not v:
            raise ValueError("File path must not be empty")
        return v


def load_settings() -> Settings:
    """Load and validate settings from the environment.

    Optional environment variables (a ``.env`` file is honoured):
    - SAPI_OUTPUT_PATH: Results file (default ``sapi.json``).
    - SAPI_SKELETON_PATH: Skeleton file (default ``sapi.yml``).
    - SAPI_TRANSPORT_ERROR_POLICY: ``keep_partial`` or ``abort``.

    Returns:
        Validated Settings object.

    Raises:
        ValueError: If configuration is invalid.
    """
    raw = {
        "output_path": os.getenv("SAPI_OUTPUT_PATH"),
        "skeleton_path": os.getenv("SAPI_SKELETON_PATH"),
        "transport_error_policy": os.getenv("SAPI_TRANSPORT_ERROR_POLICY"),
    }

    try:
        settings = Settings(**{k: v for k, v in raw.items() if v is not None})
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}") from e

    logger.debug(
        f"Runner configured: output={settings.output_path}, "
        f"skeleton={settings.skeleton_path}, "
        f"on_transport_error={settings.transport_error_policy}"
    )

    return settings
