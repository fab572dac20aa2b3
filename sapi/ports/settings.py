"""Settings port definition (DTO)."""

from dataclasses import dataclass

__all__ = ["SettingsPort", "KEEP_PARTIAL", "ABORT"]

KEEP_PARTIAL = "keep_partial"
ABORT = "abort"


@dataclass
class SettingsPort:
    """Runtime settings for a run.

    Decouples the run from concrete configuration sources.

    Attributes:
        output_path: File that receives the JSON results.
        skeleton_path: File written by ``sapi new``.
        transport_error_policy: ``keep_partial`` saves records collected
            before a connection failure, ``abort`` saves nothing.
    """

    output_path: str
    skeleton_path: str
    transport_error_policy: str = KEEP_PARTIAL
