"""Application entrypoint."""

import logging

from sapi.adapters.driven.config.settings import load_settings
from sapi.adapters.driven.document.request_document import load_requests
from sapi.adapters.driven.document.results_writer import save_responses
from sapi.adapters.driven.document.skeleton import write_skeleton
from sapi.adapters.driven.http.client import HttpClient
from sapi.adapters.driven.logging.logging_config import configure_logs
from sapi.adapters.driven.metrics.run_metrics import Metrics
from sapi.adapters.driving.signals import make_stop_on_sigterm
from sapi.core.errors import OutputWriteError, SpecError
from sapi.core.run_loop import RunOutcome, run_requests
from sapi.ports.settings import ABORT, SettingsPort

__all__ = ["main", "create_skeleton", "finish_run"]

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


def _load_settings_port(output_path: str | None = None) -> SettingsPort | None:
    """Load settings and wrap them into the port, or log why they are invalid."""
    try:
        config = load_settings()
    except (RuntimeError, ValueError) as exc:
        logger.error(
            "Configuration error: %s\n"
            "Hint: check SAPI_OUTPUT_PATH, SAPI_SKELETON_PATH and "
            "SAPI_TRANSPORT_ERROR_POLICY (keep_partial or abort).",
            exc,
        )
        return None

    # Wrap config into port so the run depends on interface (hexagonal)
    return SettingsPort(
        output_path=output_path or config.output_path,
        skeleton_path=config.skeleton_path,
        transport_error_policy=config.transport_error_policy,
    )


async def main(
    document_path: str,
    *,
    output_path: str | None = None,
    check_only: bool = False,
    verbose: bool = False,
) -> int:
    """Run every request of a document and save the results.

    Startup sequence:
    1. Configure logging.
    2. Load and validate configuration.
    3. Load and validate the whole request document.
    4. Dispatch requests one by one (stops early on SIGTERM/SIGINT).
    5. Apply the transport-error policy and save the records.

    Args:
        document_path: YAML document with the requests.
        output_path: Overrides the configured results file.
        check_only: Validate the document and return without sending anything.
        verbose: Enable DEBUG logging for the runner.

    Returns:
        Process exit code.
    """
    configure_logs(verbose)

    settings_port = _load_settings_port(output_path)
    if settings_port is None:
        return EXIT_FAILURE

    try:
        specs = load_requests(document_path)
    except SpecError as exc:
        logger.error(str(exc))
        return EXIT_FAILURE

    if check_only:
        logger.info(f"{document_path} is valid: {len(specs)} request(s)")
        return EXIT_OK

    metrics = Metrics()
    http_client = HttpClient(metrics=metrics)

    async with http_client as http:
        outcome = await run_requests(
            specs,
            request_fn=http.request,
            stop_fn=make_stop_on_sigterm(),
        )

    logger.info(f"Run metrics: {metrics}")
    return finish_run(outcome, settings_port)


def finish_run(outcome: RunOutcome, settings_port: SettingsPort) -> int:
    """Apply the transport-error policy and save the collected records.

    Args:
        outcome: Result of the run loop.
        settings_port: Runtime settings.

    Returns:
        Process exit code.
    """
    if outcome.transport_error is not None and settings_port.transport_error_policy == ABORT:
        logger.error("Run aborted on connection failure, no results saved")
        return EXIT_FAILURE

    try:
        save_responses(outcome.records, settings_port.output_path)
    except OutputWriteError as exc:
        logger.error(str(exc))
        return EXIT_FAILURE

    if outcome.transport_error is not None:
        logger.error(
            f"Run stopped on connection failure, saved {len(outcome.records)} "
            f"record(s) collected before it"
        )
        return EXIT_FAILURE
    return EXIT_OK


def create_skeleton(verbose: bool = False) -> int:
    """Write the skeleton request document.

    Returns:
        Process exit code.
    """
    configure_logs(verbose)

    settings_port = _load_settings_port()
    if settings_port is None:
        return EXIT_FAILURE

    try:
        write_skeleton(settings_port.skeleton_path)
    except OutputWriteError as exc:
        logger.error(str(exc))
        return EXIT_FAILURE
    return EXIT_OK
