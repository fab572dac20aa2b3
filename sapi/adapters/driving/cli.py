"""Command-line interface."""

import asyncio

import click

from sapi.main import create_skeleton, main

__all__ = ["cli", "USAGE"]

USAGE = """\
sapi is a quick and simple API testing tool. You create a YAML file with the
data of one or many HTTP requests, run this program and get a JSON file with
the returned data and response times.

Usage: sapi FILE.yml  - make HTTP requests from a file
       sapi new       - generate a new skeleton file for making HTTP requests

Options:
  -o, --output PATH   write results to PATH instead of sapi.json
  --check             validate FILE.yml without sending requests
  -v, --verbose       enable debug logging"""


@click.command(
    context_settings={"help_option_names": ["-h", "--help"]},
    help="Run the HTTP requests described in a YAML DOCUMENT, or 'new' to create a skeleton.",
)
@click.argument("document", required=False)
@click.option("-o", "--output", "output_path", default=None, help="Results file path.")
@click.option("--check", "check_only", is_flag=True, help="Validate the document only.")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def cli(document: str | None, output_path: str | None, check_only: bool, verbose: bool) -> None:
    """Entry point of the ``sapi`` command."""
    if document is None:
        click.echo(USAGE)
        raise SystemExit(0)

    if document == "new":
        raise SystemExit(create_skeleton(verbose))

    try:
        exit_code = asyncio.run(
            main(document, output_path=output_path, check_only=check_only, verbose=verbose)
        )
    except KeyboardInterrupt:
        click.echo("Shutdown requested by user (Ctrl+C).", err=True)
        exit_code = 1
    raise SystemExit(exit_code)


if __name__ == "__main__":
    cli()
