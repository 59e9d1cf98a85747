"""Command-line entry point."""

from __future__ import annotations

import sys

import click

from . import __version__
from .log import build_logger
from .orchestrator import run
from .renderer import render_error
from .window import DEFAULT_HOURS


@click.command()
@click.option("--org", envvar="DAILY_DIGEST_ORG", default="", help="GitHub organization to query (required).")
@click.option(
    "--hours",
    type=int,
    default=DEFAULT_HOURS,
    show_default=True,
    envvar="DAILY_DIGEST_HOURS",
    help="Time window in hours.",
)
@click.option("--json-logs", is_flag=True, default=False, help="Emit diagnostics on stderr as JSON lines.")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "table"]),
    default="json",
    show_default=True,
    help="Report format.",
)
@click.option("--output", "-o", "output_file", default=None, help="Write the report to a file instead of stdout.")
@click.option("--gh-bin", default="gh", show_default=True, envvar="DAILY_DIGEST_GH_BIN", help="GitHub CLI executable.")
@click.version_option(version=__version__)
def main(
    org: str,
    hours: int,
    json_logs: bool,
    output_format: str,
    output_file: str | None,
    gh_bin: str,
) -> None:
    """Summarize an organization's recent GitHub activity as JSON."""
    log = build_logger(json_logs=json_logs)

    if not org:
        message = "org flag is required"
        log.error("fatal error", extra={"fields": {"error": message}})
        render_error(message)
        sys.exit(1)

    run(
        org=org,
        log=log,
        hours=hours,
        output_format=output_format,
        output_file=output_file,
        gh_bin=gh_bin,
    )
