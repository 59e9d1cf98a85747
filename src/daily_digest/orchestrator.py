"""Orchestrator: wires together runner, client, aggregator, and renderer."""

from __future__ import annotations

import logging
from datetime import datetime

from .aggregator import aggregate_digest
from .github.client import GhClient
from .github.runner import CommandRunner, GhRunner
from .models import DigestReport
from .renderer import render_json, render_report
from .window import DEFAULT_HOURS, compute_window


def run(
    org: str,
    log: logging.Logger,
    hours: int = DEFAULT_HOURS,
    output_format: str = "json",
    output_file: str | None = None,
    gh_bin: str = "gh",
    runner: CommandRunner | None = None,
    now: datetime | None = None,
) -> DigestReport:
    """Main pipeline: compute window, fetch, aggregate, render."""
    window = compute_window(hours, now=now)
    client = GhClient(runner or GhRunner(gh_bin), log=log)
    report = aggregate_digest(client, org, window, log, now=now)

    if output_format == "table":
        render_report(report, output_file=output_file)
    else:
        render_json(report, output_file=output_file)
    return report
