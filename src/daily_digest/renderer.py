"""JSON report output, plus a rich-based terminal view."""

from __future__ import annotations

import io
import json
import sys

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import DigestReport, Issue, PullRequest
from .window import format_timestamp, utc_now


def _format_number(n: int) -> str:
    return f"{n:,}"


def _write_to_file(content: str, output_file: str) -> None:
    """Write content to a file and print confirmation on stderr."""
    with open(output_file, "w", encoding="utf-8") as f:
        f.write(content)
    Console(stderr=True).print(f"Saved to {output_file}")


def _emit(content: str) -> None:
    """Write to stdout as UTF-8 regardless of the locale encoding."""
    buffer = getattr(sys.stdout, "buffer", None)
    if buffer is None:
        print(content)
        return
    sys.stdout.flush()
    buffer.write((content + "\n").encode("utf-8"))
    buffer.flush()


def dumps_report(report: DigestReport) -> str:
    # json never escapes & < >; ensure_ascii=False keeps titles readable too.
    return json.dumps(report.to_dict(), indent=2, ensure_ascii=False)


def render_json(report: DigestReport, output_file: str | None = None) -> None:
    """Render a DigestReport as indented JSON."""
    content = dumps_report(report)
    if output_file:
        _write_to_file(content + "\n", output_file)
    else:
        _emit(content)


def render_error(message: str) -> DigestReport:
    """Print the minimal error document and return it."""
    report = DigestReport(generated_at=format_timestamp(utc_now()), error=message)
    _emit(dumps_report(report))
    return report


def _items_table(title: str, items: list[PullRequest] | list[Issue]) -> Table:
    table = Table(title=title, title_justify="left", show_header=True, header_style="bold")
    table.add_column("Repo")
    table.add_column("#", justify="right")
    table.add_column("Title")
    table.add_column("Author")
    for item in items:
        table.add_row(item.repo, str(item.number), Text(item.title), item.author or "-")
    return table


def render_report(report: DigestReport, output_file: str | None = None) -> None:
    """Render a DigestReport to the terminal using rich."""
    if output_file:
        string_io = io.StringIO()
        console = Console(file=string_io, force_terminal=False, width=120)
    else:
        console = Console()

    period = ""
    if report.period is not None:
        period = f"\nLast {report.period.hours}h since {report.period.since}"
    console.print(Panel(
        Text(f"daily-digest{period}", justify="center"),
        style="bold cyan",
    ))
    console.print()

    if report.error:
        console.print("[bold red]Error:[/bold red]", Text(report.error))

    if report.summary is not None:
        console.print("[bold]Summary[/bold]")
        summary = Table(show_header=False, box=None, padding=(0, 2))
        summary.add_column("label", style="dim")
        summary.add_column("value", style="bold")
        summary.add_row("Merged PRs", _format_number(report.summary.total_prs_merged))
        summary.add_row("Closed Issues", _format_number(report.summary.total_issues_closed))
        summary.add_row("Commits", _format_number(report.summary.total_commits))
        summary.add_row("Active Repos", ", ".join(report.summary.active_repos) or "-")
        console.print(summary)
        console.print()

    github = report.github
    if github is not None:
        sections = [
            ("Merged PRs", github.prs_merged),
            ("Opened PRs", github.prs_opened),
            ("Closed Issues", github.issues_closed),
            ("Opened Issues", github.issues_opened),
        ]
        for title, items in sections:
            if items:
                console.print(_items_table(title, items))
                console.print()

        if github.commits.by_repo:
            commit_table = Table(title="Commits", title_justify="left", show_header=True, header_style="bold")
            commit_table.add_column("Repo")
            commit_table.add_column("Commits", justify="right")
            for repo, count in sorted(github.commits.by_repo.items(), key=lambda kv: kv[1], reverse=True):
                commit_table.add_row(repo, _format_number(count))
            console.print(commit_table)
            console.print()

    if output_file:
        _write_to_file(string_io.getvalue(), output_file)
