"""Fetch every activity category and fold the results into a DigestReport."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from typing import TypeVar

from .github.client import GhClient
from .github.errors import GhError
from .models import Commits, DigestReport, GitHubActivity, Period, Summary
from .window import Window, format_timestamp, utc_now

T = TypeVar("T")


def compute_summary(github: GitHubActivity) -> Summary:
    """Totals plus every repository that shows up in any category."""
    active: set[str] = set()
    for item in (*github.prs_merged, *github.prs_opened, *github.issues_closed, *github.issues_opened):
        active.add(item.repo)
    active.update(repo for repo, count in github.commits.by_repo.items() if count > 0)

    return Summary(
        total_prs_merged=len(github.prs_merged),
        total_issues_closed=len(github.issues_closed),
        total_commits=github.commits.total,
        active_repos=sorted(active),
    )


def _collect(
    label: str,
    fetch: Callable[[], T],
    fallback: Callable[[], T],
    log: logging.Logger,
) -> T:
    try:
        return fetch()
    except GhError as exc:
        log.warning("failed to fetch %s", label, extra={"fields": {"error": str(exc)}})
        return fallback()


def aggregate_digest(
    client: GhClient,
    org: str,
    window: Window,
    log: logging.Logger,
    now: datetime | None = None,
) -> DigestReport:
    """Run all five queries in order and build the report.

    A category that fails is logged and left empty; the others are unaffected.
    """
    since = window.since
    log.info(
        "starting digest fetch",
        extra={"fields": {"org": org, "hours": window.hours, "since": format_timestamp(since)}},
    )

    github = GitHubActivity(
        prs_merged=_collect("merged PRs", lambda: client.fetch_merged_prs(org, since), list, log),
        prs_opened=_collect("opened PRs", lambda: client.fetch_opened_prs(org, since), list, log),
        issues_closed=_collect("closed issues", lambda: client.fetch_closed_issues(org, since), list, log),
        issues_opened=_collect("opened issues", lambda: client.fetch_opened_issues(org, since), list, log),
        commits=_collect("commits", lambda: client.fetch_commits(org, since), Commits, log),
    )
    summary = compute_summary(github)

    log.info(
        "digest complete",
        extra={"fields": {
            "prs_merged": len(github.prs_merged),
            "prs_opened": len(github.prs_opened),
            "issues_closed": len(github.issues_closed),
            "issues_opened": len(github.issues_opened),
            "commits": github.commits.total,
            "active_repos": len(summary.active_repos),
        }},
    )

    return DigestReport(
        generated_at=format_timestamp(now or utc_now()),
        period=Period(hours=window.hours, since=format_timestamp(since)),
        github=github,
        summary=summary,
    )
