"""GitHub queries issued through the gh CLI."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any

from ..models import Commits, Issue, PullRequest
from ..window import format_date, format_timestamp, is_before_window, parse_timestamp
from .errors import GhError, GhParseError
from .runner import CommandRunner, GhRunner

PAGE_SIZE = 100

_SEARCH_FIELDS = "url,number,title,repository,author"

logger = logging.getLogger(__name__)


def _search_args(kind: str, org: str, qualifiers: list[str], time_field: str) -> list[str]:
    return [
        "search", kind,
        "--org", org,
        *qualifiers,
        "--sort", "updated",
        "--order", "desc",
        "--limit", str(PAGE_SIZE),
        "--json", f"{_SEARCH_FIELDS},{time_field}",
    ]


def merged_prs_args(org: str, since: datetime) -> list[str]:
    return _search_args("prs", org, ["--merged", f">={format_date(since)}"], "mergedAt")


def opened_prs_args(org: str, since: datetime) -> list[str]:
    return _search_args(
        "prs", org, ["--state", "open", "--created", f">={format_date(since)}"], "createdAt"
    )


def closed_issues_args(org: str, since: datetime) -> list[str]:
    return _search_args(
        "issues", org, ["--state", "closed", "--closed", f">={format_date(since)}"], "closedAt"
    )


def opened_issues_args(org: str, since: datetime) -> list[str]:
    return _search_args(
        "issues", org, ["--state", "open", "--created", f">={format_date(since)}"], "createdAt"
    )


def repo_list_args(org: str) -> list[str]:
    return [
        "repo", "list", org,
        "--limit", str(PAGE_SIZE),
        "--json", "name,nameWithOwner",
        "--no-archived",
    ]


def repo_commits_args(org: str, repo: str, since: datetime) -> list[str]:
    # -f implies POST unless the method is given explicitly.
    return [
        "api",
        "--method", "GET",
        f"repos/{org}/{repo}/commits",
        "-f", f"since={format_timestamp(since)}",
        "-f", f"per_page={PAGE_SIZE}",
    ]


def _parse_list(raw: str, what: str) -> list[Any]:
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise GhParseError(f"parse {what} json: {exc}") from exc
    if not isinstance(data, list):
        raise GhParseError(f"parse {what} json: expected a list, got {type(data).__name__}")
    return data


def _parse_search_results(raw: str, time_field: str, since: datetime, cls: type) -> list:
    items = []
    for entry in _parse_list(raw, "gh search"):
        try:
            ts = parse_timestamp(entry.get(time_field))
            if is_before_window(ts, since):
                continue
            author = (entry.get("author") or {}).get("login") or None
            items.append(cls(
                repo=(entry.get("repository") or {}).get("nameWithOwner", ""),
                number=int(entry["number"]),
                title=entry.get("title", ""),
                url=entry.get("url", ""),
                author=author,
            ))
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise GhParseError(f"parse gh search json: bad entry: {exc}") from exc
    return items


class GhClient:
    """Typed access to the handful of gh queries the digest needs."""

    def __init__(self, runner: CommandRunner | None = None, log: logging.Logger | None = None) -> None:
        self.runner = runner or GhRunner()
        self.log = log or logger

    def fetch_merged_prs(self, org: str, since: datetime) -> list[PullRequest]:
        self.log.info("fetching merged PRs", extra={"fields": {"org": org}})
        raw = self.runner.run(merged_prs_args(org, since))
        prs = _parse_search_results(raw, "mergedAt", since, PullRequest)
        self.log.info("fetched merged PRs", extra={"fields": {"count": len(prs)}})
        return prs

    def fetch_opened_prs(self, org: str, since: datetime) -> list[PullRequest]:
        self.log.info("fetching opened PRs", extra={"fields": {"org": org}})
        raw = self.runner.run(opened_prs_args(org, since))
        prs = _parse_search_results(raw, "createdAt", since, PullRequest)
        self.log.info("fetched opened PRs", extra={"fields": {"count": len(prs)}})
        return prs

    def fetch_closed_issues(self, org: str, since: datetime) -> list[Issue]:
        self.log.info("fetching closed issues", extra={"fields": {"org": org}})
        raw = self.runner.run(closed_issues_args(org, since))
        issues = _parse_search_results(raw, "closedAt", since, Issue)
        self.log.info("fetched closed issues", extra={"fields": {"count": len(issues)}})
        return issues

    def fetch_opened_issues(self, org: str, since: datetime) -> list[Issue]:
        self.log.info("fetching opened issues", extra={"fields": {"org": org}})
        raw = self.runner.run(opened_issues_args(org, since))
        issues = _parse_search_results(raw, "createdAt", since, Issue)
        self.log.info("fetched opened issues", extra={"fields": {"count": len(issues)}})
        return issues

    def list_repos(self, org: str) -> list[dict[str, str]]:
        """Non-archived repositories of ``org`` as ``{"name", "full_name"}`` dicts."""
        repos = []
        for entry in _parse_list(self.runner.run(repo_list_args(org)), "gh repo list"):
            try:
                name = entry["name"]
            except (KeyError, TypeError) as exc:
                raise GhParseError(f"parse gh repo list json: bad entry: {exc}") from exc
            repos.append({"name": name, "full_name": entry.get("nameWithOwner") or f"{org}/{name}"})
        return repos

    def count_repo_commits(self, org: str, repo: str, since: datetime) -> int:
        raw = self.runner.run(repo_commits_args(org, repo, since))
        return len(_parse_list(raw, "commits"))

    def fetch_commits(self, org: str, since: datetime) -> Commits:
        """Commit counts per repository since ``since``.

        A failing repository is logged and skipped; only a failure to list
        the repositories themselves is raised.
        """
        self.log.info("fetching commits", extra={"fields": {"org": org}})
        commits = Commits()
        for repo in self.list_repos(org):
            try:
                count = self.count_repo_commits(org, repo["name"], since)
            except GhError as exc:
                self.log.warning(
                    "failed to fetch commits for repo",
                    extra={"fields": {"repo": repo["full_name"], "error": str(exc)}},
                )
                continue
            commits.add(repo["full_name"], count)
        self.log.info(
            "fetched commits",
            extra={"fields": {"total": commits.total, "repos_with_activity": len(commits.by_repo)}},
        )
        return commits
