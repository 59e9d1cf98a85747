"""Data models for daily-digest."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class _WorkItem:
    repo: str
    number: int
    title: str
    url: str
    author: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "repo": self.repo,
            "number": self.number,
            "title": self.title,
            "url": self.url,
        }
        if self.author:
            data["author"] = self.author
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]):
        return cls(
            repo=data["repo"],
            number=data["number"],
            title=data["title"],
            url=data["url"],
            author=data.get("author"),
        )


@dataclass(frozen=True)
class PullRequest(_WorkItem):
    pass


@dataclass(frozen=True)
class Issue(_WorkItem):
    pass


@dataclass
class Commits:
    total: int = 0
    by_repo: dict[str, int] = field(default_factory=dict)

    def add(self, repo: str, count: int) -> None:
        """Record a repository's commit count. Zero counts are not recorded."""
        if count <= 0:
            return
        self.total += count
        self.by_repo[repo] = self.by_repo.get(repo, 0) + count

    def to_dict(self) -> dict[str, Any]:
        return {"total": self.total, "byRepo": dict(self.by_repo)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Commits:
        return cls(total=data.get("total", 0), by_repo=dict(data.get("byRepo") or {}))


@dataclass
class Period:
    hours: int
    since: str

    def to_dict(self) -> dict[str, Any]:
        return {"hours": self.hours, "since": self.since}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Period:
        return cls(hours=data["hours"], since=data["since"])


@dataclass
class GitHubActivity:
    prs_merged: list[PullRequest] = field(default_factory=list)
    prs_opened: list[PullRequest] = field(default_factory=list)
    issues_closed: list[Issue] = field(default_factory=list)
    issues_opened: list[Issue] = field(default_factory=list)
    commits: Commits = field(default_factory=Commits)

    def to_dict(self) -> dict[str, Any]:
        return {
            "prsMerged": [pr.to_dict() for pr in self.prs_merged],
            "prsOpened": [pr.to_dict() for pr in self.prs_opened],
            "issuesClosed": [issue.to_dict() for issue in self.issues_closed],
            "issuesOpened": [issue.to_dict() for issue in self.issues_opened],
            "commits": self.commits.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GitHubActivity:
        return cls(
            prs_merged=[PullRequest.from_dict(d) for d in data.get("prsMerged") or []],
            prs_opened=[PullRequest.from_dict(d) for d in data.get("prsOpened") or []],
            issues_closed=[Issue.from_dict(d) for d in data.get("issuesClosed") or []],
            issues_opened=[Issue.from_dict(d) for d in data.get("issuesOpened") or []],
            commits=Commits.from_dict(data.get("commits") or {}),
        )


@dataclass
class Summary:
    total_prs_merged: int = 0
    total_issues_closed: int = 0
    total_commits: int = 0
    active_repos: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalPRsMerged": self.total_prs_merged,
            "totalIssuesClosed": self.total_issues_closed,
            "totalCommits": self.total_commits,
            "activeRepos": list(self.active_repos),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Summary:
        return cls(
            total_prs_merged=data.get("totalPRsMerged", 0),
            total_issues_closed=data.get("totalIssuesClosed", 0),
            total_commits=data.get("totalCommits", 0),
            active_repos=list(data.get("activeRepos") or []),
        )


@dataclass
class DigestReport:
    """Top-level document written by daily-digest.

    ``period``, ``github`` and ``summary`` are only ``None`` in the error
    document emitted when the run cannot start.
    """

    generated_at: str
    period: Period | None = None
    github: GitHubActivity | None = None
    summary: Summary | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"generatedAt": self.generated_at}
        if self.period is not None:
            data["period"] = self.period.to_dict()
        if self.github is not None:
            data["github"] = self.github.to_dict()
        if self.summary is not None:
            data["summary"] = self.summary.to_dict()
        if self.error:
            data["error"] = self.error
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DigestReport:
        period = data.get("period")
        github = data.get("github")
        summary = data.get("summary")
        return cls(
            generated_at=data["generatedAt"],
            period=Period.from_dict(period) if period is not None else None,
            github=GitHubActivity.from_dict(github) if github is not None else None,
            summary=Summary.from_dict(summary) if summary is not None else None,
            error=data.get("error"),
        )
