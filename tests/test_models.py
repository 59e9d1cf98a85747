"""Tests for the models module."""

from __future__ import annotations

import json

from daily_digest.models import (
    Commits,
    DigestReport,
    GitHubActivity,
    Issue,
    Period,
    PullRequest,
    Summary,
)


def _full_report() -> DigestReport:
    return DigestReport(
        generated_at="2026-02-18T14:00:00Z",
        period=Period(hours=24, since="2026-02-17T14:00:00Z"),
        github=GitHubActivity(
            prs_merged=[
                PullRequest(
                    repo="misty-step/factory", number=42, title="Add daily digest",
                    url="https://github.com/misty-step/factory/pull/42", author="kaylee",
                ),
            ],
            prs_opened=[
                PullRequest(
                    repo="misty-step/cerberus", number=10, title="Fix auth",
                    url="https://github.com/misty-step/cerberus/pull/10",
                ),
            ],
            issues_closed=[
                Issue(
                    repo="misty-step/factory", number=100, title="Bug report",
                    url="https://github.com/misty-step/factory/issues/100", author="user",
                ),
            ],
            issues_opened=[
                Issue(
                    repo="misty-step/utils", number=5, title="Feature request",
                    url="https://github.com/misty-step/utils/issues/5", author="contributor",
                ),
            ],
            commits=Commits(total=15, by_repo={"misty-step/factory": 10, "misty-step/cerberus": 5}),
        ),
        summary=Summary(
            total_prs_merged=1,
            total_issues_closed=1,
            total_commits=15,
            active_repos=["misty-step/cerberus", "misty-step/factory", "misty-step/utils"],
        ),
    )


def test_report_round_trip_through_json():
    report = _full_report()
    parsed = DigestReport.from_dict(json.loads(json.dumps(report.to_dict())))
    assert parsed == report


def test_error_report_round_trip():
    report = DigestReport(generated_at="2026-02-18T14:00:00Z", error="connection refused")
    parsed = DigestReport.from_dict(json.loads(json.dumps(report.to_dict())))
    assert parsed == report


def test_wire_keys():
    data = _full_report().to_dict()
    assert set(data) == {"generatedAt", "period", "github", "summary"}
    assert set(data["github"]) == {"prsMerged", "prsOpened", "issuesClosed", "issuesOpened", "commits"}
    assert set(data["summary"]) == {"totalPRsMerged", "totalIssuesClosed", "totalCommits", "activeRepos"}
    assert data["github"]["commits"] == {
        "total": 15,
        "byRepo": {"misty-step/factory": 10, "misty-step/cerberus": 5},
    }


def test_author_omitted_when_unknown():
    pr = PullRequest(repo="o/a", number=1, title="t", url="u")
    assert "author" not in pr.to_dict()
    assert PullRequest.from_dict(pr.to_dict()) == pr


def test_issue_and_pull_request_stay_distinct():
    data = {"repo": "o/a", "number": 1, "title": "t", "url": "u"}
    assert isinstance(Issue.from_dict(data), Issue)
    assert not isinstance(Issue.from_dict(data), PullRequest)


def test_empty_activity_keeps_all_keys():
    data = GitHubActivity().to_dict()
    assert data == {
        "prsMerged": [],
        "prsOpened": [],
        "issuesClosed": [],
        "issuesOpened": [],
        "commits": {"total": 0, "byRepo": {}},
    }


def test_commits_add_skips_zero_counts():
    commits = Commits()
    commits.add("o/a", 3)
    commits.add("o/b", 0)
    commits.add("o/a", 2)
    assert commits.total == 5
    assert commits.by_repo == {"o/a": 5}


def test_error_document_has_no_github_section():
    data = DigestReport(generated_at="2026-02-18T14:00:00Z", error="boom").to_dict()
    assert data == {"generatedAt": "2026-02-18T14:00:00Z", "error": "boom"}
