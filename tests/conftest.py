from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from daily_digest.github.errors import GhCommandError


class FakeRunner:
    """Stands in for gh: answers by the first route whose tokens all appear in the args."""

    def __init__(self, routes: list[tuple[tuple[str, ...], object]] | None = None) -> None:
        self.routes = list(routes or [])
        self.calls: list[list[str]] = []

    def add(self, tokens: tuple[str, ...], response: object) -> None:
        self.routes.append((tokens, response))

    def run(self, args: list[str]) -> str:
        self.calls.append(list(args))
        for tokens, response in self.routes:
            if all(t in args for t in tokens):
                if isinstance(response, Exception):
                    raise response
                if isinstance(response, str):
                    return response
                return json.dumps(response)
        return "[]"


def search_entry(repo: str, number: int, time_field: str | None = None, ts: str | None = None,
                 author: str | None = "octocat", title: str = "Title") -> dict:
    entry = {
        "url": f"https://github.com/{repo}/pull/{number}",
        "number": number,
        "title": title,
        "repository": {"nameWithOwner": repo},
        "author": {"login": author} if author else None,
    }
    if time_field:
        entry[time_field] = ts
    return entry


def failure(*args: str) -> GhCommandError:
    return GhCommandError(["gh", *args], "HTTP 502: Bad Gateway")


@pytest.fixture
def now() -> datetime:
    return datetime(2026, 2, 18, 14, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def mock_log() -> MagicMock:
    return MagicMock(spec=logging.Logger)
