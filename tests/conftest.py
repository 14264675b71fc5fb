"""
Shared pytest fixtures and configuration for docs-proxy tests.
"""

from __future__ import annotations

import base64
import json
from typing import Any

import pytest

from fetcher.http import GitHubClient


API = "https://api.github.com/repos/gruntwork-io/terragrunt"
VALID_TOKEN = "ghp_" + "A1b2C3d4E5f6G7h8I9j0" * 2


# ============================================================================
# HTTP doubles
# ============================================================================

class DummyResponse:
    """Minimal response object for exercising client logic."""

    def __init__(
        self,
        status_code: int = 200,
        payload: Any = None,
        headers: dict[str, str] | None = None,
        text: str | None = None,
    ) -> None:
        self.status_code = status_code
        self._payload = payload
        if headers is None:
            headers = {"content-type": "application/json; charset=utf-8"}
        self.headers = headers
        self._text = text if text is not None else ("" if payload is None else json.dumps(payload))
        self.closed = False

    @property
    def text(self) -> str:
        return self._text

    def json(self) -> Any:
        return json.loads(self._text)

    def close(self) -> None:
        self.closed = True


class DummySession:
    """
    URL-routed session for deterministic HTTP behavior.

    A route value may be a response, an exception to raise, or a list of
    those consumed in order (for pagination).
    """

    def __init__(self, routes: dict[str, Any] | None = None) -> None:
        self.routes = dict(routes or {})
        self.calls: list[dict[str, Any]] = []

    def request(self, method: str, url: str, **kwargs: Any):
        self.calls.append({"method": method, "url": url, **kwargs})
        if url not in self.routes:
            return DummyResponse(404, {"message": "Not Found"})
        route = self.routes[url]
        if isinstance(route, list):
            if not route:
                raise AssertionError(f"No more stubbed responses for {url}")
            route = route.pop(0)
        if isinstance(route, Exception):
            raise route
        return route


# ============================================================================
# GitHub payload builders
# ============================================================================

def content_item(path: str, item_type: str = "file") -> dict[str, Any]:
    """One contents-API directory entry."""
    name = path.rsplit("/", 1)[-1]
    return {
        "name": name,
        "path": path,
        "sha": f"sha-{name}",
        "type": item_type,
        "url": f"{API}/contents/{path}",
        "html_url": f"https://github.com/gruntwork-io/terragrunt/blob/main/{path}",
        "download_url": f"https://raw.githubusercontent.com/gruntwork-io/terragrunt/main/{path}"
        if item_type == "file"
        else None,
    }


def file_payload(path: str, text: str) -> dict[str, Any]:
    """A contents-API file response with base64 content (wrapped like GitHub does)."""
    encoded = base64.b64encode(text.encode("utf-8")).decode("ascii")
    wrapped = "\n".join(encoded[i : i + 60] for i in range(0, len(encoded), 60))
    return {
        **content_item(path),
        "content": wrapped,
        "encoding": "base64",
        "size": len(text.encode("utf-8")),
    }


def issue_payload(number: int, title: str | None = None) -> dict[str, Any]:
    """An open issue as returned by the issues API."""
    return {
        "id": 1000 + number,
        "number": number,
        "title": title or f"Issue {number}",
        "state": "open",
        "html_url": f"https://github.com/gruntwork-io/terragrunt/issues/{number}",
        "body": None,
        "created_at": "2026-01-02T03:04:05Z",
        "updated_at": "2026-01-03T03:04:05Z",
        "user": {"login": "octocat", "avatar_url": "", "html_url": ""},
        "labels": [{"name": "bug", "color": "d73a4a"}],
    }


def docs_routes() -> dict[str, Any]:
    """Routes for a small documentation tree under docs/_docs."""
    root = "docs/_docs"
    return {
        f"{API}/contents/{root}": DummyResponse(
            payload=[
                content_item(f"{root}/01_getting-started", "dir"),
                content_item(f"{root}/02_features", "dir"),
                content_item(f"{root}/04_reference", "dir"),
                content_item(f"{root}/06_community", "dir"),
                content_item(f"{root}/index.md"),
            ]
        ),
        f"{API}/contents/{root}/01_getting-started": DummyResponse(
            payload=[content_item(f"{root}/01_getting-started/01-quick-start.md")]
        ),
        f"{API}/contents/{root}/04_reference": DummyResponse(
            payload=[
                content_item(f"{root}/04_reference/01-configuration.md"),
                content_item(f"{root}/04_reference/02-cli-options.md"),
                content_item(f"{root}/04_reference/diagram.png"),
                content_item(f"{root}/04_reference/assets", "dir"),
            ]
        ),
        f"{API}/contents/{root}/06_community": DummyResponse(payload=[]),
        f"{API}/contents/{root}/01_getting-started/01-quick-start.md": DummyResponse(
            payload=file_payload(f"{root}/01_getting-started/01-quick-start.md", "# Quick Start\n")
        ),
        f"{API}/contents/{root}/04_reference/01-configuration.md": DummyResponse(
            payload=file_payload(f"{root}/04_reference/01-configuration.md", "# Configuration\n\nterragrunt.hcl ✓\n")
        ),
        f"{API}/contents/{root}/04_reference/02-cli-options.md": DummyResponse(
            payload=file_payload(f"{root}/04_reference/02-cli-options.md", "# CLI Options\n")
        ),
    }


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture(autouse=True)
def _quiet_logging_env(monkeypatch):
    """Keep tests independent of the caller's logging/token environment."""
    for name in (
        "LOG_LEVEL",
        "LOG_FILE_ENABLED",
        "LOG_FILE_PATH",
        "GITHUB_TOKEN",
        "GH_TOKEN",
        "GITHUB_PERSONAL_ACCESS_TOKEN",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def docs_session() -> DummySession:
    """Session serving the sample documentation tree."""
    return DummySession(docs_routes())


@pytest.fixture
def make_client():
    """Build a GitHubClient bound to a DummySession."""

    def _make(session: DummySession, **kwargs: Any) -> GitHubClient:
        return GitHubClient(token=VALID_TOKEN, session=session, **kwargs)

    return _make


# ============================================================================
# Pytest Configuration
# ============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: end-to-end integration tests")
    config.addinivalue_line("markers", "unit: unit tests")
