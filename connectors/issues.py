"""Issues connector: open issues with page-limited and unbounded pagination."""

from __future__ import annotations

from typing import Any

from core.config import GitHubConfig
from core.models import GitHubIssue
from fetcher.http import GitHubClient


class IssuesConnector:
    """List open issues for the client's repository."""

    def __init__(self, client: GitHubClient) -> None:
        self.client = client

    def get_open_issues(
        self,
        per_page: int = GitHubConfig.ISSUES_PER_PAGE,
        page: int = 1,
    ) -> list[GitHubIssue]:
        """Fetch a single page of open issues."""
        params = {
            "state": "open",
            "per_page": str(per_page),
            "page": str(page),
        }
        payload: Any = self.client.get(self.client.repo_path("issues"), params=params)
        return [GitHubIssue.model_validate(item) for item in payload or []]

    def _collect(self, per_page: int, max_pages: int | None) -> list[GitHubIssue]:
        """Accumulate pages until a short page or the page limit."""
        if per_page < 1:
            raise ValueError("per_page must be >= 1")
        issues: list[GitHubIssue] = []
        page = 1
        while max_pages is None or page <= max_pages:
            batch = self.get_open_issues(per_page=per_page, page=page)
            issues.extend(batch)
            if len(batch) < per_page:
                break
            page += 1
        return issues

    def get_all_open_issues(
        self,
        per_page: int = GitHubConfig.ISSUES_PER_PAGE,
        max_pages: int = GitHubConfig.ISSUES_MAX_PAGES,
    ) -> list[GitHubIssue]:
        """Fetch open issues across pages, stopping after `max_pages`."""
        return self._collect(per_page, max_pages)

    def fetch_all_open_issues(
        self,
        per_page: int = GitHubConfig.ISSUES_FETCH_ALL_PER_PAGE,
    ) -> list[GitHubIssue]:
        """Fetch every open issue, however many pages that takes."""
        return self._collect(per_page, None)
