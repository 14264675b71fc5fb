"""GitHub REST API client over requests with structured request logging."""

from __future__ import annotations

import time
from collections.abc import Callable
from http import HTTPStatus
from typing import Any, Mapping
from urllib.parse import urljoin

import requests

from core.config import GitHubConfig
from core.models import RequestLog
from fetcher.logging import emit_event, emit_request_log


class HttpError(Exception):
    """Raised when the API answers with a non-2xx status."""

    def __init__(self, status: int, body: Any, headers: Mapping[str, str] | None = None) -> None:
        super().__init__(f"HTTP Error {status}: {_status_phrase(status)}")
        self.status = status
        self.body = body
        self.headers = dict(headers or {})


class HttpRequestError(Exception):
    """Raised when a request never produced a response (DNS, TLS, timeout...)."""


def _status_phrase(status: int) -> str:
    """Return the standard reason phrase for a status code, or "Unknown"."""
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return "Unknown"


def _error_body(response: requests.Response) -> Any:
    """Decode an error body as JSON when possible, else as text."""
    try:
        return response.json()
    except ValueError:
        return response.text


class GitHubClient:
    """Thin GET-oriented client bound to one owner/repo."""

    def __init__(
        self,
        owner: str | None = None,
        repo: str | None = None,
        api_base_url: str | None = None,
        token: str | None = None,
        session: requests.Session | None = None,
        timeout_seconds: int = GitHubConfig.REQUEST_TIMEOUT_SECONDS,
        log_requests: bool = True,
        event_logger: Callable[[str, dict[str, object]], None] | None = None,
    ) -> None:
        """Initialize repository coordinates, auth headers, and event sinks."""
        self.owner = owner or GitHubConfig.DEFAULT_OWNER
        self.repo = repo or GitHubConfig.DEFAULT_REPO

        base_url = api_base_url or GitHubConfig.API_BASE_URL
        self.api_base_url = base_url if base_url.endswith("/") else f"{base_url}/"

        self.headers: dict[str, str] = {
            "Accept": GitHubConfig.ACCEPT,
            "X-GitHub-Api-Version": GitHubConfig.API_VERSION,
            "User-Agent": GitHubConfig.USER_AGENT,
        }
        if token:
            self.headers["Authorization"] = f"Bearer {token}"

        self.session = session or requests.Session()
        self.timeout_seconds = timeout_seconds
        self.log_requests = log_requests
        self.event_logger = event_logger or self._default_event_logger

    @staticmethod
    def _default_event_logger(event_type: str, payload: dict[str, object]) -> None:
        """Default event sink writing to structured JSON stdout."""
        level = str(payload.pop("level", "info"))
        emit_event(event_type, level=level, **payload)

    def repo_path(self, *parts: str) -> str:
        """Build a `repos/{owner}/{repo}/...` path relative to the API root."""
        segments = [part.strip("/") for part in parts if part and part.strip("/")]
        return "/".join(["repos", self.owner, self.repo, *segments])

    def url_for(self, path: str) -> str:
        """Resolve a relative API path (absolute URLs pass through)."""
        return urljoin(self.api_base_url, path)

    def request(
        self,
        method: str,
        path: str,
        params: Mapping[str, str | int] | None = None,
    ) -> Any:
        """
        Perform one API call.

        Returns:
            Parsed JSON for JSON responses, None for empty responses, and the
            body text for anything else.

        Raises:
            HttpError: On non-2xx responses.
            HttpRequestError: When no response was received.
        """
        url = self.url_for(path)
        method = method.upper()
        start = time.monotonic()

        try:
            response = self.session.request(
                method,
                url,
                headers=dict(self.headers),
                params=dict(params) if params else None,
                timeout=self.timeout_seconds,
            )
        except requests.RequestException as exc:
            self._log_request(method, url, start, error=f"{type(exc).__name__}: {exc}")
            raise HttpRequestError(f"HTTP request failed: {exc}") from exc

        try:
            status = response.status_code
            if not 200 <= status < 300:
                self._log_request(method, url, start, status_code=status, error=f"HTTP {status}")
                raise HttpError(status, _error_body(response), response.headers)

            self._log_request(method, url, start, status_code=status)

            if status == HTTPStatus.NO_CONTENT or response.headers.get("content-length") == "0":
                return None

            content_type = response.headers.get("content-type") or ""
            if "application/json" in content_type:
                return response.json()

            self.event_logger(
                "github_unexpected_content_type",
                {
                    "level": "warning",
                    "url": url,
                    "content_type": content_type,
                    "message": "Expected JSON response; returning body text",
                },
            )
            return response.text
        finally:
            response.close()

    def get(self, path: str, params: Mapping[str, str | int] | None = None) -> Any:
        """Perform a GET request."""
        return self.request("GET", path, params=params)

    def _log_request(
        self,
        method: str,
        url: str,
        start: float,
        status_code: int | None = None,
        error: str | None = None,
    ) -> None:
        if not self.log_requests:
            return
        emit_request_log(
            RequestLog(
                method=method,
                url=url,
                status_code=status_code,
                latency_ms=int((time.monotonic() - start) * 1000),
                error=error,
            )
        )
