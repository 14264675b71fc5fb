"""Fetcher subsystem: GitHub API transport and request logging."""

from fetcher.http import GitHubClient, HttpError, HttpRequestError
from fetcher.logging import emit_event, emit_request_log

__all__ = [
    "GitHubClient",
    "HttpError",
    "HttpRequestError",
    "emit_event",
    "emit_request_log",
]
