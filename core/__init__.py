"""Core module for docs-proxy."""

from core.models import (
    DocCategory,
    DocFile,
    DocFileSummary,
    GitHubContent,
    GitHubFile,
    GitHubIssue,
    GitHubLabel,
    GitHubUser,
    RequestLog,
)
from core.config import ConfigError, GitHubConfig, get_github_token

__all__ = [
    "DocCategory",
    "DocFile",
    "DocFileSummary",
    "GitHubContent",
    "GitHubFile",
    "GitHubIssue",
    "GitHubLabel",
    "GitHubUser",
    "RequestLog",
    "ConfigError",
    "GitHubConfig",
    "get_github_token",
]
