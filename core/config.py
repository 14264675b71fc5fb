"""
Default configuration for docs-proxy.

Remote-source settings are fixed class constants; only credentials and
logging switches come from the environment.

Design: the proxy is read-only and points at one repository by default.
Every setting can be overridden per client instance, never globally.
"""

from __future__ import annotations

import os
import re
from typing import Mapping, Tuple


class ConfigError(ValueError):
    """Raised when required configuration is missing or malformed."""


class GitHubConfig:
    """
    Settings for the GitHub REST API source.
    """

    # ========================================================================
    # Remote Source
    # ========================================================================

    API_BASE_URL: str = "https://api.github.com"
    """REST API root."""

    API_VERSION: str = "2022-11-28"
    """Value of the X-GitHub-Api-Version header."""

    ACCEPT: str = "application/vnd.github+json"
    """Accept header for all API calls."""

    DEFAULT_OWNER: str = "gruntwork-io"
    DEFAULT_REPO: str = "terragrunt"

    DOCS_PATH: str = "docs/_docs"
    """Repository directory whose subdirectories are documentation categories."""

    USER_AGENT: str = "docs-proxy/0.1"
    """User-Agent header (GitHub rejects requests without one)."""

    REQUEST_TIMEOUT_SECONDS: int = 30
    """Maximum time to wait for a single API call (seconds)."""

    # ========================================================================
    # Issue Pagination
    # ========================================================================

    ISSUES_PER_PAGE: int = 30
    """Page size for single-page and bounded issue listing."""

    ISSUES_MAX_PAGES: int = 10
    """Page limit for bounded issue listing."""

    ISSUES_FETCH_ALL_PER_PAGE: int = 100
    """Page size for unbounded issue listing (API maximum)."""

    # ========================================================================
    # Credentials
    # ========================================================================

    TOKEN_ENV_VARS: Tuple[str, ...] = (
        "GITHUB_TOKEN",
        "GH_TOKEN",
        "GITHUB_PERSONAL_ACCESS_TOKEN",
    )
    """Environment variables searched for a token, in order."""

    # ghp_/gho_/ghs_... prefixed tokens, or classic 40-char hex tokens
    TOKEN_PATTERN: re.Pattern[str] = re.compile(r"^(gh[a-z]_[A-Za-z0-9_]{16,})$|^[a-f0-9]{40}$")

    # ========================================================================
    # Logging
    # ========================================================================

    LOG_LEVELS: Tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
    DEFAULT_LOG_LEVEL: str = "INFO"
    DEFAULT_LOG_FILE_PATH: str = "./app.log"

    @classmethod
    def validate(cls) -> None:
        """
        Validate configuration at startup.

        Raises:
            AssertionError: If any constraint is violated.
        """
        assert cls.API_BASE_URL.startswith("https://"), "API_BASE_URL must use https"

        assert (
            cls.REQUEST_TIMEOUT_SECONDS > 0
        ), "REQUEST_TIMEOUT_SECONDS must be > 0"

        assert (
            0 < cls.ISSUES_PER_PAGE <= 100
        ), "ISSUES_PER_PAGE must be in 1..100"

        assert (
            0 < cls.ISSUES_FETCH_ALL_PER_PAGE <= 100
        ), "ISSUES_FETCH_ALL_PER_PAGE must be in 1..100"

        assert cls.ISSUES_MAX_PAGES >= 1, "ISSUES_MAX_PAGES must be >= 1"

        assert (
            cls.DEFAULT_LOG_LEVEL in cls.LOG_LEVELS
        ), "DEFAULT_LOG_LEVEL must be a known level"


# Validate at module import time
GitHubConfig.validate()


def get_github_token(environ: Mapping[str, str] | None = None) -> str:
    """
    Return the first configured GitHub token.

    Raises:
        ConfigError: If no token is set or the token format is invalid.
    """
    env = os.environ if environ is None else environ
    token = next((env[name] for name in GitHubConfig.TOKEN_ENV_VARS if env.get(name)), None)
    if not token:
        names = " or ".join(GitHubConfig.TOKEN_ENV_VARS)
        raise ConfigError(f"GitHub token is not set in the environment ({names})")
    if not GitHubConfig.TOKEN_PATTERN.match(token):
        raise ConfigError("The GitHub token must be a valid GitHub Personal Access Token.")
    return token


def get_log_level(environ: Mapping[str, str] | None = None) -> str:
    """Return LOG_LEVEL from the environment, falling back to the default when unknown."""
    env = os.environ if environ is None else environ
    value = (env.get("LOG_LEVEL") or "").strip().upper()
    if value == "WARN":
        value = "WARNING"
    if value in GitHubConfig.LOG_LEVELS:
        return value
    return GitHubConfig.DEFAULT_LOG_LEVEL


def get_log_file_path(environ: Mapping[str, str] | None = None) -> str | None:
    """Return the log file path when LOG_FILE_ENABLED=true, else None."""
    env = os.environ if environ is None else environ
    if (env.get("LOG_FILE_ENABLED") or "").strip().lower() != "true":
        return None
    return env.get("LOG_FILE_PATH") or GitHubConfig.DEFAULT_LOG_FILE_PATH
