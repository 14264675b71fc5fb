"""
Core Pydantic models for docs-proxy.

Design principles:
- GitHub payloads are validated at the client boundary, extra keys ignored
- Service-level shapes (categories, documents, issues) carry only what
  callers render
- Content fields are plain decoded text, never base64
"""

from datetime import UTC, datetime
from typing import Optional, List, Literal
from uuid import uuid4

from pydantic import BaseModel, Field


# ============================================================================
# GitHub Contents API
# ============================================================================

class GitHubContent(BaseModel):
    """
    One entry of a `repos/{owner}/{repo}/contents/{path}` directory listing.
    """
    name: str
    path: str
    sha: str
    type: Literal["file", "dir", "symlink", "submodule"]
    url: str
    html_url: str
    download_url: Optional[str] = None


class GitHubFile(GitHubContent):
    """
    A single file fetched from the contents API.

    `content` is whatever GitHub sent; see `encoding` (usually "base64").
    """
    type: Literal["file", "dir", "symlink", "submodule"] = "file"
    content: str = ""
    encoding: Optional[str] = None
    size: int = 0


# ============================================================================
# Documentation
# ============================================================================

class DocCategory(BaseModel):
    """
    A documentation category (a directory under the docs root).

    Example:
      name = "Getting Started"  # formatted from "01_getting-started"
      path = "docs/_docs/01_getting-started"
    """
    name: str
    path: str
    url: str
    html_url: str


class DocFileSummary(BaseModel):
    """A markdown document listed in a category, without its content."""
    name: str
    path: str
    html_url: str
    download_url: str = ""
    size: int = 0  # Not known from a directory listing
    sha: str


class DocFile(BaseModel):
    """A markdown document with decoded content."""
    name: str
    path: str
    content: str
    html_url: str
    download_url: str = ""
    size: int = 0
    sha: str


# ============================================================================
# Issues
# ============================================================================

class GitHubUser(BaseModel):
    login: str
    avatar_url: str = ""
    html_url: str = ""


class GitHubLabel(BaseModel):
    name: str
    color: str = ""


class GitHubIssue(BaseModel):
    """
    An issue (or pull request; GitHub lists both) from the issues API.
    """
    id: int
    number: int
    title: str
    state: Literal["open", "closed"]
    html_url: str
    body: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    user: GitHubUser
    labels: List[GitHubLabel] = Field(default_factory=list)


# ============================================================================
# Request Logging
# ============================================================================

class RequestLog(BaseModel):
    """
    Log entry for a single API request.
    """
    id: str = Field(default_factory=lambda: str(uuid4()))
    method: str
    url: str

    status_code: Optional[int] = None  # HTTP status
    latency_ms: Optional[int] = None  # Time to response

    error: Optional[str] = None  # Transport or HTTP error summary

    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
