"""docs-proxy: documentation and issue retrieval over the GitHub API."""

__version__ = "0.1.0"
