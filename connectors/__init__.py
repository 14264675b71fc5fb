"""Connector implementations."""

from connectors.docs import DocsConnector, DocsError, NameNotFoundError, format_category_name
from connectors.issues import IssuesConnector

__all__ = [
    "DocsConnector",
    "DocsError",
    "NameNotFoundError",
    "IssuesConnector",
    "format_category_name",
]
