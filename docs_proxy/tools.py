"""Tool registry: the documentation and issue operations exposed to callers."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

import jsonschema

from connectors import DocsConnector, IssuesConnector
from core.config import get_github_token
from fetcher.http import GitHubClient


_CATEGORY_PROPERTY = {
    "type": "string",
    "minLength": 1,
    "description": "The category of documentation to get the document from",
}
_DOCUMENT_PROPERTY = {
    "type": "string",
    "minLength": 1,
    "description": "The documentation file to read",
}


@dataclass(frozen=True)
class Tool:
    """Name, description and JSON-Schema for one callable operation."""

    name: str
    description: str
    input_schema: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


@dataclass
class ToolResult:
    """Text blocks returned by a tool call."""

    content: list[str] = field(default_factory=list)
    is_error: bool = False

    @property
    def text(self) -> str:
        return "\n".join(self.content)


LIST_DOC_CATEGORIES = Tool(
    name="list-doc-categories",
    description=(
        "List every documentation category. Call this first when the category "
        "name is unknown or a category lookup failed."
    ),
    input_schema={"type": "object", "properties": {}},
)

LIST_ALL_DOCS_BY_CATEGORY = Tool(
    name="list-all-docs-by-category",
    description=(
        "List the markdown documents in one category. Category names are matched "
        "approximately (case, ordering prefixes, separators and small typos)."
    ),
    input_schema={
        "type": "object",
        "properties": {"category": _CATEGORY_PROPERTY},
        "required": ["category"],
    },
)

READ_DOCUMENT_FROM_CATEGORY = Tool(
    name="read-document-from-category",
    description="Read one documentation file from a category.",
    input_schema={
        "type": "object",
        "properties": {"category": _CATEGORY_PROPERTY, "document": _DOCUMENT_PROPERTY},
        "required": ["category", "document"],
    },
)

READ_ALL_DOCS_FROM_CATEGORY = Tool(
    name="read-all-docs-from-category",
    description=(
        "Read every documentation file in a category merged into one document, "
        "each file under its own heading."
    ),
    input_schema={
        "type": "object",
        "properties": {"category": _CATEGORY_PROPERTY},
        "required": ["category"],
    },
)

GET_ALL_OPEN_ISSUES = Tool(
    name="get-all-open-issues",
    description=(
        "List open issues of the repository. Without `all` only the first page "
        "(30 issues) is returned."
    ),
    input_schema={
        "type": "object",
        "properties": {
            "all": {
                "type": "boolean",
                "description": "Whether to retrieve all open issues or not",
            }
        },
    },
)


def _list_doc_categories(client: GitHubClient, _: Mapping[str, Any]) -> list[str]:
    categories = DocsConnector(client).get_doc_categories()
    return [f"{category.name}: {category.html_url}" for category in categories]


def _list_all_docs_by_category(client: GitHubClient, arguments: Mapping[str, Any]) -> list[str]:
    docs = DocsConnector(client).list_documents_in_category(arguments["category"])
    return [f"{doc.name}: {doc.html_url}" for doc in docs]


def _read_document_from_category(client: GitHubClient, arguments: Mapping[str, Any]) -> list[str]:
    doc = DocsConnector(client).get_document_from_category(arguments["category"], arguments["document"])
    return [doc.content]


def _read_all_docs_from_category(client: GitHubClient, arguments: Mapping[str, Any]) -> list[str]:
    return [DocsConnector(client).get_all_documents_merged_from_category(arguments["category"])]


def _get_all_open_issues(client: GitHubClient, arguments: Mapping[str, Any]) -> list[str]:
    connector = IssuesConnector(client)
    issues = connector.get_all_open_issues() if arguments.get("all") else connector.get_open_issues()
    formatted = "\n".join(f"#{issue.number}: {issue.title}" for issue in issues)
    return [formatted or "No open issues found."]


_Handler = Callable[[GitHubClient, Mapping[str, Any]], list[str]]

TOOLS: dict[str, tuple[Tool, _Handler]] = {
    LIST_DOC_CATEGORIES.name: (LIST_DOC_CATEGORIES, _list_doc_categories),
    LIST_ALL_DOCS_BY_CATEGORY.name: (LIST_ALL_DOCS_BY_CATEGORY, _list_all_docs_by_category),
    READ_DOCUMENT_FROM_CATEGORY.name: (READ_DOCUMENT_FROM_CATEGORY, _read_document_from_category),
    READ_ALL_DOCS_FROM_CATEGORY.name: (READ_ALL_DOCS_FROM_CATEGORY, _read_all_docs_from_category),
    GET_ALL_OPEN_ISSUES.name: (GET_ALL_OPEN_ISSUES, _get_all_open_issues),
}


def list_tools() -> list[Tool]:
    """Return registered tools in registration order."""
    return [tool for tool, _ in TOOLS.values()]


def validate_arguments(tool: Tool, arguments: Mapping[str, Any] | None) -> dict[str, Any]:
    """
    Validate tool arguments against the tool's input schema.

    Raises:
        ValueError: With the first schema violation message.
    """
    payload = dict(arguments or {})
    try:
        jsonschema.validate(payload, tool.input_schema)
    except jsonschema.ValidationError as exc:
        raise ValueError(f"Invalid arguments for {tool.name}: {exc.message}") from exc
    return payload


def call_tool(
    name: str,
    arguments: Mapping[str, Any] | None = None,
    *,
    client: GitHubClient | None = None,
    token: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> ToolResult:
    """
    Run one tool and render its output as text blocks.

    Never raises for tool failures: errors come back as a ToolResult with
    `is_error=True` and an `Error handling <tool>: ...` message.
    """
    entry = TOOLS.get(name)
    if entry is None:
        return ToolResult(content=[f"Unknown tool: {name}"], is_error=True)
    tool, handler = entry

    try:
        if client is None:
            client = GitHubClient(token=token or get_github_token(environ))
        payload = validate_arguments(tool, arguments)
        return ToolResult(content=handler(client, payload))
    except Exception as exc:
        return ToolResult(content=[f"Error handling {name}: {exc}"], is_error=True)
