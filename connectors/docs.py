"""Documentation connector: categories, documents, and merged category views."""

from __future__ import annotations

import base64
import re
from typing import Any

from core.config import GitHubConfig
from core.models import DocCategory, DocFile, DocFileSummary, GitHubContent, GitHubFile
from fetcher.http import GitHubClient
from resolution import MatchResult, ResolverConfig, resolve


_CATEGORY_PREFIX = re.compile(r"^\d+_")
_CATEGORY_SEPARATOR = re.compile(r"[-_]")


class DocsError(Exception):
    """Raised when a documentation operation fails."""


class NameNotFoundError(DocsError):
    """
    A category or document name did not resolve to any candidate.

    `suggestions` holds the closest candidate names, possibly empty.
    """

    def __init__(self, kind: str, name: str, suggestions: list[str], scope: str | None = None) -> None:
        self.kind = kind
        self.name = name
        self.suggestions = list(suggestions)
        self.scope = scope
        location = f' in category "{scope}"' if scope else ""
        hint = ", ".join(self.suggestions) or "(no suggestions)"
        super().__init__(f'{kind} "{name}" not found{location}. Did you mean: {hint}?')


def format_category_name(folder_name: str) -> str:
    """
    Turn a category folder name into a readable title.

    Example:
      "01_getting-started" -> "Getting Started"
    """
    without_prefix = _CATEGORY_PREFIX.sub("", folder_name, count=1)
    with_spaces = _CATEGORY_SEPARATOR.sub(" ", without_prefix)
    return " ".join(word[:1].upper() + word[1:] for word in with_spaces.split(" "))


def decode_content(payload: GitHubFile) -> str:
    """Return file text, base64-decoding when GitHub says so (bad bytes become U+FFFD)."""
    if payload.encoding == "base64":
        return base64.b64decode(payload.content).decode("utf-8", errors="replace")
    return payload.content


def _is_markdown(item: GitHubContent) -> bool:
    return item.type == "file" and item.name.endswith(".md")


class DocsConnector:
    """Read documentation from a repository's docs directory."""

    def __init__(
        self,
        client: GitHubClient,
        docs_path: str = GitHubConfig.DOCS_PATH,
        resolver_config: ResolverConfig | None = None,
    ) -> None:
        self.client = client
        self.docs_path = docs_path
        self.resolver_config = resolver_config or ResolverConfig()

    # ------------------------------------------------------------------
    # Raw listings
    # ------------------------------------------------------------------

    def _list_directory(self, path: str) -> list[GitHubContent]:
        payload: Any = self.client.get(self.client.repo_path("contents", path))
        if not isinstance(payload, list):
            raise DocsError(f"Expected a directory listing for {path}")
        return [GitHubContent.model_validate(item) for item in payload]

    def _markdown_files(self, category: DocCategory) -> list[GitHubContent]:
        return [item for item in self._list_directory(category.path) if _is_markdown(item)]

    def _fetch_file(self, path: str) -> DocFile:
        payload = GitHubFile.model_validate(self.client.get(self.client.repo_path("contents", path)))
        return DocFile(
            name=payload.name,
            path=payload.path,
            content=decode_content(payload),
            html_url=payload.html_url,
            download_url=payload.download_url or "",
            size=payload.size,
            sha=payload.sha,
        )

    # ------------------------------------------------------------------
    # Name resolution
    # ------------------------------------------------------------------

    def _match(self, name: str, candidates: list[str]) -> MatchResult:
        return resolve(name, candidates, self.resolver_config)

    def resolve_category(self, name: str, categories: list[DocCategory] | None = None) -> DocCategory:
        """
        Resolve a user-supplied category name.

        Raises:
            NameNotFoundError: When nothing is close enough.
        """
        pool = categories if categories is not None else self.get_doc_categories()
        result = self._match(name, [category.name for category in pool])
        if not result.matched:
            raise NameNotFoundError("Category", name, result.suggestions)
        return next(category for category in pool if category.name == result.match)

    def resolve_document(
        self,
        category: DocCategory,
        name: str,
        files: list[GitHubContent],
    ) -> GitHubContent:
        """
        Resolve a user-supplied document name within a category.

        Raises:
            NameNotFoundError: When nothing is close enough.
        """
        result = self._match(name, [item.name for item in files])
        if not result.matched:
            raise NameNotFoundError("Document", name, result.suggestions, scope=category.name)
        return next(item for item in files if item.name == result.match)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def get_doc_categories(self) -> list[DocCategory]:
        """List documentation categories (directories under the docs root)."""
        try:
            contents = self._list_directory(self.docs_path)
        except Exception as exc:
            raise DocsError(f"Failed to fetch documentation categories: {exc}") from exc

        return [
            DocCategory(
                name=format_category_name(item.name),
                path=item.path,
                url=item.url,
                html_url=item.html_url,
            )
            for item in contents
            if item.type == "dir"
        ]

    def list_documents_in_category(self, category: str) -> list[DocFileSummary]:
        """List markdown documents in the category best matching `category`."""
        try:
            matched = self.resolve_category(category)
            return [
                DocFileSummary(
                    name=item.name,
                    path=item.path,
                    html_url=item.html_url,
                    download_url=item.download_url or "",
                    size=0,
                    sha=item.sha,
                )
                for item in self._markdown_files(matched)
            ]
        except NameNotFoundError:
            raise
        except Exception as exc:
            raise DocsError(f"Failed to list documents in category: {exc}") from exc

    def get_document_from_category(self, category: str, document: str) -> DocFile:
        """Fetch one markdown document, resolving both names approximately."""
        try:
            matched = self.resolve_category(category)
            doc = self.resolve_document(matched, document, self._markdown_files(matched))
            return self._fetch_file(doc.path)
        except NameNotFoundError:
            raise
        except Exception as exc:
            raise DocsError(f"Failed to fetch document: {exc}") from exc

    def get_all_documents_merged_from_category(self, category: str) -> str:
        """
        Fetch every markdown document in a category as one markdown string.

        A document that fails to load is rendered as an error section
        instead of failing the whole category.
        """
        try:
            matched = self.resolve_category(category)
            files = self._markdown_files(matched)
        except NameNotFoundError:
            raise
        except Exception as exc:
            raise DocsError(f"Failed to get all documents in category: {exc}") from exc

        if not files:
            return f'No documents found in category "{category}"'

        sections: list[str] = []
        for item in files:
            title = item.name.removesuffix(".md")
            try:
                doc = self._fetch_file(item.path)
            except Exception as exc:
                sections.append(f"\n\n## {title} (Error)\n\nFailed to fetch document: {exc}")
                continue
            sections.append(f"\n\n## {title}\n\n{doc.content}")

        header = f"# {matched.name} Documentation\n\n"
        return header + "\n\n---\n".join(sections)
