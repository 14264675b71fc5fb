"""Integration tests for connectors/docs.py against a stubbed docs tree."""

from __future__ import annotations

import base64

import pytest
import requests

from conftest import API, DummyResponse, DummySession, file_payload
from connectors.docs import (
    DocsConnector,
    DocsError,
    NameNotFoundError,
    decode_content,
    format_category_name,
)
from core.models import GitHubFile
from resolution import ResolverConfig


@pytest.mark.unit
@pytest.mark.parametrize(
    ("folder", "expected"),
    [
        ("01_getting-started", "Getting Started"),
        ("04_reference", "Reference"),
        ("troubleshooting", "Troubleshooting"),
        ("10_terragrunt_cache", "Terragrunt Cache"),
    ],
)
def test_format_category_name(folder: str, expected: str):
    """Folder names become readable titles."""
    assert format_category_name(folder) == expected


@pytest.mark.unit
def test_decode_content_passes_plain_text_through():
    """Only base64-encoded payloads are decoded."""
    payload = GitHubFile(
        name="a.md",
        path="a.md",
        sha="x",
        url="u",
        html_url="h",
        content="plain",
        encoding=None,
    )
    assert decode_content(payload) == "plain"


@pytest.mark.integration
def test_get_doc_categories_lists_directories_only(docs_session, make_client):
    """Only directories are categories; names are formatted."""
    categories = DocsConnector(make_client(docs_session)).get_doc_categories()

    assert [category.name for category in categories] == [
        "Getting Started",
        "Features",
        "Reference",
        "Community",
    ]
    assert categories[2].path == "docs/_docs/04_reference"
    assert categories[2].html_url.endswith("/docs/_docs/04_reference")


@pytest.mark.integration
def test_get_doc_categories_wraps_failures(make_client):
    """Transport errors are reported with the operation prefix."""
    session = DummySession({f"{API}/contents/docs/_docs": requests.Timeout("read timed out")})

    with pytest.raises(DocsError, match="Failed to fetch documentation categories: HTTP request failed"):
        DocsConnector(make_client(session)).get_doc_categories()


@pytest.mark.integration
@pytest.mark.parametrize("category", ["reference", "04_reference", "REFERENCE", "refernece"])
def test_list_documents_resolves_category_approximately(docs_session, make_client, category: str):
    """Exact, prefixed, cased, and misspelled names reach the same category."""
    docs = DocsConnector(make_client(docs_session)).list_documents_in_category(category)

    assert [doc.name for doc in docs] == ["01-configuration.md", "02-cli-options.md"]
    assert all(doc.size == 0 for doc in docs)
    assert docs[0].download_url.startswith("https://raw.githubusercontent.com/")


@pytest.mark.integration
def test_unknown_category_raises_not_found_with_suggestions(docs_session, make_client):
    """No match surfaces as NameNotFoundError listing suggestions."""
    connector = DocsConnector(make_client(docs_session))

    with pytest.raises(NameNotFoundError) as excinfo:
        connector.list_documents_in_category("xyzzy")

    error = excinfo.value
    assert error.kind == "Category"
    assert len(error.suggestions) == 3
    assert set(error.suggestions) <= {"Getting Started", "Features", "Reference", "Community"}
    assert str(error).startswith('Category "xyzzy" not found. Did you mean: ')


@pytest.mark.integration
def test_not_found_message_without_suggestions(docs_session, make_client):
    """An empty suggestion list renders as (no suggestions)."""
    connector = DocsConnector(make_client(docs_session), resolver_config=ResolverConfig(max_suggestions=0))

    with pytest.raises(NameNotFoundError, match=r"Did you mean: \(no suggestions\)\?"):
        connector.list_documents_in_category("xyzzy")


@pytest.mark.integration
def test_get_document_decodes_base64_content(docs_session, make_client):
    """Document names resolve approximately and content is decoded."""
    doc = DocsConnector(make_client(docs_session)).get_document_from_category("Reference", "configuration")

    assert doc.name == "01-configuration.md"
    assert doc.content == "# Configuration\n\nterragrunt.hcl ✓\n"
    assert doc.size == len(doc.content.encode("utf-8"))
    assert doc.sha == "sha-01-configuration.md"


@pytest.mark.integration
def test_get_document_exact_file_name(docs_session, make_client):
    """The full file name is an exact match."""
    doc = DocsConnector(make_client(docs_session)).get_document_from_category(
        "getting-started",
        "01-quick-start.md",
    )

    assert doc.content == "# Quick Start\n"


@pytest.mark.integration
def test_unknown_document_reports_category(docs_session, make_client):
    """Document misses name the resolved category."""
    with pytest.raises(NameNotFoundError) as excinfo:
        DocsConnector(make_client(docs_session)).get_document_from_category("reference", "zzzzzzzz")

    assert excinfo.value.kind == "Document"
    assert excinfo.value.scope == "Reference"
    assert 'in category "Reference"' in str(excinfo.value)
    assert set(excinfo.value.suggestions) == {"01-configuration.md", "02-cli-options.md"}


@pytest.mark.integration
def test_get_document_wraps_fetch_failures(docs_session, make_client):
    """Failures after resolution carry the fetch-document prefix."""
    docs_session.routes[f"{API}/contents/docs/_docs/04_reference/02-cli-options.md"] = DummyResponse(
        500,
        {"message": "boom"},
    )

    with pytest.raises(DocsError, match="Failed to fetch document: HTTP Error 500"):
        DocsConnector(make_client(docs_session)).get_document_from_category("reference", "cli-options")


@pytest.mark.integration
def test_get_document_tolerates_invalid_utf8(docs_session, make_client):
    """Undecodable bytes are replaced instead of failing the document."""
    path = "docs/_docs/04_reference/02-cli-options.md"
    payload = file_payload(path, "")
    payload["content"] = base64.b64encode(b"# Title\n\xff\xfe bad\n").decode("ascii")
    docs_session.routes[f"{API}/contents/{path}"] = DummyResponse(payload=payload)

    doc = DocsConnector(make_client(docs_session)).get_document_from_category("reference", "cli-options")

    assert doc.content == "# Title\n\ufffd\ufffd bad\n"


@pytest.mark.integration
def test_merged_category_document(docs_session, make_client):
    """All markdown files are merged under one header, separated by rules."""
    merged = DocsConnector(make_client(docs_session)).get_all_documents_merged_from_category("refernece")

    assert merged == (
        "# Reference Documentation\n\n"
        "\n\n## 01-configuration\n\n# Configuration\n\nterragrunt.hcl ✓\n"
        "\n\n---\n"
        "\n\n## 02-cli-options\n\n# CLI Options\n"
    )


@pytest.mark.integration
def test_merged_category_renders_per_document_errors(docs_session, make_client):
    """One failing document does not fail the whole category."""
    docs_session.routes[f"{API}/contents/docs/_docs/04_reference/02-cli-options.md"] = DummyResponse(
        500,
        {"message": "boom"},
    )

    merged = DocsConnector(make_client(docs_session)).get_all_documents_merged_from_category("reference")

    assert "## 01-configuration\n\n# Configuration" in merged
    assert "## 02-cli-options (Error)\n\nFailed to fetch document: HTTP Error 500: Internal Server Error" in merged


@pytest.mark.integration
def test_merged_empty_category(docs_session, make_client):
    """A category without markdown files yields a notice, not an error."""
    merged = DocsConnector(make_client(docs_session)).get_all_documents_merged_from_category("community")

    assert merged == 'No documents found in category "community"'


@pytest.mark.integration
def test_merged_unknown_category_raises(docs_session, make_client):
    """Resolution failures propagate as NameNotFoundError."""
    with pytest.raises(NameNotFoundError):
        DocsConnector(make_client(docs_session)).get_all_documents_merged_from_category("xyzzy")
