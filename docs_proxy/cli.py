"""CLI entrypoint for docs-proxy."""

from __future__ import annotations

import argparse
from typing import Any
from typing import Sequence
from uuid import uuid4

from core.structured_logging import emit_json_event
from docs_proxy.tools import call_tool, list_tools
from resolution import ResolverConfig, resolve


def _resolve_command_run_id(args: argparse.Namespace) -> str:
    """Resolve run_id from CLI args or create one for command-level tracing."""
    explicit = getattr(args, "run_id", None)
    if explicit:
        return str(explicit)
    return str(uuid4())


def _emit_cli_event(
    event_type: str,
    *,
    run_id: str,
    command: str,
    **payload: Any,
) -> str:
    """Emit one structured CLI event line with standard fields."""
    return emit_json_event(
        event_type=event_type,
        run_id=run_id,
        command=command,
        **payload,
    )


def _event_name(command: str) -> str:
    return "cli_" + command.replace("-", "_") + "_completed"


def _run_tool(args: argparse.Namespace, tool_name: str, arguments: dict[str, Any]) -> int:
    """Call a registered tool and emit its text output as one event."""
    run_id = _resolve_command_run_id(args)
    result = call_tool(tool_name, arguments, token=args.token)
    _emit_cli_event(
        _event_name(tool_name),
        run_id=run_id,
        command=tool_name,
        level="error" if result.is_error else "info",
        arguments=arguments,
        is_error=result.is_error,
        content=result.content,
    )
    return 1 if result.is_error else 0


def _cmd_list_doc_categories(args: argparse.Namespace) -> int:
    """List documentation categories."""
    return _run_tool(args, "list-doc-categories", {})


def _cmd_list_all_docs_by_category(args: argparse.Namespace) -> int:
    """List documents in one category."""
    return _run_tool(args, "list-all-docs-by-category", {"category": args.category})


def _cmd_read_document_from_category(args: argparse.Namespace) -> int:
    """Read one document."""
    return _run_tool(
        args,
        "read-document-from-category",
        {"category": args.category, "document": args.document},
    )


def _cmd_read_all_docs_from_category(args: argparse.Namespace) -> int:
    """Read all documents of a category merged."""
    return _run_tool(args, "read-all-docs-from-category", {"category": args.category})


def _cmd_get_all_open_issues(args: argparse.Namespace) -> int:
    """List open issues (first page, or all pages with --all)."""
    return _run_tool(args, "get-all-open-issues", {"all": bool(args.all)})


def _cmd_list_tools(args: argparse.Namespace) -> int:
    """Emit the tool registry."""
    _emit_cli_event(
        "cli_list_tools_completed",
        run_id=_resolve_command_run_id(args),
        command="list-tools",
        tools=[tool.to_dict() for tool in list_tools()],
    )
    return 0


def _cmd_resolve(args: argparse.Namespace) -> int:
    """Resolve a name against candidates given on the command line (offline)."""
    config = ResolverConfig(threshold=args.threshold, max_suggestions=args.max_suggestions)
    result = resolve(args.input, args.candidates, config)
    _emit_cli_event(
        "cli_resolve_completed",
        run_id=_resolve_command_run_id(args),
        command="resolve",
        input=args.input,
        threshold=config.threshold,
        max_suggestions=config.max_suggestions,
        **result.to_dict(),
    )
    return 0 if result.matched else 1


def build_parser() -> argparse.ArgumentParser:
    """Create argument parser for the docs-proxy CLI."""
    parser = argparse.ArgumentParser(
        prog="docs-proxy",
        description="Read repository documentation and open issues from the GitHub API",
    )
    parser.add_argument("--version", action="version", version="docs-proxy 0.1.0")

    subparsers = parser.add_subparsers(dest="command")

    def add_remote(name: str, help_text: str) -> argparse.ArgumentParser:
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("--token", help="GitHub token (default: GITHUB_TOKEN/GH_TOKEN env)")
        sub.add_argument("--run-id", help="Optional explicit run ID for logging")
        return sub

    categories_parser = add_remote("list-doc-categories", "List documentation categories")
    categories_parser.set_defaults(func=_cmd_list_doc_categories)

    docs_parser = add_remote("list-all-docs-by-category", "List documents in a category")
    docs_parser.add_argument("category", help="Category name (matched approximately)")
    docs_parser.set_defaults(func=_cmd_list_all_docs_by_category)

    read_parser = add_remote("read-document-from-category", "Read one document")
    read_parser.add_argument("category", help="Category name (matched approximately)")
    read_parser.add_argument("document", help="Document name (matched approximately)")
    read_parser.set_defaults(func=_cmd_read_document_from_category)

    read_all_parser = add_remote("read-all-docs-from-category", "Read a whole category merged")
    read_all_parser.add_argument("category", help="Category name (matched approximately)")
    read_all_parser.set_defaults(func=_cmd_read_all_docs_from_category)

    issues_parser = add_remote("get-all-open-issues", "List open issues")
    issues_parser.add_argument("--all", action="store_true", help="Follow pagination (up to 10 pages)")
    issues_parser.set_defaults(func=_cmd_get_all_open_issues)

    tools_parser = subparsers.add_parser("list-tools", help="Show available tools and their input schemas")
    tools_parser.add_argument("--run-id", help="Optional explicit run ID for logging")
    tools_parser.set_defaults(func=_cmd_list_tools)

    resolve_parser = subparsers.add_parser(
        "resolve",
        help="Resolve a name against candidate names without any network access",
    )
    resolve_parser.add_argument("input", help="User-supplied name")
    resolve_parser.add_argument("candidates", nargs="*", help="Candidate names, in priority order")
    resolve_parser.add_argument("--threshold", type=int, default=3, help="Maximum accepted edit distance")
    resolve_parser.add_argument(
        "--max-suggestions",
        type=int,
        default=3,
        help="Suggestions returned when nothing matched",
    )
    resolve_parser.add_argument("--run-id", help="Optional explicit run ID for logging")
    resolve_parser.set_defaults(func=_cmd_resolve)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Execute CLI and return process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 0

    try:
        return int(args.func(args))
    except Exception as exc:
        run_id = _resolve_command_run_id(args)
        _emit_cli_event(
            "cli_error",
            run_id=run_id,
            command=str(getattr(args, "command", "unknown")),
            level="error",
            error_type=type(exc).__name__,
            error=str(exc),
        )
        return 1


def cli() -> None:
    """Console-script entrypoint."""
    raise SystemExit(main())


if __name__ == "__main__":
    raise SystemExit(main())
