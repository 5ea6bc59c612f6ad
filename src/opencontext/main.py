"""Main entry point for opencontext: MCP server and one-shot search."""

import argparse
import json
import logging
import sys

from fastmcp import FastMCP

from opencontext import __version__
from opencontext.auth import get_auth_provider
from opencontext.config import Config
from opencontext.prompts import register_prompts
from opencontext.resources import register_resources
from opencontext.search import SearchOptions, SearchResult, search_files
from opencontext.search.models import DEFAULT_MAX_SNIPPETS
from opencontext.tools import register_tools

logger = logging.getLogger(__name__)


def create_server(config: Config) -> FastMCP:
    """Create and configure the MCP server with all components.

    Args:
        config: Configuration instance with all settings.
    """
    auth_provider = get_auth_provider(config) if config.transport == "sse" else None

    mcp = FastMCP(
        name="opencontext",
        instructions=(
            "opencontext finds the files in a codebase that are relevant to a "
            "free-text query, ranked 0-100 with the reasons for each match. Call "
            "find_files before reading files to avoid scanning whole directories."
        ),
        auth=auth_provider,
    )

    logger.info("Registering tools...")
    register_tools(mcp, config)

    logger.info("Registering resources...")
    register_resources(mcp, config.tables)

    logger.info("Registering prompts...")
    register_prompts(mcp)

    logger.info("Server configured successfully")
    return mcp


def format_file_size(size: int) -> str:
    if size < 1024:
        return f"{size}B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f}KB"
    return f"{size / (1024 * 1024):.1f}MB"


def format_results(result: SearchResult, detailed: bool = False, show_lines: bool = False) -> str:
    """Render a search result as plain text, one file per line."""
    if not result.files:
        return (
            "No matching files found.\n"
            f"Scanned {result.files_scanned} files in {result.time_ms}ms"
        )

    out = [
        f"Found {len(result.files)} relevant files "
        f"(scanned {result.files_scanned} in {result.time_ms}ms):",
        "",
    ]
    for match in result.files:
        metadata = match.metadata
        tags = []
        if metadata.language:
            tags.append(f"[{metadata.language}]")
        if metadata.is_test:
            tags.append("[test]")
        elif metadata.is_config:
            tags.append("[config]")
        line = f"{match.score:>3} {format_file_size(metadata.size):>8}  {match.relative_path}"
        if tags:
            line += " " + " ".join(tags)
        out.append(line)

        if detailed:
            for reason in match.reasons:
                out.append(f"        - {reason.description}")
        if show_lines:
            for snippet in match.snippets:
                if snippet.context_before is not None:
                    out.append(f"        {snippet.line_number - 1:>5}  {snippet.context_before}")
                out.append(f"        {snippet.line_number:>5}> {snippet.content}")
                if snippet.context_after is not None:
                    out.append(f"        {snippet.line_number + 1:>5}  {snippet.context_after}")
                out.append("")
        elif detailed:
            out.append("")

    return "\n".join(out).rstrip("\n")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="opencontext",
        description="opencontext - find the files relevant to a query, ranked by confidence",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command")

    serve = subparsers.add_parser("serve", help="Run the MCP server (default)")
    serve.add_argument(
        "--transport",
        choices=["stdio", "sse"],
        default=None,
        help="MCP transport (default: OPENCONTEXT_TRANSPORT or stdio)",
    )
    serve.add_argument("--host", default="127.0.0.1", help="Bind address for sse")

    search = subparsers.add_parser("search", help="Run one search and print the results")
    search.add_argument("query", help="Search query")
    search.add_argument("-n", "--max-files", type=int, default=5, help="Maximum number of results")
    search.add_argument("--min-score", type=int, default=15, help="Minimum relevance score (0-100)")
    search.add_argument("-p", "--path", default=None, help="Root path to search from (default: cwd)")
    search.add_argument("--include-tests", action="store_true", help="Include test files")
    search.add_argument("--include-configs", action="store_true", help="Include configuration files")
    search.add_argument("--include-docs", action="store_true", help="Include documentation files")
    search.add_argument(
        "--no-content",
        dest="content",
        action="store_false",
        help="Skip content search (faster)",
    )
    search.add_argument(
        "--max-size",
        type=int,
        default=None,
        help="Maximum file size to read in bytes (default: OPENCONTEXT_MAX_FILE_SIZE)",
    )
    search.add_argument("-l", "--lines", action="store_true", help="Show matching lines")
    search.add_argument(
        "--max-snippets",
        type=int,
        default=DEFAULT_MAX_SNIPPETS,
        help="Maximum matching lines per file with --lines",
    )
    search.add_argument("-j", "--json", action="store_true", help="Output as JSON")
    search.add_argument("-d", "--detailed", action="store_true", help="Show match reasons")
    return parser


def run_search(args: argparse.Namespace, config: Config) -> int:
    """Run the search subcommand, returning the process exit code."""
    options = SearchOptions(
        query=args.query,
        root_path=args.path,
        max_files=args.max_files,
        min_score=args.min_score,
        include_tests=args.include_tests,
        include_configs=args.include_configs,
        include_docs=args.include_docs,
        search_content=args.content,
        max_file_size=args.max_size if args.max_size is not None else config.max_file_size,
        line_preview=args.lines,
        max_snippets=args.max_snippets,
        workers=config.workers,
    )
    try:
        result = search_files(options, tables=config.tables)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(format_results(result, detailed=args.detailed, show_lines=args.lines))
    return 0


def run_server(args: argparse.Namespace, config: Config) -> int:
    """Run the MCP server until interrupted."""
    transport = getattr(args, "transport", None) or config.transport
    config.transport = transport

    logger.info("=" * 50)
    logger.info("opencontext %s starting...", __version__)
    logger.info("  ROOT:      %s", config.root)
    logger.info("  TRANSPORT: %s", transport)
    if transport == "sse":
        logger.info("  PORT:      %s", config.port)
        logger.info("  AUTH:      %s", "enabled" if config.auth_token else "disabled")
    logger.info("  TABLES:    %s", config.tables_path or "defaults")
    logger.info("=" * 50)

    try:
        mcp = create_server(config)
        if transport == "sse":
            host = getattr(args, "host", "127.0.0.1")
            logger.info("Starting MCP server on %s:%s...", host, config.port)
            mcp.run(transport="sse", host=host, port=config.port)
        else:
            mcp.run(transport="stdio")
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
        return 0
    except Exception:
        logger.exception("Server error")
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main function - dispatches to the server or a one-shot search."""
    args = build_parser().parse_args(argv)

    if args.verbose:
        level = logging.DEBUG
    elif args.command == "search":
        level = logging.WARNING
    else:
        level = logging.INFO

    # Configure logging here to avoid side effects on import; stdout belongs
    # to the stdio transport and to search output
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        config = Config.from_env()
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    if args.command == "search":
        return run_search(args, config)
    return run_server(args, config)


if __name__ == "__main__":
    sys.exit(main())
