"""MCP tools for the opencontext server.

This module defines the tools exposed by the MCP server:
- find_files: Rank files in the workspace by relevance to a query
- parse_query: Show how a query is interpreted (terms, phrases, file types, intents)
"""

import logging
from pathlib import Path

from fastmcp import FastMCP

from opencontext.config import Config
from opencontext.search import SearchOptions, parse_query, search_files
from opencontext.search.models import DEFAULT_MAX_SNIPPETS, FileMatch

logger = logging.getLogger(__name__)


def _resolve_search_root(config: Config, path: str | None) -> Path:
    """Resolve an optional sub-path, refusing anything outside the configured root.

    Raises:
        ValueError: If the path escapes the root
    """
    root = config.root.resolve()
    if not path:
        return root
    requested = (root / path).resolve()
    try:
        requested.relative_to(root)
    except ValueError as e:
        raise ValueError(f"Path '{path}' is outside the search root") from e
    return requested


def _format_match(match: FileMatch, line_preview: bool) -> dict:
    entry = {
        "path": match.relative_path,
        "score": match.score,
        "language": match.metadata.language,
        "size": match.metadata.size,
        "is_test": match.metadata.is_test,
        "is_config": match.metadata.is_config,
        "reasons": [reason.description for reason in match.reasons],
    }
    if line_preview:
        entry["snippets"] = [snippet.to_dict() for snippet in match.snippets]
    return entry


def find_files(
    config: Config,
    query: str,
    max_files: int | None = None,
    min_score: int | None = None,
    include_tests: bool = False,
    include_configs: bool = False,
    include_docs: bool = False,
    line_preview: bool = False,
    max_snippets: int = DEFAULT_MAX_SNIPPETS,
    path: str | None = None,
) -> dict:
    """Run a search under the configured root and shape it for an agent.

    Errors (empty query, bad path, unreadable root) come back as an "error"
    entry rather than an exception.
    """
    if not query or not query.strip():
        return {
            "files": [],
            "error": "query parameter is required, e.g. find_files(query='auth middleware')",
        }

    try:
        root = _resolve_search_root(config, path)
        result = search_files(
            SearchOptions(
                query=query,
                root_path=root,
                max_files=max_files if max_files is not None else config.max_files,
                min_score=min_score if min_score is not None else config.min_score,
                include_tests=include_tests,
                include_configs=include_configs,
                include_docs=include_docs,
                max_file_size=config.max_file_size,
                line_preview=line_preview,
                max_snippets=max_snippets,
                workers=config.workers,
            ),
            tables=config.tables,
        )
    except (ValueError, OSError) as e:
        logger.warning("find_files failed for %r: %s", query, e)
        return {"files": [], "query": query, "error": str(e)}

    return {
        "files": [_format_match(match, line_preview) for match in result.files],
        "files_scanned": result.files_scanned,
        "time_ms": result.time_ms,
        "query": result.query,
    }


def register_tools(mcp: FastMCP, config: Config) -> None:
    """Register all tools with the FastMCP server.

    Args:
        mcp: FastMCP server instance
        config: Configuration supplying the root and defaults
    """

    @mcp.tool(name="find_files")
    def find_files_tool(
        query: str,
        max_files: int | None = None,
        min_score: int | None = None,
        include_tests: bool = False,
        include_configs: bool = False,
        include_docs: bool = False,
        line_preview: bool = False,
        max_snippets: int = DEFAULT_MAX_SNIPPETS,
        path: str | None = None,
    ) -> dict:
        """Find relevant files in the codebase for a free-text query.

        Use this to locate files related to a task before reading them.
        Files are ranked by filename, directory, content, declarations and
        exports, each match explained by its top reasons.

        Args:
            query: Search query (e.g. 'auth middleware', '"user service" .ts').
                Quoted text is matched as a phrase, '.ext' tokens hint file types.
            max_files: Maximum number of results (default from server config, usually 5)
            min_score: Minimum relevance score 0-100 (default 15)
            include_tests: Include test files (default: false)
            include_configs: Include config files (default: false)
            include_docs: Include documentation (default: false)
            line_preview: Return the matching lines of each file (default: false)
            max_snippets: Maximum matching lines per file when line_preview is set
            path: Optional sub-directory of the workspace to search

        Returns:
            Search results with:
            - files: Ranked files (path, score, language, size, reasons, snippets)
            - files_scanned: Number of candidate files examined
            - time_ms: Search duration in milliseconds
            - error: Present only when the search could not run
        """
        return find_files(
            config,
            query,
            max_files=max_files,
            min_score=min_score,
            include_tests=include_tests,
            include_configs=include_configs,
            include_docs=include_docs,
            line_preview=line_preview,
            max_snippets=max_snippets,
            path=path,
        )

    @mcp.tool(name="parse_query")
    def parse_query_tool(query: str) -> dict:
        """Show how find_files interprets a query.

        Args:
            query: Search query

        Returns:
            Terms, exact phrases, file types and test/config/doc intents
        """
        return parse_query(query, config.tables).to_dict()
