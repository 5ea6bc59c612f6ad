"""
Search engine for opencontext.

Ranks files under a root directory by relevance to a free-text query. There
is no index: every search walks, reads and scores the tree from scratch.
"""

from opencontext.search.classify import (
    detect_language,
    is_config_file,
    is_doc_file,
    is_test_file,
)
from opencontext.search.engine import FileOutcome, score_file, search_files
from opencontext.search.metadata import extract_metadata
from opencontext.search.models import (
    FileMatch,
    FileMetadata,
    LineSnippet,
    MatchReason,
    ParsedQuery,
    SearchOptions,
    SearchResult,
)
from opencontext.search.query import parse_query
from opencontext.search.snippets import extract_line_snippets
from opencontext.search.tables import DEFAULT_TABLES, SearchTables, load_tables
from opencontext.search.walker import build_exclude_patterns, walk_files

__all__ = [
    "DEFAULT_TABLES",
    "FileMatch",
    "FileMetadata",
    "FileOutcome",
    "LineSnippet",
    "MatchReason",
    "ParsedQuery",
    "SearchOptions",
    "SearchResult",
    "SearchTables",
    "build_exclude_patterns",
    "detect_language",
    "extract_line_snippets",
    "extract_metadata",
    "is_config_file",
    "is_doc_file",
    "is_test_file",
    "load_tables",
    "parse_query",
    "score_file",
    "search_files",
    "walk_files",
]
