"""Data models for the search engine."""

import os
from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal

MatchType = Literal[
    "filename",
    "filepath",
    "content",
    "export",
    "import",
    "function",
    "class",
    "interface",
    "comment",
    "config",
    "test",
    "related",
]

DEFAULT_MAX_FILES = 10
DEFAULT_MIN_SCORE = 15
DEFAULT_MAX_FILE_SIZE = 1024 * 1024
DEFAULT_MAX_SNIPPETS = 3
DEFAULT_WORKERS = 8

# Reasons kept per file match
MAX_REASONS = 5


@dataclass(frozen=True)
class ParsedQuery:
    """Structured search intent extracted from a free-text query."""

    original: str = ""
    terms: list[str] = field(default_factory=list)
    exact_terms: list[str] = field(default_factory=list)
    file_types: list[str] = field(default_factory=list)
    want_tests: bool = False
    want_configs: bool = False
    want_docs: bool = False

    @property
    def is_empty(self) -> bool:
        return not (self.terms or self.exact_terms or self.file_types)

    def to_dict(self) -> dict:
        return {
            "original": self.original,
            "terms": list(self.terms),
            "exact_terms": list(self.exact_terms),
            "file_types": list(self.file_types),
            "want_tests": self.want_tests,
            "want_configs": self.want_configs,
            "want_docs": self.want_docs,
        }


@dataclass(frozen=True)
class FileMetadata:
    """Per-scan snapshot of one file."""

    size: int
    last_modified: datetime
    extension: str
    line_count: int
    is_test: bool = False
    is_config: bool = False
    is_doc: bool = False
    language: str | None = None
    exports: list[str] = field(default_factory=list)
    imports: list[str] = field(default_factory=list)
    # Only populated in line-preview mode
    line_index: dict[str, list[int]] | None = None
    content: str | None = None

    def to_dict(self) -> dict:
        return {
            "size": self.size,
            "last_modified": self.last_modified.isoformat(),
            "extension": self.extension,
            "line_count": self.line_count,
            "is_test": self.is_test,
            "is_config": self.is_config,
            "is_doc": self.is_doc,
            "language": self.language,
            "exports": list(self.exports),
            "imports": list(self.imports),
        }


@dataclass
class LineSnippet:
    """A matching line with one line of context on each side."""

    line_number: int
    content: str
    context_before: str | None = None
    context_after: str | None = None

    def to_dict(self) -> dict:
        data: dict = {"line_number": self.line_number, "content": self.content}
        if self.context_before is not None:
            data["context_before"] = self.context_before
        if self.context_after is not None:
            data["context_after"] = self.context_after
        return data


@dataclass
class MatchReason:
    """One attributable scoring event."""

    type: MatchType
    description: str
    contribution: float
    snippets: list[LineSnippet] = field(default_factory=list)

    def to_dict(self) -> dict:
        data: dict = {
            "type": self.type,
            "description": self.description,
            "contribution": round(self.contribution, 2),
        }
        if self.snippets:
            data["snippets"] = [s.to_dict() for s in self.snippets]
        return data


@dataclass
class FileMatch:
    """A scored file."""

    path: str  # Absolute
    relative_path: str  # Relative to the search root
    score: int
    reasons: list[MatchReason]
    metadata: FileMetadata

    @property
    def snippets(self) -> list[LineSnippet]:
        """Unique line snippets across the kept reasons."""
        unique: dict[int, LineSnippet] = {}
        for reason in self.reasons:
            for snippet in reason.snippets:
                unique.setdefault(snippet.line_number, snippet)
        return list(unique.values())

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "relative_path": self.relative_path,
            "score": self.score,
            "reasons": [r.to_dict() for r in self.reasons],
            "metadata": self.metadata.to_dict(),
        }


@dataclass
class SearchResult:
    """Ranked, truncated result of one search."""

    files: list[FileMatch]
    files_scanned: int
    time_ms: int
    query: str

    def to_dict(self) -> dict:
        return {
            "files": [f.to_dict() for f in self.files],
            "files_scanned": self.files_scanned,
            "time_ms": self.time_ms,
            "query": self.query,
        }


@dataclass
class SearchOptions:
    """Inputs of a single search."""

    query: str = ""
    root_path: str | os.PathLike | None = None  # Defaults to the cwd
    max_files: int = DEFAULT_MAX_FILES
    min_score: int = DEFAULT_MIN_SCORE
    include: list[str] | None = None
    exclude: list[str] | None = None
    include_tests: bool = False
    include_configs: bool = False
    include_docs: bool = False
    search_content: bool = True
    max_file_size: int = DEFAULT_MAX_FILE_SIZE
    line_preview: bool = False
    max_snippets: int = DEFAULT_MAX_SNIPPETS
    workers: int = DEFAULT_WORKERS
