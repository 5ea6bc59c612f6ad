"""Signal scorers.

Each scorer looks at one category of evidence and returns the score it
contributes together with the reasons behind it. Scorers are independent of
each other and never return negative scores; the aggregator in
``opencontext.search.engine`` adds them up.
"""

import posixpath
import re
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Protocol

from opencontext.search.models import (
    DEFAULT_MAX_FILE_SIZE,
    DEFAULT_MAX_SNIPPETS,
    FileMetadata,
    LineSnippet,
    MatchReason,
    ParsedQuery,
)
from opencontext.search.snippets import extract_line_snippets
from opencontext.search.tables import (
    DEFAULT_WEIGHTS,
    DOC_BONUS,
    FILE_TYPE_BONUS,
    ScoringWeights,
)

# Occurrences at which the content signal saturates
CONTENT_SATURATION = 5


@dataclass
class ScoringContext:
    """Search-wide settings shared by every scorer."""

    weights: ScoringWeights = DEFAULT_WEIGHTS
    search_content: bool = True
    max_file_size: int = DEFAULT_MAX_FILE_SIZE
    line_preview: bool = False
    max_snippets: int = DEFAULT_MAX_SNIPPETS


@dataclass
class ScoringTarget:
    """The file being scored."""

    path: Path  # Absolute
    relative_path: str  # Posix, relative to the search root
    metadata: FileMetadata
    content: str = ""


@dataclass
class ScoreResult:
    """Score and reasons produced by one scorer."""

    score: float = 0.0
    reasons: list[MatchReason] = field(default_factory=list)

    def add(self, reason: MatchReason) -> None:
        self.score += reason.contribution
        self.reasons.append(reason)


class Scorer(Protocol):
    """Given a file and a parsed query, return score and reasons."""

    def score(
        self, target: ScoringTarget, query: ParsedQuery, context: ScoringContext
    ) -> ScoreResult: ...


class FilenameScorer:
    """Terms and phrases found in the file's basename."""

    def score(
        self, target: ScoringTarget, query: ParsedQuery, context: ScoringContext
    ) -> ScoreResult:
        result = ScoreResult()
        weight = context.weights.filename
        path = PurePosixPath(target.relative_path)
        filename = path.name.lower()
        stem = path.stem.lower()

        for term in query.terms:
            if filename == term:
                result.add(MatchReason("filename", f'Exact filename match: "{term}"', weight))
            elif stem == term:
                result.add(
                    MatchReason(
                        "filename", f'Exact name match (no extension): "{term}"', weight * 0.9
                    )
                )
            elif term in filename:
                result.add(
                    MatchReason("filename", f'Partial filename match: "{term}"', weight * 0.6)
                )

        for phrase in query.exact_terms:
            if phrase in filename:
                result.add(
                    MatchReason("filename", f'Exact phrase match: "{phrase}"', weight * 1.2)
                )

        return result


class FilepathScorer:
    """Terms found in the directories leading to the file."""

    def score(
        self, target: ScoringTarget, query: ParsedQuery, context: ScoringContext
    ) -> ScoreResult:
        result = ScoreResult()
        weight = context.weights.filepath
        dir_path = posixpath.dirname(target.relative_path.lower())
        segments = dir_path.split("/")

        for term in query.terms:
            if term in dir_path:
                result.add(
                    MatchReason("filepath", f'Directory path match: "{term}"', weight * 0.5)
                )
            if term in segments:
                result.add(
                    MatchReason("filepath", f'Exact directory match: "{term}"', weight * 0.8)
                )

        return result


class ContentScorer:
    """Term frequency, exact phrases and declaration heuristics in the file body."""

    def _file_snippets(
        self, target: ScoringTarget, query: ParsedQuery, context: ScoringContext
    ) -> list[LineSnippet]:
        metadata = target.metadata
        if not context.line_preview or metadata.line_index is None or metadata.content is None:
            return []
        return extract_line_snippets(
            metadata.content,
            metadata.line_index,
            query,
            max_snippets=context.max_snippets,
        )

    def score(
        self, target: ScoringTarget, query: ParsedQuery, context: ScoringContext
    ) -> ScoreResult:
        result = ScoreResult()
        if not context.search_content or target.metadata.size >= context.max_file_size:
            return result

        weights = context.weights
        content = target.content
        lower_content = content.lower()

        # Extracted once per file so the cap holds across reasons
        file_snippets = self._file_snippets(target, query, context)

        def snippets_for(needle: str) -> list[LineSnippet]:
            return [s for s in file_snippets if needle in s.content.lower()]

        for term in query.terms:
            occurrences = lower_content.count(term)
            if occurrences > 0:
                contribution = min(
                    weights.content, weights.content * occurrences / CONTENT_SATURATION
                )
                result.add(
                    MatchReason(
                        "content",
                        f'Content contains "{term}" ({occurrences} occurrences)',
                        contribution,
                        snippets_for(term),
                    )
                )

        for phrase in query.exact_terms:
            if phrase in lower_content:
                result.add(
                    MatchReason(
                        "content",
                        f'Exact phrase in content: "{phrase}"',
                        weights.content * 1.5,
                        snippets_for(phrase),
                    )
                )

        for term in query.terms:
            escaped = re.escape(term)
            if re.search(rf"(?:function|def|fn|func)\s+{escaped}\s*\(", content, re.IGNORECASE):
                result.add(MatchReason("function", f'Function named "{term}"', weights.function))
            if re.search(rf"(?:class|interface|struct|enum)\s+{escaped}\b", content, re.IGNORECASE):
                result.add(MatchReason("class", f'Class/Type named "{term}"', weights.class_))
            if re.search(rf"(?://|#|\*|/\*)[^\n]*{escaped}", content, re.IGNORECASE):
                result.add(
                    MatchReason(
                        "comment", f'Mentioned in comments: "{term}"', weights.comment * 0.5
                    )
                )

        return result


class MetadataScorer:
    """File type hints, query intents and exported names."""

    def score(
        self, target: ScoringTarget, query: ParsedQuery, context: ScoringContext
    ) -> ScoreResult:
        result = ScoreResult()
        weights = context.weights
        metadata = target.metadata

        extension = metadata.extension.lower()
        if extension and any(extension == ext.lower() for ext in query.file_types):
            result.add(
                MatchReason("content", f"Matching file type: {metadata.extension}", FILE_TYPE_BONUS)
            )

        if metadata.is_test and query.want_tests:
            result.add(MatchReason("test", "Test file (matches query intent)", weights.test))

        if metadata.is_config and query.want_configs:
            result.add(
                MatchReason("config", "Configuration file (matches query intent)", weights.config)
            )

        if metadata.is_doc and query.want_docs:
            result.add(
                MatchReason("content", "Documentation file (matches query intent)", DOC_BONUS)
            )

        for term in query.terms:
            matching = [name for name in metadata.exports if term in name.lower()]
            if matching:
                result.add(
                    MatchReason("export", f"Exports: {', '.join(matching[:2])}", weights.export)
                )
                break

        return result


def default_scorers() -> list[Scorer]:
    return [FilenameScorer(), FilepathScorer(), MetadataScorer(), ContentScorer()]
