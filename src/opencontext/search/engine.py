"""Search orchestration: walk, extract, score, filter, rank."""

import logging
import math
import os
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from opencontext.search.metadata import extract_metadata, read_content
from opencontext.search.models import (
    MAX_REASONS,
    FileMatch,
    FileMetadata,
    MatchReason,
    ParsedQuery,
    SearchOptions,
    SearchResult,
)
from opencontext.search.query import parse_query
from opencontext.search.scorers import (
    Scorer,
    ScoringContext,
    ScoringTarget,
    default_scorers,
)
from opencontext.search.tables import DEFAULT_TABLES, SearchTables
from opencontext.search.walker import build_exclude_patterns, walk_files

logger = logging.getLogger(__name__)

MAX_SCORE = 100

Walker = Callable[[Path, list[str] | None, list[str] | None], list[Path]]


@dataclass
class FileOutcome:
    """Result of processing one candidate: a match, or the reason it was skipped."""

    path: Path
    match: FileMatch | None = None
    skipped: str | None = None

    @property
    def ok(self) -> bool:
        return self.match is not None


def score_file(
    file_path: Path,
    relative_path: str,
    query: ParsedQuery,
    metadata: FileMetadata,
    context: ScoringContext,
    content: str = "",
    scorers: list[Scorer] | None = None,
) -> FileMatch:
    """
    Combine every scorer's output into one FileMatch.

    The summed score is clamped to [0, 100] and rounded half up; component
    scores are not rescaled. Reasons are merged, sorted by contribution
    (descending, stable) and cut to MAX_REASONS.
    """
    target = ScoringTarget(
        path=file_path,
        relative_path=relative_path,
        metadata=metadata,
        content=content,
    )

    total = 0.0
    reasons: list[MatchReason] = []
    for scorer in scorers if scorers is not None else default_scorers():
        result = scorer.score(target, query, context)
        total += result.score
        reasons.extend(result.reasons)

    reasons.sort(key=lambda r: r.contribution, reverse=True)
    clamped = min(MAX_SCORE, max(0.0, total))

    return FileMatch(
        path=str(file_path),
        relative_path=relative_path,
        score=int(math.floor(clamped + 0.5)),
        reasons=reasons[:MAX_REASONS],
        metadata=metadata,
    )


def process_file(
    file_path: Path,
    root: Path,
    query: ParsedQuery,
    options: SearchOptions,
    context: ScoringContext,
    tables: SearchTables = DEFAULT_TABLES,
    scorers: list[Scorer] | None = None,
) -> FileOutcome:
    """Run the per-file pipeline, turning any failure into a skip outcome."""
    try:
        size = file_path.stat().st_size
        if size > options.max_file_size:
            return FileOutcome(file_path, skipped=f"larger than {options.max_file_size} bytes")

        content = read_content(file_path)
        metadata = extract_metadata(
            file_path,
            index_lines=options.line_preview,
            tables=tables,
            root=root,
            content=content,
        )
        relative_path = file_path.relative_to(root).as_posix()
        match = score_file(
            file_path, relative_path, query, metadata, context, content, scorers
        )
        return FileOutcome(file_path, match=match)
    except Exception as e:
        # One bad file never aborts the scan
        return FileOutcome(file_path, skipped=f"{type(e).__name__}: {e}")


def _run(tasks: list[Path], worker: Callable[[Path], FileOutcome], workers: int) -> list[FileOutcome]:
    if workers <= 1 or len(tasks) <= 1:
        return [worker(path) for path in tasks]
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="opencontext-scan") as pool:
        # map() yields in submission order, keeping the ranking deterministic
        return list(pool.map(worker, tasks))


def search_files(
    options: SearchOptions,
    tables: SearchTables = DEFAULT_TABLES,
    scorers: list[Scorer] | None = None,
    walker: Walker = walk_files,
) -> SearchResult:
    """
    Rank files under the root by relevance to the query.

    Every call walks and scores from scratch. Per-file problems (stat
    failures, oversize files, unexpected errors) skip that file; only a
    failure to enumerate candidates propagates.

    Args:
        options: Search inputs
        tables: Lookup tables and weights
        scorers: Signal scorers (default: filename, filepath, metadata, content)
        walker: Candidate enumerator taking (root, include, exclude)

    Returns:
        SearchResult with at most options.max_files matches, best first

    Raises:
        FileNotFoundError: If the root does not exist
        NotADirectoryError: If the root is not a directory
    """
    start = time.perf_counter()
    root = Path(options.root_path or os.getcwd()).resolve()
    query = parse_query(options.query, tables)

    exclude = build_exclude_patterns(
        options.exclude,
        include_tests=options.include_tests,
        include_configs=options.include_configs,
        include_docs=options.include_docs,
        tables=tables,
    )
    candidates = walker(root, options.include, exclude)

    context = ScoringContext(
        weights=tables.weights,
        search_content=options.search_content,
        max_file_size=options.max_file_size,
        line_preview=options.line_preview,
        max_snippets=options.max_snippets,
    )
    active_scorers = scorers if scorers is not None else default_scorers()

    def worker(path: Path) -> FileOutcome:
        return process_file(path, root, query, options, context, tables, active_scorers)

    outcomes = _run(candidates, worker, options.workers)

    matches: list[FileMatch] = []
    skipped = 0
    for outcome in outcomes:
        if not outcome.ok:
            skipped += 1
            logger.debug("Skipped %s: %s", outcome.path, outcome.skipped)
        elif outcome.match.score >= options.min_score:
            matches.append(outcome.match)

    # Stable sort: equal scores keep walk order
    matches.sort(key=lambda m: m.score, reverse=True)
    files = matches[: max(0, options.max_files)]

    time_ms = int((time.perf_counter() - start) * 1000)
    logger.info(
        "Search %r: %d matches from %d files (%d skipped) in %dms",
        options.query,
        len(files),
        len(candidates),
        skipped,
        time_ms,
    )
    return SearchResult(
        files=files,
        files_scanned=len(candidates),
        time_ms=time_ms,
        query=options.query or "",
    )
