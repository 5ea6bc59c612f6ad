"""File walker for discovering candidate files under a search root."""

import logging
import os
from pathlib import Path

from opencontext.search.globs import glob_match_any
from opencontext.search.tables import DEFAULT_TABLES, SearchTables

logger = logging.getLogger(__name__)

DEFAULT_INCLUDE_PATTERNS = ["**/*"]

# Stand-in file name used to test whether a whole directory is excluded
_PROBE_NAME = "\x00probe"


def build_exclude_patterns(
    exclude: list[str] | None = None,
    include_tests: bool = False,
    include_configs: bool = False,
    include_docs: bool = False,
    tables: SearchTables = DEFAULT_TABLES,
) -> list[str]:
    """
    Compute the exclusion list for a search.

    Defaults come first, then caller patterns, then the test/config/doc
    patterns for every category that is not included.
    """
    patterns = [*tables.exclude_patterns, *(exclude or [])]
    if not include_tests:
        patterns.extend(tables.test_patterns)
    if not include_configs:
        patterns.extend(tables.config_patterns)
    if not include_docs:
        patterns.extend(tables.doc_patterns)
    return patterns


def walk_files(
    root: Path,
    include: list[str] | None = None,
    exclude: list[str] | None = None,
) -> list[Path]:
    """
    List the files under root that match include and no exclude pattern.

    Patterns are matched against the posix path relative to root (see
    ``glob_match``). Directories whose every file would be excluded are not
    descended into. Symlinked directories are not followed.

    Args:
        root: Directory to search
        include: Glob patterns a file must match (default: every file)
        exclude: Glob patterns that drop a file

    Returns:
        Absolute paths of regular files, sorted by relative path

    Raises:
        FileNotFoundError: If root does not exist
        NotADirectoryError: If root is not a directory
    """
    root = Path(root).resolve()
    if not root.exists():
        raise FileNotFoundError(f"Search root does not exist: {root}")
    if not root.is_dir():
        raise NotADirectoryError(f"Search root is not a directory: {root}")

    include = include or DEFAULT_INCLUDE_PATTERNS
    exclude = exclude or []

    def on_error(error: OSError) -> None:
        # The root itself must be listable; nested failures only lose that subtree
        if Path(error.filename or "") == root:
            raise error
        logger.debug("Skipping unreadable directory %s: %s", error.filename, error)

    files: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root, onerror=on_error):
        current = Path(dirpath)
        rel_dir = current.relative_to(root).as_posix()
        prefix = "" if rel_dir == "." else f"{rel_dir}/"

        dirnames[:] = sorted(
            name
            for name in dirnames
            if not glob_match_any(f"{prefix}{name}/{_PROBE_NAME}", exclude)
        )

        for name in sorted(filenames):
            rel_path = f"{prefix}{name}"
            if glob_match_any(rel_path, exclude):
                continue
            if not glob_match_any(rel_path, include):
                continue
            path = current / name
            if not path.is_file():
                continue
            files.append(path)

    files.sort(key=lambda p: p.relative_to(root).as_posix())
    logger.debug("Walked %s: %d candidate files", root, len(files))
    return files
