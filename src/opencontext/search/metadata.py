"""Per-file metadata extraction.

Exports and imports are found with a handful of regular expressions over the
raw text. There is no parsing, so declarations inside strings or comments are
picked up too.
"""

import logging
import re
from datetime import datetime
from pathlib import Path

from opencontext.search.classify import (
    detect_language,
    is_config_file,
    is_doc_file,
    is_test_file,
)
from opencontext.search.models import FileMetadata
from opencontext.search.tables import DEFAULT_TABLES, SearchTables

logger = logging.getLogger(__name__)

EXPORT_PATTERNS = [
    re.compile(
        r"export\s+(?:default\s+)?(?:class|interface|type|function|const|let|var)\s+(\w+)"
    ),
    re.compile(r"export\s*\{\s*([^}]+)\s*\}"),
    re.compile(r"module\.exports\s*=\s*\{?\s*(\w+)"),
]

IMPORT_PATTERNS = [
    re.compile(r"""import\s+.*?\s+from\s+['"]([^'"]+)['"]"""),
    re.compile(r"""import\s*\(\s*['"]([^'"]+)['"]\s*\)"""),
    re.compile(r"""require\s*\(\s*['"]([^'"]+)['"]\s*\)"""),
]

ALIAS_PATTERN = re.compile(r"\s+as\s+")
WORD_SPLIT_PATTERN = re.compile(r"\W+")

# Words this short are too common to be worth indexing
MIN_INDEXED_WORD_LENGTH = 3


def read_content(file_path: Path) -> str:
    """Read a file as text, returning "" if it cannot be read."""
    try:
        return file_path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.debug("Cannot read %s, treating as empty: %s", file_path, e)
        return ""


def extract_exports(content: str) -> list[str]:
    """Collect exported names, skipping private (underscore) ones."""
    exports: list[str] = []
    for pattern in EXPORT_PATTERNS:
        for match in pattern.finditer(content):
            for name in match.group(1).split(","):
                name = ALIAS_PATTERN.split(name.strip())[0].strip()
                if name and not name.startswith("_"):
                    exports.append(name)
    return list(dict.fromkeys(exports))


def extract_imports(content: str) -> list[str]:
    """Collect imported module identifiers."""
    imports: list[str] = []
    for pattern in IMPORT_PATTERNS:
        imports.extend(match.group(1) for match in pattern.finditer(content))
    return list(dict.fromkeys(imports))


def build_line_index(content: str) -> dict[str, list[int]]:
    """
    Map each lowercase word to the 1-based line numbers containing it.

    Words are runs of letters, digits and underscores at least
    MIN_INDEXED_WORD_LENGTH long. Line numbers are ascending and unique.
    """
    index: dict[str, list[int]] = {}
    for line_number, line in enumerate(content.split("\n"), start=1):
        for word in WORD_SPLIT_PATTERN.split(line.lower()):
            if len(word) < MIN_INDEXED_WORD_LENGTH:
                continue
            lines = index.setdefault(word, [])
            if not lines or lines[-1] != line_number:
                lines.append(line_number)
    return index


def extract_metadata(
    file_path: Path,
    index_lines: bool = False,
    tables: SearchTables = DEFAULT_TABLES,
    root: Path | None = None,
    content: str | None = None,
) -> FileMetadata:
    """
    Build the metadata snapshot for one file.

    Args:
        file_path: Path to the file
        index_lines: Also build the line index and keep the raw content
        tables: Lookup tables for classification
        root: Search root; classification uses the path relative to it
        content: Already-read content, to avoid reading the file twice

    Returns:
        FileMetadata for the file

    Raises:
        OSError: If the file cannot be stat'ed
    """
    file_path = Path(file_path)
    stat = file_path.stat()
    if content is None:
        content = read_content(file_path)

    classify_path = file_path.as_posix()
    if root is not None:
        try:
            classify_path = file_path.relative_to(root).as_posix()
        except ValueError:
            pass  # Outside the root, fall back to the full path

    return FileMetadata(
        size=stat.st_size,
        last_modified=datetime.fromtimestamp(stat.st_mtime),
        extension=file_path.suffix,
        line_count=len(content.split("\n")),
        is_test=is_test_file(classify_path, tables),
        is_config=is_config_file(classify_path, tables),
        is_doc=is_doc_file(classify_path, tables),
        language=detect_language(file_path.name, tables),
        exports=extract_exports(content),
        imports=extract_imports(content),
        line_index=build_line_index(content) if index_lines else None,
        content=content if index_lines else None,
    )
