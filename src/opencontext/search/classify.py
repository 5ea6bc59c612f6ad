"""Path classifiers: test, config and documentation files, and language."""

from pathlib import PurePath

from opencontext.search.globs import glob_match_any
from opencontext.search.tables import DEFAULT_TABLES, SearchTables

UNKNOWN_LANGUAGE = "unknown"


def is_test_file(file_path: str, tables: SearchTables = DEFAULT_TABLES) -> bool:
    return glob_match_any(str(file_path), tables.test_patterns, ignore_case=True)


def is_config_file(file_path: str, tables: SearchTables = DEFAULT_TABLES) -> bool:
    return glob_match_any(str(file_path), tables.config_patterns, ignore_case=True)


def is_doc_file(file_path: str, tables: SearchTables = DEFAULT_TABLES) -> bool:
    return glob_match_any(str(file_path), tables.doc_patterns, ignore_case=True)


def detect_language(file_path: str, tables: SearchTables = DEFAULT_TABLES) -> str:
    """Return the first language listing the file's extension, or "unknown"."""
    extension = PurePath(str(file_path)).suffix.lower()
    if not extension:
        return UNKNOWN_LANGUAGE
    for language, extensions in tables.languages.items():
        if extension in (e.lower() for e in extensions):
            return language
    return UNKNOWN_LANGUAGE
