"""Lookup tables driving classification, traversal and scoring.

Every table is bundled into a ``SearchTables`` value so callers (and tests)
can inject their own without touching module globals.
"""

from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any

import yaml


@dataclass(frozen=True)
class ScoringWeights:
    """Base contribution of each signal category."""

    filename: float = 25
    filepath: float = 20
    content: float = 15
    export: float = 20
    import_: float = 10
    function: float = 15
    class_: float = 15
    interface: float = 12
    comment: float = 5
    config: float = 18
    test: float = 12
    related: float = 8

    def to_dict(self) -> dict[str, float]:
        return {f.name.rstrip("_"): getattr(self, f.name) for f in fields(self)}


DEFAULT_WEIGHTS = ScoringWeights()

# Bonus for an extension matching a file-type hint in the query
FILE_TYPE_BONUS = 10
# Bonus for a documentation file when the query asks for docs
DOC_BONUS = 8

LANGUAGE_EXTENSIONS: dict[str, list[str]] = {
    "typescript": [".ts", ".tsx", ".mts", ".cts"],
    "javascript": [".js", ".jsx", ".mjs", ".cjs"],
    "python": [".py", ".pyi", ".pyw"],
    "rust": [".rs"],
    "go": [".go"],
    "java": [".java"],
    "csharp": [".cs"],
    "ruby": [".rb"],
    "php": [".php"],
    "swift": [".swift"],
    "kotlin": [".kt", ".kts"],
    "c": [".c", ".h"],
    "cpp": [".cpp", ".cc", ".cxx", ".hpp", ".h"],
    "shell": [".sh", ".bash", ".zsh", ".fish"],
    "markdown": [".md", ".mdx"],
    "json": [".json"],
    "yaml": [".yaml", ".yml"],
    "html": [".html", ".htm"],
    "css": [".css", ".scss", ".sass", ".less"],
    "sql": [".sql"],
    "docker": [".dockerfile", "Dockerfile"],
    "config": [".toml", ".ini", ".conf", ".cfg"],
}

DEFAULT_EXCLUDE_PATTERNS = [
    "**/node_modules/**",
    "**/.git/**",
    "**/dist/**",
    "**/build/**",
    "**/.next/**",
    "**/.cache/**",
    "**/coverage/**",
    "**/*.min.js",
    "**/*.min.css",
    "**/package-lock.json",
    "**/yarn.lock",
    "**/pnpm-lock.yaml",
    "**/*.lock",
]

TEST_PATTERNS = [
    "*.test.*",
    "*.spec.*",
    "*_test.*",
    "*_spec.*",
    "test_*",
    "tests/**",
    "__tests__/**",
    "spec/**",
    "e2e/**",
    "integration/**",
]

CONFIG_PATTERNS = [
    "*.config.*",
    ".config/**",
    "config/**",
    "configs/**",
    ".*rc*",
    ".*rc",
]

DOC_PATTERNS = [
    "*.md",
    "*.mdx",
    "README*",
    "CHANGELOG*",
    "CONTRIBUTING*",
    "LICENSE*",
    "docs/**",
    "doc/**",
    "documentation/**",
]

# Query words that carry no search meaning of their own
TYPE_INDICATORS = frozenset({"file", "files", "type", "extension", "ext"})

TEST_INDICATORS = ("test", "tests", "spec", "specs", "testing")
CONFIG_INDICATORS = ("config", "configuration", "settings", "setting")
DOC_INDICATORS = ("doc", "docs", "documentation", "readme")


@dataclass(frozen=True)
class SearchTables:
    """Injectable bundle of every lookup table used by the engine."""

    weights: ScoringWeights = DEFAULT_WEIGHTS
    languages: dict[str, list[str]] = field(
        default_factory=lambda: dict(LANGUAGE_EXTENSIONS)
    )
    exclude_patterns: list[str] = field(
        default_factory=lambda: list(DEFAULT_EXCLUDE_PATTERNS)
    )
    test_patterns: list[str] = field(default_factory=lambda: list(TEST_PATTERNS))
    config_patterns: list[str] = field(default_factory=lambda: list(CONFIG_PATTERNS))
    doc_patterns: list[str] = field(default_factory=lambda: list(DOC_PATTERNS))


DEFAULT_TABLES = SearchTables()

# Keys accepted in a tuning file
_LIST_KEYS = {
    "exclude": "exclude_patterns",
    "test_patterns": "test_patterns",
    "config_patterns": "config_patterns",
    "doc_patterns": "doc_patterns",
}


def _string_list(value: Any, key: str) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValueError(f"'{key}' must be a list of strings")
    return list(value)


def tables_from_mapping(raw: dict, base: SearchTables = DEFAULT_TABLES) -> SearchTables:
    """Build tables from a parsed tuning mapping layered over ``base``.

    ``weights`` and ``languages`` are merged key by key, ``exclude`` extends the
    default exclusions, and the ``*_patterns`` keys replace their lists.

    Raises:
        ValueError: On unknown keys or values of the wrong shape.
    """
    unknown = set(raw) - {"weights", "languages", *_LIST_KEYS}
    if unknown:
        raise ValueError(f"Unknown tuning keys: {', '.join(sorted(unknown))}")

    changes: dict[str, Any] = {}

    weights = raw.get("weights")
    if weights is not None:
        if not isinstance(weights, dict):
            raise ValueError("'weights' must be a mapping")
        valid = {f.name.rstrip("_"): f.name for f in fields(ScoringWeights)}
        overrides: dict[str, float] = {}
        for name, value in weights.items():
            if name not in valid:
                raise ValueError(f"Unknown weight '{name}'")
            if isinstance(value, bool) or not isinstance(value, int | float) or value < 0:
                raise ValueError(f"Weight '{name}' must be a non-negative number")
            overrides[valid[name]] = float(value)
        changes["weights"] = replace(base.weights, **overrides)

    languages = raw.get("languages")
    if languages is not None:
        if not isinstance(languages, dict):
            raise ValueError("'languages' must be a mapping")
        merged = dict(base.languages)
        for name, extensions in languages.items():
            merged[str(name).lower()] = _string_list(extensions, f"languages.{name}")
        changes["languages"] = merged

    for key, attr in _LIST_KEYS.items():
        if key not in raw:
            continue
        values = _string_list(raw[key], key)
        if key == "exclude":
            values = [*base.exclude_patterns, *values]
        changes[attr] = values

    return replace(base, **changes)


def load_tables(path: Path) -> SearchTables:
    """Load a YAML tuning file.

    An empty file yields the default tables.

    Raises:
        ValueError: If the file cannot be read or is not a valid tuning mapping.
    """
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ValueError(f"Cannot read tuning file '{path}': {e}") from e
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in tuning file '{path}': {e}") from e

    if raw is None:
        return DEFAULT_TABLES
    if not isinstance(raw, dict):
        raise ValueError(f"Tuning file '{path}' must contain a mapping")
    return tables_from_mapping(raw)
