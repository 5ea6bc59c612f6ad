"""Glob matching shared by the file walker and the path classifiers."""

from fnmatch import fnmatchcase


def _strip_anchor(pattern: str) -> str:
    while pattern.startswith("**/"):
        pattern = pattern[3:]
    return pattern.lstrip("/")


def glob_match(path: str, pattern: str, ignore_case: bool = False) -> bool:
    """
    Match a path against a glob at any segment boundary.

    ``*`` matches any run of characters (including ``/``), so ``**`` behaves the
    same. The pattern is tried against the whole path and every trailing
    sub-path, which makes ``tests/**`` match ``src/tests/a.py`` and ``*.md``
    match ``docs/guide.md``. A leading ``**/`` is therefore redundant.

    Args:
        path: A posix or windows style path, absolute or relative
        pattern: Glob pattern
        ignore_case: Compare case-insensitively

    Returns:
        True if the pattern matches
    """
    path = path.replace("\\", "/").strip("/")
    pattern = _strip_anchor(pattern)
    if ignore_case:
        path = path.lower()
        pattern = pattern.lower()

    parts = path.split("/")
    for i in range(len(parts)):
        if fnmatchcase("/".join(parts[i:]), pattern):
            return True
    return False


def glob_match_any(path: str, patterns: list[str], ignore_case: bool = False) -> bool:
    return any(glob_match(path, pattern, ignore_case) for pattern in patterns)
