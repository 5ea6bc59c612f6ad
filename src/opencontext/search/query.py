"""Free-text query parsing."""

import re

from opencontext.search.models import ParsedQuery
from opencontext.search.tables import (
    CONFIG_INDICATORS,
    DEFAULT_TABLES,
    DOC_INDICATORS,
    TEST_INDICATORS,
    TYPE_INDICATORS,
    SearchTables,
)

QUOTED_PATTERN = re.compile(r'"([^"]+)"')


def _unique(items: list[str]) -> list[str]:
    """Deduplicate keeping first-seen order."""
    return list(dict.fromkeys(items))


def parse_query(query: str | None, tables: SearchTables = DEFAULT_TABLES) -> ParsedQuery:
    """
    Turn a raw query into structured search intent.

    Quoted spans become exact phrases, tokens starting with ``.`` become
    file-type hints, and language names found anywhere in the query add that
    language's extensions. Never raises: an empty query parses to empty fields.

    Args:
        query: The raw query string
        tables: Lookup tables (language names and extensions)

    Returns:
        ParsedQuery with deduplicated terms, phrases and file types
    """
    query = query or ""
    lower_query = query.lower()

    exact_terms = [m.group(1).lower() for m in QUOTED_PATTERN.finditer(query)]

    words = QUOTED_PATTERN.sub(" ", query).lower().split()

    terms: list[str] = []
    file_types: list[str] = []
    for word in words:
        if word.startswith("."):
            file_types.append(word)
        elif word not in TYPE_INDICATORS:
            terms.append(word)

    # Substring test, so "trusted" also pulls in rust extensions
    for language, extensions in tables.languages.items():
        if language in lower_query:
            file_types.extend(extensions)

    return ParsedQuery(
        original=query,
        terms=_unique(terms),
        exact_terms=_unique(exact_terms),
        file_types=_unique(file_types),
        want_tests=any(word in lower_query for word in TEST_INDICATORS),
        want_configs=any(word in lower_query for word in CONFIG_INDICATORS),
        want_docs=any(word in lower_query for word in DOC_INDICATORS),
    )
