"""Line snippet extraction for match previews."""

from opencontext.search.models import LineSnippet, ParsedQuery

# Matched lines this close together are shown as one snippet
CLUSTER_DISTANCE = 3


def find_matching_lines(
    lines: list[str],
    line_index: dict[str, list[int]],
    needles: list[str],
) -> set[int]:
    """Return 1-based numbers of lines containing any needle (lowercase)."""
    matched: set[int] = set()
    for needle in needles:
        matched.update(line_index.get(needle, ()))

    # The index only knows whole words; phrases and substrings need a scan
    for line_number, line in enumerate(lines, start=1):
        if line_number in matched:
            continue
        lower = line.lower()
        if any(needle in lower for needle in needles):
            matched.add(line_number)
    return matched


def cluster_lines(line_numbers: list[int], distance: int = CLUSTER_DISTANCE) -> list[list[int]]:
    """Group ascending line numbers whose gap to the previous member is <= distance."""
    groups: list[list[int]] = []
    for line_number in line_numbers:
        if groups and line_number - groups[-1][-1] <= distance:
            groups[-1].append(line_number)
        else:
            groups.append([line_number])
    return groups


def _line_at(lines: list[str], line_number: int) -> str | None:
    if 1 <= line_number <= len(lines):
        return lines[line_number - 1].strip()
    return None


def extract_line_snippets(
    content: str,
    line_index: dict[str, list[int]],
    query: ParsedQuery,
    max_snippets: int = 3,
    terms: list[str] | None = None,
) -> list[LineSnippet]:
    """
    Pick the most relevant matching lines of a file.

    Matching lines are clustered, the densest clusters win, and each cluster
    is represented by its middle line with one line of context either side.

    Args:
        content: Raw file content
        line_index: Word to line numbers map from build_line_index()
        query: Parsed query supplying terms and exact phrases
        max_snippets: Maximum snippets to return
        terms: Restrict matching to these terms/phrases instead of the whole query

    Returns:
        Up to max_snippets snippets, densest cluster first
    """
    if max_snippets <= 0:
        return []

    needles = terms if terms is not None else [*query.terms, *query.exact_terms]
    needles = [n.lower() for n in needles if n]
    if not needles:
        return []

    lines = content.split("\n")
    matched = find_matching_lines(lines, line_index, needles)
    if not matched:
        return []

    groups = cluster_lines(sorted(matched))
    groups.sort(key=len, reverse=True)

    snippets: list[LineSnippet] = []
    for group in groups[:max_snippets]:
        anchor = group[len(group) // 2]
        snippets.append(
            LineSnippet(
                line_number=anchor,
                content=lines[anchor - 1].strip(),
                context_before=_line_at(lines, anchor - 1),
                context_after=_line_at(lines, anchor + 1),
            )
        )
    return snippets
