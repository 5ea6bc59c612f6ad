"""Tests for search data models."""

from datetime import datetime

from opencontext.search.models import (
    FileMatch,
    FileMetadata,
    LineSnippet,
    MatchReason,
    ParsedQuery,
)


def test_match_reason_to_dict_rounds_contribution():
    data = MatchReason("content", "Content contains", 22.4999).to_dict()
    assert data == {"type": "content", "description": "Content contains", "contribution": 22.5}


def test_match_reason_to_dict_includes_snippets():
    reason = MatchReason("content", "x", 3, [LineSnippet(2, "auth", context_after="next")])
    assert reason.to_dict()["snippets"] == [
        {"line_number": 2, "content": "auth", "context_after": "next"}
    ]


def test_file_match_snippets_are_unique_by_line():
    shared = LineSnippet(4, "auth middleware")
    match = FileMatch(
        path="/repo/a.ts",
        relative_path="a.ts",
        score=50,
        reasons=[
            MatchReason("content", "auth", 9, [shared]),
            MatchReason("content", "middleware", 6, [shared, LineSnippet(9, "middleware()")]),
            MatchReason("filename", "name", 22.5),
        ],
        metadata=FileMetadata(
            size=10, last_modified=datetime(2024, 1, 1), extension=".ts", line_count=10
        ),
    )
    assert [s.line_number for s in match.snippets] == [4, 9]


def test_file_metadata_to_dict_serialises_timestamp():
    metadata = FileMetadata(
        size=10,
        last_modified=datetime(2024, 1, 2, 3, 4, 5),
        extension=".py",
        line_count=1,
        content="secret",
        line_index={"secret": [1]},
    )
    data = metadata.to_dict()
    assert data["last_modified"] == "2024-01-02T03:04:05"
    assert "content" not in data


def test_parsed_query_is_empty():
    assert ParsedQuery().is_empty
    assert not ParsedQuery(file_types=[".ts"]).is_empty
    # Intents alone carry nothing to match on
    assert ParsedQuery(want_tests=True).is_empty
