"""Tests for normalizing raw model replies into ReviewResult."""

import json

import pytest

from roastlens_core.response import (
    DEFAULT_POSITIVES,
    DEFAULT_SCORE,
    DEFAULT_SUMMARY,
    DEFAULT_VERDICT,
    FALLBACK_ROAST,
    FALLBACK_VERDICT,
    parse_response,
)

FULL_REPLY = {
    "summary": "A masterpiece of chaos.",
    "issues": [
        {
            "type": "error",
            "title": "SQL injection",
            "description": "User input concatenated into SQL.",
            "lineStart": 3,
            "lineEnd": 4,
            "suggestion": "Use parameters.",
        },
        {"type": "suggestion", "title": "Naming", "description": "x is not a name."},
    ],
    "roasts": ["Roast one", "Roast two"],
    "improvements": ["Use a loop"],
    "positives": ["It compiles"],
    "score": 37,
    "verdict": "Guilty.",
}


class TestWellFormedReplies:
    def test_all_fields_carried_through(self):
        result = parse_response(json.dumps(FULL_REPLY))

        assert result.summary == "A masterpiece of chaos."
        assert result.highlight_quotes == ["Roast one", "Roast two"]
        assert result.improvements == ["Use a loop"]
        assert result.positives == ["It compiles"]
        assert result.score == 37
        assert result.verdict == "Guilty."

        assert len(result.issues) == 2
        first = result.issues[0]
        assert first.kind == "error"
        assert first.title == "SQL injection"
        assert first.line_start == 3
        assert first.line_end == 4
        assert first.suggestion == "Use parameters."

        second = result.issues[1]
        assert second.kind == "suggestion"
        assert second.line_start is None
        assert second.line_end is None
        assert second.suggestion is None

    def test_minimal_reply_round_trips(self):
        raw = '{"summary":"x","issues":[],"roasts":[],"improvements":[],"positives":[],"score":5,"verdict":"y"}'
        data = parse_response(raw).to_dict()
        assert data["summary"] == "x"
        assert data["issues"] == []
        assert data["roasts"] == []
        assert data["improvements"] == []
        assert data["positives"] == []
        assert data["score"] == 5
        assert data["verdict"] == "y"

    def test_provenance_left_empty(self):
        result = parse_response(json.dumps(FULL_REPLY))
        assert result.provider_id == ""
        assert result.model_id == ""

    def test_fenced_json_with_trailing_prose(self):
        raw = "Here you go:\n```json\n" + json.dumps(FULL_REPLY) + "\n```\nHope that stings."
        result = parse_response(raw)
        assert result.summary == "A masterpiece of chaos."
        assert result.score == 37

    def test_bare_fence_without_language(self):
        raw = "```\n" + json.dumps({"summary": "fenced", "score": 10}) + "\n```"
        result = parse_response(raw)
        assert result.summary == "fenced"
        assert result.score == 10

    def test_object_embedded_in_prose(self):
        raw = 'Sure! {"summary": "inline", "score": 55} Let me know if you need more.'
        result = parse_response(raw)
        assert result.summary == "inline"
        assert result.score == 55


class TestDefaults:
    def test_empty_object_gets_every_default(self):
        result = parse_response("{}")
        assert result.summary == DEFAULT_SUMMARY
        assert result.issues == []
        assert result.highlight_quotes == []
        assert result.improvements == []
        assert result.positives == list(DEFAULT_POSITIVES)
        assert result.score == DEFAULT_SCORE
        assert result.verdict == DEFAULT_VERDICT

    def test_non_numeric_score_becomes_default(self):
        assert parse_response('{"score": "ninety"}').score == 42

    def test_boolean_score_becomes_default(self):
        assert parse_response('{"score": true}').score == 42

    def test_empty_strings_become_defaults(self):
        result = parse_response('{"summary": "", "verdict": ""}')
        assert result.summary == DEFAULT_SUMMARY
        assert result.verdict == DEFAULT_VERDICT

    def test_wrong_list_types_become_defaults(self):
        result = parse_response('{"issues": "none", "roasts": 3, "improvements": {}, "positives": "yes"}')
        assert result.issues == []
        assert result.highlight_quotes == []
        assert result.improvements == []
        assert result.positives == list(DEFAULT_POSITIVES)

    def test_empty_positives_list_is_kept(self):
        assert parse_response('{"positives": []}').positives == []

    def test_non_string_list_items_dropped(self):
        result = parse_response('{"roasts": ["ok", 1, null, "fine"]}')
        assert result.highlight_quotes == ["ok", "fine"]


class TestScore:
    @pytest.mark.parametrize(
        "raw_score, expected",
        [(150, 100), (-5, 0), (0, 0), (100, 100), (72.6, 73), (49.4, 49)],
    )
    def test_score_rounded_and_clamped(self, raw_score, expected):
        assert parse_response(json.dumps({"score": raw_score})).score == expected

    def test_score_always_in_range(self):
        for value in (-1e9, -1, 0, 1, 42, 99.9, 101, 1e9):
            assert 0 <= parse_response(json.dumps({"score": value})).score <= 100


class TestIssues:
    def test_unknown_kind_becomes_info(self):
        result = parse_response('{"issues": [{"type": "catastrophe", "title": "t", "description": "d"}]}')
        assert result.issues[0].kind == "info"

    def test_missing_kind_becomes_info(self):
        result = parse_response('{"issues": [{"title": "t"}]}')
        assert result.issues[0].kind == "info"
        assert result.issues[0].description == ""

    def test_non_object_issues_dropped(self):
        result = parse_response('{"issues": ["bad", 3, {"type": "warning", "title": "kept"}]}')
        assert len(result.issues) == 1
        assert result.issues[0].title == "kept"

    def test_non_integer_lines_become_none(self):
        result = parse_response('{"issues": [{"type": "warning", "lineStart": "3", "lineEnd": 4.5}]}')
        assert result.issues[0].line_start is None
        assert result.issues[0].line_end is None

    def test_every_issue_kind_is_known(self):
        kinds = ["error", "warning", "suggestion", "info", "other", None, 7]
        raw = json.dumps({"issues": [{"type": k} for k in kinds]})
        assert {i.kind for i in parse_response(raw).issues} <= {"error", "warning", "suggestion", "info"}


class TestFallback:
    @pytest.mark.parametrize(
        "raw",
        ["", "just prose, no json here", '{"summary": "cut off', "[1, 2, 3]", "42", "null", None],
    )
    def test_never_raises(self, raw):
        result = parse_response(raw)
        assert 0 <= result.score <= 100

    def test_prose_reply_kept_as_summary(self):
        result = parse_response("Your code is bad and you should feel bad.")
        assert result.summary == "Your code is bad and you should feel bad."
        assert result.highlight_quotes == [FALLBACK_ROAST]
        assert result.verdict == FALLBACK_VERDICT
        assert result.score == DEFAULT_SCORE
        assert result.issues == []
        assert result.positives == []

    def test_fallback_summary_truncated(self):
        result = parse_response("x" * 2_000)
        assert len(result.summary) == 500

    def test_partial_json_falls_back(self):
        result = parse_response('{"summary": "incomplete", "score": ')
        assert result.verdict == FALLBACK_VERDICT

    def test_top_level_array_falls_back(self):
        result = parse_response('["not", "an", "object"]')
        assert result.verdict == FALLBACK_VERDICT

    def test_fallback_logs_warning(self, caplog):
        with caplog.at_level("WARNING", logger="roastlens_core.response"):
            parse_response("nope")
        assert "Could not parse model response" in caplog.text
