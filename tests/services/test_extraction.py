"""
Tests for structured-response extraction.

These tests verify:
- Fenced block priority over inline JSON
- First-brace/last-brace recovery and the bounded brace scan
- Acceptance of parsed values (recommended_ids must be a list)
- Text collection from the supported Gemini response shapes
"""

import json
from unittest.mock import patch

import pytest

from recommender.services.extraction import (
    collect_text_candidates,
    extract_json_from_text,
    find_structured_recommendation,
    is_structured_recommendation,
)
from recommender.utils.constants import MAX_BRUTE_FORCE_SPAN


# =============================================================================
# UNIT TESTS: extract_json_from_text
# =============================================================================

class TestExtractJsonFromText:
    """Tests for extract_json_from_text function."""

    def test_fenced_json_block_with_prose(self):
        """A ```json block after prose is returned as-is."""
        text = 'Sure! ```json\n{"recommended_ids":["p1"],"reason":"ok","sources":[]}\n```'
        result = extract_json_from_text(text)
        assert result == {"recommended_ids": ["p1"], "reason": "ok", "sources": []}

    def test_fenced_block_takes_priority_over_inline_json(self):
        """Inline JSON before the fence must not win."""
        text = (
            'Draft: {"recommended_ids": ["p9"]}\n'
            '```json\n{"recommended_ids": ["p2"]}\n```'
        )
        assert extract_json_from_text(text) == {"recommended_ids": ["p2"]}

    def test_untagged_fence(self):
        text = '```\n{"recommended_ids": ["p3"]}\n```'
        assert extract_json_from_text(text) == {"recommended_ids": ["p3"]}

    def test_fence_tag_is_case_insensitive(self):
        text = '```JSON\n{"recommended_ids": ["p4"]}\n```'
        assert extract_json_from_text(text) == {"recommended_ids": ["p4"]}

    def test_first_parsable_fence_wins(self):
        """An invalid first fence is skipped in favour of the next one."""
        text = (
            "```json\n{recommended_ids: [p1]}\n```\n"
            '```json\n{"recommended_ids": ["p5"]}\n```'
        )
        assert extract_json_from_text(text) == {"recommended_ids": ["p5"]}

    def test_fenced_non_object_value_is_returned(self):
        """Any JSON value parses; acceptance is decided separately."""
        assert extract_json_from_text("```json\n[1, 2]\n```") == [1, 2]

    def test_inline_json_surrounded_by_prose(self):
        text = 'The answer is {"recommended_ids": ["p1"], "reason": "x"} hope that helps'
        assert extract_json_from_text(text) == {"recommended_ids": ["p1"], "reason": "x"}

    def test_trailing_junk_braces_recovered_by_scan(self):
        """The widest span fails, a narrower brace pair parses."""
        text = 'Result: {"recommended_ids": ["p4"]} (see {note})'
        assert extract_json_from_text(text) == {"recommended_ids": ["p4"]}

    def test_leading_junk_braces_recovered_by_scan(self):
        text = '{not json} then {"recommended_ids": ["p3"]}'
        assert extract_json_from_text(text) == {"recommended_ids": ["p3"]}

    def test_invalid_fence_falls_back_to_inline_json(self):
        text = '```json\n{not json}\n``` then {"recommended_ids": ["p3"]}'
        assert extract_json_from_text(text) == {"recommended_ids": ["p3"]}

    def test_text_without_braces_returns_none(self):
        assert extract_json_from_text("I recommend the PocketPhone A1.") is None

    def test_closing_brace_before_opening_returns_none(self):
        assert extract_json_from_text("} nothing here {") is None

    @pytest.mark.parametrize("value", [None, "", 42, ["```json\n{}\n```"]])
    def test_empty_or_non_string_input_returns_none(self, value):
        assert extract_json_from_text(value) is None

    def test_non_standard_constants_are_rejected(self):
        """NaN is not standard JSON."""
        assert extract_json_from_text('{"recommended_ids": [], "score": NaN}') is None

    def test_unbalanced_text_returns_none(self):
        assert extract_json_from_text('{"recommended_ids": ["p1"') is None

    def test_brace_scan_skipped_for_oversized_span(self):
        """The quadratic scan does not run on spans above the bound."""
        inner = '{"recommended_ids": ["p1"]}'
        short_text = "{" + "x" * 10 + inner
        long_text = "{" + "x" * (MAX_BRUTE_FORCE_SPAN + 10) + inner

        assert extract_json_from_text(short_text) == {"recommended_ids": ["p1"]}
        assert extract_json_from_text(long_text) is None

    def test_brace_scan_stops_at_attempt_cap(self):
        """The only parseable pair is the 9th one tried, past a cap of 5."""
        text = 'x { { {"a": 1} } } y'

        assert extract_json_from_text(text) == {"a": 1}
        with patch("recommender.services.extraction.MAX_BRUTE_FORCE_ATTEMPTS", 5):
            assert extract_json_from_text(text) is None
        with patch("recommender.services.extraction.MAX_BRUTE_FORCE_ATTEMPTS", 9):
            assert extract_json_from_text(text) == {"a": 1}

    def test_is_idempotent(self):
        text = 'noise {"a": 1} more noise ```json\n{"recommended_ids": ["p2"]}\n```'
        assert extract_json_from_text(text) == extract_json_from_text(text)


# =============================================================================
# UNIT TESTS: Acceptance
# =============================================================================

class TestStructuredRecommendationAcceptance:
    """Tests for is_structured_recommendation function."""

    def test_object_with_list_is_accepted(self):
        assert is_structured_recommendation({"recommended_ids": []}) is True

    def test_missing_field_is_rejected(self):
        assert is_structured_recommendation({"reason": "x"}) is False

    def test_non_list_field_is_rejected(self):
        assert is_structured_recommendation({"recommended_ids": "p1"}) is False

    def test_non_object_is_rejected(self):
        assert is_structured_recommendation([{"recommended_ids": []}]) is False
        assert is_structured_recommendation(None) is False


# =============================================================================
# UNIT TESTS: Response shapes
# =============================================================================

class TestCollectTextCandidates:
    """Tests for collect_text_candidates function."""

    def test_native_gemini_parts(self, gemini_response):
        response = gemini_response("hello")
        assert collect_text_candidates(response) == ["hello", json.dumps(response)]

    def test_content_as_list_of_parts(self):
        response = {"candidates": [{"content": [{"text": "a"}, "b", {"inline": 1}]}]}
        assert collect_text_candidates(response)[:-1] == ["a", "b"]

    def test_content_string_display_and_text(self):
        response = {"candidates": [{"content": "c", "display": "d", "text": "t"}]}
        assert collect_text_candidates(response)[:-1] == ["c", "d", "t"]

    def test_multiple_candidates_keep_order(self, gemini_response):
        response = {
            "candidates": (
                gemini_response("first")["candidates"]
                + gemini_response("second")["candidates"]
            )
        }
        assert collect_text_candidates(response)[:2] == ["first", "second"]

    def test_legacy_output_shape(self):
        response = {"output": [{"content": [{"text": "o1"}], "text": "o2"}]}
        assert collect_text_candidates(response)[:-1] == ["o1", "o2"]

    def test_candidates_before_output(self):
        response = {
            "output": [{"text": "from-output"}],
            "candidates": [{"content": "from-candidates"}],
        }
        assert collect_text_candidates(response)[:2] == ["from-candidates", "from-output"]

    def test_unrecognized_shape_yields_serialized_response_only(self):
        response = {"foo": {"bar": 1}}
        assert collect_text_candidates(response) == [json.dumps(response)]

    def test_malformed_entries_are_skipped(self):
        response = {"candidates": ["oops", {"content": 5}], "output": "nope"}
        assert collect_text_candidates(response) == [json.dumps(response)]

    def test_non_dict_response(self):
        assert collect_text_candidates(None) == ["null"]


# =============================================================================
# UNIT TESTS: find_structured_recommendation
# =============================================================================

class TestFindStructuredRecommendation:
    """Tests for find_structured_recommendation function."""

    def test_first_accepted_candidate_wins(self):
        candidates = [
            "no json here",
            '{"other": 1}',
            '{"recommended_ids": ["p2"]}',
            '{"recommended_ids": ["p3"]}',
        ]
        assert find_structured_recommendation(candidates) == {"recommended_ids": ["p2"]}

    def test_serialized_response_is_a_last_resort(self):
        """A provider that returns the payload directly is still understood."""
        response = {"recommended_ids": ["p6"], "reason": "direct"}
        candidates = collect_text_candidates(response)
        assert find_structured_recommendation(candidates) == response

    def test_nothing_accepted_returns_none(self, gemini_response):
        candidates = collect_text_candidates(gemini_response("Just prose, sorry."))
        assert find_structured_recommendation(candidates) is None
