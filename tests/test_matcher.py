"""
Tests for cross-source theme matching.

Covers keyword extraction, the keyword heuristic, the model path with a
mocked client, and the fallback from the model path to the heuristic.
"""

import json

import pytest

from tests.sample_data import SCENARIO_TITLE, make_item
from trendtracker.analysis.matcher import (
    MAX_HEURISTIC_THEMES,
    build_theme_prompt,
    extract_keywords,
    match,
    match_external,
    match_heuristic,
    normalize_title,
    ordered_items,
    parse_theme_response,
)
from trendtracker.models.trend_item import SourceType, Strategy


# =============================================================================
# Keyword Extraction
# =============================================================================

class TestExtractKeywords:

    def test_important_terms(self):
        assert extract_keywords(SCENARIO_TITLE) == ["modi", "breaking", "announces"]

    def test_important_phrases_follow_terms(self):
        keywords = extract_keywords("PM Modi at Supreme Court")
        assert keywords[-2:] == ["supreme court", "pm modi"]
        assert "modi" in keywords and "court" in keywords

    def test_fallback_to_long_words(self):
        assert extract_keywords("Monsoon arrives early this year") == ["monsoon", "arrives", "early"]

    def test_empty_title(self):
        assert extract_keywords("") == []
        assert extract_keywords("!!!") == []

    def test_normalize_title(self):
        assert normalize_title("BREAKING:  Modi's  day!") == "breaking modi s day"


class TestOrderedItems:

    def test_canonical_source_order(self):
        groups = {
            SourceType.FORUM_POST: [make_item("post", SourceType.FORUM_POST)],
            SourceType.NEWS: [make_item("news", SourceType.NEWS)],
            SourceType.VIDEO: [make_item("video", SourceType.VIDEO)],
        }
        assert [item.title for item in ordered_items(groups)] == ["news", "video", "post"]


# =============================================================================
# Heuristic Strategy
# =============================================================================

class TestMatchHeuristic:

    def test_headline_on_news_and_video(self, scenario_items):
        themes = match_heuristic(scenario_items)

        assert len(themes) == 1
        theme = themes[0]
        assert theme.label == "breaking modi announces"
        assert theme.source_types_present == frozenset({SourceType.NEWS, SourceType.VIDEO})
        assert theme.total_score == 30
        assert theme.generated_by is Strategy.HEURISTIC
        assert [item.source_type for item in theme.member_items] == [SourceType.NEWS, SourceType.VIDEO]

    def test_single_source_groups_are_dropped(self):
        groups = {
            SourceType.NEWS: [
                make_item("Modi visits Delhi", score=10),
                make_item("Modi meets farmers", score=10),
            ],
        }
        assert match_heuristic(groups) == []

    def test_at_most_five_by_total_score(self):
        groups = {SourceType.NEWS: [], SourceType.VIDEO: []}
        for i in range(7):
            title = f"zebra{i} giraffe{i} walrus{i}"
            groups[SourceType.NEWS].append(make_item(title, SourceType.NEWS, score=i))
            groups[SourceType.VIDEO].append(make_item(title, SourceType.VIDEO, score=i))

        themes = match_heuristic(groups)

        assert len(themes) == MAX_HEURISTIC_THEMES
        totals = [theme.total_score for theme in themes]
        assert totals == sorted(totals, reverse=True)
        assert themes[0].label == "zebra6 giraffe6 walrus6"

    def test_every_theme_spans_sources(self, mixed_items):
        groups = {}
        for item in mixed_items:
            groups.setdefault(item.source_type, []).append(item)
        groups[SourceType.FORUM_POST].append(make_item("India protest live", SourceType.FORUM_POST, score=3))

        for theme in match_heuristic(groups):
            assert theme.is_cross_source
            assert len({item.source_type for item in theme.member_items}) > 1

    def test_empty_input(self):
        assert match_heuristic({}) == []


# =============================================================================
# External Model Strategy
# =============================================================================

@pytest.fixture
def three_sources():
    return {
        SourceType.NEWS: [make_item(SCENARIO_TITLE, SourceType.NEWS, score=20)],
        SourceType.VIDEO: [make_item("PM Modi policy explained", SourceType.VIDEO, score=10)],
        SourceType.SOCIAL_TREND: [make_item("#ModiPolicy", SourceType.SOCIAL_TREND, score=5)],
    }


MODEL_THEMES = [
    {"theme": "Modi policy", "description": "New policy coverage", "items": [1, 2], "sources": ["News", "YouTube"]},
    {"theme": "Solo", "description": "Only one source", "items": [3], "sources": ["Twitter"]},
    {"theme": "Bogus", "description": "Bad numbers", "items": [99, "x"], "sources": []},
]


class TestMatchExternal:

    def test_prompt_numbers_items_with_source_tags(self, three_sources):
        prompt = build_theme_prompt(ordered_items(three_sources))

        assert f'1. [News] "{SCENARIO_TITLE}"' in prompt
        assert '2. [YouTube] "PM Modi policy explained"' in prompt
        assert '3. [Twitter] "#ModiPolicy"' in prompt

    def test_parses_model_themes(self, three_sources, model_client):
        model_client.reply(json.dumps(MODEL_THEMES))

        themes = match_external(three_sources, model_client)

        assert len(themes) == 1
        theme = themes[0]
        assert theme.label == "Modi policy"
        assert theme.description == "New policy coverage"
        assert theme.total_score == 30
        assert theme.generated_by is Strategy.EXTERNAL_MODEL

    def test_accepts_code_fence(self, three_sources, model_client):
        model_client.reply("```json\n" + json.dumps(MODEL_THEMES) + "\n```")
        assert len(match_external(three_sources, model_client)) == 1

    def test_boolean_item_numbers_are_ignored(self, three_sources, model_client):
        model_client.reply('[{"theme": "Modi policy", "items": [true, 2]}]')

        # only item 2 resolves, which leaves a single-source theme
        assert match_external(three_sources, model_client) == []

    def test_unparseable_reply(self, three_sources, model_client):
        model_client.reply("Here are some themes I found!")
        assert match_external(three_sources, model_client) is None

    def test_sends_at_most_40_items(self, model_client):
        groups = {SourceType.NEWS: [make_item(f"Headline number {i}") for i in range(60)]}
        model_client.reply("[]")

        match_external(groups, model_client)

        prompt = model_client.complete.call_args.args[0]
        assert "40. [News]" in prompt
        assert "41. [News]" not in prompt

    def test_parse_theme_response(self):
        assert parse_theme_response('[{"theme": "x"}]') == [{"theme": "x"}]
        assert parse_theme_response('{"theme": "x"}') is None
        assert parse_theme_response(None) is None


# =============================================================================
# Dispatcher
# =============================================================================

class TestMatch:

    def test_no_client_uses_heuristic(self, scenario_items):
        result = match(scenario_items)

        assert result.via is Strategy.HEURISTIC
        assert result.used_model is False
        assert len(result.value) == 1

    def test_unavailable_client_is_not_called(self, scenario_items, unavailable_client):
        result = match(scenario_items, client=unavailable_client)

        assert result.via is Strategy.HEURISTIC
        unavailable_client.complete.assert_not_called()

    def test_model_result_used(self, three_sources, model_client):
        model_client.reply(json.dumps(MODEL_THEMES))

        result = match(three_sources, client=model_client)

        assert result.via is Strategy.EXTERNAL_MODEL
        assert [theme.label for theme in result.value] == ["Modi policy"]

    @pytest.mark.parametrize("failure", ["raise", "error", "garbage"])
    def test_model_failure_equals_heuristic(self, three_sources, model_client, failure):
        if failure == "raise":
            model_client.complete.side_effect = RuntimeError("connection reset")
        elif failure == "error":
            model_client.complete.return_value.success = False
            model_client.complete.return_value.error = "API error (500)"
        else:
            model_client.reply("not json at all")

        result = match(three_sources, client=model_client)

        assert result.via is Strategy.HEURISTIC
        assert result.value == match_heuristic(three_sources)

    def test_duplicates_within_a_source_are_dropped(self):
        groups = {
            SourceType.NEWS: [make_item("Modi visits Delhi", score=4), make_item("MODI VISITS DELHI", score=4)],
            SourceType.VIDEO: [make_item("Modi visits Delhi", SourceType.VIDEO, score=2)],
        }

        themes = match(groups).value

        assert len(themes) == 1
        assert themes[0].label == "modi"
        assert len(themes[0].member_items) == 2
        assert themes[0].total_score == 6
