"""
Tests for viral ranking.
"""

import pytest

from tests.sample_data import make_item
from trendtracker.analysis.ranker import (
    MAX_RANKED,
    build_rank_prompt,
    parse_rank_response,
    rank,
    rank_external,
    rank_heuristic,
    viral_score,
)
from trendtracker.models.trend_item import SourceType, Strategy


# =============================================================================
# Heuristic Strategy
# =============================================================================

class TestViralScore:

    def test_breaking_news(self):
        # breaking +25, india +20, breaking news +30
        item = make_item("BREAKING: India live updates", SourceType.NEWS)
        assert viral_score(item) == 75

    def test_live_video_with_views(self):
        # >500k views +40, live video +20
        item = make_item("Live match", SourceType.VIDEO, views=600_000)
        assert viral_score(item) == 60

    def test_forum_post_with_upvotes(self):
        # >1000 upvotes +30, "protest" +15
        item = make_item("Protest outside court", SourceType.FORUM_POST, upvotes=1200)
        assert viral_score(item) == 45

    def test_hashtag_trend(self):
        # hashtag +15, "victory" +15
        assert viral_score(make_item("#Victory", SourceType.SOCIAL_TREND)) == 30

    def test_thresholds_are_strict(self):
        assert viral_score(make_item("Clip", SourceType.VIDEO, views=100_000)) == 0
        assert viral_score(make_item("Clip", SourceType.VIDEO, views=100_001)) == 25

    def test_base_score_is_ignored(self):
        low = make_item("Quiet title", score=0)
        high = make_item("Quiet title", score=99)
        assert viral_score(low) == viral_score(high) == 0


class TestRankHeuristic:

    def test_ordered_by_viral_score(self, mixed_items):
        ranked = rank_heuristic(mixed_items)

        assert [r.item.title for r in ranked] == [
            "BREAKING: India live updates",
            "Live match",
            "Protest outside court",
            "#Victory",
            "Gold price today",
        ]
        assert [r.viral_score for r in ranked] == [75, 60, 45, 30, 0]

    def test_ranks_are_contiguous_and_capped(self):
        items = [make_item(f"Story {i}", SourceType.VIDEO, views=i * 50_000) for i in range(20)]

        ranked = rank_heuristic(items)

        assert len(ranked) == MAX_RANKED
        assert [r.viral_rank for r in ranked] == list(range(1, MAX_RANKED + 1))
        assert all(r.ranked_by is Strategy.HEURISTIC for r in ranked)

    def test_ties_keep_input_order(self):
        items = [make_item(f"Quiet {i}") for i in range(4)]
        assert [r.item for r in rank_heuristic(items)] == items

    def test_items_are_not_modified(self, mixed_items):
        before = [item.score for item in mixed_items]
        rank_heuristic(mixed_items)
        assert [item.score for item in mixed_items] == before

    def test_empty(self):
        assert rank_heuristic([]) == []


# =============================================================================
# External Model Strategy
# =============================================================================

class TestParseRankResponse:

    def test_skips_noise_repeats_and_out_of_range(self):
        text = "1. 3\n2. 1\nsome commentary\n3. 3\n4. 99\n5. 2"
        assert parse_rank_response(text, 3) == [2, 0, 1]

    def test_tolerates_leading_whitespace(self):
        assert parse_rank_response("   1.  2\n  2.1", 2) == [1, 0]

    def test_caps_at_fifteen(self):
        text = "\n".join(f"{i}. {i}" for i in range(1, 30))
        assert len(parse_rank_response(text, 40)) == 15

    def test_empty_reply(self):
        assert parse_rank_response("", 5) == []
        assert parse_rank_response(None, 5) == []


class TestRankExternal:

    def test_prompt_includes_engagement(self, mixed_items):
        prompt = build_rank_prompt(mixed_items)

        assert '1. [News] "BREAKING: India live updates"' in prompt
        assert "(Views: 600000)" in prompt
        assert "(Upvotes: 1200)" in prompt

    def test_model_order_with_descending_scores(self, mixed_items, model_client):
        model_client.reply("1. 2\n2. 1\n3. 5")

        ranked = rank_external(mixed_items, model_client)

        assert [r.item.title for r in ranked] == ["Live match", "BREAKING: India live updates", "Protest outside court"]
        assert [r.viral_score for r in ranked] == [100, 95, 90]
        assert [r.viral_rank for r in ranked] == [1, 2, 3]
        assert all(r.ranked_by is Strategy.EXTERNAL_MODEL for r in ranked)

    def test_invalid_numbers_leave_no_rank_gaps(self, mixed_items, model_client):
        model_client.reply("1. 4\n2. 42\n3. 4\n4. 1")

        ranked = rank_external(mixed_items, model_client)

        assert [r.viral_rank for r in ranked] == [1, 2]
        assert [r.viral_score for r in ranked] == [100, 95]

    def test_sends_at_most_50_items(self, model_client):
        items = [make_item(f"Headline number {i}") for i in range(70)]
        model_client.reply("1. 1")

        rank_external(items, model_client)

        prompt = model_client.complete.call_args.args[0]
        assert "50. [News]" in prompt
        assert "51. [News]" not in prompt


# =============================================================================
# Dispatcher
# =============================================================================

class TestRank:

    def test_no_client_uses_heuristic(self, mixed_items):
        result = rank(mixed_items)
        assert result.via is Strategy.HEURISTIC
        assert result.value == rank_heuristic(mixed_items)

    def test_unavailable_client_is_not_called(self, mixed_items, unavailable_client):
        result = rank(mixed_items, client=unavailable_client)

        assert result.via is Strategy.HEURISTIC
        unavailable_client.complete.assert_not_called()

    def test_model_result_used(self, mixed_items, model_client):
        model_client.reply("1. 3")

        result = rank(mixed_items, client=model_client)

        assert result.used_model is True
        assert result.value[0].item.title == "#Victory"

    @pytest.mark.parametrize("reply", ["I cannot rank these.", "1. 0\n2. 77"])
    def test_unusable_reply_equals_heuristic(self, mixed_items, model_client, reply):
        model_client.reply(reply)

        result = rank(mixed_items, client=model_client)

        assert result.via is Strategy.HEURISTIC
        assert result.value == rank_heuristic(mixed_items)

    def test_model_exception_equals_heuristic(self, mixed_items, model_client):
        model_client.complete.side_effect = ConnectionError("reset")

        result = rank(mixed_items, client=model_client)

        assert result.via is Strategy.HEURISTIC
        assert result.value == rank_heuristic(mixed_items)
