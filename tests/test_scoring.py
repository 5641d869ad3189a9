"""
Tests for the scoring engine.

Covers the base headline scorer, the forum post scorer, the social trend
scorer and their helpers. All scorers are pure functions, so no mocking
is needed.
"""

import pytest

from tests.sample_data import SCENARIO_TITLE
from trendtracker.scoring import (
    categorize_social_trend,
    engagement_rate,
    forum_traffic_level,
    has_devanagari,
    is_mixed_script,
    is_viral_social_content,
    score_forum_post,
    score_headline,
    score_social_trend,
    social_content_type,
)


# =============================================================================
# Base Headline Scorer
# =============================================================================

class TestScoreHeadline:
    """Tests for score_headline."""

    def test_keyword_plus_tier1_source(self):
        assert score_headline(SCENARIO_TITLE, "https://www.ndtv.com") == 20

    def test_same_headline_without_source(self):
        assert score_headline(SCENARIO_TITLE, None) == 10

    def test_keyword_hits_accumulate(self):
        text = "Viral video trending: shocking exclusive"
        assert score_headline(text, "") == 40

    def test_country_bonus_counted_once(self):
        # "indian" contains "india"; still a single bonus
        assert score_headline("Indian team wins", "") == 5

    def test_case_insensitive(self):
        assert score_headline("VIRAL", "") == score_headline("viral", "") == 10

    def test_tier1_domain_inside_url(self):
        source = "https://timesofindia.indiatimes.com/city/delhi/article.cms"
        assert score_headline("Weather update", source) == 10

    def test_missing_text_scores_zero(self):
        assert score_headline(None, None) == 0
        assert score_headline("", "") == 0


# =============================================================================
# Forum Post Scorer
# =============================================================================

class TestScoreForumPost:
    """Tests for score_forum_post."""

    def test_capped_at_50(self):
        score = score_forum_post(
            "Breaking viral trending india", upvotes=6000, comments=2000,
            upvote_ratio=0.97, community="india",
        )
        assert score == 50

    def test_tier_breakdown(self):
        # 150 upvotes (+5), 25 comments (+3), ratio 0.85 (+7),
        # unpopularopinion (+5), rate 0.17 (+5)
        score = score_forum_post(
            "A quiet afternoon walk", upvotes=150, comments=25,
            upvote_ratio=0.85, community="unpopularopinion",
        )
        assert score == 25

    def test_high_engagement_rate(self):
        score = score_forum_post("A quiet afternoon walk", upvotes=10, comments=5)
        assert score == 10

    def test_engagement_rate_thresholds_are_strict(self):
        # 20 comments on 100 upvotes is exactly 0.2: only the 0.1 tier applies
        score = score_forum_post("A quiet afternoon walk", upvotes=100, comments=20)
        assert score == 5 + 3 + 5

    def test_unknown_community_gets_no_bonus(self):
        with_bonus = score_forum_post("A quiet afternoon walk", 100, 0, 0.5, "india")
        without = score_forum_post("A quiet afternoon walk", 100, 0, 0.5, "cats")
        assert with_bonus - without == 8

    def test_missing_numbers_read_as_zero(self):
        assert score_forum_post("Plain title here") == 0
        assert score_forum_post(None, None, None, None, None) == 0

    @pytest.mark.parametrize("upvotes,comments,ratio", [
        (0, 0, 0.0), (50000, 50000, 1.0), (1, 1000, 0.1),
    ])
    def test_always_within_bounds(self, upvotes, comments, ratio):
        score = score_forum_post("Breaking shocking viral massive", upvotes, comments, ratio, "worldnews")
        assert 0 <= score <= 50


class TestForumHelpers:
    """Tests for engagement_rate and forum_traffic_level."""

    def test_engagement_rate(self):
        assert engagement_rate(200, 50) == 0.25
        assert engagement_rate(3, 1) == 0.33

    def test_engagement_rate_without_upvotes(self):
        assert engagement_rate(0, 5) == 0.0
        assert engagement_rate(None, None) == 0.0

    @pytest.mark.parametrize("upvotes,comments,ratio,expected", [
        (2500, 0, 0.0, "Viral"),
        (0, 600, 0.0, "Viral"),
        (1200, 0, 0.0, "Hot"),
        (600, 0, 0.0, "Trending"),
        (10, 5, 0.95, "Rising"),
        (10, 5, 0.5, "Active"),
    ])
    def test_traffic_levels(self, upvotes, comments, ratio, expected):
        assert forum_traffic_level(upvotes, comments, ratio) == expected


# =============================================================================
# Social Trend Scorer
# =============================================================================

class TestScoreSocialTrend:
    """Tests for score_social_trend."""

    def test_hashtag_entertainment_short(self):
        # hashtag +15, "ipl" +20, shorter than 10 characters -5
        assert score_social_trend("#IPL2025") == 30

    def test_mention_political(self):
        # mention +10, "modi" +25
        assert score_social_trend("@narendramodi") == 35

    def test_mixed_script_bonus(self):
        # "मोदी" +25, Devanagari and Latin together +10
        assert score_social_trend("मोदी rally today") == 35

    def test_breaking_with_country_context(self):
        # base 15 (breaking +10, india +5), breaking +35, country +15
        assert score_social_trend("Breaking news India") == 65

    def test_floored_at_zero(self):
        assert score_social_trend("ab") == 0

    def test_missing_text(self):
        assert score_social_trend(None) == 0


class TestSocialHelpers:
    """Tests for script detection, categories and content types."""

    def test_devanagari_detection(self):
        assert has_devanagari("संसद में हंगामा") is True
        assert has_devanagari("Parliament") is False
        assert has_devanagari(None) is False

    def test_mixed_script(self):
        assert is_mixed_script("मोदी rally") is True
        assert is_mixed_script("मोदी") is False
        assert is_mixed_script("rally") is False

    @pytest.mark.parametrize("text,expected", [
        ("Breaking: flood", "Breaking News"),
        ("Cricket final", "Entertainment/Sports"),
        ("Modi speech", "Politics"),
        ("Scam busted", "Crime/Justice"),
        ("Sunny weather", "General"),
    ])
    def test_categories(self, text, expected):
        assert categorize_social_trend(text) == expected

    @pytest.mark.parametrize("text,expected", [
        ("#IPL2025", "hashtag"),
        ("@narendramodi", "mention"),
        ("Viral clip", "viral_topic"),
        ("Sunny weather", "trending_topic"),
    ])
    def test_content_types(self, text, expected):
        assert social_content_type(text) == expected

    def test_viral_indicator(self):
        assert is_viral_social_content("Farmer protest in Punjab") is True
        assert is_viral_social_content("Sunny weather") is False
