"""Tests for bio analysis helpers and performance labels."""

import pytest

from profile_rag.documents.analysis import (
    DEFAULT_PERSONALITY,
    DEFAULT_THEME,
    MAX_KEYWORDS,
    categorize_performance,
    extract_keywords,
    extract_personality,
    extract_themes,
)


class TestCategorizePerformance:
    """Tests for engagement rate labels."""

    @pytest.mark.parametrize(
        "rate,label",
        [
            (6, "Excellent"),
            (12.5, "Excellent"),
            (3, "Good"),
            (5.99, "Good"),
            (2.99, "Average"),
            (1, "Average"),
            (0.5, "Below Average"),
            (0, "Below Average"),
        ],
    )
    def test_thresholds(self, rate, label):
        assert categorize_performance(rate) == label

    def test_string_rate(self):
        assert categorize_performance("3.50") == "Good"

    def test_unparseable_rate(self):
        assert categorize_performance("n/a") == "Below Average"


class TestBioLexicons:
    """Tests for theme and personality extraction."""

    def test_themes_in_bucket_order(self):
        themes = extract_themes("Fitness coach and food lover")

        assert themes == ["Fitness & Health", "Food & Cooking"]

    def test_default_theme(self):
        assert extract_themes("zzz") == [DEFAULT_THEME]

    def test_personality(self):
        assert extract_personality("Genuine and kind teacher") == ["Friendly", "Educational", "Authentic"]

    def test_default_personality(self):
        assert extract_personality("zzz") == [DEFAULT_PERSONALITY]


class TestExtractKeywords:
    """Tests for keyword extraction."""

    def test_filters_short_and_stop_words(self):
        keywords = extract_keywords("This is my blog, with travel tips! Travel more.")

        assert keywords == ["blog", "travel", "tips", "more"]

    def test_capped(self):
        bio = " ".join(f"word{i:02d}" for i in range(20))

        assert len(extract_keywords(bio)) == MAX_KEYWORDS
