"""
Lexicon-based bio analysis and performance labelling.

Themes and personality traits come from fixed keyword buckets: a bucket
matches when any of its keywords is a substring of the lowercased bio.
"""

import re

THEME_KEYWORDS: dict[str, tuple[str, ...]] = {
    "Beauty & Cosmetics": ("beauty", "makeup", "cosmetics", "skincare", "lipstick", "foundation"),
    "Fashion & Style": ("fashion", "style", "outfit", "designer", "trend", "chic"),
    "Business & Entrepreneurship": ("business", "entrepreneur", "founder", "ceo", "company", "brand"),
    "Lifestyle": ("lifestyle", "life", "daily", "living", "home", "family"),
    "Fitness & Health": ("fitness", "health", "workout", "gym", "wellness", "nutrition"),
    "Travel": ("travel", "adventure", "explore", "wanderlust", "journey", "vacation"),
    "Food & Cooking": ("food", "cooking", "recipe", "chef", "restaurant", "cuisine"),
    "Technology": ("tech", "technology", "digital", "innovation", "startup", "ai"),
    "Art & Creativity": ("art", "creative", "design", "artist", "painting", "photography"),
    "Music & Entertainment": ("music", "artist", "singer", "musician", "entertainment", "performer"),
}

PERSONALITY_TRAITS: dict[str, tuple[str, ...]] = {
    "Professional": ("professional", "business", "expert", "specialist", "consultant"),
    "Creative": ("creative", "artist", "designer", "innovative", "imaginative"),
    "Enthusiastic": ("love", "passion", "excited", "amazing", "awesome"),
    "Friendly": ("friendly", "warm", "welcoming", "kind", "caring"),
    "Inspiring": ("inspire", "motivate", "empower", "transform", "change"),
    "Educational": ("teach", "learn", "educate", "share", "tips", "guide"),
    "Authentic": ("authentic", "real", "genuine", "honest", "true"),
    "Community-focused": ("community", "together", "family", "team", "collective"),
}

DEFAULT_THEME = "General Content"
DEFAULT_PERSONALITY = "Engaging"

STOP_WORDS = frozenset({
    "this", "that", "with", "have", "will", "from", "they", "know", "want", "been",
    "good", "much", "some", "time", "very", "when", "come", "here", "just", "like",
    "long", "make", "many", "over", "such", "take", "than", "them", "well", "were",
})

MAX_KEYWORDS = 10

_PUNCTUATION = re.compile(r"[^\w\s]")


def _match_buckets(text: str, buckets: dict[str, tuple[str, ...]]) -> list[str]:
    lowered = text.lower()
    return [
        label for label, keywords in buckets.items()
        if any(keyword in lowered for keyword in keywords)
    ]


def extract_themes(bio: str) -> list[str]:
    """Content themes of a bio, or ['General Content'] when none match."""
    return _match_buckets(bio, THEME_KEYWORDS) or [DEFAULT_THEME]


def extract_personality(bio: str) -> list[str]:
    """Personality traits of a bio, or ['Engaging'] when none match."""
    return _match_buckets(bio, PERSONALITY_TRAITS) or [DEFAULT_PERSONALITY]


def extract_keywords(bio: str) -> list[str]:
    """
    Distinct descriptive words from a bio.

    Lowercases, replaces punctuation with spaces, keeps words longer than
    three characters that are not stop words, de-duplicates in order of
    first appearance and caps the list at MAX_KEYWORDS.
    """
    words = _PUNCTUATION.sub(" ", bio.lower()).split()
    keywords = [w for w in words if len(w) > 3 and w not in STOP_WORDS]
    return list(dict.fromkeys(keywords))[:MAX_KEYWORDS]


def categorize_performance(engagement_rate: float | str) -> str:
    """
    Label an engagement rate (percentage).

    >= 6 Excellent, >= 3 Good, >= 1 Average, otherwise Below Average.
    Unparseable values are treated as 0.
    """
    try:
        rate = float(engagement_rate)
    except (TypeError, ValueError):
        rate = 0.0

    if rate >= 6:
        return "Excellent"
    if rate >= 3:
        return "Good"
    if rate >= 1:
        return "Average"
    return "Below Average"
