"""
Field extraction helpers shared by the shape detectors.

Raw exports come from different scrapers, so the same value appears under
different keys (likesCount vs like_count) and with loose types (counts as
strings, missing values as null). These helpers pick the first usable value
and coerce it.
"""

import math
import re
from typing import Any

HASHTAG_PATTERN = re.compile(r"#\w+")
MENTION_PATTERN = re.compile(r"@\w+")


def extract_hashtags(text: str) -> list[str]:
    """
    Extract #hashtags from text.

    Args:
        text: Post text

    Returns:
        Lowercased hashtags with the # prefix, in order of appearance
    """
    return [tag.lower() for tag in HASHTAG_PATTERN.findall(text or "")]


def extract_mentions(text: str) -> list[str]:
    """Extract @mentions from text, lowercased with the @ prefix."""
    return [name.lower() for name in MENTION_PATTERN.findall(text or "")]


def first_present(item: dict[str, Any], *keys: str, default: Any = None) -> Any:
    """
    Return the first truthy value among keys.

    Falsy values (0, "", None, []) are skipped, so a zero under the first
    alias does not hide a non-zero count under a later one.
    """
    for key in keys:
        value = item.get(key)
        if value:
            return value
    return default


def as_count(value: Any) -> int:
    """Coerce a count-like value (int, float, "1,234") to a non-negative int."""
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, str):
        value = value.replace(",", "").strip()
        if not value:
            return 0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(number) or number < 0:
        return 0
    return int(number)


def as_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def as_string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(item) for item in value if item is not None]


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up."""
    return int(math.floor(value + 0.5))
