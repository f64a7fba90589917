"""
Shape detectors for raw profile exports.

Each detector recognises one export layout and returns a tagged ShapeMatch.
DataNormalizer runs them in DEFAULT_DETECTORS order and keeps the first
match, so the order here is part of the normalization contract:

1. AuthoredPostListDetector  - list of posts carrying an `author` object (Twitter/X)
2. ProfileListDetector       - list whose first item has `latestPosts` (Instagram)
3. BarePostListDetector      - any other list, parsed as bare posts
4. DirectProfileDetector     - a single profile object
5. NestedDataDetector        - an envelope with a `data` list
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from profile_rag.ingestion.extraction import (
    as_count,
    as_string_list,
    as_text,
    extract_hashtags,
    extract_mentions,
    first_present,
)
from profile_rag.ingestion.schemas import CanonicalPost, PostEngagement


@dataclass(frozen=True)
class ShapeMatch:
    """
    Result of running one detector.

    Attributes:
        matched: Whether the detector recognised the payload
        shape: Detector name, for logging
        profile: Raw profile object, if the shape carries one
        posts: Parsed posts
        nested: Payload to normalize instead of this one (envelopes)
    """

    matched: bool
    shape: str = ""
    profile: Any = None
    posts: list[CanonicalPost] = field(default_factory=list)
    nested: Any = None

    @classmethod
    def no_match(cls) -> "ShapeMatch":
        return cls(matched=False)


class ShapeDetector(ABC):
    """Recognises one raw export layout."""

    name: str = "detector"

    @abstractmethod
    def detect(self, data: Any) -> ShapeMatch:
        """Return a matched ShapeMatch, or ShapeMatch.no_match()."""
        ...


def parse_authored_post(item: dict[str, Any]) -> CanonicalPost:
    """Parse a tweet-like item (text/caption, like_count, reply_count, retweetCount)."""
    text = as_text(first_present(item, "text", "caption", default=""))
    return CanonicalPost(
        content=text,
        timestamp=_timestamp(item),
        engagement=PostEngagement(
            likes=as_count(first_present(item, "likesCount", "like_count")),
            comments=as_count(first_present(item, "commentsCount", "reply_count")),
            shares=as_count(first_present(item, "retweetCount", "share_count")),
        ),
        hashtags=extract_hashtags(text),
        mentions=extract_mentions(text),
    )


def parse_latest_post(post: dict[str, Any]) -> CanonicalPost:
    """Parse an Instagram latestPosts entry, which ships its own hashtag/mention lists."""
    return CanonicalPost(
        content=as_text(post.get("caption")),
        timestamp=_timestamp(post),
        engagement=PostEngagement(
            likes=as_count(post.get("likesCount")),
            comments=as_count(post.get("commentsCount")),
            shares=0,
        ),
        hashtags=as_string_list(post.get("hashtags")),
        mentions=as_string_list(post.get("mentions")),
    )


def parse_bare_post(item: dict[str, Any]) -> CanonicalPost:
    """Parse a post item with no surrounding profile."""
    text = as_text(first_present(item, "caption", "text", "content", default=""))
    return CanonicalPost(
        content=text,
        timestamp=_timestamp(item),
        engagement=PostEngagement(
            likes=as_count(first_present(item, "likesCount", "like_count")),
            comments=as_count(first_present(item, "commentsCount", "reply_count")),
            shares=as_count(first_present(item, "shareCount", "share_count")),
        ),
        hashtags=extract_hashtags(text),
        mentions=extract_mentions(text),
    )


def _timestamp(item: dict[str, Any]) -> str | None:
    value = first_present(item, "timestamp", "created_at", "createdAt")
    return None if value is None else str(value)


def _first_dict(data: Any) -> dict[str, Any] | None:
    if isinstance(data, list) and data and isinstance(data[0], dict):
        return data[0]
    return None


def _latest_posts(profile: dict[str, Any]) -> list[CanonicalPost]:
    latest = profile.get("latestPosts")
    if not isinstance(latest, list):
        return []
    return [parse_latest_post(post) for post in latest if isinstance(post, dict)]


class AuthoredPostListDetector(ShapeDetector):
    """List of posts whose first item carries an `author` object."""

    name = "authored_post_list"

    def detect(self, data: Any) -> ShapeMatch:
        first = _first_dict(data)
        if first is None or not isinstance(first.get("author"), dict):
            return ShapeMatch.no_match()

        posts = [parse_authored_post(item) for item in data if isinstance(item, dict)]
        return ShapeMatch(matched=True, shape=self.name, profile=first["author"], posts=posts)


class ProfileListDetector(ShapeDetector):
    """List whose first item is a profile with `latestPosts`."""

    name = "profile_list"

    def detect(self, data: Any) -> ShapeMatch:
        first = _first_dict(data)
        if first is None or not isinstance(first.get("latestPosts"), list):
            return ShapeMatch.no_match()

        return ShapeMatch(matched=True, shape=self.name, profile=first, posts=_latest_posts(first))


class BarePostListDetector(ShapeDetector):
    """Any other non-empty list: each dict item is a post."""

    name = "bare_post_list"

    def detect(self, data: Any) -> ShapeMatch:
        if not isinstance(data, list) or not data:
            return ShapeMatch.no_match()

        posts = [parse_bare_post(item) for item in data if isinstance(item, dict)]
        return ShapeMatch(matched=True, shape=self.name, posts=posts)


class DirectProfileDetector(ShapeDetector):
    """A single profile object identified by username/name/fullName."""

    name = "direct_profile"

    def detect(self, data: Any) -> ShapeMatch:
        if not isinstance(data, dict):
            return ShapeMatch.no_match()
        if not first_present(data, "username", "name", "fullName"):
            return ShapeMatch.no_match()

        return ShapeMatch(matched=True, shape=self.name, profile=data, posts=_latest_posts(data))


class NestedDataDetector(ShapeDetector):
    """An envelope object with a `data` list to normalize instead."""

    name = "nested_data"

    def detect(self, data: Any) -> ShapeMatch:
        if not isinstance(data, dict) or not isinstance(data.get("data"), list):
            return ShapeMatch.no_match()

        return ShapeMatch(matched=True, shape=self.name, nested=data["data"])


DEFAULT_DETECTORS: tuple[ShapeDetector, ...] = (
    AuthoredPostListDetector(),
    ProfileListDetector(),
    BarePostListDetector(),
    DirectProfileDetector(),
    NestedDataDetector(),
)
