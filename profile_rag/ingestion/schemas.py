"""
Canonical bundle schema for normalized profile exports.

Every shape detector MUST produce these models. The document synthesizer
depends on these field names, so do not rename them without updating
profile_rag.documents.
"""

from typing import Any

from pydantic import BaseModel, Field, field_validator


class PostEngagement(BaseModel):
    """Per-post engagement counters, normalized across platforms."""

    likes: int = Field(default=0, ge=0, description="Likes, favorites, hearts")
    comments: int = Field(default=0, ge=0, description="Comments or replies")
    shares: int = Field(default=0, ge=0, description="Retweets, shares, reposts")

    @property
    def total(self) -> int:
        """Combined engagement used for ranking (likes + comments)."""
        return self.likes + self.comments


class CanonicalProfile(BaseModel):
    """Account-level information resolved from an export."""

    platform: str
    username: str = ""
    full_name: str = ""
    bio: str = ""
    followers_count: int = Field(default=0, ge=0)
    following_count: int = Field(default=0, ge=0)
    posts_count: int = Field(default=0, ge=0)
    verified: bool = False
    business_account: bool = False
    category: str | None = None
    website: str | None = None

    raw: dict[str, Any] = Field(
        default_factory=dict,
        description="Original profile object for debugging",
        repr=False,
    )


class CanonicalPost(BaseModel):
    """A single post with text content and engagement."""

    content: str = ""
    timestamp: str | None = None
    engagement: PostEngagement = Field(default_factory=PostEngagement)
    hashtags: list[str] = Field(default_factory=list)
    mentions: list[str] = Field(default_factory=list)

    @field_validator("hashtags")
    @classmethod
    def normalize_hashtags(cls, v: list[str]) -> list[str]:
        """Lowercase and ensure the # prefix."""
        return [_with_prefix(tag, "#") for tag in v if str(tag).strip("# ")]

    @field_validator("mentions")
    @classmethod
    def normalize_mentions(cls, v: list[str]) -> list[str]:
        """Lowercase and ensure the @ prefix."""
        return [_with_prefix(name, "@") for name in v if str(name).strip("@ ")]

    @property
    def has_content(self) -> bool:
        return bool(self.content and self.content.strip())


class EngagementSummary(BaseModel):
    """Aggregate engagement across an export's posts."""

    avg_likes: int = 0
    avg_comments: int = 0
    avg_shares: int = 0
    total_posts: int = 0
    engagement_rate: float = Field(
        default=0.0,
        description="(likes + comments) / (posts * followers) as a percentage, 2 decimals",
    )


class CanonicalBundle(BaseModel):
    """Normalized {profile, posts, bio, engagement} shape of any raw export."""

    profile: CanonicalProfile | None = None
    posts: list[CanonicalPost] = Field(default_factory=list)
    bio: str = ""
    engagement: EngagementSummary | None = None

    @classmethod
    def empty(cls) -> "CanonicalBundle":
        return cls()

    @property
    def is_empty(self) -> bool:
        return self.profile is None and not self.posts and not self.bio


def _with_prefix(value: Any, prefix: str) -> str:
    text = str(value).strip().lower()
    return text if text.startswith(prefix) else f"{prefix}{text}"
