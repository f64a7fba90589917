"""
Normalization of raw social-media exports into a CanonicalBundle.

Exports arrive in whatever layout the collector produced: tweet arrays with
embedded authors, Instagram profile arrays with latestPosts, bare post
lists, single profile objects, or {"data": [...]} envelopes. The normalizer
runs an ordered chain of shape detectors, resolves the profile, derives the
bio and aggregates engagement.

Failure policy: nothing here raises to the caller. try_normalize() returns
a failed Result carrying NormalizationError; normalize() logs it and
returns the empty bundle.
"""

import json
from typing import Any

import structlog

from profile_rag.errors import ErrorKind, NormalizationError, Result
from profile_rag.ingestion.detectors import DEFAULT_DETECTORS, ShapeDetector, ShapeMatch
from profile_rag.ingestion.extraction import (
    as_count,
    as_text,
    first_present,
    round_half_up,
)
from profile_rag.ingestion.schemas import (
    CanonicalBundle,
    CanonicalPost,
    CanonicalProfile,
    EngagementSummary,
)

logger = structlog.get_logger(__name__)


class DataNormalizer:
    """
    Converts arbitrary raw export JSON into a CanonicalBundle.

    Usage:
        normalizer = DataNormalizer()
        bundle = normalizer.normalize(raw_export, platform="instagram")
        if bundle.profile:
            print(bundle.profile.followers_count)
    """

    def __init__(self, detectors: tuple[ShapeDetector, ...] | None = None):
        """
        Initialize the normalizer.

        Args:
            detectors: Ordered detector chain (default: DEFAULT_DETECTORS)
        """
        self._detectors = detectors or DEFAULT_DETECTORS

    def normalize(self, data: Any, platform: str) -> CanonicalBundle:
        """
        Normalize a raw export, returning the empty bundle on any failure.

        Args:
            data: Parsed JSON (list or dict) or a JSON string/bytes
            platform: Platform tag (instagram, twitter, ...)

        Returns:
            CanonicalBundle (possibly empty)
        """
        result = self.try_normalize(data, platform)
        if not result.ok:
            logger.error(
                "Failed to normalize export",
                platform=platform,
                error=result.message,
            )
            return CanonicalBundle.empty()
        return result.value  # type: ignore[return-value]

    def try_normalize(self, data: Any, platform: str) -> Result[CanonicalBundle]:
        """Normalize a raw export into a Result."""
        try:
            payload = self._parse_payload(data)
            return Result.success(self._normalize(payload, platform))
        except NormalizationError as e:
            return Result.from_exception(e)
        except Exception as e:
            return Result.failure(ErrorKind.NORMALIZATION, f"{type(e).__name__}: {e}")

    def detect(self, data: Any) -> ShapeMatch:
        """Run the detector chain and return the first match."""
        for detector in self._detectors:
            match = detector.detect(data)
            if match.matched:
                return match
        return ShapeMatch.no_match()

    def _parse_payload(self, data: Any) -> Any:
        if isinstance(data, (bytes, bytearray)):
            data = data.decode("utf-8")
        if isinstance(data, str):
            try:
                data = json.loads(data)
            except json.JSONDecodeError as e:
                raise NormalizationError(f"Export is not valid JSON: {e}") from e

        if not isinstance(data, (list, dict)):
            raise NormalizationError(
                f"Unsupported export payload type: {type(data).__name__}"
            )
        return data

    def _normalize(self, data: Any, platform: str) -> CanonicalBundle:
        match = self.detect(data)

        if match.matched and match.nested is not None:
            logger.debug("Unwrapping nested export data", platform=platform)
            return self._normalize(match.nested, platform)

        if not match.matched:
            logger.info("No known export shape matched", platform=platform)
            return CanonicalBundle.empty()

        profile = None
        if match.profile is not None:
            profile = self.build_profile(match.profile, platform)

        posts = match.posts
        engagement = None
        if posts:
            followers = profile.followers_count if profile else 0
            engagement = self.compute_engagement(posts, followers)

        logger.debug(
            "Normalized export",
            platform=platform,
            shape=match.shape,
            has_profile=profile is not None,
            posts=len(posts),
        )

        return CanonicalBundle(
            profile=profile,
            posts=posts,
            bio=profile.bio if profile else "",
            engagement=engagement,
        )

    @staticmethod
    def build_profile(raw: Any, platform: str) -> CanonicalProfile:
        """
        Resolve a raw profile object across platform field aliases.

        Args:
            raw: Profile dict (a bare string is treated as a username)
            platform: Platform tag

        Returns:
            CanonicalProfile
        """
        if not isinstance(raw, dict):
            return CanonicalProfile(platform=platform, username=as_text(raw))

        category = first_present(raw, "businessCategoryName", "category")

        return CanonicalProfile(
            platform=platform,
            username=as_text(first_present(raw, "username", "userName", "screen_name", default="")),
            full_name=as_text(first_present(raw, "fullName", "name", default="")),
            bio=as_text(first_present(raw, "biography", "bio", "description", default="")),
            followers_count=as_count(
                first_present(raw, "followersCount", "followers_count", "followers")
            ),
            following_count=as_count(
                first_present(raw, "followsCount", "following_count", "followingCount", "following")
            ),
            posts_count=as_count(first_present(raw, "postsCount", "posts_count", "statusesCount")),
            verified=bool(first_present(raw, "verified", "is_verified", "isVerified", "isBlueVerified")),
            business_account=bool(first_present(raw, "isBusinessAccount", "is_business_account")),
            category=as_text(category) if category else None,
            website=_website(raw),
            raw=raw,
        )

    @staticmethod
    def compute_engagement(posts: list[CanonicalPost], followers: int) -> EngagementSummary:
        """
        Aggregate engagement across posts.

        Averages are rounded half-up to integers. The engagement rate is
        (likes + comments) / (posts * followers) * 100, rounded to two
        decimals, and 0 when the follower count is unknown.
        """
        count = len(posts)
        total_likes = sum(post.engagement.likes for post in posts)
        total_comments = sum(post.engagement.comments for post in posts)
        total_shares = sum(post.engagement.shares for post in posts)

        rate = 0.0
        if followers > 0:
            rate = round((total_likes + total_comments) / (count * followers) * 100, 2)

        return EngagementSummary(
            avg_likes=round_half_up(total_likes / count),
            avg_comments=round_half_up(total_comments / count),
            avg_shares=round_half_up(total_shares / count),
            total_posts=count,
            engagement_rate=rate,
        )


def _website(raw: dict[str, Any]) -> str | None:
    external = raw.get("externalUrls")
    if isinstance(external, list) and external and isinstance(external[0], dict):
        url = external[0].get("url")
        if url:
            return as_text(url)
    url = first_present(raw, "externalUrl", "website", "url")
    return as_text(url) if url else None
