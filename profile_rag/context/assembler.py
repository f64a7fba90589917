"""
Assembly of LLM grounding context from ranked retrieval results.

The context is plain text in a fixed section order:

    Profile Analysis Data for {username} on {platform}:

    Account Information:        profile documents
    Profile Description:        bio documents
    Recent Posts and Engagement: up to max_posts posts + most engaging post
    Engagement Metrics:         engagement documents

    Analysis based on {n} relevant data points from the {username} account.
"""

from typing import Any

import structlog

from profile_rag.context.config import ContextConfig
from profile_rag.context.sanitizer import (
    BIO_SANITIZER,
    ENGAGEMENT_SANITIZER,
    PROFILE_SANITIZER,
)
from profile_rag.observability.metrics import MetricsCollector, get_metrics
from profile_rag.retrieval.engine import RetrievalEngine
from profile_rag.retrieval.schemas import RetrievalResult

logger = structlog.get_logger(__name__)

_CONTENT_PREFIX = "Content:"


def extract_caption(content: str) -> str:
    """Return the text of the `Content:` line of a post document, or ''."""
    for line in content.split("\n"):
        if line.startswith(_CONTENT_PREFIX):
            return line[len(_CONTENT_PREFIX):].strip()
    return ""


def group_by_type(results: list[RetrievalResult]) -> dict[str, list[RetrievalResult]]:
    """Bucket results into profile / posts / bio / engagement; other types are dropped."""
    groups: dict[str, list[RetrievalResult]] = {
        "profile": [],
        "posts": [],
        "bio": [],
        "engagement": [],
    }
    for result in results:
        doc_type = result.doc_type
        key = "posts" if doc_type == "post" else doc_type
        if key in groups:
            groups[key].append(result)
    return groups


class ContextAssembler:
    """
    Builds a single cleaned text block for LLM consumption.

    Usage:
        assembler = ContextAssembler(engine)
        context = await assembler.create_enhanced_context("what content performs best", "jane", "instagram")
        if context is None:
            ...  # no stored data, omit the context block
    """

    def __init__(
        self,
        engine: RetrievalEngine,
        config: ContextConfig | None = None,
        metrics: MetricsCollector | None = None,
    ):
        self._engine = engine
        self._config = config or ContextConfig()
        self._metrics = metrics or get_metrics()

    async def create_enhanced_context(self, query: str, username: str, platform: str) -> str | None:
        """
        Retrieve relevant documents and render them as context.

        Args:
            query: User question the context should ground
            username: Identity
            platform: Platform of the identity

        Returns:
            Context text, or None when nothing relevant is stored or assembly fails
        """
        try:
            results = await self._engine.semantic_search(
                query, username, platform, limit=self._config.search_limit
            )
            if not results:
                logger.info("No relevant documents for context", platform=platform, username=username)
                self._metrics.record_context(platform, "empty")
                return None

            context = self.render(results, username, platform)
        except Exception as e:
            logger.error(
                "Failed to create enhanced context",
                platform=platform,
                username=username,
                error=str(e),
            )
            self._metrics.record_context(platform, "error")
            return None

        self._metrics.record_context(platform, "built")
        logger.info(
            "Enhanced context created",
            platform=platform,
            username=username,
            documents=len(results),
        )
        return context

    def render(self, results: list[RetrievalResult], username: str, platform: str) -> str:
        """Render grouped results into the context text."""
        groups = group_by_type(results)
        parts = [f"Profile Analysis Data for {username} on {platform}:\n\n"]

        if groups["profile"]:
            parts.append("Account Information:\n")
            parts.extend(f"{PROFILE_SANITIZER.clean(doc.content)}\n" for doc in groups["profile"])
            parts.append("\n")

        if groups["bio"]:
            parts.append("Profile Description:\n")
            parts.extend(f"{BIO_SANITIZER.clean(doc.content)}\n" for doc in groups["bio"])
            parts.append("\n")

        if groups["posts"]:
            parts.append(self._render_posts(groups["posts"]))

        if groups["engagement"]:
            parts.append("Engagement Metrics:\n")
            parts.extend(f"{ENGAGEMENT_SANITIZER.clean(doc.content)}\n" for doc in groups["engagement"])
            parts.append("\n")

        parts.append(f"Analysis based on {len(results)} relevant data points from the {username} account.\n")
        return "".join(parts)

    def _render_posts(self, posts: list[RetrievalResult]) -> str:
        lines = ["Recent Posts and Engagement:\n"]

        for index, doc in enumerate(posts[: self._config.max_posts]):
            likes, comments, total = _engagement(doc.metadata)
            lines.append(f'Post {index + 1}: "{extract_caption(doc.content)}"\n')
            if total > 0:
                lines.append(f"Engagement: {likes:,} likes, {comments:,} comments, Total: {total:,}\n")
            lines.append("\n")

        most_engaging = posts[0]
        for doc in posts[1:]:
            if _engagement(doc.metadata)[2] > _engagement(most_engaging.metadata)[2]:
                most_engaging = doc

        likes, comments, total = _engagement(most_engaging.metadata)
        if total > 0:
            lines.append(f'Most Engaging Post: "{extract_caption(most_engaging.content)}"\n')
            lines.append(f"Performance: {likes:,} likes, {comments:,} comments\n")
            lines.append(f"Total Engagement: {total:,}\n\n")

        return "".join(lines)


def _engagement(metadata: dict[str, Any]) -> tuple[int, int, int]:
    return (
        _as_int(metadata.get("likes")),
        _as_int(metadata.get("comments")),
        _as_int(metadata.get("totalEngagement")),
    )


def _as_int(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return 0
