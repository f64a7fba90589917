"""
Synthesis of semantic documents from a canonical bundle.

One identity (platform + username) yields up to four document families:
a profile document, one document per non-empty post, a bio analysis
document and an engagement analytics document. Each has a multi-line text
template for embedding and a flat metadata map for filtering and ranking.
"""

import structlog

from profile_rag.documents.analysis import (
    categorize_performance,
    extract_keywords,
    extract_personality,
    extract_themes,
)
from profile_rag.documents.schemas import DocumentType, SemanticDocument
from profile_rag.ingestion.schemas import (
    CanonicalBundle,
    CanonicalPost,
    CanonicalProfile,
    EngagementSummary,
)

logger = structlog.get_logger(__name__)


def document_id(username: str, platform: str, doc_type: DocumentType, index: int | None = None) -> str:
    """Build `{username}_{platform}_{type}`, with `_{index}` for posts."""
    base = f"{username}_{platform}_{doc_type.value}"
    return base if index is None else f"{base}_{index}"


class DocumentSynthesizer:
    """
    Turns a CanonicalBundle into SemanticDocuments.

    Documents are emitted in the order profile, posts, bio, engagement.
    A failure building one document is logged and that document skipped.
    """

    def synthesize(self, bundle: CanonicalBundle, platform: str, username: str) -> list[SemanticDocument]:
        """
        Build all documents for one identity.

        Args:
            bundle: Normalized export
            platform: Platform tag
            username: Identity the documents are stored under

        Returns:
            Documents ready for embedding (possibly empty)
        """
        documents: list[SemanticDocument] = []

        if bundle.profile is not None:
            self._append(documents, "profile", self.create_profile_document, bundle.profile, platform, username)

        for index, post in enumerate(bundle.posts):
            self._append(documents, "post", self.create_post_document, post, platform, username, index)

        if bundle.bio:
            self._append(documents, "bio", self.create_bio_document, bundle.bio, platform, username)

        if bundle.engagement is not None:
            self._append(
                documents, "engagement", self.create_engagement_document,
                bundle.engagement, platform, username,
            )

        logger.info(
            "Synthesized documents",
            platform=platform,
            username=username,
            documents=len(documents),
        )
        return documents

    def _append(self, documents: list[SemanticDocument], family: str, build, *args) -> None:
        try:
            doc = build(*args)
        except Exception as e:
            logger.error("Failed to build document", family=family, error=str(e))
            return
        if doc is not None:
            documents.append(doc)

    def create_profile_document(
        self, profile: CanonicalProfile, platform: str, username: str
    ) -> SemanticDocument:
        content = "\n".join([
            f"Profile: {profile.full_name or username}",
            f"Username: @{profile.username or username}",
            f"Platform: {platform}",
            f"Bio: {profile.bio}",
            f"Followers: {profile.followers_count:,}",
            f"Following: {profile.following_count:,}",
            f"Posts: {profile.posts_count:,}",
            f"Verified: {'Yes' if profile.verified else 'No'}",
            f"Business Account: {'Yes' if profile.business_account else 'No'}",
            f"Category: {profile.category or 'Personal'}",
            f"Website: {profile.website or 'None'}",
        ])

        return SemanticDocument(
            id=document_id(username, platform, DocumentType.PROFILE),
            content=content,
            metadata={
                "type": DocumentType.PROFILE.value,
                "platform": platform,
                "username": username,
                "followerCount": profile.followers_count,
                "verified": profile.verified,
                "businessAccount": profile.business_account,
                "category": profile.category or "personal",
            },
        )

    def create_post_document(
        self, post: CanonicalPost, platform: str, username: str, index: int
    ) -> SemanticDocument | None:
        """Build a post document, or None for empty/whitespace-only content."""
        if not post.has_content:
            return None

        likes = post.engagement.likes
        comments = post.engagement.comments
        total = post.engagement.total

        content = "\n".join([
            f"Post {index + 1} on {platform}:",
            f"Content: {post.content}",
            f"Hashtags: {' '.join(post.hashtags)}",
            f"Mentions: {' '.join(post.mentions)}",
            f"Likes: {likes:,}",
            f"Comments: {comments:,}",
            f"Engagement: {total:,}",
            f"Posted: {post.timestamp or 'Recent'}",
        ])

        return SemanticDocument(
            id=document_id(username, platform, DocumentType.POST, index),
            content=content,
            metadata={
                "type": DocumentType.POST.value,
                "platform": platform,
                "username": username,
                "postIndex": index,
                "likes": likes,
                "comments": comments,
                "totalEngagement": total,
                "hashtagCount": len(post.hashtags),
                "mentionCount": len(post.mentions),
                "wordCount": len(post.content.split()),
            },
        )

    def create_bio_document(self, bio: str, platform: str, username: str) -> SemanticDocument | None:
        """Build the bio analysis document, or None for an empty bio."""
        if not bio or not bio.strip():
            return None

        themes = extract_themes(bio)
        personality = extract_personality(bio)
        keywords = extract_keywords(bio)

        content = "\n".join([
            f"Bio Analysis for @{username} on {platform}:",
            f"Description: {bio}",
            f"Themes: {', '.join(themes)}",
            f"Personality: {', '.join(personality)}",
            f"Keywords: {', '.join(keywords)}",
        ])

        return SemanticDocument(
            id=document_id(username, platform, DocumentType.BIO),
            content=content,
            metadata={
                "type": DocumentType.BIO.value,
                "platform": platform,
                "username": username,
                "bioLength": len(bio),
                "themes": themes,
                "personality": personality,
                "keywords": keywords,
            },
        )

    def create_engagement_document(
        self, engagement: EngagementSummary, platform: str, username: str
    ) -> SemanticDocument:
        performance = categorize_performance(engagement.engagement_rate)

        content = "\n".join([
            f"Engagement Analytics for @{username} on {platform}:",
            f"Average Likes per Post: {engagement.avg_likes:,}",
            f"Average Comments per Post: {engagement.avg_comments:,}",
            f"Average Shares per Post: {engagement.avg_shares:,}",
            f"Total Posts: {engagement.total_posts}",
            f"Engagement Rate: {engagement.engagement_rate:.2f}%",
            f"Performance: {performance}",
        ])

        return SemanticDocument(
            id=document_id(username, platform, DocumentType.ENGAGEMENT),
            content=content,
            metadata={
                "type": DocumentType.ENGAGEMENT.value,
                "platform": platform,
                "username": username,
                "avgLikes": engagement.avg_likes,
                "avgComments": engagement.avg_comments,
                "avgShares": engagement.avg_shares,
                "totalPosts": engagement.total_posts,
                "engagementRate": engagement.engagement_rate,
                "performance": performance,
            },
        )
