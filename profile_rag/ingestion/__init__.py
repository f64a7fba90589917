"""
Raw export ingestion and normalization.

Main components:
- DataNormalizer: Ordered shape-detector chain producing a CanonicalBundle
- ShapeDetector / ShapeMatch: Per-layout detection strategies
- CanonicalBundle, CanonicalProfile, CanonicalPost, EngagementSummary: Canonical models
"""

from profile_rag.ingestion.detectors import (
    DEFAULT_DETECTORS,
    AuthoredPostListDetector,
    BarePostListDetector,
    DirectProfileDetector,
    NestedDataDetector,
    ProfileListDetector,
    ShapeDetector,
    ShapeMatch,
)
from profile_rag.ingestion.normalizer import DataNormalizer
from profile_rag.ingestion.schemas import (
    CanonicalBundle,
    CanonicalPost,
    CanonicalProfile,
    EngagementSummary,
    PostEngagement,
)

__all__ = [
    "DataNormalizer",
    "ShapeDetector",
    "ShapeMatch",
    "DEFAULT_DETECTORS",
    "AuthoredPostListDetector",
    "ProfileListDetector",
    "BarePostListDetector",
    "DirectProfileDetector",
    "NestedDataDetector",
    "CanonicalBundle",
    "CanonicalPost",
    "CanonicalProfile",
    "EngagementSummary",
    "PostEngagement",
]
