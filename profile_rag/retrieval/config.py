"""
Relevance scoring weights for the retrieval engine.

The bonuses are empirically tuned, not derived, so they are settings
rather than constants. Override via RETRIEVAL_ environment variables
(e.g., RETRIEVAL_KEYWORD_MATCH_BONUS=0.25).
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RelevanceWeights(BaseSettings):
    """Heuristic re-ranking weights and search defaults."""

    keyword_match_bonus: float = Field(
        default=0.3,
        ge=0.0,
        le=1.0,
        description="Added per query word found verbatim among the document's words",
    )
    type_match_bonus: float = Field(
        default=0.2,
        ge=0.0,
        le=1.0,
        description="Added when the query names the document's type (profile/post/engagement/bio)",
    )
    high_engagement_bonus: float = Field(
        default=0.1,
        ge=0.0,
        le=1.0,
        description="Added when totalEngagement exceeds high_engagement_threshold",
    )
    high_engagement_threshold: int = Field(
        default=1000,
        ge=0,
        description="totalEngagement above which the engagement bonus applies",
    )
    verified_bonus: float = Field(
        default=0.05,
        ge=0.0,
        le=1.0,
        description="Added for verified accounts",
    )
    business_bonus: float = Field(
        default=0.05,
        ge=0.0,
        le=1.0,
        description="Added for business accounts",
    )
    max_relevance: float = Field(
        default=1.0,
        gt=0.0,
        le=1.0,
        description="Cap on the total relevance score",
    )

    fallback_min_relevance: float = Field(
        default=0.1,
        ge=0.0,
        le=1.0,
        description="Token-overlap results at or below this score are dropped",
    )
    default_limit: int = Field(
        default=5,
        ge=1,
        le=100,
        description="Default number of results for a search",
    )

    model_config = SettingsConfigDict(env_prefix="RETRIEVAL_")
