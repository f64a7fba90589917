"""Context assembly settings (CONTEXT_ prefix)."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ContextConfig(BaseSettings):
    """Configuration for ContextAssembler."""

    search_limit: int = Field(
        default=8,
        ge=1,
        le=100,
        description="Documents retrieved to build one context",
    )
    max_posts: int = Field(
        default=4,
        ge=0,
        le=50,
        description="Posts listed under Recent Posts and Engagement",
    )

    model_config = SettingsConfigDict(env_prefix="CONTEXT_")
