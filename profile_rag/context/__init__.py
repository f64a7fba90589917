"""
LLM context assembly.

This module provides:
- ContextAssembler: Groups ranked results by type and renders one cleaned text block
- ContentSanitizer: Emoji/jargon stripping per context section
- ContextConfig: Configuration settings
"""

from profile_rag.context.assembler import ContextAssembler, extract_caption, group_by_type
from profile_rag.context.config import ContextConfig
from profile_rag.context.sanitizer import (
    BIO_SANITIZER,
    ENGAGEMENT_SANITIZER,
    PROFILE_SANITIZER,
    ContentSanitizer,
)

__all__ = [
    "BIO_SANITIZER",
    "ENGAGEMENT_SANITIZER",
    "PROFILE_SANITIZER",
    "ContentSanitizer",
    "ContextAssembler",
    "ContextConfig",
    "extract_caption",
    "group_by_type",
]
