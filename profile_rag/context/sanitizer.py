"""
Removal of decorative emoji and marketing jargon from context sections.

Each section of the assembled context has its own glyph and jargon list.
Glyphs are removed literally; jargon tokens case-insensitively.
"""

import re
from dataclasses import dataclass, field


@dataclass(frozen=True)
class ContentSanitizer:
    """
    Strips a fixed set of emoji glyphs and jargon tokens, then trims.

    Attributes:
        glyphs: Literal strings to remove
        jargon: Tokens removed case-insensitively
    """

    glyphs: tuple[str, ...] = ()
    jargon: tuple[str, ...] = ()
    _pattern: re.Pattern[str] | None = field(init=False, default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.jargon:
            # Longest first so multi-word tokens win over their prefixes
            tokens = sorted(self.jargon, key=len, reverse=True)
            pattern = re.compile("|".join(re.escape(t) for t in tokens), re.IGNORECASE)
            object.__setattr__(self, "_pattern", pattern)

    def clean(self, text: str) -> str:
        for glyph in self.glyphs:
            text = text.replace(glyph, "")
        if self._pattern is not None:
            text = self._pattern.sub("", text)
        return text.strip()


PROFILE_SANITIZER = ContentSanitizer(
    glyphs=("🚀", "📊", "💡", "🎯", "📈", "🔥", "❤️", "📋", "✅"),
    jargon=(
        "STRATEGIC", "INTELLIGENCE", "COMPETITIVE", "VIRAL", "HIGH-PERFORMING",
        "OPPORTUNITIES", "BRAND PARTNERSHIPS", "MONETIZATION",
    ),
)

BIO_SANITIZER = ContentSanitizer(
    glyphs=("🎭", "🎯", "💡"),
    jargon=("BRAND DNA", "PERSONALITY MATRIX", "STRATEGIC"),
)

ENGAGEMENT_SANITIZER = ContentSanitizer(
    glyphs=("📈", "📊", "💡", "🚀"),
    jargon=("GROWTH PROJECTIONS", "ENGAGEMENT SCIENCE"),
)
