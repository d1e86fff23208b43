"""Surface token extraction."""

from term_extractor.annotation.base import AnnotatedToken
from term_extractor.extraction import register_strategy
from term_extractor.extraction.base import BaseExtractionStrategy


@register_strategy("extractTokens")
class TokenStrategy(BaseExtractionStrategy):
    """Every token's original surface text, lowercased and deduplicated."""

    name = "extractTokens"

    def _term_for(self, token: AnnotatedToken) -> str:
        return token.surface_text
