"""
Noun extraction.

Keeps the surface text of tokens tagged as nouns. Tags are compared
case-insensitively against the Penn Treebank noun tags.
"""

from term_extractor.annotation.base import AnnotatedToken
from term_extractor.errors import MissingAnnotation
from term_extractor.extraction import register_strategy
from term_extractor.extraction.base import BaseExtractionStrategy

NOUN_POS_TAGS = frozenset({
    "NN",    # noun, singular or mass
    "NNS",   # noun, plural
    "NNP",   # proper noun, singular
    "NNPS",  # proper noun, plural
})


def is_noun_tag(pos_tag: str) -> bool:
    return pos_tag.upper() in NOUN_POS_TAGS


@register_strategy("extractNouns")
class NounStrategy(BaseExtractionStrategy):
    """Surface text of noun-tagged tokens, lowercased and deduplicated."""

    name = "extractNouns"

    def _accepts(self, token: AnnotatedToken) -> bool:
        if token.pos_tag is None:
            raise MissingAnnotation("pos", self.name)
        return is_noun_tag(token.pos_tag)

    def _term_for(self, token: AnnotatedToken) -> str:
        return token.surface_text
