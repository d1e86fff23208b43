"""Lemma extraction."""

from term_extractor.annotation.base import AnnotatedToken
from term_extractor.errors import MissingAnnotation
from term_extractor.extraction import register_strategy
from term_extractor.extraction.base import BaseExtractionStrategy


@register_strategy("extractLemmas")
class LemmaStrategy(BaseExtractionStrategy):
    """
    Every token's lemma, lowercased and deduplicated.

    Needs the lemma annotator; a token without a lemma means the pipeline
    was configured without it.
    """

    name = "extractLemmas"

    def _term_for(self, token: AnnotatedToken) -> str:
        if token.lemma is None:
            raise MissingAnnotation("lemma", self.name)
        return token.lemma
