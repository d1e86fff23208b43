"""
Base classes for term extraction strategies.

Every strategy walks an AnnotatedDocument once, derives one string per
token, optionally filters the token out, lowercases the string and
collects it into a set. The set is returned sorted.

Subclasses only decide which token field to read (_term_for) and which
tokens to keep (_accepts):

    @register_strategy("extractTokens")
    class TokenStrategy(BaseExtractionStrategy):
        name = "extractTokens"

        def _term_for(self, token):
            return token.surface_text
"""

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from term_extractor.annotation.base import AnnotatedDocument, AnnotatedToken


def normalize_term(term: str) -> str:
    """
    Case-normalize a term.

    str.lower() applies the Unicode default lowercase mapping and does not
    depend on the process locale.
    """
    return term.lower()


@dataclass
class ExtractionResult:
    """
    Result from running an extraction strategy.

    Attributes:
        terms: Distinct lowercase terms in lexicographic order
        strategy_name: Name of the strategy that produced the terms
        processing_time_ms: Time taken to extract
        metadata: Strategy statistics (tokens_seen, tokens_kept)
    """
    terms: list[str]
    strategy_name: str
    processing_time_ms: float = 0.0
    metadata: dict[str, Any] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.terms)


class BaseExtractionStrategy(ABC):
    """
    Abstract base class for term extraction strategies.

    Strategies hold no state between calls: extracting the same document
    twice gives the same result.

    Class Attributes:
        name: Registered strategy name, as used in pipeline "method" keys
    """

    name: str = "BaseStrategy"

    def extract(self, document: AnnotatedDocument) -> ExtractionResult:
        """
        Extract the distinct, lowercase terms of a document.

        Args:
            document: Annotated tokens in document order

        Returns:
            ExtractionResult with sorted terms
        """
        start_time = time.perf_counter()

        terms: set[str] = set()
        tokens_seen = 0
        tokens_kept = 0
        for token in document:
            tokens_seen += 1
            if not self._accepts(token):
                continue
            tokens_kept += 1
            terms.add(normalize_term(self._term_for(token)))

        return ExtractionResult(
            terms=sorted(terms),
            strategy_name=self.name,
            processing_time_ms=(time.perf_counter() - start_time) * 1000,
            metadata={
                "tokens_seen": tokens_seen,
                "tokens_kept": tokens_kept,
            },
        )

    def __call__(self, document: AnnotatedDocument) -> list[str]:
        """Shortcut returning only the terms."""
        return self.extract(document).terms

    @abstractmethod
    def _term_for(self, token: AnnotatedToken) -> str:
        """Return the string this strategy derives from a token."""
        pass

    def _accepts(self, token: AnnotatedToken) -> bool:
        """Return False to drop a token. Default keeps every token."""
        return True

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"
