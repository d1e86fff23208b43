"""
Base classes for annotation engines.

An annotation engine turns raw text into an AnnotatedDocument: one
AnnotatedToken per token, in document order, carrying the surface text,
the lemma and the Penn Treebank part-of-speech tag.

Annotator names follow the CoreNLP vocabulary so pipeline definitions stay
engine-neutral:

    tokenize  - split text into tokens (always required)
    ssplit    - sentence splitting
    pos       - part-of-speech tags
    lemma     - dictionary forms (needs pos)
    ner       - named entities (needs pos)
    parse     - dependency parse (needs pos)

Example:
    @register_engine("spacy")
    class SpacyAnnotationEngine(BaseAnnotationEngine):
        name = "spacy"

        def _annotate(self, text, annotators):
            ...
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Iterator

from term_extractor.errors import AnnotationFailure
from term_extractor.logging_config import Timer, debug_log

# Annotator -> annotators that must run before it
ANNOTATOR_REQUIREMENTS: dict[str, tuple[str, ...]] = {
    "tokenize": (),
    "ssplit": ("tokenize",),
    "pos": ("tokenize",),
    "lemma": ("pos",),
    "ner": ("pos",),
    "parse": ("pos",),
}


@dataclass(frozen=True)
class AnnotatedToken:
    """
    A single annotated token.

    Attributes:
        surface_text: The token exactly as it appears in the input text
        lemma: Dictionary form, or None when no lemma annotator ran
        pos_tag: Part-of-speech tag, or None when no pos annotator ran
    """
    surface_text: str
    lemma: str | None = None
    pos_tag: str | None = None


@dataclass(frozen=True)
class AnnotatedDocument:
    """
    Ordered tokens produced by one annotation pass.

    Iterating a document yields its tokens in document order.
    """
    text: str
    tokens: tuple[AnnotatedToken, ...] = ()
    annotators: tuple[str, ...] = field(default_factory=tuple)

    def __iter__(self) -> Iterator[AnnotatedToken]:
        return iter(self.tokens)

    def __len__(self) -> int:
        return len(self.tokens)


def validate_annotators(annotators) -> tuple[str, ...]:
    """
    Check annotator names and their ordering.

    Args:
        annotators: Annotator names in run order

    Returns:
        The annotators as a tuple

    Raises:
        AnnotationFailure: Unknown annotator, duplicate, or an annotator
            listed before one it depends on
    """
    annotators = tuple(annotators)
    if not annotators:
        raise AnnotationFailure("No annotators configured")

    seen: set[str] = set()
    for name in annotators:
        if name not in ANNOTATOR_REQUIREMENTS:
            known = ", ".join(ANNOTATOR_REQUIREMENTS)
            raise AnnotationFailure(f"Unknown annotator '{name}'. Known annotators: {known}")
        if name in seen:
            raise AnnotationFailure(f"Annotator '{name}' is listed more than once")
        for required in ANNOTATOR_REQUIREMENTS[name]:
            if required not in seen:
                raise AnnotationFailure(
                    f"Annotator '{name}' requires '{required}' earlier in the pipeline"
                )
        seen.add(name)

    return annotators


class BaseAnnotationEngine(ABC):
    """
    Abstract base class for annotation engines.

    Subclasses implement _annotate(); annotate() validates the annotator
    list first so configuration mistakes surface before any model loads.

    An engine instance is built for a single extraction run and is not
    meant to be shared between threads.

    Class Attributes:
        name: Registered engine name (for logging)
    """

    name: str = "BaseEngine"

    def annotate(self, text: str, annotators) -> AnnotatedDocument:
        """
        Annotate text with the given annotator sequence.

        Args:
            text: Raw input text
            annotators: Annotator names in run order

        Returns:
            AnnotatedDocument with one token per input token

        Raises:
            AnnotationFailure: Invalid annotators or engine failure
        """
        annotators = validate_annotators(annotators)

        with Timer(f"[{self.name.upper()}] Annotation"):
            tokens = tuple(self._annotate(text, annotators))

        debug_log(f"[{self.name.upper()}] Annotated {len(tokens)} tokens")
        return AnnotatedDocument(text=text, tokens=tokens, annotators=annotators)

    @abstractmethod
    def _annotate(self, text: str, annotators: tuple[str, ...]) -> Iterator[AnnotatedToken]:
        """Yield annotated tokens in document order."""
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"
