"""
Shared fixtures: annotated documents built by hand and a fake annotation
engine, so strategy, dispatcher and CLI tests never load an NLP model.
"""

import pytest

from term_extractor.annotation import AnnotatedDocument, AnnotatedToken, BaseAnnotationEngine


def make_document(*triples, text="") -> AnnotatedDocument:
    """Build a document from (surface, lemma, pos) triples."""
    tokens = tuple(AnnotatedToken(surface, lemma, pos) for surface, lemma, pos in triples)
    return AnnotatedDocument(text=text, tokens=tokens, annotators=("tokenize", "pos", "lemma"))


class FakeAnnotationEngine(BaseAnnotationEngine):
    """Returns canned tokens and records every annotate() call."""

    name = "fake"

    def __init__(self, triples=()):
        self.triples = list(triples)
        self.calls = []

    def _annotate(self, text, annotators):
        self.calls.append((text, annotators))
        for surface, lemma, pos in self.triples:
            yield AnnotatedToken(
                surface_text=surface,
                lemma=lemma if "lemma" in annotators else None,
                pos_tag=pos if "pos" in annotators else None,
            )


CATS_TRIPLES = [
    ("The", "the", "DT"),
    ("cats", "cat", "NNS"),
    ("sleep", "sleep", "VBP"),
]


@pytest.fixture
def cats_document():
    """The three-token 'The cats sleep' document."""
    return make_document(*CATS_TRIPLES)


@pytest.fixture
def fake_engine_factory():
    """
    Engine factory returning FakeAnnotationEngine instances.

    The factory keeps the engines it built (factory.engines) and the engine
    names it was asked for (factory.requested).
    """
    def factory(engine_name):
        factory.requested.append(engine_name)
        engine = FakeAnnotationEngine(factory.triples)
        factory.engines.append(engine)
        return engine

    factory.triples = list(CATS_TRIPLES)
    factory.requested = []
    factory.engines = []
    return factory
