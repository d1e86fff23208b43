"""
Tests for annotator validation and the spaCy and NLTK engines.

Validation and spaCy tokenization tests need no downloaded data: they use
a blank English pipeline. NLTK tests need the punkt data (and tagger and
WordNet data for pos/lemma) and skip when it is not installed, as do tests
that need the en_core_web_sm model.
"""

import subprocess
import threading

import pytest
import spacy

from term_extractor.annotation import (
    AnnotatedDocument,
    AnnotatedToken,
    create_engine,
    get_available_engines,
    validate_annotators,
)
from term_extractor.annotation.nltk_engine import NLTKAnnotationEngine, penn_to_wordnet
from term_extractor.annotation.spacy_engine import SpacyAnnotationEngine
from term_extractor.errors import AnnotationFailure
from term_extractor.extraction import get_strategy

SPACY_MODEL = "en_core_web_sm"


def _surfaces(document: AnnotatedDocument) -> list[str]:
    return [token.surface_text for token in document]


class TestValidateAnnotators:
    """Tests for annotator name and order validation."""

    @pytest.mark.parametrize("annotators", [
        ["tokenize"],
        ["tokenize", "ssplit"],
        ["tokenize", "ssplit", "pos", "lemma"],
        ["tokenize", "pos", "lemma", "ner", "parse"],
        ("tokenize", "pos"),
    ])
    def test_valid_sequences(self, annotators):
        assert validate_annotators(annotators) == tuple(annotators)

    @pytest.mark.parametrize("annotators,message", [
        ([], "No annotators"),
        (["tokenize", "sentiment"], "Unknown annotator 'sentiment'"),
        (["pos"], "requires 'tokenize'"),
        (["tokenize", "lemma", "pos"], "requires 'pos'"),
        (["tokenize", "ner"], "requires 'pos'"),
        (["tokenize", "tokenize"], "more than once"),
        (["Tokenize"], "Unknown annotator"),
    ])
    def test_invalid_sequences(self, annotators, message):
        with pytest.raises(AnnotationFailure, match=message):
            validate_annotators(annotators)


class TestEngineRegistry:
    """Tests for create_engine() and get_available_engines()."""

    def test_available_engines(self):
        assert get_available_engines() == ["nltk", "spacy"]

    def test_create_engine_builds_fresh_instances(self):
        first = create_engine("nltk")
        second = create_engine("nltk")

        assert isinstance(first, NLTKAnnotationEngine)
        assert first is not second

    def test_create_spacy_engine_does_not_load_model(self):
        """The model loads lazily on first annotate()."""
        engine = create_engine("spacy", model_name="xx_not_a_model")
        assert isinstance(engine, SpacyAnnotationEngine)

    def test_unknown_engine(self):
        with pytest.raises(AnnotationFailure, match="Unknown annotation engine 'stanza'"):
            create_engine("stanza")


class TestSpacyEngine:
    """Tests for SpacyAnnotationEngine."""

    @pytest.fixture
    def blank_engine(self):
        return SpacyAnnotationEngine(nlp=spacy.blank("en"))

    def test_tokenize_only(self, blank_engine):
        document = blank_engine.annotate("The  cats\nsleep.", ["tokenize", "ssplit"])

        assert _surfaces(document) == ["The", "cats", "sleep", "."]
        assert all(token.lemma is None and token.pos_tag is None for token in document)
        assert document.annotators == ("tokenize", "ssplit")
        assert document.text == "The  cats\nsleep."

    def test_empty_text(self, blank_engine):
        document = blank_engine.annotate("", ["tokenize"])
        assert len(document) == 0

    def test_engine_reused_with_different_annotators(self, blank_engine):
        """Each call runs its own components and leaves the pipeline as found."""
        first = blank_engine.annotate("The cats sleep. Dogs bark.", ["tokenize", "ssplit"])
        second = blank_engine.annotate("The cats sleep. Dogs bark.", ["tokenize"])
        third = blank_engine.annotate("The cats sleep. Dogs bark.", ["tokenize", "ssplit"])

        expected = ["The", "cats", "sleep", ".", "Dogs", "bark", "."]
        assert _surfaces(first) == expected
        assert _surfaces(second) == expected
        assert _surfaces(third) == expected
        assert blank_engine.nlp.component_names == ["sentencizer"]
        assert blank_engine.nlp.disabled == []

    def test_disabled_component_is_used_and_restored(self):
        nlp = spacy.blank("en")
        nlp.add_pipe("sentencizer")
        nlp.disable_pipe("sentencizer")
        engine = SpacyAnnotationEngine(nlp=nlp)

        document = engine.annotate("The cats sleep.", ["tokenize", "ssplit"])

        assert _surfaces(document) == ["The", "cats", "sleep", "."]
        assert nlp.disabled == ["sentencizer"]

    def test_text_over_max_length_fails(self, blank_engine):
        blank_engine.nlp.max_length = 5

        with pytest.raises(AnnotationFailure, match="could not annotate") as exc_info:
            blank_engine.annotate("The cats sleep.", ["tokenize"])

        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_missing_model_downloads_when_allowed(self, monkeypatch):
        warnings = []
        monkeypatch.setattr("term_extractor.annotation.spacy_engine.warning", warnings.append)
        monkeypatch.setattr(
            SpacyAnnotationEngine, "_download_and_load_model", lambda self: spacy.blank("en")
        )
        engine = SpacyAnnotationEngine(model_name="xx_not_a_model", auto_download=True)

        document = engine.annotate("The cats", ["tokenize"])

        assert _surfaces(document) == ["The", "cats"]
        assert len(warnings) == 1
        assert "xx_not_a_model" in warnings[0]

    def test_download_runs_in_daemon_thread(self, monkeypatch):
        """A stuck download must not keep the interpreter alive."""
        threads = []
        real_thread = threading.Thread

        def recording_thread(*args, **kwargs):
            thread = real_thread(*args, **kwargs)
            threads.append(thread)
            return thread

        def failing_run(command, **kwargs):
            raise subprocess.CalledProcessError(1, command)

        monkeypatch.setattr("term_extractor.annotation.spacy_engine.threading.Thread", recording_thread)
        monkeypatch.setattr("term_extractor.annotation.spacy_engine.subprocess.run", failing_run)
        engine = SpacyAnnotationEngine(model_name="xx_not_a_model", auto_download=True)

        with pytest.raises(AnnotationFailure, match="Failed to download"):
            engine.annotate("text", ["tokenize"])

        assert len(threads) == 1
        assert threads[0].daemon

    def test_missing_component_fails(self, blank_engine):
        """A blank pipeline has no tagger for the pos annotator."""
        with pytest.raises(AnnotationFailure, match="tagger"):
            blank_engine.annotate("The cats sleep.", ["tokenize", "pos"])

    def test_invalid_annotators_fail_before_model_load(self):
        engine = SpacyAnnotationEngine(model_name="xx_not_a_model")

        with pytest.raises(AnnotationFailure, match="Unknown annotator"):
            engine.annotate("text", ["tokenize", "coref"])

    def test_missing_model_without_download(self):
        engine = SpacyAnnotationEngine(model_name="xx_not_a_model", auto_download=False)

        with pytest.raises(AnnotationFailure, match="not installed") as exc_info:
            engine.annotate("text", ["tokenize"])

        assert isinstance(exc_info.value.__cause__, OSError)

    @pytest.mark.skipif(not spacy.util.is_package(SPACY_MODEL), reason=f"{SPACY_MODEL} not installed")
    def test_model_pos_and_lemma(self):
        engine = SpacyAnnotationEngine(model_name=SPACY_MODEL)
        document = engine.annotate("The cats sleep.", ["tokenize", "ssplit", "pos", "lemma"])

        tokens = {token.surface_text: token for token in document}
        assert tokens["cats"].pos_tag == "NNS"
        assert tokens["cats"].lemma == "cat"
        assert tokens["The"].pos_tag == "DT"

    @pytest.mark.skipif(not spacy.util.is_package(SPACY_MODEL), reason=f"{SPACY_MODEL} not installed")
    def test_model_pipeline_end_to_end(self):
        document = SpacyAnnotationEngine().annotate(
            "The cats sleep.", ["tokenize", "ssplit", "pos", "lemma"]
        )

        assert get_strategy("extractTokens").extract(document).terms == [".", "cats", "sleep", "the"]
        assert "cat" in get_strategy("extractLemmas").extract(document).terms
        assert get_strategy("extractNouns").extract(document).terms == ["cats"]


class TestNLTKEngine:
    """Tests for NLTKAnnotationEngine."""

    @staticmethod
    def _annotate(text, annotators):
        try:
            return NLTKAnnotationEngine().annotate(text, annotators)
        except AnnotationFailure as e:
            pytest.skip(f"NLTK data not installed: {e}")

    def test_tokenize_keeps_original_quotes(self):
        """Surface text is the original span, not Treebank `` and '' quotes."""
        surfaces = _surfaces(self._annotate('He said "hi" to them', ["tokenize"]))

        assert surfaces[:2] == ["He", "said"]
        assert '"' in surfaces
        assert "``" not in surfaces
        assert "''" not in surfaces
        assert "hi" in surfaces

    def test_tokenize_only_leaves_fields_empty(self):
        document = self._annotate("The cats sleep", ["tokenize"])

        assert _surfaces(document) == ["The", "cats", "sleep"]
        assert document.tokens[0] == AnnotatedToken("The", None, None)

    @pytest.mark.parametrize("annotators", [["tokenize"], ["tokenize", "ssplit"]])
    def test_sentence_final_periods_split_off(self, annotators):
        """Periods inside the text are separate tokens with or without ssplit."""
        surfaces = _surfaces(self._annotate("The cats sleep. Dogs bark.", annotators))

        assert surfaces == ["The", "cats", "sleep", ".", "Dogs", "bark", "."]

    def test_pos_and_lemma(self):
        document = self._annotate("The cats sleep.", ["tokenize", "pos", "lemma"])

        tokens = {token.surface_text: token for token in document}
        assert tokens["cats"].pos_tag == "NNS"
        assert tokens["cats"].lemma == "cat"

    @pytest.mark.parametrize("tag,expected", [
        ("NNS", "n"),
        ("VBD", "v"),
        ("JJR", "a"),
        ("RB", "r"),
        ("DT", "n"),
        ("", "n"),
        ("vbz", "v"),
    ])
    def test_penn_to_wordnet(self, tag, expected):
        assert penn_to_wordnet(tag) == expected
