"""
spaCy Annotation Engine

Default engine. Loads an English spaCy pipeline and keeps only the
components the configured annotators need:

    tokenize  -> tokenizer (always on)
    ssplit    -> parser when parse is requested, else a rule-based sentencizer
    pos       -> tok2vec, tagger, attribute_ruler
    lemma     -> lemmatizer
    ner       -> tok2vec, ner
    parse     -> tok2vec, parser

Tags come from token.tag_, which is Penn Treebank for the English models.
"""

import socket
import subprocess
import sys
import threading
from typing import Iterator

import spacy

from term_extractor.annotation import register_engine
from term_extractor.annotation.base import AnnotatedToken, BaseAnnotationEngine
from term_extractor.config import (
    SPACY_AUTO_DOWNLOAD,
    SPACY_DOWNLOAD_TIMEOUT_SEC,
    SPACY_MODEL_NAME,
    SPACY_SOCKET_TIMEOUT_SEC,
    SPACY_THREAD_TIMEOUT_SEC,
)
from term_extractor.errors import AnnotationFailure
from term_extractor.logging_config import debug_log, warning

ANNOTATOR_PIPES: dict[str, tuple[str, ...]] = {
    "tokenize": (),
    "ssplit": (),
    "pos": ("tok2vec", "tagger", "attribute_ruler"),
    "lemma": ("lemmatizer",),
    "ner": ("tok2vec", "ner"),
    "parse": ("tok2vec", "parser"),
}


@register_engine("spacy")
class SpacyAnnotationEngine(BaseAnnotationEngine):
    """
    Annotation engine backed by a spaCy pipeline.

    Whitespace tokens (runs of spaces and newlines) are skipped so they
    never reach the extraction strategies.
    """

    name = "spacy"

    def __init__(
        self,
        nlp=None,
        model_name: str = SPACY_MODEL_NAME,
        auto_download: bool = SPACY_AUTO_DOWNLOAD,
    ):
        """
        Initialize the engine.

        Args:
            nlp: Pre-loaded spaCy Language object. If None, model_name is
                 loaded on first annotate().
            model_name: spaCy package to load
            auto_download: Download the model when it is not installed
        """
        self._nlp = nlp
        self.model_name = model_name
        self.auto_download = auto_download

    @property
    def nlp(self):
        """Lazy-load spaCy model on first access."""
        if self._nlp is None:
            self._nlp = self._load_spacy_model()
        return self._nlp

    def _annotate(self, text: str, annotators: tuple[str, ...]) -> Iterator[AnnotatedToken]:
        doc = self._run_pipeline(text, annotators)
        want_pos = "pos" in annotators
        want_lemma = "lemma" in annotators

        for token in doc:
            if token.is_space:
                continue
            yield AnnotatedToken(
                surface_text=token.text,
                lemma=token.lemma_ if want_lemma else None,
                pos_tag=token.tag_ if want_pos else None,
            )

    def _run_pipeline(self, text: str, annotators: tuple[str, ...]):
        """
        Run only the components the annotators need.

        Component state is restored afterwards, so one engine (or one
        caller-supplied nlp) can serve calls with different annotators.
        """
        nlp = self.nlp

        wanted: set[str] = set()
        for annotator in annotators:
            wanted.update(ANNOTATOR_PIPES[annotator])

        missing = sorted(
            pipe for pipe in wanted - set(nlp.component_names)
            if pipe != "tok2vec"  # Some models embed tok2vec per component
        )
        if missing:
            raise AnnotationFailure(
                f"spaCy model '{self.model_name}' has no component(s) {', '.join(missing)} "
                f"required by annotators {','.join(annotators)}"
            )

        if "ssplit" in annotators and "parser" not in wanted:
            if "sentencizer" not in nlp.component_names:
                nlp.add_pipe("sentencizer", first=True)
            wanted.add("sentencizer")

        reenabled = [pipe for pipe in nlp.disabled if pipe in wanted]
        for pipe in reenabled:
            nlp.enable_pipe(pipe)

        try:
            disabled = [pipe for pipe in nlp.pipe_names if pipe not in wanted]
            with nlp.select_pipes(disable=disabled):
                debug_log(f"[SPACY] Active components: {', '.join(nlp.pipe_names) or '(tokenizer only)'}")
                return nlp(text)
        except ValueError as e:
            # e.g. text longer than nlp.max_length
            raise AnnotationFailure(f"spaCy could not annotate input: {e}") from e
        finally:
            for pipe in reenabled:
                nlp.disable_pipe(pipe)

    # ========================================================================
    # SPACY MODEL LOADING
    # ========================================================================

    def _load_spacy_model(self):
        """Load the spaCy model, downloading it first if allowed."""
        try:
            nlp = spacy.load(self.model_name)
            debug_log(f"[SPACY] Loaded spaCy model: {self.model_name}")
            return nlp
        except OSError as e:
            if not self.auto_download:
                raise AnnotationFailure(
                    f"spaCy model '{self.model_name}' is not installed. "
                    f"Install it with: python -m spacy download {self.model_name}"
                ) from e
            warning(f"[SPACY] Model {self.model_name} not installed, downloading...")
            return self._download_and_load_model()

    def _download_and_load_model(self):
        """Download spaCy model using subprocess."""
        python_executable = sys.executable

        original_socket_timeout = socket.getdefaulttimeout()
        socket.setdefaulttimeout(SPACY_SOCKET_TIMEOUT_SEC)

        download_error = [None]
        downloaded_model = [None]

        def download_thread():
            try:
                result = subprocess.run(
                    [python_executable, "-m", "spacy", "download", self.model_name],
                    check=True,
                    capture_output=True,
                    text=True,
                    timeout=SPACY_DOWNLOAD_TIMEOUT_SEC
                )
                debug_log(f"[SPACY] Download output: {result.stdout[:500]}")
                downloaded_model[0] = spacy.load(self.model_name)
            except (OSError, subprocess.SubprocessError) as e:
                download_error[0] = e

        thread = threading.Thread(target=download_thread, daemon=True)
        try:
            thread.start()
            thread.join(timeout=SPACY_THREAD_TIMEOUT_SEC)
        finally:
            socket.setdefaulttimeout(original_socket_timeout)

        if download_error[0] is not None:
            raise AnnotationFailure(
                f"Failed to download spaCy model '{self.model_name}': {download_error[0]}"
            ) from download_error[0]

        if downloaded_model[0] is None:
            raise AnnotationFailure(f"spaCy model '{self.model_name}' download timed out")

        return downloaded_model[0]
