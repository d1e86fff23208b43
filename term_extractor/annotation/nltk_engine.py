"""
NLTK Annotation Engine

Alternative engine for environments without a spaCy model. Uses:
- Punkt sentence splitting, always run by tokenize: the Treebank word
  tokenizer only splits off a period at the end of its input, so it must
  see one sentence at a time. ssplit adds nothing beyond that.
- The Treebank-style NLTK word tokenizer, via span_tokenize so surface
  text is the original span (quotes are not rewritten to `` and '')
- The averaged perceptron tagger, which emits Penn Treebank tags (pos)
- The WordNet lemmatizer (lemma)

ner and parse are accepted for pipeline compatibility but add nothing to
the token fields this package reads.

Required NLTK data: punkt/punkt_tab, averaged_perceptron_tagger(_eng),
wordnet. Fetch with nltk.download().
"""

from typing import Iterator

import nltk
from nltk.stem import WordNetLemmatizer
from nltk.tokenize import NLTKWordTokenizer

from term_extractor.annotation import register_engine
from term_extractor.annotation.base import AnnotatedToken, BaseAnnotationEngine
from term_extractor.errors import AnnotationFailure
from term_extractor.logging_config import debug_log

# First letter of a Penn Treebank tag -> WordNet part of speech
_WORDNET_POS = {
    'J': 'a',
    'V': 'v',
    'N': 'n',
    'R': 'r',
}

_PROPER_NOUN_TAGS = {'NNP', 'NNPS'}


def penn_to_wordnet(tag: str) -> str:
    """Map a Penn Treebank tag to a WordNet POS, defaulting to noun."""
    return _WORDNET_POS.get(tag[:1].upper(), 'n') if tag else 'n'


@register_engine("nltk")
class NLTKAnnotationEngine(BaseAnnotationEngine):
    """Annotation engine backed by NLTK tokenizers, tagger and WordNet."""

    name = "nltk"

    def __init__(self, language: str = "english"):
        self.language = language
        self._word_tokenizer = NLTKWordTokenizer()
        self._lemmatizer = None

    @property
    def lemmatizer(self) -> WordNetLemmatizer:
        if self._lemmatizer is None:
            self._lemmatizer = WordNetLemmatizer()
        return self._lemmatizer

    def _annotate(self, text: str, annotators: tuple[str, ...]) -> Iterator[AnnotatedToken]:
        try:
            words = self._tokenize(text)

            tags = None
            if "pos" in annotators:
                tags = [tag for _, tag in nltk.pos_tag(words, lang=self._tagger_lang())]

            lemmas = None
            if "lemma" in annotators:
                lemmas = [self._lemmatize(word, tag) for word, tag in zip(words, tags)]
        except LookupError as e:
            raise AnnotationFailure(f"NLTK data resource missing: {e}") from e
        except ValueError as e:
            # span_tokenize could not align a token with the input text
            raise AnnotationFailure(f"NLTK could not tokenize input: {e}") from e

        for i, word in enumerate(words):
            yield AnnotatedToken(
                surface_text=word,
                lemma=lemmas[i] if lemmas is not None else None,
                pos_tag=tags[i] if tags is not None else None,
            )

    def _tokenize(self, text: str) -> list[str]:
        sentences = nltk.sent_tokenize(text, language=self.language)
        debug_log(f"[NLTK] Tokenizing {len(sentences)} sentence(s)")

        words = []
        for sentence in sentences:
            for start, end in self._word_tokenizer.span_tokenize(sentence):
                words.append(sentence[start:end])
        return words

    def _lemmatize(self, word: str, tag: str) -> str:
        if tag in _PROPER_NOUN_TAGS:
            return word
        return self.lemmatizer.lemmatize(word.lower(), pos=penn_to_wordnet(tag))

    def _tagger_lang(self) -> str:
        # The perceptron tagger only ships English ('eng') and Russian ('rus')
        return 'rus' if self.language == 'russian' else 'eng'
