"""
Annotation Engines Package

Engines are registered via decorator and instantiated by name, so a
pipeline can pick its NLP backend with a single configuration key.

Usage:
    from term_extractor.annotation import create_engine

    engine = create_engine("spacy")
    document = engine.annotate("The cats sleep.", ["tokenize", "pos", "lemma"])

Registration:
    @register_engine("myengine")
    class MyEngine(BaseAnnotationEngine):
        name = "myengine"
        ...
"""

from typing import Type

from term_extractor.annotation.base import (
    ANNOTATOR_REQUIREMENTS,
    AnnotatedDocument,
    AnnotatedToken,
    BaseAnnotationEngine,
    validate_annotators,
)
from term_extractor.errors import AnnotationFailure

# Registry of available engines (class references, not instances)
_ENGINE_REGISTRY: dict[str, Type[BaseAnnotationEngine]] = {}


def register_engine(name: str):
    """
    Decorator to register an annotation engine class.

    Raises:
        ValueError: If name is already registered
    """
    def decorator(cls: Type[BaseAnnotationEngine]) -> Type[BaseAnnotationEngine]:
        if name in _ENGINE_REGISTRY:
            raise ValueError(
                f"Engine '{name}' is already registered. "
                f"Existing: {_ENGINE_REGISTRY[name].__name__}, New: {cls.__name__}"
            )
        _ENGINE_REGISTRY[name] = cls
        return cls
    return decorator


def create_engine(name: str, **kwargs) -> BaseAnnotationEngine:
    """
    Instantiate a fresh annotation engine by its registered name.

    Args:
        name: Registered engine name ("spacy" or "nltk")
        **kwargs: Constructor arguments passed to the engine class

    Raises:
        AnnotationFailure: If the engine name is not registered
    """
    if name not in _ENGINE_REGISTRY:
        available = ", ".join(get_available_engines())
        raise AnnotationFailure(
            f"Unknown annotation engine '{name}'. Available engines: {available or '(none registered)'}"
        )
    return _ENGINE_REGISTRY[name](**kwargs)


def get_available_engines() -> list[str]:
    """Return sorted list of registered engine names."""
    return sorted(_ENGINE_REGISTRY.keys())


# Import engines to trigger their @register_engine decorators
from term_extractor.annotation import nltk_engine, spacy_engine  # noqa: E402,F401

__all__ = [
    'ANNOTATOR_REQUIREMENTS',
    'AnnotatedDocument',
    'AnnotatedToken',
    'BaseAnnotationEngine',
    'create_engine',
    'get_available_engines',
    'register_engine',
    'validate_annotators',
]
