"""
Term Extraction Strategies Package

A closed registry of the three built-in extraction strategies. Pipeline
definitions name a strategy in their "method" key; the name is looked up
here and never resolved any other way.

Usage:
    from term_extractor.extraction import get_strategy

    strategy = get_strategy("extractNouns")
    result = strategy.extract(document)
    print(result.terms)

Registered strategies:
    extractTokens - surface text of every token
    extractLemmas - lemma of every token
    extractNouns  - surface text of NN/NNS/NNP/NNPS tokens
"""

from typing import Type

from term_extractor.errors import UnknownStrategy
from term_extractor.extraction.base import (
    BaseExtractionStrategy,
    ExtractionResult,
    normalize_term,
)

# Registry of available strategies (class references, not instances)
_STRATEGY_REGISTRY: dict[str, Type[BaseExtractionStrategy]] = {}


def register_strategy(name: str):
    """
    Decorator to register a strategy class under its pipeline method name.

    Raises:
        ValueError: If name is already registered (prevents accidental overwrites)
    """
    def decorator(cls: Type[BaseExtractionStrategy]) -> Type[BaseExtractionStrategy]:
        if name in _STRATEGY_REGISTRY:
            raise ValueError(
                f"Strategy '{name}' is already registered. "
                f"Existing: {_STRATEGY_REGISTRY[name].__name__}, New: {cls.__name__}"
            )
        _STRATEGY_REGISTRY[name] = cls
        return cls
    return decorator


def get_strategy(name: str) -> BaseExtractionStrategy:
    """
    Instantiate a strategy by its registered name.

    Args:
        name: Registered strategy name (case-sensitive)

    Returns:
        Strategy instance ready for extraction

    Raises:
        UnknownStrategy: If the name is not registered
    """
    if name not in _STRATEGY_REGISTRY:
        raise UnknownStrategy(name, get_available_strategies())
    return _STRATEGY_REGISTRY[name]()


def get_available_strategies() -> list[str]:
    """Return sorted list of registered strategy names."""
    return sorted(_STRATEGY_REGISTRY.keys())


# Import strategies to trigger their @register_strategy decorators
from term_extractor.extraction.lemma_strategy import LemmaStrategy  # noqa: E402
from term_extractor.extraction.noun_strategy import NOUN_POS_TAGS, NounStrategy  # noqa: E402
from term_extractor.extraction.token_strategy import TokenStrategy  # noqa: E402

__all__ = [
    'BaseExtractionStrategy',
    'ExtractionResult',
    'LemmaStrategy',
    'NOUN_POS_TAGS',
    'NounStrategy',
    'TokenStrategy',
    'get_available_strategies',
    'get_strategy',
    'normalize_term',
    'register_strategy',
]
