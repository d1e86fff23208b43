"""
Pipeline configuration resolution.

A pipeline is a named bundle of an annotator sequence and an extraction
strategy, stored under dotted keys:

    nouns_pipeline.annotators=tokenize,ssplit,pos
    nouns_pipeline.method=extractNouns
    nouns_pipeline.engine=nltk        (optional)
"""

from collections.abc import Mapping
from dataclasses import dataclass

from term_extractor.config import (
    ANNOTATOR_SEPARATOR,
    ANNOTATORS_KEY_SUFFIX,
    DEFAULT_ENGINE,
    ENGINE_KEY_SUFFIX,
    METHOD_KEY_SUFFIX,
)
from term_extractor.errors import ConfigurationMissing
from term_extractor.logging_config import debug_log


@dataclass(frozen=True)
class PipelineConfig:
    """
    Resolved pipeline settings for one extraction run.

    Attributes:
        name: Pipeline name used as the key prefix
        annotators: Annotator names in run order
        strategy_name: Registered extraction strategy name
        engine_name: Annotation engine to build
    """
    name: str
    annotators: tuple[str, ...]
    strategy_name: str
    engine_name: str = DEFAULT_ENGINE


def parse_annotators(value: str) -> tuple[str, ...]:
    """Split an annotator list, trimming whitespace and dropping empty items."""
    return tuple(
        name.strip() for name in value.split(ANNOTATOR_SEPARATOR) if name.strip()
    )


def _require(config_store: Mapping, key: str) -> str:
    value = config_store.get(key)
    if value is None or not value.strip():
        raise ConfigurationMissing(key)
    return value.strip()


def resolve_pipeline_config(pipeline_name: str, config_store: Mapping) -> PipelineConfig:
    """
    Resolve a pipeline name into its PipelineConfig.

    Args:
        pipeline_name: Key prefix, e.g. "lemmas_pipeline"
        config_store: Mapping of configuration keys to string values

    Returns:
        The resolved PipelineConfig

    Raises:
        ConfigurationMissing: The annotators or method key is absent or
            blank (annotators are checked first)
    """
    annotators_key = f"{pipeline_name}.{ANNOTATORS_KEY_SUFFIX}"
    method_key = f"{pipeline_name}.{METHOD_KEY_SUFFIX}"

    annotators = parse_annotators(_require(config_store, annotators_key))
    if not annotators:
        raise ConfigurationMissing(annotators_key)

    strategy_name = _require(config_store, method_key)

    engine_value = config_store.get(f"{pipeline_name}.{ENGINE_KEY_SUFFIX}")
    engine_name = engine_value.strip() if engine_value and engine_value.strip() else DEFAULT_ENGINE

    config = PipelineConfig(
        name=pipeline_name,
        annotators=annotators,
        strategy_name=strategy_name,
        engine_name=engine_name,
    )
    debug_log(
        f"[PIPELINE] Resolved '{pipeline_name}': annotators={','.join(annotators)} "
        f"method={strategy_name} engine={engine_name}"
    )
    return config


def list_pipelines(config_store: Mapping) -> list[str]:
    """
    Return the pipeline names that define both an annotators and a method key.

    Returns:
        Sorted list of pipeline names
    """
    annotators_suffix = f".{ANNOTATORS_KEY_SUFFIX}"
    method_suffix = f".{METHOD_KEY_SUFFIX}"

    names = {
        key[:-len(annotators_suffix)]
        for key in config_store
        if key.endswith(annotators_suffix)
    }
    return sorted(name for name in names if f"{name}{method_suffix}" in config_store)
