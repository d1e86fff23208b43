"""
Term Extractor

Extracts distinct, lowercase terms (tokens, lemmas or nouns) from text,
driven by named pipeline definitions in a configuration file.

Usage:
    from term_extractor import load_config_store, run

    loaded = load_config_store()          # bundled application.properties
    terms = run("nouns_pipeline", "The cats sleep.", loaded.store)
    # ['cats']
"""

from term_extractor.config_store import ConfigLoadResult, ConfigLoadStatus, ConfigStore, load_config_store
from term_extractor.dispatcher import run, run_extraction
from term_extractor.errors import (
    AnnotationFailure,
    ConfigurationMalformed,
    ConfigurationMissing,
    MissingAnnotation,
    TermExtractorError,
    UnknownStrategy,
    UsageError,
)
from term_extractor.pipeline_config import PipelineConfig, resolve_pipeline_config

__version__ = "0.1.0"

__all__ = [
    'AnnotationFailure',
    'ConfigLoadResult',
    'ConfigLoadStatus',
    'ConfigStore',
    'ConfigurationMalformed',
    'ConfigurationMissing',
    'MissingAnnotation',
    'PipelineConfig',
    'TermExtractorError',
    'UnknownStrategy',
    'UsageError',
    'load_config_store',
    'resolve_pipeline_config',
    'run',
    'run_extraction',
]
