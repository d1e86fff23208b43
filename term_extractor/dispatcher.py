"""
Term Extraction Dispatcher

Orchestrates one extraction run:

    pipeline name -> PipelineConfig
        annotators  -> annotation engine -> AnnotatedDocument
        method      -> strategy registry -> strategy
    strategy(document) -> sorted terms

Configuration and strategy lookup both happen before the annotation engine
is built, so a bad pipeline definition fails without loading a model. Every
run builds its own engine; nothing is cached between runs.
"""

from collections.abc import Callable, Mapping

from term_extractor.annotation import BaseAnnotationEngine, create_engine
from term_extractor.extraction import ExtractionResult, get_strategy
from term_extractor.logging_config import Timer, debug_log
from term_extractor.pipeline_config import resolve_pipeline_config

EngineFactory = Callable[[str], BaseAnnotationEngine]


def run_extraction(
    pipeline_name: str,
    text: str,
    config_store: Mapping,
    engine_factory: EngineFactory | None = None,
) -> ExtractionResult:
    """
    Run a named pipeline over text and return the full extraction result.

    Args:
        pipeline_name: Pipeline key prefix in the configuration store
        text: Raw text to annotate
        config_store: Mapping of configuration keys to values
        engine_factory: Builds an engine from its name. Defaults to
            create_engine; tests pass fakes here.

    Returns:
        ExtractionResult with sorted terms and strategy metadata

    Raises:
        ConfigurationMissing: Pipeline keys absent
        UnknownStrategy: Pipeline method is not a registered strategy
        AnnotationFailure: The engine failed (propagated unchanged)
    """
    config = resolve_pipeline_config(pipeline_name, config_store)
    strategy = get_strategy(config.strategy_name)

    factory = engine_factory or create_engine
    with Timer(f"[DISPATCH] Building '{config.engine_name}' engine"):
        engine = factory(config.engine_name)

    document = engine.annotate(text, config.annotators)

    with Timer(f"[DISPATCH] {strategy.name}"):
        result = strategy.extract(document)

    debug_log(
        f"[DISPATCH] {pipeline_name}: {result.metadata['tokens_seen']} tokens, "
        f"{result.metadata['tokens_kept']} kept, {len(result.terms)} distinct terms"
    )
    return result


def run(
    pipeline_name: str,
    text: str,
    config_store: Mapping,
    engine_factory: EngineFactory | None = None,
) -> list[str]:
    """
    Run a named pipeline over text.

    Returns:
        Distinct lowercase terms in lexicographic order
    """
    return run_extraction(pipeline_name, text, config_store, engine_factory).terms
