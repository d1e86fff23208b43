"""
Exception hierarchy for Term Extractor.

Every error raised by the package derives from TermExtractorError so the
CLI can map failures to an exit code in one place. Errors that wrap a lower
level failure keep it as __cause__ (raise ... from exc).
"""


class TermExtractorError(Exception):
    """Base class for all Term Extractor errors."""


class UsageError(TermExtractorError):
    """Malformed or missing command-line arguments."""


class ConfigurationError(TermExtractorError):
    """Base class for configuration store problems."""


class ConfigurationMissing(ConfigurationError):
    """
    A required pipeline key is absent from the configuration store.

    Attributes:
        key: The full key that was looked up (e.g. "nouns_pipeline.method")
    """

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Missing configuration key '{key}'")


class ConfigurationMalformed(ConfigurationError):
    """
    A configuration file exists but could not be parsed.

    Attributes:
        source: Path of the offending file
    """

    def __init__(self, source, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Malformed configuration file {source}: {reason}")


class UnknownStrategy(TermExtractorError, KeyError):
    """
    The requested extraction strategy is not registered.

    Also a KeyError, so callers treating the registry as a mapping can
    catch it as one.

    Attributes:
        name: The strategy name that was requested
        available: Registered strategy names at lookup time
    """

    def __init__(self, name: str, available: list[str] | None = None):
        self.name = name
        self.available = list(available or [])
        TermExtractorError.__init__(self, name)

    def __str__(self) -> str:
        available = ", ".join(self.available) or "(none registered)"
        return f"Unknown extraction strategy '{self.name}'. Available strategies: {available}"


class AnnotationFailure(TermExtractorError):
    """The annotation engine could not produce a document."""


class MissingAnnotation(AnnotationFailure):
    """
    A strategy needs a token field that the configured annotators did not set.

    Attributes:
        annotator: The annotator that would have produced the field
    """

    def __init__(self, annotator: str, strategy_name: str):
        self.annotator = annotator
        self.strategy_name = strategy_name
        super().__init__(
            f"Strategy '{strategy_name}' needs the '{annotator}' annotator; "
            f"add it to the pipeline's annotators"
        )
