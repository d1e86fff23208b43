"""
Term Extractor Configuration Module
Centralized configuration for the application.
"""

import os
from pathlib import Path

# Debug Mode Configuration
DEBUG_MODE = os.environ.get('TERM_EXTRACTOR_DEBUG', 'false').lower() == 'true'

# Application Paths
APP_NAME = "TermExtractor"
PACKAGE_DIR = Path(__file__).parent
RESOURCES_DIR = PACKAGE_DIR / "resources"

# Bundled pipeline definitions, used when no -pf path is given
DEFAULT_PROPERTIES_FILE = RESOURCES_DIR / "application.properties"

# Pipeline Settings
DEFAULT_NLP_PIPELINE = "tokens_pipeline"
ANNOTATORS_KEY_SUFFIX = "annotators"
METHOD_KEY_SUFFIX = "method"
ENGINE_KEY_SUFFIX = "engine"
ANNOTATOR_SEPARATOR = ","

# Annotation Engine Settings
DEFAULT_ENGINE = os.environ.get('TERM_EXTRACTOR_ENGINE', 'spacy')

# spaCy model used by the default engine. The small English model is enough
# for tokens, Penn Treebank tags and lemmas.
SPACY_MODEL_NAME = os.environ.get('TERM_EXTRACTOR_SPACY_MODEL', 'en_core_web_sm')

# spaCy Model Download
# Disabled by default: a missing model is reported instead of fetched.
SPACY_AUTO_DOWNLOAD = os.environ.get('TERM_EXTRACTOR_SPACY_AUTO_DOWNLOAD', 'false').lower() == 'true'
SPACY_DOWNLOAD_TIMEOUT_SEC = 600   # Overall timeout: 10 minutes
SPACY_SOCKET_TIMEOUT_SEC = 10      # Socket timeout per request
SPACY_THREAD_TIMEOUT_SEC = 620     # Must outlast the subprocess timeout

# Logging Configuration
LOG_FILE = os.environ.get('TERM_EXTRACTOR_LOG_FILE')  # None = no file log
LOG_FORMAT = "[%(levelname)s %(asctime)s] %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"

# CLI Exit Codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_FAILURE = 1
EXIT_USAGE_ERROR = 2
