"""
Unified Logging Configuration for Term Extractor

This module provides a centralized logging system that combines:
- Console output on stderr (stdout is reserved for extracted terms)
- Optional file output to TERM_EXTRACTOR_LOG_FILE
- Performance timing via Timer context manager

All modules should import logging functions from this module:
    from term_extractor.logging_config import debug_log, warning, error, Timer

The module respects DEBUG_MODE from config:
- DEBUG_MODE=True: All messages shown on console, verbose timing
- DEBUG_MODE=False: Only warnings/errors shown on console

Debug mode can also be switched on at runtime (the CLI's --debug flag)
via set_debug_mode().
"""

import logging
import sys
import time

from term_extractor.config import DEBUG_MODE, LOG_DATE_FORMAT, LOG_FILE, LOG_FORMAT

LOGGER_NAME = 'TermExtractor'


# =============================================================================
# Standard Python Logging Setup
# =============================================================================

def _setup_standard_logging() -> logging.Logger:
    """
    Configure the standard Python logging framework.

    Returns:
        Configured logger instance for Term Extractor
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    # Prevent duplicate handlers if called multiple times
    if logger.handlers:
        return logger

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    if LOG_FILE:
        try:
            file_handler = logging.FileHandler(LOG_FILE, encoding='utf-8')
        except OSError as e:
            sys.stderr.write(f"[LOG] Could not open log file {LOG_FILE}: {e}\n")
        else:
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG if DEBUG_MODE else logging.WARNING)
    console_handler.setFormatter(formatter)
    console_handler.set_name('console')
    logger.addHandler(console_handler)

    return logger


# Global standard logger instance
_logger = _setup_standard_logging()


def set_debug_mode(enabled: bool):
    """
    Turn console debug output on or off at runtime.

    Args:
        enabled: True shows debug/info messages on stderr, False shows
                 only warnings and errors.
    """
    level = logging.DEBUG if enabled else logging.WARNING
    for handler in _logger.handlers:
        if handler.get_name() == 'console':
            handler.setLevel(level)


# =============================================================================
# Timer Context Manager
# =============================================================================

class Timer:
    """
    Context manager for timing code blocks with automatic logging.

    Usage:
        with Timer("Annotation"):
            # code to time
            pass

    Output (debug mode):
        [DEBUG 14:32:01] Starting Annotation...
        [DEBUG 14:32:01] Annotation took 842 ms

    Attributes:
        operation_name: Name of the operation being timed
        duration_ms: Duration in milliseconds (available after exit)
    """

    def __init__(self, operation_name: str, auto_log: bool = True):
        """
        Initialize the timer.

        Args:
            operation_name: Descriptive name for the operation
            auto_log: If True, automatically log start/end
        """
        self.operation_name = operation_name
        self.auto_log = auto_log
        self.start_time: float | None = None
        self.end_time: float | None = None
        self.duration_ms: float | None = None

    def __enter__(self):
        if self.auto_log:
            debug_log(f"Starting {self.operation_name}...")
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.end_time = time.perf_counter()
        self.duration_ms = (self.end_time - self.start_time) * 1000

        if self.auto_log:
            if self.duration_ms < 1000:
                duration_str = f"{self.duration_ms:.0f} ms"
            else:
                duration_str = f"{self.duration_ms / 1000:.1f} seconds"

            debug_log(f"{self.operation_name} took {duration_str}")

        return False  # Don't suppress exceptions


# =============================================================================
# Public Logging Functions
# =============================================================================

def debug_log(message: str):
    """
    Log a debug message.

    Shown on stderr only in debug mode; always written to the file log
    when one is configured.

    Args:
        message: The message to log (prefix with [MODULE] for clarity)

    Example:
        debug_log("[SPACY] Loading model en_core_web_sm...")
    """
    _logger.debug(message)


def warning(message: str):
    """Log a warning message. Always shown on stderr."""
    _logger.warning(message)


def error(message: str, exc_info: bool = False):
    """
    Log an error message with optional exception traceback.

    Args:
        message: The error message to log
        exc_info: If True, include exception traceback
    """
    _logger.error(message, exc_info=exc_info)


__all__ = [
    'debug_log',
    'warning',
    'error',
    'set_debug_mode',
    'Timer',
    'DEBUG_MODE',
]
