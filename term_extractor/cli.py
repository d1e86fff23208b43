"""
Term Extractor command-line entry point.

Examples:
  # Distinct tokens using the bundled pipeline definitions
  term-extractor -et "The cats sleep on the cats' mats."

  # Nouns only
  term-extractor -et "The cats sleep." -np nouns_pipeline

  # Custom pipeline file (.properties or .yaml)
  term-extractor -et "The cats sleep." -pf my_pipelines.yaml -np lemmas_pipeline

  # Show the pipelines a configuration file defines
  term-extractor --list-pipelines -pf my_pipelines.properties

Exit codes: 0 success, 1 runtime failure, 2 usage error.
"""

import argparse
import sys

from term_extractor.config import (
    DEFAULT_NLP_PIPELINE,
    EXIT_RUNTIME_FAILURE,
    EXIT_SUCCESS,
    EXIT_USAGE_ERROR,
)
from term_extractor.config_store import load_config_store
from term_extractor.dispatcher import run
from term_extractor.errors import TermExtractorError, UsageError
from term_extractor.logging_config import debug_log, error, set_debug_mode
from term_extractor.pipeline_config import list_pipelines


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of exiting."""

    def error(self, message):
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="term-extractor",
        description="Extract distinct, lowercase terms from text with a configured NLP pipeline",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="Examples:" + __doc__.split("Examples:", 1)[1],
        add_help=False,
    )

    actions = parser.add_mutually_exclusive_group(required=True)
    actions.add_argument(
        '-h', '--help',
        action='help',
        help='Print the help'
    )
    actions.add_argument(
        '-et', '--extract-terms',
        metavar='TEXT',
        dest='extract_terms',
        help='Extract terms from the given string'
    )
    actions.add_argument(
        '--list-pipelines',
        action='store_true',
        help='List the pipelines defined in the configuration file'
    )

    parser.add_argument(
        '-pf',
        metavar='PATH',
        dest='properties_file',
        help='Pipeline configuration file, .properties or .yaml (default: bundled application.properties)'
    )
    parser.add_argument(
        '-np', '--nlp-pipeline',
        metavar='NAME',
        dest='nlp_pipeline',
        default=DEFAULT_NLP_PIPELINE,
        help=f'Pipeline name, e.g. tokens_pipeline, lemmas_pipeline, nouns_pipeline (default: {DEFAULT_NLP_PIPELINE})'
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Log debug output and timings to stderr'
    )

    return parser


def main(argv=None) -> int:
    """
    Run the command line.

    Args:
        argv: Argument list without the program name (default: sys.argv[1:])

    Returns:
        Process exit code
    """
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except UsageError as e:
        sys.stderr.write(f"ERROR - parsing command line:\n{e}\n")
        parser.print_usage(sys.stderr)
        return EXIT_USAGE_ERROR
    except SystemExit as e:
        # --help prints and exits through argparse
        return e.code if isinstance(e.code, int) else EXIT_SUCCESS

    if args.debug:
        set_debug_mode(True)

    loaded = load_config_store(args.properties_file)
    if not loaded.ok:
        error(f"Could not load configuration {loaded.source} ({loaded.status.value}): {loaded.error}")
        return EXIT_RUNTIME_FAILURE
    debug_log(f"[CLI] Configuration {loaded.status.value} from {loaded.source}")

    if args.list_pipelines:
        for name in list_pipelines(loaded.store):
            sys.stdout.write(f"{name}\n")
        return EXIT_SUCCESS

    try:
        terms = run(args.nlp_pipeline, args.extract_terms, loaded.store)
    except TermExtractorError as e:
        error(str(e))
        return EXIT_RUNTIME_FAILURE

    for term in terms:
        sys.stdout.write(f"{term}\n")
    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
