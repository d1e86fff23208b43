"""Allow `python -m term_extractor`."""

import sys

from term_extractor.cli import main

sys.exit(main())
