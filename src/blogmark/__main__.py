"""Allow ``python -m blogmark``."""

import sys

from blogmark.cli import main

sys.exit(main())
