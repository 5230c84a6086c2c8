"""Run the engine with ``python -m arena_engine``."""

import sys

from .cli import main

sys.exit(main())
