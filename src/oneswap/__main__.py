"""Entry point for ``python -m oneswap``."""

import sys

from oneswap.cli import main

sys.exit(main())
