"""Allows `python -m txtstore`."""

import sys

from txtstore.main import main

sys.exit(main())
