"""
Entry point for module execution (``python -m declint``).

This module delegates execution to the CLI handler in ``declint.cli.__main__``.
"""

import sys
from declint.cli.__main__ import main

if __name__ == "__main__":
  sys.exit(main())
