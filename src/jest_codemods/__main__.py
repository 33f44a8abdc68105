"""
Entry point for module execution (``python -m jest_codemods``).

This module delegates execution to the CLI handler in ``jest_codemods.cli.__main__``.
"""

import sys
from jest_codemods.cli.__main__ import main

if __name__ == "__main__":
  sys.exit(main())
