"""
Entry point for module execution (``python -m scopecheck``).

This module delegates execution to the CLI handler in ``scopecheck.cli.__main__``.
"""

import sys
from scopecheck.cli.__main__ import main

if __name__ == "__main__":
  sys.exit(main())
