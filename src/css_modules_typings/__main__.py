"""
Entry point for module execution (``python -m css_modules_typings``).

This module delegates execution to the CLI handler in ``css_modules_typings.cli.__main__``.
"""

import sys
from css_modules_typings.cli.__main__ import main

if __name__ == "__main__":
  sys.exit(main())
