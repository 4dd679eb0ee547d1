"""
Entry point for running exproto as a module.

Usage:
    python -m exproto [OPTIONS] [input-file]
"""

import sys

from .main import main

if __name__ == "__main__":
    sys.exit(main())
