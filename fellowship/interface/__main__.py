"""
Run the fellowship CLI.

Usage:
    python -m fellowship.interface bots --runs 20
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
