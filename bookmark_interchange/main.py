#!/usr/bin/env python3
"""
Main entry point for Bookmark Interchange.

This module serves as the console script target.
"""

import sys
from bookmark_interchange.cli import main


if __name__ == "__main__":
    sys.exit(main())
