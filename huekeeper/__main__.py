#!/usr/bin/env python3
"""
Entry point for python -m huekeeper execution.

This module enables running HueKeeper as a Python module:
    python3 -m huekeeper --pick
    python3 -m huekeeper --query "brand"
    python3 -m huekeeper --copy 1A2B3C

The actual CLI logic is in huekeeper.cli module.
"""

from huekeeper.cli import main
import sys

if __name__ == "__main__":
    sys.exit(main())
