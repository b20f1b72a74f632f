#!/usr/bin/env python3
"""
run.py - Main entry point for the Connect Four engine

See `python run.py --help` for the available commands.
"""

import sys

from dropfour.interfaces.cli import main

if __name__ == "__main__":
    sys.exit(main())
