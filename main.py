#!/usr/bin/env python3
"""
Sublingo Entry Point Script

This script initializes the CLI handler and merges one pair of subtitle tracks.
"""

import sys
from sublingo.cli import CLIHandler

if __name__ == "__main__":
    # Basic check for minimal Python version if necessary
    if sys.version_info < (3, 8):
        sys.stderr.write("Sublingo requires Python 3.8 or later.\n")
        sys.exit(1)

    cli = CLIHandler()
    cli.run()
