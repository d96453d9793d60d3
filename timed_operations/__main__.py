#!/usr/bin/env python3
"""
Entry point for running timed_operations as a module.
Usage: python -m timed_operations -- COMMAND [ARGS...]
"""

import sys

from timed_operations.cli import main

if __name__ == "__main__":
    sys.exit(main())
