#!/usr/bin/env python3
"""Run script for weathertodo."""

import sys

from weathertodo.cli.main import main

if __name__ == "__main__":
    sys.exit(main())
