#!/usr/bin/env python3
"""Run script for the parallel browser demo suite."""

import sys

from src.parallel_webdriver.main import main

if __name__ == "__main__":
    sys.exit(main())
