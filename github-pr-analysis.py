#!/usr/bin/env python3
"""
GitHub PR Analysis
Analyzes closed pull requests of the configured repositories and writes
engagement, metrics and top contributor reports as CSV files.
"""

import sys

from pr_analysis.cli import main


if __name__ == "__main__":
    sys.exit(main())
