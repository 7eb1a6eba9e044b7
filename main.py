#!/usr/bin/env python3
"""
Excel Diff - Main Entry Point

Compare two worksheets and produce a colour-coded copy that marks added,
removed and modified rows.

Commands:
  diff   - Compare two worksheets
  sheets - List the sheets of a file

Usage:
  python main.py diff ./data/old.xlsx ./data/new.xlsx -o diff_output.xlsx
  python main.py sheets ./data/old.xlsx
"""

from exceldiff.cli import main


if __name__ == '__main__':
    main()
