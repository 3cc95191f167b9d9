"""
CLI entry point for Diff Viewer.

This allows the tool to be run as:
    git diff | python -m diffview
"""

import sys
from diffview.diff_viewer import main

if __name__ == "__main__":
    sys.exit(main())
