"""
Git diff parsing and rendering.

This package parses the text output of `git diff` into a line-accurate model
of every changed file, and renders that model for the terminal.
"""

from diffview.diff_exceptions import (
    DiffError,
    DiffFormatError,
    DiffSyntaxError,
    DiffValidationError,
)
from diffview.diff_model_builder import DiffModelBuilder
from diffview.diff_parser import DiffParser, max_line_number, parse
from diffview.diff_printer import DiffColors, DiffPrinter
from diffview.diff_types import (
    AddedLine,
    ChangeKind,
    DiffFile,
    DiffHunk,
    DiffLine,
    RemovedLine,
    UnchangedLine,
)
from diffview.diff_view_settings import DiffViewSettings

__version__ = "1.0.0"

__all__ = [
    # Exceptions
    'DiffError',
    'DiffSyntaxError',
    'DiffFormatError',
    'DiffValidationError',
    # Types
    'ChangeKind',
    'AddedLine',
    'RemovedLine',
    'UnchangedLine',
    'DiffLine',
    'DiffHunk',
    'DiffFile',
    'DiffViewSettings',
    # Core classes and functions
    'DiffParser',
    'DiffModelBuilder',
    'DiffPrinter',
    'DiffColors',
    'parse',
    'max_line_number',
]
