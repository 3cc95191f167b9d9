#!/usr/bin/env python3
"""
Diff Viewer - Command-line tool for displaying git diffs with line numbers.

Reads the output of `git diff` from standard input, parses it and writes a
boxed, colored rendering with pre- and post-image line numbers to standard
output.

Usage:
    git diff | python -m diffview [options]

Options:
    -c, --column      Show a two-column view
    --no-color        Disable colored output
    --width N         Render width (default: terminal width)
    --lenient         Accept hunks whose bodies do not match their header counts
    --settings PATH   JSON settings file
    --verbose         Show detailed output
    --log-file PATH   Write a log file
    --help            Show this help message
"""

import argparse
import logging
from logging.handlers import RotatingFileHandler
import re
import sys
import traceback
from typing import List, TextIO

from diffview.diff_exceptions import DiffError
from diffview.diff_line_classifier import FILE_HEADER_PREFIX
from diffview.diff_parser import DiffParser
from diffview.diff_printer import DiffPrinter
from diffview.diff_types import DiffFile
from diffview.diff_view_settings import DiffViewSettings


ANSI_ESCAPE_PATTERN = re.compile(r'\x1b\[[0-9;?]*[ -/]*[@-~]')


def strip_ansi(text: str) -> str:
    """
    Remove ANSI escape sequences, such as those from `git diff --color`.

    Args:
        text: Text that may contain escape sequences

    Returns:
        The text without escape sequences
    """
    return ANSI_ESCAPE_PATTERN.sub('', text)


def setup_logging(verbose: bool = False, log_file: str | None = None) -> None:
    """
    Configure logging for the command-line tool.

    Args:
        verbose: If True, log debug messages to stderr
        log_file: Optional path of a rotating log file
    """
    handlers: List[logging.Handler] = []

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    stderr_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
    handlers.append(stderr_handler)

    if log_file:
        # Keep up to 5 log files, max 1MB each
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=1024*1024,  # 1MB
            backupCount=4,
            encoding='utf-8'
        )
        file_handler.setLevel(logging.DEBUG)
        handlers.append(file_handler)

    logging.basicConfig(
        level=logging.DEBUG if verbose or log_file else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True
    )


class DiffViewer:
    """
    Main viewer application.

    Coordinates:
    - Loading settings
    - Reading the diff from standard input
    - Parsing the diff
    - Rendering the parsed files
    """

    def __init__(
        self,
        args: argparse.Namespace,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None
    ):
        """
        Initialize the viewer with command-line arguments.

        Args:
            args: Parsed command-line arguments
            stdin: Stream to read the diff from (default: sys.stdin)
            stdout: Stream to write the rendering to (default: sys.stdout)
            stderr: Stream to write errors to (default: sys.stderr)
        """
        self.args = args
        self.verbose = args.verbose
        self._stdin = stdin or sys.stdin
        self._stdout = stdout or sys.stdout
        self._stderr = stderr or sys.stderr
        self._logger = logging.getLogger("DiffViewer")

    def run(self) -> int:
        """
        Run the viewer.

        Returns:
            Exit code (0 for success, non-zero for failure)
        """
        try:
            settings = self._load_settings()
            if settings is None:
                return 2

            raw_text = self._stdin.read()
            text = strip_ansi(raw_text)

            if not self._looks_like_diff(text):
                self._logger.debug("Input is not a git diff, writing it unchanged")
                self._stdout.write(raw_text)
                return 0

            files = self._parse(text, settings)
            if files is None:
                return 1

            self._stdout.write(DiffPrinter(settings).render(files))
            return 0

        except KeyboardInterrupt:
            self._print_error("\nInterrupted by user")
            return 130

        except BrokenPipeError:
            # The reader (e.g. a pager) went away; nothing left to write to
            return 0

    def _load_settings(self) -> DiffViewSettings | None:
        """
        Build the effective settings from defaults, settings file and flags.

        Returns:
            The settings, or None if the settings file could not be read
        """
        path = self.args.settings or DiffViewSettings.default_path()
        settings = DiffViewSettings.create_default()

        if path:
            try:
                settings = DiffViewSettings.load(path)
                self._logger.debug("Loaded settings from %s", path)

            except (OSError, ValueError) as e:
                self._print_error(f"Failed to load settings from {path}: {e}")
                return None

        if self.args.column:
            settings.column_view = True

        if self.args.no_color or not self._stdout.isatty():
            settings.color = False

        if self.args.width:
            settings.width = self.args.width

        if self.args.lenient:
            settings.strict_counts = False

        return settings

    def _looks_like_diff(self, text: str) -> bool:
        """Check whether the input starts with a git diff file header."""
        return text.lstrip().startswith(FILE_HEADER_PREFIX)

    def _parse(self, text: str, settings: DiffViewSettings) -> List[DiffFile] | None:
        """
        Parse the diff text.

        Args:
            text: Diff text without escape sequences
            settings: Effective settings

        Returns:
            Parsed files, or None if parsing failed
        """
        try:
            files = DiffParser(strict_counts=settings.strict_counts).parse(text)
            self._logger.debug("Parsed %d file(s) from input", len(files))
            return files

        except DiffError as e:
            self._print_error(f"Failed to parse diff: {e}")
            if self.verbose:
                if e.error_details:
                    for key, value in e.error_details.items():
                        self._stderr.write(f"  {key}: {value}\n")

                traceback.print_exc(file=self._stderr)

            return None

    def _print_error(self, message: str) -> None:
        """Print error message."""
        self._stderr.write(f"Error: {message}\n")


def parse_arguments(argv: List[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="diffview",
        description="Display git diffs with pre- and post-image line numbers",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Show the working tree changes
  git diff | python -m diffview

  # Two-column view
  git diff HEAD~1 | python -m diffview --column

  # Plain output for a file
  git show --format= HEAD | python -m diffview --no-color --width 120
        """
    )

    parser.add_argument(
        '-c', '--column',
        action='store_true',
        help='Show in two-column view'
    )

    parser.add_argument(
        '--no-color',
        action='store_true',
        help='Disable colored output'
    )

    parser.add_argument(
        '--width',
        type=int,
        default=None,
        help='Render width in characters (default: terminal width)'
    )

    parser.add_argument(
        '--lenient',
        action='store_true',
        help='Accept hunks whose bodies do not match their header line counts'
    )

    parser.add_argument(
        '--settings',
        default=None,
        help=f'JSON settings file (default: ${DiffViewSettings.ENVIRONMENT_VARIABLE} or {DiffViewSettings.DEFAULT_PATH})'
    )

    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Show detailed output'
    )

    parser.add_argument(
        '--log-file',
        default=None,
        help='Write a rotating log file'
    )

    return parser.parse_args(argv)


def main(argv: List[str] | None = None) -> int:
    """Main entry point."""
    args = parse_arguments(argv)
    setup_logging(args.verbose, args.log_file)
    viewer = DiffViewer(args)
    return viewer.run()


if __name__ == "__main__":
    sys.exit(main())
