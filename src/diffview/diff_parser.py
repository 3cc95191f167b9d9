"""Git diff parsing."""

import logging
from typing import List, Tuple

from diffview.diff_cursor import DiffCursor
from diffview.diff_header_parser import DiffHeaderParser
from diffview.diff_hunk_parser import DiffHunkParser
from diffview.diff_line_classifier import DiffLineClass, FILE_HEADER_PREFIX, classify_line
from diffview.diff_model_builder import DiffModelBuilder
from diffview.diff_raw_types import RawFile, RawHunk
from diffview.diff_types import DiffFile


class DiffParser:
    """
    Parser for the output of `git diff`.

    The document grammar is:

        document    := file_block*
        file_block  := 'diff --git a/<old> b/<new>' extended_header* filenames? hunk*
        filenames   := '--- <old>' '+++ <new>'
        hunk        := '@@ -a[,b] +c[,d] @@ [section]' body_line*

    The grammar must account for every non-blank line of the input; anything
    left over makes the whole parse fail.
    """

    OLD_FILENAME_PREFIX = '--- '
    NEW_FILENAME_PREFIX = '+++ '

    def __init__(self, strict_counts: bool = True) -> None:
        """
        Initialize the parser.

        Args:
            strict_counts: If True, hunk bodies must match the line counts in their headers
        """
        self._logger = logging.getLogger("DiffParser")
        self._header_parser = DiffHeaderParser()
        self._hunk_parser = DiffHunkParser()
        self._builder = DiffModelBuilder(strict_counts=strict_counts)

    def parse(self, document_text: str) -> List[DiffFile]:
        """
        Parse a diff document into numbered file records.

        Args:
            document_text: Complete `git diff` output

        Returns:
            One DiffFile per `diff --git` block, in input order

        Raises:
            DiffSyntaxError: If the text does not match the diff grammar
            DiffFormatError: If a hunk header contains an invalid number
            DiffValidationError: If strict counts are enabled and a hunk body does not match its header
        """
        raw_files = self.parse_raw(document_text)
        files = self._builder.build(raw_files)
        self._logger.debug("Parsed %d file(s)", len(files))
        return files

    def parse_raw(self, document_text: str) -> List[RawFile]:
        """
        Parse a diff document into the raw, unnumbered parse tree.

        Args:
            document_text: Complete `git diff` output

        Returns:
            Raw file blocks in input order

        Raises:
            DiffSyntaxError: If the text does not match the diff grammar
        """
        cursor = DiffCursor(document_text)
        raw_files: List[RawFile] = []

        while True:
            cursor.skip_blank_lines()
            if cursor.at_end():
                break

            line = cursor.peek() or ''
            if classify_line(line) != DiffLineClass.FILE_HEADER:
                raise cursor.error("Unexpected input outside of a file block", 'document')

            raw_files.append(self.parse_file_block(cursor))

        return raw_files

    def parse_file_block(self, cursor: DiffCursor) -> RawFile:
        """
        Parse one `diff --git` block.

        Args:
            cursor: Cursor positioned on a `diff --git` line

        Returns:
            The raw file block

        Raises:
            DiffSyntaxError: If the block is malformed
        """
        line_number = cursor.line_number
        line = cursor.peek()
        if line is None or not line.startswith(FILE_HEADER_PREFIX):
            raise cursor.error("Expected 'diff --git' file header", 'file_header')

        old_path, new_path = self._parse_git_paths(cursor, line)
        cursor.advance()

        extended_headers = self._header_parser.parse(cursor)
        self._parse_filenames(cursor)

        hunks: List[RawHunk] = []
        while True:
            line = cursor.peek()
            if line is None or classify_line(line) != DiffLineClass.HUNK_HEADER:
                break

            hunks.append(self._hunk_parser.parse(cursor))

        self._logger.debug(
            "Parsed file block for %s at line %d: %d extended header(s), %d hunk(s)",
            old_path, line_number, len(extended_headers), len(hunks)
        )

        return RawFile(
            old_path=old_path,
            new_path=new_path,
            extended_headers=tuple(extended_headers),
            hunks=tuple(hunks),
            line_number=line_number
        )

    def _parse_git_paths(self, cursor: DiffCursor, line: str) -> Tuple[str, str]:
        """
        Extract the pre- and post-image paths from a `diff --git a/<old> b/<new>` line.

        When both paths are the same the split is unambiguous even if the path
        contains ' b/'; otherwise the first ' b/' separates the two paths.

        Args:
            cursor: Cursor positioned on the line, for error reporting
            line: The `diff --git` line

        Returns:
            Tuple of (old path, new path)

        Raises:
            DiffSyntaxError: If the a/ or b/ delimiters are missing
        """
        rest = line[len(FILE_HEADER_PREFIX):].rstrip('\r')
        if not rest.startswith('a/'):
            raise cursor.error(f"Missing 'a/' filename delimiter: {line}", 'file_header')

        body = rest[2:]
        half = (len(body) - 3) // 2
        if half > 0 and body == f"{body[:half]} b/{body[:half]}":
            return body[:half], body[:half]

        old_path, separator, new_path = body.partition(' b/')
        if not separator or not old_path or not new_path:
            raise cursor.error(f"Missing 'b/' filename delimiter: {line}", 'file_header')

        return old_path, new_path

    def _parse_filenames(self, cursor: DiffCursor) -> None:
        """
        Consume an optional `--- <old>` / `+++ <new>` pair.

        Args:
            cursor: Cursor positioned after the extended headers

        Raises:
            DiffSyntaxError: If the pair is incomplete or an unknown header line is found
        """
        line = cursor.peek()
        if line is None:
            return

        line_class = classify_line(line)
        if line_class in (DiffLineClass.HUNK_HEADER, DiffLineClass.FILE_HEADER):
            return

        if not line.strip():
            return

        if not line.startswith(self.OLD_FILENAME_PREFIX):
            raise cursor.error(f"Unrecognized extended header line: {line}", 'extended_header')

        cursor.advance()

        line = cursor.peek()
        if line is None or not line.startswith(self.NEW_FILENAME_PREFIX):
            raise cursor.error("Expected '+++' filename line after '---'", 'filenames')

        cursor.advance()


def parse(document_text: str, strict_counts: bool = True) -> List[DiffFile]:
    """
    Parse a git diff document.

    Args:
        document_text: Complete `git diff` output
        strict_counts: If True, hunk bodies must match the line counts in their headers

    Returns:
        One DiffFile per `diff --git` block, in input order

    Raises:
        DiffError: If the document cannot be parsed completely
    """
    return DiffParser(strict_counts=strict_counts).parse(document_text)


def max_line_number(diff_file: DiffFile) -> int:
    """
    Get the largest pre- or post-image line number of a file.

    Args:
        diff_file: The parsed file

    Returns:
        Largest line number across all hunks, 0 if there are none
    """
    return diff_file.max_line_number()
