"""Parsing of git extended header lines."""

import logging
import re
from typing import List, Tuple

from diffview.diff_cursor import DiffCursor
from diffview.diff_raw_types import (
    CopyFileHeader,
    DeletedFileHeader,
    DissimilarityIndexHeader,
    ExtendedHeader,
    IndexHeader,
    ModeChangeHeader,
    NewFileHeader,
    RenameFileHeader,
    SimilarityIndexHeader,
)


class DiffHeaderParser:
    """
    Parser for the extended header block of a `diff --git` file block.

    Handles, in any order:
    - old mode / new mode pairs
    - deleted file mode
    - new file mode
    - copy from / copy to pairs
    - rename from / rename to pairs
    - similarity index and dissimilarity index
    - index <old>..<new>[ <mode>]

    Parsing stops at the first line that matches none of these forms; the
    file block parser decides whether that line is legal.
    """

    OLD_MODE = 'old mode '
    NEW_MODE = 'new mode '
    DELETED_FILE_MODE = 'deleted file mode '
    NEW_FILE_MODE = 'new file mode '
    COPY_FROM = 'copy from '
    COPY_TO = 'copy to '
    RENAME_FROM = 'rename from '
    RENAME_TO = 'rename to '
    SIMILARITY_INDEX = 'similarity index '
    DISSIMILARITY_INDEX = 'dissimilarity index '
    INDEX = 'index '

    PERCENT_PATTERN = re.compile(r'^(\d+)%$', re.ASCII)
    INDEX_PATTERN = re.compile(r'^index ([0-9a-fA-F]+)\.\.([0-9a-fA-F]+)(?: +(\S+))?\s*$')

    def __init__(self) -> None:
        """Initialize the header parser."""
        self._logger = logging.getLogger("DiffHeaderParser")

    def parse(self, cursor: DiffCursor) -> List[ExtendedHeader]:
        """
        Parse zero or more extended headers starting at the cursor.

        Args:
            cursor: Cursor positioned after the `diff --git` line

        Returns:
            Extended headers in input order

        Raises:
            DiffSyntaxError: If a recognized header is malformed or a pair is incomplete
        """
        headers: List[ExtendedHeader] = []
        while True:
            header = self.parse_one(cursor)
            if header is None:
                break

            headers.append(header)
            self._logger.debug("Parsed extended header: %s", header)

        return headers

    def parse_one(self, cursor: DiffCursor) -> ExtendedHeader | None:
        """
        Parse a single extended header if the cursor is on one.

        Args:
            cursor: Cursor to read from

        Returns:
            The parsed header, or None if the current line is not an extended header
        """
        line = cursor.peek()
        if line is None:
            return None

        if line.startswith(self.OLD_MODE):
            old_mode, new_mode = self._parse_pair(cursor, self.OLD_MODE, self.NEW_MODE, 'mode_change')
            return ModeChangeHeader(old_mode=old_mode, new_mode=new_mode)

        if line.startswith(self.DELETED_FILE_MODE):
            cursor.advance()
            return DeletedFileHeader(mode=line[len(self.DELETED_FILE_MODE):].strip())

        if line.startswith(self.NEW_FILE_MODE):
            cursor.advance()
            return NewFileHeader(mode=line[len(self.NEW_FILE_MODE):].strip())

        if line.startswith(self.COPY_FROM):
            from_path, to_path = self._parse_pair(cursor, self.COPY_FROM, self.COPY_TO, 'copy_file')
            return CopyFileHeader(from_path=from_path, to_path=to_path)

        if line.startswith(self.RENAME_FROM):
            from_path, to_path = self._parse_pair(cursor, self.RENAME_FROM, self.RENAME_TO, 'rename_file')
            return RenameFileHeader(from_path=from_path, to_path=to_path)

        if line.startswith(self.SIMILARITY_INDEX):
            percent = self._parse_percent(cursor, self.SIMILARITY_INDEX, 'similarity_index')
            return SimilarityIndexHeader(percent=percent)

        if line.startswith(self.DISSIMILARITY_INDEX):
            percent = self._parse_percent(cursor, self.DISSIMILARITY_INDEX, 'dissimilarity_index')
            return DissimilarityIndexHeader(percent=percent)

        if line.startswith(self.INDEX):
            match = self.INDEX_PATTERN.match(line)
            if not match:
                raise cursor.error(f"Invalid index header: {line}", 'index')

            cursor.advance()
            return IndexHeader(old_hash=match.group(1), new_hash=match.group(2), mode=match.group(3) or '')

        return None

    def _parse_pair(self, cursor: DiffCursor, first_prefix: str, second_prefix: str, rule: str) -> Tuple[str, str]:
        """
        Parse two consecutive header lines that must appear together.

        Args:
            cursor: Cursor positioned on the first line of the pair
            first_prefix: Prefix of the first line
            second_prefix: Prefix required on the second line
            rule: Grammar rule name for error reporting

        Returns:
            Tuple of the values following each prefix

        Raises:
            DiffSyntaxError: If the second line does not follow
        """
        first = cursor.advance()[len(first_prefix):].rstrip('\r')

        line = cursor.peek()
        if line is None or not line.startswith(second_prefix):
            raise cursor.error(
                f"Expected '{second_prefix.strip()}' after '{first_prefix.strip()}'",
                rule
            )

        second = cursor.advance()[len(second_prefix):].rstrip('\r')
        return first, second

    def _parse_percent(self, cursor: DiffCursor, prefix: str, rule: str) -> int:
        """
        Parse a `<prefix><n>%` line.

        Args:
            cursor: Cursor positioned on the line
            prefix: Header prefix
            rule: Grammar rule name for error reporting

        Returns:
            The percentage

        Raises:
            DiffSyntaxError: If the value is not an integer percentage
        """
        line = cursor.peek() or ''
        match = self.PERCENT_PATTERN.match(line[len(prefix):].strip())
        if not match:
            raise cursor.error(f"Invalid {prefix.strip()}: {line}", rule)

        cursor.advance()
        return int(match.group(1))
