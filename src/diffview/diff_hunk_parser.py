"""Parsing of hunk headers and hunk bodies."""

import logging
from typing import List, Tuple

from diffview.diff_cursor import DiffCursor
from diffview.diff_exceptions import DiffFormatError, DiffSyntaxError
from diffview.diff_line_classifier import DiffLineClass, HUNK_HEADER_PREFIX, classify_line
from diffview.diff_raw_types import HunkRange, RawHunk, RawLine, RawLineType


def _parse_number(value: str, field_name: str, line: str, line_number: int) -> int:
    """
    Parse one numeric hunk header field.

    Args:
        value: Text of the field
        field_name: Name of the field for error reporting
        line: Complete hunk header line
        line_number: Physical line number of the header, 0 if unknown

    Returns:
        The parsed non-negative integer

    Raises:
        DiffFormatError: If the field is not a non-negative decimal integer
    """
    if not value or not value.isascii() or not value.isdigit():
        raise DiffFormatError(
            f"Invalid {field_name} in hunk header: {value!r}",
            {
                'rule': 'hunk_header',
                'field': field_name,
                'value': value,
                'line_content': line,
                'line_number': line_number,
            }
        )

    return int(value)


def _parse_range(text: str, side: str, line: str, line_number: int) -> Tuple[int, int]:
    """
    Parse a `start[,count]` range; an omitted count means 1.

    Args:
        text: Range text without its leading '-' or '+'
        side: 'left' or 'right', for error reporting
        line: Complete hunk header line
        line_number: Physical line number of the header, 0 if unknown

    Returns:
        Tuple of (start, count)
    """
    start_text, separator, count_text = text.partition(',')
    start = _parse_number(start_text, f"start_{side}", line, line_number)
    if not separator:
        return start, 1

    return start, _parse_number(count_text, f"count_{side}", line, line_number)


def parse_hunk_header(line: str, line_number: int = 0) -> Tuple[HunkRange, str]:
    """
    Parse a hunk header of the form `@@ -a,b +c,d @@ optional section`.

    Args:
        line: The hunk header line
        line_number: Physical line number of the header, for error reporting

    Returns:
        Tuple of (hunk range, section text after the closing @@)

    Raises:
        DiffSyntaxError: If the '-' or '+' range or the closing '@@' is missing
        DiffFormatError: If a start or count is not a non-negative integer
    """
    # A CRLF line ending is not part of the section text
    line = line.rstrip('\r')

    def syntax_error(message: str) -> DiffSyntaxError:
        return DiffSyntaxError(
            f"{message}: {line}",
            {'rule': 'hunk_header', 'line_content': line, 'line_number': line_number}
        )

    if not line.startswith(HUNK_HEADER_PREFIX):
        raise syntax_error("Hunk header is missing its '-' range")

    left_text, separator, rest = line[len(HUNK_HEADER_PREFIX):].partition(' ')
    if not separator or not rest.startswith('+'):
        raise syntax_error("Hunk header is missing its '+' range")

    right_text, separator, rest = rest[1:].partition(' ')
    if not separator or not rest.startswith('@@'):
        raise syntax_error("Hunk header is missing its terminating '@@'")

    section = rest[2:]
    if section.startswith(' '):
        section = section[1:]

    start_left, count_left = _parse_range(left_text, 'left', line, line_number)
    start_right, count_right = _parse_range(right_text, 'right', line, line_number)
    return HunkRange(start_left, count_left, start_right, count_right), section


class DiffHunkParser:
    """Parser for a hunk header followed by its body lines."""

    def __init__(self) -> None:
        """Initialize the hunk parser."""
        self._logger = logging.getLogger("DiffHunkParser")

    def parse(self, cursor: DiffCursor) -> RawHunk:
        """
        Parse one hunk starting at the cursor.

        Args:
            cursor: Cursor positioned on a hunk header line

        Returns:
            The raw hunk

        Raises:
            DiffSyntaxError: If the cursor is not on a valid hunk header
        """
        line_number = cursor.line_number
        line = cursor.peek()
        if line is None:
            raise cursor.error("Expected hunk header but reached end of input", 'hunk_header')

        try:
            hunk_range, section = parse_hunk_header(line, line_number)

        except DiffSyntaxError as e:
            details = {
                key: value for key, value in (e.error_details or {}).items()
                if key not in ('rule', 'line_number')
            }
            raise cursor.error(str(e), 'hunk_header', error_type=type(e), **details) from e

        cursor.advance()

        lines = self.parse_body(cursor, hunk_range)
        self._logger.debug(
            "Parsed hunk at line %d: %s with %d body lines", line_number, hunk_range, len(lines)
        )
        return RawHunk(range=hunk_range, lines=tuple(lines), section=section)

    def parse_body(self, cursor: DiffCursor, hunk_range: HunkRange) -> List[RawLine]:
        """
        Consume body lines until a line is not part of a hunk body.

        A physically empty line is read as an empty context line, but only while
        the header still expects more lines on both sides; a diff whose trailing
        whitespace was stripped keeps parsing, and a blank line after a complete
        hunk still ends it.

        Args:
            cursor: Cursor positioned on the first body line
            hunk_range: The hunk's header, used only for the empty line rule

        Returns:
            Raw body lines in input order
        """
        lines: List[RawLine] = []
        seen_left = 0
        seen_right = 0

        while True:
            line = cursor.peek()
            if line is None:
                break

            line_class = classify_line(line)

            if line_class == DiffLineClass.CONTEXT:
                lines.append(RawLine(RawLineType.BOTH, line[1:]))
                seen_left += 1
                seen_right += 1

            elif line_class == DiffLineClass.REMOVED:
                lines.append(RawLine(RawLineType.LEFT, line[1:]))
                seen_left += 1

            elif line_class == DiffLineClass.ADDED:
                lines.append(RawLine(RawLineType.RIGHT, line[1:]))
                seen_right += 1

            elif line_class == DiffLineClass.NO_NEWLINE_MARKER:
                pass

            elif (
                line_class == DiffLineClass.EMPTY and
                seen_left < hunk_range.count_left and
                seen_right < hunk_range.count_right
            ):
                lines.append(RawLine(RawLineType.BOTH, ''))
                seen_left += 1
                seen_right += 1

            else:
                break

            cursor.advance()

        return lines
