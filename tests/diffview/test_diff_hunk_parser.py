"""Tests for hunk header and hunk body parsing."""

import pytest

from diffview.diff_cursor import DiffCursor
from diffview.diff_exceptions import DiffFormatError, DiffSyntaxError
from diffview.diff_hunk_parser import DiffHunkParser, parse_hunk_header
from diffview.diff_raw_types import HunkRange, RawLine, RawLineType


@pytest.fixture
def hunk_parser():
    """Create a hunk parser."""
    return DiffHunkParser()


class TestParseHunkHeader:
    """Test parsing of hunk header lines."""

    def test_full_header(self):
        """Test a header with all four numbers."""
        hunk_range, section = parse_hunk_header("@@ -1,5 +1,5 @@")
        assert hunk_range == HunkRange(1, 5, 1, 5)
        assert section == ""

    def test_different_ranges(self):
        """Test a header whose sides differ."""
        hunk_range, _ = parse_hunk_header("@@ -5,4 +9,7 @@")
        assert hunk_range.start_left == 5
        assert hunk_range.count_left == 4
        assert hunk_range.start_right == 9
        assert hunk_range.count_right == 7

    def test_section_heading(self):
        """Test that the text after the closing @@ is kept."""
        _, section = parse_hunk_header("@@ -10,6 +10,7 @@ def main():")
        assert section == "def main():"

    def test_section_keeps_inner_spacing(self):
        """Test that only one leading space is removed from the section."""
        _, section = parse_hunk_header("@@ -1,2 +1,2 @@   indented")
        assert section == "  indented"

    def test_crlf_line_ending(self):
        """Test that a CRLF line ending does not become part of the header."""
        hunk_range, section = parse_hunk_header("@@ -1,2 +1,2 @@\r")
        assert hunk_range == HunkRange(1, 2, 1, 2)
        assert section == ""

    def test_crlf_line_ending_with_section(self):
        """Test that a CRLF line ending is removed from the section."""
        _, section = parse_hunk_header("@@ -1,2 +1,2 @@ def main():\r")
        assert section == "def main():"

    def test_omitted_counts_mean_one(self):
        """Test that a missing count defaults to 1."""
        hunk_range, _ = parse_hunk_header("@@ -3 +3 @@")
        assert hunk_range == HunkRange(3, 1, 3, 1)

    def test_omitted_count_on_one_side(self):
        """Test a missing count on only one side."""
        hunk_range, _ = parse_hunk_header("@@ -0,0 +1 @@")
        assert hunk_range == HunkRange(0, 0, 1, 1)

    def test_zero_counts(self):
        """Test a header declaring no pre-image lines."""
        hunk_range, _ = parse_hunk_header("@@ -0,0 +1,3 @@")
        assert hunk_range == HunkRange(0, 0, 1, 3)

    def test_large_numbers(self):
        """Test numbers of arbitrary size."""
        hunk_range, _ = parse_hunk_header("@@ -123456,78 +123460,80 @@")
        assert hunk_range == HunkRange(123456, 78, 123460, 80)


class TestParseHunkHeaderErrors:
    """Test malformed hunk headers."""

    def test_missing_minus_range(self):
        """Test a header that does not start with '@@ -'."""
        with pytest.raises(DiffSyntaxError, match="missing its '-' range"):
            parse_hunk_header("@@ +1,5 @@")

    def test_missing_plus_range(self):
        """Test a header without a '+' range."""
        with pytest.raises(DiffSyntaxError, match="missing its '\\+' range"):
            parse_hunk_header("@@ -1,5 @@")

    def test_missing_closing_marker(self):
        """Test a header without the closing '@@'."""
        with pytest.raises(DiffSyntaxError, match="missing its terminating '@@'"):
            parse_hunk_header("@@ -1,5 +1,5")

    def test_non_numeric_start(self):
        """Test a start that is not a number."""
        with pytest.raises(DiffFormatError, match="Invalid start_left") as exc_info:
            parse_hunk_header("@@ -x,5 +1,5 @@")

        assert exc_info.value.error_details['field'] == 'start_left'
        assert exc_info.value.error_details['value'] == 'x'

    def test_non_numeric_count(self):
        """Test a count that is not a number."""
        with pytest.raises(DiffFormatError, match="Invalid count_right"):
            parse_hunk_header("@@ -1,5 +1,five @@")

    def test_negative_number(self):
        """Test that a negative count is rejected."""
        with pytest.raises(DiffFormatError, match="Invalid count_left"):
            parse_hunk_header("@@ -1,-5 +1,5 @@")

    def test_empty_count(self):
        """Test a comma with nothing after it."""
        with pytest.raises(DiffFormatError, match="Invalid count_left"):
            parse_hunk_header("@@ -1, +1,5 @@")

    def test_non_ascii_digits(self):
        """Test that non-ASCII digits are rejected."""
        with pytest.raises(DiffFormatError):
            parse_hunk_header("@@ -١,5 +1,5 @@")

    def test_format_error_is_syntax_error(self):
        """Test that numeric errors can be caught as syntax errors."""
        with pytest.raises(DiffSyntaxError):
            parse_hunk_header("@@ -a,b +c,d @@")

    def test_line_number_in_details(self):
        """Test that the header's line number is reported."""
        with pytest.raises(DiffSyntaxError) as exc_info:
            parse_hunk_header("@@ -1,5 +1,5", line_number=17)

        assert exc_info.value.error_details['line_number'] == 17
        assert exc_info.value.error_details['rule'] == 'hunk_header'


class TestDiffHunkParser:
    """Test parsing a hunk header together with its body."""

    def test_parse_all_line_kinds(self, hunk_parser):
        """Test a body with context, removed and added lines."""
        cursor = DiffCursor("@@ -1,3 +1,3 @@\n keep\n-old\n+new\n keep too\n")

        hunk = hunk_parser.parse(cursor)

        assert hunk.range == HunkRange(1, 3, 1, 3)
        assert hunk.lines == (
            RawLine(RawLineType.BOTH, "keep"),
            RawLine(RawLineType.LEFT, "old"),
            RawLine(RawLineType.RIGHT, "new"),
            RawLine(RawLineType.BOTH, "keep too"),
        )
        assert cursor.at_end()

    def test_body_stops_at_next_hunk(self, hunk_parser):
        """Test that the body ends at the next hunk header."""
        cursor = DiffCursor("@@ -1 +1 @@\n-a\n+b\n@@ -9 +9 @@\n-c\n+d\n")

        hunk = hunk_parser.parse(cursor)

        assert len(hunk.lines) == 2
        assert cursor.peek() == "@@ -9 +9 @@"

    def test_body_stops_at_next_file(self, hunk_parser):
        """Test that the body ends at the next file header."""
        cursor = DiffCursor("@@ -1 +1 @@\n-a\n+b\ndiff --git a/x b/x\n")

        hunk_parser.parse(cursor)

        assert cursor.peek() == "diff --git a/x b/x"

    def test_body_stops_at_other_line(self, hunk_parser):
        """Test that any unrecognized line ends the body without being consumed."""
        cursor = DiffCursor("@@ -1 +1 @@\n-a\n+b\nBinary files differ\n")

        hunk_parser.parse(cursor)

        assert cursor.peek() == "Binary files differ"

    def test_empty_context_line_with_space(self, hunk_parser):
        """Test that a lone space is an empty context line."""
        cursor = DiffCursor("@@ -1,3 +1,3 @@\n a\n \n b\n")

        hunk = hunk_parser.parse(cursor)

        assert hunk.lines[1] == RawLine(RawLineType.BOTH, "")

    def test_stripped_empty_line_inside_hunk(self, hunk_parser):
        """Test that a physically empty line is context while both sides expect more."""
        cursor = DiffCursor("@@ -1,3 +1,3 @@\n a\n\n b\n")

        hunk = hunk_parser.parse(cursor)

        assert hunk.lines == (
            RawLine(RawLineType.BOTH, "a"),
            RawLine(RawLineType.BOTH, ""),
            RawLine(RawLineType.BOTH, "b"),
        )
        assert cursor.at_end()

    def test_empty_line_after_complete_hunk(self, hunk_parser):
        """Test that an empty line after a complete hunk ends the body."""
        cursor = DiffCursor("@@ -1,2 +1,2 @@\n a\n b\n\n")

        hunk = hunk_parser.parse(cursor)

        assert len(hunk.lines) == 2
        assert cursor.peek() == ""

    def test_empty_line_when_one_side_complete(self, hunk_parser):
        """Test that an empty line ends the body once one side has all its lines."""
        cursor = DiffCursor("@@ -1,1 +1,2 @@\n-a\n+b\n\n")

        hunk = hunk_parser.parse(cursor)

        assert len(hunk.lines) == 2
        assert cursor.peek() == ""

    def test_no_newline_marker_is_skipped(self, hunk_parser):
        """Test that the no-newline marker produces no raw line."""
        cursor = DiffCursor(
            "@@ -1 +1 @@\n"
            "-old\n"
            "\\ No newline at end of file\n"
            "+new\n"
            "\\ No newline at end of file\n"
        )

        hunk = hunk_parser.parse(cursor)

        assert hunk.lines == (
            RawLine(RawLineType.LEFT, "old"),
            RawLine(RawLineType.RIGHT, "new"),
        )
        assert cursor.at_end()

    def test_body_text_keeps_prefix_like_content(self, hunk_parser):
        """Test that only the first prefix character is removed."""
        cursor = DiffCursor("@@ -1 +1 @@\n--- not a header\n++++ plus\n")

        hunk = hunk_parser.parse(cursor)

        assert hunk.lines == (
            RawLine(RawLineType.LEFT, "-- not a header"),
            RawLine(RawLineType.RIGHT, "+++ plus"),
        )

    def test_section_is_kept(self, hunk_parser):
        """Test that the hunk's section heading reaches the raw hunk."""
        cursor = DiffCursor("@@ -5,1 +5,1 @@ class Foo:\n x\n")

        hunk = hunk_parser.parse(cursor)

        assert hunk.section == "class Foo:"

    def test_empty_body(self, hunk_parser):
        """Test a header with no body lines."""
        cursor = DiffCursor("@@ -0,0 +0,0 @@\n")

        hunk = hunk_parser.parse(cursor)

        assert hunk.lines == ()

    def test_parse_at_end_raises(self, hunk_parser):
        """Test parsing a hunk when no input is left."""
        with pytest.raises(DiffSyntaxError, match="Expected hunk header"):
            hunk_parser.parse(DiffCursor(""))

    def test_invalid_header_is_not_consumed(self, hunk_parser):
        """Test that a failing header leaves the cursor in place."""
        cursor = DiffCursor("@@ -1,x +1,1 @@\n a\n")

        with pytest.raises(DiffFormatError):
            hunk_parser.parse(cursor)

        assert cursor.position == 0

    def test_header_error_reports_remaining_input(self, hunk_parser):
        """Test that hunk header errors carry the position and the unparsed text."""
        cursor = DiffCursor(" context\n@@ -1,1 +1,1\n-a\n+b\n")
        cursor.advance()

        with pytest.raises(DiffSyntaxError, match="missing its terminating '@@'") as exc_info:
            hunk_parser.parse(cursor)

        details = exc_info.value.error_details
        assert details['rule'] == 'hunk_header'
        assert details['line_number'] == 2
        assert details['remaining'] == "@@ -1,1 +1,1\n-a\n+b"
        assert details['line_content'] == "@@ -1,1 +1,1"

    def test_format_error_reports_remaining_input(self, hunk_parser):
        """Test that numeric errors keep their type and field details."""
        cursor = DiffCursor("@@ -1,x +1,1 @@\n a\n")

        with pytest.raises(DiffFormatError) as exc_info:
            hunk_parser.parse(cursor)

        details = exc_info.value.error_details
        assert details['field'] == 'count_left'
        assert details['remaining'] == "@@ -1,x +1,1 @@\n a"
