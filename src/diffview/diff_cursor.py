"""Line cursor over a diff document."""

from typing import Any, List

from diffview.diff_exceptions import DiffSyntaxError


class DiffCursor:
    """
    Read position within the lines of a diff document.

    Every grammar rule consumes whole lines through a shared cursor, so the
    cursor position is always the first line no rule has accounted for yet.
    """

    REMAINING_PREVIEW_CHARS = 200

    def __init__(self, text: str) -> None:
        """
        Initialize the cursor.

        Args:
            text: Complete diff document
        """
        lines = text.split('\n')

        # A trailing newline terminates the last line rather than starting a new one
        if lines and lines[-1] == '':
            lines.pop()

        self._lines: List[str] = lines
        self._position = 0

    @property
    def position(self) -> int:
        """Index of the current line (0-based)."""
        return self._position

    @property
    def line_number(self) -> int:
        """Physical line number of the current line (1-based)."""
        return self._position + 1

    def at_end(self) -> bool:
        """Check whether all lines have been consumed."""
        return self._position >= len(self._lines)

    def peek(self) -> str | None:
        """
        Get the current line without consuming it.

        Returns:
            The current line, or None at the end of input
        """
        if self.at_end():
            return None

        return self._lines[self._position]

    def advance(self) -> str:
        """
        Consume and return the current line.

        Returns:
            The consumed line

        Raises:
            DiffSyntaxError: If there is no line left to consume
        """
        if self.at_end():
            raise self.error("Unexpected end of input", "line")

        line = self._lines[self._position]
        self._position += 1
        return line

    def skip_blank_lines(self) -> None:
        """Consume lines that contain only whitespace."""
        while not self.at_end() and not self._lines[self._position].strip():
            self._position += 1

    def remaining_text(self) -> str:
        """Get the unconsumed text from the current line on."""
        return '\n'.join(self._lines[self._position:])

    def error(
        self,
        message: str,
        rule: str,
        error_type: type[DiffSyntaxError] = DiffSyntaxError,
        **details: Any
    ) -> DiffSyntaxError:
        """
        Build a syntax error describing the current position.

        Args:
            message: Human readable description of the failure
            rule: Name of the grammar rule that failed
            error_type: DiffSyntaxError or one of its subclasses
            **details: Additional entries for error_details

        Returns:
            The error, for the caller to raise
        """
        remaining = self.remaining_text()
        if len(remaining) > self.REMAINING_PREVIEW_CHARS:
            remaining = remaining[:self.REMAINING_PREVIEW_CHARS] + '...'

        error_details: dict[str, Any] = {
            'rule': rule,
            'line_number': self.line_number,
            'remaining': remaining,
        }
        error_details.update(details)
        return error_type(f"{message} (line {self.line_number})", error_details)
