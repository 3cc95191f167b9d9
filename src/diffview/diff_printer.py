"""
Terminal rendering of parsed diffs.

Each file is drawn as a box with a line number gutter on the left:

    ───┬──────────────────
       │ M file.txt @e475af3
    ───┼──────────────────
     1 │ apples
     4 │-bannannass
     4 │+bananas
    ───┴──────────────────
"""

import shutil
from typing import List, Sequence, Tuple

from diffview.diff_types import AddedLine, ChangeKind, DiffFile, DiffHunk, DiffLine, RemovedLine, UnchangedLine
from diffview.diff_view_settings import DiffViewSettings


class DiffColors:
    """ANSI color codes for terminal output."""
    RESET = '\033[0m'
    BOLD = '\033[1m'
    RED = '\033[31m'
    GREEN = '\033[32m'
    YELLOW = '\033[33m'
    BLUE = '\033[34m'
    MAGENTA = '\033[35m'
    WHITE = '\033[37m'
    GREY = '\033[38;5;244m'

    def __init__(self, enabled: bool = True) -> None:
        """
        Initialize the color palette.

        Args:
            enabled: If False, paint() returns text unchanged
        """
        self.enabled = enabled

    def paint(self, text: str, *styles: str) -> str:
        """
        Wrap text in the given styles.

        Args:
            text: Text to style
            *styles: Escape sequences to apply

        Returns:
            Styled text, or the text unchanged if colors are disabled
        """
        if not self.enabled or not styles or not text:
            return text

        return f"{''.join(styles)}{text}{self.RESET}"


class DiffPrinter:
    """Renders DiffFile records as boxed, colored terminal output."""

    HORIZONTAL = '─'
    ANCHOR_UP = '┬'
    ANCHOR_MIDDLE = '┼'
    ANCHOR_DOWN = '┴'
    SEPARATOR = '│'
    CUT_DOWN = '⸝⸜'
    CUT_UP = '⸍⸌'
    RENAME_ARROW = '→'

    KIND_SYMBOLS = {
        ChangeKind.ADDED: ('A', DiffColors.GREEN),
        ChangeKind.MODIFIED: ('M', DiffColors.YELLOW),
        ChangeKind.RENAMED: ('R', DiffColors.MAGENTA),
        ChangeKind.DELETED: ('D', DiffColors.RED),
    }

    MIN_CONTENT_WIDTH = 10

    def __init__(self, settings: DiffViewSettings | None = None) -> None:
        """
        Initialize the printer.

        Args:
            settings: Rendering settings; defaults are used if None
        """
        self._settings = settings or DiffViewSettings.create_default()
        self._colors = DiffColors(enabled=self._settings.color)

    def render(self, files: Sequence[DiffFile]) -> str:
        """
        Render all files.

        Args:
            files: Parsed files in display order

        Returns:
            The rendered text, one newline-terminated row per output line
        """
        width = self._terminal_width()
        rows: List[str] = []
        for diff_file in files:
            rows.extend(self.render_file(diff_file, width))

        return ''.join(f"{row}\n" for row in rows)

    def render_file(self, diff_file: DiffFile, width: int) -> List[str]:
        """
        Render one file.

        Args:
            diff_file: The file to render
            width: Total width of the output in characters

        Returns:
            Output rows without newlines
        """
        ln_width = len(str(diff_file.max_line_number())) + 3

        if self._settings.column_view:
            side_width = max(self.MIN_CONTENT_WIDTH, (width - 2 * ln_width) // 2)
            width = 2 * (ln_width + side_width)
            anchors = [ln_width, 2 * ln_width + side_width]

        else:
            width = max(width, ln_width + self.MIN_CONTENT_WIDTH)
            side_width = width - ln_width
            anchors = [ln_width]

        rows = [
            self._horizontal_line(width, anchors, self.ANCHOR_UP),
            self._title(diff_file, ln_width),
            self._horizontal_line(width, anchors, self.ANCHOR_MIDDLE),
        ]

        for index, hunk in enumerate(diff_file.hunks):
            if index > 0:
                rows.extend(self._cut(width))

            if self._settings.column_view:
                rows.extend(self._column_rows(hunk, ln_width, side_width))

            else:
                rows.extend(self._line_row(line, ln_width) for line in hunk.lines)

        rows.append(self._horizontal_line(width, anchors, self.ANCHOR_DOWN))
        return rows

    def _terminal_width(self) -> int:
        """Get the configured width, falling back to the terminal width."""
        if self._settings.width:
            return self._settings.width

        return shutil.get_terminal_size().columns

    def _horizontal_line(self, width: int, anchors: List[int], anchor: str) -> str:
        """
        Build a horizontal rule with anchor characters at the gutter separators.

        Args:
            width: Total width of the rule
            anchors: 1-based columns that hold the anchor character
            anchor: Character joining the rule to the vertical separator

        Returns:
            The rule
        """
        chars = [self.HORIZONTAL] * width
        for column in anchors:
            if 0 < column <= width:
                chars[column - 1] = anchor

        return self._colors.paint(''.join(chars), DiffColors.GREY)

    def _cut(self, width: int) -> List[str]:
        """Build the two rows drawn between consecutive hunks of a file."""
        pairs = max(1, width // 2)
        return [
            self._colors.paint(self.CUT_DOWN * pairs, DiffColors.GREY),
            self._colors.paint(self.CUT_UP * pairs, DiffColors.GREY),
        ]

    def _title(self, diff_file: DiffFile, ln_width: int) -> str:
        """
        Build the title row holding the change kind, path and revision.

        Args:
            diff_file: The file being rendered
            ln_width: Width of the line number gutter

        Returns:
            The title row
        """
        symbol, color = self.KIND_SYMBOLS[diff_file.change_kind]

        path = diff_file.path
        if diff_file.change_kind == ChangeKind.RENAMED and diff_file.new_path and diff_file.new_path != path:
            path = f"{path} {self.RENAME_ARROW} {diff_file.new_path}"

        title = (
            f"{' ' * (ln_width - 1)}{self._colors.paint(self.SEPARATOR, DiffColors.GREY)} "
            f"{self._colors.paint(symbol, DiffColors.BOLD, color)} "
            f"{self._colors.paint(path, DiffColors.BOLD)}"
        )

        if diff_file.revision_id:
            title += (
                f" {self._colors.paint('@', DiffColors.BOLD, DiffColors.BLUE)}"
                f"{self._colors.paint(diff_file.revision_id, DiffColors.BLUE)}"
            )

        return title

    def _gutter(self, line_number: int | None, ln_width: int) -> str:
        """
        Build the line number gutter for one row.

        Args:
            line_number: Number to show, or None for an empty gutter
            ln_width: Width of the gutter including the separator

        Returns:
            The gutter, exactly ln_width characters wide before styling
        """
        number = '' if line_number is None else str(line_number)
        padding = ' ' * (ln_width - 2 - len(number))
        return (
            f"{padding}{self._colors.paint(number, DiffColors.GREY)} "
            f"{self._colors.paint(self.SEPARATOR, DiffColors.GREY)}"
        )

    def _styled_text(self, line: DiffLine) -> Tuple[str, str]:
        """
        Get the prefixed text and color of a line.

        Args:
            line: The line to style

        Returns:
            Tuple of (text with its diff prefix, color)
        """
        text = line.text.expandtabs(self._settings.tab_size)
        if isinstance(line, AddedLine):
            return f"+{text}", DiffColors.GREEN

        if isinstance(line, RemovedLine):
            return f"-{text}", DiffColors.RED

        return f" {text}", DiffColors.WHITE

    def _line_row(self, line: DiffLine, ln_width: int) -> str:
        """
        Build a single-column row.

        Removed lines show their pre-image number; added and unchanged lines
        show their post-image number.

        Args:
            line: The line to render
            ln_width: Width of the line number gutter

        Returns:
            The row
        """
        if isinstance(line, UnchangedLine):
            line_number = line.post_line_number

        else:
            line_number = line.line_number

        text, color = self._styled_text(line)
        return f"{self._gutter(line_number, ln_width)}{self._colors.paint(text, color)}"

    def _column_cell(
        self,
        line: DiffLine | None,
        line_number: int | None,
        ln_width: int,
        side_width: int,
        pad: bool = True
    ) -> str:
        """
        Build one side of a two-column row.

        Args:
            line: The line for this side, or None for an empty cell
            line_number: Number to show in the gutter
            ln_width: Width of the line number gutter
            side_width: Width of the text area
            pad: If True, pad the text area to side_width

        Returns:
            The cell
        """
        if line is None:
            return self._gutter(None, ln_width) + (' ' * side_width if pad else '')

        text, color = self._styled_text(line)
        text = text[:side_width]
        padding = ' ' * (side_width - len(text)) if pad else ''
        return f"{self._gutter(line_number, ln_width)}{self._colors.paint(text, color)}{padding}"

    def _column_rows(self, hunk: DiffHunk, ln_width: int, side_width: int) -> List[str]:
        """
        Build the two-column rows of a hunk.

        Unchanged lines appear on both sides.  A run of removed lines is paired
        row by row with the run of added lines that immediately follows it.

        Args:
            hunk: The hunk to render
            ln_width: Width of each line number gutter
            side_width: Width of each text area

        Returns:
            The rows
        """
        rows: List[str] = []
        lines = hunk.lines
        i = 0
        while i < len(lines):
            line = lines[i]
            if isinstance(line, UnchangedLine):
                rows.append(
                    self._column_cell(line, line.pre_line_number, ln_width, side_width) +
                    self._column_cell(line, line.post_line_number, ln_width, side_width, pad=False)
                )
                i += 1
                continue

            removed: List[RemovedLine] = []
            while i < len(lines) and isinstance(lines[i], RemovedLine):
                removed.append(lines[i])  # type: ignore[arg-type]
                i += 1

            added: List[AddedLine] = []
            while i < len(lines) and isinstance(lines[i], AddedLine):
                added.append(lines[i])  # type: ignore[arg-type]
                i += 1

            for k in range(max(len(removed), len(added))):
                left = removed[k] if k < len(removed) else None
                right = added[k] if k < len(added) else None
                rows.append(
                    self._column_cell(left, left.line_number if left else None, ln_width, side_width) +
                    self._column_cell(right, right.line_number if right else None, ln_width, side_width, pad=False)
                )

        return rows
