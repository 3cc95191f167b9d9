"""
Conversion of the raw parse tree into the numbered domain model.

Line numbers are derived by a single forward pass over each hunk: the
numbering state starts at the hunk header's start lines and every raw line
produces one numbered line plus the state for the next one.
"""

from functools import reduce
import logging
from typing import Iterable, List, NamedTuple, Sequence, Tuple

from diffview.diff_exceptions import DiffValidationError
from diffview.diff_raw_types import (
    CopyFileHeader,
    DeletedFileHeader,
    ExtendedHeader,
    IndexHeader,
    ModeChangeHeader,
    NewFileHeader,
    RawFile,
    RawHunk,
    RawLine,
    RawLineType,
    RenameFileHeader,
    SimilarityIndexHeader,
)
from diffview.diff_types import (
    AddedLine,
    ChangeKind,
    DiffFile,
    DiffHunk,
    DiffLine,
    RemovedLine,
    UnchangedLine,
)


class NumberingState(NamedTuple):
    """Next pre-image (left) and post-image (right) line numbers."""

    left: int
    right: int


def number_line(state: NumberingState, raw_line: RawLine) -> Tuple[NumberingState, DiffLine]:
    """
    Number one raw line.

    Args:
        state: Line numbers the raw line will receive
        raw_line: The line to number

    Returns:
        Tuple of (state for the following line, numbered line)
    """
    if raw_line.type == RawLineType.LEFT:
        return NumberingState(state.left + 1, state.right), RemovedLine(state.left, raw_line.text)

    if raw_line.type == RawLineType.RIGHT:
        return NumberingState(state.left, state.right + 1), AddedLine(state.right, raw_line.text)

    return (
        NumberingState(state.left + 1, state.right + 1),
        UnchangedLine(state.left, state.right, raw_line.text)
    )


def number_lines(start: NumberingState, raw_lines: Iterable[RawLine]) -> Tuple[NumberingState, List[DiffLine]]:
    """
    Number a sequence of raw lines by threading the state through number_line.

    Args:
        start: Numbering state seeded from the hunk header
        raw_lines: Raw lines in hunk order

    Returns:
        Tuple of (final state, numbered lines)
    """
    state = start
    numbered: List[DiffLine] = []
    for raw_line in raw_lines:
        state, diff_line = number_line(state, raw_line)
        numbered.append(diff_line)

    return state, numbered


def resolve_change_kind(headers: Sequence[ExtendedHeader]) -> ChangeKind:
    """
    Determine a file's change kind from its extended headers.

    Only new file, deleted file and rename headers signal a kind; among those
    the last one in input order wins.  Headers that signal nothing never reset
    an earlier decision.

    Args:
        headers: Extended headers in input order

    Returns:
        The resolved change kind, MODIFIED if no header signals one
    """
    return reduce(
        lambda kind, header: header.change_kind or kind,
        headers,
        ChangeKind.MODIFIED
    )


def resolve_revision_id(headers: Sequence[ExtendedHeader]) -> str:
    """
    Get the post-image blob hash from the index header.

    Args:
        headers: Extended headers in input order

    Returns:
        New hash of the last index header, or an empty string if there is none
    """
    revision_id = ''
    for header in headers:
        if isinstance(header, IndexHeader):
            revision_id = header.new_hash

    return revision_id


class DiffModelBuilder:
    """Builds DiffFile records from raw parsed file blocks."""

    def __init__(self, strict_counts: bool = True) -> None:
        """
        Initialize the model builder.

        Args:
            strict_counts: If True, reject hunks whose bodies do not match the
                line counts declared in their headers; otherwise log a warning
        """
        self._strict_counts = strict_counts
        self._logger = logging.getLogger("DiffModelBuilder")

    def build(self, raw_files: Iterable[RawFile]) -> List[DiffFile]:
        """
        Build the domain model for a whole document.

        Args:
            raw_files: Raw file blocks in input order

        Returns:
            One DiffFile per raw file block, in the same order

        Raises:
            DiffValidationError: If strict counts are enabled and a hunk does not match its header
        """
        return [self.build_file(raw_file) for raw_file in raw_files]

    def build_file(self, raw_file: RawFile) -> DiffFile:
        """
        Build one DiffFile.

        Args:
            raw_file: The raw file block

        Returns:
            The numbered file record
        """
        headers = raw_file.extended_headers
        change_kind = resolve_change_kind(headers)

        new_path = raw_file.new_path
        old_mode = ''
        new_mode = ''
        similarity: int | None = None
        for header in headers:
            if isinstance(header, (RenameFileHeader, CopyFileHeader)):
                new_path = header.to_path

            elif isinstance(header, ModeChangeHeader):
                old_mode = header.old_mode
                new_mode = header.new_mode

            elif isinstance(header, NewFileHeader):
                new_mode = header.mode

            elif isinstance(header, DeletedFileHeader):
                old_mode = header.mode

            elif isinstance(header, SimilarityIndexHeader):
                similarity = header.percent

        # The index line only carries a mode when the mode did not change
        for header in headers:
            if isinstance(header, IndexHeader) and header.mode:
                old_mode = old_mode or header.mode
                new_mode = new_mode or header.mode

        hunks = tuple(
            self.build_hunk(raw_hunk, raw_file.old_path, index)
            for index, raw_hunk in enumerate(raw_file.hunks)
        )

        self._logger.debug(
            "Built %s file %s with %d hunk(s)", change_kind.name, raw_file.old_path, len(hunks)
        )

        return DiffFile(
            change_kind=change_kind,
            path=raw_file.old_path,
            revision_id=resolve_revision_id(headers),
            hunks=hunks,
            new_path=new_path,
            old_mode=old_mode,
            new_mode=new_mode,
            similarity=similarity
        )

    def build_hunk(self, raw_hunk: RawHunk, path: str = '', index: int = 0) -> DiffHunk:
        """
        Number the lines of one hunk.

        Args:
            raw_hunk: The raw hunk
            path: Path of the file the hunk belongs to, for error reporting
            index: Position of the hunk within its file, for error reporting

        Returns:
            The numbered hunk

        Raises:
            DiffValidationError: If strict counts are enabled and the body does not match the header
        """
        hunk_range = raw_hunk.range
        start = NumberingState(hunk_range.start_left, hunk_range.start_right)
        end, lines = number_lines(start, raw_hunk.lines)
        self._check_counts(raw_hunk, end.left - start.left, end.right - start.right, path, index)
        return DiffHunk(lines=tuple(lines), section=raw_hunk.section)

    def _check_counts(self, raw_hunk: RawHunk, left_seen: int, right_seen: int, path: str, index: int) -> None:
        """
        Compare the lines consumed on each side with the header's declared counts.

        Args:
            raw_hunk: The hunk being checked
            left_seen: Removed plus context lines in the body
            right_seen: Added plus context lines in the body
            path: Path of the file the hunk belongs to
            index: Position of the hunk within its file
        """
        hunk_range = raw_hunk.range
        if left_seen == hunk_range.count_left and right_seen == hunk_range.count_right:
            return

        message = (
            f"Hunk {index + 1} of {path} declares -{hunk_range.count_left} +{hunk_range.count_right} "
            f"lines but contains -{left_seen} +{right_seen}"
        )

        if not self._strict_counts:
            self._logger.warning(message)
            return

        raise DiffValidationError(
            message,
            {
                'phase': 'validation',
                'path': path,
                'hunk': index + 1,
                'declared': [hunk_range.count_left, hunk_range.count_right],
                'actual': [left_seen, right_seen],
            }
        )
