"""Domain model produced by the diff parser and consumed by the renderer."""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Tuple, Union


class ChangeKind(Enum):
    """How a file was changed."""
    ADDED = auto()
    MODIFIED = auto()
    RENAMED = auto()
    DELETED = auto()


@dataclass(frozen=True)
class AddedLine:
    """A line that only exists in the post-image."""

    line_number: int
    text: str


@dataclass(frozen=True)
class RemovedLine:
    """A line that only exists in the pre-image."""

    line_number: int
    text: str


@dataclass(frozen=True)
class UnchangedLine:
    """A context line present in both the pre-image and the post-image."""

    pre_line_number: int
    post_line_number: int
    text: str


DiffLine = Union[AddedLine, RemovedLine, UnchangedLine]


@dataclass(frozen=True)
class DiffHunk:
    """A numbered hunk of a file."""

    lines: Tuple[DiffLine, ...] = ()
    section: str = ""  # Free text after the closing @@ of the hunk header

    def max_line_number(self) -> int:
        """
        Get the largest pre- or post-image line number in this hunk.

        Returns:
            Largest line number, or 0 for a hunk without lines
        """
        largest = 0
        for line in self.lines:
            if isinstance(line, UnchangedLine):
                largest = max(largest, line.pre_line_number, line.post_line_number)

            else:
                largest = max(largest, line.line_number)

        return largest


@dataclass(frozen=True)
class DiffFile:
    """
    All changes made to one file.

    One DiffFile is produced per `diff --git` block, in input order.  `path` is
    always the pre-image path; `new_path` is the post-image path, which only
    differs from `path` for renames and copies.
    """

    change_kind: ChangeKind
    path: str
    revision_id: str = ""
    hunks: Tuple[DiffHunk, ...] = ()
    new_path: str = ""
    old_mode: str = ""
    new_mode: str = ""
    similarity: int | None = None

    def max_line_number(self) -> int:
        """
        Get the largest pre- or post-image line number across all hunks.

        Used by renderers to size the line number gutter.

        Returns:
            Largest line number, or 0 if the file has no numbered lines
        """
        return max((hunk.max_line_number() for hunk in self.hunks), default=0)
