"""
Raw parse tree for git diffs.

These types mirror the text as it appears in the diff: hunk lines carry their
text but no line numbers, and file blocks carry their extended headers
unresolved.  DiffModelBuilder turns them into the numbered domain model.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import NamedTuple, Tuple, Union

from diffview.diff_types import ChangeKind


class RawLineType(Enum):
    """Which image(s) a raw hunk line belongs to."""
    LEFT = auto()   # Removed, pre-image only
    RIGHT = auto()  # Added, post-image only
    BOTH = auto()   # Context, present in both images


@dataclass(frozen=True)
class RawLine:
    """A hunk body line without a prefix character."""

    type: RawLineType
    text: str


class HunkRange(NamedTuple):
    """The four integers of a `@@ -a,b +c,d @@` hunk header."""

    start_left: int
    count_left: int
    start_right: int
    count_right: int


@dataclass(frozen=True)
class RawHunk:
    """A hunk header together with its unnumbered body lines."""

    range: HunkRange
    lines: Tuple[RawLine, ...] = ()
    section: str = ""


@dataclass(frozen=True)
class ModeChangeHeader:
    """`old mode <m>` / `new mode <m>`."""

    old_mode: str
    new_mode: str

    @property
    def change_kind(self) -> ChangeKind | None:
        return None


@dataclass(frozen=True)
class DeletedFileHeader:
    """`deleted file mode <m>`."""

    mode: str

    @property
    def change_kind(self) -> ChangeKind | None:
        return ChangeKind.DELETED


@dataclass(frozen=True)
class NewFileHeader:
    """`new file mode <m>`."""

    mode: str

    @property
    def change_kind(self) -> ChangeKind | None:
        return ChangeKind.ADDED


@dataclass(frozen=True)
class CopyFileHeader:
    """`copy from <p>` / `copy to <p>`."""

    from_path: str
    to_path: str

    @property
    def change_kind(self) -> ChangeKind | None:
        return None


@dataclass(frozen=True)
class RenameFileHeader:
    """`rename from <p>` / `rename to <p>`."""

    from_path: str
    to_path: str

    @property
    def change_kind(self) -> ChangeKind | None:
        return ChangeKind.RENAMED


@dataclass(frozen=True)
class SimilarityIndexHeader:
    """`similarity index <n>%`."""

    percent: int

    @property
    def change_kind(self) -> ChangeKind | None:
        return None


@dataclass(frozen=True)
class DissimilarityIndexHeader:
    """`dissimilarity index <n>%`."""

    percent: int

    @property
    def change_kind(self) -> ChangeKind | None:
        return None


@dataclass(frozen=True)
class IndexHeader:
    """`index <old_hash>..<new_hash>[ <mode>]`."""

    old_hash: str
    new_hash: str
    mode: str = ""

    @property
    def change_kind(self) -> ChangeKind | None:
        return None


ExtendedHeader = Union[
    ModeChangeHeader,
    DeletedFileHeader,
    NewFileHeader,
    CopyFileHeader,
    RenameFileHeader,
    SimilarityIndexHeader,
    DissimilarityIndexHeader,
    IndexHeader,
]


@dataclass(frozen=True)
class RawFile:
    """One `diff --git` block before line numbering."""

    old_path: str
    new_path: str
    extended_headers: Tuple[ExtendedHeader, ...] = ()
    hunks: Tuple[RawHunk, ...] = ()
    line_number: int = 0  # Physical line of the `diff --git` header, 1-based
