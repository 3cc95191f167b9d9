"""Classification of single physical diff lines."""

from enum import Enum, auto


class DiffLineClass(Enum):
    """What a single physical line of diff text is."""
    CONTEXT = auto()
    REMOVED = auto()
    ADDED = auto()
    NO_NEWLINE_MARKER = auto()
    HUNK_HEADER = auto()
    FILE_HEADER = auto()
    EMPTY = auto()
    OTHER = auto()


HUNK_HEADER_PREFIX = '@@ -'
FILE_HEADER_PREFIX = 'diff --git '


def classify_line(line: str) -> DiffLineClass:
    """
    Classify one line of diff text by its leading characters.

    Grammar punctuation is checked before body lines so that a hunk or file
    header is never mistaken for a body line.

    Args:
        line: A single line with its newline stripped

    Returns:
        The line's classification
    """
    if not line:
        return DiffLineClass.EMPTY

    if line.startswith(HUNK_HEADER_PREFIX):
        return DiffLineClass.HUNK_HEADER

    if line.startswith(FILE_HEADER_PREFIX):
        return DiffLineClass.FILE_HEADER

    first = line[0]
    if first == ' ':
        return DiffLineClass.CONTEXT

    if first == '-':
        return DiffLineClass.REMOVED

    if first == '+':
        return DiffLineClass.ADDED

    if first == '\\':
        return DiffLineClass.NO_NEWLINE_MARKER

    return DiffLineClass.OTHER
