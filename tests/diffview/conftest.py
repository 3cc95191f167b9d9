"""Shared fixtures and utilities for diffview tests."""

import pytest
from typing import List, Tuple

from diffview.diff_model_builder import DiffModelBuilder
from diffview.diff_parser import DiffParser
from diffview.diff_types import AddedLine, DiffHunk, RemovedLine, UnchangedLine


SINGLE_HUNK_DIFF = """diff --git a/file.txt b/file.txt
index c64d930..e475af3 100644
--- a/file.txt
+++ b/file.txt
@@ -1,5 +1,5 @@
 apples
 pears
 strawberries
-bannannass
-peacches
+bananas
+peaches
"""

MULTI_FILE_DIFF = """diff --git a/file1.txt b/file1.txt
index 534cc51..0ee5d0d 100644
--- a/file1.txt
+++ b/file1.txt
@@ -1,1 +1,3 @@
-Remove line and add another
+Remove line and add anothers
+Add more lines
+And change the first
diff --git a/file2_renamed.txt b/file2_renamed.txt
index 35dee2c..a66e579 100644
--- a/file2_renamed.txt
+++ b/file2_renamed.txt
@@ -1,4 +1,4 @@
 This is file 2
-Line between
+Line betwern
 Second line
 line at the end
"""

MULTI_HUNK_DIFF = """diff --git a/file2.txt b/file2.txt
index 772563d..01d1a6e 100644
--- a/file2_renamed.txt
+++ b/file2_renamed.txt
@@ -1,3 +1,7 @@
+And lines on top
+very good expanded
+that it must break it
+in two parts...
 This is file 2
 Line betwern
 Second line
@@ -5,4 +9,7 @@ line at the end
 Line
 stays
 here
+And even more lines
+
 Adding more lines of ...
+And more and more
"""

NEW_FILE_DIFF = """diff --git a/new.txt b/new.txt
new file mode 100644
index 0000000..3b18e51
@@ -0,0 +1,3 @@
+first
+second
+third
"""

DELETED_FILE_DIFF = """diff --git a/gone.txt b/gone.txt
deleted file mode 100644
index 3b18e51..0000000
--- a/gone.txt
+++ /dev/null
@@ -1,2 +0,0 @@
-hello
-world
"""

PURE_RENAME_DIFF = """diff --git a/old_name.txt b/new_name.txt
similarity index 100%
rename from old_name.txt
rename to new_name.txt
"""

MODE_CHANGE_DIFF = """diff --git a/script.sh b/script.sh
old mode 100644
new mode 100755
"""


@pytest.fixture
def parser():
    """Create a parser that enforces hunk line counts."""
    return DiffParser()


@pytest.fixture
def lenient_parser():
    """Create a parser that tolerates hunk line count mismatches."""
    return DiffParser(strict_counts=False)


@pytest.fixture
def builder():
    """Create a model builder that enforces hunk line counts."""
    return DiffModelBuilder()


class NumberingHelpers:
    """Helper utilities for checking hunk numbering."""

    @staticmethod
    def pre_numbers(hunk: DiffHunk) -> List[int]:
        """Get the pre-image line numbers of a hunk in emission order."""
        numbers = []
        for line in hunk.lines:
            if isinstance(line, RemovedLine):
                numbers.append(line.line_number)

            elif isinstance(line, UnchangedLine):
                numbers.append(line.pre_line_number)

        return numbers

    @staticmethod
    def post_numbers(hunk: DiffHunk) -> List[int]:
        """Get the post-image line numbers of a hunk in emission order."""
        numbers = []
        for line in hunk.lines:
            if isinstance(line, AddedLine):
                numbers.append(line.line_number)

            elif isinstance(line, UnchangedLine):
                numbers.append(line.post_line_number)

        return numbers

    @staticmethod
    def is_consecutive(numbers: List[int]) -> bool:
        """Check that numbers increase by exactly one at each step."""
        return all(b - a == 1 for a, b in zip(numbers, numbers[1:]))

    @staticmethod
    def counts(hunk: DiffHunk) -> Tuple[int, int]:
        """Get the number of pre-image and post-image lines of a hunk."""
        return len(NumberingHelpers.pre_numbers(hunk)), len(NumberingHelpers.post_numbers(hunk))


@pytest.fixture
def helpers():
    """Provide numbering helper utilities."""
    return NumberingHelpers


@pytest.fixture
def single_hunk_diff():
    """A one-file diff with a single hunk holding context, removed and added lines."""
    return SINGLE_HUNK_DIFF


@pytest.fixture
def multi_file_diff():
    """A diff touching two files."""
    return MULTI_FILE_DIFF


@pytest.fixture
def multi_hunk_diff():
    """A one-file diff with two hunks."""
    return MULTI_HUNK_DIFF


@pytest.fixture
def new_file_diff():
    """A diff adding a file, without the ---/+++ filename lines."""
    return NEW_FILE_DIFF


@pytest.fixture
def deleted_file_diff():
    """A diff deleting a file."""
    return DELETED_FILE_DIFF


@pytest.fixture
def pure_rename_diff():
    """A diff renaming a file without content changes."""
    return PURE_RENAME_DIFF


@pytest.fixture
def mode_change_diff():
    """A diff changing only a file's mode."""
    return MODE_CHANGE_DIFF
