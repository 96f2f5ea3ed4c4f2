"""Tests for extracting outline documents from Python sources."""

from pathlib import Path

import pytest

from outline.core.errors import ExtractionError
from outline.core.ir import ParseOptions
from outline.extract import extract_comment_blocks, extract_documents, iter_python_files

MODULE_SOURCE = '''"""
outline: time
  time helpers
  functions:
    now() time
      current time
"""

import datetime

# outline: time
#   path: time
#   types:
#     duration
#       a period of time


def now():
    """Return the current time."""
    return datetime.datetime.now()  # not an outline block
'''

OTHER_SOURCE = '''# outline: time
#   functions:
#     after(d duration) time

# outline: strings
#   functions:
#     upper(s string) string
'''


class TestExtractCommentBlocks:
    def test_comment_runs_and_docstrings(self) -> None:
        blocks = extract_comment_blocks(MODULE_SOURCE)
        assert "outline: time\n  path: time\n  types:\n    duration\n      a period of time" in blocks
        assert any(block.startswith("outline: time\n  time helpers") for block in blocks)
        assert "Return the current time." in blocks

    def test_trailing_comments_are_ignored(self) -> None:
        blocks = extract_comment_blocks(MODULE_SOURCE)
        assert not any("not an outline block" in block for block in blocks)

    def test_separate_runs(self) -> None:
        blocks = extract_comment_blocks(OTHER_SOURCE)
        assert len(blocks) == 2

    def test_syntax_error(self) -> None:
        with pytest.raises(ExtractionError):
            extract_comment_blocks("def broken(:\n    pass\n", "broken.py")


class TestExtractDocuments:
    def test_merges_by_name(self, tmp_path: Path) -> None:
        (tmp_path / "a.py").write_text(MODULE_SOURCE)
        (tmp_path / "b.py").write_text(OTHER_SOURCE)

        docs = extract_documents([tmp_path], ParseOptions(sort_functions_alphabetically=True))

        assert [d.name for d in docs] == ["time", "strings"]
        time = docs[0]
        assert time.path == "time"
        assert time.description == "time helpers"
        assert [fn.signature for fn in time.functions] == ["now() time", "after(d duration) time"]
        assert [t.name for t in time.types] == ["duration"]
        assert docs.options.sort_functions_alphabetically is True

    def test_iter_python_files(self, tmp_path: Path) -> None:
        (tmp_path / "pkg").mkdir()
        (tmp_path / "pkg" / "b.py").write_text("")
        (tmp_path / "pkg" / "a.py").write_text("")
        (tmp_path / "notes.txt").write_text("")
        single = tmp_path / "single.py"
        single.write_text("")

        files = list(iter_python_files([tmp_path / "pkg", single]))
        assert files == [tmp_path / "pkg" / "a.py", tmp_path / "pkg" / "b.py", single]
