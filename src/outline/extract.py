"""
Extraction of outline documents from Python source files.

Outline documents can be embedded in comment blocks or docstrings. Every
comment run and every module, class and function docstring is parsed on its
own; documents that share a name are then merged.
"""

from __future__ import annotations

import ast
import io
import logging
import tokenize
from collections.abc import Iterable, Iterator
from pathlib import Path
from textwrap import dedent

from outline.core.errors import ExtractionError
from outline.core.ir import Docs, Document, ParseOptions, merge_by_name
from outline.core.parser import parse_all

logger = logging.getLogger(__name__)


def _comment_runs(source: str) -> Iterator[str]:
    """Yield runs of consecutive full-line comments, with the markers removed."""
    run: list[str] = []
    last_line = 0
    readline = io.StringIO(source).readline
    for tok in tokenize.generate_tokens(readline):
        if tok.type != tokenize.COMMENT or not tok.line.lstrip().startswith("#"):
            continue
        row = tok.start[0]
        if run and row != last_line + 1:
            yield dedent("\n".join(run))
            run = []
        run.append(tok.string[1:])
        last_line = row
    if run:
        yield dedent("\n".join(run))


def _docstrings(source: str, filename: str) -> Iterator[str]:
    tree = ast.parse(source, filename=filename)
    for node in ast.walk(tree):
        if isinstance(node, (ast.Module, ast.ClassDef, ast.FunctionDef, ast.AsyncFunctionDef)):
            doc = ast.get_docstring(node, clean=True)
            if doc:
                yield doc


def extract_comment_blocks(source: str, filename: str = "<string>") -> list[str]:
    """
    Collect comment runs and docstrings from Python source.

    Raises:
        ExtractionError: If the source cannot be tokenized or parsed
    """
    try:
        return list(_comment_runs(source)) + list(_docstrings(source, filename))
    except (SyntaxError, tokenize.TokenError) as e:
        raise ExtractionError(f"Cannot read comments from {filename}: {e}") from e


def iter_python_files(paths: Iterable[Path]) -> Iterator[Path]:
    """Expand directories into the .py files below them, in sorted order."""
    for path in paths:
        if path.is_dir():
            yield from sorted(path.rglob("*.py"))
        else:
            yield path


def extract_documents(paths: Iterable[Path], options: ParseOptions | None = None) -> Docs:
    """
    Parse the outline documents embedded in Python files.

    Documents with the same name are merged into the first one found.

    Args:
        paths: Files or directories to scan
        options: Parse options carried on the result

    Returns:
        Docs with one document per distinct name
    """
    options = options or ParseOptions()
    found: list[Document] = []
    for path in iter_python_files(paths):
        source = path.read_text(encoding="utf-8")
        for block in extract_comment_blocks(source, str(path)):
            docs = parse_all(block, options, source=str(path))
            if len(docs):
                logger.debug("%s: found %d documents", path, len(docs))
            found.extend(docs)
    return Docs(documents=merge_by_name(found), options=options)
