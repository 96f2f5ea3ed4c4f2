"""
Canonical serializer for outline documents.

Writes a Document back out in the notation the parser reads. The output is a
canonical projection: parsing it again yields a tree equal to the one that was
serialized, but it does not reproduce the original input byte for byte.
"""

from __future__ import annotations

from collections.abc import Iterable

from .ir import Document, Example, Function, TypeSpec
from .lexer import TokenType


class _Writer:
    """Accumulates indented lines."""

    def __init__(self, indent: str):
        self.indent = indent
        self.lines: list[str] = []

    def line(self, depth: int, text: str) -> None:
        self.lines.append(self.indent * depth + text)

    def keyword(self, depth: int, keyword: TokenType, value: str = "") -> None:
        if value:
            self.line(depth, f"{keyword.value}: {value}")
        else:
            self.line(depth, f"{keyword.value}:")

    def block(self, depth: int, text: str) -> None:
        for part in text.split("\n"):
            self.line(depth, part)

    def render(self) -> str:
        return "".join(line + "\n" for line in self.lines)


def marshal_indent(doc: Document, depth: int = 0, indent: str = "  ") -> str:
    """
    Render a document in canonical outline notation.

    Args:
        doc: Document to render
        depth: Indent depth of the ``outline:`` line
        indent: Text of one indent unit (a tab, or two spaces)

    Returns:
        The rendered text, one line per entry, newline terminated
    """
    w = _Writer(indent)
    w.keyword(depth, TokenType.OUTLINE, doc.name)
    if doc.path:
        w.keyword(depth + 1, TokenType.PATH, doc.path)
    if doc.description:
        w.block(depth + 1, doc.description)
    if doc.functions:
        w.keyword(depth + 1, TokenType.FUNCTIONS)
        for fn in doc.functions:
            _write_function(w, depth + 2, fn)
    if doc.types:
        w.keyword(depth + 1, TokenType.TYPES)
        for t in doc.types:
            _write_type(w, depth + 2, t)
    return w.render()


def marshal_docs(docs: Iterable[Document], indent: str = "  ") -> str:
    """Render several documents, separated by blank lines."""
    return "\n".join(marshal_indent(doc, 0, indent) for doc in docs)


def _write_function(w: _Writer, depth: int, fn: Function) -> None:
    w.line(depth, fn.signature)
    if fn.description:
        w.block(depth + 1, fn.description)
    if fn.params:
        w.keyword(depth + 1, TokenType.PARAMS)
        for param in fn.params:
            w.line(depth + 2, _name_type(param.name, param.type))
            if param.description:
                w.block(depth + 3, param.description)
    if fn.return_:
        w.keyword(depth + 1, TokenType.RETURN, fn.return_)
    if fn.examples:
        w.keyword(depth + 1, TokenType.EXAMPLES)
        for example in fn.examples:
            _write_example(w, depth + 2, example)


def _write_example(w: _Writer, depth: int, example: Example) -> None:
    w.line(depth, example.name)
    if example.code:
        w.keyword(depth + 1, TokenType.CODE)
        w.block(depth + 2, example.code)
    if example.description:
        w.block(depth + 1, example.description)


def _write_type(w: _Writer, depth: int, t: TypeSpec) -> None:
    w.line(depth, t.name)
    if t.description:
        w.block(depth + 1, t.description)
    if t.fields:
        w.keyword(depth + 1, TokenType.FIELDS)
        for field in t.fields:
            w.line(depth + 2, _name_type(field.name, field.type))
            if field.description:
                w.block(depth + 3, field.description)
    if t.methods:
        w.keyword(depth + 1, TokenType.METHODS)
        for method in t.methods:
            _write_function(w, depth + 2, method)
    if t.operators:
        w.keyword(depth + 1, TokenType.OPERATORS)
        for op in t.operators:
            w.line(depth + 2, op.expression)
            if op.description:
                w.block(depth + 3, op.description)


def _name_type(name: str, type_: str) -> str:
    if type_:
        return f"{name} {type_}"
    return name
