"""
Recursive descent parser for the outline notation.

Pulls tokens from a Scanner through a TokenCursor, which tracks the indent of
the current line and holds at most one pushed-back token. Every grammar rule
reads its children at a required indent and pushes back the first token that
does not belong to it, so the enclosing rule can look at it again.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import TextIO

from .errors import OutlineParseError, make_parse_error
from .ir import (
    Docs,
    Document,
    Example,
    FieldSpec,
    Function,
    Operator,
    Param,
    ParseOptions,
    TypeSpec,
)
from .lexer import Scanner, Token, TokenType

logger = logging.getLogger(__name__)

# Indent reported for EOF; lower than any real indent so every scope closes
EOF_INDENT = -1

# Extra depth inside a text block is kept as this many spaces per level
BLOCK_INDENT = "  "


class TokenCursor:
    """
    Token source with indentation tracking and one token of pushback.

    INDENT tokens raise the current indent, NEWLINE tokens reset it. Neither
    is returned to the caller: next() yields only significant tokens, paired
    with the indent of the line they start on.
    """

    def __init__(self, scanner: Scanner):
        self.scanner = scanner
        self.indent = 0
        self._last: tuple[Token, int] | None = None
        self._pushed_back = False

    def next(self) -> tuple[Token, int]:
        """Consume and return the next significant token and its indent."""
        if self._pushed_back:
            if self._last is None:
                raise RuntimeError("pushback set with no token read")
            self._pushed_back = False
            return self._last

        while True:
            token = self.scanner.scan()
            if token.type == TokenType.NEWLINE:
                self.indent = 0
            elif token.type == TokenType.INDENT:
                self.indent += 1
            else:
                break

        indent = EOF_INDENT if token.type == TokenType.EOF else self.indent
        self._last = (token, indent)
        return self._last

    def unscan(self) -> None:
        """Push the last token back so the next call to next() returns it."""
        if self._last is None:
            raise RuntimeError("unscan called before any token was read")
        self._pushed_back = True

    def peek(self) -> tuple[Token, int]:
        """Return the next token without consuming it."""
        result = self.next()
        self.unscan()
        return result


def split_name_type(text: str) -> tuple[str, str]:
    """
    Split a ``name [type]`` line on single spaces.

    Only the first two segments are used; anything past the type is dropped.
    """
    parts = text.split(" ")
    if len(parts) > 1:
        return parts[0], parts[1]
    return parts[0], ""


def _join(existing: str, more: str) -> str:
    if not existing:
        return more
    if not more:
        return existing
    return f"{existing} {more}"


class Parser:
    """
    Parser for outline streams.

    A stream may contain any number of documents; text before the first
    ``outline:`` keyword is skipped.
    """

    def __init__(
        self,
        stream: TextIO | str,
        options: ParseOptions | None = None,
        source: str | None = None,
    ):
        """
        Initialize parser.

        Args:
            stream: Text stream or string to parse
            options: Parse options (defaults to no sorting)
            source: Input name for error messages
        """
        self.options = options or ParseOptions()
        self.source = source or getattr(stream, "name", None) or "<string>"
        self.cursor = TokenCursor(Scanner(stream))

    # =========================================================================
    # Entry points
    # =========================================================================

    def parse_one(self) -> Document | None:
        """Read the next document, or None at end of input."""
        while True:
            token, indent = self.cursor.next()
            if token.type == TokenType.EOF:
                return None
            if token.type == TokenType.OUTLINE:
                return self.read_document(token, indent)
            logger.debug("%s: skipping %r outside of a document", self.source, token)

    def __iter__(self) -> Iterator[Document]:
        while True:
            doc = self.parse_one()
            if doc is None:
                return
            yield doc

    def parse_all(self) -> Docs:
        """
        Read every document in the stream.

        Raises:
            OutlineParseError: On a structural error. Documents completed
                before the error are available as ``exc.documents``.
        """
        docs = Docs(options=self.options)
        try:
            for doc in self:
                docs.append(doc)
        except OutlineParseError as e:
            e.documents = list(docs.documents)
            raise
        return docs

    # =========================================================================
    # Documents
    # =========================================================================

    def read_document(self, keyword: Token, base_indent: int) -> Document:
        doc = Document()
        token, indent = self.cursor.peek()
        if token.type == TokenType.TEXT and indent >= base_indent:
            self.cursor.next()
            doc.name = token.text

        logger.debug("%s:%d: reading document %r", self.source, keyword.pos.line, doc.name)

        while True:
            token, indent = self.cursor.next()
            if indent < base_indent:
                self.cursor.unscan()
                break

            if token.type == TokenType.OUTLINE:
                if indent == base_indent:
                    # sibling document
                    self.cursor.unscan()
                    break
                raise make_parse_error(
                    f"documents cannot be nested (indent {indent}, document indent {base_indent})",
                    self.source,
                    token,
                )
            elif token.type == TokenType.PATH:
                doc.path = self.read_inline_text(token, indent)
            elif token.type == TokenType.FUNCTIONS:
                doc.functions.extend(self.read_functions(indent, doc.name))
            elif token.type == TokenType.TYPES:
                doc.types.extend(self.read_types(indent))
            elif token.type == TokenType.TEXT:
                self.cursor.unscan()
                doc.description = _join(doc.description, self.read_joined_text(indent))
            else:
                self.cursor.unscan()
                break

        logger.debug(
            "%s: document %r has %d functions, %d types",
            self.source,
            doc.name,
            len(doc.functions),
            len(doc.types),
        )
        return doc

    # =========================================================================
    # Functions
    # =========================================================================

    def read_functions(self, base_indent: int, receiver: str) -> list[Function]:
        funcs: list[Function] = []
        while (fn := self.read_function(base_indent + 1, receiver)) is not None:
            funcs.append(fn)
        return funcs

    def read_function(self, base_indent: int, receiver: str) -> Function | None:
        token, fn_indent = self.cursor.next()
        if fn_indent < base_indent or token.type != TokenType.TEXT:
            self.cursor.unscan()
            return None

        signature = token.text
        fn = Function(
            function_name=signature.split("(", 1)[0].strip(),
            receiver=receiver,
            signature=signature,
        )

        while True:
            token, indent = self.cursor.next()
            if indent <= fn_indent:
                self.cursor.unscan()
                return fn

            if token.type == TokenType.PARAMS:
                fn.params.extend(self.read_params(indent))
            elif token.type == TokenType.RETURN:
                fn.return_ = _join(fn.return_, self.read_inline_text(token, indent))
            elif token.type == TokenType.EXAMPLES:
                fn.examples.extend(self.read_examples(indent))
            elif token.type == TokenType.TEXT:
                self.cursor.unscan()
                fn.description = _join(fn.description, self.read_joined_text(indent))
            else:
                self.cursor.unscan()
                return fn

    def read_params(self, base_indent: int) -> list[Param]:
        params: list[Param] = []
        while (param := self.read_param(base_indent + 1)) is not None:
            params.append(param)
        return params

    def read_param(self, base_indent: int) -> Param | None:
        token, indent = self.cursor.next()
        if indent < base_indent or token.type != TokenType.TEXT:
            self.cursor.unscan()
            return None

        name, type_ = split_name_type(token.text)
        return Param(name=name, type=type_, description=self.read_joined_text(indent + 1))

    def read_examples(self, base_indent: int) -> list[Example]:
        examples: list[Example] = []
        while (example := self.read_example(base_indent + 1)) is not None:
            examples.append(example)
        return examples

    def read_example(self, base_indent: int) -> Example | None:
        token, example_indent = self.cursor.next()
        if example_indent < base_indent or token.type != TokenType.TEXT:
            self.cursor.unscan()
            return None

        example = Example(name=token.text)
        while True:
            token, indent = self.cursor.next()
            if indent <= example_indent:
                self.cursor.unscan()
                return example

            if token.type == TokenType.CODE:
                example.code = self.read_text_block(indent + 1, same_line=token.pos.line)
            elif token.type == TokenType.TEXT:
                self.cursor.unscan()
                description = self.read_text_block(indent)
                if example.description:
                    description = f"{example.description}\n{description}"
                example.description = description
            else:
                self.cursor.unscan()
                return example

    # =========================================================================
    # Types
    # =========================================================================

    def read_types(self, base_indent: int) -> list[TypeSpec]:
        types: list[TypeSpec] = []
        while (t := self.read_type(base_indent + 1)) is not None:
            types.append(t)
        return types

    def read_type(self, base_indent: int) -> TypeSpec | None:
        token, type_indent = self.cursor.next()
        if type_indent < base_indent or token.type != TokenType.TEXT:
            self.cursor.unscan()
            return None

        t = TypeSpec(name=token.text)
        while True:
            token, indent = self.cursor.next()
            if indent <= type_indent:
                self.cursor.unscan()
                return t

            if token.type == TokenType.FIELDS:
                t.fields.extend(self.read_fields(indent))
            elif token.type in (TokenType.METHODS, TokenType.FUNCTIONS):
                t.methods.extend(self.read_functions(indent, t.name))
            elif token.type == TokenType.OPERATORS:
                t.operators.extend(self.read_operators(indent))
            elif token.type == TokenType.TEXT:
                self.cursor.unscan()
                t.description = _join(t.description, self.read_joined_text(indent))
            else:
                raise make_parse_error(
                    f"unexpected token in type {t.name!r}: {token.type.value}: "
                    f"{token.text} (indent {indent}, type indent {type_indent})",
                    self.source,
                    token,
                )

    def read_fields(self, base_indent: int) -> list[FieldSpec]:
        fields: list[FieldSpec] = []
        while (f := self.read_field(base_indent + 1)) is not None:
            fields.append(f)
        return fields

    def read_field(self, base_indent: int) -> FieldSpec | None:
        token, indent = self.cursor.next()
        if indent < base_indent or token.type != TokenType.TEXT:
            self.cursor.unscan()
            return None

        name, type_ = split_name_type(token.text)
        return FieldSpec(name=name, type=type_, description=self.read_joined_text(indent + 1))

    def read_operators(self, base_indent: int) -> list[Operator]:
        ops: list[Operator] = []
        while (op := self.read_operator(base_indent + 1)) is not None:
            ops.append(op)
        return ops

    def read_operator(self, base_indent: int) -> Operator | None:
        token, indent = self.cursor.next()
        if indent < base_indent or token.type != TokenType.TEXT:
            self.cursor.unscan()
            return None
        return Operator(expression=token.text, description=self.read_joined_text(indent + 1))

    # =========================================================================
    # Text
    # =========================================================================

    def _read_text_run(self, base_indent: int, same_line: int | None = None) -> list[tuple[str, int]]:
        """
        Read consecutive TEXT tokens at base_indent or deeper.

        A token on line ``same_line`` is accepted whatever its indent and is
        recorded at base_indent; this is how a value written after its
        keyword is picked up.
        """
        run: list[tuple[str, int]] = []
        while True:
            token, indent = self.cursor.next()
            if token.type == TokenType.TEXT and token.pos.line == same_line:
                run.append((token.text, base_indent))
                continue
            if token.type == TokenType.TEXT and indent >= base_indent:
                run.append((token.text, indent))
                continue
            self.cursor.unscan()
            return run

    def read_joined_text(self, base_indent: int) -> str:
        """Read a run of text lines, joined with single spaces."""
        return " ".join(text for text, _ in self._read_text_run(base_indent))

    def read_inline_text(self, keyword: Token, keyword_indent: int) -> str:
        """Read the value following a keyword on its line, plus deeper continuation lines."""
        run = self._read_text_run(keyword_indent + 1, same_line=keyword.pos.line)
        return " ".join(text for text, _ in run)

    def read_text_block(self, base_indent: int, same_line: int | None = None) -> str:
        """
        Read a run of text lines, keeping line breaks.

        Lines indented deeper than the first line of the block keep the extra
        depth, written as two spaces per level.
        """
        run = self._read_text_run(base_indent, same_line)
        if not run:
            return ""
        first_indent = run[0][1]
        lines = [BLOCK_INDENT * max(0, indent - first_indent) + text for text, indent in run]
        return "\n".join(lines)


def parse_all(
    stream: TextIO | str,
    options: ParseOptions | None = None,
    source: str | None = None,
) -> Docs:
    """
    Parse every document in a stream.

    Args:
        stream: Text stream or string
        options: Parse options
        source: Input name for error messages

    Returns:
        Docs carrying the parsed documents and the options
    """
    return Parser(stream, options, source).parse_all()


def parse_first(
    stream: TextIO | str,
    options: ParseOptions | None = None,
    source: str | None = None,
) -> Document | None:
    """Parse only the first document in a stream."""
    return Parser(stream, options, source).parse_one()


def parse_text(text: str, options: ParseOptions | None = None) -> Docs:
    """Convenience wrapper around parse_all for in-memory text."""
    return parse_all(text, options, source="<string>")
