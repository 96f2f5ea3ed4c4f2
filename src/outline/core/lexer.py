"""
Scanner for the outline notation.

Converts a character stream into tokens on demand. Indentation is significant:
a tab, or two consecutive spaces, produce one INDENT token. A word followed by
a colon is a keyword when it appears in the keyword table; every other run of
characters is plain TEXT.
"""

from __future__ import annotations

import io
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import TextIO


class TokenType(Enum):
    """Token types in the outline notation."""

    # Literals
    TEXT = "text"
    INDENT = "indent"
    NEWLINE = "newline"

    # Keywords
    OUTLINE = "outline"
    PATH = "path"
    FUNCTIONS = "functions"
    METHODS = "methods"
    TYPES = "types"
    FIELDS = "fields"
    OPERATORS = "operators"
    PARAMS = "params"
    RETURN = "return"
    EXAMPLES = "examples"
    CODE = "code"

    # Special
    EOF = "EOF"


# Keywords mapping, matched exactly against the text before a colon
KEYWORDS: dict[str, TokenType] = {
    "path": TokenType.PATH,
    "outline": TokenType.OUTLINE,
    "functions": TokenType.FUNCTIONS,
    "methods": TokenType.METHODS,
    "types": TokenType.TYPES,
    "fields": TokenType.FIELDS,
    "operators": TokenType.OPERATORS,
    "params": TokenType.PARAMS,
    "return": TokenType.RETURN,
    "examples": TokenType.EXAMPLES,
    "code": TokenType.CODE,
}


@dataclass(frozen=True)
class Position:
    """
    Location of a token in the scanned stream.

    Attributes:
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        offset: Character offset from the start of the stream
    """

    line: int = 1
    column: int = 1
    offset: int = 0


@dataclass
class Token:
    """
    A single token in the outline stream.

    Attributes:
        type: Type of token
        text: Text of the token, trimmed of surrounding whitespace
        pos: Where the token starts
    """

    type: TokenType
    text: str
    pos: Position

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return f"Token({self.type.value}, {self.text!r}, {self.pos.line}:{self.pos.column})"


class Scanner:
    """
    Tokenizer for the outline notation.

    Reads the stream one character at a time and never fails on malformed
    input: anything that is not indentation, a line break or a keyword comes
    back as TEXT. Read errors from the underlying stream propagate.
    """

    def __init__(self, stream: TextIO | str):
        """
        Initialize scanner.

        Args:
            stream: Text stream to read, or a string to scan
        """
        if isinstance(stream, str):
            stream = io.StringIO(stream)
        self.stream = stream
        self.line = 1
        self.column = 0
        self.offset = 0
        # Token owed to the next scan() call after a TEXT token was cut short
        self._queued: TokenType | None = None
        self._queued_pos = Position()

    def _read(self) -> str:
        """Read the next character, or "" at end of input."""
        ch = self.stream.read(1)
        if ch:
            self.offset += 1
            self.column += 1
        return ch

    def _here(self) -> Position:
        return Position(self.line, self.column, self.offset)

    def scan(self) -> Token:
        """Read one token from the stream."""
        if self._queued is not None:
            queued, self._queued = self._queued, None
            return Token(queued, "", self._queued_pos)

        buf: list[str] = []
        in_text = False
        start = Position(self.line, self.column + 1, self.offset)

        while True:
            ch = self._read()

            if ch == "":
                if in_text:
                    self._queue(TokenType.EOF)
                    return self._token(TokenType.TEXT, buf, start)
                return Token(TokenType.EOF, "", self._here())

            if ch == "\r":
                continue

            if ch == "\n":
                newline_pos = self._here()
                self.line += 1
                self.column = 0
                if in_text:
                    self._queued = TokenType.NEWLINE
                    self._queued_pos = newline_pos
                    return self._token(TokenType.TEXT, buf, start)
                return Token(TokenType.NEWLINE, "", newline_pos)

            if ch == "\t" and not in_text:
                return Token(TokenType.INDENT, "", self._here())

            if ch == ":":
                keyword = KEYWORDS.get("".join(buf))
                if keyword is not None:
                    return Token(keyword, keyword.value, start)
                buf.append(ch)
                in_text = True
                continue

            if ch == " ":
                buf.append(ch)
                if not in_text and len(buf) == 2:
                    return Token(TokenType.INDENT, "", self._here())
                continue

            if not in_text:
                start = self._here()
            buf.append(ch)
            in_text = True

    def _queue(self, token_type: TokenType) -> None:
        self._queued = token_type
        self._queued_pos = self._here()

    def _token(self, token_type: TokenType, buf: list[str], start: Position) -> Token:
        return Token(token_type, "".join(buf).strip(), start)

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens up to and including EOF."""
        while True:
            token = self.scan()
            yield token
            if token.type == TokenType.EOF:
                return


def tokenize(text: str) -> list[Token]:
    """
    Convenience function to scan a whole string.

    Args:
        text: Source text

    Returns:
        List of tokens ending with EOF
    """
    return list(Scanner(text))
