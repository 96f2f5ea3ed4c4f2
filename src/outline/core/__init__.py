"""Core outline functionality: scanner, parser, document model, serializer, configuration."""

from . import ir
from .errors import (
    ConfigError,
    ErrorContext,
    ExtractionError,
    OutlineError,
    OutlineParseError,
    RenderError,
)
from .lexer import Scanner, Token, TokenType, tokenize
from .manifest import OutlineConfig, find_config, load_config
from .parser import Parser, TokenCursor, parse_all, parse_first, parse_text
from .serializer import marshal_docs, marshal_indent

__all__ = [
    "ir",
    "OutlineError",
    "OutlineParseError",
    "ConfigError",
    "RenderError",
    "ExtractionError",
    "ErrorContext",
    "Scanner",
    "Token",
    "TokenType",
    "tokenize",
    "Parser",
    "TokenCursor",
    "parse_all",
    "parse_first",
    "parse_text",
    "marshal_indent",
    "marshal_docs",
    "OutlineConfig",
    "find_config",
    "load_config",
]
