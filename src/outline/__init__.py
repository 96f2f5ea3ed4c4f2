"""
outline - a plain-text notation for documenting packages.

Parses indentation-structured outline documents into a document tree,
writes them back in canonical form, and renders them through templates.
"""

from __future__ import annotations

from ._version import get_version
from .core import ir
from .core.errors import ConfigError, OutlineError, OutlineParseError, RenderError
from .core.ir import Docs, Document, ParseOptions, merge
from .core.parser import parse_all, parse_first, parse_text
from .core.serializer import marshal_indent

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    "Docs",
    "Document",
    "ParseOptions",
    "OutlineError",
    "OutlineParseError",
    "ConfigError",
    "RenderError",
    "merge",
    "parse_all",
    "parse_first",
    "parse_text",
    "marshal_indent",
]
