"""
Jinja2 rendering for outline documents.

Built-in templates live in the templates/ directory next to this module. A
user template is loaded from its own directory, which is searched before the
built-in one so that it can include the bundled partials.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from jinja2 import ChoiceLoader, Environment, FileSystemLoader, StrictUndefined, TemplateError

from outline.core.errors import RenderError
from outline.core.ir import Document

logger = logging.getLogger(__name__)

# Template directory
TEMPLATES_DIR = Path(__file__).parent / "templates"

DEFAULT_TEMPLATE = "index.md.j2"


def _code_span_filter(value: Any) -> str:
    """Wrap text in Markdown backticks; empty values stay empty."""
    text = "" if value is None else str(value)
    if not text:
        return ""
    fence = "``" if "`" in text else "`"
    return f"{fence}{text}{fence}"


def create_jinja_env(user_templates_dir: Path | None = None) -> Environment:
    """Create and configure the Jinja2 environment.

    Args:
        user_templates_dir: Optional directory searched before the built-in
            templates.
    """
    loaders = [FileSystemLoader(str(TEMPLATES_DIR))]
    if user_templates_dir is not None:
        loaders.insert(0, FileSystemLoader(str(user_templates_dir)))

    env = Environment(
        loader=ChoiceLoader(loaders),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        autoescape=False,
    )
    env.filters["code_span"] = _code_span_filter
    return env


def render_docs(
    docs: Iterable[Document],
    template: Path | None = None,
    name: str = DEFAULT_TEMPLATE,
) -> str:
    """
    Render documents through a template.

    Args:
        docs: Documents to render, in output order
        template: Path to a user template file; overrides ``name``
        name: Built-in template name

    Returns:
        The rendered text

    Raises:
        RenderError: If the template is missing or fails to render
    """
    if template is not None:
        env = create_jinja_env(template.parent)
        name = template.name
    else:
        env = create_jinja_env()

    documents = list(docs)
    logger.debug("rendering %d documents with %s", len(documents), name)
    try:
        return env.get_template(name).render(docs=documents)
    except TemplateError as e:
        raise RenderError(f"Template {name!r} failed: {e}") from e
