"""Template rendering of parsed outline documents."""

from .markdown import TEMPLATES_DIR, create_jinja_env, render_docs

__all__ = ["TEMPLATES_DIR", "create_jinja_env", "render_docs"]
