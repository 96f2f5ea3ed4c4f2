"""Tests for Jinja2 rendering of outline documents."""

from pathlib import Path

import pytest

from outline.core.errors import RenderError
from outline.core.ir import Document
from outline.render import render_docs
from outline.render.markdown import _code_span_filter


class TestCodeSpan:
    def test_wraps(self) -> None:
        assert _code_span_filter("f()") == "`f()`"

    def test_empty(self) -> None:
        assert _code_span_filter("") == ""
        assert _code_span_filter(None) == ""

    def test_backticks_inside(self) -> None:
        assert _code_span_filter("a`b") == "``a`b``"


class TestRenderDocs:
    def test_index_template(self, time_doc: Document) -> None:
        text = render_docs([time_doc])
        assert "# time" in text
        assert "## Functions" in text
        assert "#### `duration(string) duration`" in text
        assert "parse a duration" in text
        assert "### `duration`" in text
        assert "| hours | float | number of hours starting at zero |" in text
        assert "**Methods**" in text
        assert "| `d` | `duration` |  |" in text
        assert "| time == time = boolean |  |" in text

    def test_docs_template(self, two_funcs_doc: Document) -> None:
        text = render_docs([two_funcs_doc], name="docs.md.j2")
        assert "# twoFuncs" in text
        assert "#### `sum(a,b int) int`" in text
        assert "add two things together" in text
        assert "## Types" not in text

    def test_user_template(self, tmp_path: Path, two_funcs_doc: Document) -> None:
        template = tmp_path / "names.txt.j2"
        template.write_text("{% for doc in docs %}{{ doc.name }}:{{ doc.functions | length }}\n{% endfor %}")
        assert render_docs([two_funcs_doc], template=template) == "twoFuncs:2\n"

    def test_user_template_can_include_builtin(self, tmp_path: Path, two_funcs_doc: Document) -> None:
        template = tmp_path / "funcs.md.j2"
        template.write_text(
            "{% for fn in docs[0].functions %}{% include '_function.md.j2' %}{% endfor %}"
        )
        assert "#### `difference(a,b int) int`" in render_docs([two_funcs_doc], template=template)

    def test_missing_template(self, tmp_path: Path) -> None:
        with pytest.raises(RenderError):
            render_docs([], template=tmp_path / "missing.j2")

    def test_undefined_variable(self, tmp_path: Path) -> None:
        template = tmp_path / "bad.j2"
        template.write_text("{{ nothing.here }}")
        with pytest.raises(RenderError, match="bad.j2"):
            render_docs([], template=template)
