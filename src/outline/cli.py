"""
outline command-line interface.

Commands:

- fmt: print documents in canonical outline notation
- markdown (md): render documents with the built-in Markdown listing
- template: render documents through the index template or a user template
- package (pkg): extract documents from Python sources and render them
- parse: dump the parsed document tree as JSON
"""

from __future__ import annotations

import json
import logging
import platform
from pathlib import Path
from typing import NoReturn

import typer

from outline._version import get_version
from outline.core.errors import OutlineError
from outline.core.ir import Docs
from outline.core.manifest import OutlineConfig, find_config, load_config
from outline.core.parser import parse_all
from outline.core.serializer import marshal_indent

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="outline is a tool for outlining software packages",
    no_args_is_help=True,
)

FilesArgument = typer.Argument(..., exists=True, dir_okay=False, help="Outline files to read")
TemplateOption = typer.Option(
    None, "--template", "-t", help="Template file to load. Overrides the preset"
)
NoSortOption = typer.Option(
    False, "--no-sort", help="Don't alpha-sort functions, types & outline documents"
)


def version_callback(value: bool) -> None:
    """Display version information."""
    if value:
        typer.echo(f"outline version {get_version()}")
        typer.echo(f"  Python:        {platform.python_implementation()} {platform.python_version()}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", help="Show debug output"),
    config: Path | None = typer.Option(
        None, "--config", "-c", exists=True, dir_okay=False, help="Configuration file"
    ),
    version: bool = typer.Option(
        False, "--version", callback=version_callback, is_eager=True, help="Show version"
    ),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        path = config or find_config(Path.cwd())
        ctx.obj = load_config(path) if path else OutlineConfig()
    except OutlineError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    if path:
        logger.debug("loaded configuration from %s", path)


def _config(ctx: typer.Context) -> OutlineConfig:
    return ctx.obj if isinstance(ctx.obj, OutlineConfig) else OutlineConfig()


def _read_docs(files: list[Path], cfg: OutlineConfig) -> Docs:
    options = cfg.parse_options()
    docs = Docs(options=options)
    for fp in files:
        with fp.open(encoding="utf-8") as f:
            docs.extend(parse_all(f, options, source=str(fp)))
    return docs


def _fail(e: Exception) -> NoReturn:
    typer.echo(f"Error: {e}", err=True)
    raise typer.Exit(code=1)


@app.command("fmt")
def fmt_command(
    ctx: typer.Context,
    files: list[Path] = FilesArgument,
    indent_text: str | None = typer.Option(None, "--indent", help="Text for one indent level"),
    tabs: bool = typer.Option(False, "--tabs", help="Indent with tabs"),
) -> None:
    """Format input in canonical outline notation."""
    cfg = _config(ctx)
    indent = "\t" if tabs else indent_text or cfg.indent
    try:
        docs = _read_docs(files, cfg)
    except (OutlineError, OSError, UnicodeDecodeError) as e:
        _fail(e)
    for doc in docs:
        doc.sort(docs.options)
    typer.echo("\n".join(marshal_indent(doc, 0, indent) for doc in docs), nl=False)


def _render(docs: Docs, template: Path | None, name: str, no_sort: bool, cfg: OutlineConfig) -> None:
    from outline.render import render_docs

    if not no_sort and cfg.sort_docs:
        docs.sort()
    try:
        typer.echo(render_docs(docs, template or cfg.template, name=name), nl=False)
    except OutlineError as e:
        _fail(e)


@app.command("markdown")
def markdown_command(
    ctx: typer.Context,
    files: list[Path] = FilesArgument,
) -> None:
    """Convert docs to markdown syntax."""
    cfg = _config(ctx)
    try:
        docs = _read_docs(files, cfg)
    except (OutlineError, OSError, UnicodeDecodeError) as e:
        _fail(e)
    _render(docs, None, "docs.md.j2", no_sort=True, cfg=cfg)


app.command("md", hidden=True)(markdown_command)


@app.command("template")
def template_command(
    ctx: typer.Context,
    files: list[Path] = FilesArgument,
    template: Path | None = TemplateOption,
    no_sort: bool = NoSortOption,
) -> None:
    """Execute outline documents against a template."""
    cfg = _config(ctx)
    try:
        docs = _read_docs(files, cfg)
    except (OutlineError, OSError, UnicodeDecodeError) as e:
        _fail(e)
    _render(docs, template, "index.md.j2", no_sort, cfg)


@app.command("package")
def package_command(
    ctx: typer.Context,
    paths: list[Path] = typer.Argument(..., exists=True, help="Python files or directories"),
    template: Path | None = TemplateOption,
    no_sort: bool = NoSortOption,
) -> None:
    """Extract outline documents from Python sources and execute them against a template."""
    from outline.extract import extract_documents

    cfg = _config(ctx)
    try:
        docs = extract_documents(paths, cfg.parse_options())
    except (OutlineError, OSError, UnicodeDecodeError) as e:
        _fail(e)
    _render(docs, template, "index.md.j2", no_sort, cfg)


app.command("pkg", hidden=True)(package_command)


@app.command("parse")
def parse_command(
    ctx: typer.Context,
    files: list[Path] = FilesArgument,
    sort: bool = typer.Option(False, "--sort", help="Sort documents before printing"),
) -> None:
    """Print the parsed document tree as JSON."""
    cfg = _config(ctx)
    try:
        docs = _read_docs(files, cfg)
    except (OutlineError, OSError, UnicodeDecodeError) as e:
        _fail(e)
    if sort:
        docs.sort()
    data = [doc.model_dump(by_alias=True) for doc in docs]
    typer.echo(json.dumps(data, indent=2))


def run() -> None:
    app()
