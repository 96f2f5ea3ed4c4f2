import tomllib
from dataclasses import dataclass, fields
from pathlib import Path

from .errors import ConfigError
from .ir import ParseOptions

CONFIG_FILENAME = "outline.toml"


@dataclass
class OutlineConfig:
    """Settings read from outline.toml or the [tool.outline] table of pyproject.toml."""

    sort_functions: bool = False
    sort_types: bool = False
    sort_docs: bool = True  # reorder documents by path + name before rendering
    indent: str = "  "  # one indent unit for `outline fmt`
    template: Path | None = None  # user template, relative to the config file

    def parse_options(self) -> ParseOptions:
        return ParseOptions(
            sort_functions_alphabetically=self.sort_functions,
            sort_types_alphabetically=self.sort_types,
        )


_BOOL_KEYS = ("sort_functions", "sort_types", "sort_docs")


def _config_table(path: Path) -> dict[str, object] | None:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e

    if path.name == "pyproject.toml":
        table = data.get("tool", {}).get("outline")
        if table is None:
            return None
        return dict(table)
    # outline.toml may nest its keys under [outline] or keep them at top level
    return dict(data.get("outline", data))


def load_config(path: Path) -> OutlineConfig:
    """
    Load outline settings from a TOML file.

    Raises:
        ConfigError: On malformed TOML, unknown keys or wrongly typed values
    """
    table = _config_table(path)
    if table is None:
        return OutlineConfig()

    known = {f.name for f in fields(OutlineConfig)}
    unknown = sorted(set(table) - known)
    if unknown:
        raise ConfigError(f"Unknown keys in {path}: {', '.join(unknown)}")

    for key in _BOOL_KEYS:
        if key in table and not isinstance(table[key], bool):
            raise ConfigError(f"{path}: '{key}' must be true or false")

    indent = table.get("indent", "  ")
    if indent not in ("\t", "  "):
        raise ConfigError(f"{path}: 'indent' must be a tab or two spaces")

    template = table.get("template")
    if template is not None and not isinstance(template, str):
        raise ConfigError(f"{path}: 'template' must be a path string")

    return OutlineConfig(
        sort_functions=bool(table.get("sort_functions", False)),
        sort_types=bool(table.get("sort_types", False)),
        sort_docs=bool(table.get("sort_docs", True)),
        indent=str(indent),
        template=(path.parent / template) if template else None,
    )


def find_config(start: Path) -> Path | None:
    """
    Locate a configuration file in a directory.

    Prefers outline.toml; falls back to a pyproject.toml that has a
    [tool.outline] table.
    """
    candidate = start / CONFIG_FILENAME
    if candidate.exists():
        return candidate

    pyproject = start / "pyproject.toml"
    if pyproject.exists() and _config_table(pyproject) is not None:
        return pyproject
    return None
