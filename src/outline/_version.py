"""Version lookup for the outline-notation distribution."""

import tomllib
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _metadata_version
from pathlib import Path

DISTRIBUTION = "outline-notation"
UNKNOWN_VERSION = "0.0.0"

_PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"


def _source_tree_version(pyproject: Path) -> str | None:
    """Version declared by a source checkout's pyproject.toml, if it is ours."""
    try:
        with open(pyproject, "rb") as f:
            project = tomllib.load(f).get("project", {})
    except (OSError, tomllib.TOMLDecodeError):
        return None
    if project.get("name") != DISTRIBUTION:
        return None
    return project.get("version")


def get_version(pyproject: Path = _PYPROJECT) -> str:
    """
    Return the outline version.

    A source checkout reports the version in its pyproject.toml; otherwise
    the installed distribution metadata is used.
    """
    found = _source_tree_version(pyproject)
    if found:
        return found
    try:
        return _metadata_version(DISTRIBUTION)
    except PackageNotFoundError:
        return UNKNOWN_VERSION
