"""folioshell: a portfolio browsed through a small Unix-style shell."""

from __future__ import annotations

import tomllib
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

DISTRIBUTION = "folioshell"


def _version_from_pyproject() -> str | None:
    """Version of a source checkout, read from the nearest pyproject.toml naming this project."""
    for base in Path(__file__).resolve().parents:
        pyproject = base / "pyproject.toml"
        if not pyproject.exists():
            continue
        with pyproject.open("rb") as handle:
            project = tomllib.load(handle).get("project", {})
        if project.get("name") == DISTRIBUTION and "version" in project:
            return str(project["version"])
    return None


_project_version = _version_from_pyproject()
if _project_version is not None:
    __version__ = _project_version
else:
    try:
        __version__ = version(DISTRIBUTION)
    except PackageNotFoundError:
        __version__ = "0+unknown"

from .executor import CommandExecutor  # noqa: E402
from .models import ExecutionResult, OutputKind, OutputLine, ParsedCommand, ValidationResult  # noqa: E402
from .parser import parse  # noqa: E402
from .session import ShellSession  # noqa: E402
from .validator import validate  # noqa: E402
from .vfs import VirtualFileSystem  # noqa: E402

__all__ = [
    "CommandExecutor",
    "ExecutionResult",
    "OutputKind",
    "OutputLine",
    "ParsedCommand",
    "ShellSession",
    "ValidationResult",
    "VirtualFileSystem",
    "__version__",
    "parse",
    "validate",
]
