"""In-memory file tree with a per-instance working directory."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum
from typing import Generic, TypeVar

from .builder import build_file_system
from .content_loader import load_portfolio
from .models import Node, PortfolioData

logger = logging.getLogger(__name__)

ROOT_PATH = "/"
HOME_PATH = "~"

T = TypeVar("T")


class FsErrorKind(StrEnum):
    """Filesystem failure, valued by its Unix message."""

    NOT_FOUND = "No such file or directory"
    NOT_A_DIRECTORY = "Not a directory"
    IS_A_DIRECTORY = "Is a directory"


@dataclass(frozen=True)
class FsError:
    """Failure of one filesystem operation on a user-typed path."""

    kind: FsErrorKind
    path: str

    @property
    def message(self) -> str:
        return f"{self.path}: {self.kind}"


@dataclass(frozen=True)
class Result(Generic[T]):
    """Value or error of a filesystem operation."""

    value: T | None = None
    error: FsError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> Result[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, kind: FsErrorKind, path: str) -> Result[T]:
        return cls(error=FsError(kind=kind, path=path))


def sort_for_display(nodes: Iterable[Node]) -> list[Node]:
    """Directories first, then case-sensitive by name."""
    return sorted(nodes, key=lambda node: (not node.is_directory, node.name))


def _split(path: str) -> list[str]:
    return [part for part in path.split("/") if part]


def _normalize(parts: Iterable[str], base: list[str] | None = None) -> str:
    """Apply `.` and `..` segments on top of `base`; `..` stops at the root."""
    stack = list(base or [])
    for part in parts:
        if part == "..":
            if stack:
                stack.pop()
        elif part != ".":
            stack.append(part)
    return "/" + "/".join(stack)


class VirtualFileSystem:
    """Navigation, listing and reading over an immutable tree."""

    def __init__(self, root: Node | None = None) -> None:
        if root is None:
            root = build_file_system(load_portfolio())
        if not root.is_directory:
            raise ValueError("The root of a virtual file system must be a directory.")
        self._root = root
        self._cwd = ROOT_PATH
        self._content_cache: dict[str, str] = {}

    @classmethod
    def from_portfolio(cls, data: PortfolioData | None = None) -> VirtualFileSystem:
        """Build a file system from portfolio records (bundled content by default)."""
        return cls(build_file_system(data if data is not None else load_portfolio()))

    @property
    def root(self) -> Node:
        return self._root

    def get_current_directory(self) -> str:
        return self._cwd

    def resolve_path(self, path: str) -> str:
        """Return the absolute normalized form of `path` relative to the cursor."""
        if path == HOME_PATH or path.startswith(HOME_PATH + "/"):
            path = ROOT_PATH + path[len(HOME_PATH) :]
        if path.startswith("/"):
            return _normalize(_split(path))
        return _normalize(_split(path), base=_split(self._cwd))

    def change_directory(self, path: str) -> Result[str]:
        resolved = self.resolve_path(path)
        node = self._node_at(resolved)
        if node is None:
            return Result.failure(FsErrorKind.NOT_FOUND, path)
        if not node.is_directory:
            return Result.failure(FsErrorKind.NOT_A_DIRECTORY, path)
        logger.debug("cwd %s -> %s", self._cwd, resolved)
        self._cwd = resolved
        return Result.success(resolved)

    def list_directory(self, path: str | None = None) -> Result[tuple[Node, ...]]:
        """Return the direct children of `path` (the cursor when omitted) in insertion order."""
        shown = path if path else "."
        node = self._node_at(self.resolve_path(path) if path else self._cwd)
        if node is None:
            return Result.failure(FsErrorKind.NOT_FOUND, shown)
        if not node.is_directory:
            return Result.failure(FsErrorKind.NOT_A_DIRECTORY, shown)
        return Result.success(tuple(node.children.values()))

    def read_file(self, path: str) -> Result[str]:
        resolved = self.resolve_path(path)
        cached = self._content_cache.get(resolved)
        if cached is not None:
            return Result.success(cached)

        node = self._node_at(resolved)
        if node is None:
            return Result.failure(FsErrorKind.NOT_FOUND, path)
        if node.is_directory:
            return Result.failure(FsErrorKind.IS_A_DIRECTORY, path)
        self._content_cache[resolved] = node.content
        logger.debug("cached %s (%d chars)", resolved, len(node.content))
        return Result.success(node.content)

    def get_completions(self, partial: str) -> list[str]:
        """Return entries matching `partial`, directories suffixed with `/`."""
        slash = partial.rfind("/")
        directory, fragment = partial[: slash + 1], partial[slash + 1 :]
        listing = self.list_directory(directory or None)
        if not listing.ok or listing.value is None:
            return []
        return [directory + node.display_name for node in listing.value if node.name.startswith(fragment)]

    def _node_at(self, absolute: str) -> Node | None:
        current = self._root
        for part in _split(absolute):
            if not current.is_directory:
                return None
            child = current.children.get(part)
            if child is None:
                return None
            current = child
        return current
