"""One interactive shell session: echo, history, buffer, completion."""

from __future__ import annotations

import logging
import os
from collections import deque
from dataclasses import dataclass

from .executor import CommandExecutor
from .models import (
    CommandName,
    ExecutionResult,
    OutputKind,
    OutputLine,
    ShellIdentity,
    ValidationResult,
    make_line,
)
from .parser import parse
from .validator import validate
from .vfs import VirtualFileSystem

logger = logging.getLogger(__name__)

MAX_HISTORY_SIZE = 1000
PATH_COMMANDS = frozenset({CommandName.CD, CommandName.CAT, CommandName.LS})
EXIT_COMMANDS = frozenset({CommandName.EXIT, CommandName.GUI})
WELCOME_WIDTH = 63


@dataclass(frozen=True)
class SessionStep:
    """Everything produced by submitting one line."""

    lines: tuple[OutputLine, ...]
    result: ExecutionResult
    validation: ValidationResult
    cleared: bool = False
    closed: bool = False


@dataclass(frozen=True)
class Completion:
    """Tab-completion candidates for the current input line."""

    matches: tuple[str, ...]
    common_prefix: str
    is_unique: bool


class ShellSession:
    """Drives parser, validator and executor for one visitor."""

    def __init__(
        self,
        vfs: VirtualFileSystem | None = None,
        executor: CommandExecutor | None = None,
        identity: ShellIdentity | None = None,
    ) -> None:
        self.vfs = vfs if vfs is not None else VirtualFileSystem()
        self.executor = executor if executor is not None else CommandExecutor(identity=identity)
        self.identity = identity if identity is not None else self.executor.identity
        self.history: deque[str] = deque(maxlen=MAX_HISTORY_SIZE)
        self.output: list[OutputLine] = []
        self.closed = False

    def prompt(self) -> str:
        return f"{self.identity.username}@{self.identity.hostname}:{self.vfs.get_current_directory()}$ "

    def welcome_lines(self) -> list[OutputLine]:
        """Banner shown when the session opens."""
        title = f"Welcome to {self.identity.name}'s Portfolio Terminal"
        border = "═" * WELCOME_WIDTH
        lines = [
            make_line(OutputKind.INFO, f"╔{border}╗"),
            make_line(OutputKind.INFO, f"║         {title:<{WELCOME_WIDTH - 9}}║"),
            make_line(OutputKind.INFO, f"╚{border}╝"),
            make_line(OutputKind.OUTPUT, ""),
            make_line(OutputKind.OUTPUT, 'Type "help" to see available commands'),
            make_line(OutputKind.OUTPUT, 'Type "about" for a quick introduction'),
            make_line(OutputKind.OUTPUT, 'Type "ls" to explore the file system'),
            make_line(OutputKind.OUTPUT, ""),
            make_line(OutputKind.INFO, f"Current directory: {self.vfs.get_current_directory()}"),
            make_line(OutputKind.OUTPUT, ""),
        ]
        self.output.extend(lines)
        return lines

    def submit(self, raw: str) -> SessionStep:
        """Run one input line and append its lines to the output buffer."""
        if raw.strip():
            self.history.append(raw)
        echo = make_line(OutputKind.COMMAND, f"{self.vfs.get_current_directory()}$ {raw}")

        parsed = parse(raw)
        validation = validate(parsed)
        if validation.errors:
            logger.debug("validation errors for %r: %s", raw, "; ".join(validation.errors))
        result = self.executor.execute(parsed, self.vfs)

        lines = [echo]
        lines.extend(make_line(OutputKind.INFO, warning) for warning in validation.warnings)
        lines.extend(result.output)

        name = CommandName.lookup(parsed.command)
        cleared = name is CommandName.CLEAR
        closed = name in EXIT_COMMANDS and result.ok
        if cleared:
            self.output.clear()
        else:
            self.output.extend(lines)
        if closed:
            self.closed = True
        return SessionStep(
            lines=tuple(lines),
            result=result,
            validation=validation,
            cleared=cleared,
            closed=closed,
        )

    def complete(self, line: str) -> Completion:
        """Complete command names for the first word, paths for later ones."""
        parts = line.strip().split()
        if not parts:
            return Completion(matches=(), common_prefix="", is_unique=False)

        if len(parts) == 1 and not line.endswith(" "):
            matches = [name for name in self.executor.available_commands() if name.startswith(parts[0])]
        else:
            if CommandName.lookup(parts[0]) not in PATH_COMMANDS:
                return Completion(matches=(), common_prefix="", is_unique=False)
            partial = "" if line.endswith(" ") else parts[-1]
            matches = self.vfs.get_completions(partial)

        return Completion(
            matches=tuple(matches),
            common_prefix=os.path.commonprefix(matches) if matches else "",
            is_unique=len(matches) == 1,
        )

    def restart(self) -> None:
        """Start a fresh session on the same tree; nothing carries over."""
        self.vfs = VirtualFileSystem(self.vfs.root)
        self.history.clear()
        self.output.clear()
        self.closed = False
