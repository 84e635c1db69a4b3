"""Dispatch parsed commands against a virtual file system."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from datetime import datetime
from itertools import zip_longest

from .content_loader import load_portfolio
from .models import (
    CommandName,
    ExecutionResult,
    OutputKind,
    OutputLine,
    ParsedCommand,
    ShellIdentity,
    make_line,
)
from .validator import HELP_HINT
from .vfs import HOME_PATH, FsError, FsErrorKind, VirtualFileSystem, sort_for_display

logger = logging.getLogger(__name__)

Handler = Callable[[ParsedCommand, VirtualFileSystem], ExecutionResult]
Clock = Callable[[], datetime]

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_NOT_FOUND = 127

SHELL_NAME = "bash"
RULE = "─" * 45

HELP_OVERVIEW: list[tuple[str, list[tuple[str, str]]]] = [
    (
        "Navigation",
        [
            ("ls [path]", "List directory contents"),
            ("cd <directory>", "Change directory"),
            ("pwd", "Print working directory"),
        ],
    ),
    ("File Operations", [("cat <file>", "Display file contents")]),
    (
        "Portfolio Shortcuts",
        [
            ("about", "View about section"),
            ("experience", "View work experience"),
            ("projects", "View featured projects"),
            ("skills", "View technical skills"),
            ("contact", "View contact information"),
        ],
    ),
    (
        "Utilities",
        [
            ("help [command]", "Show help (or help for specific command)"),
            ("clear", "Clear terminal output"),
            ("echo <text>", "Display text"),
            ("whoami", "Display user information"),
            ("date", "Display current date and time"),
            ("neofetch", "Display system banner"),
        ],
    ),
    ("System", [("exit", "Return to GUI view"), ("gui", "Return to GUI view")]),
]

HELP_TIPS = [
    "  - Use Tab for auto-completion",
    "  - Use Up/Down arrows for command history",
    "  - Try exploring the .secrets directory!",
]

COMMAND_HELP: dict[CommandName, list[str]] = {
    CommandName.LS: [
        "ls [path] - List directory contents",
        "",
        "Lists files and directories in the current or specified directory.",
        "Directories are shown with a trailing slash (/).",
        "",
        "Examples:",
        "  ls              List current directory",
        "  ls projects     List contents of projects directory",
    ],
    CommandName.CD: [
        "cd <directory> - Change directory",
        "",
        "Changes the current working directory.",
        "",
        "Special paths:",
        "  .               Current directory",
        "  ..              Parent directory",
        "  /               Root directory",
        "  ~               Home directory",
        "",
        "Examples:",
        "  cd projects     Change to projects directory",
        "  cd ..           Go to parent directory",
        "  cd /            Go to root directory",
    ],
    CommandName.PWD: ["pwd - Print working directory", "", "Displays the current working directory path."],
    CommandName.CAT: [
        "cat <file> - Display file contents",
        "",
        "Displays the contents of a file.",
        "JSON and Markdown files are marked for syntax highlighting.",
        "",
        "Examples:",
        "  cat README.md",
        "  cat about.txt",
    ],
    CommandName.HELP: [
        "help [command] - Show help",
        "",
        "Without arguments, shows all available commands.",
        "With a command name, shows detailed help for that command.",
    ],
    CommandName.CLEAR: ["clear - Clear terminal output", "", "Clears all previous output from the terminal."],
    CommandName.ECHO: [
        "echo <text> - Display text",
        "",
        "Displays the provided text.",
        "",
        "Examples:",
        "  echo Hello World",
        '  echo "Quoted text"',
    ],
    CommandName.WHOAMI: ["whoami - Display user information", "", "Displays information about the portfolio owner."],
    CommandName.DATE: ["date - Display current date and time", "", "Shows the current date and time."],
    CommandName.NEOFETCH: ["neofetch - Display system banner", "", "Shows a stylized system information banner."],
    CommandName.ABOUT: ["about - View about section", "", "Equivalent to: cat /about.txt"],
    CommandName.EXPERIENCE: ["experience - View work experience", "", "Equivalent to: cat /experience/*"],
    CommandName.PROJECTS: ["projects - View featured projects", "", "Equivalent to: cat /projects/*"],
    CommandName.SKILLS: ["skills - View technical skills", "", "Equivalent to: cat /skills/*"],
    CommandName.CONTACT: ["contact - View contact information", "", "Equivalent to: cat /contact/*"],
    CommandName.EXIT: [
        "exit - Return to GUI view",
        "",
        "Closes the terminal and returns to the graphical interface.",
        "Alias: gui",
    ],
    CommandName.GUI: [
        "gui - Return to GUI view",
        "",
        "Closes the terminal and returns to the graphical interface.",
        "Alias: exit",
    ],
}

BANNER = [
    r"                 ___           ___           ___     ",
    r"    ___         /  /\         /  /\         /  /\    ",
    r"   /  /\       /  /::\       /  /:/_       /  /::\   ",
    r"  /  /:/      /  /:/\:\     /  /:/ /\     /  /:/\:\  ",
    r" /__/::\     /  /:/  \:\   /  /:/ /:/_   /  /:/~/:/  ",
    r" \__\/\:\__ /__/:/ \__\:\ /__/:/ /:/ /\ /__/:/ /:/___",
    r"    \  \:\/\\  \:\ /  /:/ \  \:\/:/ /:/ \  \:\/:::::/",
    r"     \__\::/ \  \:\  /:/   \  \::/ /:/   \  \::/~~~~ ",
    r"     /__/:/   \  \:\/:/     \  \:\/:/     \  \:\     ",
    r"     \__\/     \  \::/       \  \::/       \  \:\    ",
    r"                \__\/         \__\/         \__\/    ",
]

FILE_TYPES = {"json": "json", "md": "md", "markdown": "md", "txt": "txt"}


def detect_file_type(path: str) -> str:
    """Map a file extension onto the renderer's highlighting hint."""
    _, dot, extension = path.rpartition(".")
    if not dot:
        return "txt"
    return FILE_TYPES.get(extension.lower(), "txt")


def _success(lines: list[OutputLine]) -> ExecutionResult:
    return ExecutionResult(output=tuple(lines), exit_code=EXIT_OK)


def _failure(message: str, error: str | None = None) -> ExecutionResult:
    return ExecutionResult(
        output=(make_line(OutputKind.ERROR, message),),
        exit_code=EXIT_FAILURE,
        error=error if error is not None else message,
    )


def _fs_failure(command: str, error: FsError | None) -> ExecutionResult:
    message = f"{command}: {error.message}" if error is not None else f"{command}: unknown error"
    return _failure(message)


def _text_lines(content: str, kind: OutputKind = OutputKind.OUTPUT, **metadata: object) -> list[OutputLine]:
    return [make_line(kind, line, metadata or None) for line in content.split("\n")]


class CommandExecutor:
    """Static command table; holds no per-call state."""

    def __init__(self, identity: ShellIdentity | None = None, clock: Clock | None = None) -> None:
        self.identity = identity if identity is not None else load_portfolio().identity
        self._clock: Clock = clock or (lambda: datetime.now().astimezone())
        self._handlers: dict[CommandName, Handler] = {
            CommandName.LS: self._ls,
            CommandName.CD: self._cd,
            CommandName.PWD: self._pwd,
            CommandName.CAT: self._cat,
            CommandName.HELP: self._help,
            CommandName.CLEAR: self._clear,
            CommandName.ECHO: self._echo,
            CommandName.WHOAMI: self._whoami,
            CommandName.DATE: self._date,
            CommandName.NEOFETCH: self._neofetch,
            CommandName.ABOUT: self._about,
            CommandName.EXPERIENCE: self._experience,
            CommandName.PROJECTS: self._projects,
            CommandName.SKILLS: self._skills,
            CommandName.CONTACT: self._contact,
            CommandName.EXIT: self._exit,
            CommandName.GUI: self._exit,
        }

    def available_commands(self) -> list[str]:
        return [str(name) for name in self._handlers]

    def execute(self, parsed: ParsedCommand, vfs: VirtualFileSystem) -> ExecutionResult:
        """Run one command; never raises."""
        if not parsed.command:
            return ExecutionResult(output=(), exit_code=EXIT_OK)

        name = CommandName.lookup(parsed.command)
        handler = self._handlers.get(name) if name is not None else None
        if handler is None:
            logger.debug("unknown command %r", parsed.command)
            return ExecutionResult(
                output=(
                    make_line(OutputKind.ERROR, f"{SHELL_NAME}: {parsed.command}: command not found"),
                    make_line(OutputKind.INFO, HELP_HINT),
                ),
                exit_code=EXIT_NOT_FOUND,
                error="Command not found",
            )

        try:
            return handler(parsed, vfs)
        except Exception as exc:
            logger.exception("command %s failed", parsed.command)
            return _failure(f"Error executing {parsed.command}: {exc}", error=str(exc))

    def _ls(self, parsed: ParsedCommand, vfs: VirtualFileSystem) -> ExecutionResult:
        path = parsed.args[0] if parsed.args else None
        listing = vfs.list_directory(path)
        if not listing.ok or listing.value is None:
            if listing.error is not None and listing.error.kind is FsErrorKind.NOT_FOUND:
                return _failure(f"ls: cannot access '{listing.error.path}': {listing.error.kind}")
            return _fs_failure("ls", listing.error)

        return _success(
            [
                make_line(
                    OutputKind.OUTPUT,
                    node.display_name,
                    {"is_directory": node.is_directory, "color": "blue" if node.is_directory else "white"},
                )
                for node in sort_for_display(listing.value)
            ]
        )

    def _cd(self, parsed: ParsedCommand, vfs: VirtualFileSystem) -> ExecutionResult:
        result = vfs.change_directory(parsed.args[0] if parsed.args else HOME_PATH)
        if not result.ok:
            return _fs_failure("cd", result.error)
        return _success([])

    def _pwd(self, parsed: ParsedCommand, vfs: VirtualFileSystem) -> ExecutionResult:
        return _success([make_line(OutputKind.OUTPUT, vfs.get_current_directory())])

    def _cat(self, parsed: ParsedCommand, vfs: VirtualFileSystem) -> ExecutionResult:
        if not parsed.args:
            return _failure("cat: missing file operand", error="Missing file operand")
        path = parsed.args[0]
        result = vfs.read_file(path)
        if not result.ok or result.value is None:
            return _fs_failure("cat", result.error)
        file_type = detect_file_type(path)
        return _success(_text_lines(result.value, file_type=file_type, syntax_highlight=file_type != "txt"))

    def _help(self, parsed: ParsedCommand, vfs: VirtualFileSystem) -> ExecutionResult:
        if parsed.args:
            return self._command_help(parsed.args[0])

        lines = [make_line(OutputKind.INFO, "Available Commands:")]
        for category, entries in HELP_OVERVIEW:
            lines.append(make_line(OutputKind.INFO, ""))
            lines.append(make_line(OutputKind.INFO, f"{category}:"))
            lines.extend(make_line(OutputKind.OUTPUT, f"  {usage:<18}{summary}") for usage, summary in entries)
        lines.append(make_line(OutputKind.INFO, ""))
        lines.append(make_line(OutputKind.INFO, "Tips:"))
        lines.extend(make_line(OutputKind.OUTPUT, tip) for tip in HELP_TIPS)
        return _success(lines)

    def _command_help(self, topic: str) -> ExecutionResult:
        name = CommandName.lookup(topic)
        if name is None:
            return ExecutionResult(
                output=(
                    make_line(OutputKind.ERROR, f"No help available for: {topic}"),
                    make_line(OutputKind.INFO, "Type 'help' to see all available commands"),
                ),
                exit_code=EXIT_FAILURE,
                error=f"No help available for: {topic}",
            )
        return _success([make_line(OutputKind.OUTPUT, line) for line in COMMAND_HELP[name]])

    def _clear(self, parsed: ParsedCommand, vfs: VirtualFileSystem) -> ExecutionResult:
        # The caller owns the output buffer; this only signals it.
        return _success([make_line(OutputKind.INFO, "", {"clear_screen": True})])

    def _echo(self, parsed: ParsedCommand, vfs: VirtualFileSystem) -> ExecutionResult:
        return _success([make_line(OutputKind.OUTPUT, " ".join(parsed.args))])

    def _whoami(self, parsed: ParsedCommand, vfs: VirtualFileSystem) -> ExecutionResult:
        identity = self.identity
        lines = [
            make_line(OutputKind.INFO, "Hi there!"),
            make_line(OutputKind.INFO, ""),
            make_line(OutputKind.OUTPUT, f"Name: {identity.name}"),
            make_line(OutputKind.OUTPUT, f"Role: {identity.role}"),
        ]
        if identity.location:
            lines.append(make_line(OutputKind.OUTPUT, f"Location: {identity.location}"))
        if identity.specialties:
            lines.append(make_line(OutputKind.INFO, ""))
            lines.append(make_line(OutputKind.OUTPUT, "I specialize in:"))
            lines.extend(make_line(OutputKind.OUTPUT, f"  • {item}") for item in identity.specialties)
        lines.append(make_line(OutputKind.INFO, ""))
        lines.append(make_line(OutputKind.INFO, "Type 'about' to learn more!"))
        return _success(lines)

    def _date(self, parsed: ParsedCommand, vfs: VirtualFileSystem) -> ExecutionResult:
        now = self._clock()
        return _success([make_line(OutputKind.OUTPUT, now.strftime("%a, %b %d, %Y, %I:%M:%S %p %Z").strip())])

    def _neofetch(self, parsed: ParsedCommand, vfs: VirtualFileSystem) -> ExecutionResult:
        identity = self.identity
        info = [
            "",
            f"{identity.username}@{identity.hostname}",
            RULE,
            "OS: Portfolio Terminal v1.0",
            "Host: Python",
            "Shell: folioshell",
            f"Uptime: Building cool stuff since {identity.since}" if identity.since else "Uptime: forever",
            RULE,
            f"Role: {identity.role}",
        ]
        if identity.experience_years:
            info.append(f"Experience: {identity.experience_years}")
        if identity.specialties:
            info.append(f"Specialization: {', '.join(identity.specialties)}")
        info.extend([RULE, ""])

        width = len(BANNER[0])
        lines = [
            make_line(
                OutputKind.OUTPUT,
                f"{banner:<{width}}  {text}".rstrip(),
                {"color": "cyan" if index < len(BANNER) else "white"},
            )
            for index, (banner, text) in enumerate(zip_longest(BANNER, info, fillvalue=""))
        ]
        lines.append(make_line(OutputKind.INFO, ""))
        lines.append(make_line(OutputKind.INFO, HELP_HINT))
        return _success(lines)

    def _about(self, parsed: ParsedCommand, vfs: VirtualFileSystem) -> ExecutionResult:
        result = vfs.read_file("/about.txt")
        if not result.ok or result.value is None:
            return _fs_failure("about", result.error)
        return _success(_text_lines(result.value))

    def _experience(self, parsed: ParsedCommand, vfs: VirtualFileSystem) -> ExecutionResult:
        lines = [
            make_line(OutputKind.INFO, "Work Experience"),
            make_line(OutputKind.INFO, "==============="),
            make_line(OutputKind.INFO, ""),
        ]
        rendered = 0
        for path, content in self._read_directory(vfs, "/experience"):
            try:
                record = json.loads(content)
                entry = [f"{record['company']} - {record['role']}", str(record.get("period", ""))]
            except (ValueError, KeyError, TypeError):
                logger.warning("skipping malformed experience record %s", path)
                lines.append(make_line(OutputKind.ERROR, f"Error parsing {path.rsplit('/', 1)[-1]}"))
                continue
            if rendered:
                lines.extend(self._separator())
            if record.get("link"):
                entry.append(f"🔗 {record['link']}")
            lines.extend(make_line(OutputKind.OUTPUT, text) for text in entry)
            lines.append(make_line(OutputKind.INFO, ""))
            lines.append(make_line(OutputKind.OUTPUT, "Key Achievements:"))
            lines.extend(make_line(OutputKind.OUTPUT, f"  • {item}") for item in record.get("achievements", []))
            rendered += 1
        return _success(lines)

    def _projects(self, parsed: ParsedCommand, vfs: VirtualFileSystem) -> ExecutionResult:
        lines = [
            make_line(OutputKind.INFO, "Featured Projects"),
            make_line(OutputKind.INFO, "================="),
            make_line(OutputKind.INFO, ""),
        ]
        for index, (_, content) in enumerate(self._read_directory(vfs, "/projects")):
            if index:
                lines.extend(self._separator())
            lines.extend(_text_lines(content, file_type="md"))
        return _success(lines)

    def _skills(self, parsed: ParsedCommand, vfs: VirtualFileSystem) -> ExecutionResult:
        return self._section(vfs, "/skills", "Technical Skills")

    def _contact(self, parsed: ParsedCommand, vfs: VirtualFileSystem) -> ExecutionResult:
        return self._section(vfs, "/contact", "Contact Information")

    def _exit(self, parsed: ParsedCommand, vfs: VirtualFileSystem) -> ExecutionResult:
        return _success([make_line(OutputKind.INFO, "Returning to GUI view...", {"exit_session": True})])

    def _section(self, vfs: VirtualFileSystem, directory: str, title: str) -> ExecutionResult:
        """Header followed by every file of `directory`, each closed by a blank line."""
        lines = [
            make_line(OutputKind.INFO, title),
            make_line(OutputKind.INFO, "=" * len(title)),
            make_line(OutputKind.INFO, ""),
        ]
        for _, content in self._read_directory(vfs, directory):
            lines.extend(_text_lines(content))
            lines.append(make_line(OutputKind.INFO, ""))
        return _success(lines)

    def _read_directory(self, vfs: VirtualFileSystem, directory: str) -> list[tuple[str, str]]:
        """Return (path, content) for each file directly under `directory`.

        Raises `LookupError` when the directory or one of its files cannot be
        read so the dispatcher reports it as a handler failure.
        """
        listing = vfs.list_directory(directory)
        if not listing.ok or listing.value is None:
            message = listing.error.message if listing.error is not None else directory
            raise LookupError(message)
        files: list[tuple[str, str]] = []
        for node in listing.value:
            if node.is_directory:
                continue
            path = f"{directory}/{node.name}"
            result = vfs.read_file(path)
            if not result.ok or result.value is None:
                raise LookupError(result.error.message if result.error is not None else path)
            files.append((path, result.value))
        return files

    @staticmethod
    def _separator() -> list[OutputLine]:
        return [make_line(OutputKind.INFO, ""), make_line(OutputKind.INFO, "---"), make_line(OutputKind.INFO, "")]
