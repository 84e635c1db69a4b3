"""Core value types for the portfolio shell."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from types import MappingProxyType


class NodeKind(StrEnum):
    """Kind of a virtual file-system node."""

    FILE = "file"
    DIRECTORY = "directory"


@dataclass(frozen=True)
class Node:
    """One entry of the virtual tree.

    Directories own their children by containment; nodes never point back at
    their parent, so the parent of a node is recovered from its path.
    """

    name: str
    kind: NodeKind
    content: str = ""
    children: Mapping[str, Node] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def is_directory(self) -> bool:
        return self.kind is NodeKind.DIRECTORY

    @property
    def display_name(self) -> str:
        return f"{self.name}/" if self.is_directory else self.name


def file_node(name: str, content: str) -> Node:
    """Create a file node."""
    return Node(name=name, kind=NodeKind.FILE, content=content)


def directory_node(name: str, children: list[Node] | None = None) -> Node:
    """Create a directory node with a read-only view of its children.

    Child names must be unique and must not contain a path separator.
    """
    entries: dict[str, Node] = {}
    for child in children or []:
        if child.name in {"", ".", ".."} or "/" in child.name:
            raise ValueError(f"Invalid entry name '{child.name}' in directory '{name}'.")
        if child.name in entries:
            raise ValueError(f"Duplicate entry '{child.name}' in directory '{name}'.")
        entries[child.name] = child
    return Node(name=name, kind=NodeKind.DIRECTORY, children=MappingProxyType(entries))


class CommandName(StrEnum):
    """Closed vocabulary understood by the shell."""

    LS = "ls"
    CD = "cd"
    PWD = "pwd"
    CAT = "cat"
    HELP = "help"
    CLEAR = "clear"
    ECHO = "echo"
    WHOAMI = "whoami"
    DATE = "date"
    NEOFETCH = "neofetch"
    ABOUT = "about"
    EXPERIENCE = "experience"
    PROJECTS = "projects"
    SKILLS = "skills"
    CONTACT = "contact"
    EXIT = "exit"
    GUI = "gui"

    @classmethod
    def lookup(cls, name: str) -> CommandName | None:
        """Map raw user input onto the vocabulary; case-sensitive."""
        try:
            return cls(name)
        except ValueError:
            return None


@dataclass(frozen=True)
class ParsedCommand:
    """Structured form of one raw input line."""

    command: str
    args: tuple[str, ...]
    flags: frozenset[str]
    raw_input: str


@dataclass(frozen=True)
class ValidationResult:
    """Advisory outcome of validating a parsed command."""

    is_valid: bool
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()


class OutputKind(StrEnum):
    """How a renderer should treat an output line."""

    COMMAND = "command"
    OUTPUT = "output"
    ERROR = "error"
    INFO = "info"


@dataclass(frozen=True)
class OutputLine:
    """One displayable line."""

    kind: OutputKind
    text: str
    timestamp: datetime
    metadata: Mapping[str, object] | None = None


def make_line(kind: OutputKind, text: str, metadata: Mapping[str, object] | None = None) -> OutputLine:
    """Create a timestamped output line with a read-only metadata view."""
    frozen = MappingProxyType(dict(metadata)) if metadata is not None else None
    return OutputLine(kind=kind, text=text, timestamp=datetime.now(UTC), metadata=frozen)


@dataclass(frozen=True)
class ExecutionResult:
    """Ordered output plus exit status of one command."""

    output: tuple[OutputLine, ...]
    exit_code: int
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


@dataclass(frozen=True)
class Stat:
    """Headline number shown in the about section."""

    label: str
    value: str


@dataclass(frozen=True)
class AboutData:
    """Biography block."""

    name: str
    role: str
    bio: str
    highlights: list[str]
    stats: list[Stat]


@dataclass(frozen=True)
class ExperienceEntry:
    """One job record."""

    company: str
    role: str
    period: str
    achievements: list[str]
    link: str | None = None


@dataclass(frozen=True)
class Metric:
    """Project metric."""

    label: str
    value: str


@dataclass(frozen=True)
class Link:
    """Labelled URL."""

    label: str
    url: str
    type: str = "other"


@dataclass(frozen=True)
class ProjectEntry:
    """One project write-up."""

    title: str
    description: str
    tech: list[str]
    metrics: list[Metric]
    links: list[Link]


@dataclass(frozen=True)
class SkillsData:
    """Categorized skill lists."""

    languages: list[str]
    frameworks: list[str]
    tools: list[str]
    databases: list[str]


@dataclass(frozen=True)
class ContactData:
    """Contact fields."""

    email: str
    github: str
    linkedin: str
    resume: str
    twitter: str | None = None


@dataclass(frozen=True)
class ShellIdentity:
    """Who the shell introduces itself as in `whoami`, `neofetch` and the prompt."""

    name: str
    role: str
    username: str
    hostname: str
    location: str = ""
    specialties: list[str] = field(default_factory=list)
    since: str = ""
    experience_years: str = ""


@dataclass(frozen=True)
class PortfolioData:
    """Everything the file-system builder needs."""

    identity: ShellIdentity
    about: AboutData
    experience: list[ExperienceEntry]
    projects: list[ProjectEntry]
    skills: SkillsData
    contact: ContactData
