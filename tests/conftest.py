from __future__ import annotations

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from folioshell.executor import CommandExecutor  # noqa: E402
from folioshell.models import Node, ShellIdentity, directory_node, file_node  # noqa: E402
from folioshell.session import ShellSession  # noqa: E402
from folioshell.vfs import VirtualFileSystem  # noqa: E402

FIXED_NOW = datetime(2024, 3, 5, 14, 7, 9, tzinfo=timezone(timedelta(hours=5, minutes=30), "IST"))


def sample_tree() -> Node:
    """Small tree shaped like the bundled one."""
    return directory_node(
        "/",
        [
            file_node("README.md", "# Welcome\n\nStart here."),
            file_node("about.txt", "Jane Doe - Engineer\n\nBuilds things."),
            directory_node(
                "experience",
                [
                    file_node(
                        "acme.json",
                        '{"company": "Acme", "role": "Engineer", "period": "2020 - Present", '
                        '"achievements": ["Shipped it"]}',
                    ),
                ],
            ),
            directory_node("projects", [file_node("demo.md", "# Demo\n\nA demo project.")]),
            directory_node("skills", [file_node("languages.txt", "Python\nGo")]),
            directory_node("contact", [file_node("email.txt", "jane@example.com")]),
            directory_node(".secrets", [file_node("quotes.txt", "Make it work.")]),
        ],
    )


@pytest.fixture
def identity() -> ShellIdentity:
    return ShellIdentity(
        name="Jane Doe",
        role="Engineer",
        username="jane",
        hostname="portfolio",
        location="Remote",
        specialties=["Compilers", "Shells"],
        since="2019",
        experience_years="5+ years",
    )


@pytest.fixture
def tree() -> Node:
    return sample_tree()


@pytest.fixture
def vfs(tree: Node) -> VirtualFileSystem:
    return VirtualFileSystem(tree)


@pytest.fixture
def executor(identity: ShellIdentity) -> CommandExecutor:
    return CommandExecutor(identity=identity, clock=lambda: FIXED_NOW)


@pytest.fixture
def session(vfs: VirtualFileSystem, executor: CommandExecutor) -> ShellSession:
    return ShellSession(vfs=vfs, executor=executor)
