"""CLI entrypoint for the portfolio shell."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Callable

from . import __version__
from .content_loader import load_portfolio, load_portfolio_from_file
from .executor import CommandExecutor
from .models import OutputKind, OutputLine
from .session import ShellSession
from .vfs import VirtualFileSystem

InputFn = Callable[[str], str]
PrintFn = Callable[[str], None]
CLEAR_SCREEN = "\033[2J\033[H"
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]

logger = logging.getLogger(__name__)


def _session(content: str | None) -> ShellSession:
    """Create a session over bundled or user-supplied portfolio content."""
    data = load_portfolio_from_file(content) if content else load_portfolio()
    return ShellSession(vfs=VirtualFileSystem.from_portfolio(data), executor=CommandExecutor(identity=data.identity))


def run(argv: list[str] | None = None) -> int:
    """Run the CLI application."""
    parser = argparse.ArgumentParser(prog="folioshell", description="Browse a portfolio as a shell")
    parser.add_argument("--content", metavar="PATH", help="portfolio JSON file to serve instead of the bundled one")
    parser.add_argument("--log-level", default="WARNING", choices=LOG_LEVELS, type=str.upper)
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    try:
        session = _session(args.content)
    except (OSError, ValueError) as exc:
        logger.debug("content loading failed", exc_info=True)
        print(f"Cannot load portfolio content: {exc}")
        return 1
    return play_shell(session=session)


def _render(line: OutputLine) -> str:
    if line.kind is OutputKind.ERROR:
        return f"error: {line.text}"
    return line.text


def play_shell(input_fn: InputFn = input, print_fn: PrintFn = print, session: ShellSession | None = None) -> int:
    """Run the read-eval-print loop until exit, EOF or Ctrl-C."""
    if session is None:
        session = ShellSession()
    for line in session.welcome_lines():
        print_fn(line.text)

    while True:
        try:
            raw = input_fn(session.prompt())
        except (EOFError, KeyboardInterrupt):
            print_fn("")
            return 0

        step = session.submit(raw)
        if step.cleared:
            print_fn(CLEAR_SCREEN)
            continue
        # The prompt already shows the echoed command.
        for line in step.lines[1:]:
            print_fn(_render(line))
        if step.closed:
            return 0


def main_entry() -> None:
    """Console script entrypoint."""
    raise SystemExit(run())


if __name__ == "__main__":  # pragma: no cover
    main_entry()
