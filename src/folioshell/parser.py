"""Tokenize raw input lines into structured commands."""

from __future__ import annotations

import re

from .models import ParsedCommand

ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "\\": "\\",
    '"': '"',
    "'": "'",
}
QUOTES = {'"', "'"}
_NEGATIVE_NUMBER = re.compile(r"^-\d")


def parse(raw: str) -> ParsedCommand:
    """Parse one input line; never raises."""
    tokens = tokenize(raw.strip())
    if not tokens:
        return ParsedCommand(command="", args=(), flags=frozenset(), raw_input=raw)

    args: list[str] = []
    flags: set[str] = set()
    for token in tokens[1:]:
        if token.startswith("--"):
            if len(token) > 2:
                flags.add(token[2:])
            continue
        if token.startswith("-") and len(token) > 1 and not _NEGATIVE_NUMBER.match(token):
            flags.update(token[1:])
            continue
        args.append(token)

    return ParsedCommand(command=tokens[0], args=tuple(args), flags=frozenset(flags), raw_input=raw)


def tokenize(text: str) -> list[str]:
    """Split on unquoted whitespace, honoring quotes and backslash escapes.

    An unterminated quote runs to the end of the input, and an unknown escape
    keeps its backslash. Empty tokens are dropped.
    """
    tokens: list[str] = []
    current: list[str] = []
    quote: str | None = None
    escaped = False

    for char in text:
        if escaped:
            current.append(ESCAPES.get(char, "\\" + char))
            escaped = False
            continue
        if char == "\\":
            escaped = True
            continue
        if quote is None and char in QUOTES:
            quote = char
            continue
        if char == quote:
            quote = None
            continue
        if quote is None and char.isspace():
            if current:
                tokens.append("".join(current))
                current = []
            continue
        current.append(char)

    if escaped:
        current.append("\\")
    if current:
        tokens.append("".join(current))
    return tokens
