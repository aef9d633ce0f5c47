"""Command string tokenizing."""

from __future__ import annotations

import shlex

from execws.errors import CommandSyntaxError, NoCommandError


def parse_command_words(text: str) -> list[str]:
    """Split command text into words using POSIX shell quoting rules.

    Single quotes, double quotes and backslash escapes are honored; nothing is
    expanded or executed.
    """

    try:
        return shlex.split(text)
    except ValueError as exc:
        raise CommandSyntaxError(f"cannot parse command {text!r}: {exc}") from exc


def split_command(text: str) -> tuple[str, list[str]]:
    """Split a `--command` string into the program and its fixed arguments."""

    words = parse_command_words(text)
    if not words:
        raise NoCommandError("--command is empty")
    return words[0], words[1:]
