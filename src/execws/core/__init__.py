"""Argument routing core."""

from .assignment import assign
from .commands import split_command
from .paths import attribute, classify, contains, resolve, rewrite_relative
from .types import UNASSIGNED, Assignment, DispatchResult, Invocation, TokenKind

__all__ = [
    "UNASSIGNED",
    "Assignment",
    "DispatchResult",
    "Invocation",
    "TokenKind",
    "assign",
    "attribute",
    "classify",
    "contains",
    "resolve",
    "rewrite_relative",
    "split_command",
]
