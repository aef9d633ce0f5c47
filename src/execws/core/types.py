"""Shared core dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

UNASSIGNED = ""


class TokenKind(Enum):
    PATH_LIKE = "path"
    OPAQUE = "opaque"


@dataclass(frozen=True)
class Assignment:
    """Per-workspace argument lists produced for one invocation.

    `args` is keyed by workspace path relative to the project root, plus the
    `UNASSIGNED` bucket. `routed` lists, in discovery order, the workspaces that
    received at least one path token.
    """

    args: dict[str, list[str]]
    routed: list[str] = field(default_factory=list)

    @property
    def workspaces(self) -> list[str]:
        return [name for name in self.args if name != UNASSIGNED]

    @property
    def unassigned(self) -> list[str]:
        return list(self.args.get(UNASSIGNED, []))

    def selected(self, *, all_if_no_paths: bool = False) -> list[str]:
        """Workspaces eligible for dispatch, in discovery order."""

        if self.routed:
            return list(self.routed)
        if all_if_no_paths:
            return self.workspaces
        return []


@dataclass(frozen=True)
class Invocation:
    """One planned process launch."""

    workspace: str
    cwd: str
    program: str
    args: list[str]

    @property
    def argv(self) -> list[str]:
        return [self.program, *self.args]


@dataclass(frozen=True)
class DispatchResult:
    """Outcome of one workspace dispatch: an exit code or a launch error."""

    workspace: str
    exit_code: int | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.exit_code == 0
