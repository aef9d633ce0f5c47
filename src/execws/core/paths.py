"""Path classification, resolution and workspace attribution.

All resolution is lexical and anchored at an explicit project root; nothing
here reads the process working directory.
"""

from __future__ import annotations

import os
from collections.abc import Sequence

from .types import TokenKind

_SEPARATORS = tuple(sep for sep in (os.sep, os.altsep) if sep)


def classify(token: str, *, project_root: str | None = None, probe_files: bool = False) -> TokenKind:
    """Decide whether a token refers to a filesystem location.

    A token is path-like when it is absolute, starts with `.`, or contains a
    path separator. With `probe_files`, a bare token that names an existing
    entry under `project_root` is path-like too.
    """

    if not token:
        return TokenKind.OPAQUE
    if os.path.isabs(token) or token.startswith(".") or any(sep in token for sep in _SEPARATORS):
        return TokenKind.PATH_LIKE
    if probe_files and project_root is not None and os.path.lexists(os.path.join(project_root, token)):
        return TokenKind.PATH_LIKE
    return TokenKind.OPAQUE


def resolve(token: str, project_root: str) -> str:
    """Anchor a path token at the project root and normalize it lexically."""

    if os.path.isabs(token):
        return os.path.normpath(token)
    return os.path.normpath(os.path.join(project_root, token))


def contains(root: str, path: str) -> bool:
    """True when `path` is `root` itself or lies below it. Both must be absolute."""

    return path == root or path.startswith(os.path.join(root, ""))


def attribute(path: str, workspaces: Sequence[str], project_root: str) -> str | None:
    """Return the workspace owning an absolute path, or None.

    Overlapping workspace roots are resolved by discovery order: the first
    containing workspace wins.
    """

    for workspace in workspaces:
        if contains(resolve(workspace, project_root), path):
            return workspace
    return None


def rewrite_relative(path: str, workspace_root: str) -> str:
    """Express an absolute path relative to the workspace root (`.` for the root itself)."""

    return os.path.relpath(path, workspace_root)
