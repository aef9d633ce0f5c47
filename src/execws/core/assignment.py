"""Argument assignment: route each command-line token to the workspaces it applies to."""

from __future__ import annotations

from collections.abc import Sequence

from loguru import logger

from .paths import attribute, classify, resolve, rewrite_relative
from .types import UNASSIGNED, Assignment, TokenKind


def assign(
    tokens: Sequence[str],
    workspaces: Sequence[str],
    project_root: str,
    *,
    probe_files: bool = False,
) -> Assignment:
    """Build one argument list per workspace plus the unassigned bucket.

    Opaque tokens are broadcast unchanged to every list. A path-like token goes
    to the single workspace containing it, rewritten relative to that
    workspace's root, or verbatim to the unassigned bucket when no workspace
    contains it. Input order is kept within every list.
    """

    args: dict[str, list[str]] = {workspace: [] for workspace in workspaces}
    args[UNASSIGNED] = []
    routed: set[str] = set()

    for token in tokens:
        if classify(token, project_root=project_root, probe_files=probe_files) is TokenKind.OPAQUE:
            for bucket in args.values():
                bucket.append(token)
            continue

        path = resolve(token, project_root)
        owner = attribute(path, workspaces, project_root)
        if owner is None:
            logger.debug("route.unassigned token={}", token)
            args[UNASSIGNED].append(token)
            continue

        rewritten = rewrite_relative(path, resolve(owner, project_root))
        logger.debug("route.path token={} workspace={} rewritten={}", token, owner, rewritten)
        args[owner].append(rewritten)
        routed.add(owner)

    return Assignment(args=args, routed=[workspace for workspace in workspaces if workspace in routed])
