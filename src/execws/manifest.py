"""Workspace manifest loading and glob expansion."""

from __future__ import annotations

import json
from collections.abc import Iterable
from fnmatch import fnmatch
from pathlib import Path, PurePosixPath

import yaml
from loguru import logger

from execws.errors import InvalidManifestError, ManifestNotFoundError

PACKAGE_JSON = "package.json"
PNPM_WORKSPACE = "pnpm-workspace.yaml"
MANIFEST_NAMES = (PACKAGE_JSON, PNPM_WORKSPACE)
EXCLUDE_PREFIX = "!"


def discover_workspaces(project_root: Path, manifest: Path | None = None) -> list[str]:
    """Return workspace directories declared by the project manifest.

    Paths are posix-style, relative to `project_root`, deduplicated and in
    declaration order.
    """

    patterns = load_patterns(project_root, manifest)
    workspaces = expand_patterns(project_root, patterns)
    logger.info("workspace.discovered count={} workspaces={}", len(workspaces), ", ".join(workspaces) or "-")
    return workspaces


def load_patterns(project_root: Path, manifest: Path | None = None) -> list[str]:
    """Read workspace glob patterns from an explicit manifest or the first usable one in the root."""

    if manifest is not None:
        path = manifest if manifest.is_absolute() else project_root / manifest
        if not path.is_file():
            raise ManifestNotFoundError(f"manifest not found: {path}")
        patterns = _read_patterns(path)
        if patterns is None:
            raise InvalidManifestError(f"{path}: no workspaces declared")
        return patterns

    found: list[Path] = []
    for name in MANIFEST_NAMES:
        path = project_root / name
        if not path.is_file():
            continue
        found.append(path)
        patterns = _read_patterns(path)
        if patterns is not None:
            return patterns

    if not found:
        raise ManifestNotFoundError(f"no {' or '.join(MANIFEST_NAMES)} in {project_root}")
    raise InvalidManifestError(f"{found[0]}: no workspaces declared")


def _read_patterns(path: Path) -> list[str] | None:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise InvalidManifestError(f"cannot read {path}: {exc}") from exc

    if path.name == PNPM_WORKSPACE or path.suffix in {".yaml", ".yml"}:
        try:
            payload = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise InvalidManifestError(f"{path}: invalid YAML: {exc}") from exc
        declared = payload.get("packages") if isinstance(payload, dict) else None
    else:
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            raise InvalidManifestError(f"{path}: invalid JSON: {exc}") from exc
        declared = payload.get("workspaces") if isinstance(payload, dict) else None
        # yarn classic also accepts {"packages": [...], "nohoist": [...]}
        if isinstance(declared, dict):
            declared = declared.get("packages")

    if declared is None:
        return None
    if not isinstance(declared, list) or not all(isinstance(item, str) for item in declared):
        raise InvalidManifestError(f"{path}: workspaces must be a list of glob patterns")
    return declared


def expand_patterns(project_root: Path, patterns: Iterable[str]) -> list[str]:
    """Expand glob patterns into existing directories under the project root.

    A pattern prefixed with `!` removes what earlier patterns matched.
    """

    workspaces: dict[str, None] = {}
    for raw in patterns:
        exclude = raw.startswith(EXCLUDE_PREFIX)
        pattern = _normalize_pattern(raw[1:] if exclude else raw)
        if pattern is None:
            logger.warning("workspace.pattern.ignored pattern={}", raw)
            continue

        matches = _glob_dirs(project_root, pattern)
        if exclude:
            for match in matches:
                workspaces.pop(match, None)
            continue
        if not matches:
            logger.debug("workspace.pattern.empty pattern={}", raw)
        for match in matches:
            workspaces.setdefault(match, None)
    return list(workspaces)


def _normalize_pattern(pattern: str) -> str | None:
    if not pattern.strip():
        return None
    pure = PurePosixPath(pattern.strip())
    if pure.is_absolute() or ".." in pure.parts:
        return None
    return str(pure)


def _glob_dirs(project_root: Path, pattern: str) -> list[str]:
    if pattern == ".":
        return ["."]
    dot_parts = [part for part in PurePosixPath(pattern).parts if part.startswith(".")]
    matches: list[str] = []
    for candidate in sorted(project_root.glob(pattern)):
        if not candidate.is_dir():
            continue
        relative = candidate.relative_to(project_root)
        # hidden directories only match a pattern part that names a dot entry itself
        if any(
            part.startswith(".") and not any(fnmatch(part, dot_part) for dot_part in dot_parts)
            for part in relative.parts
        ):
            continue
        matches.append(relative.as_posix())
    return matches
