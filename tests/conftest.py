from __future__ import annotations

import json
from pathlib import Path

import pytest


@pytest.fixture
def monorepo(tmp_path: Path) -> Path:
    """A project root declaring `packages/*` with workspaces `a` and `b`."""

    root = tmp_path / "repo"
    (root / "packages" / "a" / "src").mkdir(parents=True)
    (root / "packages" / "b").mkdir(parents=True)
    (root / "packages" / "a" / "src" / "x.ts").write_text("export {}\n", encoding="utf-8")
    (root / "package.json").write_text(
        json.dumps({"name": "repo", "private": True, "workspaces": ["packages/*"]}),
        encoding="utf-8",
    )
    return root
