import json
from pathlib import Path

import pytest

from execws.errors import InvalidManifestError, ManifestNotFoundError
from execws.manifest import discover_workspaces, expand_patterns, load_patterns


def test_discover_from_package_json(monorepo: Path) -> None:
    (monorepo / "packages" / "notes.txt").write_text("not a workspace", encoding="utf-8")
    assert discover_workspaces(monorepo) == ["packages/a", "packages/b"]


def test_yarn_object_form(tmp_path: Path) -> None:
    (tmp_path / "apps" / "web").mkdir(parents=True)
    (tmp_path / "package.json").write_text(
        json.dumps({"workspaces": {"packages": ["apps/*"], "nohoist": ["**/react"]}}), encoding="utf-8"
    )
    assert discover_workspaces(tmp_path) == ["apps/web"]


def test_pnpm_workspace_yaml(tmp_path: Path) -> None:
    (tmp_path / "libs" / "core").mkdir(parents=True)
    (tmp_path / "libs" / "legacy").mkdir(parents=True)
    (tmp_path / "package.json").write_text(json.dumps({"name": "root"}), encoding="utf-8")
    (tmp_path / "pnpm-workspace.yaml").write_text(
        "packages:\n  - 'libs/*'\n  - '!libs/legacy'\n", encoding="utf-8"
    )
    assert discover_workspaces(tmp_path) == ["libs/core"]


def test_patterns_keep_declaration_order_and_dedupe(tmp_path: Path) -> None:
    for name in ("tools/z", "apps/b", "apps/a"):
        (tmp_path / name).mkdir(parents=True)
    patterns = ["tools/*", "apps/*", "apps/a", "./apps/b/"]
    assert expand_patterns(tmp_path, patterns) == ["tools/z", "apps/a", "apps/b"]


def test_recursive_pattern(tmp_path: Path) -> None:
    (tmp_path / "pkgs" / "group" / "inner").mkdir(parents=True)
    assert expand_patterns(tmp_path, ["pkgs/**/inner"]) == ["pkgs/group/inner"]


def test_escaping_and_absolute_patterns_are_ignored(tmp_path: Path) -> None:
    (tmp_path / "inside").mkdir()
    assert expand_patterns(tmp_path, ["../*", "/etc", "", "inside"]) == ["inside"]


def test_missing_manifest(tmp_path: Path) -> None:
    with pytest.raises(ManifestNotFoundError):
        discover_workspaces(tmp_path)


def test_package_json_without_workspaces(tmp_path: Path) -> None:
    (tmp_path / "package.json").write_text(json.dumps({"name": "single"}), encoding="utf-8")
    with pytest.raises(InvalidManifestError):
        load_patterns(tmp_path)


def test_invalid_json(tmp_path: Path) -> None:
    (tmp_path / "package.json").write_text("{not json", encoding="utf-8")
    with pytest.raises(InvalidManifestError):
        load_patterns(tmp_path)


def test_workspaces_must_be_strings(tmp_path: Path) -> None:
    (tmp_path / "package.json").write_text(json.dumps({"workspaces": [1, 2]}), encoding="utf-8")
    with pytest.raises(InvalidManifestError):
        load_patterns(tmp_path)


def test_explicit_manifest_relative_to_root(tmp_path: Path) -> None:
    (tmp_path / "mods" / "one").mkdir(parents=True)
    (tmp_path / "ws.json").write_text(json.dumps({"workspaces": ["mods/*"]}), encoding="utf-8")
    assert discover_workspaces(tmp_path, Path("ws.json")) == ["mods/one"]

    with pytest.raises(ManifestNotFoundError):
        load_patterns(tmp_path, Path("nope.json"))


def test_hidden_directories_are_skipped_unless_named(tmp_path: Path) -> None:
    for name in ("packages/a", "packages/.cache", ".config/tool", "packages/a/.git"):
        (tmp_path / name).mkdir(parents=True)

    assert expand_patterns(tmp_path, ["packages/*"]) == ["packages/a"]
    assert expand_patterns(tmp_path, [".config/*"]) == [".config/tool"]
    assert expand_patterns(tmp_path, ["packages/.cache"]) == ["packages/.cache"]
