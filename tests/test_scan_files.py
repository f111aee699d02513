from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest

from scan.files import _build_gitignore_matcher, find_csharp_files

if TYPE_CHECKING:
    from pathlib import Path


def _write_source(root: Path, rel_path: str, text: str = "class A { }\n") -> None:
    path = root / rel_path
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def _relative(root: Path, **kwargs: object) -> list[str]:
    return [path.relative_to(root).as_posix() for path in find_csharp_files(root, **kwargs)]


def test_finds_csharp_files_in_sorted_order(tmp_path: Path) -> None:
    _write_source(tmp_path, "src/Zeta.cs")
    _write_source(tmp_path, "src/Alpha.cs")
    _write_source(tmp_path, "Program.cs")
    _write_source(tmp_path, "README.md", "# readme\n")

    assert _relative(tmp_path) == ["Program.cs", "src/Alpha.cs", "src/Zeta.cs"]


def test_skips_build_dirs_and_output_dir(tmp_path: Path) -> None:
    _write_source(tmp_path, "App/Program.cs")
    _write_source(tmp_path, "App/bin/Debug/Generated.cs")
    _write_source(tmp_path, "App/obj/Temp.cs")
    _write_source(tmp_path, ".formattable-lint/Stale.cs")

    assert _relative(tmp_path) == ["App/Program.cs"]
    assert _relative(tmp_path, skip_build_dirs=False) == [
        "App/Program.cs",
        "App/bin/Debug/Generated.cs",
        "App/obj/Temp.cs",
    ]


def test_include_and_exclude_patterns(tmp_path: Path) -> None:
    _write_source(tmp_path, "src/Keep.cs")
    _write_source(tmp_path, "src/Form1.Designer.cs")
    _write_source(tmp_path, "tools/Script.cs")

    results = _relative(
        tmp_path,
        include_patterns=["src/*"],
        exclude_patterns=["*.Designer.cs"],
    )

    assert results == ["src/Keep.cs"]


def test_respects_root_gitignore(tmp_path: Path) -> None:
    _write_source(tmp_path, "src/Keep.cs")
    _write_source(tmp_path, "vendor/Lib.cs")
    (tmp_path / ".gitignore").write_text("vendor/\n", encoding="utf-8")

    assert _relative(tmp_path) == ["src/Keep.cs"]


@pytest.mark.skipif(
    os.name == "nt",
    reason="Symlink semantics vary on Windows test runners.",
)
def test_find_csharp_files_skips_symlinked_dirs(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    repo_root.mkdir()
    _write_source(repo_root, "src/Program.cs")

    external_root = tmp_path / "external"
    _write_source(external_root, "Leak.cs")

    symlink_dir = repo_root / "linked"
    symlink_dir.symlink_to(external_root, target_is_directory=True)

    results = _relative(repo_root)

    assert "src/Program.cs" in results
    assert "linked/Leak.cs" not in results


@pytest.mark.skipif(
    os.name == "nt",
    reason="Symlink semantics vary on Windows test runners.",
)
def test_nested_gitignore_skips_symlinked_gitignore(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    repo_root.mkdir()
    _write_source(repo_root, "src/Program.cs")
    (repo_root / ".gitignore").write_text("*.bin\n", encoding="utf-8")

    external_root = tmp_path / "external"
    external_root.mkdir()
    (external_root / "outside.gitignore").write_text("src/Program.cs\n", encoding="utf-8")

    symlink_gitignore = repo_root / "linked.gitignore"
    symlink_gitignore.symlink_to(external_root / "outside.gitignore")

    matcher = _build_gitignore_matcher(repo_root, nested_gitignore=True)
    assert matcher is not None
    assert matcher(str(repo_root / "src" / "Program.cs")) is False
