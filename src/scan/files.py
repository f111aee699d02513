"""Source file discovery."""

from __future__ import annotations

from fnmatch import fnmatch
from typing import TYPE_CHECKING, cast

from gitignore_parser import parse_gitignore  # type: ignore[import-untyped]

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path

CSHARP_SUFFIX = ".cs"

# MSBuild output directories.
BUILD_DIR_NAMES = frozenset({"bin", "obj"})


def _should_include_file(
    path: Path,
    directory: Path,
    output_dir: str,
    gitignore_matches: Callable[[str], bool] | None,
    include_patterns: list[str] | None,
    exclude_patterns: list[str] | None,
    skip_build_dirs: bool = True,
) -> bool:
    """Check if a file should be included based on all filtering rules."""
    if not path.is_file() or path.is_symlink():
        return False

    if not _is_within_root(path, directory):
        return False

    try:
        rel_path = path.relative_to(directory)
    except ValueError:
        return False

    rel_path_str = rel_path.as_posix()
    dir_parts = rel_path.parts[:-1]

    if output_dir and dir_parts and dir_parts[0] == output_dir:
        return False

    if skip_build_dirs and any(part in BUILD_DIR_NAMES for part in dir_parts):
        return False

    if gitignore_matches is not None and gitignore_matches(str(path)):
        return False

    if include_patterns and not any(
        fnmatch(rel_path_str, pat) for pat in include_patterns
    ):
        return False

    has_excluded_match = exclude_patterns and any(
        fnmatch(rel_path_str, pat) for pat in exclude_patterns
    )
    return not has_excluded_match


def _is_within_root(path: Path, root: Path) -> bool:
    """Return True when the resolved path stays within the resolved root."""
    try:
        root_resolved = root.resolve()
        path_resolved = path.resolve()
    except OSError:
        return False

    try:
        path_resolved.relative_to(root_resolved)
    except ValueError:
        return False

    return True


def _build_gitignore_matcher(
    root: Path,
    *,
    nested_gitignore: bool,
) -> Callable[[str], bool] | None:
    if not nested_gitignore:
        gitignore_path = root / ".gitignore"
        if gitignore_path.is_file():
            return cast("Callable[[str], bool]", parse_gitignore(gitignore_path))
        return None

    gitignore_paths = sorted(
        {path for path in root.rglob(".gitignore") if path.is_file()},
        key=lambda p: p.relative_to(root).as_posix(),
    )
    if not gitignore_paths:
        return None

    matchers = [parse_gitignore(path) for path in gitignore_paths]

    def matches(path_str: str) -> bool:
        for matcher in matchers:
            try:
                if matcher(path_str):
                    return True
            except ValueError:
                continue
        return False

    return matches


def find_csharp_files(
    directory: Path,
    *,
    output_dir: str = ".formattable-lint",
    include_patterns: list[str] | None = None,
    exclude_patterns: list[str] | None = None,
    nested_gitignore: bool = False,
    skip_build_dirs: bool = True,
) -> Iterator[Path]:
    """Find all C# files in a directory, respecting .gitignore.

    Args:
        directory: Directory to search for C# files
        output_dir: Directory name to skip (default ".formattable-lint")
        include_patterns: Optional list of fnmatch patterns; if provided,
            files must match at least one pattern to be included
        exclude_patterns: Optional list of fnmatch patterns; files matching
            any pattern are excluded
        nested_gitignore: Honor .gitignore files below the root as well
        skip_build_dirs: Skip files under bin/ and obj/

    Yields:
        Path objects for each C# file found, sorted lexicographically
        by relative path for deterministic ordering.
    """
    gitignore_matches = _build_gitignore_matcher(
        directory,
        nested_gitignore=nested_gitignore,
    )

    matched_files = [
        path
        for path in directory.rglob(f"*{CSHARP_SUFFIX}")
        if _should_include_file(
            path,
            directory,
            output_dir,
            gitignore_matches,
            include_patterns,
            exclude_patterns,
            skip_build_dirs,
        )
    ]

    matched_files.sort(key=lambda p: p.relative_to(directory).as_posix())

    yield from matched_files


__all__ = ["BUILD_DIR_NAMES", "CSHARP_SUFFIX", "_should_include_file", "find_csharp_files"]
