"""Command-line interface for formattable-lint."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from artifacts.utils import _get_output_dir_name
from artifacts.write import generate_report
from contract.validation import validate_artifacts
from fix.workspace import fix_all, load_document, write_document
from rules.analyzer import analyze_document
from rules.config import ConfigError, LintConfig, load_config, resolve_output_dir
from scan.files import find_csharp_files

logger = logging.getLogger(__name__)


def _add_common_paths(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Source root or single C# file (default: .)",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="formattable-lint")
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging output",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    check_parser = subparsers.add_parser(
        "check", help="Report interpolated strings passed as object"
    )
    _add_common_paths(check_parser)

    fix_parser = subparsers.add_parser(
        "fix", help="Add FormattableString casts in place"
    )
    _add_common_paths(fix_parser)
    fix_parser.add_argument(
        "--diff",
        action="store_true",
        help="Print a unified diff instead of writing files",
    )

    report_parser = subparsers.add_parser("report", help="Write the findings report")
    _add_common_paths(report_parser)
    report_parser.add_argument(
        "--out-dir",
        default=None,
        help="Output directory for the report (default: config output dir)",
    )

    validate_parser = subparsers.add_parser("validate", help="Validate a findings report")
    _add_common_paths(validate_parser)
    validate_parser.add_argument(
        "--artifacts-dir",
        default=None,
        help="Report directory (default: config output dir)",
    )

    return parser


def _iter_sources(root: Path, config: LintConfig) -> list[tuple[Path, str]]:
    """Source files under root paired with their display paths."""
    if root.is_file():
        return [(root, root.name)]

    out_dir = resolve_output_dir(root, config.output_dir)
    return [
        (file_path, file_path.relative_to(root).as_posix())
        for file_path in find_csharp_files(
            root,
            output_dir=_get_output_dir_name(out_dir, root),
            include_patterns=config.include,
            exclude_patterns=config.exclude_patterns(),
            nested_gitignore=config.nested_gitignore,
            skip_build_dirs=config.skip_build_dirs,
        )
    ]


def _config_root(root: Path) -> Path:
    return root.parent if root.is_file() else root


def _handle_check(root: Path) -> int:
    config = load_config(_config_root(root))
    finding_count = 0
    for file_path, display_path in _iter_sources(root, config):
        document = load_document(file_path, display_path)
        if document is None:
            continue
        for finding in analyze_document(document):
            sys.stdout.write(f"{finding.format()}\n")
            finding_count += 1
    return 1 if finding_count else 0


def _handle_fix(root: Path, *, diff: bool) -> int:
    config = load_config(_config_root(root))
    for file_path, display_path in _iter_sources(root, config):
        document = load_document(file_path, display_path)
        if document is None:
            continue
        result = fix_all(document)
        if not result.changed:
            continue
        if diff:
            sys.stdout.write(result.unified_diff())
        else:
            write_document(file_path, result.fixed)
            logger.debug("%s: applied %d fix(es)", display_path, result.applied)
    return 0


def _handle_report(root: Path, out_dir: str | None) -> int:
    resolved_out_dir = None
    if out_dir is not None:
        resolved_out_dir = Path(out_dir).expanduser().resolve()
    summary = generate_report(root=root, out_dir=resolved_out_dir)
    sys.stdout.write(
        f"{summary['finding_count']} finding(s) in {summary['file_count']} file(s)\n"
    )
    return 0


def _resolve_artifacts_dir(root: Path, artifacts_dir: str | None) -> Path:
    if artifacts_dir is None:
        config = load_config(root)
        return resolve_output_dir(root, config.output_dir)
    return Path(artifacts_dir).expanduser().resolve()


def _handle_validate(root: Path, artifacts_dir: str | None) -> int:
    resolved_artifacts_dir = _resolve_artifacts_dir(root, artifacts_dir)
    result = validate_artifacts(resolved_artifacts_dir)
    for warning in result.warnings:
        sys.stderr.write(f"{warning.location()}: warning: {warning.message}\n")
    if result.errors:
        for error in result.errors:
            sys.stderr.write(f"{error.location()}: {error.message}\n")
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )
        logger.debug("Debug logging enabled")

    root = Path(args.root).expanduser().resolve()
    if not root.exists():
        sys.stderr.write(f"error: {root} does not exist\n")
        return 2

    try:
        if args.command == "check":
            return _handle_check(root)

        if args.command == "fix":
            return _handle_fix(root, diff=args.diff)

        if args.command == "report":
            if root.is_file():
                sys.stderr.write(f"error: report needs a source directory, got file {root}\n")
                return 2
            return _handle_report(root, args.out_dir)

        if args.command == "validate":
            return _handle_validate(_config_root(root), args.artifacts_dir)
    except ConfigError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2

    raise AssertionError


if __name__ == "__main__":
    raise SystemExit(main())
