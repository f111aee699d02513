from __future__ import annotations

from pathlib import Path

import pytest

from rules.config import (
    DEFAULT_GENERATED_PATTERNS,
    ConfigError,
    load_config,
    resolve_output_dir,
)


def _write_config(root: Path, toml_content: str) -> None:
    (root / "formattable-lint.toml").write_text(toml_content, encoding="utf-8")


def test_unknown_top_level_key_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, "bogus_key = true")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_unknown_section_rejected(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
[severity]
PreserveFormattableStringForObjParams = "warning"
""".strip(),
    )

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_invalid_toml_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, "exclude = [")

    with pytest.raises(ConfigError, match="Invalid TOML"):
        load_config(tmp_path)


def test_valid_config_accepted(tmp_path: Path) -> None:
    _write_config(tmp_path, 'exclude = ["Legacy/**"]\nskip_generated = false')

    config = load_config(tmp_path)

    assert config.exclude == ["Legacy/**"]
    assert config.exclude_patterns() == ["Legacy/**"]


def test_single_pattern_string_accepted(tmp_path: Path) -> None:
    _write_config(tmp_path, 'include = "src/**"')

    config = load_config(tmp_path)

    assert config.include == ["src/**"]


def test_empty_config_accepted(tmp_path: Path) -> None:
    _write_config(tmp_path, "")

    config = load_config(tmp_path)

    assert config.output_dir == ".formattable-lint"
    assert config.include == []
    assert config.exclude == []
    assert config.skip_build_dirs is True
    assert config.exclude_patterns() == list(DEFAULT_GENERATED_PATTERNS)


def test_missing_config_uses_defaults(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert config.output_dir == ".formattable-lint"
    assert config.nested_gitignore is False


@pytest.mark.parametrize("output_dir", ["../outside", "/abs/path", "~/report", ""])
def test_resolve_output_dir_rejects_paths_outside_root(tmp_path: Path, output_dir: str) -> None:
    with pytest.raises(ConfigError):
        resolve_output_dir(tmp_path, output_dir)


def test_resolve_output_dir_stays_within_root(tmp_path: Path) -> None:
    expected = (tmp_path / "reports" / "lint").resolve()

    assert resolve_output_dir(tmp_path, "reports/lint") == expected
