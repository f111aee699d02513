from __future__ import annotations

from pathlib import Path

import tomllib
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

CONFIG_FILENAME = "formattable-lint.toml"

# Designer and source-generator output.
DEFAULT_GENERATED_PATTERNS = ("*.g.cs", "*.g.i.cs", "*.Designer.cs", "*.AssemblyInfo.cs")


class LintConfig(BaseModel):
    """Configuration for formattable-lint runs over a source tree."""

    model_config = ConfigDict(extra="forbid")

    output_dir: str = Field(
        default=".formattable-lint",
        description="Output directory for the findings report",
    )
    include: list[str] = Field(
        default_factory=list,
        description="Glob patterns for files to include (empty = all C# files)",
    )
    exclude: list[str] = Field(
        default_factory=list,
        description="Glob patterns for files to exclude",
    )
    skip_generated: bool = Field(
        default=True,
        description="Skip generated sources (*.g.cs, *.Designer.cs, ...)",
    )
    skip_build_dirs: bool = Field(
        default=True,
        description="Skip bin/ and obj/ build output directories",
    )
    nested_gitignore: bool = Field(
        default=False,
        description=(
            "Enable nested .gitignore composition (default: false for root-only)"
        ),
    )

    @field_validator("include", "exclude", mode="before")
    @classmethod
    def validate_patterns(cls, v: object) -> object:
        """Accept a single pattern string as a one-element list."""
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        return v

    def exclude_patterns(self) -> list[str]:
        patterns = list(self.exclude)
        if self.skip_generated:
            patterns.extend(DEFAULT_GENERATED_PATTERNS)
        return patterns


class ConfigError(Exception):
    """Raised when config file exists but cannot be parsed."""


def resolve_output_dir(root: Path, output_dir: str) -> Path:
    """Resolve a config-provided output_dir safely within the source root.

    The config output_dir must be a non-empty relative path that remains
    within the root after resolution. Absolute paths and paths that escape
    the root are rejected.
    """
    if not output_dir:
        msg = "output_dir must be a non-empty relative path"
        raise ConfigError(msg)

    if output_dir.startswith("~"):
        msg = "output_dir must be a relative path within the source root"
        raise ConfigError(msg)

    output_path = Path(output_dir)
    if output_path.is_absolute():
        msg = "output_dir must be a relative path within the source root"
        raise ConfigError(msg)

    try:
        resolved_root = root.resolve()
        resolved_output = (resolved_root / output_path).resolve()
    except OSError as exc:
        msg = f"Failed to resolve output_dir '{output_dir}': {exc}"
        raise ConfigError(msg) from exc

    try:
        resolved_output.relative_to(resolved_root)
    except ValueError as exc:
        msg = f"output_dir '{output_dir}' escapes the source root"
        raise ConfigError(msg) from exc

    return resolved_output


def load_config(root: Path) -> LintConfig:
    """Load configuration from formattable-lint.toml if it exists."""
    config_path = Path(root) / CONFIG_FILENAME

    if not config_path.is_file():
        return LintConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return LintConfig.model_validate(data)
    except ValidationError as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e
