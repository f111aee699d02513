"""Report generators."""

from artifacts.generators.findings import FindingsGenerator

__all__ = ["FindingsGenerator"]
