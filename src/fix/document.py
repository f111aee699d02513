"""Immutable source documents with a lazily parsed syntax tree."""

from __future__ import annotations

import codecs
from dataclasses import dataclass, replace
from functools import cached_property
from typing import TYPE_CHECKING

from parse.name_resolution import FileSemanticModel
from parse.treesitter_syntax import parse_source

if TYPE_CHECKING:
    from pathlib import Path

    from syntax.nodes import SyntaxNode


@dataclass(frozen=True)
class Document:
    """One version of a source file.

    Every edit produces a new Document; the root and semantic model of a
    given version are computed once and shared by everything that reads it.
    """

    path: str
    text: str
    byte_order_mark: bool = False

    @classmethod
    def from_file(cls, file_path: Path, display_path: str | None = None) -> Document:
        # Decoding the raw bytes keeps \r\n line endings intact. The BOM is
        # held apart from the text so line 1 columns start at 1.
        raw = file_path.read_bytes()
        byte_order_mark = raw.startswith(codecs.BOM_UTF8)
        return cls(
            path=display_path or file_path.as_posix(),
            text=raw.decode("utf-8-sig"),
            byte_order_mark=byte_order_mark,
        )

    @cached_property
    def _root(self) -> SyntaxNode:
        return parse_source(self.text)

    @cached_property
    def _semantic_model(self) -> FileSemanticModel:
        return FileSemanticModel(self._root)

    def syntax_root(self) -> SyntaxNode:
        return self._root

    def semantic_model(self) -> FileSemanticModel:
        return self._semantic_model

    def with_syntax_root(self, root: SyntaxNode) -> Document:
        """Whole-document replacement: the new version is the rendered root."""
        return replace(self, text=root.to_full_string())

    def with_text(self, text: str) -> Document:
        return replace(self, text=text)


__all__ = ["Document"]
