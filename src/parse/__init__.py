"""Parsing and name resolution for C# sources."""

from parse.name_resolution import (
    OBJECT_TYPE,
    FileSemanticModel,
    MethodSymbol,
    ParameterSymbol,
    SemanticModel,
    TypeRef,
    parse_type_ref,
)
from parse.treesitter_syntax import parse_source

__all__ = [
    "OBJECT_TYPE",
    "FileSemanticModel",
    "MethodSymbol",
    "ParameterSymbol",
    "SemanticModel",
    "TypeRef",
    "parse_source",
    "parse_type_ref",
]
