"""Textual guard against re-flagging arguments that already use FormattableString."""

from __future__ import annotations

from typing import TYPE_CHECKING

from contract.diagnostics import FORMATTABLE_STRING_TYPE_NAME
from syntax.nodes import TokenKind

if TYPE_CHECKING:
    from syntax.nodes import SyntaxNode


def mentions_formattable_string(argument: SyntaxNode) -> bool:
    """True when an identifier token in the argument is exactly ``FormattableString``.

    This is a name match, not a type check: a cast, an ``as`` clause or a
    ``FormattableString.Invariant`` call all suppress, and so does an
    unrelated type that happens to share the name.
    """
    return any(
        token.kind is TokenKind.IDENTIFIER and token.text.strip() == FORMATTABLE_STRING_TYPE_NAME
        for token in argument.descendant_tokens()
    )


__all__ = ["mentions_formattable_string"]
