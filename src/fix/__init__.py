"""Code fix that preserves FormattableString arguments."""

from fix.document import Document
from fix.rewrite import compute_fix
from fix.workspace import FixResult, fix_all

__all__ = ["Document", "FixResult", "compute_fix", "fix_all"]
