"""Enum helpers.

- index: Reverse lookup from derived key to variant
- kinds: Value kinds and their zero values
"""

from codesafe.enums.index import EnumIndex, build_index
from codesafe.enums.kinds import ValueKind

__all__ = ["EnumIndex", "build_index", "ValueKind"]
