"""
C Subset Type System
====================

The language subset has exactly one data type.

Supported Types
---------------
| Keyword | CType    | Range                        |
|---------|----------|------------------------------|
| int     | CType.INT| -2147483648 to 2147483647    |

Type keywords are ordinary identifiers as far as the lexer is concerned.
The parser asks this module whether an identifier names a type.
"""

from enum import Enum, auto


# =============================================================================
# Integer Limits
# =============================================================================

INT_MIN = -(2 ** 31)
INT_MAX = 2 ** 31 - 1


# =============================================================================
# Type Enumeration
# =============================================================================

class CType(Enum):
    """Data types of the C subset."""
    INT = auto()

    def __str__(self) -> str:
        """Return the C type name."""
        return self.name.lower()

    @classmethod
    def from_keyword(cls, keyword: str) -> "CType":
        """
        Map a type keyword to its CType.

        Raises:
            ValueError: If the keyword names no type
        """
        try:
            return TYPE_KEYWORDS[keyword]
        except KeyError:
            raise ValueError(f"unknown type name '{keyword}'") from None

    def fits(self, value: int) -> bool:
        """Return True if value is representable in this type."""
        return INT_MIN <= value <= INT_MAX


TYPE_KEYWORDS: dict[str, CType] = {
    "int": CType.INT,
}


def is_type_keyword(name: str) -> bool:
    """Return True if name is a type keyword."""
    return name in TYPE_KEYWORDS
