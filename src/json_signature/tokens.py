"""TokenKind StrEnum: the kind of JSON value found at a traversal path.

Every node reported to an observer carries exactly one of the six kinds.
"""

from __future__ import annotations

from enum import StrEnum, auto

__all__ = ["TokenKind"]


class TokenKind(StrEnum):
    """Enumeration of the six JSON value kinds.

    StrEnum values are the lowercased member names (Python 3.11+):
    - NULL     -> "null"    : the literal ``null``
    - NUMBER   -> "number"  : a number literal, kept as source text
    - BOOLEAN  -> "boolean" : ``true`` or ``false``
    - STRING   -> "string"  : a string value
    - ARRAY    -> "array"   : JSON array []
    - OBJECT   -> "object"  : JSON object {}

    ``str(kind)`` and f-strings give the capitalised display name ("Null",
    "Array", ...) while ``kind.value`` and ``==`` comparisons stay lowercase.
    """

    NULL = auto()
    NUMBER = auto()
    BOOLEAN = auto()
    STRING = auto()
    ARRAY = auto()
    OBJECT = auto()

    def __str__(self) -> str:
        return self.name.capitalize()

    def __format__(self, format_spec: str) -> str:
        return format(str(self), format_spec)

    @property
    def is_container(self) -> bool:
        """True for ARRAY and OBJECT."""
        return self in (TokenKind.ARRAY, TokenKind.OBJECT)
