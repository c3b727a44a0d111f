"""ComparisonResult dataclass for digest comparison output.

This module provides the result type returned by compare() calls.
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["ComparisonResult"]


@dataclass(frozen=True, slots=True)
class ComparisonResult:
    """Result of a compare() call.

    Attributes:
        equal: True when both root digests are byte-for-byte identical.
        left_digest: Root digest of the left document.
        right_digest: Root digest of the right document.
        computation_time_ms: Wall-clock duration of both traversals in
            milliseconds.
    """

    equal: bool
    left_digest: bytes
    right_digest: bytes
    computation_time_ms: float

    def __bool__(self) -> bool:
        return self.equal

    @property
    def left_hexdigest(self) -> str:
        return self.left_digest.hex()

    @property
    def right_hexdigest(self) -> str:
        return self.right_digest.hex()
