"""DigestConfig: immutable parameters for a digest traversal.

DigestConfig is a frozen (immutable) dataclass.  Only ``algorithm`` affects
the digests produced; the other fields govern how input is read and which
inputs are rejected.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass

__all__ = ["DEFAULT_ALGORITHM", "DigestConfig"]

DEFAULT_ALGORITHM = "sha1"


@dataclass(frozen=True, slots=True)
class DigestConfig:
    """Immutable configuration for ``DigestEngine``.

    Attributes:
        algorithm: Name of a fixed-size ``hashlib`` algorithm.  Defaults to
            "sha1", which keeps digests compatible with existing signatures.
            Changing it changes every digest.
        chunk_size: Number of bytes (or characters, for text sources) read
            from the source per call.  Must be >= 1.
        max_depth: Maximum container nesting depth.  Deeper input raises
            ``NestingTooDeep``.  Must be >= 1.  Defaults to 10000.
        allow_trailing_data: When True, anything after the root value is
            ignored.  Default False: only whitespace may follow it.
    """

    algorithm: str = DEFAULT_ALGORITHM
    chunk_size: int = 65536
    max_depth: int = 10000
    allow_trailing_data: bool = False

    def __post_init__(self) -> None:
        try:
            hasher = hashlib.new(self.algorithm)
        except (ValueError, TypeError):
            msg = f"unsupported hash algorithm: {self.algorithm!r}"
            raise ValueError(msg) from None
        if self.algorithm.lower().startswith("shake") or hasher.digest_size == 0:
            msg = f"hash algorithm must have a fixed digest size, got {self.algorithm!r}"
            raise ValueError(msg)
        if self.chunk_size < 1:
            msg = f"chunk_size must be >= 1, got {self.chunk_size}"
            raise ValueError(msg)
        if self.max_depth < 1:
            msg = f"max_depth must be >= 1, got {self.max_depth}"
            raise ValueError(msg)

    @property
    def digest_size(self) -> int:
        """Length in bytes of every digest produced under this config."""
        return hashlib.new(self.algorithm).digest_size
