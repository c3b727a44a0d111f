"""Error taxonomy for json-signature.

Every failure a traversal can surface derives from ``SignatureError``:

- ``MalformedInput``: the input is not a single well-formed JSON value
  (bad syntax, an unexpected token, undecodable UTF-8, empty input,
  trailing data).
- ``NestingTooDeep``: a ``MalformedInput`` raised when containers nest
  deeper than ``DigestConfig.max_depth``.
- ``StreamFailure``: the underlying source raised while being read.

``MalformedInput`` also subclasses ``ValueError`` and ``StreamFailure``
subclasses ``OSError`` so callers that already catch the builtin
categories keep working.
"""

from __future__ import annotations

__all__ = [
    "MalformedInput",
    "NestingTooDeep",
    "SignatureError",
    "StreamFailure",
]


class SignatureError(Exception):
    """Base class for all traversal failures.

    Attributes:
        message: Human-readable description of the failure.
        offset:  Character offset into the decoded input where the failure
            was detected, or None when no position applies.
    """

    def __init__(self, message: str, offset: int | None = None) -> None:
        self.message = message
        self.offset = offset
        full_msg = message if offset is None else f"{message} (at offset {offset})"
        super().__init__(full_msg)


class MalformedInput(SignatureError, ValueError):
    """The input is not exactly one well-formed JSON value."""


class NestingTooDeep(MalformedInput):
    """Containers nest deeper than the configured limit."""


class StreamFailure(SignatureError, OSError):
    """Reading from the underlying source failed.

    The original exception is chained as ``__cause__``.
    """
