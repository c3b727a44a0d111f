"""Standard observers for the digest traversal.

All classes satisfy the ``Observer`` Protocol structurally:

- ``CallbackObserver``: forwards to optional ``on_enter`` / ``on_exit`` callables.
- ``CountingObserver``: counts visited nodes.
- ``PathDigestObserver``: captures the digest reported for one path.
- ``RootDigestObserver``: captures the digest of the root node.
- ``CompositeObserver``: fans every call out to several observers.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from json_signature.tokens import TokenKind

if TYPE_CHECKING:
    from json_signature.protocols import Observer

__all__ = [
    "ROOT_PATH",
    "CallbackObserver",
    "CompositeObserver",
    "CountingObserver",
    "PathDigestObserver",
    "RootDigestObserver",
]

ROOT_PATH = "."


@dataclass(slots=True)
class CallbackObserver:
    """Observer whose behaviour is supplied as plain callables.

    Either callback may be omitted; the corresponding method is then a no-op.

    Example::

        paths = []
        observer = CallbackObserver(on_enter=lambda path, kind: paths.append(path))
    """

    on_enter: Callable[[str, TokenKind], None] | None = None
    on_exit: Callable[[str, TokenKind, bytes], None] | None = None

    def enter(self, path: str, kind: TokenKind) -> None:
        if self.on_enter is not None:
            self.on_enter(path, kind)

    def exit(self, path: str, kind: TokenKind, digest: bytes) -> None:
        if self.on_exit is not None:
            self.on_exit(path, kind, digest)


class CountingObserver:
    """Tallies the number of nodes in a JSON document.

    Every value counts once: the root, each container, and each scalar.
    Object keys are not nodes of their own.
    """

    def __init__(self) -> None:
        self._nodes = 0

    def enter(self, path: str, kind: TokenKind) -> None:
        pass

    def exit(self, path: str, kind: TokenKind, digest: bytes) -> None:
        self._nodes += 1

    @property
    def nodes(self) -> int:
        """Number of nodes whose traversal completed."""
        return self._nodes


class PathDigestObserver:
    """Captures the digest and kind reported for a single path.

    If the path occurs more than once (duplicate object keys), the last
    occurrence wins.

    Args:
        path: The traversal path to watch, e.g. ``".users[0].name"``.
    """

    def __init__(self, path: str) -> None:
        self.path = path
        self.digest: bytes | None = None
        self.kind: TokenKind | None = None

    def enter(self, path: str, kind: TokenKind) -> None:
        pass

    def exit(self, path: str, kind: TokenKind, digest: bytes) -> None:
        if path == self.path:
            self.digest = digest
            self.kind = kind

    @property
    def found(self) -> bool:
        """True once a digest has been captured."""
        return self.digest is not None


class RootDigestObserver(PathDigestObserver):
    """Captures the digest of the document root (path ``"."``)."""

    def __init__(self) -> None:
        super().__init__(ROOT_PATH)


class CompositeObserver:
    """Forwards every call to each wrapped observer, in order."""

    def __init__(self, *observers: Observer) -> None:
        self._observers = observers

    def enter(self, path: str, kind: TokenKind) -> None:
        for observer in self._observers:
            observer.enter(path, kind)

    def exit(self, path: str, kind: TokenKind, digest: bytes) -> None:
        for observer in self._observers:
            observer.exit(path, kind, digest)
