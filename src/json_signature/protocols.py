"""Observer Protocol for the digest traversal extension point.

Defines the structural interface every traversal observer must satisfy.
Users can plug in custom observers without inheriting from any base class:
any class with conformant ``enter`` and ``exit`` methods passes ``isinstance``
checks.

Example::

    from json_signature.protocols import Observer
    from json_signature.tokens import TokenKind

    class PrintingObserver:
        def enter(self, path: str, kind: TokenKind) -> None:
            print("enter", path, kind)

        def exit(self, path: str, kind: TokenKind, digest: bytes) -> None:
            print("exit", path, kind, digest.hex())

    assert isinstance(PrintingObserver(), Observer)  # True, structural conformance
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from json_signature.tokens import TokenKind


@runtime_checkable
class Observer(Protocol):
    """Structural protocol for traversal observers.

    The engine calls ``enter`` when it first reaches a node and ``exit`` once
    the node's digest is known.  Calls are strictly paired and nested like the
    document itself; ``exit`` receives the same path and kind as the matching
    ``enter``.  When a traversal fails, nodes whose subtree could not be
    completed get ``enter`` but no ``exit``.

    An exception raised from either method aborts the traversal and
    propagates unchanged to the caller.
    """

    def enter(self, path: str, kind: TokenKind) -> None: ...

    def exit(self, path: str, kind: TokenKind, digest: bytes) -> None: ...
