"""Tests for the standard observers and the Observer Protocol.

Covers:
- Structural conformance of every adapter (and of a plain user class)
- CallbackObserver with and without callbacks
- CountingObserver node totals for the reference documents
- PathDigestObserver / RootDigestObserver capture
- CompositeObserver fan-out order
"""

from __future__ import annotations

import pytest

from json_signature.engine import DigestEngine
from json_signature.observers import (
    CallbackObserver,
    CompositeObserver,
    CountingObserver,
    PathDigestObserver,
    RootDigestObserver,
)
from json_signature.protocols import Observer
from json_signature.tokens import TokenKind

DOC = b'{"name": "Ada", "langs": ["en", "fr"], "active": true}'


class TestProtocolConformance:
    @pytest.mark.parametrize(
        "observer",
        [
            CallbackObserver(),
            CountingObserver(),
            PathDigestObserver(".a"),
            RootDigestObserver(),
            CompositeObserver(),
        ],
    )
    def test_adapters_conform(self, observer: object) -> None:
        assert isinstance(observer, Observer)

    def test_plain_class_conforms(self) -> None:
        class Custom:
            def enter(self, path: str, kind: TokenKind) -> None: ...

            def exit(self, path: str, kind: TokenKind, digest: bytes) -> None: ...

        assert isinstance(Custom(), Observer)

    def test_missing_exit_does_not_conform(self) -> None:
        class Partial:
            def enter(self, path: str, kind: TokenKind) -> None: ...

        assert not isinstance(Partial(), Observer)


class TestCallbackObserver:
    def test_no_callbacks_is_noop(self) -> None:
        observer = CallbackObserver()
        observer.enter(".", TokenKind.NULL)
        observer.exit(".", TokenKind.NULL, b"\x00")

    def test_callbacks_invoked(self) -> None:
        entered: list[str] = []
        exited: list[tuple[str, TokenKind]] = []
        observer = CallbackObserver(
            on_enter=lambda path, kind: entered.append(path),
            on_exit=lambda path, kind, digest: exited.append((path, kind)),
        )
        DigestEngine().traverse(b"[1, null]", observer)
        assert entered == [".", ".[0]", ".[1]"]
        assert exited == [
            (".[0]", TokenKind.NUMBER),
            (".[1]", TokenKind.NULL),
            (".", TokenKind.ARRAY),
        ]

    def test_only_exit_callback(self) -> None:
        seen: list[str] = []
        observer = CallbackObserver(on_exit=lambda path, kind, digest: seen.append(path))
        DigestEngine().traverse(b'{"a": 1}', observer)
        assert seen == [".a", "."]


class TestCountingObserver:
    @pytest.mark.parametrize(
        ("document", "expected"),
        [
            (b"null", 1),
            (b'"x"', 1),
            (b"[]", 1),
            (b"[1,2]", 3),
            (b'{"a": 1, "b": 2}', 3),
            (b"[[[]]]", 3),
            (DOC, 6),
        ],
    )
    def test_node_counts(self, document: bytes, expected: int) -> None:
        counter = CountingObserver()
        DigestEngine().traverse(document, counter)
        assert counter.nodes == expected

    def test_starts_at_zero(self) -> None:
        assert CountingObserver().nodes == 0

    def test_enter_does_not_count(self) -> None:
        counter = CountingObserver()
        counter.enter(".", TokenKind.OBJECT)
        assert counter.nodes == 0

    def test_accumulates_across_traversals(self) -> None:
        counter = CountingObserver()
        engine = DigestEngine()
        engine.traverse(b"[1,2]", counter)
        engine.traverse(b"null", counter)
        assert counter.nodes == 4


class TestDigestCapture:
    def test_root_digest_matches_return_value(self) -> None:
        observer = RootDigestObserver()
        digest = DigestEngine().traverse(DOC, observer)
        assert observer.found
        assert observer.digest == digest
        assert observer.kind is TokenKind.OBJECT

    def test_path_digest_extracts_node(self) -> None:
        observer = PathDigestObserver(".langs")
        DigestEngine().traverse(DOC, observer)
        assert observer.kind is TokenKind.ARRAY
        assert observer.digest == DigestEngine().traverse(b'["en","fr"]')

    def test_path_not_found(self) -> None:
        observer = PathDigestObserver(".missing")
        DigestEngine().traverse(DOC, observer)
        assert not observer.found
        assert observer.digest is None

    def test_root_wins_over_empty_key_child(self) -> None:
        # {"": 1} reports its child at "." too; the root exits last
        observer = RootDigestObserver()
        digest = DigestEngine().traverse(b'{"": 1}', observer)
        assert observer.digest == digest
        assert observer.kind is TokenKind.OBJECT


class TestCompositeObserver:
    def test_fans_out_in_order(self) -> None:
        calls: list[str] = []
        first = CallbackObserver(on_exit=lambda p, k, d: calls.append(f"first{p}"))
        second = CallbackObserver(on_exit=lambda p, k, d: calls.append(f"second{p}"))
        DigestEngine().traverse(b"[true]", CompositeObserver(first, second))
        assert calls == ["first.[0]", "second.[0]", "first.", "second."]

    def test_counter_and_root_together(self) -> None:
        counter = CountingObserver()
        root = RootDigestObserver()
        digest = DigestEngine().traverse(DOC, CompositeObserver(counter, root))
        assert counter.nodes == 6
        assert root.digest == digest
