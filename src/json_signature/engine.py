"""DigestEngine: streaming depth-first signature of a JSON document.

The engine pulls tokens from a ``Tokenizer`` and assigns a fixed-length
digest to every node, bottom-up, without building the document in memory.
With ``H`` the configured hash:

- null / true / false: ``H(b"null")``, ``H(b"true")``, ``H(b"false")``,
  computed once per traversal.
- number: ``H(literal)`` over the exact source text, so ``1``, ``1.0`` and
  ``1e0`` all differ.
- string: ``H(b'"' + utf8(value) + b'"')`` over the decoded value, so
  differently escaped spellings of one string agree.
- array: one ``H`` fed every child digest in index order (order-sensitive).
- object: XOR over members of ``H(utf8(key) + child_digest)`` into a zeroed
  buffer (order-insensitive).

The object rule has a known weakness that is part of the digest format: a
member repeated an even number of times (same key, same value digest) cancels
out, e.g. ``{"a": 1, "a": 1}`` digests like ``{}``.

Observers are notified with ``enter(path, kind)`` before a node is descended
and ``exit(path, kind, digest)`` once its digest is known.  Paths start at
``"."``; array children append ``[i]``; object children append ``.key``
(without the dot when the parent path already ends in one).
"""

from __future__ import annotations

import hashlib
import logging
from contextlib import ExitStack
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import numpy as np

from json_signature.config import DigestConfig
from json_signature.errors import MalformedInput
from json_signature.observers import ROOT_PATH, CallbackObserver
from json_signature.pool import BufferPool, default_pool
from json_signature.tokenizer import Lexeme, Token, open_tokenizer
from json_signature.tokens import TokenKind

if TYPE_CHECKING:
    from json_signature.protocols import Observer
    from json_signature.tokenizer import Source, Tokenizer

__all__ = ["DigestEngine"]

logger = logging.getLogger(__name__)

_SILENT = CallbackObserver()


def _utf8(text: str) -> bytes:
    """Encode ``text`` as UTF-8, replacing lone surrogates with U+FFFD."""
    try:
        return text.encode("utf-8")
    except UnicodeEncodeError:
        # "\ud800"-style escapes decode to unpaired surrogates
        repaired = text.encode("utf-16", "surrogatepass").decode("utf-16", "replace")
        return repaired.encode("utf-8")


class DigestEngine:
    """Computes JSON signatures by streaming depth-first traversal.

    An engine holds only configuration and a buffer pool; each ``traverse``
    call owns its own tokenizer and hash state, so one engine may be used
    from several threads at once.

    Example::

        engine = DigestEngine()
        engine.traverse(b'{"Planet": "Earth", "Index": 3}').hex()
        # 'a0fc0dbd5dd267db2f72cde45d83f5941f04abac'
    """

    def __init__(
        self,
        config: DigestConfig | None = None,
        pool: BufferPool | None = None,
    ) -> None:
        """Initialise the engine.

        Args:
            config: Traversal parameters.  Defaults to ``DigestConfig()``.
            pool:   Buffer pool for object accumulators.  Defaults to the
                process-wide pool returned by ``default_pool()``.
        """
        self._config: DigestConfig = config if config is not None else DigestConfig()
        self._pool: BufferPool = pool if pool is not None else default_pool()

    @property
    def config(self) -> DigestConfig:
        return self._config

    def traverse(self, source: Source, observer: Observer | None = None) -> bytes:
        """Visit every node of ``source`` and return the root digest.

        Args:
            source:   JSON text as bytes, str, a readable file object, or a path.
            observer: Notified around every node.  Optional.

        Returns:
            The root digest, ``config.digest_size`` bytes long.

        Raises:
            MalformedInput: The source is not exactly one well-formed JSON value.
            StreamFailure:  Reading the source failed.
        """
        config = self._config
        with open_tokenizer(source, config.chunk_size, config.max_depth) as tokenizer:
            walk = _Traversal(
                tokenizer,
                observer if observer is not None else _SILENT,
                config.algorithm,
                self._pool,
            )
            digest = walk.run()
            if not config.allow_trailing_data:
                tokenizer.finish()
        logger.debug(
            "traversal complete: %d nodes, %s root digest %s",
            walk.nodes,
            config.algorithm,
            digest.hex(),
        )
        return digest


_KINDS = {
    Lexeme.BEGIN_ARRAY: TokenKind.ARRAY,
    Lexeme.BEGIN_OBJECT: TokenKind.OBJECT,
    Lexeme.NUMBER: TokenKind.NUMBER,
    Lexeme.STRING: TokenKind.STRING,
    Lexeme.TRUE: TokenKind.BOOLEAN,
    Lexeme.FALSE: TokenKind.BOOLEAN,
    Lexeme.NULL: TokenKind.NULL,
}

_CLOSERS = {TokenKind.ARRAY: Lexeme.END_ARRAY, TokenKind.OBJECT: Lexeme.END_OBJECT}


@dataclass(slots=True)
class _Frame:
    """An open container on the traversal stack."""

    path: str
    kind: TokenKind
    hasher: Any = None
    signature: np.ndarray | None = None
    resources: ExitStack | None = None
    index: int = 0
    key: str = ""

    def release(self) -> None:
        if self.resources is not None:
            self.resources.close()
            self.resources = None


class _Traversal:
    """State of a single traversal: tokenizer, observer and hash constants.

    Containers are tracked on an explicit stack of ``_Frame`` objects, so the
    nesting depth is bounded by ``DigestConfig.max_depth`` alone and not by
    the interpreter's recursion limit.
    """

    __slots__ = (
        "_algorithm",
        "_digest_size",
        "_false",
        "_null",
        "_observer",
        "_pool",
        "_tokenizer",
        "_true",
        "nodes",
    )

    def __init__(
        self,
        tokenizer: Tokenizer,
        observer: Observer,
        algorithm: str,
        pool: BufferPool,
    ) -> None:
        self._tokenizer = tokenizer
        self._observer = observer
        self._algorithm = algorithm
        self._pool = pool
        self._digest_size = hashlib.new(algorithm).digest_size
        self._true = self._hash(b"true")
        self._false = self._hash(b"false")
        self._null = self._hash(b"null")
        self.nodes = 0

    def _hash(self, data: bytes) -> bytes:
        return hashlib.new(self._algorithm, data).digest()

    def run(self) -> bytes:
        frames: list[_Frame] = []
        try:
            return self._walk(frames)
        finally:
            # Only non-empty when the traversal failed part-way.
            while frames:
                frames.pop().release()

    def _walk(self, frames: list[_Frame]) -> bytes:
        tokenizer = self._tokenizer
        observer = self._observer
        path, token = ROOT_PATH, tokenizer.next_token()

        while True:
            kind = _KINDS.get(token.lexeme)
            if kind is None:
                raise MalformedInput(
                    f"unexpected {token.lexeme.name} token", token.offset
                )
            observer.enter(path, kind)
            if kind is TokenKind.ARRAY:
                frames.append(_Frame(path, kind, hasher=hashlib.new(self._algorithm)))
                digest = None
            elif kind is TokenKind.OBJECT:
                frames.append(self._open_object(path))
                digest = None
            else:
                digest = self._leaf(token)

            # Report every node completed by this token, innermost first, and
            # stop at the first container that has another element.
            while True:
                if digest is not None:
                    self.nodes += 1
                    observer.exit(path, kind, digest)
                    if not frames:
                        return digest
                    self._fold(frames[-1], digest)
                frame = frames[-1]
                if tokenizer.more():
                    break
                self._expect(_CLOSERS[frame.kind])
                frames.pop()
                path, kind, digest = frame.path, frame.kind, self._finish(frame)

            path, token = self._next_child(frame)

    def _leaf(self, token: Token) -> bytes:
        lexeme = token.lexeme
        if lexeme is Lexeme.NUMBER:
            return self._hash(token.text.encode("ascii"))
        if lexeme is Lexeme.STRING:
            return self._hash(b'"' + _utf8(token.text) + b'"')
        if lexeme is Lexeme.TRUE:
            return self._true
        if lexeme is Lexeme.FALSE:
            return self._false
        return self._null

    def _open_object(self, path: str) -> _Frame:
        resources = ExitStack()
        signature = resources.enter_context(self._pool.acquire(self._digest_size))
        return _Frame(path, TokenKind.OBJECT, signature=signature, resources=resources)

    def _next_child(self, frame: _Frame) -> tuple[str, Token]:
        token = self._tokenizer.next_token()
        if frame.kind is TokenKind.ARRAY:
            return f"{frame.path}[{frame.index}]", token
        if token.lexeme is not Lexeme.KEY:
            raise MalformedInput("expected object key", token.offset)
        key = frame.key = token.text
        parent = frame.path
        subpath = parent + key if parent.endswith(".") else f"{parent}.{key}"
        return subpath, self._tokenizer.next_token()

    def _fold(self, frame: _Frame, child: bytes) -> None:
        if frame.kind is TokenKind.ARRAY:
            frame.hasher.update(child)
            frame.index += 1
            return
        member = hashlib.new(self._algorithm, _utf8(frame.key))
        member.update(child)
        np.bitwise_xor(
            frame.signature,
            np.frombuffer(member.digest(), dtype=np.uint8),
            out=frame.signature,
        )

    def _finish(self, frame: _Frame) -> bytes:
        if frame.kind is TokenKind.ARRAY:
            return frame.hasher.digest()
        digest = frame.signature.tobytes()
        frame.release()
        return digest

    def _expect(self, lexeme: Lexeme) -> None:
        token = self._tokenizer.next_token()
        if token.lexeme is not lexeme:
            raise MalformedInput(
                f"expected {lexeme.name}, found {token.lexeme.name}", token.offset
            )
