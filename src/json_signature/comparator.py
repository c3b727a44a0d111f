"""DigestComparator: semantic equality of two JSON sources via root digests.

Each side is traversed independently by a ``DigestEngine`` with a
``RootDigestObserver`` attached; the captured root digests are compared
byte-for-byte.

Failure is never reported as inequality.  If either traversal raises, the
error propagates to the caller (the left side's error wins when both fail),
so "documents differ" and "a document could not be read" stay distinct
outcomes.  A traversal that completes without reporting a root digest is
treated as ``MalformedInput``.

The two traversals share no state except the buffer pool, so with
``concurrent=True`` they run on a two-worker thread pool.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING

from json_signature.config import DigestConfig
from json_signature.engine import DigestEngine
from json_signature.errors import MalformedInput, SignatureError
from json_signature.observers import RootDigestObserver
from json_signature.result import ComparisonResult

if TYPE_CHECKING:
    from json_signature.pool import BufferPool
    from json_signature.tokenizer import Source

__all__ = ["DigestComparator"]

logger = logging.getLogger(__name__)


class DigestComparator:
    """Decides whether two JSON sources are semantically equal.

    Formatting and object key order do not matter; array order and number
    spelling do.

    Example::

        from json_signature.comparator import DigestComparator

        cmp = DigestComparator()
        cmp.equal(b'{"a": 1, "b": 2}', b'{"b":2,"a":1}')   # True
        cmp.equal(b"[1, 2]", b"[2, 1]")                    # False
    """

    def __init__(
        self,
        config: DigestConfig | None = None,
        concurrent: bool = False,
        pool: BufferPool | None = None,
    ) -> None:
        """Initialise the comparator.

        Args:
            config:     Traversal parameters.  Defaults to ``DigestConfig()``.
            concurrent: When True, traverse both sources on separate threads.
            pool:       Buffer pool forwarded to ``DigestEngine``.
        """
        self._config: DigestConfig = config if config is not None else DigestConfig()
        self._engine = DigestEngine(config=self._config, pool=pool)
        self._concurrent = concurrent

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def compare(self, left: Source, right: Source) -> ComparisonResult:
        """Traverse both sources and return a ComparisonResult.

        Raises:
            MalformedInput: Either source is not a single well-formed JSON value.
            StreamFailure:  Reading either source failed.
        """
        t0 = time.perf_counter()

        if self._concurrent:
            with ThreadPoolExecutor(max_workers=2) as executor:
                left_future = executor.submit(self._root_digest, left, "left")
                right_future = executor.submit(self._root_digest, right, "right")
                left_digest = left_future.result()
                right_digest = right_future.result()
        else:
            left_digest = self._root_digest(left, "left")
            right_digest = self._root_digest(right, "right")

        elapsed_ms = (time.perf_counter() - t0) * 1000.0
        equal = left_digest == right_digest
        logger.debug(
            "compared %s vs %s: equal=%s in %.3f ms",
            left_digest.hex(),
            right_digest.hex(),
            equal,
            elapsed_ms,
        )
        return ComparisonResult(
            equal=equal,
            left_digest=left_digest,
            right_digest=right_digest,
            computation_time_ms=elapsed_ms,
        )

    def equal(self, left: Source, right: Source) -> bool:
        """Return True if both sources hold semantically equal JSON."""
        return self.compare(left, right).equal

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _root_digest(self, source: Source, side: str) -> bytes:
        observer = RootDigestObserver()
        try:
            self._engine.traverse(source, observer)
        except SignatureError as exc:
            logger.warning("%s document could not be digested: %s", side, exc)
            raise
        if observer.digest is None:
            msg = f"{side} document produced no root digest"
            raise MalformedInput(msg)
        return observer.digest
