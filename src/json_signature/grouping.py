"""DuplicateGrouper: partitions many JSON sources into equality groups.

Every source is traversed once and bucketed by its root digest, so N sources
cost N traversals rather than the C(N, 2) pairwise comparisons ``equal``
would need.

Groups are lists of source indices.  Groups appear in the order their first
member appears, and indices inside a group are ascending.

Example::

    grouper = DuplicateGrouper()
    grouper.groups([b'{"a":1,"b":2}', b"[1]", b'{"b":2, "a":1}'])
    # [[0, 2], [1]]
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from json_signature.config import DigestConfig
from json_signature.engine import DigestEngine

if TYPE_CHECKING:
    from json_signature.tokenizer import Source

__all__ = ["DuplicateGrouper"]

logger = logging.getLogger(__name__)


class DuplicateGrouper:
    """Groups JSON sources whose root digests are identical.

    Creates a single ``DigestEngine`` that is reused for every source.
    """

    def __init__(self, config: DigestConfig | None = None) -> None:
        """Initialise the grouper with a single reusable engine.

        Args:
            config: Traversal parameters forwarded to ``DigestEngine``.
                Defaults to ``DigestConfig()`` when None.
        """
        self._engine = DigestEngine(config=config)

    def groups(self, sources: Iterable[Source]) -> list[list[int]]:
        """Return the indices of ``sources`` grouped by semantic equality.

        Args:
            sources: JSON sources to group.  Consumed once, in order.

        Returns:
            A list of index groups; an empty input yields ``[]``.

        Raises:
            MalformedInput: A source is not a single well-formed JSON value.
            StreamFailure:  Reading a source failed.
        """
        buckets: dict[bytes, list[int]] = {}
        count = 0
        for index, source in enumerate(sources):
            buckets.setdefault(self._engine.traverse(source), []).append(index)
            count = index + 1
        logger.debug("grouped %d sources into %d groups", count, len(buckets))
        return list(buckets.values())

    def distinct(self, sources: Iterable[Source]) -> int:
        """Return the number of semantically distinct documents in ``sources``."""
        return len(self.groups(sources))
