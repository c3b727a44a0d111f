"""Public API functions for json-signature.

This module provides the user-facing functions: traverse, digest, hexdigest,
count_nodes, compare, equal, and group_equal.  Each call creates a fresh
DigestEngine (or DigestComparator / DuplicateGrouper) so calls never share
state beyond the process-wide buffer pool.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from json_signature.comparator import DigestComparator
from json_signature.config import DigestConfig
from json_signature.engine import DigestEngine
from json_signature.grouping import DuplicateGrouper
from json_signature.observers import CountingObserver
from json_signature.result import ComparisonResult

if TYPE_CHECKING:
    from json_signature.protocols import Observer
    from json_signature.tokenizer import Source

__all__ = [
    "compare",
    "count_nodes",
    "digest",
    "equal",
    "group_equal",
    "hexdigest",
    "traverse",
]


def traverse(
    source: Source,
    observer: Observer | None = None,
    config: DigestConfig | None = None,
) -> bytes:
    """Walk ``source`` depth-first, notifying ``observer``, and return the root digest.

    Args:
        source:   JSON text as bytes, str, a readable file object, or a path.
        observer: Receives ``enter``/``exit`` around every node.  Optional.
        config:   Traversal parameters.  Defaults to ``DigestConfig()`` when None.

    Returns:
        The root digest as raw bytes.

    Raises:
        MalformedInput: ``source`` is not a single well-formed JSON value.
        StreamFailure:  Reading ``source`` failed.
    """
    return DigestEngine(config=config).traverse(source, observer)


def digest(source: Source, config: DigestConfig | None = None) -> bytes:
    """Return the root digest of ``source``."""
    return traverse(source, config=config)


def hexdigest(source: Source, config: DigestConfig | None = None) -> str:
    """Return the root digest of ``source`` as lowercase hex."""
    return traverse(source, config=config).hex()


def count_nodes(source: Source, config: DigestConfig | None = None) -> int:
    """Return the number of values in ``source``, root included.

    ``null`` counts 1, ``[1, 2]`` counts 3, ``{"a": 1, "b": 2}`` counts 3.
    """
    counter = CountingObserver()
    traverse(source, counter, config=config)
    return counter.nodes


def compare(
    left: Source,
    right: Source,
    config: DigestConfig | None = None,
    concurrent: bool = False,
) -> ComparisonResult:
    """Compare two JSON sources and return a ComparisonResult.

    Creates a fresh ``DigestComparator`` per call.

    Args:
        left:       First JSON source.
        right:      Second JSON source.
        config:     Traversal parameters.  Defaults to ``DigestConfig()`` when None.
        concurrent: Traverse both sources on separate threads.

    Returns:
        A ``ComparisonResult`` with both root digests and timing populated.

    Raises:
        MalformedInput: Either source is not a single well-formed JSON value.
        StreamFailure:  Reading either source failed.
    """
    comparator = DigestComparator(config=config, concurrent=concurrent)
    return comparator.compare(left, right)


def equal(
    left: Source,
    right: Source,
    config: DigestConfig | None = None,
    concurrent: bool = False,
) -> bool:
    """Return True if the two JSON sources are semantically equal.

    Whitespace and object key order are ignored; array order and the exact
    spelling of numbers are not.  Unreadable or malformed input raises
    instead of returning False.
    """
    return compare(left, right, config=config, concurrent=concurrent).equal


def group_equal(
    sources: Iterable[Source],
    config: DigestConfig | None = None,
) -> list[list[int]]:
    """Group the indices of ``sources`` by semantic equality.

    Returns:
        Index groups in order of first appearance, e.g. ``[[0, 2], [1]]``.
    """
    return DuplicateGrouper(config=config).groups(sources)
