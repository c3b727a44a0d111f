"""json-signature - streaming content signatures and semantic equality for JSON."""

from __future__ import annotations

import logging

from json_signature.api import (
    compare,
    count_nodes,
    digest,
    equal,
    group_equal,
    hexdigest,
    traverse,
)
from json_signature.comparator import DigestComparator
from json_signature.config import DigestConfig
from json_signature.engine import DigestEngine
from json_signature.errors import (
    MalformedInput,
    NestingTooDeep,
    SignatureError,
    StreamFailure,
)
from json_signature.observers import (
    CallbackObserver,
    CompositeObserver,
    CountingObserver,
    PathDigestObserver,
    RootDigestObserver,
)
from json_signature.protocols import Observer
from json_signature.result import ComparisonResult
from json_signature.tokens import TokenKind

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__: str = "0.1.0"
__all__: list[str] = [
    "CallbackObserver",
    "ComparisonResult",
    "CompositeObserver",
    "CountingObserver",
    "DigestComparator",
    "DigestConfig",
    "DigestEngine",
    "MalformedInput",
    "NestingTooDeep",
    "Observer",
    "PathDigestObserver",
    "RootDigestObserver",
    "SignatureError",
    "StreamFailure",
    "TokenKind",
    "compare",
    "count_nodes",
    "digest",
    "equal",
    "group_equal",
    "hexdigest",
    "traverse",
]
