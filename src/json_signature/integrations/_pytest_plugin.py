"""pytest plugin for json-signature.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

from typing import Any

import pytest

from json_signature import DigestConfig, compare


@pytest.fixture(scope="session")
def assert_json_equal() -> Any:
    """Fixture that returns a callable JSON equality asserter.

    The fixture is session-scoped because the returned callable is stateless
    (delegates to compare() which creates a fresh DigestComparator per call).

    Usage in tests::

        def test_reordered(assert_json_equal):
            assert_json_equal(b'{"a": 1, "b": 2}', b'{"b": 2, "a": 1}')

        def test_changed(assert_json_equal):
            with pytest.raises(AssertionError, match=r"digest"):
                assert_json_equal(b"[1, 2]", b"[2, 1]")

    Returns:
        A callable ``_assert(actual, expected, config=None) -> None`` that
        raises ``AssertionError`` when the root digests differ.  Malformed
        input raises ``MalformedInput`` rather than ``AssertionError``.
    """

    def _assert(
        actual: Any,
        expected: Any,
        config: DigestConfig | None = None,
    ) -> None:
        """Assert that two JSON sources are semantically equal.

        Args:
            actual:   JSON text (bytes or str), file object, or path produced
                      by the code under test.
            expected: The expected JSON source.
            config:   Optional DigestConfig, e.g. to change the hash algorithm.

        Raises:
            AssertionError: When the root digests differ, with a message
                including both digests and both sources.
        """
        result = compare(actual, expected, config=config)
        if not result.equal:
            raise AssertionError(
                f"JSON documents not equal: "
                f"digest {result.left_hexdigest} != {result.right_hexdigest}\n"
                f"  actual:   {actual!r}\n"
                f"  expected: {expected!r}"
            )

    return _assert
