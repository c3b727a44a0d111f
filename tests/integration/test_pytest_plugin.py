"""Integration tests for the json-signature pytest plugin.

These tests verify that the assert_json_equal fixture is auto-discovered
via the pytest11 entry point and behaves correctly.

NOTE: These tests require json-signature to be installed (even in editable mode
via ``pip install -e .``). The pytest11 entry point is only registered at
install time -- running from a raw source checkout without installing will not
discover the fixture.
"""

from __future__ import annotations

import io
from typing import Any

import pytest

from json_signature import DigestConfig, MalformedInput


def test_fixture_passes_reordered_object(assert_json_equal: Any) -> None:
    """Key order and whitespace do not matter."""
    assert_json_equal(b'{"a": 1, "b": [true]}', b'{ "b": [ true ], "a": 1 }')


def test_fixture_fails_reordered_array(assert_json_equal: Any) -> None:
    """Array order matters, so a permuted array fails."""
    with pytest.raises(AssertionError, match=r"digest"):
        assert_json_equal(b"[1, 2]", b"[2, 1]")


def test_fixture_accepts_streams_and_text(assert_json_equal: Any) -> None:
    assert_json_equal(io.BytesIO(b'{"k": "v"}'), '{"k":"v"}')


def test_fixture_custom_config(assert_json_equal: Any) -> None:
    """Custom DigestConfig parameter should be forwarded to compare()."""
    assert_json_equal(b"[null]", b"[ null ]", config=DigestConfig(algorithm="sha256"))


def test_fixture_malformed_input_is_not_assertion(assert_json_equal: Any) -> None:
    """Unreadable input surfaces as MalformedInput, not as a failed comparison."""
    with pytest.raises(MalformedInput):
        assert_json_equal(b"[1]", b"[1")


def test_fixture_error_message_contents(assert_json_equal: Any) -> None:
    """AssertionError message should contain both digests and both sources."""
    with pytest.raises(AssertionError) as exc_info:
        assert_json_equal(b"null", b"true")
    message = str(exc_info.value)
    assert "2be88ca4242c76e8253ac62474851065032d6833" in message
    assert "5ffe533b830f08a0326348a9160afafc8ada44db" in message
    assert "actual:   b'null'" in message
    assert "expected: b'true'" in message
