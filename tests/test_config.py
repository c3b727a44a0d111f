"""Tests for DigestConfig frozen dataclass.

Covers:
- Default values (sha1, 64 KiB chunks, depth 10000, no trailing data)
- Immutability (FrozenInstanceError on assignment)
- Validation of algorithm, chunk_size and max_depth
- digest_size follows the algorithm
"""

from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from json_signature.config import DEFAULT_ALGORITHM, DigestConfig


class TestDigestConfigDefaults:
    def test_default_algorithm(self) -> None:
        assert DigestConfig().algorithm == "sha1" == DEFAULT_ALGORITHM

    def test_default_chunk_size(self) -> None:
        assert DigestConfig().chunk_size == 65536

    def test_default_max_depth(self) -> None:
        assert DigestConfig().max_depth == 10000

    def test_default_trailing_data(self) -> None:
        assert DigestConfig().allow_trailing_data is False

    def test_default_digest_size(self) -> None:
        assert DigestConfig().digest_size == 20


class TestDigestConfigCustom:
    @pytest.mark.parametrize(
        ("algorithm", "size"),
        [("sha256", 32), ("md5", 16), ("blake2b", 64), ("sha3_256", 32)],
    )
    def test_digest_size_follows_algorithm(self, algorithm: str, size: int) -> None:
        assert DigestConfig(algorithm=algorithm).digest_size == size

    def test_equality(self) -> None:
        assert DigestConfig(chunk_size=10) == DigestConfig(chunk_size=10)


class TestDigestConfigImmutability:
    def test_assignment_raises(self) -> None:
        config = DigestConfig()
        with pytest.raises(FrozenInstanceError):
            config.algorithm = "md5"  # type: ignore[misc]


class TestDigestConfigValidation:
    def test_unknown_algorithm(self) -> None:
        with pytest.raises(ValueError, match="unsupported hash algorithm"):
            DigestConfig(algorithm="not-a-hash")

    @pytest.mark.parametrize("algorithm", ["shake_128", "shake_256"])
    def test_variable_length_algorithm(self, algorithm: str) -> None:
        with pytest.raises(ValueError, match="fixed digest size"):
            DigestConfig(algorithm=algorithm)

    @pytest.mark.parametrize("chunk_size", [0, -1])
    def test_chunk_size_positive(self, chunk_size: int) -> None:
        with pytest.raises(ValueError, match="chunk_size"):
            DigestConfig(chunk_size=chunk_size)

    @pytest.mark.parametrize("max_depth", [0, -5])
    def test_max_depth_positive(self, max_depth: int) -> None:
        with pytest.raises(ValueError, match="max_depth"):
            DigestConfig(max_depth=max_depth)
