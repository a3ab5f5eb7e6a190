"""
Tests for seeds, commitments and hex encoding.
"""

import hashlib

import pytest

from ..engine_core import (
    EntropyFailure,
    ValidationError,
    bytes_to_hex,
    commit,
    hash_server_seed,
    is_valid_hex,
    new_client_seed,
    new_seed_pair,
    new_server_seed,
    read_uint32_be,
)
from ..engine_core import seeds


class TestSeedGeneration:

    def test_server_seed_is_64_hex_chars(self):
        seed = new_server_seed()
        assert len(seed) == 64
        assert is_valid_hex(seed)
        assert seed == seed.lower()

    def test_server_seeds_are_unique(self):
        assert new_server_seed() != new_server_seed()

    def test_client_seed_is_32_hex_chars(self):
        seed = new_client_seed()
        assert len(seed) == 32
        assert is_valid_hex(seed)

    def test_seed_pair_hash_matches(self):
        seed, seed_hash = new_seed_pair()
        assert commit(seed) == seed_hash

    def test_entropy_failure_is_raised(self, monkeypatch):
        """A dead entropy source is fatal, not retried."""
        calls = []

        def broken(n):
            calls.append(n)
            raise OSError("no entropy")

        monkeypatch.setattr(seeds.secrets, "token_bytes", broken)
        with pytest.raises(EntropyFailure):
            new_server_seed()
        assert calls == [32]


class TestCommitment:

    def test_hash_is_64_hex_chars(self):
        seed_hash = hash_server_seed("test_seed_12345")
        assert len(seed_hash) == 64
        assert is_valid_hex(seed_hash, 64)

    def test_known_vector(self):
        assert hash_server_seed("test_seed_12345") == (
            "a425b68cff299292836db62314c82057313f1ea507985e19c66fa5e4369f5392"
        )

    def test_hash_is_deterministic(self):
        assert hash_server_seed("test_seed_12345") == hash_server_seed("test_seed_12345")

    def test_different_seeds_different_hashes(self):
        assert hash_server_seed("seed1") != hash_server_seed("seed2")

    def test_commit_hashes_the_hex_string_itself(self):
        seed = new_server_seed()
        assert commit(seed) == hashlib.sha256(seed.encode("ascii")).hexdigest()

    @pytest.mark.parametrize("bad", ["", None, 12345, "seed\udcff"])
    def test_rejects_empty_or_non_string(self, bad):
        with pytest.raises(ValidationError):
            commit(bad)


class TestEncoding:

    def test_bytes_to_hex(self):
        assert bytes_to_hex(bytes([0, 255, 128, 64])) == "00ff8040"

    def test_bytes_to_hex_empty(self):
        assert bytes_to_hex(b"") == ""

    def test_bytes_to_hex_accepts_int_list(self):
        assert bytes_to_hex([1, 2, 171]) == "0102ab"

    def test_valid_hex(self):
        assert is_valid_hex("0123456789abcdef")
        assert is_valid_hex("ABCDEF")

    def test_invalid_hex(self):
        assert not is_valid_hex("xyz")
        assert not is_valid_hex("123g")
        assert not is_valid_hex("")
        assert not is_valid_hex(None)

    def test_hex_length(self):
        assert is_valid_hex("abcd", 4)
        assert not is_valid_hex("abcd", 6)

    def test_read_uint32_be(self):
        assert read_uint32_be(bytes([0x12, 0x34, 0x56, 0x78, 0xff])) == 0x12345678
        assert read_uint32_be(bytes([0, 0, 0, 0xff, 0x01]), offset=1) == 0xff01

    def test_read_uint32_be_short_input(self):
        with pytest.raises(IndexError):
            read_uint32_be(b"\x00\x01\x02")
