# tests/test_rng.py

import pytest

from hybridseal.errors import InvalidInputError
from hybridseal.rng import (
    SecureRandom,
    SeededRandom,
    new_secure_random,
    new_seeded_random_for_testing,
    resolve,
)


class TestSecureRandom:
    def test_lengths(self):
        rnd = new_secure_random()
        assert len(rnd.read(0)) == 0
        assert len(rnd.read(32)) == 32

    def test_not_repeating(self):
        rnd = new_secure_random()
        assert rnd.read(32) != rnd.read(32)


class TestSeededRandom:
    def test_same_seed_same_stream(self):
        a = new_seeded_random_for_testing(b"seed")
        b = new_seeded_random_for_testing(b"seed")
        assert a.read(64) == b.read(64)

    def test_different_seed_different_stream(self):
        assert SeededRandom(b"one").read(32) != SeededRandom(b"two").read(32)

    def test_stream_continues_across_reads(self):
        a = new_seeded_random_for_testing(b"seed")
        b = new_seeded_random_for_testing(b"seed")
        assert a.read(8) + a.read(24) == b.read(32)

    def test_successive_reads_differ(self):
        rnd = new_seeded_random_for_testing(b"seed")
        assert rnd.read(32) != rnd.read(32)

    @pytest.mark.parametrize("seed", [b"", "text", None])
    def test_bad_seed(self, seed):
        with pytest.raises(InvalidInputError):
            SeededRandom(seed)


class TestResolve:
    def test_explicit_source_wins(self):
        source = SeededRandom(b"x")
        assert resolve(source, seed=b"other") is source

    def test_seed(self):
        assert isinstance(resolve(seed=b"s"), SeededRandom)

    def test_default_is_secure(self):
        assert isinstance(resolve(), SecureRandom)
