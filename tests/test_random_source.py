"""Tests for SecureRandomSource."""

from __future__ import annotations

import pytest

from keysmith.core.errors import RandomUnavailable
from keysmith.generators.random_source import SecureRandomSource

from tests.conftest import constant_provider


class TestNextIndex:
    def test_reduces_uint32_modulo_bound(self):
        rng = SecureRandomSource(lambda n: b"\x05\x00\x00\x00")
        assert rng.next_index(10) == 5

    def test_little_endian_interpretation(self):
        rng = SecureRandomSource(lambda n: b"\x00\x01\x00\x00")
        assert rng.next_index(1000) == 256

    def test_max_word(self):
        rng = SecureRandomSource(constant_provider(0xFFFFFFFF))
        assert rng.next_index(10) == 0xFFFFFFFF % 10

    def test_always_in_range_with_os_source(self):
        rng = SecureRandomSource()
        for bound in (1, 2, 7, 26, 94):
            for _ in range(50):
                assert 0 <= rng.next_index(bound) < bound

    @pytest.mark.parametrize("bound", [0, -3])
    def test_non_positive_bound_raises(self, bound):
        with pytest.raises(ValueError, match="positive"):
            SecureRandomSource().next_index(bound)


class TestUnavailableSource:
    def test_not_implemented_provider(self):
        def broken(n):
            raise NotImplementedError

        with pytest.raises(RandomUnavailable):
            SecureRandomSource(broken).next_index(10)

    def test_os_error_provider(self):
        def broken(n):
            raise OSError("no entropy")

        with pytest.raises(RandomUnavailable):
            SecureRandomSource(broken).next_index(10)

    def test_short_read(self):
        with pytest.raises(RandomUnavailable, match="2 bytes"):
            SecureRandomSource(lambda n: b"\x01\x02").next_index(10)


class TestChoiceAndShuffle:
    def test_choice_uses_index(self, zero_source):
        assert zero_source.choice("xyz") == "x"

    def test_choice_empty_raises(self, zero_source):
        with pytest.raises(ValueError):
            zero_source.choice("")

    def test_fisher_yates_with_zero_draws(self, zero_source):
        # i=3 swaps with 0, then i=2, then i=1
        assert zero_source.shuffle(["a", "b", "c", "d"]) == ["b", "c", "d", "a"]

    def test_shuffle_is_permutation(self):
        items = list(range(50))
        shuffled = SecureRandomSource().shuffle(list(items))
        assert sorted(shuffled) == items

    def test_shuffle_short_sequences(self, zero_source):
        assert zero_source.shuffle([]) == []
        assert zero_source.shuffle(["only"]) == ["only"]
