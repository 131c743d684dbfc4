"""
Random Source Unit Tests
========================

Tests for the complementary multiply-with-carry generator.

Copyright (c) 2025 CHIP-8 Core Contributors
"""

from chip8_core.emulator import ComplementaryMultiplyWithCarry, DEFAULT_SEED
from chip8_core.emulator.rng import CMWC_CYCLE


class TestDeterminism:
    """Same seed, same sequence."""

    def test_same_seed_full_cycle(self):
        a = ComplementaryMultiplyWithCarry(1234)
        b = ComplementaryMultiplyWithCarry(1234)
        assert [a.next() for _ in range(CMWC_CYCLE)] == [b.next() for _ in range(CMWC_CYCLE)]

    def test_beyond_one_cycle(self):
        a = ComplementaryMultiplyWithCarry(7)
        b = ComplementaryMultiplyWithCarry(7)
        for _ in range(CMWC_CYCLE):
            a.next()
            b.next()
        assert [a.next() for _ in range(100)] == [b.next() for _ in range(100)]

    def test_different_seeds_differ(self):
        a = ComplementaryMultiplyWithCarry(1)
        b = ComplementaryMultiplyWithCarry(2)
        assert [a.next() for _ in range(16)] != [b.next() for _ in range(16)]

    def test_default_seed(self):
        assert DEFAULT_SEED == 1
        assert ComplementaryMultiplyWithCarry().seed == 1


class TestValues:
    """Known values and ranges."""

    def test_first_values_seed_1(self):
        rng = ComplementaryMultiplyWithCarry(1)
        assert rng.next() == 0xFFFA2EDC
        assert rng.next() == 367728219

    def test_values_are_32bit(self):
        rng = ComplementaryMultiplyWithCarry(0xDEADBEEF)
        for _ in range(1000):
            assert 0 <= rng.next() <= 0xFFFFFFFF

    def test_random_byte(self):
        rng = ComplementaryMultiplyWithCarry(1)
        assert rng.random_byte() == 0xDC

    def test_seed_truncated_to_32_bits(self):
        a = ComplementaryMultiplyWithCarry(1 << 32 | 5)
        b = ComplementaryMultiplyWithCarry(5)
        assert [a.next() for _ in range(8)] == [b.next() for _ in range(8)]

    def test_zero_seed(self):
        rng = ComplementaryMultiplyWithCarry(0)
        values = {rng.next() for _ in range(64)}
        assert len(values) > 1
