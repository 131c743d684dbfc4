"""
Complementary Multiply-With-Carry Random Source
===============================================

Deterministic 32-bit pseudo-random generator consumed by the RND (Cxkk)
instruction.

The generator keeps a table of 4096 32-bit words, a carry word and a
cursor. The table is seeded by repeated addition of the golden-ratio
constant and filled with an XOR recurrence, so two generators built with
the same seed always produce the same sequence.

Copyright (c) 2025 CHIP-8 Core Contributors
"""

from typing import List

CMWC_CYCLE = 4096
PHI = 0x9E3779B9
MULTIPLIER = 18782
REFLECT = 0xFFFFFFFE
INITIAL_CARRY = 362436
DEFAULT_SEED = 1

_MASK32 = 0xFFFFFFFF


class ComplementaryMultiplyWithCarry:
    """
    CMWC generator with a 4096-word lag table.

    Example:
        >>> rng = ComplementaryMultiplyWithCarry(seed=1)
        >>> value = rng.next()
        >>> 0 <= value <= 0xFFFFFFFF
        True
    """

    def __init__(self, seed: int = DEFAULT_SEED):
        """
        Initialize the state table from a seed.

        Args:
            seed: 32-bit seed (larger values are truncated)
        """
        seed &= _MASK32
        self.seed = seed

        q: List[int] = [0] * CMWC_CYCLE
        q[0] = seed
        q[1] = (seed + PHI) & _MASK32
        q[2] = (seed + PHI + PHI) & _MASK32
        for i in range(3, CMWC_CYCLE):
            q[i] = q[i - 3] ^ q[i - 2] ^ PHI ^ seed

        self._q = q
        self._carry = INITIAL_CARRY
        self._index = CMWC_CYCLE - 1

    def next(self) -> int:
        """
        Draw the next 32-bit value.

        Returns:
            Unsigned 32-bit integer
        """
        self._index = (self._index + 1) & (CMWC_CYCLE - 1)
        t = MULTIPLIER * self._q[self._index] + self._carry

        self._carry = t >> 32
        x = (t + self._carry) & _MASK32
        if x < self._carry:
            x += 1
            self._carry += 1

        self._q[self._index] = (REFLECT - x) & _MASK32
        return self._q[self._index]

    def random_byte(self) -> int:
        """Draw the next value truncated to 8 bits."""
        return self.next() & 0xFF

    def __repr__(self) -> str:
        return f"ComplementaryMultiplyWithCarry(seed={self.seed})"
