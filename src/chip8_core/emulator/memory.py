"""
Memory Subsystem for CHIP-8 Emulator
====================================

Memory Map:
    $000-$04F  Built-in hexadecimal glyphs (16 x 5 bytes)
    $050-$1FF  Unused (reserved for the interpreter on original hardware)
    $200-$FFF  Program area (cartridge is copied here)

Every access is bounds-checked; an address outside $000-$FFF raises
MemoryAccessError instead of wrapping.

Copyright (c) 2025 CHIP-8 Core Contributors
"""

from typing import Iterable, Optional

from ..errors import InsufficientMemoryError, MemoryAccessError

MEMORY_SIZE = 4096
PROGRAM_START = 0x200
GLYPH_SIZE = 5

# Hexadecimal digit glyphs 0-F, 4 pixels wide (high nibble) by 5 rows.
FONT_SET = bytes([
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
])


def glyph_address(digit: int) -> int:
    """Address of the built-in glyph for the low nibble of ``digit``."""
    return (digit & 0x0F) * GLYPH_SIZE


class Memory:
    """
    4KB byte-addressable memory with the glyph set preloaded.

    Attributes:
        size: Number of addressable bytes (4096)

    Example:
        >>> mem = Memory()
        >>> mem.load_program(bytes([0x00, 0xE0]))
        >>> hex(mem.read_word(0x200))
        '0xe0'
    """

    def __init__(self):
        self.size = MEMORY_SIZE
        self._data = bytearray(MEMORY_SIZE)
        self._data[0:len(FONT_SET)] = FONT_SET

    @property
    def program_capacity(self) -> int:
        """Number of bytes available from PROGRAM_START to the end."""
        return self.size - PROGRAM_START

    def reset(self) -> None:
        """Zero all memory and reload the glyph set."""
        self._data = bytearray(self.size)
        self._data[0:len(FONT_SET)] = FONT_SET

    def _check(self, address: int, count: int = 1, pc: Optional[int] = None) -> None:
        if address < 0 or address + count > self.size:
            # Report the first address that falls outside
            bad = address if address < 0 or address >= self.size else self.size
            raise MemoryAccessError(bad, pc)

    def read(self, address: int, pc: Optional[int] = None) -> int:
        """
        Read a byte.

        Args:
            address: Address in $000-$FFF
            pc: Program counter reported if the access faults

        Raises:
            MemoryAccessError: If address is out of range
        """
        self._check(address, 1, pc)
        return self._data[address]

    def write(self, address: int, value: int, pc: Optional[int] = None) -> None:
        """Write a byte (value is masked to 8 bits)."""
        self._check(address, 1, pc)
        self._data[address] = value & 0xFF

    def read_word(self, address: int, pc: Optional[int] = None) -> int:
        """Read a big-endian 16-bit word."""
        self._check(address, 2, pc)
        return (self._data[address] << 8) | self._data[address + 1]

    def read_block(self, address: int, count: int, pc: Optional[int] = None) -> bytes:
        """Read ``count`` consecutive bytes as an immutable copy."""
        self._check(address, count, pc)
        return bytes(self._data[address:address + count])

    def write_block(self, address: int, data: Iterable[int], pc: Optional[int] = None) -> None:
        """
        Write consecutive bytes.

        The whole range is validated before anything is written.
        """
        block = bytes(value & 0xFF for value in data)
        self._check(address, len(block), pc)
        self._data[address:address + len(block)] = block

    def load_program(self, data: bytes) -> None:
        """
        Copy program bytes into memory at PROGRAM_START.

        Raises:
            InsufficientMemoryError: If data does not fit; memory is untouched
        """
        if len(data) > self.program_capacity:
            raise InsufficientMemoryError(len(data), self.program_capacity)
        self._data[PROGRAM_START:PROGRAM_START + len(data)] = data

    def dump(self) -> bytes:
        """Return an immutable copy of the whole address space."""
        return bytes(self._data)
