"""
CHIP-8 Core Error Hierarchy
===========================

This module defines the exception hierarchy for the whole package.
All exceptions inherit from Chip8Error, allowing callers to catch all
package-related errors with a single except clause if desired.

Exception Hierarchy
-------------------
Chip8Error (base)
├── EmulatorError (execution engine)
│   ├── UnimplementedInstructionError - opcode matches no instruction
│   ├── InsufficientMemoryError - cartridge larger than program space
│   ├── MemoryAccessError - address outside the 4KB address space
│   ├── StackOverflowError - CALL with all 16 stack slots in use
│   └── StackUnderflowError - RET with an empty stack
└── CartridgeError (ROM file handling)

Error messages include the program counter of the faulting instruction
where one exists, formatted as ``$0ABC``:

    unimplemented instruction $5AB1 at $0204
"""

from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class Chip8Error(Exception):
    """
    Base exception for all CHIP-8 core errors.

    All exceptions in the package inherit from this class, allowing callers
    to catch them with a single except clause:

        try:
            emulator.run(10_000)
        except Chip8Error as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Emulator Exceptions
# =============================================================================

class EmulatorError(Chip8Error):
    """
    Base exception for faults raised by the execution engine.

    Attributes:
        message: The error description
        address: Program counter of the faulting instruction (optional)
    """

    def __init__(self, message: str, address: Optional[int] = None):
        self.message = message
        self.address = address
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.address is None:
            return self.message
        return f"{self.message} at ${self.address:04X}"


class UnimplementedInstructionError(EmulatorError):
    """
    Instruction word whose nibble pattern matches no known instruction.

    This is fatal: it means the program is corrupted or targets an
    extended instruction set.
    """

    def __init__(self, opcode: int, address: Optional[int] = None):
        self.opcode = opcode
        super().__init__(f"unimplemented instruction ${opcode:04X}", address)


class InsufficientMemoryError(EmulatorError):
    """
    Cartridge does not fit in the program area ($200-$FFF).

    Raised before any byte is copied into memory.
    """

    def __init__(self, size: int, capacity: int):
        self.size = size
        self.capacity = capacity
        super().__init__(
            f"program of {size} bytes exceeds available memory ({capacity} bytes)"
        )


class MemoryAccessError(EmulatorError):
    """
    Memory access outside the 4KB address space.

    Usually caused by an index register pointing past $FFF when a
    draw, BCD, store or load instruction runs.
    """

    def __init__(self, location: int, pc: Optional[int] = None):
        self.location = location
        super().__init__(f"memory access out of range (${location:04X})", pc)


class StackOverflowError(EmulatorError):
    """CALL executed while all 16 stack slots are in use."""

    def __init__(self, address: Optional[int] = None):
        super().__init__("stack overflow", address)


class StackUnderflowError(EmulatorError):
    """RET executed with an empty stack."""

    def __init__(self, address: Optional[int] = None):
        super().__init__("stack underflow", address)


# =============================================================================
# Cartridge Exceptions
# =============================================================================

class CartridgeError(Chip8Error):
    """ROM file cannot be used as a cartridge (for example, it is empty)."""
    pass
