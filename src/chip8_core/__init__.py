"""
CHIP-8 Core - Deterministic CHIP-8 Interpreter
==============================================

This package provides an emulator for the CHIP-8 fantasy console: 4KB of
memory, sixteen 8-bit registers, a 16-level call stack, delay and sound
timers, a 64x32 monochrome display and a 16-key keypad.

The core is fully deterministic: the random source is seeded explicitly,
so a program fed the same key events replays identically.

Main Components
---------------
- **emulator**: Execution engine and host-facing Emulator class
- **cli**: `chip8run`, a command-line host for running ROMs headless

Quick Start
-----------
Run a ROM for a few frames:
    >>> from chip8_core import Emulator
    >>> emu = Emulator()
    >>> emu.load_rom("IBM.ch8")
    >>> for _ in range(20):
    ...     emu.run_frame()
    >>> print(emu.display_text)

Or use the command-line tool:
    $ chip8run IBM.ch8 --cycles 200 --screenshot ibm.png
"""

__version__ = "1.0.0"
__author__ = "CHIP-8 Core Contributors"

# =============================================================================
# Public API Exports
# =============================================================================

from chip8_core.emulator import (
    Emulator,
    EmulatorConfig,
    Cpu,
    ExecutionResult,
    Cartridge,
)
from chip8_core.errors import (
    Chip8Error,
    EmulatorError,
    UnimplementedInstructionError,
    InsufficientMemoryError,
    MemoryAccessError,
    StackOverflowError,
    StackUnderflowError,
    CartridgeError,
)

__all__ = [
    # Version info
    "__version__",
    "__author__",
    # Emulator
    "Emulator",
    "EmulatorConfig",
    "Cpu",
    "ExecutionResult",
    "Cartridge",
    # Exception hierarchy
    "Chip8Error",
    "EmulatorError",
    "UnimplementedInstructionError",
    "InsufficientMemoryError",
    "MemoryAccessError",
    "StackOverflowError",
    "StackUnderflowError",
    "CartridgeError",
]
