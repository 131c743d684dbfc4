"""
CHIP-8 Emulator
===============

A deterministic CHIP-8 interpreter core.

This package provides:

- **Cpu**: Fetch-decode-execute engine for the 34 standard instructions
- **Memory**: 4KB address space with the built-in hex glyphs
- **Display**: 64x32 XOR framebuffer with collision detection
- **Keypad**: 16-key input with a QWERTY key mapping
- **ComplementaryMultiplyWithCarry**: Seeded random source for RND

Quick Start
-----------

Basic usage::

    >>> from chip8_core.emulator import Emulator
    >>> emu = Emulator()
    >>> emu.load_rom("PONG.ch8")
    >>> result = emu.run_frame()
    >>> print(emu.display_text)

Driving the engine directly::

    >>> cpu = Cpu()
    >>> cpu.load(program_bytes)
    >>> result = cpu.step()
    >>> result.display, result.should_beep

Module Structure
----------------

- `emulator.py`: Emulator and EmulatorConfig (high-level API)
- `cpu.py`: Execution engine
- `memory.py`: Memory and glyph set
- `display.py`: Framebuffer
- `keypad.py`: Key state and mapping
- `rng.py`: CMWC random source
- `cartridge.py`: ROM images

Copyright (c) 2025 CHIP-8 Core Contributors
"""

# Main entry point
from .emulator import Emulator, EmulatorConfig

# CPU components
from .cpu import Cpu, CPUState, ExecutionResult

# Memory subsystem
from .memory import Memory, FONT_SET, MEMORY_SIZE, PROGRAM_START

# I/O
from .display import Display, DisplayInfo
from .keypad import Keypad, KEY_TO_INDEX

# Random source
from .rng import ComplementaryMultiplyWithCarry, DEFAULT_SEED

# Cartridge support
from .cartridge import Cartridge

__all__ = [
    # Main API
    "Emulator",
    "EmulatorConfig",

    # CPU
    "Cpu",
    "CPUState",
    "ExecutionResult",

    # Memory
    "Memory",
    "FONT_SET",
    "MEMORY_SIZE",
    "PROGRAM_START",

    # Display
    "Display",
    "DisplayInfo",

    # Keypad
    "Keypad",
    "KEY_TO_INDEX",

    # Random source
    "ComplementaryMultiplyWithCarry",
    "DEFAULT_SEED",

    # Cartridge
    "Cartridge",
]
