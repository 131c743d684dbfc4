"""
CHIP-8 Emulator - Main Orchestrator
===================================

This module provides the `Emulator` class, a host-facing wrapper around the
`Cpu` execution engine with a clean, high-level API for running programs.

The Emulator class:
- Builds the engine from an `EmulatorConfig`
- Loads programs from ROM files or raw bytes
- Runs single steps, fixed cycle counts, or host-sized frames
- Exposes display output as text, raw pixels, or PNG
- Forwards keyboard input

Example usage:
    >>> from chip8_core.emulator import Emulator, EmulatorConfig
    >>> emu = Emulator(EmulatorConfig(speed=2))
    >>> emu.load_rom("roms/PONG.ch8")
    >>> emu.run_frame()
    >>> print(emu.display_text)

Frames are batches of `cycles_per_frame * speed` instructions. Pacing
frames in real time is left to the caller.

Copyright (c) 2025 CHIP-8 Core Contributors
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Union

from ..errors import EmulatorError
from .cartridge import Cartridge
from .cpu import Cpu, ExecutionResult
from .rng import DEFAULT_SEED

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmulatorConfig:
    """
    Configuration for emulator initialization.

    Attributes:
        seed: Seed for the random source (default 1)
        cycles_per_frame: Instructions executed per frame at speed 1 (default 10)
        speed: Frame size multiplier (default 1)

    Example:
        >>> config = EmulatorConfig(seed=1234, speed=3)
    """
    seed: int = DEFAULT_SEED
    cycles_per_frame: int = 10
    speed: int = 1

    def __post_init__(self):
        if self.cycles_per_frame < 1:
            raise ValueError(f"cycles_per_frame must be positive, got {self.cycles_per_frame}")
        if self.speed < 1:
            raise ValueError(f"speed must be positive, got {self.speed}")

    @property
    def frame_cycles(self) -> int:
        """Instructions executed by one run_frame() call."""
        return self.cycles_per_frame * self.speed

    @classmethod
    def from_env(cls) -> "EmulatorConfig":
        """
        Create EmulatorConfig from environment variables.

        Environment variables (all optional):
            CHIP8_SEED: Random source seed (integer)
            CHIP8_CYCLES_PER_FRAME: Instructions per frame (integer)
            CHIP8_SPEED: Frame size multiplier (integer)

        Malformed values are ignored and the default is kept.
        """
        values: Dict[str, int] = {}
        for env_name, attr in (
            ("CHIP8_SEED", "seed"),
            ("CHIP8_CYCLES_PER_FRAME", "cycles_per_frame"),
            ("CHIP8_SPEED", "speed"),
        ):
            if raw := os.environ.get(env_name):
                try:
                    values[attr] = int(raw, 0)
                except ValueError:
                    logger.warning("Ignoring invalid %s=%r", env_name, raw)
        return cls(**values)


class Emulator:
    """
    CHIP-8 emulator for hosts and tests.

    Attributes:
        config: The EmulatorConfig used to initialize this instance
        cpu: The execution engine (accessible for low-level control)

    Example:
        >>> emu = Emulator()
        >>> emu.load_bytes(bytes([0xA0, 0x00, 0xD0, 0x05]))  # draw glyph 0
        >>> result = emu.run(2)
        >>> emu.display_lines[0][:4]
        '####'
    """

    def __init__(self, config: Optional[EmulatorConfig] = None):
        self.config = config or EmulatorConfig()
        self.cpu = Cpu(seed=self.config.seed)
        self._total_cycles = 0
        self._last_result: Optional[ExecutionResult] = None

    # =========================================================================
    # Program Loading
    # =========================================================================

    def load_rom(self, path: Union[str, Path]) -> Cartridge:
        """
        Load a ROM file into the program area.

        Raises:
            FileNotFoundError: If the ROM doesn't exist
            CartridgeError: If the ROM is empty
            InsufficientMemoryError: If the ROM doesn't fit
        """
        cartridge = Cartridge.from_file(path)
        self.cpu.load(cartridge)
        logger.info("Loaded %s (%d bytes)", Path(path).name, len(cartridge))
        return cartridge

    def load_bytes(self, data: bytes) -> None:
        """Load raw program bytes at $200."""
        self.cpu.load(data)
        logger.debug("Loaded %d program bytes", len(data))

    # =========================================================================
    # Execution Control
    # =========================================================================

    def reset(self) -> None:
        """Reset the machine to power-on state (keys stay as they are)."""
        self.cpu.reset()
        self._total_cycles = 0
        self._last_result = None
        logger.debug("Emulator reset")

    def step(self) -> ExecutionResult:
        """
        Execute a single instruction.

        Raises:
            EmulatorError: On a fatal fault (logged before re-raising)
        """
        try:
            result = self.cpu.step()
        except EmulatorError as e:
            logger.error("Execution halted: %s", e)
            raise
        self._total_cycles += 1
        self._last_result = result
        return result

    def run(self, cycles: int) -> ExecutionResult:
        """
        Execute a fixed number of instructions.

        Args:
            cycles: Number of instructions to execute (at least 1)

        Returns:
            Result of the last executed instruction
        """
        if cycles < 1:
            raise ValueError(f"cycles must be positive, got {cycles}")

        result = None
        for _ in range(cycles):
            result = self.step()
        return result

    def run_frame(self) -> ExecutionResult:
        """Execute one frame worth of instructions (cycles_per_frame * speed)."""
        return self.run(self.config.frame_cycles)

    # =========================================================================
    # Keyboard Input
    # =========================================================================

    def press_key(self, key: str) -> None:
        """Press a key by name (e.g. '1', 'q', 'A'). Unknown keys are ignored."""
        self.cpu.key_down(key)

    def release_key(self, key: str) -> None:
        self.cpu.key_up(key)

    def tap_key(self, key: str, hold_cycles: int = 10) -> ExecutionResult:
        """
        Press a key, run for hold_cycles instructions, then release it.

        Returns:
            Result of the last instruction executed while the key was held
        """
        self.press_key(key)
        try:
            return self.run(hold_cycles)
        finally:
            self.release_key(key)

    # =========================================================================
    # Display Output
    # =========================================================================

    @property
    def display_text(self) -> str:
        """Framebuffer as text, '#' for on and '.' for off."""
        return self.cpu.display.get_text()

    @property
    def display_lines(self) -> List[str]:
        return list(self.cpu.display.get_text_grid())

    @property
    def display_pixels(self) -> bytes:
        """Raw framebuffer snapshot (2048 bytes of 0/1)."""
        return self.cpu.display.snapshot()

    def render_display(self, scale: int = 8) -> bytes:
        """Render the framebuffer as PNG bytes."""
        return self.cpu.display.render_image(scale=scale)

    @property
    def should_beep(self) -> bool:
        """True while the sound timer is non-zero."""
        return self.cpu.sound_timer > 0

    # =========================================================================
    # State Inspection
    # =========================================================================

    @property
    def registers(self) -> dict:
        """
        Current register values as a dictionary.

        Returns:
            Dictionary with keys v0-vf, i, pc, sp, dt, st
        """
        regs = {f"v{idx:x}": value for idx, value in enumerate(self.cpu.v)}
        regs.update({
            "i": self.cpu.i,
            "pc": self.cpu.pc,
            "sp": self.cpu.sp,
            "dt": self.cpu.delay_timer,
            "st": self.cpu.sound_timer,
        })
        return regs

    @property
    def total_cycles(self) -> int:
        """Instructions executed since construction or the last reset."""
        return self._total_cycles

    @property
    def last_result(self) -> Optional[ExecutionResult]:
        return self._last_result

    def __repr__(self) -> str:
        return (
            f"Emulator(seed={self.config.seed}, "
            f"pc=${self.cpu.pc:04X}, "
            f"cycles={self._total_cycles})"
        )
