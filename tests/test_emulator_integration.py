"""
Emulator Integration Tests
==========================

Tests for the complete emulator system, verifying that all components
work together correctly.

These tests ensure:
- Configuration from code and environment
- Program loading from files and bytes
- Frame execution and cycle accounting
- Display output as text and PNG
- Keyboard input handling
- Fault reporting

Copyright (c) 2025 CHIP-8 Core Contributors
"""

import logging

import pytest

from chip8_core import (
    CartridgeError,
    Emulator,
    EmulatorConfig,
    InsufficientMemoryError,
    StackOverflowError,
    UnimplementedInstructionError,
)


def words(*values):
    """Encode instruction words as big-endian program bytes."""
    return b"".join(v.to_bytes(2, "big") for v in values)


# Draw the glyph for A at (0, 0), then spin.
GLYPH_A_PROGRAM = words(0x600A, 0xF029, 0x6100, 0x6200, 0xD125, 0x120A)

# Jump to self forever.
SPIN_PROGRAM = words(0x1200)


# =============================================================================
# Configuration Tests
# =============================================================================

class TestEmulatorConfig:
    """Test EmulatorConfig defaults, validation and environment loading."""

    def test_defaults(self):
        config = EmulatorConfig()
        assert config.seed == 1
        assert config.cycles_per_frame == 10
        assert config.speed == 1
        assert config.frame_cycles == 10

    def test_frame_cycles_scales_with_speed(self):
        assert EmulatorConfig(cycles_per_frame=8, speed=3).frame_cycles == 24

    @pytest.mark.parametrize("kwargs", [{"speed": 0}, {"cycles_per_frame": 0}])
    def test_rejects_non_positive(self, kwargs):
        with pytest.raises(ValueError):
            EmulatorConfig(**kwargs)

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("CHIP8_SEED", "0x10")
        monkeypatch.setenv("CHIP8_CYCLES_PER_FRAME", "12")
        monkeypatch.setenv("CHIP8_SPEED", "2")
        config = EmulatorConfig.from_env()
        assert config.seed == 16
        assert config.frame_cycles == 24

    def test_from_env_ignores_bad_values(self, monkeypatch, caplog):
        monkeypatch.setenv("CHIP8_SEED", "banana")
        monkeypatch.delenv("CHIP8_SPEED", raising=False)
        monkeypatch.delenv("CHIP8_CYCLES_PER_FRAME", raising=False)
        with caplog.at_level(logging.WARNING):
            config = EmulatorConfig.from_env()
        assert config.seed == 1
        assert "CHIP8_SEED" in caplog.text


# =============================================================================
# Program Loading Tests
# =============================================================================

class TestProgramLoading:
    """Test loading ROM files and raw bytes."""

    def test_load_rom(self, tmp_path):
        rom = tmp_path / "glyph.ch8"
        rom.write_bytes(GLYPH_A_PROGRAM)
        emu = Emulator()
        cartridge = emu.load_rom(rom)
        assert len(cartridge) == len(GLYPH_A_PROGRAM)
        assert emu.cpu.memory.read_word(0x200) == 0x600A

    def test_load_missing_rom(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Emulator().load_rom(tmp_path / "missing.ch8")

    def test_load_empty_rom(self, tmp_path):
        rom = tmp_path / "empty.ch8"
        rom.write_bytes(b"")
        with pytest.raises(CartridgeError):
            Emulator().load_rom(rom)

    def test_load_oversized_program(self):
        with pytest.raises(InsufficientMemoryError):
            Emulator().load_bytes(bytes(4096))


# =============================================================================
# Execution Tests
# =============================================================================

class TestExecution:
    """Test running programs end to end."""

    @pytest.fixture
    def emu(self):
        emu = Emulator()
        emu.load_bytes(GLYPH_A_PROGRAM)
        return emu

    def test_draw_glyph(self, emu):
        emu.run(5)
        lines = emu.display_lines
        assert lines[0].startswith("####.")
        assert lines[1].startswith("#..#.")
        assert lines[2].startswith("####.")
        assert lines[4].startswith("#..#.")
        assert lines[5] == "." * 64

    def test_display_text_matches_pixels(self, emu):
        emu.run(5)
        assert emu.display_text.count("#") == sum(emu.display_pixels)

    def test_run_frame_counts_cycles(self):
        emu = Emulator(EmulatorConfig(cycles_per_frame=7, speed=2))
        emu.load_bytes(SPIN_PROGRAM)
        emu.run_frame()
        emu.run_frame()
        assert emu.total_cycles == 28

    def test_run_requires_positive_cycles(self, emu):
        with pytest.raises(ValueError):
            emu.run(0)

    def test_last_result(self, emu):
        assert emu.last_result is None
        result = emu.run(5)
        assert emu.last_result is result
        assert result.display == emu.display_pixels

    def test_registers(self, emu):
        emu.run(2)
        regs = emu.registers
        assert regs["v0"] == 0x0A
        assert regs["i"] == 50
        assert regs["pc"] == 0x204
        assert set(regs) >= {"v0", "vf", "sp", "dt", "st"}

    def test_render_display(self, emu):
        emu.run(5)
        assert emu.render_display(scale=2).startswith(b"\x89PNG")

    def test_reset(self, emu):
        emu.run(5)
        emu.reset()
        assert emu.total_cycles == 0
        assert emu.display_pixels == bytes(2048)
        assert emu.registers["pc"] == 0x200

    def test_sound(self):
        emu = Emulator()
        emu.load_bytes(words(0x6003, 0xF018, 0x1204))
        emu.run(2)
        assert emu.should_beep
        emu.run(3)
        assert not emu.should_beep

    def test_same_seed_same_random_values(self):
        program = words(0xC0FF, 0xC1FF, 0xC2FF)
        results = []
        for _ in range(2):
            emu = Emulator(EmulatorConfig(seed=99))
            emu.load_bytes(program)
            emu.run(3)
            results.append(emu.cpu.v[:3])
        assert results[0] == results[1]

    def test_default_seed_first_random_byte(self):
        emu = Emulator()
        emu.load_bytes(words(0xC0FF))
        emu.step()
        assert emu.registers["v0"] == 0xDC


# =============================================================================
# Keyboard Tests
# =============================================================================

class TestKeyboard:
    """Test key input through the emulator."""

    def test_wait_for_key(self):
        emu = Emulator()
        emu.load_bytes(words(0xF30A, 0x1202))
        emu.run(5)
        assert emu.registers["pc"] == 0x200

        emu.tap_key("W", hold_cycles=1)
        assert emu.registers["v3"] == 5
        assert emu.registers["pc"] == 0x202
        assert not emu.cpu.keypad.is_key_down("w")

    def test_skip_on_key(self):
        emu = Emulator()
        # SKP V0 with V0 = 0x0C ('z'), V1 = 1 only if not skipped
        emu.load_bytes(words(0x600C, 0xE09E, 0x6101, 0x1206))
        emu.press_key("z")
        emu.run(3)
        assert emu.registers["v1"] == 0
        emu.release_key("z")
        assert not emu.cpu.keypad.is_pressed(12)


# =============================================================================
# Fault Tests
# =============================================================================

class TestFaults:
    """Test that fatal faults are reported and leave state consistent."""

    def test_unimplemented_instruction_logged(self, caplog):
        emu = Emulator()
        emu.load_bytes(words(0x5AB1))
        with caplog.at_level(logging.ERROR):
            with pytest.raises(UnimplementedInstructionError) as exc_info:
                emu.step()
        assert exc_info.value.opcode == 0x5AB1
        assert "$5AB1" in caplog.text
        assert emu.total_cycles == 0
        assert emu.registers["pc"] == 0x200

    def test_runaway_recursion(self):
        emu = Emulator()
        emu.load_bytes(words(0x2200))
        emu.run(16)
        with pytest.raises(StackOverflowError):
            emu.step()
        assert emu.registers["sp"] == 16
        assert emu.registers["pc"] == 0x200
