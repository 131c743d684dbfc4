"""
Keypad Unit Tests
=================

Tests for the 16-key keypad and its host key mapping.

Copyright (c) 2025 CHIP-8 Core Contributors
"""

import pytest
from chip8_core.emulator import Keypad, KEY_TO_INDEX


# =============================================================================
# Key Mapping Tests
# =============================================================================

class TestKeyMapping:
    """Test the fixed key-name table."""

    def test_sixteen_distinct_indices(self):
        assert sorted(KEY_TO_INDEX.values()) == list(range(16))

    @pytest.mark.parametrize("key, index", [
        ("1", 0), ("4", 3), ("q", 4), ("r", 7),
        ("a", 8), ("f", 11), ("z", 12), ("v", 15),
    ])
    def test_key_index(self, key, index):
        assert Keypad.key_index(key) == index

    def test_case_insensitive(self):
        assert Keypad.key_index("A") == Keypad.key_index("a")

    def test_unknown_key(self):
        assert Keypad.key_index("Enter") is None


# =============================================================================
# Key Press/Release Tests
# =============================================================================

class TestKeyPressRelease:
    """Test key press and release operations."""

    @pytest.fixture
    def keypad(self):
        return Keypad()

    def test_default_state_is_off(self, keypad):
        assert not any(keypad.is_pressed(idx) for idx in range(16))
        assert keypad.first_pressed_index() is None

    def test_key_down(self, keypad):
        keypad.key_down("a")
        assert keypad.is_key_down("a")
        assert keypad.is_pressed(8)

    def test_key_up(self, keypad):
        keypad.key_down("a")
        keypad.key_up("A")
        assert not keypad.is_key_down("a")
        assert not keypad.is_pressed(8)

    def test_unknown_keys_ignored(self, keypad):
        keypad.key_down("SHIFT")
        keypad.key_up("SHIFT")
        assert keypad.pressed == []
        assert keypad.is_key_down("SHIFT") is False

    def test_first_pressed_index(self, keypad):
        keypad.key_down("2")
        keypad.key_down("f")
        assert keypad.first_pressed_index() == 1
        assert keypad.pressed == [1, 11]

    def test_is_pressed_uses_low_nibble(self, keypad):
        keypad.key_down("v")
        assert keypad.is_pressed(0x1F)

    def test_clear(self, keypad):
        keypad.key_down("1")
        keypad.key_down("x")
        keypad.clear()
        assert keypad.first_pressed_index() is None
