"""
Keypad Controller for CHIP-8 Emulator
=====================================

The CHIP-8 has a 16-key hexadecimal keypad. Host keyboards forward key
names, which are mapped onto keypad indices 0-15 through a fixed table
covering the left-hand 4x4 block of a QWERTY keyboard:

    Keyboard        Keypad index
    +-+-+-+-+       +--+--+--+--+
    |1|2|3|4|       | 0| 1| 2| 3|
    +-+-+-+-+       +--+--+--+--+
    |Q|W|E|R|       | 4| 5| 6| 7|
    +-+-+-+-+  =>   +--+--+--+--+
    |A|S|D|F|       | 8| 9|10|11|
    +-+-+-+-+       +--+--+--+--+
    |Z|X|C|V|       |12|13|14|15|
    +-+-+-+-+       +--+--+--+--+

Key names are case-insensitive. Unknown names are ignored.

Copyright (c) 2025 CHIP-8 Core Contributors
"""

from typing import Dict, List, Optional

KEY_COUNT = 16

KEY_TO_INDEX: Dict[str, int] = {
    "1": 0, "2": 1, "3": 2, "4": 3,
    "q": 4, "w": 5, "e": 6, "r": 7,
    "a": 8, "s": 9, "d": 10, "f": 11,
    "z": 12, "x": 13, "c": 14, "v": 15,
}


class Keypad:
    """
    16-key state plus symbolic key mapping.

    Example:
        >>> keypad = Keypad()
        >>> keypad.key_down("A")
        >>> keypad.is_pressed(8)
        True
        >>> keypad.first_pressed_index()
        8
    """

    def __init__(self):
        self._keys: List[bool] = [False] * KEY_COUNT

    @staticmethod
    def key_index(key: str) -> Optional[int]:
        """
        Resolve a key name to a keypad index.

        Returns:
            Index 0-15, or None if the key is not mapped
        """
        return KEY_TO_INDEX.get(key.lower())

    def key_down(self, key: str) -> None:
        """Press a key by name. Unknown names are ignored."""
        idx = self.key_index(key)
        if idx is not None:
            self._keys[idx] = True

    def key_up(self, key: str) -> None:
        """Release a key by name. Unknown names are ignored."""
        idx = self.key_index(key)
        if idx is not None:
            self._keys[idx] = False

    def is_key_down(self, key: str) -> bool:
        """True if the named key is pressed (False for unknown names)."""
        idx = self.key_index(key)
        return idx is not None and self._keys[idx]

    def is_pressed(self, index: int) -> bool:
        """
        True if the key at a keypad index is pressed.

        Only the low nibble of ``index`` is used, since instructions pass a
        raw 8-bit register value.
        """
        return self._keys[index & 0x0F]

    def first_pressed_index(self) -> Optional[int]:
        """Lowest pressed keypad index, or None."""
        for idx, pressed in enumerate(self._keys):
            if pressed:
                return idx
        return None

    def clear(self) -> None:
        """Release all keys."""
        self._keys = [False] * KEY_COUNT

    @property
    def pressed(self) -> List[int]:
        """Indices of all pressed keys, ascending."""
        return [idx for idx, pressed in enumerate(self._keys) if pressed]
