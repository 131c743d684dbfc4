"""
Cartridge (ROM image) handling.

A cartridge is an opaque flat byte buffer. The engine copies it to the
program area without validation beyond capacity.
"""

import logging
from pathlib import Path
from typing import Union

from ..errors import CartridgeError

logger = logging.getLogger(__name__)


class Cartridge:
    """
    Immutable program image.

    Example:
        >>> cart = Cartridge(bytes([0x00, 0xE0]))
        >>> len(cart)
        2
    """

    def __init__(self, data: Union[bytes, bytearray]):
        self._data = bytes(data)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "Cartridge":
        """
        Read a ROM file.

        Raises:
            FileNotFoundError: If the file doesn't exist
            CartridgeError: If the file is empty
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"ROM file not found: {path}")

        data = path.read_bytes()
        if not data:
            raise CartridgeError(f"ROM file is empty: {path}")

        logger.debug("Read %d bytes from %s", len(data), path)
        return cls(data)

    @property
    def data(self) -> bytes:
        return self._data

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"Cartridge({len(self._data)} bytes)"
