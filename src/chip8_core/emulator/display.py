"""
Framebuffer for CHIP-8 Emulator
===============================

The CHIP-8 display is a 64 x 32 monochrome grid stored row-major, one
byte per pixel (0 = off, 1 = on).

Sprites are drawn with XOR: each sprite byte is one row of 8 pixels,
most significant bit leftmost. Pixels wrap around both edges. A collision
is reported when a set sprite bit lands on a pixel that was already on.

Copyright (c) 2025 CHIP-8 Core Contributors
"""

import io
from dataclasses import dataclass
from typing import Tuple

from PIL import Image

WIDTH = 64
HEIGHT = 32


@dataclass(frozen=True)
class DisplayInfo:
    """Display geometry."""
    width: int = WIDTH
    height: int = HEIGHT

    @property
    def pixel_count(self) -> int:
        return self.width * self.height


class Display:
    """
    Monochrome framebuffer with XOR sprite blitting.

    Example:
        >>> display = Display()
        >>> display.draw_sprite(0, 0, bytes([0xF0]))
        False
        >>> display.get_pixel(0, 0)
        True
        >>> display.draw_sprite(0, 0, bytes([0x80]))
        True
    """

    def __init__(self, width: int = WIDTH, height: int = HEIGHT):
        self.info = DisplayInfo(width, height)
        self._pixels = bytearray(self.info.pixel_count)

    @property
    def width(self) -> int:
        return self.info.width

    @property
    def height(self) -> int:
        return self.info.height

    def clear(self) -> None:
        """Switch every pixel off."""
        for idx in range(len(self._pixels)):
            self._pixels[idx] = 0

    def get_pixel(self, x: int, y: int) -> bool:
        """True if the pixel at (x, y) is on. Coordinates wrap."""
        return self._pixels[(x % self.width) + (y % self.height) * self.width] == 1

    def draw_sprite(self, x: int, y: int, sprite: bytes) -> bool:
        """
        XOR a sprite onto the framebuffer.

        Args:
            x: Column of the top-left corner (taken modulo width)
            y: Row of the top-left corner (taken modulo height)
            sprite: One byte per row, MSB is the leftmost pixel

        Returns:
            True if any set sprite bit hit a pixel that was already on
        """
        width = self.width
        height = self.height
        collision = False

        for j, row in enumerate(sprite):
            yj = (y + j) % height
            for i in range(8):
                if (row >> (7 - i)) & 0x1 == 0:
                    continue
                offset = ((x + i) % width) + yj * width
                # Collision is observed before the XOR
                if self._pixels[offset]:
                    collision = True
                self._pixels[offset] ^= 1

        return collision

    def snapshot(self) -> bytes:
        """Immutable copy of all pixels, row-major."""
        return bytes(self._pixels)

    # =========================================================================
    # Host Rendering
    # =========================================================================

    def get_text_grid(self, on: str = "#", off: str = ".") -> Tuple[str, ...]:
        """Render the framebuffer as one string per row."""
        width = self.width
        return tuple(
            "".join(on if self._pixels[row * width + col] else off for col in range(width))
            for row in range(self.height)
        )

    def get_text(self, on: str = "#", off: str = ".") -> str:
        """Render the framebuffer as newline-separated rows."""
        return "\n".join(self.get_text_grid(on, off))

    def render_image(
        self,
        scale: int = 8,
        ink_color: tuple = (0x33, 0xFF, 0x66),
        paper_color: tuple = (0, 0, 0),
    ) -> bytes:
        """
        Render the framebuffer as a PNG image.

        Args:
            scale: Pixel scale factor (default 8)
            ink_color: RGB tuple for "on" pixels
            paper_color: RGB tuple for "off" pixels

        Returns:
            PNG image bytes
        """
        if scale < 1:
            raise ValueError(f"scale must be at least 1, got {scale}")

        img = Image.new("RGB", (self.width, self.height), color=paper_color)
        for offset, pixel in enumerate(self._pixels):
            if pixel:
                img.putpixel((offset % self.width, offset // self.width), ink_color)

        if scale != 1:
            img = img.resize((self.width * scale, self.height * scale), Image.Resampling.NEAREST)

        buffer = io.BytesIO()
        img.save(buffer, format="PNG")
        return buffer.getvalue()
