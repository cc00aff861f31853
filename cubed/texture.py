"""In-memory 32-bit pixel buffers used for wall textures and the frame."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

_MASK = 0xFFFFFFFF


@dataclass
class Texture:
    """A width x height grid of 32-bit 0xAARRGGBB pixels, zero-filled by default."""

    width: int
    height: int
    pixels: list[int] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"texture size must be positive, got {self.width}x{self.height}"
            )
        size = self.width * self.height
        if not self.pixels:
            self.pixels = [0] * size
        elif len(self.pixels) != size:
            raise ValueError(
                f"expected {size} pixels for {self.width}x{self.height}, "
                f"got {len(self.pixels)}"
            )
        else:
            self.pixels = [pixel & _MASK for pixel in self.pixels]

    def _index(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(
                f"pixel ({x}, {y}) outside {self.width}x{self.height} texture"
            )
        return y * self.width + x

    def get_pixel(self, x: int, y: int) -> int:
        """Return the pixel at (x, y) as an unsigned 32-bit value."""
        return self.pixels[self._index(x, y)]

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Store ``color`` at (x, y), truncated to 32 bits."""
        self.pixels[self._index(x, y)] = color & _MASK

    def fill_background(self, ceiling: int, floor: int) -> None:
        """Paint the upper half with ``ceiling`` and rows below the middle with ``floor``."""
        middle = self.height // 2
        top = ceiling & _MASK
        bottom = floor & _MASK
        for y in range(self.height):
            color = bottom if y > middle else top
            start = y * self.width
            self.pixels[start:start + self.width] = [color] * self.width

    def rows(self) -> Iterator[list[int]]:
        """Yield a copy of each row of pixels, top to bottom."""
        for y in range(self.height):
            start = y * self.width
            yield self.pixels[start:start + self.width]