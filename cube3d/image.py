"""In-memory 32-bit pixel images and colour packing."""

from __future__ import annotations

_PIXEL_MASK = 0xFFFFFFFF


def get_color(r: int, g: int, b: int) -> int:
    """Pack red, green and blue components into a 0xRRGGBB value."""
    return (r << 16) | (g << 8) | b


class Image:
    """A width x height grid of 32-bit pixels, initially all zero."""

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"image size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self._pixels = [0] * (width * height)

    def __repr__(self) -> str:
        return f"Image({self.width}, {self.height})"

    def _offset(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(
                f"pixel ({x}, {y}) outside {self.width}x{self.height} image"
            )
        return y * self.width + x

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Store a 32-bit colour at column x, row y."""
        self._pixels[self._offset(x, y)] = color & _PIXEL_MASK

    def get_pixel(self, x: int, y: int) -> int:
        """Return the 32-bit colour at column x, row y."""
        return self._pixels[self._offset(x, y)]

    def sample(self, u: float, v: float) -> int:
        """Return the texel at texture coordinates (u, v).

        Coordinates are scaled by the image size and truncated; the result
        wraps around, so only the fractional part of u and v matters.
        """
        tex_x = int(u * self.width) % self.width
        tex_y = int(v * self.height) % self.height
        return self._pixels[tex_y * self.width + tex_x]

    def rgb_bytes(self) -> bytes:
        """Return the pixels row by row as packed 8-bit R, G, B triples."""
        out = bytearray()
        for color in self._pixels:
            out += bytes(((color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF))
        return bytes(out)