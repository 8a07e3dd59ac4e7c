"""Rendered image container.

Pixels are stored as a flat row-major NumPy array of linear RGB values,
one row of three channels per pixel: pixel ``(col, row)`` lives at index
``row * width + col``. Gamma correction and quantization happen only when
the image is written out (see ``pathtracer.preview.export``).
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

from pathtracer.core.vec import Color


@dataclass
class Image:
    """A rendered image in linear RGB.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        pixels: Array of shape (width * height, 3), row-major, values in [0, 1].
    """

    width: int
    height: int
    pixels: npt.NDArray[np.float64]

    def __post_init__(self) -> None:
        expected = (self.width * self.height, 3)
        if self.pixels.shape != expected:
            raise ValueError(
                f"Pixel array shape {self.pixels.shape} does not match "
                f"{self.width}x{self.height} image (expected {expected})"
            )

    @classmethod
    def blank(cls, width: int, height: int) -> Image:
        """Create a black image."""
        return cls(width, height, np.zeros((width * height, 3), dtype=np.float64))

    def index(self, col: int, row: int) -> int:
        """Flat index of pixel ``(col, row)`` in ``pixels``."""
        return row * self.width + col

    def set_pixel(self, col: int, row: int, color: Color) -> None:
        self.pixels[self.index(col, row)] = (color.x, color.y, color.z)

    def get_pixel(self, col: int, row: int) -> Color:
        r, g, b = self.pixels[self.index(col, row)]
        return Color(r, g, b)

    def to_array(self) -> npt.NDArray[np.float64]:
        """Return the pixels as an array of shape (height, width, 3)."""
        return self.pixels.reshape(self.height, self.width, 3)
