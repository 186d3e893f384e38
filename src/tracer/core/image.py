"""8-bit RGB image buffer and color quantization.

Pixels are stored row-major in a (width * height, 3) uint8 array. Pixel
(x, y) lives at index y * width + x, and row y = 0 is the bottom of the
image (the camera's bottom bound). to_array() returns the conventional
top-row-first (height, width, 3) layout expected by image encoders.

quantize_channel() is the device-side mapping from linear radiance to a
display value: gamma 2.2 encoding followed by rounding to 8 bits.
"""

from dataclasses import dataclass

import numpy as np
import taichi as ti
import taichi.math as tm

# Display gamma applied before quantization
GAMMA = 2.2


@ti.func
def quantize_channel(value: ti.f32) -> ti.u8:
    """Convert one linear radiance channel to an 8-bit display value.

    NaN and infinite values map to 0, negative values clamp to 0, then the
    value is gamma encoded, scaled to 255, rounded to nearest and clamped
    to [0, 255].
    """
    v = value
    if tm.isnan(v) or tm.isinf(v):
        v = 0.0
    v = ti.max(v, 0.0)
    encoded = ti.pow(v, 1.0 / GAMMA)
    scaled = ti.floor(255.0 * encoded + 0.5)
    scaled = ti.min(ti.max(scaled, 0.0), 255.0)
    return ti.cast(scaled, ti.u8)


@dataclass(eq=False)
class Image:
    """An 8-bit RGB image.

    Attributes:
        width: Width in pixels.
        height: Height in pixels.
        pixels: uint8 array of shape (width * height, 3); row y = 0 is the
            bottom row.
    """

    width: int
    height: int
    pixels: np.ndarray

    def __post_init__(self) -> None:
        if self.width < 1 or self.height < 1:
            raise ValueError(f"Image dimensions must be positive, got {self.width}x{self.height}")
        expected = (self.width * self.height, 3)
        if self.pixels.shape != expected or self.pixels.dtype != np.uint8:
            raise ValueError(
                f"Pixel buffer must be uint8 with shape {expected}, "
                f"got {self.pixels.dtype} with shape {self.pixels.shape}"
            )

    @classmethod
    def blank(cls, width: int, height: int) -> "Image":
        """Create an all-black image."""
        return cls(width=width, height=height, pixels=np.zeros((width * height, 3), dtype=np.uint8))

    def _index(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} image")
        return y * self.width + x

    def get_pixel(self, x: int, y: int) -> tuple[int, int, int]:
        """Return the (r, g, b) value of pixel (x, y)."""
        r, g, b = self.pixels[self._index(x, y)]
        return int(r), int(g), int(b)

    def set_pixel(self, x: int, y: int, color) -> None:
        """Set pixel (x, y) to an (r, g, b) triple of values in [0, 255]."""
        self.pixels[self._index(x, y)] = color

    def to_array(self) -> np.ndarray:
        """Return a (height, width, 3) copy with the top row first."""
        return np.flipud(self.pixels.reshape(self.height, self.width, 3)).copy()

    def tobytes(self) -> bytes:
        """Raw RGB bytes, top row first."""
        return self.to_array().tobytes()
