"""Frame buffer sink receiving the finished pixels of a render.

The renderer talks to its output through the FrameBufferSink protocol:

    begin(width, height)       called once before the first pixel
    write_pixel(x, y, rgb)     rgb is a triple of ints in [0, 255]
    finish()                   called once after the last pixel

FrameBuffer is the default sink. It stores pixels in a NumPy array of shape
(height, width, 3) with row 0 at the top, which is the layout Pillow,
Matplotlib and the interactive preview all consume.

Example:
    >>> from src.whitted.preview.framebuffer import FrameBuffer
    >>> fb = FrameBuffer(2, 1)
    >>> fb.write_pixel(1, 0, (255, 128, 0))
    >>> fb.to_packed_rgba()[0, 1] == 0xFF0080FF
    True
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import numpy as np
import numpy.typing as npt

# Opaque alpha in the packed 0xAABBGGRR layout
ALPHA = 0xFF << 24


@runtime_checkable
class FrameBufferSink(Protocol):
    """Destination for rendered pixels."""

    def begin(self, width: int, height: int) -> None: ...

    def write_pixel(self, x: int, y: int, rgb: tuple[int, int, int]) -> None: ...

    def finish(self) -> None: ...


class FrameBuffer:
    """NumPy-backed RGB frame buffer.

    Attributes:
        width: Frame width in pixels.
        height: Frame height in pixels.
        pixels: uint8 array of shape (height, width, 3).
        finished: Whether the last render completed.
    """

    def __init__(self, width: int | None = None, height: int | None = None) -> None:
        """Create a frame buffer, optionally allocating it right away.

        Args:
            width: Frame width in pixels. If omitted, allocation waits for begin().
            height: Frame height in pixels.
        """
        self.width = 0
        self.height = 0
        self.pixels: npt.NDArray[np.uint8] | None = None
        self.finished = False
        if width is not None and height is not None:
            self.begin(width, height)

    def begin(self, width: int, height: int) -> None:
        """Allocate (or reallocate) a black buffer of the given size.

        Raises:
            ValueError: If either dimension is not positive.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Frame dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.pixels = np.zeros((height, width, 3), dtype=np.uint8)
        self.finished = False

    def _require_pixels(self) -> npt.NDArray[np.uint8]:
        if self.pixels is None:
            raise RuntimeError("Frame buffer not set up. Call begin() first.")
        return self.pixels

    def write_pixel(self, x: int, y: int, rgb: tuple[int, int, int]) -> None:
        """Store one pixel.

        Raises:
            RuntimeError: If begin() has not been called.
            ValueError: If (x, y) is outside the frame.
        """
        pixels = self._require_pixels()
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise ValueError(
                f"Pixel ({x}, {y}) outside frame of {self.width}x{self.height}"
            )
        pixels[y, x] = rgb

    def finish(self) -> None:
        self.finished = True

    def get_pixel(self, x: int, y: int) -> tuple[int, int, int]:
        pixels = self._require_pixels()
        r, g, b = pixels[y, x]
        return (int(r), int(g), int(b))

    def to_numpy(self) -> npt.NDArray[np.uint8]:
        """Return a copy of the pixels as uint8 (height, width, 3)."""
        return self._require_pixels().copy()

    def to_float(self) -> npt.NDArray[np.float32]:
        """Return the pixels as float32 in [0, 1]."""
        return self._require_pixels().astype(np.float32) / 255.0

    def to_packed_rgba(self) -> npt.NDArray[np.uint32]:
        """Pack each pixel into a 32-bit word as 0xAABBGGRR with opaque alpha.

        Viewed as bytes on a little-endian machine this is the R, G, B, A
        order an HTML canvas ImageData expects.

        Returns:
            uint32 array of shape (height, width).
        """
        pixels = self._require_pixels().astype(np.uint32)
        return (
            np.uint32(ALPHA)
            | (pixels[:, :, 2] << np.uint32(16))
            | (pixels[:, :, 1] << np.uint32(8))
            | pixels[:, :, 0]
        ).astype(np.uint32)

    def __repr__(self) -> str:
        return f"FrameBuffer(width={self.width}, height={self.height}, finished={self.finished})"
