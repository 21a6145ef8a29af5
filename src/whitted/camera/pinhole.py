"""Pinhole camera model for perspective projection ray generation.

The camera sits at a fixed origin and looks down the negative z-axis with
y up. Pixel (x, y) is addressed from the top-left corner of the frame, and
its ray passes through the pixel center on an image plane at z = -1:

    xx = (2 * (x + 0.5) / width - 1) * tan(vfov / 2) * aspect_ratio
    yy = (1 - 2 * (y + 0.5) / height) * tan(vfov / 2)
    zz = -1

Example:
    >>> from src.whitted.camera.pinhole import PinholeCamera
    >>> camera = PinholeCamera(width=640, height=480, vfov=40.0)
    >>> direction = camera.ray_direction(0, 0)  # top-left pixel
    >>> direction.x < 0.0 < direction.y
    True
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from src.whitted.core.ray import Ray
from src.whitted.core.settings import DEFAULT_VFOV, RenderSettings
from src.whitted.core.vector import Vector3


@dataclass
class PinholeCamera:
    """Configuration for a pinhole (perspective) camera.

    Attributes:
        width: Frame width in pixels.
        height: Frame height in pixels.
        vfov: Vertical field of view in degrees.
        origin: Camera position in world space (x, y, z).
    """

    width: int
    height: int
    vfov: float = DEFAULT_VFOV
    origin: tuple[float, float, float] = field(default=(0.0, 0.0, 0.0))

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Frame dimensions must be positive, got {self.width}x{self.height}"
            )
        if not 0.0 < self.vfov < 180.0:
            raise ValueError(f"vfov must be in (0, 180) degrees, got {self.vfov}")
        self._inverse_width = 1.0 / self.width
        self._inverse_height = 1.0 / self.height
        self._angle = math.tan(math.pi * 0.5 * self.vfov / 180.0)

    @classmethod
    def from_settings(cls, settings: RenderSettings) -> PinholeCamera:
        return cls(
            width=settings.width,
            height=settings.height,
            vfov=settings.vfov,
            origin=settings.camera_origin,
        )

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height

    @property
    def angle(self) -> float:
        """Half-height of the image plane at unit distance, tan(vfov / 2)."""
        return self._angle

    def get_origin(self) -> Vector3:
        return Vector3.from_iterable(self.origin)

    def ray_direction(self, x: int, y: int) -> Vector3:
        """Compute the normalized direction through the center of pixel (x, y).

        Args:
            x: Pixel column (0 = left).
            y: Pixel row (0 = top).

        Returns:
            A new unit-length direction vector.
        """
        xx = (2.0 * ((x + 0.5) * self._inverse_width) - 1.0) * self._angle * self.aspect_ratio
        yy = (1.0 - 2.0 * ((y + 0.5) * self._inverse_height)) * self._angle
        return Vector3(xx, yy, -1.0).normalize()

    def get_ray(self, x: int, y: int) -> Ray:
        """Generate the primary ray for pixel (x, y)."""
        return Ray(origin=self.get_origin(), direction=self.ray_direction(x, y))

    def get_camera_info(self) -> dict[str, float | tuple[float, float, float]]:
        """Get the derived camera parameters for debugging.

        Returns:
            Dictionary with origin, aspect_ratio, angle and the directions of
            the four corner pixels.
        """
        last_x = self.width - 1
        last_y = self.height - 1
        return {
            "origin": tuple(self.origin),
            "aspect_ratio": self.aspect_ratio,
            "angle": self._angle,
            "top_left": self.ray_direction(0, 0).to_tuple(),
            "top_right": self.ray_direction(last_x, 0).to_tuple(),
            "bottom_left": self.ray_direction(0, last_y).to_tuple(),
            "bottom_right": self.ray_direction(last_x, last_y).to_tuple(),
        }
