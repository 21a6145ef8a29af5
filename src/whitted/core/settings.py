"""Render settings shared by the camera, tracer and renderer.

Every constant the tracer depends on is exposed here as a configurable field
with the classic defaults: a 640x480 frame, 40 degree vertical field of view,
two levels of specular recursion, a 1e-4 surface bias, an index of
refraction of 1.1 and an overbright gray background.

Example:
    >>> from src.whitted.core.settings import RenderSettings
    >>> settings = RenderSettings(width=320, height=240)
    >>> settings.aspect_ratio
    1.3333333333333333
    >>> RenderSettings.from_dict({"max_depth": 3}).max_depth
    3
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from typing import Any

from src.whitted.core.vector import Vector3

DEFAULT_WIDTH = 640
DEFAULT_HEIGHT = 480
DEFAULT_VFOV = 40.0
DEFAULT_MAX_DEPTH = 2
DEFAULT_BIAS = 1e-4
DEFAULT_IOR = 1.1

# Overbright on purpose: clamps to white and reads as a washed-out sky
DEFAULT_BACKGROUND = (2.0, 2.0, 2.0)


def _as_int(value: Any, name: str) -> int:
    """Accept a true integer only; floats and bools are rejected.

    Raises:
        ValueError: If value is not an int.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    return value


def _as_float(value: Any, name: str) -> float:
    """Coerce a number to float.

    Raises:
        ValueError: If value is not a number.
    """
    if isinstance(value, (bool, str)):
        raise ValueError(f"{name} must be a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{name} must be a number, got {value!r}") from exc


def _as_triple(value: Any, name: str) -> tuple[float, float, float]:
    """Coerce a three-element sequence to a float tuple.

    Raises:
        ValueError: If value does not hold exactly three numbers.
    """
    try:
        items = tuple(float(v) for v in value)
    except TypeError as exc:
        raise ValueError(f"{name} must be a sequence of 3 numbers") from exc
    if len(items) != 3:
        raise ValueError(f"{name} must have 3 components, got {len(items)}")
    return (items[0], items[1], items[2])


@dataclass
class RenderSettings:
    """Configuration for a single render.

    Attributes:
        width: Frame width in pixels.
        height: Frame height in pixels.
        vfov: Vertical field of view in degrees, in (0, 180).
        max_depth: Maximum specular recursion depth. Reflection and refraction
            rays are only spawned while depth < max_depth.
        bias: Offset along the surface normal applied to secondary ray origins.
        ior: Index of refraction of transparent objects.
        background: Color returned for rays that hit nothing.
        camera_origin: Position of the pinhole camera.
    """

    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    vfov: float = DEFAULT_VFOV
    max_depth: int = DEFAULT_MAX_DEPTH
    bias: float = DEFAULT_BIAS
    ior: float = DEFAULT_IOR
    background: tuple[float, float, float] = DEFAULT_BACKGROUND
    camera_origin: tuple[float, float, float] = field(default=(0.0, 0.0, 0.0))

    def __post_init__(self) -> None:
        self.width = _as_int(self.width, "width")
        self.height = _as_int(self.height, "height")
        self.max_depth = _as_int(self.max_depth, "max_depth")
        self.vfov = _as_float(self.vfov, "vfov")
        self.bias = _as_float(self.bias, "bias")
        self.ior = _as_float(self.ior, "ior")

        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Frame dimensions must be positive, got {self.width}x{self.height}"
            )
        if not 0.0 < self.vfov < 180.0:
            raise ValueError(f"vfov must be in (0, 180) degrees, got {self.vfov}")
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {self.max_depth}")
        if self.bias < 0.0:
            raise ValueError(f"bias must be non-negative, got {self.bias}")
        if self.ior <= 0.0:
            raise ValueError(f"ior must be positive, got {self.ior}")
        self.background = _as_triple(self.background, "background")
        self.camera_origin = _as_triple(self.camera_origin, "camera_origin")

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height

    def background_color(self) -> Vector3:
        """Return the background as a fresh Vector3."""
        return Vector3.from_iterable(self.background)

    def to_dict(self) -> dict[str, Any]:
        """Export the settings to a JSON-friendly dictionary."""
        data = asdict(self)
        data["background"] = list(self.background)
        data["camera_origin"] = list(self.camera_origin)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RenderSettings:
        """Build settings from a dictionary, keeping defaults for missing keys.

        Raises:
            ValueError: If the dictionary holds unknown keys or invalid values.
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown render settings: {sorted(unknown)}")
        return cls(**data)
