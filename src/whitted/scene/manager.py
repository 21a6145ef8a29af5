"""Scene construction, validation and serialization.

This module provides the Scene container handed to the renderer. A Scene is
an ordered list of objects that is built up front and then treated as
read-only: the renderer snapshots it into a tuple before the first ray.

The Scene maintains:
- Object insertion order (the tracer scans objects in this order)
- Validation of sphere parameters at construction time
- Dictionary and JSON round-tripping, together with RenderSettings

Example:
    >>> from src.whitted.scene.manager import Scene
    >>> scene = Scene()
    >>> ground = scene.add_sphere((0, -10004, -20), 10000, surface_color=(0.2, 0.2, 0.2))
    >>> light = scene.add_sphere((0, 20, -30), 3, surface_color=(0, 0, 0),
    ...                          emission_color=(3, 3, 3))
    >>> len(scene), len(scene.get_emitters())
    (2, 1)
"""

from __future__ import annotations

import json
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from src.whitted.core.settings import RenderSettings
from src.whitted.core.vector import Vector3
from src.whitted.geometry.base import Intersectable
from src.whitted.geometry.sphere import Sphere

# Keys accepted in a sphere entry and their defaults (None = required)
_SPHERE_KEYS: dict[str, Any] = {
    "center": None,
    "radius": None,
    "surface_color": None,
    "reflection": 0.0,
    "transparency": 0.0,
    "emission_color": [0.0, 0.0, 0.0],
}

_SCENE_KEYS = {"settings", "spheres"}


@dataclass
class SceneConfig:
    """Configuration for scene serialization.

    Attributes:
        spheres: List of sphere configurations.
        settings: Render settings stored alongside the scene, if any.
    """

    spheres: list[dict[str, Any]] = field(default_factory=list)
    settings: dict[str, Any] | None = None


def _vector(value: Any, name: str) -> Vector3:
    if isinstance(value, Vector3):
        return value.clone()
    try:
        return Vector3.from_iterable(float(v) for v in value)
    except TypeError as exc:
        raise ValueError(f"{name} must be a sequence of 3 numbers") from exc


def _scalar(value: Any, name: str) -> float:
    if isinstance(value, (bool, str)):
        raise ValueError(f"{name} must be a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{name} must be a number, got {value!r}") from exc


class Scene(Sequence[Intersectable]):
    """Ordered, build-once collection of scene objects.

    The Scene behaves as a read-only sequence of its objects, so it can be
    passed directly to the renderer or to trace().

    Attributes:
        objects: The objects in insertion order, as a tuple.
    """

    def __init__(self, objects: Sequence[Intersectable] = ()) -> None:
        self._objects: list[Intersectable] = list(objects)

    @property
    def objects(self) -> tuple[Intersectable, ...]:
        return tuple(self._objects)

    def __len__(self) -> int:
        return len(self._objects)

    def __iter__(self) -> Iterator[Intersectable]:
        return iter(tuple(self._objects))

    def __getitem__(self, index):  # type: ignore[override]
        return self._objects[index]

    def clear(self) -> None:
        """Remove every object from the scene."""
        self._objects.clear()

    # =========================================================================
    # Object Management
    # =========================================================================

    def add(self, obj: Intersectable) -> Intersectable:
        """Append an already built object.

        Returns:
            The object, for chaining.

        Raises:
            TypeError: If obj does not provide the Intersectable capabilities.
        """
        if not isinstance(obj, Intersectable):
            raise TypeError(f"{type(obj).__name__} is not an intersectable object")
        self._objects.append(obj)
        return obj

    def add_sphere(
        self,
        center: Sequence[float] | Vector3,
        radius: float,
        surface_color: Sequence[float] | Vector3,
        reflection: float = 0.0,
        transparency: float = 0.0,
        emission_color: Sequence[float] | Vector3 = (0.0, 0.0, 0.0),
    ) -> Sphere:
        """Create a sphere and append it to the scene.

        Args:
            center: The center point as (x, y, z).
            radius: The radius (must be positive).
            surface_color: Surface color as (R, G, B), non-negative.
            reflection: Reflectivity in [0, 1].
            transparency: Transparency in [0, 1].
            emission_color: Emitted light as (R, G, B). Any positive component
                makes the sphere a point light.

        Returns:
            The new Sphere.

        Raises:
            ValueError: If any parameter is invalid.
        """
        sphere = Sphere(
            center=_vector(center, "center"),
            radius=_scalar(radius, "radius"),
            surface_color=_vector(surface_color, "surface_color"),
            reflection=_scalar(reflection, "reflection"),
            transparency=_scalar(transparency, "transparency"),
            emission_color=_vector(emission_color, "emission_color"),
        )
        self._objects.append(sphere)
        return sphere

    def add_light(
        self,
        center: Sequence[float] | Vector3,
        radius: float,
        emission_color: Sequence[float] | Vector3,
    ) -> Sphere:
        """Add an emissive, black, non-reflective sphere acting as a point light."""
        return self.add_sphere(
            center,
            radius,
            surface_color=(0.0, 0.0, 0.0),
            emission_color=emission_color,
        )

    # =========================================================================
    # Scene Queries
    # =========================================================================

    def get_emitters(self) -> list[Intersectable]:
        """Get the objects acting as light sources, in scene order."""
        return [obj for obj in self._objects if obj.get_material().is_emissive()]

    def get_sphere_count(self) -> int:
        return sum(1 for obj in self._objects if isinstance(obj, Sphere))

    # =========================================================================
    # Scene Serialization
    # =========================================================================

    def to_config(self, settings: RenderSettings | None = None) -> SceneConfig:
        """Export the scene to a configuration object.

        Only spheres are serialized.

        Args:
            settings: Optional render settings to store with the scene.
        """
        config = SceneConfig(settings=settings.to_dict() if settings is not None else None)
        for obj in self._objects:
            if not isinstance(obj, Sphere):
                continue
            material = obj.get_material()
            config.spheres.append(
                {
                    "center": list(obj.center.to_tuple()),
                    "radius": obj.radius,
                    "surface_color": list(material.surface_color.to_tuple()),
                    "reflection": material.reflection,
                    "transparency": material.transparency,
                    "emission_color": list(material.emission_color.to_tuple()),
                }
            )
        return config

    @classmethod
    def from_config(cls, config: SceneConfig) -> tuple[Scene, RenderSettings]:
        """Build a scene from a configuration object.

        Returns:
            Tuple of (scene, settings). Settings default to RenderSettings()
            when the configuration holds none.

        Raises:
            ValueError: If the configuration contains invalid data.
        """
        scene = cls()
        for index, entry in enumerate(config.spheres):
            if not isinstance(entry, dict):
                raise ValueError(f"Sphere {index} must be a mapping")
            unknown = set(entry) - set(_SPHERE_KEYS)
            if unknown:
                raise ValueError(f"Sphere {index} has unknown keys: {sorted(unknown)}")
            params = {}
            for key, default in _SPHERE_KEYS.items():
                if key in entry:
                    params[key] = entry[key]
                elif default is None:
                    raise ValueError(f"Sphere {index} is missing '{key}'")
                else:
                    params[key] = default
            scene.add_sphere(**params)

        if config.settings is None:
            settings = RenderSettings()
        else:
            settings = RenderSettings.from_dict(config.settings)
        return scene, settings

    def to_dict(self, settings: RenderSettings | None = None) -> dict[str, Any]:
        """Export the scene to a dictionary (for JSON serialization)."""
        config = self.to_config(settings)
        data: dict[str, Any] = {"spheres": config.spheres}
        if config.settings is not None:
            data["settings"] = config.settings
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> tuple[Scene, RenderSettings]:
        """Build a scene from a dictionary with 'spheres' and optional 'settings'.

        Raises:
            ValueError: If the dictionary has unknown keys or invalid entries.
        """
        if not isinstance(data, dict):
            raise ValueError("Scene data must be a mapping")
        unknown = set(data) - _SCENE_KEYS
        if unknown:
            raise ValueError(f"Unknown scene keys: {sorted(unknown)}")
        spheres = data.get("spheres", [])
        if not isinstance(spheres, list):
            raise ValueError("'spheres' must be a list")
        config = SceneConfig(spheres=spheres, settings=data.get("settings"))
        return cls.from_config(config)

    def __repr__(self) -> str:
        return f"Scene(objects={len(self._objects)}, emitters={len(self.get_emitters())})"


def load_scene(path: str | Path) -> tuple[Scene, RenderSettings]:
    """Load a scene and its render settings from a JSON file.

    Raises:
        ValueError: If the file is not valid JSON or describes an invalid scene.
    """
    text = Path(path).read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid scene file {path}: {exc}") from exc
    return Scene.from_dict(data)


def save_scene(
    scene: Scene,
    path: str | Path,
    settings: RenderSettings | None = None,
) -> Path:
    """Write a scene (and optional render settings) to a JSON file.

    Returns:
        The path written.
    """
    output = Path(path)
    output.write_text(json.dumps(scene.to_dict(settings), indent=2), encoding="utf-8")
    return output
