"""Material, hit record and the capability protocol for scene objects.

Any object the tracer can render satisfies the Intersectable protocol:

    center                                   emission point for lights
    intersect(origin, direction, hit) -> bool
    get_normal(point) -> Vector3
    get_material() -> Material

New primitives only need to provide these members; there is no shared base
class carrying mutable state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from src.whitted.core.vector import Vector3

# Sentinel distance for "no intersection yet"
INFINITY = 1e8


@dataclass(frozen=True)
class Material:
    """Surface response of an object.

    Attributes:
        surface_color: Color filter applied to reflected, refracted and
            diffuse light.
        reflection: Reflectivity in [0, 1]. Any positive value sends the
            surface down the specular branch.
        transparency: Transparency in [0, 1]. Positive values add a
            refraction ray.
        emission_color: Emitted light. Any positive component turns the
            object into a point light located at its center.
    """

    surface_color: Vector3
    reflection: float
    transparency: float
    emission_color: Vector3

    # Unhashable: holds mutable vectors
    __hash__ = None  # type: ignore[assignment]

    def is_emissive(self) -> bool:
        e = self.emission_color
        return e.x > 0.0 or e.y > 0.0 or e.z > 0.0

    def copy(self) -> Material:
        """Return a snapshot whose vectors are independent of this one."""
        return Material(
            surface_color=self.surface_color.clone(),
            reflection=self.reflection,
            transparency=self.transparency,
            emission_color=self.emission_color.clone(),
        )


@dataclass
class HitRecord:
    """Parametric distances written by an intersection test.

    Attributes:
        t0: The nearer usable root along the ray.
        t1: The farther root.
    """

    t0: float = INFINITY
    t1: float = INFINITY

    def reset(self) -> None:
        self.t0 = INFINITY
        self.t1 = INFINITY

    @property
    def t(self) -> float:
        """The distance to report: t0, or t1 when t0 lies behind the origin."""
        return self.t1 if self.t0 < 0.0 else self.t0


@runtime_checkable
class Intersectable(Protocol):
    """Capabilities the tracer needs from a geometric primitive."""

    center: Vector3

    def intersect(self, origin: Vector3, direction: Vector3, hit: HitRecord) -> bool:
        """Intersect a ray, writing the roots into hit.

        Returns:
            True if the ray hits the object at a non-negative distance.
        """
        ...

    def get_normal(self, point: Vector3) -> Vector3:
        """Return the outward unit normal at a surface point as a new vector."""
        ...

    def get_material(self) -> Material:
        """Return an independent snapshot of the object's material."""
        ...
