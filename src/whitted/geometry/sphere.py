"""Sphere primitive with numerically stable ray-sphere intersection.

The ray-sphere intersection is found by solving:
    |origin + t * direction - center|^2 = radius^2

which expands to a*t^2 + b*t + c = 0 with:
    a = dot(direction, direction)
    b = 2 * dot(direction, origin - center)
    c = dot(origin - center, origin - center) - radius^2

The roots come from the stable form
    q = -0.5 * (b + sign(b) * sqrt(b^2 - 4ac))
    t0 = q / a
    t1 = c / q
which avoids the catastrophic cancellation of (-b +/- sqrt(disc)) / 2a when
b^2 is much larger than 4ac.

Example:
    >>> from src.whitted.core.vector import Vector3
    >>> from src.whitted.geometry.base import HitRecord
    >>> from src.whitted.geometry.sphere import Sphere
    >>> sphere = Sphere(Vector3(0, 0, -5), 1.0, Vector3(1, 1, 1))
    >>> hit = HitRecord()
    >>> sphere.intersect(Vector3(0, 0, 0), Vector3(0, 0, -1), hit)
    True
    >>> hit.t0
    4.0
"""

from __future__ import annotations

import math

from src.whitted.core.vector import Vector3
from src.whitted.geometry.base import HitRecord, Material


def solve_quadratic(a: float, b: float, c: float) -> tuple[float, float] | None:
    """Solve a*t^2 + b*t + c = 0 for real roots.

    Args:
        a: Quadratic coefficient.
        b: Linear coefficient.
        c: Constant term.

    Returns:
        The two roots (t0, t1) in solver order, not sorted, or None when the
        discriminant is negative or the equation is degenerate (a == 0).
    """
    if a == 0.0:
        return None

    discriminant = b * b - 4.0 * a * c
    if discriminant < 0.0:
        return None

    if discriminant == 0.0:
        t0 = -0.5 * b / a
        return t0, t0

    sqrt_d = math.sqrt(discriminant)
    if b > 0.0:
        q = -0.5 * (b + sqrt_d)
    else:
        q = -0.5 * (b - sqrt_d)
    return q / a, c / q


def _check_color(color: Vector3, name: str) -> None:
    if color.x < 0.0 or color.y < 0.0 or color.z < 0.0:
        raise ValueError(f"{name} components must be non-negative, got {color!r}")


class Sphere:
    """A sphere defined by center point, radius and material.

    Attributes:
        center: The center of the sphere. Emissive spheres radiate from here.
        radius: The radius of the sphere.
        radius2: The squared radius, computed once at construction.
    """

    def __init__(
        self,
        center: Vector3,
        radius: float,
        surface_color: Vector3,
        reflection: float = 0.0,
        transparency: float = 0.0,
        emission_color: Vector3 | None = None,
    ) -> None:
        """Create a sphere.

        Args:
            center: The center point.
            radius: The radius (must be positive).
            surface_color: Surface color filter (non-negative components).
            reflection: Reflectivity in [0, 1].
            transparency: Transparency in [0, 1].
            emission_color: Emitted light, black if omitted.

        Raises:
            ValueError: If any parameter is out of range.
        """
        if emission_color is None:
            emission_color = Vector3(0.0, 0.0, 0.0)
        if not radius > 0.0:
            raise ValueError(f"Sphere radius must be positive, got {radius}")
        if not 0.0 <= reflection <= 1.0:
            raise ValueError(f"reflection must be in [0, 1], got {reflection}")
        if not 0.0 <= transparency <= 1.0:
            raise ValueError(f"transparency must be in [0, 1], got {transparency}")
        _check_color(surface_color, "surface_color")
        _check_color(emission_color, "emission_color")

        self.center = center.clone()
        self.radius = float(radius)
        self.radius2 = self.radius * self.radius
        self._material = Material(
            surface_color=surface_color.clone(),
            reflection=float(reflection),
            transparency=float(transparency),
            emission_color=emission_color.clone(),
        )

    def intersect(self, origin: Vector3, direction: Vector3, hit: HitRecord) -> bool:
        """Intersect a ray with the sphere.

        The nearer root is written to hit.t0. When it lies behind the origin
        (the origin is inside the sphere) it is replaced by the farther root.

        Args:
            origin: Ray origin.
            direction: Ray direction.
            hit: Record receiving t0 and t1.

        Returns:
            True if the chosen root is non-negative.
        """
        offset = origin.clone().subtract(self.center)
        a = direction.dot(direction)
        b = 2.0 * direction.dot(offset)
        c = offset.dot(offset) - self.radius2

        roots = solve_quadratic(a, b, c)
        if roots is None:
            return False

        t0, t1 = roots
        if t0 > t1:
            t0, t1 = t1, t0
        if t0 < 0.0:
            t0 = t1

        hit.t0 = t0
        hit.t1 = t1
        return t0 >= 0.0

    def get_normal(self, point: Vector3) -> Vector3:
        return point.clone().subtract(self.center).normalize()

    def get_material(self) -> Material:
        return self._material.copy()

    def __repr__(self) -> str:
        material = self._material
        return (
            f"Sphere(center={self.center!r}, radius={self.radius!r}, "
            f"surface_color={material.surface_color!r}, "
            f"reflection={material.reflection!r}, "
            f"transparency={material.transparency!r}, "
            f"emission_color={material.emission_color!r})"
        )
