"""Ray record and the direction helpers used by the tracer.

This module provides the Ray dataclass together with the small pieces of
optics the Whitted tracer needs: mirror reflection, Snell refraction and the
empirical Fresnel blend.

All helpers return new vectors and never mutate their arguments.

Example:
    >>> from src.whitted.core.ray import Ray, ray_at, reflect
    >>> from src.whitted.core.vector import Vector3
    >>> ray = Ray(origin=Vector3(0, 0, 0), direction=Vector3(0, 0, -1))
    >>> ray_at(ray, 5.0).to_tuple()
    (0.0, 0.0, -5.0)
    >>> reflect(Vector3(0, -1, 0), Vector3(0, 1, 0)).to_tuple()
    (0.0, 1.0, 0.0)
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from src.whitted.core.vector import Vector3

# Weight of the constant term in the Fresnel blend
FRESNEL_MIX = 0.1


@dataclass
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction of the ray. Normalized by the camera and the
            tracer, but this is not enforced.
    """

    origin: Vector3
    direction: Vector3


def ray_at(ray: Ray, t: float) -> Vector3:
    """Compute the point origin + t * direction as a new vector."""
    return ray.origin.clone().add(ray.direction.clone().multiply(t))


def mix(a: float, b: float, t: float) -> float:
    """Linear blend: b * t + a * (1 - t)."""
    return b * t + a * (1.0 - t)


def fresnel_mix(facing_ratio: float) -> float:
    """Approximate the angle-dependent reflectance.

    Blends the cubic falloff (1 - facing_ratio)^3 with full reflectance using
    a fixed FRESNEL_MIX weight, so head-on surfaces still reflect 10% and
    grazing surfaces reflect close to 100%.

    Args:
        facing_ratio: Cosine between the reversed incident direction and the
            surface normal.

    Returns:
        The reflection weight in [0.1, 1] for facing_ratio in [0, 1].
    """
    return mix((1.0 - facing_ratio) ** 3, 1.0, FRESNEL_MIX)


def reflect(incident: Vector3, normal: Vector3) -> Vector3:
    """Reflect an incident direction about a normal.

    Args:
        incident: The incoming direction (pointing toward the surface).
        normal: The surface normal (unit length).

    Returns:
        The normalized reflected direction incident - 2 (incident . normal) normal.
    """
    projection = normal.clone().multiply(2.0 * incident.dot(normal))
    return incident.clone().subtract(projection).normalize()


def refract(incident: Vector3, normal: Vector3, eta: float) -> Vector3 | None:
    """Refract an incident direction through a surface using Snell's law.

    Args:
        incident: The incoming direction (unit length).
        normal: The surface normal facing the incoming ray (unit length).
        eta: Ratio of refractive indices (incident side / transmitted side).

    Returns:
        The normalized transmitted direction, or None on total internal
        reflection (no real solution).
    """
    cos_i = -normal.dot(incident)
    k = 1.0 - eta * eta * (1.0 - cos_i * cos_i)
    if k < 0.0:
        return None
    scale = eta * cos_i - math.sqrt(k)
    return incident.clone().multiply(eta).add(normal.clone().multiply(scale)).normalize()
