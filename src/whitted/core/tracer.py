"""Recursive Whitted-style tracer.

This module computes the color seen along a ray by combining direct
illumination from emissive objects, binary shadows, mirror reflection and
refraction.

For every ray the tracer:
    1. Finds the nearest object along the ray (linear scan). Rays that hit
       nothing return the background color.
    2. Builds the hit point and the normal, flipping the normal when the ray
       travels inside the object.
    3. Reflective or transparent surfaces (while depth < max_depth) spawn a
       reflection ray and, when transparent, a refraction ray. The two are
       blended with an empirical Fresnel weight and filtered by the surface
       color.
    4. Every other surface gathers Lambertian light from each emissive object,
       unless another object blocks the shadow ray toward it.
    5. The surface's own emission is added last.

Recursion depth only grows, so each primary ray spawns at most
2^(max_depth + 1) - 1 trace calls.

Example:
    >>> from src.whitted.core.tracer import trace
    >>> from src.whitted.core.vector import Vector3
    >>> color = trace((), Vector3(0, 0, 0), Vector3(0, 0, -1))
    >>> color.to_tuple()  # nothing to hit: background
    (2.0, 2.0, 2.0)
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from src.whitted.core.ray import Ray, fresnel_mix, ray_at, reflect, refract
from src.whitted.core.settings import RenderSettings
from src.whitted.core.vector import Vector3
from src.whitted.geometry.base import INFINITY, HitRecord, Intersectable

DEFAULT_SETTINGS = RenderSettings()


@dataclass
class TraceStats:
    """Counters collected while tracing.

    Attributes:
        trace_calls: Number of trace() invocations.
        primary_rays: Calls made at depth 0.
        reflection_rays: Reflection rays spawned.
        refraction_rays: Refraction rays spawned.
        shadow_rays: Shadow rays cast toward emissive objects.
        total_internal_reflections: Refraction rays skipped because no real
            transmitted direction exists.
        max_depth_reached: Deepest recursion level observed.
    """

    trace_calls: int = 0
    primary_rays: int = 0
    reflection_rays: int = 0
    refraction_rays: int = 0
    shadow_rays: int = 0
    total_internal_reflections: int = 0
    max_depth_reached: int = 0

    def reset(self) -> None:
        self.trace_calls = 0
        self.primary_rays = 0
        self.reflection_rays = 0
        self.refraction_rays = 0
        self.shadow_rays = 0
        self.total_internal_reflections = 0
        self.max_depth_reached = 0

    def _record_call(self, depth: int) -> None:
        self.trace_calls += 1
        if depth == 0:
            self.primary_rays += 1
        if depth > self.max_depth_reached:
            self.max_depth_reached = depth


def find_nearest(
    objects: Sequence[Intersectable],
    origin: Vector3,
    direction: Vector3,
) -> tuple[Intersectable | None, float]:
    """Find the closest object along a ray.

    Args:
        objects: The scene objects to scan.
        origin: Ray origin.
        direction: Ray direction.

    Returns:
        A tuple (element, tnear). element is None when nothing is hit, in
        which case tnear is INFINITY.
    """
    tnear = INFINITY
    element = None
    hit = HitRecord()

    for obj in objects:
        hit.reset()
        if obj.intersect(origin, direction, hit):
            t = hit.t
            if t < tnear:
                tnear = t
                element = obj

    return element, tnear


def is_occluded(
    objects: Sequence[Intersectable],
    light: Intersectable,
    origin: Vector3,
    light_direction: Vector3,
) -> bool:
    """Check whether anything other than the light blocks a shadow ray.

    The light is skipped by identity. Any hit in front of the origin counts,
    with no distance limit.
    """
    hit = HitRecord()
    for obj in objects:
        if obj is light:
            continue
        hit.reset()
        if obj.intersect(origin, light_direction, hit):
            return True
    return False


def trace(
    objects: Sequence[Intersectable],
    origin: Vector3,
    direction: Vector3,
    depth: int = 0,
    settings: RenderSettings = DEFAULT_SETTINGS,
    stats: TraceStats | None = None,
) -> Vector3:
    """Compute the color seen along a ray.

    Args:
        objects: The read-only scene objects.
        origin: Ray origin. Not mutated.
        direction: Normalized ray direction. Not mutated.
        depth: Current recursion depth (0 for camera rays).
        settings: Render settings providing max_depth, bias, ior and the
            background color.
        stats: Optional counters updated during the trace.

    Returns:
        A new Vector3 holding the unclamped color.
    """
    if stats is not None:
        stats._record_call(depth)

    element, tnear = find_nearest(objects, origin, direction)
    if element is None:
        return settings.background_color()

    point = ray_at(Ray(origin, direction), tnear)
    normal = element.get_normal(point)

    # Ray travels inside the object: face the normal toward it
    inside = False
    if direction.dot(normal) > 0.0:
        normal.negate()
        inside = True

    material = element.get_material()
    color = Vector3(0.0, 0.0, 0.0)

    if (material.transparency > 0.0 or material.reflection > 0.0) and depth < settings.max_depth:
        facing_ratio = -direction.dot(normal)
        fresnel = fresnel_mix(facing_ratio)

        reflection_direction = reflect(direction, normal)
        reflection_origin = point.clone().add(normal.clone().multiply(settings.bias))
        if stats is not None:
            stats.reflection_rays += 1
        reflection = trace(
            objects, reflection_origin, reflection_direction, depth + 1, settings, stats
        )

        refraction = Vector3(0.0, 0.0, 0.0)
        if material.transparency > 0.0:
            eta = settings.ior if inside else 1.0 / settings.ior
            refraction_direction = refract(direction, normal, eta)
            if refraction_direction is None:
                # Total internal reflection: nothing is transmitted
                if stats is not None:
                    stats.total_internal_reflections += 1
            else:
                refraction_origin = point.clone().subtract(
                    normal.clone().multiply(settings.bias)
                )
                if stats is not None:
                    stats.refraction_rays += 1
                refraction = trace(
                    objects, refraction_origin, refraction_direction, depth + 1, settings, stats
                )

        reflected = reflection.multiply(fresnel)
        transmitted = refraction.multiply((1.0 - fresnel) * material.transparency)
        color = reflected.add(transmitted).product(material.surface_color)
        return color.add(material.emission_color)

    shadow_origin = point.clone().add(normal.clone().multiply(settings.bias))
    for light in objects:
        light_material = light.get_material()
        if not light_material.is_emissive():
            continue

        light_direction = light.center.clone().subtract(point).normalize()
        if stats is not None:
            stats.shadow_rays += 1
        if is_occluded(objects, light, shadow_origin, light_direction):
            continue

        light_ratio = max(0.0, normal.dot(light_direction))
        contribution = material.surface_color.clone().product(
            light_material.emission_color.clone().multiply(light_ratio)
        )
        color.add(contribution)

    return color.add(material.emission_color)
