"""Core rendering module.

This module contains the fundamental building blocks for ray tracing:

Components:
    vector: Mutable Vector3 with chaining operations
    ray: Ray record, reflection, refraction and the Fresnel blend
    settings: Configurable render parameters
    tracer: The recursive trace() function and trace statistics
    renderer: Per-pixel render loop writing to a frame buffer sink

The tracer is plain recursion over a read-only tuple of scene objects;
each pixel's ray tree is independent of every other pixel.
"""

from .ray import FRESNEL_MIX, Ray, fresnel_mix, mix, ray_at, reflect, refract
from .settings import RenderSettings
from .tracer import TraceStats, find_nearest, is_occluded, trace
from .vector import Vector3

# Note: renderer is NOT imported here to avoid circular imports with preview.
# Import directly from src.whitted.core.renderer when needed.

__all__ = [
    "Vector3",
    "Ray",
    "ray_at",
    "mix",
    "fresnel_mix",
    "reflect",
    "refract",
    "FRESNEL_MIX",
    "RenderSettings",
    "trace",
    "find_nearest",
    "is_occluded",
    "TraceStats",
]
