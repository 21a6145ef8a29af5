"""Geometry module for scene primitives.

Components:
    base: Material, HitRecord and the Intersectable capability protocol
    sphere: Sphere primitive and the stable quadratic solver

Ray-object intersection follows the pattern:
    hit = HitRecord()
    if obj.intersect(origin, direction, hit):
        point = origin + direction * hit.t0
"""

from .base import INFINITY, HitRecord, Intersectable, Material
from .sphere import Sphere, solve_quadratic

__all__ = [
    "Material",
    "HitRecord",
    "Intersectable",
    "INFINITY",
    "Sphere",
    "solve_quadratic",
]
