"""Unit tests for the ray record and optics helpers.

Tests cover:
- Ray point evaluation
- Linear blend and Fresnel weight
- Mirror reflection
- Snell refraction and total internal reflection
"""

import math

from src.whitted.core.ray import FRESNEL_MIX, Ray, fresnel_mix, mix, ray_at, reflect, refract
from src.whitted.core.vector import Vector3


class TestRay:
    """Tests for the Ray dataclass."""

    def test_ray_at(self):
        """Test evaluating origin + t * direction."""
        ray = Ray(origin=Vector3(1.0, 2.0, 3.0), direction=Vector3(0.0, 0.0, -1.0))
        point = ray_at(ray, 4.0)
        assert point.to_tuple() == (1.0, 2.0, -1.0)

    def test_ray_at_does_not_mutate(self):
        """Test that evaluating a point leaves the ray unchanged."""
        ray = Ray(origin=Vector3(0.0, 0.0, 0.0), direction=Vector3(1.0, 0.0, 0.0))
        ray_at(ray, 10.0)
        assert ray.origin.to_tuple() == (0.0, 0.0, 0.0)
        assert ray.direction.to_tuple() == (1.0, 0.0, 0.0)


class TestMix:
    """Tests for mix() and fresnel_mix()."""

    def test_mix_endpoints(self):
        """Test that t = 0 gives a and t = 1 gives b."""
        assert mix(2.0, 4.0, 0.0) == 2.0
        assert mix(2.0, 4.0, 1.0) == 4.0

    def test_mix_midpoint(self):
        """Test the halfway blend."""
        assert mix(2.0, 4.0, 0.5) == 3.0

    def test_fresnel_head_on(self):
        """Test that a surface seen head-on reflects FRESNEL_MIX."""
        assert abs(fresnel_mix(1.0) - FRESNEL_MIX) < 1e-12

    def test_fresnel_grazing(self):
        """Test that a surface seen edge-on reflects fully."""
        assert abs(fresnel_mix(0.0) - 1.0) < 1e-12

    def test_fresnel_is_monotonic(self):
        """Test that reflectance drops as the surface turns toward the viewer."""
        values = [fresnel_mix(r / 10.0) for r in range(11)]
        assert all(a >= b for a, b in zip(values, values[1:]))


class TestReflect:
    """Tests for mirror reflection."""

    def test_reflect_straight_back(self):
        """Test that a ray hitting a surface head-on bounces straight back."""
        result = reflect(Vector3(0.0, -1.0, 0.0), Vector3(0.0, 1.0, 0.0))
        assert result.to_tuple() == (0.0, 1.0, 0.0)

    def test_reflect_at_45_degrees(self):
        """Test reflection of a diagonal ray off a floor."""
        incident = Vector3(1.0, -1.0, 0.0).normalize()
        result = reflect(incident, Vector3(0.0, 1.0, 0.0))
        assert abs(result.x - incident.x) < 1e-12
        assert abs(result.y + incident.y) < 1e-12
        assert abs(result.length() - 1.0) < 1e-12

    def test_reflect_does_not_mutate(self):
        """Test that the inputs are left untouched."""
        incident = Vector3(1.0, -1.0, 0.0)
        normal = Vector3(0.0, 1.0, 0.0)
        reflect(incident, normal)
        assert incident.to_tuple() == (1.0, -1.0, 0.0)
        assert normal.to_tuple() == (0.0, 1.0, 0.0)


class TestRefract:
    """Tests for Snell refraction."""

    def test_matched_index_passes_straight(self):
        """Test that eta = 1 leaves the direction unchanged."""
        incident = Vector3(1.0, -2.0, 0.0).normalize()
        result = refract(incident, Vector3(0.0, 1.0, 0.0), 1.0)
        assert result is not None
        assert abs(result.x - incident.x) < 1e-12
        assert abs(result.y - incident.y) < 1e-12

    def test_head_on_passes_straight(self):
        """Test that a ray along the normal is not bent."""
        result = refract(Vector3(0.0, 0.0, -1.0), Vector3(0.0, 0.0, 1.0), 1.0 / 1.1)
        assert result is not None
        assert abs(result.z + 1.0) < 1e-12
        assert abs(result.x) < 1e-12

    def test_bends_toward_normal_entering_denser_medium(self):
        """Test that entering a denser medium reduces the angle to the normal."""
        incident = Vector3(1.0, -1.0, 0.0).normalize()
        normal = Vector3(0.0, 1.0, 0.0)
        result = refract(incident, normal, 1.0 / 1.5)
        assert result is not None
        sin_in = abs(incident.x)
        sin_out = abs(result.x)
        assert sin_out < sin_in
        # Snell: sin_out = eta * sin_in
        assert abs(sin_out - sin_in / 1.5) < 1e-9

    def test_total_internal_reflection(self):
        """Test that a grazing ray leaving a dense medium has no refraction."""
        incident = Vector3(1.0, -0.1, 0.0).normalize()
        assert refract(incident, Vector3(0.0, 1.0, 0.0), 1.5) is None

    def test_result_is_unit_length(self):
        """Test that the transmitted direction is normalized."""
        incident = Vector3(0.3, -0.9, 0.2).normalize()
        result = refract(incident, Vector3(0.0, 1.0, 0.0), 1.0 / 1.1)
        assert result is not None
        assert abs(result.length() - 1.0) < 1e-12
        assert not math.isnan(result.x)
