"""Pytest configuration for ray tracer tests.

This module provides shared fixtures for all test modules, including
Taichi initialization (needed by the interactive preview display buffer),
which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts.
    """
    ti.init(arch=ti.cpu, random_seed=42)
    yield


@pytest.fixture
def ground_only_scene():
    """A single huge gray sphere below the camera and no light."""
    from src.whitted.scene.manager import Scene

    scene = Scene()
    scene.add_sphere((0.0, -10004.0, -20.0), 10000.0, surface_color=(0.2, 0.2, 0.2))
    return scene


@pytest.fixture
def lit_sphere_scene():
    """An opaque diffuse sphere straight ahead with a light behind the camera.

    The camera ray (0, 0, -1) hits the sphere head-on at (0, 0, -16), where
    the normal points straight at the light.
    """
    from src.whitted.scene.manager import Scene

    scene = Scene()
    scene.add_sphere((0.0, 0.0, -20.0), 4.0, surface_color=(0.4, 0.4, 0.4))
    scene.add_light((0.0, 0.0, 10.0), 1.0, emission_color=(1.0, 1.0, 1.0))
    return scene


@pytest.fixture
def oblique_light_scene():
    """Same sphere as lit_sphere_scene, lit from 45 degrees above."""
    from src.whitted.scene.manager import Scene

    scene = Scene()
    scene.add_sphere((0.0, 0.0, -20.0), 4.0, surface_color=(0.4, 0.4, 0.4))
    scene.add_light((0.0, 10.0, -6.0), 1.0, emission_color=(1.0, 1.0, 1.0))
    return scene
