"""Reference scene configuration.

This module provides a factory for the classic six-sphere demo scene:

- A huge gray sphere acting as the ground plane
- A red sphere far back that is both reflective and mostly transparent
- Three reflective, opaque spheres (gold, light blue, magenta)
- One emissive sphere high above the scene, the only light source

The camera sits at the origin looking down -z; every sphere lies in front of
it.

Example:
    >>> from src.whitted.scene.reference import create_reference_scene
    >>> scene, settings = create_reference_scene()
    >>> len(scene), settings.width, settings.height
    (6, 640, 480)
"""

from __future__ import annotations

from dataclasses import dataclass

from src.whitted.core.settings import RenderSettings
from src.whitted.scene.manager import Scene

# =============================================================================
# Reference Scene Parameters
# =============================================================================


@dataclass
class ReferenceSceneParams:
    """Parameters for customizing the reference scene.

    Attributes:
        light_emission: RGB emission of the light sphere. Default (3, 3, 3).
        ground_color: RGB surface color of the ground sphere.
        glass_transparency: Transparency of the red sphere in [0, 1].
    """

    light_emission: tuple[float, float, float] = (3.0, 3.0, 3.0)
    ground_color: tuple[float, float, float] = (0.20, 0.20, 0.20)
    glass_transparency: float = 0.9


# =============================================================================
# Reference Scene Constants
# =============================================================================

GROUND_CENTER = (0.0, -10004.0, -20.0)
GROUND_RADIUS = 10000.0

LIGHT_CENTER = (0.0, 20.0, -30.0)
LIGHT_RADIUS = 3.0

# Channels above 1 are intentional: they brighten the filtered reflections
RED_GLASS_COLOR = (2.00, 0.30, 0.34)
GOLD_COLOR = (0.90, 0.76, 0.46)
LIGHT_BLUE_COLOR = (0.65, 0.77, 0.97)
MAGENTA_COLOR = (1.40, 0.00, 2.55)


# =============================================================================
# Reference Scene Factory
# =============================================================================


def create_reference_scene(
    params: ReferenceSceneParams | None = None,
    settings: RenderSettings | None = None,
) -> tuple[Scene, RenderSettings]:
    """Create the reference scene and its render settings.

    Args:
        params: Optional ReferenceSceneParams. Defaults to ReferenceSceneParams().
        settings: Optional render settings. Defaults to RenderSettings()
            (640x480, 40 degree field of view, depth 2).

    Returns:
        A tuple of (Scene, RenderSettings).
    """
    if params is None:
        params = ReferenceSceneParams()
    if settings is None:
        settings = RenderSettings()

    scene = Scene()

    # Ground
    scene.add_sphere(GROUND_CENTER, GROUND_RADIUS, surface_color=params.ground_color)

    # Spheres
    scene.add_sphere(
        (-1.0, 0.0, -60.0),
        4.0,
        surface_color=RED_GLASS_COLOR,
        reflection=1.0,
        transparency=params.glass_transparency,
    )
    scene.add_sphere((5.0, -1.0, -15.0), 2.0, surface_color=GOLD_COLOR, reflection=1.0)
    scene.add_sphere((5.0, 0.0, -35.0), 3.0, surface_color=LIGHT_BLUE_COLOR, reflection=1.0)
    scene.add_sphere((-5.5, 0.0, -25.0), 3.0, surface_color=MAGENTA_COLOR, reflection=1.0)

    # Light
    scene.add_light(LIGHT_CENTER, LIGHT_RADIUS, emission_color=params.light_emission)

    return scene, settings
