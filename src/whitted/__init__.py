"""Python implementation of a recursive Whitted-style ray tracer.

This package renders scenes of spheres with:
- Mirror reflection and refraction with an empirical Fresnel blend
- Emissive spheres acting as point lights
- Binary (hard) shadows
- Streaming output to a frame buffer sink

Subpackages:
    core: Vector algebra, ray helpers, settings, the tracer and the renderer
    geometry: Material, hit record, intersectable protocol and the sphere
    camera: Pinhole camera ray generation
    scene: Scene construction, serialization and the reference scene
    preview: Frame buffer, PNG export and preview windows
"""

__version__ = "0.1.0"
