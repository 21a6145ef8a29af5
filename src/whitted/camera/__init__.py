"""Camera module for primary ray generation.

Components:
    pinhole: Pinhole (perspective) camera at a fixed origin looking down -z

Pixel coordinates start at the top-left corner; each pixel gets exactly one
ray through its center.
"""

from .pinhole import PinholeCamera

__all__ = [
    "PinholeCamera",
]
