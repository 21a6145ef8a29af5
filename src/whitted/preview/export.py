"""Image export utilities for rendered frames.

This module provides functions for saving rendered frames to files and
comparing renders.

Supported formats:
    - PNG (8-bit sRGB via Pillow)
    - Raw packed RGBA words (little-endian 0xAABBGGRR)

Example:
    >>> from src.whitted.preview.export import save_png
    >>> from src.whitted.core.renderer import Renderer
    >>>
    >>> renderer = Renderer(scene, settings)
    >>> save_png(renderer.render(), "output.png")
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from src.whitted.preview.framebuffer import FrameBuffer


def image_to_uint8(image: npt.NDArray[np.generic]) -> npt.NDArray[np.uint8]:
    """Convert an image array to uint8 for display/export.

    Float arrays are treated as [0, 1] and clamped; integer arrays are
    clamped to [0, 255].

    Args:
        image: Image array of shape (H, W, 3).

    Returns:
        8-bit image array of shape (H, W, 3) with dtype uint8.

    Raises:
        ValueError: If the array is not (H, W, 3).
    """
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected an (H, W, 3) image, got shape {image.shape}")

    if np.issubdtype(image.dtype, np.floating):
        scaled = np.clip(image, 0.0, 1.0) * 255.0 + 0.5
        return scaled.astype(np.uint8)
    return np.clip(image, 0, 255).astype(np.uint8)


def save_png_from_array(image: npt.NDArray[np.generic], filepath: str | Path) -> Path:
    """Save an image array as a PNG file.

    Args:
        image: Image array of shape (H, W, 3), float in [0, 1] or uint8.
        filepath: Output file path (should end in .png).

    Returns:
        The path written.
    """
    output = Path(filepath)
    pil_image = PILImage.fromarray(image_to_uint8(image), mode="RGB")
    pil_image.save(output)
    return output


def save_png(framebuffer: FrameBuffer, filepath: str | Path) -> Path:
    """Save a rendered frame buffer as a PNG file.

    Args:
        framebuffer: The FrameBuffer to save.
        filepath: Output file path (should end in .png).

    Returns:
        The path written.

    Example:
        >>> framebuffer = Renderer(scene, settings).render()
        >>> save_png(framebuffer, "output.png")
    """
    return save_png_from_array(framebuffer.to_numpy(), filepath)


def save_packed_rgba(framebuffer: FrameBuffer, filepath: str | Path) -> Path:
    """Write the frame as raw little-endian 32-bit RGBA words, row by row.

    Returns:
        The path written.
    """
    output = Path(filepath)
    packed = framebuffer.to_packed_rgba().astype("<u4")
    output.write_bytes(packed.tobytes())
    return output


def compute_rmse(
    image_a: npt.NDArray[np.generic],
    image_b: npt.NDArray[np.generic],
) -> float:
    """Compute root mean squared error between two images.

    Args:
        image_a: First image array.
        image_b: Second image array (must have same shape as image_a).

    Returns:
        RMSE value (lower is more similar).

    Raises:
        ValueError: If image shapes don't match.
    """
    if image_a.shape != image_b.shape:
        raise ValueError(
            f"Image shapes must match: {image_a.shape} vs {image_b.shape}"
        )

    diff = image_a.astype(np.float64) - image_b.astype(np.float64)
    return float(np.sqrt(np.mean(diff**2)))
