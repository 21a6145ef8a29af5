"""Preview module for output and visualization.

This module handles rendering output and preview:

Components:
    framebuffer: FrameBufferSink protocol and the NumPy-backed FrameBuffer
    export: PNG and packed RGBA export utilities
    display: Matplotlib-based preview display
    interactive: Taichi GGUI-based interactive preview window

Example:
    >>> from src.whitted.preview import save_png, show_preview
    >>> from src.whitted.core.renderer import Renderer
    >>>
    >>> framebuffer = Renderer(scene, settings).render()
    >>> show_preview(framebuffer)
    >>> save_png(framebuffer, "output.png")

For interactive GGUI preview:
    >>> from src.whitted.preview import InteractivePreview
    >>> preview = InteractivePreview(640, 480)
    >>> preview.run_progressive(Renderer(scene, settings))
"""

from src.whitted.preview.display import difference_image, show_comparison, show_preview
from src.whitted.preview.export import (
    compute_rmse,
    image_to_uint8,
    save_packed_rgba,
    save_png,
    save_png_from_array,
)
from src.whitted.preview.framebuffer import FrameBuffer, FrameBufferSink
from src.whitted.preview.interactive import InteractivePreview

__all__ = [
    # Frame buffer
    "FrameBuffer",
    "FrameBufferSink",
    # Interactive preview
    "InteractivePreview",
    # Display functions
    "show_preview",
    "show_comparison",
    "difference_image",
    # Export functions
    "save_png",
    "save_png_from_array",
    "save_packed_rgba",
    "image_to_uint8",
    "compute_rmse",
]
