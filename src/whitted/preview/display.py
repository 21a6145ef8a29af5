"""Matplotlib-based preview display for rendered frames.

Features:
    - Static preview window for a finished frame buffer
    - Side-by-side comparison with an amplified difference view

Example:
    >>> from src.whitted.preview.display import show_preview
    >>> framebuffer = Renderer(scene, settings).render()
    >>> show_preview(framebuffer)
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

from src.whitted.preview.framebuffer import FrameBuffer


def difference_image(
    image_a: npt.NDArray[np.float32],
    image_b: npt.NDArray[np.float32],
    scale: float = 10.0,
) -> npt.NDArray[np.float32]:
    """Absolute per-pixel difference, amplified and clamped to [0, 1].

    Args:
        image_a: First image in [0, 1], shape (H, W, 3).
        image_b: Second image in [0, 1], same shape.
        scale: Amplification factor.

    Raises:
        ValueError: If image shapes don't match.
    """
    if image_a.shape != image_b.shape:
        raise ValueError(
            f"Image shapes must match: {image_a.shape} vs {image_b.shape}"
        )
    diff = np.abs(image_a.astype(np.float64) - image_b.astype(np.float64))
    return np.clip(diff * scale, 0.0, 1.0).astype(np.float32)


def show_preview(
    framebuffer: FrameBuffer,
    *,
    title: str | None = None,
    figsize: tuple[float, float] = (8, 6),
    block: bool = True,
) -> None:
    """Display a rendered frame as a Matplotlib figure.

    Args:
        framebuffer: The FrameBuffer to display.
        title: Custom title (default shows the frame size).
        figsize: Figure size in inches (width, height).
        block: Whether to block execution until figure is closed.
    """
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots(1, 1, figsize=figsize)
    ax.imshow(framebuffer.to_numpy())
    ax.axis("off")

    if title is None:
        title = f"Render Preview - {framebuffer.width}x{framebuffer.height}"
    ax.set_title(title)

    plt.tight_layout()
    plt.show(block=block)


def show_comparison(
    image_a: npt.NDArray[np.float32],
    image_b: npt.NDArray[np.float32],
    *,
    labels: tuple[str, str] = ("A", "B"),
    diff_scale: float = 10.0,
    figsize: tuple[float, float] = (16, 6),
    block: bool = True,
) -> float:
    """Show two renders next to each other and their amplified difference.

    Useful for checking a change to the tracer against a saved image.

    Returns:
        RMSE between the two images.
    """
    import matplotlib.pyplot as plt

    from src.whitted.preview.export import compute_rmse

    rmse = compute_rmse(image_a, image_b)
    panels = (
        (image_a, labels[0]),
        (image_b, labels[1]),
        (difference_image(image_a, image_b, diff_scale), f"|A - B| x{diff_scale:g}, RMSE {rmse:.6f}"),
    )

    fig, axes = plt.subplots(1, len(panels), figsize=figsize)
    for ax, (image, label) in zip(axes, panels):
        ax.imshow(image)
        ax.set_title(label)
        ax.axis("off")

    fig.tight_layout()
    plt.show(block=block)
    return rmse
