"""Renderer driving the tracer over every pixel of the frame.

This module provides a Renderer that:
- Generates one camera ray per pixel (no anti-aliasing)
- Traces it and clamps the color to 8-bit RGB
- Streams pixels to a frame buffer sink in row-major order
- Reports progress through callbacks or a generator
- Supports cancellation between row batches

The scene objects are snapshotted into a tuple when the renderer is created,
so a render never observes scene mutation.

Example:
    >>> from src.whitted.core.renderer import Renderer
    >>> from src.whitted.scene.reference import create_reference_scene
    >>>
    >>> scene, settings = create_reference_scene()
    >>> renderer = Renderer(scene, settings)
    >>> framebuffer = renderer.render()
    >>> framebuffer.pixels.shape
    (480, 640, 3)
"""

from __future__ import annotations

from collections.abc import Callable, Generator, Iterable

from src.whitted.camera.pinhole import PinholeCamera
from src.whitted.core.settings import RenderSettings
from src.whitted.core.tracer import TraceStats, trace
from src.whitted.core.vector import Vector3
from src.whitted.geometry.base import Intersectable
from src.whitted.preview.framebuffer import FrameBuffer, FrameBufferSink

# Type alias for progress callback
# Callback receives (rows_done, total_rows)
ProgressCallback = Callable[[int, int], None]

# Returns True when the render should stop
StopCondition = Callable[[], bool]


class RenderCancelled(RuntimeError):
    """Raised when a render is stopped before the last row."""

    def __init__(self, rows_done: int, total_rows: int) -> None:
        super().__init__(f"Render cancelled after {rows_done}/{total_rows} rows")
        self.rows_done = rows_done
        self.total_rows = total_rows


def _clamp_channel(value: float) -> int:
    """Clamp to [0, 1], scale to [0, 255] and round half up."""
    if value < 0.0:
        value = 0.0
    elif value > 1.0:
        value = 1.0
    return int(value * 255.0 + 0.5)


def to_rgb8(color: Vector3) -> tuple[int, int, int]:
    """Convert a traced color to an 8-bit RGB triple."""
    return (_clamp_channel(color.x), _clamp_channel(color.y), _clamp_channel(color.z))


class Renderer:
    """Renders a scene into a frame buffer sink.

    Attributes:
        settings: The render settings (frame size, camera, tracer constants).
        camera: The pinhole camera derived from settings.
        objects: Read-only snapshot of the scene objects.
        sink: Destination for finished pixels.
        stats: Trace counters accumulated across renders.
    """

    def __init__(
        self,
        scene: Iterable[Intersectable],
        settings: RenderSettings | None = None,
        sink: FrameBufferSink | None = None,
    ) -> None:
        """Initialize the renderer.

        Args:
            scene: A Scene or any iterable of intersectable objects.
            settings: Render settings. Defaults to RenderSettings().
            sink: Pixel destination. Defaults to a new FrameBuffer.
        """
        self.settings = settings if settings is not None else RenderSettings()
        self.camera = PinholeCamera.from_settings(self.settings)
        self.objects: tuple[Intersectable, ...] = tuple(scene)
        self.sink: FrameBufferSink = sink if sink is not None else FrameBuffer()
        self.stats = TraceStats()

    @property
    def width(self) -> int:
        return self.settings.width

    @property
    def height(self) -> int:
        return self.settings.height

    @property
    def framebuffer(self) -> FrameBuffer:
        """The sink, when it is a FrameBuffer.

        Raises:
            TypeError: If a custom sink is in use.
        """
        if not isinstance(self.sink, FrameBuffer):
            raise TypeError(f"Sink is {type(self.sink).__name__}, not a FrameBuffer")
        return self.sink

    def trace_pixel(self, x: int, y: int) -> Vector3:
        """Trace the primary ray of pixel (x, y) and return the raw color."""
        ray = self.camera.get_ray(x, y)
        return trace(
            self.objects,
            ray.origin,
            ray.direction,
            0,
            self.settings,
            self.stats,
        )

    def render_pixel(self, x: int, y: int) -> tuple[int, int, int]:
        """Render a single pixel to an 8-bit RGB triple.

        Args:
            x: Pixel column (0 = left).
            y: Pixel row (0 = top).
        """
        return to_rgb8(self.trace_pixel(x, y))

    def _render_row(self, y: int) -> None:
        for x in range(self.width):
            self.sink.write_pixel(x, y, self.render_pixel(x, y))

    def render_progressive(
        self,
        rows_per_batch: int = 1,
    ) -> Generator[tuple[int, int], None, None]:
        """Render the frame, yielding progress after each batch of rows.

        Calls sink.begin() before the first row and sink.finish() after the
        last one. Closing the generator early leaves the sink unfinished.

        Args:
            rows_per_batch: Number of rows to trace before each yield.

        Yields:
            Tuple of (rows_done, total_rows).

        Example:
            >>> for done, total in renderer.render_progressive(rows_per_batch=16):
            ...     print(f"Progress: {done}/{total} rows")
        """
        if rows_per_batch <= 0:
            raise ValueError(f"rows_per_batch must be positive, got {rows_per_batch}")

        total_rows = self.height
        self.sink.begin(self.width, self.height)

        y = 0
        while y < total_rows:
            batch_end = min(y + rows_per_batch, total_rows)
            for row in range(y, batch_end):
                self._render_row(row)
            y = batch_end
            yield (y, total_rows)

        self.sink.finish()

    def render(
        self,
        callback: ProgressCallback | None = None,
        rows_per_batch: int = 1,
        should_stop: StopCondition | None = None,
    ) -> FrameBufferSink:
        """Render the whole frame.

        Args:
            callback: Optional function called after each batch of rows with
                (rows_done, total_rows).
            rows_per_batch: Number of rows to trace between callbacks.
            should_stop: Optional function polled after each batch; returning
                True cancels the render.

        Returns:
            The sink holding the finished image.

        Raises:
            RenderCancelled: If should_stop returned True before the last row.
        """
        for rows_done, total_rows in self.render_progressive(rows_per_batch):
            if callback is not None:
                callback(rows_done, total_rows)
            if should_stop is not None and rows_done < total_rows and should_stop():
                raise RenderCancelled(rows_done, total_rows)
        return self.sink

    def __repr__(self) -> str:
        return (
            f"Renderer(width={self.width}, height={self.height}, "
            f"objects={len(self.objects)})"
        )
