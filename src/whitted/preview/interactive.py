"""Live Taichi GGUI window for watching a render fill in.

This module provides an interactive preview window that shows a frame while
it is being traced, using Taichi's ti.ui.Window and canvas system.

Features:
    - Row-by-row display of a render in progress
    - Taichi GGUI-based window (GPU-accelerated presentation)
    - Support for updating display from numpy arrays or frame buffers
    - Reactive re-rendering of the reference scene when sliders change
    - PNG export button

Example:
    >>> from src.whitted.core.renderer import Renderer
    >>> from src.whitted.preview.interactive import InteractivePreview
    >>>
    >>> renderer = Renderer(scene, settings)
    >>> preview = InteractivePreview(settings.width, settings.height)
    >>> preview.run_progressive(renderer, rows_per_frame=8)

Reactive Rendering Example:
    >>> from src.whitted.scene.reference import ReferenceSceneParams
    >>>
    >>> preview = InteractivePreview(320, 240)
    >>> preview.set_params(ReferenceSceneParams(light_emission=(4.0, 4.0, 4.0)))
    >>> preview.run_reactive()  # Renders until window closed
"""

from __future__ import annotations

import copy
import os
from collections.abc import Generator
from datetime import datetime
from typing import TYPE_CHECKING

import numpy as np
import taichi as ti

if TYPE_CHECKING:
    import numpy.typing as npt

    from src.whitted.core.renderer import Renderer
    from src.whitted.preview.framebuffer import FrameBuffer
    from src.whitted.scene.reference import ReferenceSceneParams


class InteractivePreview:
    """Interactive preview window using Taichi GGUI.

    This class wraps ti.ui.Window to display rendered frames. It manages the
    window, canvas, and display buffer.

    Attributes:
        width: Window width in pixels.
        height: Window height in pixels.
        display_image: Taichi field storing the display image (RGB float).
    """

    def __init__(
        self,
        width: int,
        height: int,
        *,
        title: str = "Whitted Ray Tracer - Interactive Preview",
    ) -> None:
        """Set up the display buffer; the window itself opens lazily.

        Args:
            width: Window width in pixels.
            height: Window height in pixels.
            title: Window title.

        Note:
            Taichi must be initialized before construction.
        """
        self.width = width
        self.height = height
        self._title = title
        self._is_initialized = False

        self._window: ti.ui.Window | None = None
        self._canvas: ti.ui.Canvas | None = None
        self._renderer: Renderer | None = None
        self._pending_params: ReferenceSceneParams | None = None
        self._current_params: ReferenceSceneParams | None = None
        self._rows_done = 0
        self._rows_per_frame = 8

        # Taichi fields are indexed (x, y) with y up
        self.display_image: ti.MatrixField = ti.Vector.field(
            3, dtype=ti.f32, shape=(width, height)
        )

    def _initialize_window(self) -> None:
        if self._is_initialized:
            return

        self._window = ti.ui.Window(
            name=self._title,
            res=(self.width, self.height),
            vsync=True,
        )
        self._canvas = self._window.get_canvas()
        self._is_initialized = True

    @property
    def window(self) -> ti.ui.Window:
        """The GGUI window, created on first access."""
        if self._window is None:
            self._initialize_window()
        assert self._window is not None
        return self._window

    @property
    def canvas(self) -> ti.ui.Canvas:
        if self._canvas is None:
            self._initialize_window()
        assert self._canvas is not None
        return self._canvas

    # =========================================================================
    # Display Buffer
    # =========================================================================

    def update_image(self, image: npt.NDArray[np.float32]) -> None:
        """Copy a top-down RGB image into the display buffer.

        Args:
            image: NumPy array of shape (height, width, 3) in [0, 1], row 0
                at the top.

        Raises:
            ValueError: If image shape doesn't match (height, width, 3).
        """
        expected_shape = (self.height, self.width, 3)
        if image.shape != expected_shape:
            raise ValueError(
                f"Image shape {image.shape} doesn't match expected {expected_shape}"
            )

        # NumPy images are (height, width) with the origin at the top-left;
        # Taichi fields are (width, height) with the origin at the bottom-left
        image_transposed = np.ascontiguousarray(
            np.transpose(np.flipud(image), (1, 0, 2)).astype(np.float32)
        )
        self.display_image.from_numpy(image_transposed)

    def update_from_framebuffer(self, framebuffer: FrameBuffer) -> None:
        """Update the display image from a frame buffer.

        Raises:
            ValueError: If the frame buffer size doesn't match the window.
        """
        self.update_image(framebuffer.to_float())

    def is_running(self) -> bool:
        return self.window.running

    def show_frame(self) -> None:
        """Present the display buffer once.

        Call this in a loop for continuous updates.
        """
        self.canvas.set_image(self.display_image)
        self.window.show()

    def run(self) -> None:
        """Show the current display image until the window is closed."""
        self._initialize_window()

        while self.is_running():
            self.show_frame()

    def close(self) -> None:
        """Stop the window loop.

        After calling this, the window cannot be reopened.
        """
        if self._window is not None:
            self._window.running = False

    @staticmethod
    def is_display_available() -> bool:
        """Guess whether a GUI window can be opened here.

        Returns:
            False on headless Linux and on macOS over plain SSH.
        """
        display = os.environ.get("DISPLAY")
        wayland = os.environ.get("WAYLAND_DISPLAY")

        if os.name == "nt":
            return True

        # macOS has a display unless reached over SSH without X forwarding
        if os.uname().sysname == "Darwin":
            ssh_connection = os.environ.get("SSH_CONNECTION")
            if ssh_connection and not display:
                return False
            return True

        return bool(display or wayland)

    # =========================================================================
    # Progressive Rendering Support
    # =========================================================================

    def run_progressive(self, renderer: Renderer, rows_per_frame: int = 8) -> None:
        """Render while displaying, then keep the window open.

        Each window frame traces rows_per_frame more rows and shows the
        partial image. Closing the window early abandons the render.

        Args:
            renderer: A Renderer whose sink is a FrameBuffer matching the
                window size.
            rows_per_frame: Rows to trace between window frames.
        """
        self._initialize_window()
        self._renderer = renderer
        framebuffer = renderer.framebuffer

        progress = renderer.render_progressive(rows_per_frame)
        finished = False
        while self.is_running():
            if not finished:
                finished = self._advance(progress)
                self.update_from_framebuffer(framebuffer)
            self.show_frame()

        if not finished:
            progress.close()

    def _advance(self, progress: Generator[tuple[int, int], None, None]) -> bool:
        """Trace one more batch; return True once the render is complete."""
        try:
            self._rows_done, _ = next(progress)
        except StopIteration:
            return True
        return False

    def get_rows_done(self) -> int:
        """Get the number of rows traced in the current render."""
        return self._rows_done

    def get_renderer(self) -> Renderer | None:
        return self._renderer

    # =========================================================================
    # Reactive Rendering Support
    # =========================================================================

    def set_params(self, params: ReferenceSceneParams) -> None:
        """Set the reference scene parameters for reactive rendering.

        When the parameters differ from the ones the current render uses, the
        scene is rebuilt and the render restarts on the next window frame.
        """
        # Deep copy to prevent external mutation
        self._pending_params = copy.deepcopy(params)

    def _params_changed(self) -> bool:
        if self._pending_params is None:
            return False
        if self._current_params is None:
            return True
        return self._pending_params != self._current_params

    def _rebuild_renderer(self) -> Generator[tuple[int, int], None, None]:
        """Rebuild the reference scene and start a fresh progressive render."""
        from src.whitted.core.renderer import Renderer
        from src.whitted.core.settings import RenderSettings
        from src.whitted.scene.reference import ReferenceSceneParams, create_reference_scene

        params = self._pending_params if self._pending_params is not None else ReferenceSceneParams()
        settings = RenderSettings(width=self.width, height=self.height)
        scene, settings = create_reference_scene(params, settings)

        self._renderer = Renderer(scene, settings)
        self._current_params = copy.deepcopy(params)
        self._rows_done = 0
        return self._renderer.render_progressive(self._rows_per_frame)

    def run_reactive(self, rows_per_frame: int = 8) -> None:
        """Run the reactive rendering loop on the reference scene.

        On each frame:
            - Reads slider values from the GUI panel
            - Restarts the render if any parameter changed
            - Traces rows_per_frame more rows of the current render
            - Shows the partial image

        GUI Controls:
            - Light Intensity slider (0.0 to 10.0)
            - Glass Transparency slider (0.0 to 1.0)
            - Export PNG button

        Args:
            rows_per_frame: Rows to trace between window frames.
        """
        from src.whitted.scene.reference import ReferenceSceneParams

        self._initialize_window()
        self._rows_per_frame = rows_per_frame

        if self._pending_params is None:
            self._pending_params = ReferenceSceneParams()

        self._slider_intensity: float = self._pending_params.light_emission[0]
        self._slider_transparency: float = self._pending_params.glass_transparency

        progress = self._rebuild_renderer()
        finished = False

        while self.is_running():
            if self._params_changed():
                progress.close()
                progress = self._rebuild_renderer()
                finished = False

            if not finished:
                finished = self._advance(progress)
                assert self._renderer is not None
                self.update_from_framebuffer(self._renderer.framebuffer)

            self._draw_gui_panel()
            self.show_frame()

        if not finished:
            progress.close()

    def _draw_gui_panel(self) -> None:
        """Draw the scene controls and export button."""
        from src.whitted.scene.reference import ReferenceSceneParams

        with self.window.GUI.sub_window("Scene Controls", 0.02, 0.02, 0.3, 0.16) as gui:
            new_intensity = gui.slider_float(
                "Light", self._slider_intensity, minimum=0.0, maximum=10.0
            )
            new_transparency = gui.slider_float(
                "Glass", self._slider_transparency, minimum=0.0, maximum=1.0
            )
            export_clicked = gui.button("Export PNG")

        intensity_changed = abs(new_intensity - self._slider_intensity) > 1e-6
        transparency_changed = abs(new_transparency - self._slider_transparency) > 1e-6

        if intensity_changed or transparency_changed:
            self._slider_intensity = new_intensity
            self._slider_transparency = new_transparency
            assert self._pending_params is not None
            self._pending_params = ReferenceSceneParams(
                light_emission=(new_intensity, new_intensity, new_intensity),
                ground_color=self._pending_params.ground_color,
                glass_transparency=new_transparency,
            )

        if export_clicked:
            self._export_png()

    def _export_png(self) -> None:
        """Export the current frame to a timestamped PNG file."""
        from src.whitted.preview.export import save_png

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filename = f"render_{timestamp}.png"

        renderer = self.get_renderer()
        if renderer is not None:
            save_png(renderer.framebuffer, filename)
            print(f"Exported: {filename} ({self._rows_done}/{self.height} rows)")
        else:
            print("Nothing to export yet")
