"""Tests for the renderer.

This module tests the Renderer class including:
- Color quantization
- Full frame rendering into a frame buffer
- Progress callbacks and generators
- Cancellation
- Custom frame buffer sinks

Frames are kept tiny since every pixel is traced in pure Python.
"""

import pytest

from src.whitted.core.renderer import RenderCancelled, Renderer, to_rgb8
from src.whitted.core.settings import RenderSettings
from src.whitted.core.tracer import trace
from src.whitted.core.vector import Vector3
from src.whitted.preview.framebuffer import FrameBuffer, FrameBufferSink

WHITE = (255, 255, 255)
BLACK = (0, 0, 0)


class RecordingSink:
    """A sink that remembers every call."""

    def __init__(self):
        self.calls = []
        self.pixels = {}

    def begin(self, width, height):
        self.calls.append(("begin", width, height))

    def write_pixel(self, x, y, rgb):
        self.pixels[(x, y)] = rgb

    def finish(self):
        self.calls.append(("finish",))


class TestToRgb8:
    """Tests for color quantization."""

    def test_overbright_clamps_to_white(self):
        """Test that channels above 1 clamp to 255."""
        assert to_rgb8(Vector3(2.0, 2.0, 2.0)) == WHITE

    def test_negative_clamps_to_black(self):
        """Test that negative channels clamp to 0."""
        assert to_rgb8(Vector3(-1.0, 0.0, -0.5)) == BLACK

    def test_rounds_half_up(self):
        """Test that 0.5 maps to 128."""
        assert to_rgb8(Vector3(0.5, 0.0, 1.0)) == (128, 0, 255)

    def test_regular_value(self):
        """Test a mid-range value."""
        assert to_rgb8(Vector3(0.4, 0.4, 0.4)) == (102, 102, 102)


class TestRendererInit:
    """Tests for Renderer construction."""

    def test_defaults(self, lit_sphere_scene):
        """Test default settings and sink."""
        renderer = Renderer(lit_sphere_scene)
        assert renderer.width == 640
        assert renderer.height == 480
        assert isinstance(renderer.sink, FrameBuffer)
        assert renderer.stats.trace_calls == 0

    def test_objects_are_snapshotted(self, lit_sphere_scene):
        """Test that later scene edits do not reach the renderer."""
        renderer = Renderer(lit_sphere_scene, RenderSettings(width=4, height=4))
        lit_sphere_scene.add_sphere((0.0, 0.0, -5.0), 1.0, surface_color=(1.0, 1.0, 1.0))
        assert len(renderer.objects) == 2
        assert isinstance(renderer.objects, tuple)

    def test_accepts_plain_sequence(self, lit_sphere_scene):
        """Test that any iterable of objects can be rendered."""
        renderer = Renderer(list(lit_sphere_scene), RenderSettings(width=2, height=2))
        assert len(renderer.objects) == 2

    def test_framebuffer_requires_framebuffer_sink(self, lit_sphere_scene):
        """Test that a custom sink is not reported as a FrameBuffer."""
        renderer = Renderer(lit_sphere_scene, RenderSettings(width=2, height=2), RecordingSink())
        with pytest.raises(TypeError, match="RecordingSink"):
            renderer.framebuffer


class TestRendererOutput:
    """Tests for rendered pixels."""

    def test_empty_scene_is_white(self):
        """Test that the overbright background renders white everywhere."""
        settings = RenderSettings(width=4, height=3)
        framebuffer = Renderer((), settings).render()
        assert (framebuffer.to_numpy() == 255).all()
        assert framebuffer.finished

    def test_ground_without_light(self, ground_only_scene):
        """Test sky on top, unlit ground at the bottom, nothing in between."""
        settings = RenderSettings(width=16, height=12)
        framebuffer = Renderer(ground_only_scene, settings).render()
        pixels = framebuffer.to_numpy()

        for y in range(12):
            for x in range(16):
                assert framebuffer.get_pixel(x, y) in (WHITE, BLACK)
        assert (pixels[0] == 255).all()
        assert (pixels[-1] == 0).all()

    def test_lit_sphere_center_pixel(self, lit_sphere_scene):
        """Test the center of a head-on lit sphere."""
        renderer = Renderer(lit_sphere_scene, RenderSettings(width=11, height=11))
        r, g, b = renderer.render_pixel(5, 5)
        assert abs(r - 102) <= 1
        assert r == g == b

    def test_render_pixel_matches_full_render(self, oblique_light_scene):
        """Test that render_pixel agrees with render()."""
        settings = RenderSettings(width=9, height=7)
        renderer = Renderer(oblique_light_scene, settings)
        framebuffer = renderer.render()
        for x, y in [(0, 0), (4, 3), (8, 6)]:
            assert framebuffer.get_pixel(x, y) == renderer.render_pixel(x, y)

    def test_trace_pixel_follows_camera_ray(self, oblique_light_scene):
        """Test that a pixel is the trace of its camera ray."""
        settings = RenderSettings(width=9, height=7)
        renderer = Renderer(oblique_light_scene, settings)
        ray = renderer.camera.get_ray(4, 3)
        expected = trace(renderer.objects, ray.origin, ray.direction, settings=settings)
        assert renderer.trace_pixel(4, 3) == expected
        assert renderer.render_pixel(4, 3) == to_rgb8(expected)

    def test_primary_ray_count(self, lit_sphere_scene):
        """Test that every pixel traces exactly one primary ray."""
        renderer = Renderer(lit_sphere_scene, RenderSettings(width=6, height=5))
        renderer.render()
        assert renderer.stats.primary_rays == 30

    def test_deterministic(self, oblique_light_scene):
        """Test that two renders of the same scene are identical."""
        settings = RenderSettings(width=8, height=6)
        first = Renderer(oblique_light_scene, settings).render().to_numpy()
        second = Renderer(oblique_light_scene, settings).render().to_numpy()
        assert (first == second).all()


class TestRendererProgress:
    """Tests for callbacks, generators and cancellation."""

    def test_callback_receives_batches(self):
        """Test progress reports after each batch of rows."""
        updates = []
        renderer = Renderer((), RenderSettings(width=3, height=10))
        renderer.render(callback=lambda done, total: updates.append((done, total)), rows_per_batch=4)
        assert updates == [(4, 10), (8, 10), (10, 10)]

    def test_progressive_generator(self):
        """Test that the generator yields one update per row by default."""
        renderer = Renderer((), RenderSettings(width=2, height=3))
        assert list(renderer.render_progressive()) == [(1, 3), (2, 3), (3, 3)]
        assert renderer.framebuffer.finished

    def test_invalid_batch_size(self):
        """Test that non-positive batch sizes are rejected."""
        renderer = Renderer((), RenderSettings(width=2, height=2))
        with pytest.raises(ValueError, match="rows_per_batch"):
            renderer.render(rows_per_batch=0)

    def test_cancellation(self):
        """Test that should_stop cancels between batches."""
        renderer = Renderer((), RenderSettings(width=2, height=8))
        with pytest.raises(RenderCancelled) as excinfo:
            renderer.render(rows_per_batch=2, should_stop=lambda: True)
        assert excinfo.value.rows_done == 2
        assert excinfo.value.total_rows == 8
        assert not renderer.framebuffer.finished

    def test_stop_after_last_row_is_ignored(self):
        """Test that a finished render is never reported as cancelled."""
        renderer = Renderer((), RenderSettings(width=2, height=2))
        sink = renderer.render(rows_per_batch=2, should_stop=lambda: True)
        assert sink.finished

    def test_custom_sink(self, lit_sphere_scene):
        """Test that pixels stream to any FrameBufferSink."""
        sink = RecordingSink()
        assert isinstance(sink, FrameBufferSink)
        renderer = Renderer(lit_sphere_scene, RenderSettings(width=3, height=2), sink)
        result = renderer.render()
        assert result is sink
        assert sink.calls == [("begin", 3, 2), ("finish",)]
        assert len(sink.pixels) == 6
        assert all(0 <= c <= 255 for rgb in sink.pixels.values() for c in rgb)
