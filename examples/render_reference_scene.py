#!/usr/bin/env python3
"""Render the reference scene, or a scene loaded from a JSON file.

This script demonstrates end-to-end rendering: it builds (or loads) the
scene, traces every pixel, and saves the frame as a PNG.

Usage:
    python -m examples.render_reference_scene [options]

Options:
    --scene PATH          JSON scene file (default: built-in reference scene)
    --width WIDTH         Image width in pixels
    --height HEIGHT       Image height in pixels
    --fov DEGREES         Vertical field of view
    --max-depth DEPTH     Maximum reflection/refraction depth
    --output OUTPUT       Output file path (default: reference_scene.png)
    --save-scene PATH     Also write the scene and settings as JSON
    --rows-per-update N   Rows per progress update (default: 16)
    --show                Open a Matplotlib preview when done
    --quiet               Suppress progress output

Example:
    python -m examples.render_reference_scene --width 320 --height 240
"""

from __future__ import annotations

import argparse
import dataclasses
import sys
import time
from pathlib import Path

# Ensure the project root is in the Python path for direct execution
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a scene of spheres with recursive ray tracing.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--scene", type=str, default=None, help="JSON scene file")
    parser.add_argument("--width", type=int, default=None, help="Image width in pixels")
    parser.add_argument("--height", type=int, default=None, help="Image height in pixels")
    parser.add_argument("--fov", type=float, default=None, help="Vertical field of view")
    parser.add_argument(
        "--max-depth",
        type=int,
        default=None,
        help="Maximum reflection/refraction depth",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="reference_scene.png",
        help="Output file path (default: reference_scene.png)",
    )
    parser.add_argument(
        "--save-scene",
        type=str,
        default=None,
        help="Also write the scene and settings as JSON",
    )
    parser.add_argument(
        "--rows-per-update",
        type=int,
        default=16,
        help="Rows per progress update (default: 16)",
    )
    parser.add_argument("--show", action="store_true", help="Open a preview when done")
    parser.add_argument("--quiet", action="store_true", help="Suppress progress output")
    return parser.parse_args(argv)


def build_scene(args: argparse.Namespace):
    """Load or create the scene and apply command-line overrides.

    Returns:
        Tuple of (Scene, RenderSettings).
    """
    from src.whitted.scene.manager import load_scene
    from src.whitted.scene.reference import create_reference_scene

    if args.scene is not None:
        scene, settings = load_scene(args.scene)
    else:
        scene, settings = create_reference_scene()

    overrides = {
        "width": args.width,
        "height": args.height,
        "vfov": args.fov,
        "max_depth": args.max_depth,
    }
    overrides = {key: value for key, value in overrides.items() if value is not None}
    if overrides:
        settings = dataclasses.replace(settings, **overrides)

    return scene, settings


def render_scene(args: argparse.Namespace) -> Path:
    """Render the scene described by args and save it.

    Returns:
        Path to the saved image file.
    """
    from src.whitted.core.renderer import Renderer
    from src.whitted.preview.export import save_png
    from src.whitted.scene.manager import save_scene

    quiet = args.quiet
    scene, settings = build_scene(args)

    if args.save_scene is not None:
        save_scene(scene, args.save_scene, settings)
        if not quiet:
            print(f"Scene written to: {args.save_scene}")

    if not quiet:
        print(
            f"Rendering {len(scene)} objects at {settings.width}x{settings.height} "
            f"(fov {settings.vfov}, depth {settings.max_depth})..."
        )

    renderer = Renderer(scene, settings)
    start_time = time.time()

    def progress_callback(current: int, target: int) -> None:
        if not quiet:
            elapsed = time.time() - start_time
            progress_pct = (current / target) * 100 if target > 0 else 0
            rows_per_sec = current / elapsed if elapsed > 0 else 0
            print(
                f"\r  Progress: {current}/{target} rows "
                f"({progress_pct:.1f}%) - {rows_per_sec:.1f} rows/s",
                end="",
                flush=True,
            )

    framebuffer = renderer.render(
        callback=progress_callback,
        rows_per_batch=args.rows_per_update,
    )

    if not quiet:
        print()

    output_file = save_png(framebuffer, args.output)

    total_time = time.time() - start_time
    if not quiet:
        stats = renderer.stats
        print(
            f"Rays: {stats.primary_rays} primary, {stats.reflection_rays} reflection, "
            f"{stats.refraction_rays} refraction, {stats.shadow_rays} shadow"
        )
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {total_time:.2f}s")

    if args.show:
        from src.whitted.preview.display import show_preview

        show_preview(framebuffer)

    return output_file


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    try:
        render_scene(args)
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
