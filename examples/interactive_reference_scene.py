#!/usr/bin/env python3
"""Trace the reference scene in a live window with slider controls.

The image fills in from the top, a few rows per window frame. Moving a
slider rebuilds the scene and restarts the trace.

Usage:
    python -m examples.interactive_reference_scene [--width W] [--height H]

Controls:
    - Light: Emission of the light sphere (0-10)
    - Glass: Transparency of the red sphere (0-1)
    - Export PNG: Save the current frame with a timestamp
"""

from __future__ import annotations

import argparse
import platform
import sys
from pathlib import Path

_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

import taichi as ti  # noqa: E402

def initialize_taichi() -> str:
    """Initialize Taichi for the preview window.

    Metal is only tried on macOS. CPU always works.

    Returns:
        Name of the backend in use.
    """
    candidates = [("GPU", ti.gpu)]
    if platform.system() == "Darwin":
        candidates.insert(0, ("Metal (GPU)", ti.metal))

    for name, arch in candidates:
        try:
            ti.init(arch=arch)
            return name
        except Exception:
            continue

    ti.init(arch=ti.cpu)
    return "CPU"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Live preview of the reference scene.")
    parser.add_argument("--width", type=int, default=320, help="Window width (default: 320)")
    parser.add_argument("--height", type=int, default=240, help="Window height (default: 240)")
    parser.add_argument(
        "--rows-per-frame",
        type=int,
        default=8,
        help="Rows traced between window frames (default: 8)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Open the window and trace until it is closed.

    Returns:
        0 when the window was closed normally, 1 without a display.
    """
    args = parse_args(argv)

    from src.whitted.preview.interactive import InteractivePreview
    from src.whitted.scene.reference import ReferenceSceneParams

    if not InteractivePreview.is_display_available():
        print("Error: no display found; the live preview needs a graphical session.",
              file=sys.stderr)
        return 1

    print(f"Taichi backend: {initialize_taichi()}")
    print(f"Tracing {args.width}x{args.height}, {args.rows_per_frame} rows per frame.")
    print("Move the sliders to change the light and the glass; close the window to quit.")

    preview = InteractivePreview(args.width, args.height)
    preview.set_params(ReferenceSceneParams())
    try:
        preview.run_reactive(rows_per_frame=args.rows_per_frame)
    except KeyboardInterrupt:
        print()
    finally:
        preview.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
