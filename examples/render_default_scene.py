#!/usr/bin/env python3
"""Render the default scene.

This script renders the example scene (a red sphere shadowed by a small blue
sphere) with the sphere tracer and writes it as a PNG or PPM image. The
Taichi backend renders all pixels in parallel; the python backend uses the
pure-Python reference implementation.

Usage:
    python -m examples.render_default_scene [options]

Options:
    --width WIDTH               Image width in pixels (default: 1024)
    --height HEIGHT             Image height in pixels (default: 1024)
    --fov DEGREES               Field of view in degrees (default: 90)
    --render-distance DISTANCE  Marching budget per ray (default: 100)
    --tolerance TOLERANCE       Hit threshold (default: 1e-05)
    --output OUTPUT             Output file path, .png or .ppm (default: default_scene.ppm)
    --backend {taichi,python}   Renderer to use (default: taichi)
    --preview                   Show the result in a Matplotlib window
    --quiet                     Suppress progress output

Example:
    python -m examples.render_default_scene --width 256 --height 256 --output scene.png
"""

from __future__ import annotations

import argparse
import math
import sys
import time
from pathlib import Path

import taichi as ti

from sdf_marcher.scene.default_scene import (
    DEFAULT_HEIGHT,
    DEFAULT_RENDER_DISTANCE,
    DEFAULT_TOLERANCE,
    DEFAULT_WIDTH,
    default_scene,
    default_settings,
)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the default scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=DEFAULT_WIDTH,
        help=f"Image width in pixels (default: {DEFAULT_WIDTH})",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=DEFAULT_HEIGHT,
        help=f"Image height in pixels (default: {DEFAULT_HEIGHT})",
    )
    parser.add_argument(
        "--fov",
        type=float,
        default=90.0,
        help="Field of view in degrees (default: 90)",
    )
    parser.add_argument(
        "--render-distance",
        type=float,
        default=DEFAULT_RENDER_DISTANCE,
        help=f"Marching budget per ray (default: {DEFAULT_RENDER_DISTANCE:g})",
    )
    parser.add_argument(
        "--tolerance",
        type=float,
        default=DEFAULT_TOLERANCE,
        help=f"Hit threshold (default: {DEFAULT_TOLERANCE:g})",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="default_scene.ppm",
        help="Output file path, .png or .ppm (default: default_scene.ppm)",
    )
    parser.add_argument(
        "--backend",
        choices=("taichi", "python"),
        default="taichi",
        help="Renderer to use (default: taichi)",
    )
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Show the result in a Matplotlib window",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args(argv)


def render_default_scene(
    width: int = DEFAULT_WIDTH,
    height: int = DEFAULT_HEIGHT,
    fov_degrees: float = 90.0,
    render_distance: float = DEFAULT_RENDER_DISTANCE,
    tolerance: float = DEFAULT_TOLERANCE,
    output_path: str = "default_scene.ppm",
    backend: str = "taichi",
    preview: bool = False,
    quiet: bool = False,
) -> Path:
    """Render the default scene and save to file.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        fov_degrees: Field of view in degrees.
        render_distance: Marching budget per ray.
        tolerance: Hit threshold and normal estimation step.
        output_path: Output file path (PNG or PPM).
        backend: "taichi" for the parallel kernel, "python" for the reference.
        preview: If True, show the image once saved.
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    from sdf_marcher.preview.export import save_image

    settings = default_settings().replace(
        width=width,
        height=height,
        field_of_view=math.radians(fov_degrees),
        render_distance=render_distance,
        tolerance=tolerance,
    )
    scene = default_scene()

    if not quiet:
        print(f"Rendering default scene ({width}x{height}) with the {backend} backend...")

    start_time = time.time()

    if backend == "taichi":
        # Lazy import: the integrator declares Taichi fields
        from sdf_marcher.core.integrator import get_pixels_numpy, render_image

        render_image(settings, scene)
        pixels = get_pixels_numpy()
    else:
        from sdf_marcher.core.image import render_pixels

        pixels = render_pixels(settings, scene)

    output_file = save_image(pixels, output_path)

    total_time = time.time() - start_time
    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {total_time:.2f}s")

    if preview:
        from sdf_marcher.preview.display import show_preview

        show_preview(pixels)

    return output_file


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    if args.backend == "taichi":
        # Use GPU if available, fall back to CPU
        try:
            ti.init(arch=ti.gpu, default_fp=ti.f64)
            if not args.quiet:
                print("Using GPU backend")
        except Exception:
            ti.init(arch=ti.cpu, default_fp=ti.f64)
            if not args.quiet:
                print("Using CPU backend")

    try:
        render_default_scene(
            width=args.width,
            height=args.height,
            fov_degrees=args.fov,
            render_distance=args.render_distance,
            tolerance=args.tolerance,
            output_path=args.output,
            backend=args.backend,
            preview=args.preview,
            quiet=args.quiet,
        )
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
