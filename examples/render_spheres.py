#!/usr/bin/env python3
"""Render the two-sphere scene.

A small sphere resting on a large ground sphere, lit by the sky and shaded
with 50% diffuse bounces.

Usage:
    python -m examples.render_spheres [options]

Options:
    --width WIDTH           Image width in pixels (default: 400)
    --aspect-ratio RATIO    Width / height (default: 1.7778)
    --samples SAMPLES       Samples per pixel (default: 100)
    --max-depth DEPTH       Maximum bounces per sample (default: 50)
    --vfov DEGREES          Vertical field of view (default: 90)
    --seed SEED             Seed for reproducible output (default: clock time)
    --output OUTPUT         Output file path (default: image.ppm)
    --quiet                 Suppress progress output

Example:
    python -m examples.render_spheres --width 200 --samples 20 --output spheres.png
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

import taichi as ti


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the two-sphere scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=400,
        help="Image width in pixels (default: 400)",
    )
    parser.add_argument(
        "--aspect-ratio",
        type=float,
        default=16.0 / 9.0,
        help="Image width divided by height (default: 16/9)",
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=100,
        help="Number of samples per pixel (default: 100)",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=50,
        help="Maximum bounces per sample (default: 50)",
    )
    parser.add_argument(
        "--vfov",
        type=float,
        default=90.0,
        help="Vertical field of view in degrees (default: 90)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the random stream (default: seeded from the clock)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="image.ppm",
        help="Output file path; .ppm writes P3 text, other extensions use Pillow "
        "(default: image.ppm)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args()


def render_spheres(
    width: int = 400,
    aspect_ratio: float = 16.0 / 9.0,
    samples_per_pixel: int = 100,
    max_depth: int = 50,
    vfov: float = 90.0,
    seed: int | None = None,
    output_path: str = "image.ppm",
    quiet: bool = False,
) -> Path:
    """Render the two-sphere scene and save it.

    Args:
        width: Image width in pixels.
        aspect_ratio: Image width divided by height.
        samples_per_pixel: Number of samples per pixel.
        max_depth: Maximum bounces per sample.
        vfov: Vertical field of view in degrees.
        seed: Seed for reproducible output. None seeds from the clock so
            each run differs.
        output_path: Output file path.
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports to allow Taichi initialization first
    from weekend_tracer.config import RenderSettings
    from weekend_tracer.core.renderer import Renderer
    from weekend_tracer.scene.presets import create_two_sphere_scene

    if seed is None:
        seed = time.time_ns()

    settings = RenderSettings(
        image_width=width,
        aspect_ratio=aspect_ratio,
        samples_per_pixel=samples_per_pixel,
        max_depth=max_depth,
        seed=seed,
    )

    _, camera = create_two_sphere_scene(aspect_ratio=aspect_ratio, vfov=vfov)
    renderer = Renderer(settings, camera)

    if not quiet:
        print(
            f"Rendering {renderer.width}x{renderer.height} at "
            f"{samples_per_pixel} samples per pixel..."
        )

    start_time = time.time()

    def progress_callback(rows_remaining: int, total_rows: int) -> None:
        if not quiet:
            print(f"\rScanlines remaining: {rows_remaining:<6}", end="", flush=True)

    renderer.render(callback=progress_callback)

    if not quiet:
        print()  # Newline after progress

    output_file = renderer.save(output_path)

    total_time = time.time() - start_time
    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {total_time:.2f}s")
        print("Done.")

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()

    # Single-threaded CPU backend; the scanline kernels are serialized anyway
    ti.init(arch=ti.cpu)

    try:
        render_spheres(
            width=args.width,
            aspect_ratio=args.aspect_ratio,
            samples_per_pixel=args.samples,
            max_depth=args.max_depth,
            vfov=args.vfov,
            seed=args.seed,
            output_path=args.output,
            quiet=args.quiet,
        )
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
