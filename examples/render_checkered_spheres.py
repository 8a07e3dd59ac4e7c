#!/usr/bin/env python3
"""Render the checkered-spheres scene through the library API.

This example builds the scene, renders it on a pool of worker threads
with a hand-written progress callback, and saves a PNG.

Usage:
    python examples/render_checkered_spheres.py [--height 225] [--samples 50]
    python examples/render_checkered_spheres.py --output spheres.png
"""

import argparse
import sys
import time
from pathlib import Path

from pathtracer.camera.thin_lens import TracerParams
from pathtracer.core.integrator import RayTracer
from pathtracer.core.vec import Vec3
from pathtracer.preview.export import save_png
from pathtracer.scene.book_scenes import checkered_spheres


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the checkered-spheres scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--height",
        type=int,
        default=225,
        help="Image height in pixels (default: 225)",
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=50,
        help="Number of samples per pixel (default: 50)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="checkered_spheres.png",
        help="Output file path (default: checkered_spheres.png)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="RNG seed for a reproducible render",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args()


def render_checkered_spheres(
    height: int = 225,
    num_samples: int = 50,
    output_path: str = "checkered_spheres.png",
    seed: int | None = None,
    quiet: bool = False,
) -> Path:
    """Render the checkered-spheres scene and save to file.

    Args:
        height: Image height in pixels.
        num_samples: Number of samples per pixel.
        output_path: Output file path (PNG).
        seed: RNG seed, or None for a random render.
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    params = TracerParams(
        height=height,
        sampling_rate=num_samples,
        max_depth=50,
        vfov=20.0,
        defocus_angle=0.0,
        look_from=Vec3(13.0, 2.0, 3.0),
        look_at=Vec3(0.0, 0.0, 0.0),
    )
    tracer = RayTracer(params, seed=seed)
    world = checkered_spheres()

    if not quiet:
        print(f"Rendering {tracer.width}x{tracer.height}, {num_samples} samples per pixel...")

    start_time = time.time()

    def progress_callback(current: int, total: int) -> None:
        if not quiet and (current % tracer.width == 0 or current == total):
            elapsed = time.time() - start_time
            pixels_per_sec = current / elapsed if elapsed > 0 else 0
            print(
                f"\r  Progress: {current}/{total} pixels "
                f"({current / total * 100:.1f}%) - {pixels_per_sec:.1f} px/s",
                end="",
                flush=True,
            )

    image = tracer.render_multi(world, progress=progress_callback)

    if not quiet:
        print()  # Newline after progress

    output_file = Path(output_path)
    save_png(image, output_file)

    total_time = time.time() - start_time
    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {total_time:.2f}s")

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()
    try:
        render_checkered_spheres(
            height=args.height,
            num_samples=args.samples,
            output_path=args.output,
            seed=args.seed,
            quiet=args.quiet,
        )
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
