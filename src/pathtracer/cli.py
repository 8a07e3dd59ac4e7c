#!/usr/bin/env python3
"""Command-line entry point for the path tracer.

Renders one of the registered scenes to a PPM (or PNG) file.

Usage:
    pathtracer [OPTIONS] [OUTPUT]

Examples:
    # Render a random scene with defaults to image.ppm
    pathtracer

    # Quick low-quality preview of a specific scene
    pathtracer -i checkered-spheres -t 180 -s 10 preview.ppm

    # Reproducible single-threaded render, overwriting the output
    pathtracer --seed 42 -1 --force image.png
"""

from __future__ import annotations

import argparse
import logging
import random
import sys
from pathlib import Path
from typing import Sequence, TextIO

from pathtracer import __version__
from pathtracer.config import DEFAULT_CONFIG_FILE, load_params
from pathtracer.core import sampling
from pathtracer.core.integrator import RayTracer
from pathtracer.core.progress import ProgressReporter
from pathtracer.errors import OutputPathError, RenderError
from pathtracer.preview.export import save_image
from pathtracer.scene.registry import build_named_scene, scene_names, select_scene

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

DEFAULT_OUTPUT = "image.ppm"

# Exit codes
EXIT_OK = 0
EXIT_IO_ERROR = 1
EXIT_RENDER_ERROR = 2


def configure_logging(level: int = logging.INFO) -> logging.Logger:
    """Send package log records to stderr.

    Replaces any handler installed by a previous call.

    Args:
        level: Minimum level to emit.

    Returns:
        The package logger.
    """
    package_logger = logging.getLogger("pathtracer")
    package_logger.setLevel(level)

    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(console_handler)

    return package_logger


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    scene_list = "\n\t- ".join(scene_names())
    parser = argparse.ArgumentParser(
        prog="pathtracer",
        description="Render a scene with a Monte Carlo path tracer.",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        "output",
        nargs="?",
        default=DEFAULT_OUTPUT,
        help=f"Output file; .png writes PNG, anything else PPM (default: {DEFAULT_OUTPUT})",
    )
    parser.add_argument(
        "-g",
        "--config",
        metavar="FILE",
        help=f"Config file (default: {DEFAULT_CONFIG_FILE})",
    )
    parser.add_argument("-t", "--height", type=int, metavar="INT", help="Image height")
    parser.add_argument(
        "-s", "--sampling", type=int, metavar="INT", help="Samples per pixel"
    )
    parser.add_argument("-d", "--depth", type=int, metavar="INT", help="Max ray depth")
    parser.add_argument(
        "-v", "--vfov", type=float, metavar="FLOAT", help="Vertical FOV in degrees"
    )
    parser.add_argument(
        "-a", "--angle", type=float, metavar="FLOAT", help="Defocus angle in degrees"
    )
    parser.add_argument(
        "-c", "--focus", type=float, metavar="FLOAT", help="Focus distance"
    )
    parser.add_argument(
        "-f",
        "--look-from",
        dest="look_from",
        metavar="X/Y/Z",
        help='Camera position (format: "FLOAT/FLOAT/FLOAT")',
    )
    parser.add_argument(
        "-l",
        "--look-at",
        dest="look_at",
        metavar="X/Y/Z",
        help='Camera target (format: "FLOAT/FLOAT/FLOAT")',
    )
    parser.add_argument(
        "-1",
        "--single-thread",
        dest="single_thread",
        action="store_true",
        help="Render on a single thread instead of a worker pool",
    )
    parser.add_argument(
        "-j",
        "--workers",
        type=int,
        metavar="INT",
        help="Worker threads for multi-threaded rendering (default: CPU count)",
    )
    parser.add_argument(
        "--force", action="store_true", help="Overwrite the output file if it exists"
    )
    parser.add_argument(
        "-i",
        "--scene",
        help=(
            "Choose scenes from these options:\n\t- "
            + scene_list
            + "\nIf you omit this option, the scene will be randomly selected"
        ),
    )
    parser.add_argument(
        "--seed", type=int, help="RNG seed for reproducible scenes and renders"
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="Suppress progress output"
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    return parser.parse_args(argv)


def check_output_path(
    path: Path,
    force: bool,
    stdin: TextIO | None = None,
    prompt_stream: TextIO | None = None,
) -> None:
    """Make sure the render can be written to ``path``.

    An existing file is overwritten only with ``force`` or after the user
    answers "y" on an interactive stdin.

    Args:
        path: Output file path.
        force: Overwrite without asking.
        stdin: Stream to read the answer from. Defaults to ``sys.stdin``.
        prompt_stream: Stream to write the prompt to. Defaults to ``sys.stderr``.

    Raises:
        OutputPathError: If the path is a directory or overwriting is declined.
    """
    if path.is_dir():
        raise OutputPathError(f"Output path '{path}' is a directory. Aborting")
    if not path.exists():
        return
    if force:
        logger.info("File '%s' exists. Will overwrite", path)
        return

    stdin = stdin if stdin is not None else sys.stdin
    prompt_stream = prompt_stream if prompt_stream is not None else sys.stderr
    if stdin is None or not stdin.isatty():
        raise OutputPathError(
            f"File '{path}' exists. Use --force to overwrite it. Aborting"
        )

    prompt_stream.write(f"File '{path}' exists. Overwrite? [y/N] ")
    prompt_stream.flush()
    answer = stdin.readline().strip().lower()
    if answer not in ("y", "yes"):
        raise OutputPathError(f"Not overwriting '{path}'. Aborting")


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    configure_logging(logging.WARNING if args.quiet else logging.INFO)

    output = Path(args.output)
    try:
        check_output_path(output, args.force)
    except OutputPathError as e:
        logger.error("%s", e)
        return EXIT_IO_ERROR

    overrides = {
        "height": args.height,
        "sampling": args.sampling,
        "depth": args.depth,
        "vfov": args.vfov,
        "angle": args.angle,
        "focus": args.focus,
        "look_from": args.look_from,
        "look_at": args.look_at,
    }
    params = load_params(args.config, overrides)

    if args.seed is not None:
        sampling.seed(args.seed)
        scene_rng = random.Random(args.seed)
    else:
        scene_rng = None
    scene_name = select_scene(args.scene, rng=scene_rng)
    world = build_named_scene(scene_name)

    try:
        tracer = RayTracer(params, seed=args.seed)
    except ValueError as e:
        logger.error("Invalid render parameters: %s", e)
        return EXIT_IO_ERROR

    progress = None if args.quiet else ProgressReporter(tracer.width * tracer.height)
    try:
        if args.single_thread:
            image = tracer.render(world, progress=progress)
        else:
            image = tracer.render_multi(world, workers=args.workers, progress=progress)
    except RenderError as e:
        logger.error("Render failed: %s", e)
        return EXIT_RENDER_ERROR

    try:
        save_image(image, output)
    except OSError as e:
        logger.error("Failed to write '%s': %s", output, e)
        return EXIT_IO_ERROR

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
