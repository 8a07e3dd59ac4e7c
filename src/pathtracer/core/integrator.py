"""Path tracing integrator for Monte Carlo rendering.

This module implements the core path tracing loop. Each camera sample is
followed through up to ``max_depth`` surface interactions. At every hit the
surface material either absorbs the path or scatters it, multiplying a
running throughput by the material's attenuation:

    L = T_1 * T_2 * ... * T_k * L_sky

where T_i is the attenuation at bounce i and L_sky is the background
radiance the path finally escapes to. Paths are terminated by a fixed
depth limit (no Russian roulette); a path that is absorbed or runs out
of depth contributes black.

The loop is iterative: the throughput accumulator is equivalent to the
recursive formulation ``attenuation * ray_color(scattered, depth - 1)``
without growing the call stack.

Example:
    >>> from pathtracer.camera.thin_lens import TracerParams
    >>> from pathtracer.core.integrator import RayTracer
    >>> tracer = RayTracer(TracerParams(height=90, sampling_rate=10), seed=7)
    >>> image = tracer.render(world)
"""

from __future__ import annotations

import logging
import math
import os
import time

from pathtracer.camera.thin_lens import Camera, TracerParams
from pathtracer.core import sampling
from pathtracer.core.image import Image
from pathtracer.core.interval import Interval
from pathtracer.core.parallel import render_interleaved
from pathtracer.core.progress import ProgressCallback
from pathtracer.core.ray import Ray
from pathtracer.core.vec import Color, Vec3, lerp
from pathtracer.geometry.hittable import Hittable

logger = logging.getLogger(__name__)

# =============================================================================
# Constants
# =============================================================================

# Minimum t for ray intersection (avoids self-intersection "shadow acne")
T_MIN = 0.001

# Maximum t for ray intersection
T_MAX = math.inf

BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)

# Sky color at the zenith; the horizon is white
SKY_BLUE = Color(0.5, 0.7, 1.0)

_UNIT = Vec3(1.0, 1.0, 1.0)


# =============================================================================
# Radiance
# =============================================================================


def background_color(ray: Ray) -> Color:
    """Sky gradient from white at the horizon to blue overhead.

    Args:
        ray: A ray that escaped the scene. Need not be normalized.

    Returns:
        The sky radiance seen along the ray.
    """
    unit_direction = ray.direction.unit()
    a = 0.5 * (unit_direction.y + 1.0)
    return lerp(WHITE, SKY_BLUE, a)


def ray_color(ray: Ray, world: Hittable, depth: int) -> Color:
    """Trace a single path and return the radiance it carries.

    Algorithm:
    1. Find the closest hit in (T_MIN, inf); on a miss, return the sky
       weighted by the accumulated throughput
    2. Hits on objects without a material are shaded by their normal
    3. Otherwise scatter; absorption ends the path with black
    4. Multiply the throughput by the attenuation and follow the new ray
    5. Return black once ``depth`` bounces have been used

    Args:
        ray: The ray to trace.
        world: The scene.
        depth: Maximum number of bounces. 0 returns black.

    Returns:
        The radiance along the ray.
    """
    throughput = WHITE
    t_range = Interval(T_MIN, T_MAX)

    for _ in range(depth):
        result = world.hit(ray, t_range)
        if result is None:
            return throughput * background_color(ray)

        if result.material is None:
            # Debug shading by normal direction
            normal_color = Color.from_vec((result.record.normal + _UNIT) * 0.5)
            return throughput * normal_color

        scattered = result.material.scatter(ray, result.record)
        if scattered is None:
            return BLACK

        throughput = throughput * scattered.attenuation
        ray = scattered.ray

    return BLACK


# =============================================================================
# Renderer
# =============================================================================


class RayTracer:
    """Renders a scene through a thin-lens camera.

    The camera and viewport are derived once at construction. Rendering is
    either single-threaded (``render``) or spread over worker threads with
    interleaved rows (``render_multi``).

    Attributes:
        params: The validated render parameters.
        camera: The derived camera.
        seed: Root RNG seed, or None for a non-reproducible render.
    """

    def __init__(self, params: TracerParams, seed: int | None = None) -> None:
        """Validate parameters and derive the camera.

        Args:
            params: Render and camera parameters.
            seed: Root RNG seed. Renders with the same seed, parameters,
                scene and worker count are identical.

        Raises:
            ValueError: If the parameters are out of range.
        """
        params.validate()
        self.params = params
        self.camera = Camera(params)
        self.seed = seed

    @property
    def width(self) -> int:
        return self.camera.width

    @property
    def height(self) -> int:
        return self.camera.height

    def sample_color_at(self, world: Hittable, col: int, row: int) -> Color:
        """Average ``sampling_rate`` samples for one pixel, clamped to [0, 1]."""
        params = self.params
        total_r = total_g = total_b = 0.0
        for _ in range(params.sampling_rate):
            ray = self.camera.get_ray(col, row)
            color = ray_color(ray, world, params.max_depth)
            total_r += color.x
            total_g += color.y
            total_b += color.z

        scale = 1.0 / params.sampling_rate
        return Color(total_r * scale, total_g * scale, total_b * scale).clamp()

    def render(
        self, world: Hittable, progress: ProgressCallback | None = None
    ) -> Image:
        """Render on the calling thread.

        Args:
            world: The scene to render. Must not be mutated while rendering.
            progress: Optional callback receiving (pixels done, total pixels).

        Returns:
            The rendered image in linear RGB.
        """
        width, height = self.width, self.height
        total = width * height
        logger.info(
            "Rendering %dx%d image, %d samples per pixel, max depth %d, single thread",
            width,
            height,
            self.params.sampling_rate,
            self.params.max_depth,
        )

        sampling.seed(self.seed)
        image = Image.blank(width, height)
        start = time.perf_counter()

        done = 0
        for row in range(height):
            for col in range(width):
                image.set_pixel(col, row, self.sample_color_at(world, col, row))
                done += 1
                if progress is not None:
                    progress(done, total)

        logger.info("Render finished in %.2fs", time.perf_counter() - start)
        return image

    def render_multi(
        self,
        world: Hittable,
        workers: int | None = None,
        progress: ProgressCallback | None = None,
    ) -> Image:
        """Render with a pool of worker threads.

        Worker ``i`` renders rows ``i, i + W, i + 2W, ...``. Each worker
        draws from its own RNG stream, seeded from ``seed``.

        Args:
            world: The scene to render. Shared read-only by all workers.
            workers: Number of worker threads. Defaults to the number of
                available CPUs (at least 1).
            progress: Optional callback receiving (pixels done, total pixels).

        Returns:
            The rendered image in linear RGB.

        Raises:
            ValueError: If ``workers`` is less than 1.
            RenderError: If any worker fails.
        """
        if workers is None:
            workers = os.cpu_count() or 1
        if workers < 1:
            raise ValueError(f"Worker count = {workers} must be at least 1.")

        logger.info(
            "Rendering %dx%d image, %d samples per pixel, max depth %d, %d workers",
            self.width,
            self.height,
            self.params.sampling_rate,
            self.params.max_depth,
            workers,
        )

        seeds = sampling.spawn_seeds(self.seed, workers)
        start = time.perf_counter()
        image = render_interleaved(self, world, seeds, progress)
        logger.info("Render finished in %.2fs", time.perf_counter() - start)
        return image

    def __repr__(self) -> str:
        return (
            f"RayTracer({self.width}x{self.height}, "
            f"samples={self.params.sampling_rate}, depth={self.params.max_depth})"
        )
