"""Multi-threaded render driver.

Rows are dealt to workers round-robin: with W workers, worker ``i`` renders
rows ``i, i + W, i + 2W, ...``. Neighbouring rows tend to cost about the
same, so interleaving keeps the load balanced without any work stealing.

Workers never touch the image. Each one sends ``(index, color)`` messages
over a single queue to the aggregator (the calling thread), then a
sentinel when it is done. The aggregator owns the pixel buffer, writes
each pixel by index as it arrives, and returns once it has collected one
sentinel per worker. A worker that raises sends its exception instead;
the aggregator then stops the remaining workers and raises
``RenderError``.
"""

from __future__ import annotations

import logging
import queue
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

import numpy as np
import numpy.typing as npt

from pathtracer.core import sampling
from pathtracer.core.image import Image
from pathtracer.core.progress import ProgressCallback
from pathtracer.core.vec import Color
from pathtracer.errors import RenderError
from pathtracer.geometry.hittable import Hittable

if TYPE_CHECKING:
    from pathtracer.core.integrator import RayTracer

logger = logging.getLogger(__name__)

# Marks the end of a worker's stream
_DONE = object()


@dataclass(frozen=True)
class WorkerFailure:
    """Message sent by a worker that raised."""

    worker_id: int
    error: BaseException


class PixelBuffer:
    """Flat pixel storage that records how often each pixel was written.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        pixels: Array of shape (width * height, 3).
        write_counts: Number of writes per pixel index.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.pixels: npt.NDArray[np.float64] = np.zeros(
            (width * height, 3), dtype=np.float64
        )
        self.write_counts: npt.NDArray[np.int64] = np.zeros(
            width * height, dtype=np.int64
        )

    def write(self, index: int, color: Color) -> None:
        """Store the color of pixel ``index``.

        Raises:
            RuntimeError: If the pixel was already written.
        """
        if self.write_counts[index]:
            raise RuntimeError(f"Pixel {index} was written more than once")
        self.pixels[index] = (color.x, color.y, color.z)
        self.write_counts[index] += 1

    def is_complete(self) -> bool:
        """True if every pixel has been written exactly once."""
        return bool(np.all(self.write_counts == 1))

    def to_image(self) -> Image:
        return Image(self.width, self.height, self.pixels)


def assigned_rows(worker_id: int, workers: int, height: int) -> range:
    """Rows rendered by one worker under interleaved assignment."""
    return range(worker_id, height, workers)


def _render_rows(
    tracer: RayTracer,
    world: Hittable,
    worker_id: int,
    workers: int,
    seed: int,
    channel: queue.SimpleQueue,
    stop: threading.Event,
) -> None:
    try:
        sampling.seed(seed)
        width = tracer.width
        for row in assigned_rows(worker_id, workers, tracer.height):
            if stop.is_set():
                break
            for col in range(width):
                channel.put((row * width + col, tracer.sample_color_at(world, col, row)))
    except Exception as exc:
        channel.put(WorkerFailure(worker_id, exc))
    finally:
        channel.put(_DONE)


def render_interleaved(
    tracer: RayTracer,
    world: Hittable,
    seeds: Sequence[int],
    progress: ProgressCallback | None = None,
    buffer: PixelBuffer | None = None,
) -> Image:
    """Render ``world`` with one worker thread per seed.

    Workers are always stopped and joined before this returns or raises,
    including when the progress callback or the buffer raises.

    Args:
        tracer: Provides the image size and per-pixel sampling.
        world: The scene, shared read-only by all workers.
        seeds: One RNG seed per worker; its length is the worker count.
        progress: Optional callback receiving (pixels done, total pixels).
        buffer: Pixel buffer to fill. A new one is allocated if omitted.

    Returns:
        The assembled image.

    Raises:
        RenderError: If any worker fails.
    """
    workers = len(seeds)
    width, height = tracer.width, tracer.height
    total = width * height
    if buffer is None:
        buffer = PixelBuffer(width, height)
    channel: queue.SimpleQueue = queue.SimpleQueue()
    stop = threading.Event()

    threads = [
        threading.Thread(
            target=_render_rows,
            args=(tracer, world, worker_id, workers, seed, channel, stop),
            name=f"render-worker-{worker_id}",
            daemon=True,
        )
        for worker_id, seed in enumerate(seeds)
    ]
    for thread in threads:
        thread.start()

    finished = 0
    done = 0
    failure: WorkerFailure | None = None
    try:
        while finished < workers:
            message = channel.get()
            if message is _DONE:
                finished += 1
                continue
            if isinstance(message, WorkerFailure):
                if failure is None:
                    failure = message
                    stop.set()
                continue
            if failure is not None:
                continue

            index, color = message
            buffer.write(index, color)
            done += 1
            if progress is not None:
                progress(done, total)
    finally:
        stop.set()
        # Every worker sends exactly one sentinel, even when stopped early
        while finished < workers:
            if channel.get() is _DONE:
                finished += 1
        for thread in threads:
            thread.join()

    if failure is not None:
        logger.error("Render worker %d failed: %s", failure.worker_id, failure.error)
        raise RenderError(
            f"Render worker {failure.worker_id} failed: {failure.error}",
            worker_id=failure.worker_id,
        ) from failure.error

    if not buffer.is_complete():
        raise RuntimeError(
            f"Render finished with {total - int(np.count_nonzero(buffer.write_counts))}"
            " unwritten pixels"
        )
    return buffer.to_image()
