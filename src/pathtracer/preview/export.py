"""Image export utilities for rendered images.

This module converts linear RGB renders into 8-bit output and writes them
to disk.

Output pipeline per channel:
    1. Gamma: c -> sqrt(c) (gamma 2 approximation of sRGB)
    2. Clamp to [0, 0.999]
    3. Quantize: int(256 * c), giving integers in [0, 255]

Supported formats:
    - PPM (plain-text "P3" Netpbm)
    - PNG (8-bit RGB via Pillow)

Example:
    >>> from pathtracer.preview.export import write_ppm
    >>> image = tracer.render(world)
    >>> write_ppm(image, "image.ppm")
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, TextIO

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

if TYPE_CHECKING:
    from pathtracer.core.image import Image

logger = logging.getLogger(__name__)

# Largest channel value declared in the PPM header
MAX_COLOR = 255

# Upper clamp before quantization so that 256 * c stays below 256
_CLAMP_MAX = 0.999


def linear_to_gamma(values: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    """Apply gamma 2 correction: c -> sqrt(c).

    Negative inputs are treated as 0.

    Args:
        values: Linear color values of any shape.

    Returns:
        Gamma-corrected values, same shape.
    """
    return np.sqrt(np.maximum(values, 0.0))


def image_to_uint8(image: Image) -> npt.NDArray[np.uint8]:
    """Convert an image to 8-bit channels.

    Args:
        image: Linear RGB image.

    Returns:
        Array of shape (height, width, 3) with values in [0, 255].
    """
    gamma = np.clip(linear_to_gamma(image.to_array()), 0.0, _CLAMP_MAX)
    return (gamma * 256.0).astype(np.uint8)


def write_ppm_stream(image: Image, stream: TextIO) -> None:
    """Write an image as plain-text PPM to an open text stream.

    The header is followed by one pixel per line (three space-separated
    integers), and the stream is flushed after every image row.

    Args:
        image: Linear RGB image.
        stream: Destination text stream.
    """
    quantized = image_to_uint8(image)
    stream.write(f"P3\n{image.width} {image.height}\n{MAX_COLOR}\n")
    for row in quantized:
        stream.write("".join(f"{r} {g} {b}\n" for r, g, b in row.tolist()))
        stream.flush()


def write_ppm(image: Image, filepath: str | os.PathLike) -> None:
    """Write an image to a plain-text PPM file.

    Args:
        image: Linear RGB image.
        filepath: Output file path. An existing file is overwritten.
    """
    with open(filepath, "w", encoding="ascii", newline="\n") as stream:
        write_ppm_stream(image, stream)
    logger.info("Wrote %dx%d PPM image to %s", image.width, image.height, filepath)


def save_png(image: Image, filepath: str | os.PathLike) -> None:
    """Save an image as an 8-bit RGB PNG file.

    Uses the same gamma and quantization as the PPM writer.

    Args:
        image: Linear RGB image.
        filepath: Output file path (should end in .png).
    """
    pil_image = PILImage.fromarray(image_to_uint8(image))
    pil_image.save(filepath)
    logger.info("Wrote %dx%d PNG image to %s", image.width, image.height, filepath)


def save_image(image: Image, filepath: str | os.PathLike) -> None:
    """Save an image, choosing PNG for a ``.png`` suffix and PPM otherwise."""
    if os.fspath(filepath).lower().endswith(".png"):
        save_png(image, filepath)
    else:
        write_ppm(image, filepath)
