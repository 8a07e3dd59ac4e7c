"""Preview module for image output.

Components:
    export: Gamma correction, 8-bit quantization, PPM and PNG writers
"""

from .export import (
    image_to_uint8,
    linear_to_gamma,
    save_image,
    save_png,
    write_ppm,
    write_ppm_stream,
)

__all__ = [
    "image_to_uint8",
    "linear_to_gamma",
    "save_image",
    "save_png",
    "write_ppm",
    "write_ppm_stream",
]
