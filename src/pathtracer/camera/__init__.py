"""Camera module for primary ray generation.

Components:
    thin_lens: TracerParams, Viewport derivation, and the thin-lens Camera
        with defocus blur and per-sample ray time
"""

from .thin_lens import Camera, TracerParams, Viewport

__all__ = ["Camera", "TracerParams", "Viewport"]
