"""Thin-lens camera model with depth of field and motion-blur sampling.

This module derives a camera and its viewport once from user-facing
parameters and then generates jittered primary rays per pixel.

The camera builds an orthonormal basis (u, v, w) from the view parameters:
- w: points from look_at toward look_from (opposite view direction)
- u: points right in the image plane
- v: points up in the image plane

The viewport sits on the plane of perfect focus, ``focus_distance`` in
front of the camera. Its vertical edge vector points down so that image
rows increase downward. When the defocus angle is positive, ray origins
are spread over a disk around ``look_from`` whose radius is
``focus_distance * tan(defocus_angle / 2)``, blurring everything off the
focus plane.

Example:
    >>> from pathtracer.camera.thin_lens import Camera, TracerParams
    >>> from pathtracer.core.vec import Vec3
    >>> params = TracerParams(height=90, look_from=Vec3(0.0, 0.0, 5.0))
    >>> camera = Camera(params)
    >>> camera.width
    160
    >>> ray = camera.get_ray(80, 45)  # Ray through the image center
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from pathtracer.core import sampling
from pathtracer.core.ray import Ray
from pathtracer.core.vec import Vec3, cross

# Implicit "up" direction used to orient the camera
WORLD_UP = Vec3(0.0, 1.0, 0.0)

# =============================================================================
# Camera Data Structures
# =============================================================================


@dataclass
class TracerParams:
    """User-facing render and camera parameters.

    Attributes:
        aspect_ratio: Image width divided by height.
        height: Image height in pixels.
        sampling_rate: Samples per pixel.
        max_depth: Maximum number of ray bounces per sample.
        vfov: Vertical field of view in degrees.
        defocus_angle: Cone angle of rays through each pixel, in degrees.
            0 disables depth of field.
        focus_distance: Distance from look_from to the plane of perfect focus.
        look_from: Camera position in world space.
        look_at: Point the camera looks toward.
    """

    aspect_ratio: float = 16.0 / 9.0
    height: int = 480
    sampling_rate: int = 20
    max_depth: int = 10
    vfov: float = 20.0
    defocus_angle: float = 0.6
    focus_distance: float = 10.0
    look_from: Vec3 = field(default_factory=lambda: Vec3(13.0, 2.0, 3.0))
    look_at: Vec3 = field(default_factory=lambda: Vec3(0.0, 0.0, 0.0))

    @property
    def width(self) -> int:
        """Image width, rounded from height and aspect ratio (at least 1)."""
        return max(1, round(self.height * self.aspect_ratio))

    def validate(self) -> None:
        """Check that the parameters describe a renderable camera.

        Raises:
            ValueError: If any parameter is out of range.
        """
        if self.height < 1:
            raise ValueError(f"Image height = {self.height} must be at least 1.")
        if self.aspect_ratio <= 0.0:
            raise ValueError(f"Aspect ratio = {self.aspect_ratio} must be positive.")
        if self.sampling_rate < 1:
            raise ValueError(
                f"Sampling rate = {self.sampling_rate} must be at least 1."
            )
        if self.max_depth < 0:
            raise ValueError(f"Max depth = {self.max_depth} must not be negative.")
        if not 0.0 < self.vfov < 180.0:
            raise ValueError(f"Vertical FOV = {self.vfov} must be in (0, 180).")
        if self.focus_distance <= 0.0:
            raise ValueError(
                f"Focus distance = {self.focus_distance} must be positive."
            )
        if self.look_from == self.look_at:
            raise ValueError("look_from and look_at must be different points.")


@dataclass(frozen=True)
class Viewport:
    """Image-plane geometry derived from the camera parameters.

    Attributes:
        width: Viewport width in world units.
        height: Viewport height in world units.
        u_vector: Vector along the top edge, left to right.
        v_vector: Vector along the left edge, top to bottom.
        du_vector: Horizontal offset between adjacent pixel centers.
        dv_vector: Vertical offset between adjacent pixel centers.
        upper_left: World position of the viewport's upper-left corner.
        pixel_origin: World position of pixel (0, 0)'s center.
    """

    width: float
    height: float
    u_vector: Vec3
    v_vector: Vec3
    du_vector: Vec3
    dv_vector: Vec3
    upper_left: Vec3
    pixel_origin: Vec3


class Camera:
    """A thin-lens camera derived once from ``TracerParams``.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        position: Camera center (look_from).
        u: Camera right vector.
        v: Camera up vector.
        w: Camera backward vector.
        viewport: Derived viewport geometry.
        defocus_angle: Defocus cone angle in degrees.
        defocus_disk_u: Horizontal radius vector of the defocus disk.
        defocus_disk_v: Vertical radius vector of the defocus disk.
    """

    def __init__(self, params: TracerParams) -> None:
        self.width = params.width
        self.height = params.height
        actual_aspect = self.width / self.height

        self.position = params.look_from
        self.w = (params.look_from - params.look_at).unit()
        self.u = cross(WORLD_UP, self.w).unit()
        self.v = cross(self.w, self.u)

        theta = math.radians(params.vfov)
        vp_height = 2.0 * math.tan(theta / 2.0) * params.focus_distance
        vp_width = vp_height * actual_aspect

        u_vector = self.u * vp_width
        v_vector = -self.v * vp_height
        du_vector = u_vector / self.width
        dv_vector = v_vector / self.height
        upper_left = (
            self.position
            - self.w * params.focus_distance
            - u_vector / 2.0
            - v_vector / 2.0
        )
        pixel_origin = upper_left + (du_vector + dv_vector) * 0.5

        self.viewport = Viewport(
            width=vp_width,
            height=vp_height,
            u_vector=u_vector,
            v_vector=v_vector,
            du_vector=du_vector,
            dv_vector=dv_vector,
            upper_left=upper_left,
            pixel_origin=pixel_origin,
        )

        self.defocus_angle = params.defocus_angle
        defocus_radius = params.focus_distance * math.tan(
            math.radians(params.defocus_angle / 2.0)
        )
        self.defocus_disk_u = self.u * defocus_radius
        self.defocus_disk_v = self.v * defocus_radius

    def pixel_center(self, col: int, row: int) -> Vec3:
        vp = self.viewport
        return vp.pixel_origin + vp.du_vector * col + vp.dv_vector * row

    def get_ray(self, col: int, row: int) -> Ray:
        """Generate a jittered sample ray through pixel ``(col, row)``.

        The sample point is offset uniformly within the pixel square. The
        ray starts on the defocus disk (or at the camera center when the
        defocus angle is not positive), has a unit direction, and a time
        drawn uniformly from [0, 1).

        Args:
            col: Pixel column, 0 at the left edge.
            row: Pixel row, 0 at the top edge.

        Returns:
            The sample ray.
        """
        vp = self.viewport
        rng = sampling.generator()
        offset_x = rng.random() - 0.5
        offset_y = rng.random() - 0.5
        pixel_sample = (
            vp.pixel_origin
            + vp.du_vector * (col + offset_x)
            + vp.dv_vector * (row + offset_y)
        )

        origin = self.position if self.defocus_angle <= 0.0 else self.defocus_sample()
        direction = (pixel_sample - origin).unit()
        return Ray(origin, direction, rng.random())

    def defocus_sample(self) -> Vec3:
        """Return a random point on the defocus disk."""
        x, y = sampling.random_in_unit_disk()
        return self.position + self.defocus_disk_u * x + self.defocus_disk_v * y

    def info(self) -> dict:
        """Return camera information as a dictionary.

        Useful for debugging and logging camera state.
        """
        vp = self.viewport
        return {
            "image_size": (self.width, self.height),
            "position": self.position.to_tuple(),
            "u": self.u.to_tuple(),
            "v": self.v.to_tuple(),
            "w": self.w.to_tuple(),
            "viewport_size": (vp.width, vp.height),
            "pixel_origin": vp.pixel_origin.to_tuple(),
            "defocus_angle": self.defocus_angle,
        }
