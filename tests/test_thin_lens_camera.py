"""Tests for the thin-lens camera and viewport derivation."""

import math

import pytest

from pathtracer.camera.thin_lens import Camera, TracerParams
from pathtracer.core.vec import Vec3, cross, dot


def _params(**overrides) -> TracerParams:
    values = dict(
        aspect_ratio=1.0,
        height=100,
        vfov=90.0,
        defocus_angle=0.0,
        focus_distance=1.0,
        look_from=Vec3(0.0, 0.0, 0.0),
        look_at=Vec3(0.0, 0.0, -1.0),
    )
    values.update(overrides)
    return TracerParams(**values)


def _close(a: Vec3, b: Vec3, tol: float = 1e-12) -> bool:
    return (a - b).length() < tol


class TestTracerParams:
    """Tests for parameter defaults and validation."""

    def test_defaults(self):
        """Test the documented default parameters."""
        params = TracerParams()
        assert params.aspect_ratio == 16.0 / 9.0
        assert params.height == 480
        assert params.sampling_rate == 20
        assert params.max_depth == 10
        assert params.vfov == 20.0
        assert params.defocus_angle == 0.6
        assert params.focus_distance == 10.0
        assert params.look_from == Vec3(13.0, 2.0, 3.0)
        assert params.look_at == Vec3(0.0, 0.0, 0.0)

    def test_width_rounds(self):
        """Test width = round(height * aspect)."""
        assert TracerParams(height=480).width == 853
        assert TracerParams(height=90).width == 160
        assert TracerParams(height=2, aspect_ratio=1.0).width == 2

    @pytest.mark.parametrize(
        "field, value",
        [
            ("height", 0),
            ("sampling_rate", 0),
            ("max_depth", -1),
            ("vfov", 0.0),
            ("vfov", 180.0),
            ("focus_distance", 0.0),
            ("aspect_ratio", -1.0),
        ],
    )
    def test_validation_rejects_out_of_range(self, field, value):
        """Test that out-of-range parameters raise ValueError."""
        params = TracerParams(**{field: value})
        with pytest.raises(ValueError):
            params.validate()

    def test_validation_rejects_coincident_look_points(self):
        """Test that look_from == look_at is rejected."""
        params = TracerParams(look_from=Vec3(1.0, 1.0, 1.0), look_at=Vec3(1.0, 1.0, 1.0))
        with pytest.raises(ValueError, match="different"):
            params.validate()


class TestCameraSetup:
    """Tests for camera basis and viewport derivation."""

    def test_orthonormal_basis_default_orientation(self):
        """Test u, v, w are orthonormal and right-handed."""
        camera = Camera(TracerParams())
        for axis in (camera.u, camera.v, camera.w):
            assert abs(axis.length() - 1.0) < 1e-12
        assert abs(dot(camera.u, camera.v)) < 1e-12
        assert abs(dot(camera.v, camera.w)) < 1e-12
        assert abs(dot(camera.u, camera.w)) < 1e-12
        assert _close(cross(camera.u, camera.v), camera.w)

    def test_basis_directions_looking_at_negative_z(self):
        """Test the basis for a camera looking down -z."""
        camera = Camera(_params())
        assert _close(camera.w, Vec3(0.0, 0.0, 1.0))
        assert _close(camera.u, Vec3(1.0, 0.0, 0.0))
        assert _close(camera.v, Vec3(0.0, 1.0, 0.0))

    def test_fov_90_viewport_size(self):
        """Test a 90 degree FOV at focus distance 1 gives a 2x2 viewport."""
        vp = Camera(_params()).viewport
        assert abs(vp.height - 2.0) < 1e-12
        assert abs(vp.width - 2.0) < 1e-12

    def test_viewport_scales_with_focus_distance(self):
        """Test viewport height = 2 tan(vfov/2) * focus_distance."""
        vp = Camera(_params(vfov=20.0, focus_distance=10.0)).viewport
        assert abs(vp.height - 2.0 * math.tan(math.radians(10.0)) * 10.0) < 1e-12

    def test_aspect_ratio_uses_integer_width(self):
        """Test the viewport aspect follows the rounded pixel dimensions."""
        camera = Camera(_params(aspect_ratio=16.0 / 9.0, height=90))
        vp = camera.viewport
        assert camera.width == 160
        assert abs(vp.width / vp.height - 160.0 / 90.0) < 1e-12

    def test_v_vector_points_down(self):
        """Test rows increase downward in world space."""
        vp = Camera(_params()).viewport
        assert vp.v_vector.y < 0.0
        assert vp.u_vector.x > 0.0

    def test_pixel_origin(self):
        """Test pixel (0, 0) is half a pixel inside the upper-left corner."""
        camera = Camera(_params(height=2))
        vp = camera.viewport
        assert _close(vp.upper_left, Vec3(-1.0, 1.0, -1.0))
        assert _close(vp.pixel_origin, Vec3(-0.5, 0.5, -1.0))

    def test_defocus_disk_radius(self):
        """Test the defocus disk radius is focus * tan(angle / 2)."""
        camera = Camera(_params(defocus_angle=10.0, focus_distance=4.0))
        radius = 4.0 * math.tan(math.radians(5.0))
        assert abs(camera.defocus_disk_u.length() - radius) < 1e-12
        assert abs(camera.defocus_disk_v.length() - radius) < 1e-12


class TestRayGeneration:
    """Tests for per-pixel sample rays."""

    def test_center_ray_direction(self):
        """Test rays through the central pixels point roughly forward."""
        camera = Camera(_params(height=101))
        ray = camera.get_ray(50, 50)
        assert ray.direction.z < -0.99

    def test_ray_origin_is_camera_origin(self):
        """Test rays start at look_from without defocus."""
        camera = Camera(_params(look_from=Vec3(1.0, 2.0, 3.0), look_at=Vec3(1.0, 2.0, 0.0)))
        for _ in range(20):
            assert camera.get_ray(10, 10).origin == Vec3(1.0, 2.0, 3.0)

    def test_ray_direction_normalized(self):
        """Test sample ray directions are unit length."""
        camera = Camera(_params(defocus_angle=2.0))
        for _ in range(50):
            assert abs(camera.get_ray(3, 97).direction.length() - 1.0) < 1e-12

    def test_jittered_rays_vary(self):
        """Test repeated samples of a pixel differ."""
        camera = Camera(_params())
        directions = {camera.get_ray(5, 5).direction for _ in range(10)}
        assert len(directions) > 1

    def test_jittered_rays_in_pixel_bounds(self):
        """Test samples land inside the pixel's square on the focus plane."""
        camera = Camera(_params(height=10))
        vp = camera.viewport
        col, row = 3, 6
        center = camera.pixel_center(col, row)
        half_u = vp.du_vector.length() / 2.0
        half_v = vp.dv_vector.length() / 2.0
        for _ in range(100):
            ray = camera.get_ray(col, row)
            # Focus plane is z = -1 for this camera
            t = -1.0 / ray.direction.z
            point = ray.at(t)
            assert abs(point.x - center.x) <= half_u + 1e-12
            assert abs(point.y - center.y) <= half_v + 1e-12

    def test_defocus_origins_on_disk(self):
        """Test defocused ray origins lie within the lens disk."""
        camera = Camera(_params(defocus_angle=20.0, focus_distance=3.0))
        radius = camera.defocus_disk_u.length()
        for _ in range(100):
            origin = camera.get_ray(50, 50).origin
            assert origin.z == 0.0
            assert math.hypot(origin.x, origin.y) < radius + 1e-12

    def test_ray_time_in_unit_interval(self):
        """Test sample times lie in [0, 1) and vary."""
        camera = Camera(_params())
        times = [camera.get_ray(0, 0).time for _ in range(50)]
        assert all(0.0 <= t < 1.0 for t in times)
        assert len(set(times)) > 1

    def test_corner_rays_symmetric(self):
        """Test opposite corner pixel centers are mirror images."""
        camera = Camera(_params(height=10))
        top_left = camera.pixel_center(0, 0)
        bottom_right = camera.pixel_center(9, 9)
        assert abs(top_left.x + bottom_right.x) < 1e-12
        assert abs(top_left.y + bottom_right.y) < 1e-12

    def test_info(self):
        """Test the info dictionary reports image size and position."""
        info = Camera(_params(height=10)).info()
        assert info["image_size"] == (10, 10)
        assert info["position"] == (0.0, 0.0, 0.0)
