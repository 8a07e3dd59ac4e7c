"""Three-component vector and color value types.

``Vec3`` is used for points, directions and normals. ``Color`` is an RGB
triple with the same arithmetic, kept as a distinct type so that geometry
and radiance are never mixed by accident: elementwise operations between
a ``Vec3`` and a ``Color`` raise ``TypeError``.

Both types are immutable and cheap to copy. Arithmetic always produces a
new instance of the left operand's type.

Example:
    >>> from pathtracer.core.vec import Vec3, cross, dot
    >>> a = Vec3(1.0, 0.0, 0.0)
    >>> b = Vec3(0.0, 1.0, 0.0)
    >>> cross(a, b)
    Vec3(0.0, 0.0, 1.0)
    >>> dot(a, b)
    0.0
"""

from __future__ import annotations

import math
from typing import Iterator, TypeVar

# Threshold below which every component counts as zero
NEAR_ZERO_EPSILON = 1e-8

_T = TypeVar("_T", bound="_Triple")


class _Triple:
    """Shared arithmetic for ``Vec3`` and ``Color``."""

    __slots__ = ("x", "y", "z")

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0) -> None:
        object.__setattr__(self, "x", float(x))
        object.__setattr__(self, "y", float(y))
        object.__setattr__(self, "z", float(z))

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def _check(self, other: _Triple) -> None:
        if type(other) is not type(self):
            raise TypeError(
                f"Cannot combine {type(self).__name__} with {type(other).__name__}"
            )

    def __add__(self: _T, other: _T) -> _T:
        self._check(other)
        return type(self)(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self: _T, other: _T) -> _T:
        self._check(other)
        return type(self)(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self: _T, other: _T | float) -> _T:
        if isinstance(other, _Triple):
            self._check(other)
            return type(self)(self.x * other.x, self.y * other.y, self.z * other.z)
        return type(self)(self.x * other, self.y * other, self.z * other)

    def __rmul__(self: _T, other: float) -> _T:
        return type(self)(self.x * other, self.y * other, self.z * other)

    def __truediv__(self: _T, other: _T | float) -> _T:
        if isinstance(other, _Triple):
            self._check(other)
            return type(self)(self.x / other.x, self.y / other.y, self.z / other.z)
        return type(self)(self.x / other, self.y / other, self.z / other)

    def __neg__(self: _T) -> _T:
        return type(self)(-self.x, -self.y, -self.z)

    def __getitem__(self, axis: int) -> float:
        if axis == 0:
            return self.x
        if axis == 1:
            return self.y
        if axis == 2:
            return self.z
        raise IndexError(f"Axis {axis} is out of range for a 3-component vector")

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __len__(self) -> int:
        return 3

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.x == other.x and self.y == other.y and self.z == other.z

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.x, self.y, self.z))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.x!r}, {self.y!r}, {self.z!r})"

    def __reduce__(self):
        return (type(self), (self.x, self.y, self.z))

    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    def length(self) -> float:
        return math.sqrt(self.length_squared())

    def near_zero(self) -> bool:
        """Return True if every component magnitude is below 1e-8."""
        return (
            abs(self.x) < NEAR_ZERO_EPSILON
            and abs(self.y) < NEAR_ZERO_EPSILON
            and abs(self.z) < NEAR_ZERO_EPSILON
        )

    def to_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)


class Vec3(_Triple):
    """A point, direction or normal in 3D space."""

    __slots__ = ()

    def unit(self) -> Vec3:
        """Return this vector scaled to length 1.

        The vector must have non-zero length.
        """
        return self / self.length()


class Color(_Triple):
    """A linear RGB color."""

    __slots__ = ()

    @property
    def r(self) -> float:
        return self.x

    @property
    def g(self) -> float:
        return self.y

    @property
    def b(self) -> float:
        return self.z

    @classmethod
    def from_vec(cls, v: Vec3) -> Color:
        """Reinterpret a vector as a color (e.g. for normal visualization)."""
        return cls(v.x, v.y, v.z)

    def clamp(self, lo: float = 0.0, hi: float = 1.0) -> Color:
        return Color(
            min(max(self.x, lo), hi),
            min(max(self.y, lo), hi),
            min(max(self.z, lo), hi),
        )


# =============================================================================
# Vector Operations
# =============================================================================


def dot(a: Vec3, b: Vec3) -> float:
    return a.x * b.x + a.y * b.y + a.z * b.z


def cross(a: Vec3, b: Vec3) -> Vec3:
    return Vec3(
        a.y * b.z - a.z * b.y,
        a.z * b.x - a.x * b.z,
        a.x * b.y - a.y * b.x,
    )


def lerp(start: _T, end: _T, a: float) -> _T:
    """Linearly blend from ``start`` (a = 0) to ``end`` (a = 1)."""
    return start * (1.0 - a) + end * a


def reflect(v: Vec3, n: Vec3) -> Vec3:
    """Reflect a vector about a surface normal.

    Computes R = V - 2(V . N)N. The normal must be unit length; the result
    has the same length as ``v``.

    Args:
        v: The incident vector.
        n: The unit surface normal.

    Returns:
        The reflected vector.
    """
    return v - n * (2.0 * dot(v, n))


def refract(uv: Vec3, n: Vec3, etai_over_etat: float) -> Vec3:
    """Refract a unit vector through a surface using Snell's law.

    The refracted ray is split into components perpendicular and parallel
    to the normal:
        R_perp = eta * (V + cos_theta * N)
        R_parallel = -sqrt(1 - |R_perp|^2) * N

    The caller is responsible for checking total internal reflection first.

    Args:
        uv: The unit incident direction.
        n: The unit surface normal on the incident side.
        etai_over_etat: Ratio of refractive indices (incident / transmitted).

    Returns:
        The refracted direction (unit length).
    """
    cos_theta = min(dot(-uv, n), 1.0)
    r_out_perp = (uv + n * cos_theta) * etai_over_etat
    r_out_parallel = n * -math.sqrt(abs(1.0 - r_out_perp.length_squared()))
    return r_out_perp + r_out_parallel
