"""Small 3D vector, matrix, quaternion and ray types for the renderer."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import ClassVar, Iterator

_SCALARS = (int, float)


def _div(a: float, b: float) -> float:
    """Divide with IEEE semantics instead of raising on a zero divisor."""
    try:
        return a / b
    except ZeroDivisionError:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)


def _pow(base: float, exponent: float) -> float:
    """Raise to a power, yielding NaN or infinity where math.pow would raise."""
    if base == 0 and exponent < 0:
        return math.inf
    try:
        return math.pow(base, exponent)
    except ValueError:
        return math.nan
    except OverflowError:
        return math.inf


@dataclass(frozen=True)
class Vec3:
    """An immutable three-component vector."""

    x: float
    y: float
    z: float

    ZERO: ClassVar[Vec3]
    ONE: ClassVar[Vec3]
    X: ClassVar[Vec3]
    Y: ClassVar[Vec3]
    Z: ClassVar[Vec3]
    NEG_X: ClassVar[Vec3]
    NEG_Y: ClassVar[Vec3]
    NEG_Z: ClassVar[Vec3]

    @classmethod
    def splat(cls, value: float) -> Vec3:
        """A vector with every component set to ``value``."""
        return cls(value, value, value)

    def __add__(self, other):
        if isinstance(other, Vec3):
            return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)
        if isinstance(other, _SCALARS):
            return Vec3(self.x + other, self.y + other, self.z + other)
        return NotImplemented

    def __sub__(self, other):
        if isinstance(other, Vec3):
            return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)
        if isinstance(other, _SCALARS):
            return Vec3(self.x - other, self.y - other, self.z - other)
        return NotImplemented

    def __mul__(self, other):
        if isinstance(other, Vec3):
            return Vec3(self.x * other.x, self.y * other.y, self.z * other.z)
        if isinstance(other, _SCALARS):
            return Vec3(self.x * other, self.y * other, self.z * other)
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, _SCALARS):
            return Vec3(other * self.x, other * self.y, other * self.z)
        return NotImplemented

    def __truediv__(self, other):
        if isinstance(other, Vec3):
            return Vec3(_div(self.x, other.x), _div(self.y, other.y), _div(self.z, other.z))
        if isinstance(other, _SCALARS):
            return Vec3(_div(self.x, other), _div(self.y, other), _div(self.z, other))
        return NotImplemented

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def __getitem__(self, index: int) -> float:
        return (self.x, self.y, self.z)[index]

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def dot(self, other: Vec3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vec3) -> Vec3:
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def length(self) -> float:
        return math.sqrt(self.length_squared())

    def length_squared(self) -> float:
        return self.dot(self)

    def normalize(self) -> Vec3:
        """Unit vector in the same direction; NaN components for a zero vector."""
        return self * _div(1.0, self.length())

    def recip(self) -> Vec3:
        return Vec3(_div(1.0, self.x), _div(1.0, self.y), _div(1.0, self.z))

    def abs(self) -> Vec3:
        return Vec3(abs(self.x), abs(self.y), abs(self.z))

    def lerp(self, other: Vec3, t: float) -> Vec3:
        return self + (other - self) * t

    def reflect(self, normal: Vec3) -> Vec3:
        """Reflect this vector about a plane with the given unit normal."""
        return self - 2.0 * self.dot(normal) * normal

    def powf(self, exponent: float) -> Vec3:
        return Vec3(_pow(self.x, exponent), _pow(self.y, exponent), _pow(self.z, exponent))

    def clamp(self, low: Vec3, high: Vec3) -> Vec3:
        return Vec3(
            min(max(self.x, low.x), high.x),
            min(max(self.y, low.y), high.y),
            min(max(self.z, low.z), high.z),
        )

    def with_component(self, index: int, value: float) -> Vec3:
        """A copy with the component at ``index`` replaced."""
        values = list(self)
        values[index] = value
        return Vec3(*values)


Vec3.ZERO = Vec3(0.0, 0.0, 0.0)
Vec3.ONE = Vec3(1.0, 1.0, 1.0)
Vec3.X = Vec3(1.0, 0.0, 0.0)
Vec3.Y = Vec3(0.0, 1.0, 0.0)
Vec3.Z = Vec3(0.0, 0.0, 1.0)
Vec3.NEG_X = Vec3(-1.0, 0.0, 0.0)
Vec3.NEG_Y = Vec3(0.0, -1.0, 0.0)
Vec3.NEG_Z = Vec3(0.0, 0.0, -1.0)


@dataclass(frozen=True)
class Quat:
    """A rotation quaternion (x, y, z imaginary parts, w real part)."""

    x: float
    y: float
    z: float
    w: float

    @classmethod
    def identity(cls) -> Quat:
        return cls(0.0, 0.0, 0.0, 1.0)

    @classmethod
    def from_rotation_y(cls, angle: float) -> Quat:
        """Rotation of ``angle`` radians about the Y axis."""
        half = angle * 0.5
        return cls(0.0, math.sin(half), 0.0, math.cos(half))

    def inverse(self) -> Quat:
        """Inverse of a unit quaternion (its conjugate)."""
        return Quat(-self.x, -self.y, -self.z, self.w)

    def mul_vec3(self, vector: Vec3) -> Vec3:
        """Rotate ``vector`` by this unit quaternion."""
        b = Vec3(self.x, self.y, self.z)
        w = self.w
        return (
            vector * (w * w - b.dot(b))
            + b * (vector.dot(b) * 2.0)
            + b.cross(vector) * (w * 2.0)
        )


@dataclass(frozen=True)
class Mat3:
    """A 3x3 matrix stored as three column vectors."""

    x_axis: Vec3
    y_axis: Vec3
    z_axis: Vec3

    @classmethod
    def from_cols(cls, x_axis: Vec3, y_axis: Vec3, z_axis: Vec3) -> Mat3:
        return cls(x_axis, y_axis, z_axis)

    @classmethod
    def from_quat(cls, quat: Quat) -> Mat3:
        """Rotation matrix equivalent to a unit quaternion."""
        x, y, z, w = quat.x, quat.y, quat.z, quat.w
        x2, y2, z2 = x + x, y + y, z + z
        xx, xy, xz = x * x2, x * y2, x * z2
        yy, yz, zz = y * y2, y * z2, z * z2
        wx, wy, wz = w * x2, w * y2, w * z2
        return cls(
            Vec3(1.0 - (yy + zz), xy + wz, xz - wy),
            Vec3(xy - wz, 1.0 - (xx + zz), yz + wx),
            Vec3(xz + wy, yz - wx, 1.0 - (xx + yy)),
        )

    def abs(self) -> Mat3:
        return Mat3(self.x_axis.abs(), self.y_axis.abs(), self.z_axis.abs())

    def mul_vec3(self, vector: Vec3) -> Vec3:
        return self.x_axis * vector.x + self.y_axis * vector.y + self.z_axis * vector.z


@dataclass(frozen=True)
class Ray:
    """A ray with an origin and a direction."""

    origin: Vec3
    direction: Vec3

    @classmethod
    def through(cls, origin: Vec3, direction: Vec3) -> Ray:
        """A ray from ``origin`` whose direction is normalized."""
        return cls(origin, direction.normalize())