"""An oriented rectangular box."""

from __future__ import annotations

import math
import random

from cornellpath.aabb import Aabb
from cornellpath.hit import HitRecord, PointOnObject, SceneObject
from cornellpath.material import Material
from cornellpath.vecmath import Mat3, Quat, Ray, Vec3


def _inv(value: float) -> float:
    """1 / value with IEEE semantics for signed zeros."""
    if value == 0.0:
        return math.copysign(math.inf, value)
    return 1.0 / value


def _fmin(a: float, b: float) -> float:
    if math.isnan(a):
        return b
    if math.isnan(b):
        return a
    return a if a < b else b


class Cuboid(SceneObject):
    """A box with the given center, edge lengths and rotation."""

    def __init__(
        self,
        center: Vec3,
        size: Vec3,
        rotation: Quat | None = None,
        material: Material | None = None,
    ) -> None:
        self.center = center
        self.size = size
        self.rotation = rotation if rotation is not None else Quat.identity()
        self._material = material if material is not None else Material()

    def __repr__(self) -> str:
        return (
            f"Cuboid(center={self.center!r}, size={self.size!r}, "
            f"rotation={self.rotation!r}, material={self._material!r})"
        )

    def material(self) -> Material:
        return self._material

    def area(self) -> float:
        s = self.size
        return s.x * s.y * 2.0 + s.x * s.z * 2.0 + s.y * s.z * 2.0

    def sample_point(self) -> PointOnObject:
        area = self.area()
        if area < 1e-5:
            return PointOnObject(self.center, Vec3.Y)

        s = self.size
        face_x = s.y * s.z * 2.0
        face_y = s.x * s.z * 2.0
        face_z = s.x * s.y * 2.0

        area_inv = 1.0 / area
        p_x = face_x * area_inv * 0.5
        p_y = face_y * area_inv * 0.5
        p_z = face_z * area_inv * 0.5

        cdf_x_plus = p_x
        cdf_x_minus = cdf_x_plus + p_x
        cdf_y_plus = cdf_x_minus + p_y
        cdf_y_minus = cdf_y_plus + p_y
        cdf_z_plus = cdf_y_minus + p_z

        u = random.random()
        v = random.random()
        dice = random.random()

        a = u * 2.0 - 1.0
        b = v * 2.0 - 1.0
        hx, hy, hz = s.x * 0.5, s.y * 0.5, s.z * 0.5

        if dice < cdf_x_plus:
            local_point, local_normal = Vec3(hx, a * hy, b * hz), Vec3.X
        elif dice < cdf_x_minus:
            local_point, local_normal = Vec3(-hx, a * hy, b * hz), Vec3.NEG_X
        elif dice < cdf_y_plus:
            local_point, local_normal = Vec3(a * hx, hy, b * hz), Vec3.Y
        elif dice < cdf_y_minus:
            local_point, local_normal = Vec3(a * hx, -hy, b * hz), Vec3.NEG_Y
        elif dice < cdf_z_plus:
            local_point, local_normal = Vec3(a * hx, b * hy, hz), Vec3.Z
        else:
            local_point, local_normal = Vec3(a * hx, b * hy, -hz), Vec3.NEG_Z

        return PointOnObject(
            point=self.rotation.mul_vec3(local_point) + self.center,
            normal=self.rotation.mul_vec3(local_normal),
        )

    def bounding_box(self) -> Aabb:
        half_size = self.size * 0.5
        half_extent = Mat3.from_quat(self.rotation).abs().mul_vec3(half_size)
        return Aabb(min=self.center - half_extent, max=self.center + half_extent)

    def intersect(
        self, ray: Ray, t_min: float, t_max: float, object_index: int
    ) -> HitRecord | None:
        half_size = self.size * 0.5
        inv_rotation = self.rotation.inverse()
        local_origin = inv_rotation.mul_vec3(ray.origin - self.center)
        local_direction = inv_rotation.mul_vec3(ray.direction)

        t_near = -math.inf
        t_far = math.inf
        hit_normal_local = Vec3.ZERO

        axes = zip(half_size, local_origin, local_direction)
        for axis, (half, origin, direction) in enumerate(axes):
            inv_d = _inv(direction)
            t1 = (-half - origin) * inv_d
            t2 = (half - origin) * inv_d
            normal = Vec3.ZERO.with_component(axis, -1.0)

            if t2 < t1:
                t1, t2 = t2, t1
                normal = -normal

            if t_near < t1:
                t_near = t1
                hit_normal_local = normal

            t_far = _fmin(t_far, t2)

            if t_far <= t_near:
                return None

        if t_min <= t_near <= t_max:
            t_hit = t_near
        elif t_min <= t_far <= t_max:
            t_hit = t_far
        else:
            return None

        local_hit = local_origin + local_direction * t_hit
        world_hit = self.rotation.mul_vec3(local_hit) + self.center
        world_normal = self.rotation.mul_vec3(hit_normal_local).normalize()

        return HitRecord.from_outward(
            world_hit, world_normal, t_hit, ray.direction, self, object_index
        )