"""A finite rectangle facing along a normal."""

from __future__ import annotations

import random

from cornellpath.aabb import Aabb
from cornellpath.hit import HitRecord, PointOnObject, SceneObject
from cornellpath.material import Material
from cornellpath.vecmath import Mat3, Ray, Vec3


class Plane(SceneObject):
    """A rectangle of ``size`` (width, height) centred at ``center``."""

    def __init__(
        self,
        center: Vec3,
        normal: Vec3,
        size: tuple[float, float],
        material: Material | None = None,
    ) -> None:
        self.center = center
        self.normal = normal
        self.size = (float(size[0]), float(size[1]))
        self._material = material if material is not None else Material()

    def __repr__(self) -> str:
        return (
            f"Plane(center={self.center!r}, normal={self.normal!r}, "
            f"size={self.size!r}, material={self._material!r})"
        )

    def rotation(self) -> Mat3:
        """Local frame whose z column is the plane normal."""
        new_z = self.normal
        temp_up = Vec3.Y if abs(new_z.x) > 0.9 or abs(new_z.z) > 0.9 else Vec3.X
        new_x = temp_up.cross(new_z).normalize()
        new_y = new_z.cross(new_x).normalize()
        return Mat3.from_cols(new_x, new_y, new_z)

    def material(self) -> Material:
        return self._material

    def area(self) -> float:
        width, height = self.size
        return width * height

    def sample_point(self) -> PointOnObject:
        u = random.random()
        v = random.random()
        width, height = self.size
        local_point = Vec3((u - 0.5) * width, (v - 0.5) * height, 0.0)
        world_point = self.center + self.rotation().mul_vec3(local_point)
        return PointOnObject(point=world_point, normal=self.normal)

    def bounding_box(self) -> Aabb:
        width, height = self.size
        half_size = Vec3(width * 0.5, height * 0.5, 1e-3)
        half_extent = self.rotation().abs().mul_vec3(half_size)
        return Aabb(min=self.center - half_extent, max=self.center + half_extent)

    def intersect(
        self, ray: Ray, t_min: float, t_max: float, object_index: int
    ) -> HitRecord | None:
        denominator = self.normal.dot(ray.direction)
        if abs(denominator) < 1e-5:
            return None

        t = (self.center - ray.origin).dot(self.normal) / denominator
        if t < t_min or t > t_max:
            return None

        hit_point = ray.origin + ray.direction * t
        offset = hit_point - self.center

        rotation = self.rotation()
        local_x = offset.dot(rotation.x_axis)
        local_y = offset.dot(rotation.y_axis)

        width, height = self.size
        if abs(local_x) > width * 0.5 or abs(local_y) > height * 0.5:
            return None

        return HitRecord.from_outward(
            hit_point, self.normal, t, ray.direction, self, object_index
        )