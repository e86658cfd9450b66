"""A sphere."""

from __future__ import annotations

import math
import random

from cornellpath.aabb import Aabb
from cornellpath.hit import HitRecord, PointOnObject, SceneObject
from cornellpath.material import Material
from cornellpath.vecmath import Ray, Vec3


class Sphere(SceneObject):
    """A sphere of ``radius`` around ``center``."""

    def __init__(self, center: Vec3, radius: float, material: Material | None = None) -> None:
        self.center = center
        self.radius = radius
        self._material = material if material is not None else Material()

    def __repr__(self) -> str:
        return (
            f"Sphere(center={self.center!r}, radius={self.radius!r}, "
            f"material={self._material!r})"
        )

    def material(self) -> Material:
        return self._material

    def area(self) -> float:
        return 4.0 * math.pi * self.radius * self.radius

    def sample_point(self) -> PointOnObject:
        if self.radius < 1e-5:
            return PointOnObject(self.center, Vec3.Y)

        r1 = random.random()
        r2 = random.random()
        phi = 2.0 * math.pi * r1
        theta = math.acos(2.0 * r2 - 1.0)

        direction = Vec3(
            math.cos(phi) * math.sin(theta),
            math.sin(phi) * math.sin(theta),
            math.cos(theta),
        )
        point = direction * self.radius + self.center
        return PointOnObject(point=point, normal=(point - self.center).normalize())

    def bounding_box(self) -> Aabb:
        extent = Vec3.splat(self.radius)
        return Aabb(min=self.center - extent, max=self.center + extent)

    def intersect(
        self, ray: Ray, t_min: float, t_max: float, object_index: int
    ) -> HitRecord | None:
        oc = ray.origin - self.center
        a = ray.direction.length_squared()
        if a == 0.0:
            return None
        half_b = oc.dot(ray.direction)
        c = oc.length_squared() - self.radius * self.radius
        discriminant = half_b * half_b - a * c

        if discriminant < 0.0:
            return None

        sqrt_discriminant = math.sqrt(discriminant)
        t = (-half_b - sqrt_discriminant) / a
        if t < t_min or t > t_max:
            t = (-half_b + sqrt_discriminant) / a
            if t < t_min or t > t_max:
                return None

        point = ray.origin + ray.direction * t
        outward_normal = (point - self.center).normalize()
        return HitRecord.from_outward(
            point, outward_normal, t, ray.direction, self, object_index
        )