"""Ray hit records and the interface every scene object implements."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

from cornellpath.vecmath import Ray, Vec3

if TYPE_CHECKING:
    from cornellpath.aabb import Aabb
    from cornellpath.material import Material


@dataclass(frozen=True)
class HitRecord:
    """Where and how a ray struck an object."""

    point: Vec3
    normal: Vec3
    t: float
    front_face: bool
    obj: SceneObject
    object_index: int

    @classmethod
    def from_outward(
        cls,
        point: Vec3,
        outward_normal: Vec3,
        t: float,
        ray_direction: Vec3,
        obj: SceneObject,
        object_index: int,
    ) -> HitRecord:
        """Build a record whose normal always faces against the ray."""
        front_face = ray_direction.dot(outward_normal) < 0.0
        normal = outward_normal if front_face else -outward_normal
        return cls(point, normal, t, front_face, obj, object_index)


@dataclass(frozen=True)
class PointOnObject:
    """A point on an object's surface with the surface normal there."""

    point: Vec3
    normal: Vec3


class SceneObject(ABC):
    """A renderable surface."""

    @abstractmethod
    def material(self) -> Material:
        """The object's material."""

    @abstractmethod
    def area(self) -> float:
        """Total surface area."""

    @abstractmethod
    def sample_point(self) -> PointOnObject:
        """A random point on the surface, uniform over area."""

    @abstractmethod
    def bounding_box(self) -> Aabb:
        """An axis-aligned box enclosing the object."""

    @abstractmethod
    def intersect(
        self, ray: Ray, t_min: float, t_max: float, object_index: int
    ) -> HitRecord | None:
        """The hit within [t_min, t_max], or None."""