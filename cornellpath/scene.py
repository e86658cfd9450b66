"""A collection of objects that rays are traced against."""

from __future__ import annotations

from cornellpath.hit import HitRecord, SceneObject
from cornellpath.vecmath import Ray


class Scene:
    """Objects in insertion order, with a count of the emissive ones."""

    def __init__(self) -> None:
        self._light_count = 0
        self._objects: list[SceneObject] = []

    def light_count(self) -> int:
        """Number of emissive objects."""
        return self._light_count

    def objects(self) -> tuple[SceneObject, ...]:
        """All objects in the order they were added."""
        return tuple(self._objects)

    def add_object(self, obj: SceneObject) -> None:
        if obj.material().is_emissive:
            self._light_count += 1
        self._objects.append(obj)

    def hit(self, ray: Ray, t_min: float, t_max: float) -> HitRecord | None:
        """The closest hit within [t_min, t_max], or None."""
        closest: HitRecord | None = None
        closest_t = t_max

        for index, obj in enumerate(self._objects):
            if not obj.bounding_box().is_intersecting(ray):
                continue
            record = obj.intersect(ray, t_min, closest_t, index)
            if record is not None:
                closest_t = record.t
                closest = record

        return closest