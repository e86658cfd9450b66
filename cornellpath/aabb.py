"""Axis-aligned bounding boxes."""

from __future__ import annotations

import math
from dataclasses import dataclass

from cornellpath.vecmath import Ray, Vec3


def _fmin(a: float, b: float) -> float:
    if math.isnan(a):
        return b
    if math.isnan(b):
        return a
    return a if a < b else b


def _fmax(a: float, b: float) -> float:
    if math.isnan(a):
        return b
    if math.isnan(b):
        return a
    return a if a > b else b


@dataclass(frozen=True)
class Aabb:
    """A box spanned by its minimum and maximum corners."""

    min: Vec3
    max: Vec3

    def is_intersecting(self, ray: Ray) -> bool:
        """Whether the ray (for t >= 0) passes through the box."""
        t_min = 0.0
        t_max = math.inf
        direction_inv = ray.direction.recip()

        for inv, low, high, origin in zip(direction_inv, self.min, self.max, ray.origin):
            t_low = inv * (low - origin)
            t_high = inv * (high - origin)
            t_min = _fmax(t_min, _fmin(t_low, t_high))
            t_max = _fmin(t_max, _fmax(t_low, t_high))

        return t_min <= t_max