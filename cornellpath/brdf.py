"""The BRDF interface and shared sampling helpers."""

from __future__ import annotations

import math
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from cornellpath.vecmath import Mat3, Vec3

if TYPE_CHECKING:
    from cornellpath.material import Material


@dataclass(frozen=True)
class BrdfEval:
    """BRDF value and sampling density for a given light direction."""

    f_r: Vec3
    pdf: float

    ZERO: ClassVar[BrdfEval]


BrdfEval.ZERO = BrdfEval(Vec3.ZERO, 0.0)


@dataclass(frozen=True)
class BrdfSample:
    """A sampled light direction with its weight (f_r * cos / pdf) and density."""

    attenuation: Vec3
    direction: Vec3
    pdf: float

    ZERO: ClassVar[BrdfSample]


BrdfSample.ZERO = BrdfSample(Vec3.ZERO, Vec3.ZERO, 0.0)


class Brdf(ABC):
    """A reflectance model."""

    @abstractmethod
    def is_delta_surface(self, material: Material) -> bool:
        """Whether the surface is a perfect mirror."""

    @abstractmethod
    def eval(self, view: Vec3, normal: Vec3, light: Vec3, material: Material) -> BrdfEval:
        """Evaluate the BRDF and its pdf for a light direction."""

    @abstractmethod
    def sample(self, view: Vec3, normal: Vec3, material: Material) -> BrdfSample:
        """Draw a light direction."""


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def random_cosine_direction(normal: Vec3) -> Vec3:
    """A cosine-weighted random direction in the hemisphere around ``normal``."""
    r1 = random.random()
    r2 = random.random()

    r = math.sqrt(r2)
    phi = 2.0 * math.pi * r1

    x = r * math.cos(phi)
    y = r * math.sin(phi)
    z = math.sqrt(max(0.0, 1.0 - r2))

    tbn = create_orthonormal_basis(normal)
    return tbn.mul_vec3(Vec3(x, y, z)).normalize()


def create_orthonormal_basis(normal: Vec3) -> Mat3:
    """Tangent, bitangent and normal as the columns of a matrix."""
    n = normal
    if abs(n.x) > abs(n.y):
        tangent = Vec3(n.z, 0.0, -n.x) / math.sqrt(n.x * n.x + n.z * n.z)
    else:
        tangent = Vec3(0.0, -n.z, n.y) / math.sqrt(n.y * n.y + n.z * n.z)
    bitangent = n.cross(tangent)
    return Mat3.from_cols(tangent, bitangent, n)