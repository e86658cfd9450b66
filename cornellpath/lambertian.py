"""Ideal diffuse reflectance."""

from __future__ import annotations

import math

from cornellpath.brdf import Brdf, BrdfEval, BrdfSample, random_cosine_direction
from cornellpath.material import Material
from cornellpath.vecmath import Vec3

FRAC_1_PI = 1.0 / math.pi


class LambertianBrdf(Brdf):
    """A perfectly diffuse surface using the material albedo."""

    def is_delta_surface(self, material: Material) -> bool:
        return False

    def eval(self, view: Vec3, normal: Vec3, light: Vec3, material: Material) -> BrdfEval:
        cos_theta = normal.dot(light)
        if cos_theta <= 0.0:
            return BrdfEval.ZERO
        return BrdfEval(material.albedo * FRAC_1_PI, max(0.0, cos_theta) * FRAC_1_PI)

    def sample(self, view: Vec3, normal: Vec3, material: Material) -> BrdfSample:
        light = random_cosine_direction(normal)
        pdf = max(0.0, normal.dot(light)) * FRAC_1_PI
        return BrdfSample(attenuation=material.albedo, direction=light, pdf=pdf)