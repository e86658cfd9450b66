"""A Disney-style principled BRDF with diffuse, specular and clearcoat lobes."""

from __future__ import annotations

import math
import random

from cornellpath.brdf import (
    Brdf,
    BrdfEval,
    BrdfSample,
    create_orthonormal_basis,
    lerp,
    random_cosine_direction,
)
from cornellpath.material import Material
from cornellpath.vecmath import Vec3

FRAC_1_PI = 1.0 / math.pi


def _div(a: float, b: float) -> float:
    try:
        return a / b
    except ZeroDivisionError:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)


class Disney(Brdf):
    """Principled BRDF driven by the material's metallic, specular, roughness and clearcoat."""

    @staticmethod
    def compute_lobe_weights(material: Material) -> tuple[float, float, float]:
        """Probabilities of sampling the clearcoat, specular and diffuse lobes."""
        # the clearcoat lobe has at most a 25% chance of being sampled
        p_clearcoat_lobe = 0.25 * material.clearcoat
        p_base_lobe = 1.0 - p_clearcoat_lobe

        metallic_weight = material.metallic
        dielectric_weight = 1.0 - material.metallic

        specular_weight = metallic_weight + dielectric_weight * material.specular
        diffuse_weight = dielectric_weight * (1.0 - material.specular)

        return (
            p_clearcoat_lobe,
            p_base_lobe * specular_weight,
            p_base_lobe * diffuse_weight,
        )

    def is_delta_surface(self, material: Material) -> bool:
        return material.roughness < 1e-5

    def eval(self, view: Vec3, normal: Vec3, light: Vec3, material: Material) -> BrdfEval:
        half = (view + light).normalize()

        n_dot_h = normal.dot(half)
        n_dot_l = normal.dot(light)
        n_dot_v = normal.dot(view)
        v_dot_h = view.dot(half)
        l_dot_h = light.dot(half)

        if n_dot_l < 1e-5:
            return BrdfEval.ZERO

        pdf_clearcoat = ggx_pdf_clearcoat(n_dot_h, v_dot_h, material.clearcoat_gloss)
        pdf_specular = ggx_pdf_specular(n_dot_h, v_dot_h, material.roughness)
        pdf_diffuse = max(0.0, n_dot_l) * FRAC_1_PI

        dielectric_f0 = Vec3.splat(material.specular * 0.08)
        f0 = dielectric_f0.lerp(material.albedo, material.metallic)

        cc = clearcoat_term(n_dot_h, n_dot_v, n_dot_l, l_dot_h, material.clearcoat_gloss)
        spec = specular_term(n_dot_h, n_dot_v, n_dot_l, l_dot_h, material.roughness, f0)
        diff = diffuse_term(n_dot_v, n_dot_l, l_dot_h, material.roughness, material.albedo)

        p_clearcoat_lobe, p_specular_lobe, p_diffuse_lobe = self.compute_lobe_weights(material)

        diffuse_weight = (1.0 - material.metallic) * (1.0 - material.specular)
        f_r = cc + (1.0 - diffuse_weight) * spec + diffuse_weight * diff
        pdf = (
            p_clearcoat_lobe * pdf_clearcoat
            + p_specular_lobe * pdf_specular
            + p_diffuse_lobe * pdf_diffuse
        )

        if pdf < 1e-5:
            return BrdfEval.ZERO
        return BrdfEval(f_r, pdf)

    def sample(self, view: Vec3, normal: Vec3, material: Material) -> BrdfSample:
        if self.is_delta_surface(material):
            light = (-view).reflect(normal)
            n_dot_v = max(0.0, normal.dot(view))
            dielectric = fresnel_term(n_dot_v, Vec3.splat(material.specular * 0.08))
            attenuation = dielectric.lerp(material.albedo, material.metallic)
            return BrdfSample(attenuation=attenuation, direction=light, pdf=1.0)

        p_clearcoat_lobe, p_specular_lobe, _ = self.compute_lobe_weights(material)
        dice = random.random()

        if dice < p_clearcoat_lobe:
            light = (-view).reflect(gtr1_importance_sample(normal, material.clearcoat_gloss))
        elif dice < p_clearcoat_lobe + p_specular_lobe:
            light = (-view).reflect(gtr2_importance_sample(normal, material.roughness))
        else:
            light = random_cosine_direction(normal)

        evaluated = self.eval(view, normal, light, material)
        if evaluated.pdf < 1e-5:
            return BrdfSample.ZERO

        n_dot_l = max(0.0, normal.dot(light))
        attenuation = evaluated.f_r * n_dot_l / evaluated.pdf
        return BrdfSample(attenuation=attenuation, direction=light, pdf=evaluated.pdf)


def distribution_term_specular(n_dot_h: float, roughness: float) -> float:
    """GGX (GTR2) normal distribution."""
    alpha = roughness * roughness
    alpha2 = alpha * alpha
    denom_core = n_dot_h * n_dot_h * (alpha2 - 1.0) + 1.0
    denom = math.pi * denom_core * denom_core
    return alpha2 / max(1e-5, denom)


def distribution_term_clearcoat(n_dot_h: float, gloss: float) -> float:
    """GTR1 normal distribution used by the clearcoat lobe."""
    alpha = lerp(0.1, 0.001, gloss)
    alpha2 = alpha * alpha
    denom_core = n_dot_h * n_dot_h * (alpha2 - 1.0) + 1.0
    if abs(alpha2 - 1.0) < 1e-5:
        c = 1.0 / math.pi
    else:
        c = (alpha2 - 1.0) / (math.pi * math.log(alpha2))
    return c / max(1e-5, denom_core)


def fresnel_term(l_dot_h: float, f0: Vec3) -> Vec3:
    """Schlick's Fresnel approximation."""
    return f0 + (Vec3.ONE - f0) * ((1.0 - l_dot_h) ** 5)


def geometry_term(n_dot_v: float, n_dot_l: float, roughness: float) -> float:
    """Smith-Schlick masking-shadowing term."""
    k = (roughness + 1.0) ** 2 / 8.0

    def g1(n_dot_x: float) -> float:
        return n_dot_x / max(1e-5, n_dot_x * (1.0 - k) + k)

    return g1(n_dot_v) * g1(n_dot_l)


def diffuse_term(
    n_dot_v: float, n_dot_l: float, l_dot_h: float, roughness: float, base_color: Vec3
) -> Vec3:
    """Disney retro-reflective diffuse."""
    fd90 = 0.5 + 2.0 * roughness * l_dot_h * l_dot_h
    fdv = 1.0 + (fd90 - 1.0) * (1.0 - n_dot_v) ** 5
    fdl = 1.0 + (fd90 - 1.0) * (1.0 - n_dot_l) ** 5
    return base_color * max(0.0, fdv * fdl * FRAC_1_PI)


def specular_term(
    n_dot_h: float,
    n_dot_v: float,
    n_dot_l: float,
    l_dot_h: float,
    roughness: float,
    f0: Vec3,
) -> Vec3:
    denom = max(1e-5, 4.0 * n_dot_v * n_dot_l)
    return (
        distribution_term_specular(n_dot_h, roughness)
        * fresnel_term(l_dot_h, f0)
        * geometry_term(n_dot_v, n_dot_l, roughness)
        / denom
    )


def clearcoat_term(
    n_dot_h: float, n_dot_v: float, n_dot_l: float, l_dot_h: float, gloss: float
) -> Vec3:
    denom = max(1e-5, 4.0 * n_dot_v * n_dot_l)
    return (
        distribution_term_clearcoat(n_dot_h, gloss)
        * fresnel_term(l_dot_h, Vec3.splat(0.04))
        * geometry_term(n_dot_v, n_dot_l, 0.25)
        / denom
    )


def _to_world(normal: Vec3, cos_theta: float, sin_theta: float, phi: float) -> Vec3:
    local = Vec3(sin_theta * math.cos(phi), sin_theta * math.sin(phi), cos_theta)
    return create_orthonormal_basis(normal).mul_vec3(local)


def gtr2_importance_sample(normal: Vec3, roughness: float) -> Vec3:
    """A half vector drawn from the GGX distribution around ``normal``."""
    r1 = random.random()
    r2 = random.random()
    alpha = roughness * roughness
    alpha2 = alpha * alpha
    cos_theta = math.sqrt((1.0 - r1) / (r1 * (alpha2 - 1.0) + 1.0))
    sin_theta = math.sqrt(max(0.0, 1.0 - cos_theta * cos_theta))
    return _to_world(normal, cos_theta, sin_theta, 2.0 * math.pi * r2)


def gtr1_importance_sample(normal: Vec3, gloss: float) -> Vec3:
    """A half vector drawn from the GTR1 distribution around ``normal``."""
    r1 = random.random()
    r2 = random.random()
    alpha = lerp(0.1, 0.001, gloss)
    alpha2 = alpha * alpha
    cos_theta_sq = (1.0 - alpha2 ** (1.0 - r1)) / (1.0 - alpha2)
    cos_theta = math.sqrt(max(0.0, cos_theta_sq))
    sin_theta = math.sqrt(max(0.0, 1.0 - cos_theta_sq))
    return _to_world(normal, cos_theta, sin_theta, 2.0 * math.pi * r2)


def ggx_pdf_specular(n_dot_h: float, v_dot_h: float, roughness: float) -> float:
    return _div(distribution_term_specular(n_dot_h, roughness) * n_dot_h, 4.0 * v_dot_h)


def ggx_pdf_clearcoat(n_dot_h: float, v_dot_h: float, gloss: float) -> float:
    return _div(distribution_term_clearcoat(n_dot_h, gloss) * n_dot_h, 4.0 * v_dot_h)