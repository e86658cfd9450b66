import math
import random

import pytest

from cornellpath.brdf import BrdfEval
from cornellpath.disney import (
    Disney,
    clearcoat_term,
    diffuse_term,
    distribution_term_clearcoat,
    distribution_term_specular,
    fresnel_term,
    geometry_term,
    ggx_pdf_clearcoat,
    ggx_pdf_specular,
    gtr1_importance_sample,
    gtr2_importance_sample,
    specular_term,
)
from cornellpath.material import Material
from cornellpath.vecmath import Vec3

MIXED = Material(
    albedo=Vec3(0.8, 0.6, 0.4),
    metallic=0.3,
    specular=0.2,
    roughness=0.5,
    clearcoat=0.5,
    clearcoat_gloss=0.7,
)


def test_lobe_weights_full_clearcoat():
    cc, spec, diff = Disney.compute_lobe_weights(Material(clearcoat=1.0))
    assert cc == 0.25
    assert spec + diff == pytest.approx(1.0 - cc)


def test_lobe_weights_metallic_has_no_diffuse():
    cc, spec, diff = Disney.compute_lobe_weights(Material(metallic=1.0, clearcoat=0.4))
    assert diff == 0.0
    assert spec == pytest.approx(1.0 - cc)


def test_lobe_weights_dielectric_specular():
    cc, spec, diff = Disney.compute_lobe_weights(Material(specular=0.2))
    assert cc == 0.0
    assert spec == pytest.approx(0.2)
    assert spec + diff == pytest.approx(1.0)


def test_is_delta_surface():
    assert Disney().is_delta_surface(Material(roughness=0.0)) is True
    assert Disney().is_delta_surface(Material(roughness=1.0)) is False


def test_eval_below_horizon_is_zero():
    result = Disney().eval(Vec3.Y, Vec3.Y, Vec3(0.5, -1.0, 0.0).normalize(), MIXED)
    assert result == BrdfEval.ZERO


def test_eval_above_horizon_is_positive():
    view = Vec3(1.0, 1.0, 0.0).normalize()
    light = Vec3(-1.0, 1.0, 0.2).normalize()
    result = Disney().eval(view, Vec3.Y, light, MIXED)
    assert result.pdf > 0.0
    assert all(c >= 0.0 for c in result.f_r)


def test_delta_sample_mirrors_view():
    view = Vec3(1.0, 1.0, 0.0).normalize()
    s = Disney().sample(view, Vec3.Y, Material(roughness=0.0))
    assert s.pdf == 1.0
    assert s.direction.y == pytest.approx(view.y)
    assert s.direction.x == pytest.approx(-view.x)


def test_delta_metal_attenuation_is_albedo():
    metal = Material(roughness=0.0, metallic=1.0, albedo=Vec3(0.9, 0.5, 0.1))
    s = Disney().sample(Vec3.Y, Vec3.Y, metal)
    assert tuple(s.attenuation) == pytest.approx(tuple(metal.albedo))


def test_delta_dielectric_normal_incidence():
    s = Disney().sample(Vec3.Y, Vec3.Y, Material(roughness=0.0, specular=0.5))
    assert tuple(s.attenuation) == pytest.approx((0.04, 0.04, 0.04))


def test_sample_consistent_with_eval():
    random.seed(2024)
    brdf = Disney()
    normal = Vec3.Y
    view = Vec3(0.3, 1.0, 0.0).normalize()
    accepted = 0
    for _ in range(300):
        s = brdf.sample(view, normal, MIXED)
        if s.pdf == 0.0:
            continue
        accepted += 1
        assert s.direction.dot(normal) >= 1e-5
        assert s.pdf == pytest.approx(brdf.eval(view, normal, s.direction, MIXED).pdf)
        assert all(math.isfinite(c) and c >= 0.0 for c in s.attenuation)
    assert accepted > 100


def test_fresnel_limits():
    f0 = Vec3(0.1, 0.2, 0.3)
    assert tuple(fresnel_term(1.0, f0)) == pytest.approx(tuple(f0))
    assert tuple(fresnel_term(0.0, f0)) == pytest.approx((1.0, 1.0, 1.0))


@pytest.mark.parametrize("roughness", [0.0, 0.3, 1.0])
def test_geometry_term_head_on(roughness):
    assert geometry_term(1.0, 1.0, roughness) == pytest.approx(1.0)
    assert geometry_term(0.2, 0.3, roughness) < 1.0


def test_distribution_specular_uniform_roughness():
    assert distribution_term_specular(1.0, 1.0) == pytest.approx(1.0 / math.pi)
    assert distribution_term_specular(0.3, 1.0) == pytest.approx(1.0 / math.pi)


def test_distribution_specular_peaks_at_normal():
    assert distribution_term_specular(1.0, 0.3) > distribution_term_specular(0.8, 0.3)


def test_distribution_clearcoat_peaks_at_normal():
    d_peak = distribution_term_clearcoat(1.0, 0.5)
    assert d_peak > distribution_term_clearcoat(0.5, 0.5) > 0.0


def test_diffuse_term_linear_in_base_color():
    color = Vec3(0.2, 0.5, 0.9)
    white = diffuse_term(0.7, 0.6, 0.8, 0.4, Vec3.ONE)
    tinted = diffuse_term(0.7, 0.6, 0.8, 0.4, color)
    assert tuple(tinted) == pytest.approx(tuple(white * color))


def test_specular_term_zero_without_reflectance():
    assert specular_term(1.0, 1.0, 1.0, 1.0, 0.5, Vec3.ZERO) == Vec3.ZERO


def test_clearcoat_term_is_grey_and_positive():
    c = clearcoat_term(0.9, 0.8, 0.7, 0.9, 0.5)
    assert c.x > 0.0
    assert c.x == c.y == c.z


@pytest.mark.parametrize("sampler,param", [(gtr2_importance_sample, 0.4), (gtr1_importance_sample, 0.6)])
def test_importance_samples_unit_and_in_hemisphere(sampler, param):
    random.seed(5)
    normal = Vec3(0.2, 0.9, -0.3).normalize()
    for _ in range(200):
        h = sampler(normal, param)
        assert h.length() == pytest.approx(1.0)
        assert h.dot(normal) >= -1e-9


def test_ggx_pdfs_relate_to_distributions():
    assert ggx_pdf_specular(1.0, 1.0, 0.5) == pytest.approx(distribution_term_specular(1.0, 0.5) / 4)
    assert ggx_pdf_clearcoat(1.0, 1.0, 0.5) == pytest.approx(distribution_term_clearcoat(1.0, 0.5) / 4)


def test_ggx_pdf_zero_denominator_is_infinite():
    assert ggx_pdf_specular(1.0, 0.0, 0.5) == math.inf