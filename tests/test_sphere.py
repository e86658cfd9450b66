import math
import random

import pytest

from cornellpath.material import Material
from cornellpath.sphere import Sphere
from cornellpath.vecmath import Ray, Vec3


def _close(a: Vec3, b: Vec3, tol: float = 1e-6) -> bool:
    return all(abs(p - q) <= tol for p, q in zip(a, b))


def test_unit_sphere_area():
    assert Sphere(Vec3.ZERO, 1.0).area() == pytest.approx(4.0 * math.pi)


def test_area_scales_with_square_of_radius():
    small = Sphere(Vec3.ZERO, 1.5)
    large = Sphere(Vec3.ZERO, 3.0)
    assert large.area() == pytest.approx(small.area() * 4.0)


def test_material_is_returned():
    material = Material(roughness=0.3)
    assert Sphere(Vec3.ZERO, 1.0, material).material() is material


def test_sample_point_tiny_sphere_returns_center():
    center = Vec3(1.0, 2.0, 3.0)
    sample = Sphere(center, 0.0).sample_point()
    assert sample.point == center
    assert sample.normal == Vec3.Y


def test_sample_points_lie_on_surface():
    random.seed(5)
    center = Vec3(1.0, -2.0, 0.5)
    radius = 2.5
    sphere = Sphere(center, radius)
    for _ in range(200):
        sample = sphere.sample_point()
        offset = sample.point - center
        assert offset.length() == pytest.approx(radius)
        assert _close(sample.normal, offset / radius)


def test_bounding_box():
    center = Vec3(1.0, 2.0, 3.0)
    radius = 0.5
    aabb = Sphere(center, radius).bounding_box()
    assert tuple(aabb.min) == pytest.approx((0.5, 1.5, 2.5), abs=1e-6)
    assert tuple(aabb.max) == pytest.approx((1.5, 2.5, 3.5), abs=1e-6)


def test_intersect_from_outside():
    sphere = Sphere(Vec3.ZERO, 1.0)
    ray = Ray.through(Vec3(0.0, 0.0, 5.0), Vec3(0.0, 0.0, -1.0))
    hit = sphere.intersect(ray, 1e-5, math.inf, 3)
    assert hit is not None
    assert hit.t == pytest.approx(4.0)
    assert _close(hit.point, Vec3.Z)
    assert _close(hit.normal, Vec3.Z)
    assert hit.front_face
    assert hit.object_index == 3
    assert hit.obj is sphere


def test_intersect_from_inside_uses_far_root():
    sphere = Sphere(Vec3.ZERO, 1.0)
    ray = Ray.through(Vec3.ZERO, Vec3.NEG_Z)
    hit = sphere.intersect(ray, 1e-5, math.inf, 0)
    assert hit is not None
    assert hit.t == pytest.approx(sphere.radius)
    assert not hit.front_face
    assert _close(hit.normal, Vec3.Z)


def test_intersect_miss():
    sphere = Sphere(Vec3.ZERO, 1.0)
    ray = Ray.through(Vec3(0.0, 3.0, 5.0), Vec3(0.0, 0.0, -1.0))
    assert sphere.intersect(ray, 1e-5, math.inf, 0) is None


def test_intersect_respects_t_max():
    sphere = Sphere(Vec3.ZERO, 1.0)
    ray = Ray.through(Vec3(0.0, 0.0, 5.0), Vec3(0.0, 0.0, -1.0))
    assert sphere.intersect(ray, 1e-5, 2.0, 0) is None


def test_intersect_sphere_behind_ray():
    sphere = Sphere(Vec3.ZERO, 1.0)
    ray = Ray.through(Vec3(0.0, 0.0, 5.0), Vec3.Z)
    assert sphere.intersect(ray, 1e-5, math.inf, 0) is None