"""Pinhole camera and the path tracer that drives it."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass

from cornellpath.brdf import Brdf
from cornellpath.hit import HitRecord
from cornellpath.scene import Scene
from cornellpath.vecmath import Ray, Vec3

_EPSILON = 1e-5


@dataclass(frozen=True)
class RenderOptions:
    """Image size, sampling and tone-mapping settings."""

    screen_width: int
    screen_height: int
    sample_per_pixel: int
    max_ray_bounces: int
    exposure: float
    gamma: float


@dataclass(frozen=True)
class Camera:
    """A pinhole camera with a vertical field of view in degrees."""

    position: Vec3
    direction: Vec3
    up: Vec3
    fov: float

    @classmethod
    def look_at(cls, position: Vec3, target: Vec3, up: Vec3, fov: float) -> Camera:
        """A camera at ``position`` facing ``target`` with ``up`` made orthogonal."""
        direction = (target - position).normalize()
        right = direction.cross(up).normalize()
        true_up = right.cross(direction).normalize()
        return cls(position, direction, true_up, fov)

    def cast_ray(self, aspect_ratio: float, pixel_x: float, pixel_y: float) -> Ray:
        """The primary ray through a point given in [0, 1] screen coordinates."""
        ndc_x = pixel_x * 2.0 - 1.0
        ndc_y = 1.0 - pixel_y * 2.0

        tan_fov_half = math.tan(math.radians(self.fov) / 2.0)
        plane_x = ndc_x * aspect_ratio * tan_fov_half
        plane_y = ndc_y * tan_fov_half

        right = self.direction.cross(self.up).normalize()
        up = right.cross(self.direction).normalize()

        direction = (self.direction + right * plane_x + up * plane_y).normalize()
        return Ray.through(self.position, direction)

    def render(self, scene: Scene, brdf: Brdf, options: RenderOptions) -> bytes:
        """Render the scene to row-major RGBA8 pixels."""
        width = options.screen_width
        height = options.screen_height
        aspect_ratio = width / height
        samples = options.sample_per_pixel

        frame = bytearray()
        for y in range(height):
            for x in range(width):
                color = Vec3.ZERO
                for _ in range(samples):
                    pixel_x = (x + random.random()) / width
                    pixel_y = (y + random.random()) / height
                    ray = self.cast_ray(aspect_ratio, pixel_x, pixel_y)
                    color = color + trace_ray(ray, scene, brdf, options.max_ray_bounces)
                mapped = map_hdr_to_sdr(color / samples, options.exposure, options.gamma)
                frame.extend(_to_byte(channel) for channel in mapped)
                frame.append(255)
        return bytes(frame)


def _to_byte(value: float) -> int:
    scaled = value * 255.0
    if math.isnan(scaled):
        return 0
    scaled = min(max(scaled, 0.0), 255.0)
    return int(math.floor(scaled + 0.5))


def map_hdr_to_sdr(color: Vec3, exposure: float, gamma: float) -> Vec3:
    """Reinhard tone mapping followed by gamma correction."""
    exposed = color * exposure
    mapped = exposed / (exposed + 1.0)
    return mapped.powf(1.0 / gamma)


def trace_ray(
    ray: Ray,
    scene: Scene,
    brdf: Brdf,
    depth: int,
    hit: HitRecord | None = None,
) -> Vec3:
    """Outgoing radiance along ``ray``, with next-event estimation and MIS.

    The BRDF sample's attenuation already holds f_r * cos_theta / pdf.
    """
    if depth == 0:
        return Vec3.ZERO

    if hit is None:
        hit = scene.hit(ray, _EPSILON, math.inf)
    if hit is None or not hit.front_face:
        return Vec3.ZERO

    material = hit.obj.material()
    if material.is_emissive:
        # ideal light sources do not reflect light
        return material.emission

    is_delta = brdf.is_delta_surface(material)
    view = -ray.direction
    if is_delta:
        direct_term = Vec3.ZERO
    else:
        direct_term = compute_nee_contribution(hit, scene, brdf, view)

    sample = brdf.sample(view, hit.normal, material)
    if sample.attenuation.length_squared() < _EPSILON or sample.pdf < _EPSILON:
        return direct_term

    next_ray = Ray.through(hit.point + hit.normal * _EPSILON, sample.direction)
    next_hit = scene.hit(next_ray, _EPSILON, math.inf)

    if next_hit is None:
        indirect_term = Vec3.ZERO
    elif next_hit.obj.material().is_emissive and is_delta:
        indirect_term = next_hit.obj.material().emission * sample.attenuation
    elif next_hit.obj.material().is_emissive:
        pdf_brdf = sample.pdf
        r_squared = (next_hit.point - hit.point).length_squared()
        cos_theta_l = max(0.0, next_hit.normal.dot(-next_ray.direction))
        if cos_theta_l < _EPSILON:
            indirect_term = Vec3.ZERO
        else:
            light_area = next_hit.obj.area()
            n_light = scene.light_count()
            pdf_light = (r_squared / (cos_theta_l * light_area)) / n_light
            mis_weight_brdf = pdf_brdf / (pdf_light + pdf_brdf)
            indirect_term = (
                next_hit.obj.material().emission * sample.attenuation * mis_weight_brdf
            )
    else:
        indirect_term = (
            trace_ray(next_ray, scene, brdf, depth - 1, next_hit) * sample.attenuation
        )

    return direct_term + indirect_term


def compute_nee_contribution(hit: HitRecord, scene: Scene, brdf: Brdf, view: Vec3) -> Vec3:
    """Direct lighting from one randomly chosen light, weighted for MIS."""
    lights = [
        (index, obj) for index, obj in enumerate(scene.objects()) if obj.material().is_emissive
    ]
    if not lights:
        return Vec3.ZERO
    light_index, light = random.choice(lights)

    n_light_inv = 1.0 / scene.light_count()
    area = light.area()
    if area < _EPSILON:
        return Vec3.ZERO
    area_inv = 1.0 / area

    light_point = light.sample_point()
    diff = light_point.point - hit.point
    r_squared = diff.length_squared()
    if r_squared < _EPSILON:
        # treat a light this close as if it were behind the surface
        return Vec3.ZERO

    r = math.sqrt(r_squared)
    light_direction = diff / r

    cos_theta = max(0.0, hit.normal.dot(light_direction))
    cos_theta_l = max(0.0, light_point.normal.dot(-light_direction))
    if cos_theta_l < _EPSILON:
        return Vec3.ZERO

    shadow_ray = Ray.through(hit.point + hit.normal * _EPSILON, light_direction)
    blocker = scene.hit(shadow_ray, _EPSILON, r)
    if blocker is not None and blocker.object_index != light_index:
        return Vec3.ZERO

    evaluated = brdf.eval(view, hit.normal, light_direction, hit.obj.material())
    pdf_brdf = evaluated.pdf
    pdf_light = r_squared / cos_theta_l * area_inv * n_light_inv

    if pdf_brdf < _EPSILON and pdf_light < _EPSILON:
        return Vec3.ZERO

    mis_weight = pdf_light / (pdf_brdf + pdf_light)
    geometry = cos_theta * cos_theta_l / r_squared
    contribution = light.material().emission * evaluated.f_r * geometry
    pdf_area = area_inv * n_light_inv
    return (contribution / pdf_area) * mis_weight