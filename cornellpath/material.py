"""Surface material parameters."""

from __future__ import annotations

from dataclasses import dataclass, field

from cornellpath.vecmath import Vec3


@dataclass(frozen=True)
class Material:
    """Principled surface description; emissive materials act as lights."""

    is_emissive: bool = False
    emission: Vec3 = field(default_factory=lambda: Vec3.ZERO)
    albedo: Vec3 = field(default_factory=lambda: Vec3.ONE)
    subsurface: float = 0.0
    metallic: float = 0.0
    specular: float = 0.0
    specular_tint: Vec3 = field(default_factory=lambda: Vec3.ONE)
    roughness: float = 1.0
    anisotropic: float = 0.0
    sheen: float = 0.0
    sheen_tint: Vec3 = field(default_factory=lambda: Vec3.ZERO)
    clearcoat: float = 0.0
    clearcoat_gloss: float = 0.0