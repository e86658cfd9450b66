"""Render the Cornell box scene to a PNG file."""

from __future__ import annotations

import argparse
import math
import struct
import zlib
from pathlib import Path

from cornellpath.camera import Camera, RenderOptions
from cornellpath.cuboid import Cuboid
from cornellpath.disney import Disney
from cornellpath.material import Material
from cornellpath.plane import Plane
from cornellpath.scene import Scene
from cornellpath.vecmath import Quat, Vec3

MATERIAL_WHITE = Material(
    albedo=Vec3.ONE, roughness=1.0, clearcoat=1.0, clearcoat_gloss=0.95
)
MATERIAL_RED = Material(
    albedo=Vec3(1.0, 0.0, 0.0), roughness=1.0, clearcoat=1.0, clearcoat_gloss=0.95
)
MATERIAL_GREEN = Material(
    albedo=Vec3(0.0, 1.0, 0.0), roughness=1.0, clearcoat=1.0, clearcoat_gloss=0.95
)
MATERIAL_LIGHT = Material(
    is_emissive=True, emission=Vec3(10.0, 10.0, 10.0), albedo=Vec3.ZERO, roughness=1.0
)
MATERIAL_BOX_1 = Material(albedo=Vec3.ONE, metallic=0.8, roughness=0.1)
MATERIAL_BOX_2 = Material(albedo=Vec3.ONE, specular=0.2, roughness=0.1)

BOX_SIZE = 2.5
BOX_THICKNESS = 0.1
BOX_OFFSET = (BOX_SIZE + BOX_THICKNESS) * 0.5
LIGHT_SIZE = 0.5

_PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def build_cornell_box() -> Scene:
    """Walls, a ceiling light and two boxes."""
    scene = Scene()
    identity = Quat.identity()

    scene.add_object(Cuboid(
        Vec3(0.0, -BOX_OFFSET, 0.0), Vec3(BOX_SIZE, BOX_THICKNESS, BOX_SIZE),
        identity, MATERIAL_WHITE,
    ))
    scene.add_object(Cuboid(
        Vec3(0.0, 0.0, -BOX_OFFSET), Vec3(BOX_SIZE, BOX_SIZE, BOX_THICKNESS),
        identity, MATERIAL_WHITE,
    ))
    scene.add_object(Cuboid(
        Vec3(0.0, BOX_OFFSET, 0.0), Vec3(BOX_SIZE, BOX_THICKNESS, BOX_SIZE),
        identity, MATERIAL_WHITE,
    ))

    scene.add_object(Cuboid(
        Vec3(-BOX_OFFSET, 0.0, 0.0), Vec3(BOX_THICKNESS, BOX_SIZE, BOX_SIZE),
        identity, MATERIAL_RED,
    ))
    scene.add_object(Cuboid(
        Vec3(BOX_OFFSET, 0.0, 0.0), Vec3(BOX_THICKNESS, BOX_SIZE, BOX_SIZE),
        identity, MATERIAL_GREEN,
    ))

    scene.add_object(Plane(
        Vec3(0.0, BOX_OFFSET - BOX_THICKNESS * 0.5 - 1e-3, 0.0),
        Vec3.NEG_Y,
        (LIGHT_SIZE, LIGHT_SIZE),
        MATERIAL_LIGHT,
    ))

    scene.add_object(Cuboid(
        Vec3(-0.35, -BOX_OFFSET + 0.8, -0.35), Vec3(0.8, 1.6, 0.8),
        Quat.from_rotation_y(math.radians(20.0)), MATERIAL_BOX_1,
    ))
    scene.add_object(Cuboid(
        Vec3(0.45, -BOX_OFFSET + 0.35, 0.35), Vec3(0.7, 0.7, 0.7),
        Quat.from_rotation_y(math.radians(-20.0)), MATERIAL_BOX_2,
    ))
    return scene


def default_camera() -> Camera:
    return Camera.look_at(Vec3(0.0, 0.0, 3.25), Vec3.ZERO, Vec3(0.0, 1.0, 0.0), 60.0)


def _chunk(kind: bytes, data: bytes) -> bytes:
    return (
        struct.pack(">I", len(data))
        + kind
        + data
        + struct.pack(">I", zlib.crc32(kind + data) & 0xFFFFFFFF)
    )


def encode_png(width: int, height: int, rgba: bytes) -> bytes:
    """Encode 8-bit RGBA pixels, row-major, as a PNG image."""
    stride = width * 4
    if width <= 0 or height <= 0:
        raise ValueError("image dimensions must be positive")
    if len(rgba) != stride * height:
        raise ValueError(
            f"expected {stride * height} bytes of RGBA data, got {len(rgba)}"
        )
    header = struct.pack(">IIBBBBB", width, height, 8, 6, 0, 0, 0)
    raw = b"".join(
        b"\x00" + bytes(rgba[row * stride:(row + 1) * stride]) for row in range(height)
    )
    return (
        _PNG_SIGNATURE
        + _chunk(b"IHDR", header)
        + _chunk(b"IDAT", zlib.compress(raw))
        + _chunk(b"IEND", b"")
    )


def write_png(path, width: int, height: int, rgba: bytes) -> None:
    Path(path).write_bytes(encode_png(width, height, rgba))


def _positive_int(text: str) -> int:
    value = int(text)
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be positive: {text}")
    return value


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cornellpath", description="Path trace the Cornell box to a PNG image."
    )
    parser.add_argument("--output", "-o", default="image.png", help="output PNG path")
    parser.add_argument("--width", type=_positive_int, default=640)
    parser.add_argument("--height", type=_positive_int, default=480)
    parser.add_argument("--samples", type=_positive_int, default=1024,
                        help="samples per pixel")
    parser.add_argument("--bounces", type=_positive_int, default=8,
                        help="maximum ray bounces")
    parser.add_argument("--exposure", type=float, default=1.0)
    parser.add_argument("--gamma", type=float, default=2.2)
    return parser


def main(argv=None) -> int:
    args = _parser().parse_args(argv)
    options = RenderOptions(
        screen_width=args.width,
        screen_height=args.height,
        sample_per_pixel=args.samples,
        max_ray_bounces=args.bounces,
        exposure=args.exposure,
        gamma=args.gamma,
    )
    frame = default_camera().render(build_cornell_box(), Disney(), options)
    write_png(args.output, args.width, args.height, frame)
    return 0