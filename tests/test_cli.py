import struct
import zlib

import pytest

from cornellpath.cli import (
    build_cornell_box,
    default_camera,
    encode_png,
    main,
    write_png,
)
from cornellpath.plane import Plane
from cornellpath.vecmath import Vec3

SIGNATURE = b"\x89PNG\r\n\x1a\n"


def _chunks(data):
    assert data[:8] == SIGNATURE
    pos = 8
    chunks = []
    while pos < len(data):
        (length,) = struct.unpack(">I", data[pos:pos + 4])
        kind = data[pos + 4:pos + 8]
        body = data[pos + 8:pos + 8 + length]
        (crc,) = struct.unpack(">I", data[pos + 8 + length:pos + 12 + length])
        assert crc == zlib.crc32(kind + body) & 0xFFFFFFFF
        chunks.append((kind, body))
        pos += 12 + length
    return chunks


def _decode(data):
    chunks = _chunks(data)
    header = dict(chunks)[b"IHDR"]
    width, height, depth, color, _, _, _ = struct.unpack(">IIBBBBB", header)
    raw = zlib.decompress(b"".join(body for kind, body in chunks if kind == b"IDAT"))
    stride = width * 4 + 1
    rows = [raw[i * stride:(i + 1) * stride] for i in range(height)]
    assert all(row[0] == 0 for row in rows)
    return width, height, depth, color, b"".join(row[1:] for row in rows)


def test_encode_png_round_trip():
    pixels = bytes(range(2 * 3 * 4))
    width, height, depth, color, decoded = _decode(encode_png(2, 3, pixels))
    assert (width, height, depth, color) == (2, 3, 8, 6)
    assert decoded == pixels


def test_encode_png_chunk_order():
    kinds = [kind for kind, _ in _chunks(encode_png(1, 1, b"\x01\x02\x03\xff"))]
    assert kinds[0] == b"IHDR"
    assert kinds[-1] == b"IEND"


def test_encode_png_rejects_wrong_length():
    with pytest.raises(ValueError):
        encode_png(2, 2, b"\x00" * 15)


def test_write_png_matches_encoding(tmp_path):
    pixels = bytes([10, 20, 30, 255]) * 4
    path = tmp_path / "out.png"
    write_png(path, 2, 2, pixels)
    assert path.read_bytes() == encode_png(2, 2, pixels)


def test_cornell_box_layout():
    scene = build_cornell_box()
    objects = scene.objects()
    assert len(objects) == 8
    assert scene.light_count() == 1
    light = objects[5]
    assert isinstance(light, Plane)
    assert light.material().is_emissive
    assert light.normal == Vec3.NEG_Y
    assert sum(obj.material().is_emissive for obj in objects) == 1


def test_default_camera_faces_origin():
    camera = default_camera()
    assert camera.position == Vec3(0.0, 0.0, 3.25)
    assert camera.fov == 60.0
    assert camera.direction == Vec3(0.0, 0.0, -1.0)


def test_main_writes_small_image(tmp_path):
    path = tmp_path / "render.png"
    code = main([
        "--output", str(path), "--width", "3", "--height", "2",
        "--samples", "1", "--bounces", "2",
    ])
    assert code == 0
    width, height, depth, color, pixels = _decode(path.read_bytes())
    assert (width, height) == (3, 2)
    assert len(pixels) == 3 * 2 * 4
    assert pixels[3::4] == bytes([255]) * 6


def test_main_rejects_non_positive_size(tmp_path):
    with pytest.raises(SystemExit):
        main(["--output", str(tmp_path / "x.png"), "--width", "0"])