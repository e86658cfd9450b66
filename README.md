# cornellpath

A compact Monte Carlo path tracer written in pure Python. It ships with a Cornell box
scene. The scene has a white floor, back wall and ceiling, a red and a green side wall,
a square area light under the ceiling, and two boxes rotated about the vertical axis.
One box is a rough metal and the other a glossy dielectric.

The renderer uses:

- next-event estimation. At each non-mirror bounce it samples one randomly chosen light directly.
- multiple importance sampling. Light samples are weighted against BRDF samples.
- a Disney-style BRDF (`cornellpath.disney.Disney`) with a diffuse lobe, a GGX specular lobe
  and a GTR1 clearcoat lobe. Materials with roughness below `1e-5` act as perfect mirrors.
  There is also a plain diffuse `cornellpath.lambertian.LambertianBrdf`.
- Reinhard tone mapping with exposure and gamma, producing 8-bit RGBA pixels.
- a small PNG encoder from the standard library (`zlib`, `struct`).

No third-party libraries are required.

## Installation

```
pip install .
```

## Command line

```
cornellpath
```

This renders the Cornell box with the Disney BRDF and writes `image.png` to the current
directory. The options are:

| option | default | meaning |
| --- | --- | --- |
| `--output`, `-o` | `image.png` | output PNG path |
| `--width` | `640` | image width in pixels |
| `--height` | `480` | image height in pixels |
| `--samples` | `1024` | samples per pixel |
| `--bounces` | `8` | maximum ray bounces |
| `--exposure` | `1.0` | exposure applied before tone mapping |
| `--gamma` | `2.2` | gamma for the final encoding |

Width, height, samples and bounces must be positive integers. Rendering runs in a single
process, and pure Python path tracing is slow. For a quick preview, start with a small
image and a few samples, for example:

```
cornellpath --width 64 --height 48 --samples 16 -o preview.png
```

## Library use

```python
from cornellpath.camera import RenderOptions
from cornellpath.cli import build_cornell_box, default_camera, write_png
from cornellpath.disney import Disney

scene = build_cornell_box()
camera = default_camera()
options = RenderOptions(
    screen_width=64,
    screen_height=48,
    sample_per_pixel=16,
    max_ray_bounces=8,
    exposure=1.0,
    gamma=2.2,
)
rgba = camera.render(scene, Disney(), options)  # bytes, row-major RGBA
write_png("preview.png", options.screen_width, options.screen_height, rgba)
```

`encode_png(width, height, rgba)` returns the PNG as `bytes` without writing it to disk. It
raises `ValueError` when a dimension is not positive or when the pixel data has the wrong
length.

### Building your own scene

1. Create a `Scene` from `cornellpath.scene`.
2. Add objects with `Scene.add_object`:
   - `Cuboid(center, size, rotation=None, material=None)` from `cornellpath.cuboid`
   - `Plane(center, normal, (width, height), material=None)` from `cornellpath.plane`
   - `Sphere(center, radius, material=None)` from `cornellpath.sphere`
3. Describe surfaces with `cornellpath.material.Material`. Any material with
   `is_emissive=True` counts as a light, and its `emission` is the radiance it gives off.
4. Position a camera with `Camera.look_at(position, target, up, fov)` from
   `cornellpath.camera`. `fov` is the vertical field of view in degrees.

`Vec3`, `Quat`, `Mat3` and `Ray` in `cornellpath.vecmath` supply the vector and rotation
maths. Objects implement the `cornellpath.hit.SceneObject` interface, and reflectance
models implement `cornellpath.brdf.Brdf`. Either can be subclassed to add new shapes or
BRDFs.

## What it does not do

- There is no environment or sky lighting. A ray that leaves the scene contributes black,
  and only emissive objects light the scene.
- There is no scene file format. The command line renders only the built-in Cornell box.
  Other scenes are built in Python as shown above.
- Rendering is neither parallel nor progressive. The image is written once all pixels
  are done.
- Materials carry `subsurface`, `specular_tint`, `anisotropic`, `sheen` and `sheen_tint`
  fields, but the BRDFs do not use them.

## Tests

```
pip install .[test]
pytest
```