# duckpond

An interactive OpenGL scene: a rubber duck swims over a square pond inside a
cube-mapped sky. It follows an endless chain of cubic Bezier segments. Each
new segment is chosen at random inside the pond and joined smoothly to the
last one. The water is a damped wave simulation on a height grid. Random
raindrops and the duck's own wake disturb it, and every frame its normals are
uploaded as an RGBA texture for the water shader.

## Installing

```
pip install .
```

This needs a machine that can open an OpenGL window through pyglet. The
window asks for an OpenGL 4.1 context first and falls back to the default
one. Binding a shader sets `GL_PATCH_VERTICES`, which needs OpenGL 4.

## Running

```
duckpond
```

By default the command reads everything from `resources/` in the current
directory. Use `--resources DIR` to point it elsewhere. The directory must hold:

- `shaders/` holding `cube.vert`, `cube.frag`, `water.vert`, `water.frag`,
  `duck.vert` and `duck.frag`
- `textures/cubeTextures/` holding `posx.jpg`, `negx.jpg`, `posy.jpg`,
  `negy.jpg`, `posz.jpg` and `negz.jpg`
- `textures/ducktex.jpg`
- `models/duck.txt`

If an image fails to load, a message is printed and the texture stays empty.
If a shader file or the duck model is missing, the program stops with an
error.

### Controls

- Drag with the left mouse button to orbit the camera around the pond.
- Drag with the right mouse button to zoom. Dragging up moves the camera in,
  dragging down moves it out, and the distance stays between 1 and 100.

The window has no other controls and no on-screen settings panel.

## Duck model format

`duck.txt` is a whitespace-separated text file. It starts with a vertex
count, followed by eight numbers for each vertex: the position (x y z), the
normal (x y z) and the texture coordinates (u v). Next comes a triangle
count, followed by three vertex indices for each triangle.
`duckpond.models.parse_duck_model` reads this format from a string and
returns a `Mesh`. `load_duck_mesh` does the same for a file. Both raise
`ValueError` when the data is truncated or malformed.

## Modules

- `duckpond.vertex`: `Attribute`, `VertexFormat` (with `stride()`,
  `offsets()` and `pack()`), the predefined formats such as
  `POSITION_TEXTURE`, and `Mesh`.
- `duckpond.bspline`: `de_casteljau`, `ray_box_intersection` and `BSpline`
  (`position`, `tangent`, `generate_subsequent_curve`).
- `duckpond.camera`: `look_at`, `perspective` and the orbiting `Camera`
  (`zoom`, `rotate`, `view_matrix`, `position`).
- `duckpond.shaders`: `ShaderType`, `read_shader_code` and `ShaderBuilder`.
- `duckpond.water`: `damping_grid`, `square_mesh` and `WaterSurface`
  (`make_rain`, `step`, `bump`, `normal`, `normal_map`).
- `duckpond.models`: `cube_mesh`, the duck model parser and `DuckMotion`.
- `duckpond.gl`: OpenGL wrappers (`IndexBuffer`, `VertexBuffer`,
  `VertexArray`, `Renderer`, `Shader`), plus `check_errors` and `GLError`.
- `duckpond.textures`: `load_texture`, `load_cubemap` and
  `gl_format_for_channels`.
- `duckpond.app`: `App`, `cubemap_faces` and the `main` command.

## Using the pieces

The parts that do not draw anything work without a window:

```python
import random
from duckpond.bspline import BSpline
from duckpond.water import WaterSurface

rng = random.Random(0)
spline = BSpline((0, 0, 0), (-0.5, 0, 0), (-0.5, 0, 0.5), (0, 0, 0.5),
                 (-0.95, 0, -0.95), (0.95, 0, 0.95), rng)
print(spline.position(0.5), spline.tangent(0.5))
spline.generate_subsequent_curve()

water = WaterSurface(256, rng)
water.bump(0.0, 0.0)
water.step(1 / 60)
rgba = water.normal_map()  # uint8 array of shape (256, 256, 4)
```

Matrices from `duckpond.camera` and `DuckMotion.model_matrix` are row-major
numpy arrays that act on column vectors. `Shader.set_mat4` transposes them
for OpenGL.

## Tests

```
pip install .[test]
pytest
```