# baudoedit

baudoedit is a small interactive 3D scene editor. A scene is made of groups,
one group per mesh, and each group holds any number of model instances, each
with its own position, rotation and scale. The meshes come from a mesh file;
the placement of every instance comes from a scene (`.bem`) file, which the
editor can write back.

## Installing

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Running the editor

```
baudoedit SCENE.bem MESHES.vao
```

- `SCENE.bem`: the scene file with the model transformations.
- `MESHES.vao`: the mesh file; it must hold at least one mesh for every group
  in the scene, in the same order.
- `--shader-dir DIR`: directory holding `standard.vert`, `standard.frag`,
  `select.vert` and `select.frag` (default: `shader`, relative to the working
  directory). The first pair draws the scene, the second outlines the
  selected model.
- `--save PATH`: file written when saving (default: `test.bem`).

If a file is missing or malformed, the scene has no groups, or a shader fails
to compile or link, the command prints `error: ...` to standard error and exits
with status 1. The window asks for an OpenGL 3.3 context.

### Controls

Camera (while movement is enabled, which is the starting state):

- mouse: look around (the pointer is captured by the window)
- `W` / `S`: move forward / backward
- `A` / `D`: strafe left / right
- `Space` / `Left Ctrl`: move up / down
- `Esc`: toggle between camera movement and editing

Editing (movement disabled): hold a mode key and press a direction key.

- hold `R` to rotate (steps of a quarter turn), `T` to translate (steps of 1),
  `Y` to scale (steps of 1) the selected model
- `W` / `S` change the X axis, `Space` / `Left Ctrl` the Y axis,
  `A` / `D` the Z axis
- after each change the model's position, rotation and scale are printed

Selection and instances:

- mouse wheel: select the next or previous model in the current group
- `Left Shift` + mouse wheel: select the next or previous group
- `Z` + mouse wheel: shift the selected model along X
- `Right Shift`: add a model with the default transformation to the current group
- `P`: remove the selected model (the group's last model takes its place)
- `Left Ctrl` + `S`: save the scene to the `--save` file

Selections wrap around at both ends.

## File formats

All values are little-endian.

Scene file: an int32 group count, then for each group an int32 model count
followed by that many records of nine float32 values (position, rotation in
radians, scale). Saving appends a trailing int32 zero. Files shorter than
8 bytes are rejected.

Mesh file: meshes back to back, each an int32 vertex count, six float32 values
per vertex (position and colour), an int32 triangle count and three int32
indices per triangle.

## Using it as a library

```python
from baudoedit.bem import read_bem, save_bem
from baudoedit.transform import ModelTransformation

groups = read_bem("scene.bem")
groups[0].append(ModelTransformation())
save_bem("scene.bem", groups)

matrix = groups[0][0].matrix()   # 4x4 numpy array
```

- `baudoedit.transform`: `ModelTransformation` (with `matrix()`),
  `Projection` (field of view in degrees, with `matrix()`), `model_matrix`,
  `perspective` (field of view in radians), `look_at`, `deg_to_rad` and
  `rad_to_deg`. Matrices are numpy arrays that transform column vectors;
  transpose them before passing them to OpenGL.
- `baudoedit.bem`: `read_bem`, `save_bem`, `read_meshes(path, count)`,
  `write_meshes` and the `Mesh` dataclass. Malformed files raise
  `BemFormatError`, a `ValueError`.
- `baudoedit.editor`: `Editor` holds the groups and the selection
  (`selected`, `cycle_group`, `cycle_model`, `nudge`, `shift_x`,
  `remove_selected`, `add_model`, `model_matrices`, `save`) independently of
  any window; `Camera` offers `look`, `move` and `view_matrix`; `EditMode`
  names the rotate, translate and scale modes.
- `baudoedit.shader`: `read_shader_file`, `compile_shader`, `link_program`
  and `ShaderError`. Compiling and linking need a current OpenGL context.
- `baudoedit.app`: `EngineWindow`, `parse_args` and `main`, the command's
  entry point.

## What it does not do

The editor only changes where instances are placed. It does not create or edit
mesh geometry (mesh files can be written with `write_meshes`, but not from the
window), it does not ship any shaders, and resizing the window does not change
the projection's aspect ratio.