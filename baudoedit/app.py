"""The interactive scene editor window and its command-line entry point."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

import numpy as np

from baudoedit.bem import BemFormatError, Mesh, read_bem, read_meshes
from baudoedit.editor import Camera, EditMode, Editor
from baudoedit.shader import ShaderError, compile_shader, link_program, read_shader_file
from baudoedit.transform import Projection

__all__ = ["EngineWindow", "parse_args", "main"]

_SHADER_PAIRS = (("standard.vert", "standard.frag"), ("select.vert", "select.frag"))
_FRAME_INTERVAL = 1 / 60
_FLOAT_SIZE = 4
_UINT_SIZE = 4


@dataclass
class _GpuMesh:
    vao: int
    count: int
    shader: int


def _format_vec(values: Sequence[float]) -> str:
    return "{" + ",".join(f"{value:f}" for value in values) + "}"


class EngineWindow:
    """An editor window: renders the scene and turns input into edits.

    Keys W/S, Space/Left Ctrl and A/D move along the three axes; hold R, T
    or Y with Escape-released movement to rotate, translate or scale the
    selected model instead. Ctrl+S saves, P removes the selected model,
    Right Shift adds one. The mouse wheel changes the selection (with Left
    Shift: the group; with Z held: shifts the model along x).
    """

    def __init__(
        self,
        editor: Editor,
        meshes: Sequence[Mesh],
        shader_sources: Sequence[tuple[str, str]],
        *,
        save_path: str = "test.bem",
        width: int = 800,
        height: int = 500,
    ) -> None:
        import pyglet
        from pyglet import gl
        from pyglet.window import key

        self._gl = gl
        self.editor = editor
        self.camera = Camera()
        self.projection = Projection()
        self.save_path = save_path
        self.movement_enabled = True

        config = gl.Config(major_version=3, minor_version=3, depth_size=24, double_buffer=True)
        self.window = pyglet.window.Window(
            width=width, height=height, caption="baudo-engine", resizable=True, config=config
        )
        self.keys = key.KeyStateHandler()
        self.window.push_handlers(self)
        self.window.push_handlers(self.keys)
        self.window.set_exclusive_mouse(True)

        self._changes = {
            key.W: (1.0, 0.0, 0.0),
            key.S: (-1.0, 0.0, 0.0),
            key.SPACE: (0.0, 1.0, 0.0),
            key.LCTRL: (0.0, -1.0, 0.0),
            key.A: (0.0, 0.0, 1.0),
            key.D: (0.0, 0.0, -1.0),
        }
        self._modes = {key.R: EditMode.ROTATE, key.T: EditMode.TRANSLATE, key.Y: EditMode.SCALE}
        self._key = key

        self._programs = [
            link_program(
                compile_shader(vertex, gl.GL_VERTEX_SHADER),
                compile_shader(fragment, gl.GL_FRAGMENT_SHADER),
            )
            for vertex, fragment in shader_sources
        ]
        self._meshes = [self._upload(mesh) for mesh in meshes]
        self._projection_matrix = self.projection.matrix()

        gl.glEnable(gl.GL_DEPTH_TEST)
        pyglet.clock.schedule_interval(self._update, _FRAME_INTERVAL)

    def _upload(self, mesh: Mesh) -> _GpuMesh:
        gl = self._gl
        vao = (gl.GLuint * 1)()
        gl.glGenVertexArrays(1, vao)
        gl.glBindVertexArray(vao[0])

        flat_indices = [index for triangle in mesh.indices for index in triangle]
        indices = (gl.GLuint * len(flat_indices))(*flat_indices)
        ebo = (gl.GLuint * 1)()
        gl.glGenBuffers(1, ebo)
        gl.glBindBuffer(gl.GL_ELEMENT_ARRAY_BUFFER, ebo[0])
        gl.glBufferData(
            gl.GL_ELEMENT_ARRAY_BUFFER, len(flat_indices) * _UINT_SIZE, indices, gl.GL_STATIC_DRAW
        )

        flat_vertices = [value for vertex in mesh.vertices for value in vertex]
        vertices = (gl.GLfloat * len(flat_vertices))(*flat_vertices)
        vbo = (gl.GLuint * 1)()
        gl.glGenBuffers(1, vbo)
        gl.glBindBuffer(gl.GL_ARRAY_BUFFER, vbo[0])
        gl.glBufferData(
            gl.GL_ARRAY_BUFFER, len(flat_vertices) * _FLOAT_SIZE, vertices, gl.GL_STATIC_DRAW
        )

        stride = 6 * _FLOAT_SIZE
        gl.glVertexAttribPointer(0, 3, gl.GL_FLOAT, gl.GL_FALSE, stride, 0)
        gl.glEnableVertexAttribArray(0)
        gl.glVertexAttribPointer(1, 3, gl.GL_FLOAT, gl.GL_FALSE, stride, 3 * _FLOAT_SIZE)
        gl.glEnableVertexAttribArray(1)
        gl.glBindVertexArray(0)
        return _GpuMesh(vao=vao[0], count=len(flat_indices), shader=mesh.shader)

    @staticmethod
    def _set_matrix(program, name: str, matrix: np.ndarray) -> None:
        if name in program.uniforms:
            program[name] = tuple(float(v) for v in np.asarray(matrix, dtype=float).T.ravel())

    def _update(self, dt: float) -> None:
        if not self.movement_enabled:
            return
        key, keys = self._key, self.keys
        forward = keys[key.W] - keys[key.S]
        right = keys[key.D] - keys[key.A]
        up = keys[key.SPACE] - keys[key.LCTRL]
        if forward or right or up:
            self.camera.move(forward, right, up)

    def on_draw(self) -> None:
        """Render every model instance, then outline the selected one."""
        gl = self._gl
        gl.glClearColor(0.5, 0.5, 0.5, 1.0)
        gl.glClear(gl.GL_COLOR_BUFFER_BIT | gl.GL_DEPTH_BUFFER_BIT)
        view = self.camera.view_matrix()

        for mesh, matrices in zip(self._meshes, self.editor.model_matrices()):
            program = self._programs[mesh.shader]
            gl.glBindVertexArray(mesh.vao)
            program.use()
            self._set_matrix(program, "camera", view)
            self._set_matrix(program, "projection", self._projection_matrix)
            for matrix in matrices:
                self._set_matrix(program, "model", matrix)
                gl.glDrawElements(gl.GL_TRIANGLES, mesh.count, gl.GL_UNSIGNED_INT, None)

        try:
            selected = self.editor.selected()
        except IndexError:
            return
        mesh = self._meshes[self.editor.group_index]
        program = self._programs[1]
        gl.glBindVertexArray(mesh.vao)
        program.use()
        self._set_matrix(program, "camera", view)
        self._set_matrix(program, "projection", self._projection_matrix)
        self._set_matrix(program, "model", selected.matrix())
        gl.glDrawElements(gl.GL_LINES, mesh.count, gl.GL_UNSIGNED_INT, None)

    def _edit(self, symbol: int) -> None:
        held = [mode for held_key, mode in self._modes.items() if self.keys[held_key]]
        change = self._changes.get(symbol)
        if not held or change is None:
            return
        try:
            model = self.editor.nudge(held[0], change)
        except IndexError:
            return
        print(f"model.pos={_format_vec(model.pos)}")
        print(f"model.rotation={_format_vec(model.rotation)}")
        print(f"model.scale={_format_vec(model.scale)}\n")

    def on_key_press(self, symbol: int, modifiers: int) -> bool:
        """Handle editing keys; Escape toggles between flying and editing."""
        key = self._key
        if symbol == key.ESCAPE:
            self.movement_enabled = not self.movement_enabled
        if not self.movement_enabled and any(self.keys[k] for k in self._modes):
            if symbol not in self._changes:
                return True
            self._edit(symbol)
        if self.keys[key.LCTRL] and symbol == key.S:
            self.editor.save(self.save_path)
            print("file saved.")
        if symbol == key.P:
            try:
                self.editor.remove_selected()
            except IndexError:
                pass
        if symbol == key.RSHIFT:
            self.editor.add_model()
        return True

    def on_mouse_motion(self, x: int, y: int, dx: int, dy: int) -> None:
        """Turn the camera with the mouse."""
        self.camera.look(dx, -dy)

    def on_mouse_scroll(self, x: int, y: int, scroll_x: float, scroll_y: float) -> None:
        """Change the selection, or shift the selected model with Z held."""
        step = int(scroll_y) or (1 if scroll_y > 0 else -1 if scroll_y < 0 else 0)
        if not step:
            return
        key = self._key
        if self.keys[key.LSHIFT]:
            self.editor.cycle_group(step)
            if self.editor.model_index >= len(self.editor.groups[self.editor.group_index]):
                self.editor.model_index = 0
        elif self.keys[key.Z]:
            try:
                self.editor.shift_x(step)
            except IndexError:
                pass
        else:
            self.editor.cycle_model(step)

    def on_resize(self, width: int, height: int) -> bool:
        """Resize the viewport; the projection keeps its aspect ratio."""
        gl = self._gl
        gl.glViewport(0, 0, *self.window.get_framebuffer_size())
        self._projection_matrix = self.projection.matrix()
        return True


def parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    """Parse the command line: a scene file and a mesh file."""
    parser = argparse.ArgumentParser(prog="baudoedit", description="Edit a .bem scene.")
    parser.add_argument("scene", help="scene (.bem) file to edit")
    parser.add_argument("meshes", help="mesh file with one mesh per scene group")
    parser.add_argument("--shader-dir", default="shader", help="directory of GLSL shaders")
    parser.add_argument("--save", default="test.bem", help="file written by Ctrl+S")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Load the scene and meshes, open the editor window and run until it closes."""
    args = parse_args(argv)
    try:
        groups = read_bem(args.scene)
        if not groups:
            raise BemFormatError(f"{args.scene}: the scene has no groups")
        meshes = read_meshes(args.meshes, len(groups))
        shader_dir = Path(args.shader_dir)
        sources = [
            (read_shader_file(shader_dir / vertex), read_shader_file(shader_dir / fragment))
            for vertex, fragment in _SHADER_PAIRS
        ]
    except (OSError, BemFormatError, ShaderError) as error:
        print(f"error: {error}", file=sys.stderr)
        return 1

    import pyglet

    try:
        EngineWindow(Editor(groups), meshes, sources, save_path=args.save)
    except ShaderError as error:
        print(f"error: {error}", file=sys.stderr)
        return 1
    pyglet.app.run()
    return 0