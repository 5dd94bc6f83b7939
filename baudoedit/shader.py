"""Loading, compiling and linking GLSL shaders.

The graphics library is only imported when a shader is compiled or linked,
so reading shader sources needs no graphics context.
"""

from __future__ import annotations

import os

__all__ = ["ShaderError", "read_shader_file", "compile_shader", "link_program"]

_STAGE_NAMES = ("vertex", "fragment", "geometry", "compute", "tesscontrol", "tessevaluation")


class ShaderError(RuntimeError):
    """A shader could not be read, compiled or linked."""


def _stage_name(shader_type) -> str:
    if isinstance(shader_type, str):
        if shader_type in _STAGE_NAMES:
            return shader_type
        raise ShaderError(f"unknown shader type {shader_type!r}")
    from pyglet import gl

    stages = {
        gl.GL_VERTEX_SHADER: "vertex",
        gl.GL_FRAGMENT_SHADER: "fragment",
        gl.GL_GEOMETRY_SHADER: "geometry",
    }
    try:
        return stages[shader_type]
    except KeyError:
        raise ShaderError(f"unknown shader type {shader_type!r}") from None


def read_shader_file(path: str | os.PathLike) -> str:
    """Return the text of a shader source file, exactly as stored."""
    try:
        with open(path, encoding="utf-8", newline="") as handle:
            return handle.read()
    except FileNotFoundError as error:
        raise ShaderError(f'the file "{path}" does not exist') from error
    except OSError as error:
        raise ShaderError(f'cannot read "{path}": {error.strerror}') from error
    except UnicodeDecodeError as error:
        raise ShaderError(f'"{path}" is not valid UTF-8 text') from error


def compile_shader(source: str, shader_type):
    """Compile GLSL source into a shader of the given type and return it.

    The type is either an OpenGL shader enum or a stage name such as "vertex".
    """
    stage = _stage_name(shader_type)
    from pyglet.graphics.shader import Shader, ShaderException

    try:
        return Shader(source, stage)
    except ShaderException as error:
        raise ShaderError(f"compile error:\n{error}") from error


def link_program(vertex_shader, fragment_shader):
    """Link two compiled shaders into a program and return it.

    The shaders are deleted once the program is linked.
    """
    from pyglet.graphics.shader import ShaderException, ShaderProgram

    try:
        program = ShaderProgram(vertex_shader, fragment_shader)
    except ShaderException as error:
        raise ShaderError(f"linking error:\n{error}") from error
    finally:
        vertex_shader.delete()
        fragment_shader.delete()
    return program