"""Reading and writing scene (.bem) and mesh files.

A scene file holds groups of model transformations, one group per mesh:
a little-endian int32 group count, then for each group an int32 model
count followed by that many records of nine float32 values (position,
rotation, scale). Saving appends an int32 zero.

A mesh file holds meshes back to back: an int32 vertex count, six float32
values per vertex, an int32 triangle count and three int32 indices per
triangle.
"""

from __future__ import annotations

import logging
import os
import struct
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Sequence

from baudoedit.transform import ModelTransformation

__all__ = ["BemFormatError", "Mesh", "read_bem", "save_bem", "read_meshes", "write_meshes"]

log = logging.getLogger(__name__)

_INT = struct.Struct("<i")
_MODEL = struct.Struct("<9f")
_VERTEX = struct.Struct("<6f")
_TRIANGLE = struct.Struct("<3i")
_MIN_SCENE_SIZE = 8


class BemFormatError(ValueError):
    """A scene or mesh file is malformed."""


@dataclass
class Mesh:
    """Vertices of six floats (position and colour) and triangle indices."""

    vertices: list[tuple[float, ...]] = field(default_factory=list)
    indices: list[tuple[int, int, int]] = field(default_factory=list)
    shader: int = 0

    def __post_init__(self) -> None:
        self.vertices = [tuple(float(v) for v in vertex) for vertex in self.vertices]
        if any(len(vertex) != 6 for vertex in self.vertices):
            raise ValueError("each vertex must have exactly 6 components")
        self.indices = [tuple(int(i) for i in triangle) for triangle in self.indices]
        if any(len(triangle) != 3 for triangle in self.indices):
            raise ValueError("each triangle must have exactly 3 indices")


class _Reader:
    def __init__(self, data: bytes) -> None:
        self._data = data
        self._offset = 0

    def take(self, size: int) -> bytes:
        end = self._offset + size
        if end > len(self._data):
            raise BemFormatError(
                f"unexpected end of file at byte {self._offset} (needed {size} more bytes)"
            )
        chunk = self._data[self._offset:end]
        self._offset = end
        return chunk

    def count(self, what: str) -> int:
        (value,) = _INT.unpack(self.take(_INT.size))
        if value < 0:
            raise BemFormatError(f"negative {what} count: {value}")
        return value

    def records(self, record: struct.Struct, count: int) -> Iterable[tuple]:
        return record.iter_unpack(self.take(record.size * count))


def read_bem(path: str | os.PathLike) -> list[list[ModelTransformation]]:
    """Read a scene file and return its groups of model transformations."""
    data = Path(path).read_bytes()
    log.debug("scene file size=%d", len(data))
    if len(data) < _MIN_SCENE_SIZE:
        raise BemFormatError("the file is too short")
    reader = _Reader(data)
    groups = []
    for _ in range(reader.count("group")):
        number = reader.count("model")
        groups.append(
            [
                ModelTransformation(pos=values[0:3], rotation=values[3:6], scale=values[6:9])
                for values in reader.records(_MODEL, number)
            ]
        )
    log.debug("read %d groups", len(groups))
    return groups


def save_bem(path: str | os.PathLike, groups: Sequence[Sequence[ModelTransformation]]) -> None:
    """Write groups of model transformations to a scene file."""
    with open(path, "wb") as handle:
        handle.write(_INT.pack(len(groups)))
        for group in groups:
            handle.write(_INT.pack(len(group)))
            for model in group:
                handle.write(_MODEL.pack(*model.pos, *model.rotation, *model.scale))
        handle.write(_INT.pack(0))


def read_meshes(path: str | os.PathLike, count: int) -> list[Mesh]:
    """Read the first ``count`` meshes of a mesh file."""
    if count < 0:
        raise ValueError("count must not be negative")
    reader = _Reader(Path(path).read_bytes())
    meshes = []
    for _ in range(count):
        vertices = list(reader.records(_VERTEX, reader.count("vertex")))
        indices = list(reader.records(_TRIANGLE, reader.count("triangle")))
        log.debug("mesh: %d vertices, %d triangles", len(vertices), len(indices))
        meshes.append(Mesh(vertices=vertices, indices=indices))
    return meshes


def write_meshes(path: str | os.PathLike, meshes: Iterable[Mesh]) -> None:
    """Write meshes to a mesh file."""
    with open(path, "wb") as handle:
        for mesh in meshes:
            handle.write(_INT.pack(len(mesh.vertices)))
            for vertex in mesh.vertices:
                handle.write(_VERTEX.pack(*vertex))
            handle.write(_INT.pack(len(mesh.indices)))
            for triangle in mesh.indices:
                handle.write(_TRIANGLE.pack(*triangle))