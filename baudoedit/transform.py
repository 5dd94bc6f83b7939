"""Model placement, camera and projection matrices.

Matrices are 4x4 numpy arrays in the usual mathematical layout: a point is
a column vector and is transformed as ``matrix @ point``. Transpose before
handing one to OpenGL, which expects column-major data.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np

__all__ = [
    "ModelTransformation",
    "Projection",
    "model_matrix",
    "perspective",
    "look_at",
    "deg_to_rad",
    "rad_to_deg",
]


def _vec3(values, name: str) -> list[float]:
    result = [float(v) for v in values]
    if len(result) != 3:
        raise ValueError(f"{name} must have exactly 3 components, got {len(result)}")
    return result


@dataclass
class ModelTransformation:
    """Position, rotation (radians per axis) and scale of one model instance."""

    pos: list[float] = field(default_factory=lambda: [0.0, 0.0, 0.0])
    rotation: list[float] = field(default_factory=lambda: [0.0, 0.0, 0.0])
    scale: list[float] = field(default_factory=lambda: [1.0, 1.0, 1.0])

    def __post_init__(self) -> None:
        self.pos = _vec3(self.pos, "pos")
        self.rotation = _vec3(self.rotation, "rotation")
        self.scale = _vec3(self.scale, "scale")

    def matrix(self) -> np.ndarray:
        """Return the model matrix for this transformation."""
        return model_matrix(self)


@dataclass
class Projection:
    """Perspective projection settings; ``fov`` is the vertical angle in degrees."""

    fov: float = 90.0
    aspect: float = 800.0 / 500.0
    near: float = 0.1
    far: float = 100.0

    def matrix(self) -> np.ndarray:
        """Return the projection matrix for these settings."""
        return perspective(deg_to_rad(self.fov), self.aspect, self.near, self.far)


def deg_to_rad(angle: float) -> float:
    """Convert degrees to radians."""
    return angle * math.pi / 180


def rad_to_deg(angle: float) -> float:
    """Convert radians to degrees."""
    return angle * 180 / math.pi


def _rotation_x(angle: float) -> np.ndarray:
    c, s = math.cos(angle), math.sin(angle)
    return np.array(
        [[1.0, 0.0, 0.0, 0.0], [0.0, c, -s, 0.0], [0.0, s, c, 0.0], [0.0, 0.0, 0.0, 1.0]]
    )


def _rotation_y(angle: float) -> np.ndarray:
    c, s = math.cos(angle), math.sin(angle)
    return np.array(
        [[c, 0.0, s, 0.0], [0.0, 1.0, 0.0, 0.0], [-s, 0.0, c, 0.0], [0.0, 0.0, 0.0, 1.0]]
    )


def _rotation_z(angle: float) -> np.ndarray:
    c, s = math.cos(angle), math.sin(angle)
    return np.array(
        [[c, -s, 0.0, 0.0], [s, c, 0.0, 0.0], [0.0, 0.0, 1.0, 0.0], [0.0, 0.0, 0.0, 1.0]]
    )


def model_matrix(transformation: ModelTransformation) -> np.ndarray:
    """Build the model matrix of a transformation.

    The scale is folded into each per-axis rotation before the rotations are
    composed, then the position is added to the translation column.
    """
    model = np.diag([*transformation.scale, 1.0])
    rx, ry, rz = transformation.rotation
    rotations = [model @ _rotation_x(rx), model @ _rotation_y(ry), model @ _rotation_z(rz)]
    for rotation in rotations:
        model = rotation @ model
    model[:3, 3] += transformation.pos
    return model


def perspective(fov: float, aspect: float, near: float, far: float) -> np.ndarray:
    """Return a right-handed perspective matrix; ``fov`` is in radians."""
    f = 1.0 / math.tan(fov / 2)
    fn = 1.0 / (near - far)
    result = np.zeros((4, 4))
    result[0, 0] = f / aspect
    result[1, 1] = f
    result[2, 2] = (near + far) * fn
    result[3, 2] = -1.0
    result[2, 3] = 2.0 * near * far * fn
    return result


def _normalized(vector: np.ndarray) -> np.ndarray:
    length = np.linalg.norm(vector)
    if length == 0:
        raise ValueError("cannot normalize a zero-length vector")
    return vector / length


def look_at(eye, center, up) -> np.ndarray:
    """Return a view matrix looking from ``eye`` towards ``center``."""
    eye = np.asarray(eye, dtype=float)
    forward = _normalized(np.asarray(center, dtype=float) - eye)
    side = _normalized(np.cross(forward, np.asarray(up, dtype=float)))
    upward = np.cross(side, forward)
    result = np.identity(4)
    result[0, :3] = side
    result[1, :3] = upward
    result[2, :3] = -forward
    result[0, 3] = -np.dot(side, eye)
    result[1, 3] = -np.dot(upward, eye)
    result[2, 3] = np.dot(forward, eye)
    return result