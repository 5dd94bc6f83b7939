"""Editing state: a free-flying camera and a selectable set of model instances."""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

import numpy as np

from baudoedit.bem import save_bem
from baudoedit.transform import ModelTransformation, look_at

__all__ = ["EditMode", "Camera", "Editor"]

log = logging.getLogger(__name__)

CAMERA_SPEED = 0.1
LOOK_SENSITIVITY = 0.01
_TAU = 2 * math.pi
_HALF_PI = math.pi / 2
_UP = (0.0, 1.0, 0.0)


class EditMode(Enum):
    """Which part of a model transformation a nudge changes, and by how much."""

    ROTATE = ("rotation", math.pi / 2)
    TRANSLATE = ("pos", 1.0)
    SCALE = ("scale", 1.0)

    @property
    def attribute(self) -> str:
        return self.value[0]

    @property
    def step(self) -> float:
        return self.value[1]


@dataclass
class Camera:
    """First-person camera: ``center`` is the viewing direction, not a point.

    ``yaw`` turns around the vertical axis and ``pitch`` is measured from
    straight up, both in radians.
    """

    pos: list[float] = field(default_factory=lambda: [0.0, 0.0, -3.0])
    center: list[float] = field(default_factory=lambda: [0.0, 0.0, 1.0])
    yaw: float = 0.0
    pitch: float = _HALF_PI

    def look(self, dx: float, dy: float) -> None:
        """Turn the camera by a mouse offset from the window centre."""
        self.yaw = (self.yaw + dx * -LOOK_SENSITIVITY) % _TAU
        if self.yaw >= _TAU:
            self.yaw = 0.0

        if self.yaw < _HALF_PI:
            flat = (1.0, -math.tan(self.yaw))
        elif self.yaw < math.pi:
            flat = (-math.tan(self.yaw - _HALF_PI), -1.0)
        elif self.yaw < math.pi + _HALF_PI:
            flat = (-1.0, math.tan(self.yaw - math.pi))
        else:
            flat = (math.tan(self.yaw - _HALF_PI - math.pi), 1.0)

        self.pitch += dy * LOOK_SENSITIVITY
        if self.pitch > math.pi - 0.001:
            self.pitch = math.pi - 0.01
        if self.pitch < 0.01:
            self.pitch = 0.001

        if self.pitch < _HALF_PI:
            self.center[1] = math.tan(_HALF_PI - self.pitch)
        else:
            self.center[1] = -math.tan(self.pitch - _HALF_PI)

        length = math.hypot(*flat)
        self.center[0] = flat[0] / length
        self.center[2] = flat[1] / length

    def move(self, forward: float, right: float, up: float) -> None:
        """Move along the viewing direction, sideways, and vertically."""
        cx, _, cz = self.center
        self.pos[0] += (cx * forward - cz * right) * CAMERA_SPEED
        self.pos[2] += (cz * forward + cx * right) * CAMERA_SPEED
        self.pos[1] += up * CAMERA_SPEED

    def view_matrix(self) -> np.ndarray:
        """Return the view matrix for the current position and direction."""
        target = [p + c for p, c in zip(self.pos, self.center)]
        return look_at(self.pos, target, _UP)


class Editor:
    """Groups of model instances, one group per mesh, with one selected instance."""

    def __init__(self, groups: Sequence[Sequence[ModelTransformation]]) -> None:
        self.groups: list[list[ModelTransformation]] = [list(group) for group in groups]
        self.group_index = 0
        self.model_index = 0

    def selected(self) -> ModelTransformation:
        """Return the selected model transformation."""
        return self.groups[self.group_index][self.model_index]

    def cycle_group(self, step: int) -> None:
        """Move the group selection, wrapping at both ends."""
        self.group_index += step
        if len(self.groups) < self.group_index + 1:
            self.group_index = 0
        if self.group_index < 0:
            self.group_index = len(self.groups) - 1

    def cycle_model(self, step: int) -> None:
        """Move the model selection within the current group, wrapping at both ends."""
        count = len(self.groups[self.group_index])
        self.model_index += step
        if count < self.model_index + 1:
            self.model_index = 0
        if self.model_index < 0:
            self.model_index = count - 1

    def nudge(self, mode: EditMode, change: Sequence[float]) -> ModelTransformation:
        """Add ``change`` times the mode's step to the selected model."""
        if len(change) != 3:
            raise ValueError("change must have exactly 3 components")
        model = self.selected()
        values = getattr(model, mode.attribute)
        for axis, delta in enumerate(change):
            values[axis] += delta * mode.step
        log.info("model.pos=%s rotation=%s scale=%s", model.pos, model.rotation, model.scale)
        return model

    def shift_x(self, amount: float) -> ModelTransformation:
        """Move the selected model along the x axis."""
        model = self.selected()
        model.pos[0] += amount
        return model

    def remove_selected(self) -> ModelTransformation:
        """Remove the selected model; the group's last model takes its place."""
        group = self.groups[self.group_index]
        if not group:
            raise IndexError("the selected group has no models to remove")
        removed = group[self.model_index]
        group[self.model_index] = group[-1]
        group.pop()
        if self.model_index >= len(group):
            self.model_index = 0
        return removed

    def add_model(self) -> ModelTransformation:
        """Append a default model to the selected group and return it."""
        model = ModelTransformation()
        self.groups[self.group_index].append(model)
        return model

    def model_matrices(self) -> list[list[np.ndarray]]:
        """Return the model matrix of every instance, grouped like ``groups``."""
        return [[model.matrix() for model in group] for group in self.groups]

    def save(self, path: str | os.PathLike) -> None:
        """Write all groups to a scene file."""
        save_bem(path, self.groups)
        log.info("file saved: %s", path)