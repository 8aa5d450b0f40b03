"""An orbiting camera and the view and projection matrices it needs.

Matrices are row-major numpy arrays in the mathematical convention
(column vectors, translation in the last column).
"""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np


def _normalize(v: np.ndarray) -> np.ndarray:
    length = np.linalg.norm(v)
    if length == 0.0:
        raise ValueError("cannot normalize a zero vector")
    return v / length


def look_at(eye: Sequence[float], target: Sequence[float], up: Sequence[float]) -> np.ndarray:
    """Right-handed view matrix looking from eye towards target."""
    eye = np.asarray(eye, dtype=float)
    f = _normalize(np.asarray(target, dtype=float) - eye)
    s = _normalize(np.cross(f, np.asarray(up, dtype=float)))
    u = np.cross(s, f)
    view = np.identity(4)
    view[0, :3] = s
    view[1, :3] = u
    view[2, :3] = -f
    view[0, 3] = -np.dot(s, eye)
    view[1, 3] = -np.dot(u, eye)
    view[2, 3] = np.dot(f, eye)
    return view


def perspective(fovy: float, aspect: float, near: float, far: float) -> np.ndarray:
    """Right-handed perspective projection with depth mapped to [-1, 1]."""
    if aspect == 0.0:
        raise ValueError("aspect ratio must not be zero")
    if near == far:
        raise ValueError("near and far planes must differ")
    tan_half = math.tan(fovy / 2.0)
    projection = np.zeros((4, 4))
    projection[0, 0] = 1.0 / (aspect * tan_half)
    projection[1, 1] = 1.0 / tan_half
    projection[2, 2] = -(far + near) / (far - near)
    projection[2, 3] = -(2.0 * far * near) / (far - near)
    projection[3, 2] = -1.0
    return projection


class Camera:
    """Camera orbiting the origin, zoomed and rotated by mouse drags."""

    MIN_RADIUS = 1.0
    MAX_RADIUS = 100.0
    ROTATE_SPEED = 0.005
    PITCH_LIMIT = math.pi / 2.0 - 0.01

    def __init__(self) -> None:
        self.radius = 5.0
        self.yaw = math.radians(90.0)
        self.pitch = 0.0
        self.up = np.array([0.0, 1.0, 0.0])

    @property
    def position(self) -> np.ndarray:
        """Eye position on the sphere around the origin."""
        return np.array(
            [
                self.radius * math.cos(self.pitch) * math.sin(self.yaw),
                self.radius * math.sin(self.pitch),
                self.radius * math.cos(self.pitch) * math.cos(self.yaw),
            ]
        )

    def zoom(self, delta_y: float) -> None:
        """Move closer for an upward drag, further for a downward one."""
        if delta_y == 0.0:
            return
        factor = 0.9 if delta_y < 0.0 else 1.1
        self.radius = min(max(self.radius * factor, self.MIN_RADIUS), self.MAX_RADIUS)

    def rotate(self, delta_x: float, delta_y: float) -> None:
        """Orbit by a drag of the given size in pixels."""
        self.yaw -= delta_x * self.ROTATE_SPEED
        self.pitch -= delta_y * self.ROTATE_SPEED
        self.pitch = min(max(self.pitch, -self.PITCH_LIMIT), self.PITCH_LIMIT)

    def view_matrix(self) -> np.ndarray:
        return look_at(self.position, (0.0, 0.0, 0.0), self.up)