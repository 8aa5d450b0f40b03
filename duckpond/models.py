"""The sky cube and the duck: meshes, model file parsing and the duck's motion."""

from __future__ import annotations

import math
import os
import random
from collections.abc import Iterator
from typing import Protocol

import numpy as np

from duckpond.bspline import BSpline
from duckpond.vertex import POSITION_NORMAL_CUBE_TEXTURE, POSITION_NORMAL_TEXTURE, Mesh

DUCK_SCALE = 1.0 / 1000.0
DUCK_SPEED = 0.3
DUCK_FORWARD = np.array([-1.0, 0.0, 0.0])


def _face(corners, normal):
    return [((x, y, z, 1.0), normal, (x, y, z)) for x, y, z in corners]


def cube_mesh() -> Mesh:
    """Inward-facing unit cube whose texture coordinates address a cube map."""
    faces = [
        ([(-1, -1, 1), (1, -1, 1), (1, 1, 1), (-1, 1, 1)], (0, 0, -1)),
        ([(-1, -1, -1), (1, -1, -1), (1, 1, -1), (-1, 1, -1)], (0, 0, 1)),
        ([(-1, -1, -1), (-1, -1, 1), (-1, 1, 1), (-1, 1, -1)], (1, 0, 0)),
        ([(1, -1, 1), (1, -1, -1), (1, 1, -1), (1, 1, 1)], (-1, 0, 0)),
        ([(-1, 1, 1), (1, 1, 1), (1, 1, -1), (-1, 1, -1)], (0, -1, 0)),
        ([(-1, -1, -1), (1, -1, -1), (1, -1, 1), (-1, -1, 1)], (0, 1, 0)),
    ]
    vertices = [vertex for corners, normal in faces for vertex in _face(corners, normal)]
    indices = [
        0, 2, 1, 0, 3, 2,
        4, 5, 6, 4, 6, 7,
        8, 10, 9, 8, 11, 10,
        12, 14, 13, 12, 15, 14,
        16, 18, 17, 16, 19, 18,
        20, 22, 21, 20, 23, 22,
    ]
    return Mesh(POSITION_NORMAL_CUBE_TEXTURE, vertices=vertices, indices=indices)


def _take(tokens: Iterator[str], kind, what: str):
    try:
        token = next(tokens)
    except StopIteration:
        raise ValueError(f"duck model ends before {what}") from None
    try:
        return kind(token)
    except ValueError:
        raise ValueError(f"invalid {what}: {token!r}") from None


def parse_duck_model(text: str) -> Mesh:
    """Parse the duck model text: vertex count, vertices, triangle count, indices."""
    tokens = iter(text.split())
    vertex_count = _take(tokens, int, "vertex count")
    if vertex_count < 0:
        raise ValueError(f"negative vertex count {vertex_count}")
    vertices = []
    for _ in range(vertex_count):
        values = [_take(tokens, float, "vertex data") for _ in range(8)]
        vertices.append(((*values[0:3], 1.0), tuple(values[3:6]), tuple(values[6:8])))
    triangle_count = _take(tokens, int, "triangle count")
    if triangle_count < 0:
        raise ValueError(f"negative triangle count {triangle_count}")
    indices = [_take(tokens, int, "index") for _ in range(triangle_count * 3)]
    return Mesh(POSITION_NORMAL_TEXTURE, vertices=vertices, indices=indices)


def load_duck_mesh(path: str | os.PathLike[str]) -> Mesh:
    """Read and parse a duck model file."""
    with open(path, encoding="utf-8") as stream:
        return parse_duck_model(stream.read())


class Bumpable(Protocol):
    def bump(self, x: float, y: float) -> None: ...


def _rotation(angle: float, axis: np.ndarray) -> np.ndarray:
    a = axis / np.linalg.norm(axis)
    c = math.cos(angle)
    s = math.sin(angle)
    skew = np.array([[0.0, -a[2], a[1]], [a[2], 0.0, -a[0]], [-a[1], a[0], 0.0]])
    return c * np.identity(3) + (1.0 - c) * np.outer(a, a) + s * skew


class DuckMotion:
    """Moves the duck along random spline segments on the pond."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self.spline = BSpline(
            (0.0, 0.0, 0.0),
            (-0.5, 0.0, 0.0),
            (-0.5, 0.0, 0.5),
            (0.0, 0.0, 0.5),
            (-0.95, 0.0, -0.95),
            (0.95, 0.0, 0.95),
            rng,
        )
        self.time = 0.0
        self.position = self.spline.position(0.0)
        self.view_dir = self.spline.tangent(0.0)

    def update(self, dt: float, water: Bumpable | None = None) -> None:
        """Advance along the path by dt seconds and disturb the water under the duck."""
        self.position = self.spline.position(self.time)
        self.view_dir = self.spline.tangent(self.time)
        self.time += dt * DUCK_SPEED
        if self.time >= 1.0:
            self.time = 0.0
            self.spline.generate_subsequent_curve()
        if water is not None:
            water.bump(float(self.position[2]), float(self.position[0]))

    def model_matrix(self) -> np.ndarray:
        """Translation to the duck's position, turned to face along its path, scaled down."""
        v = np.asarray(self.view_dir, dtype=float)
        v = v / np.linalg.norm(v)
        cosine = float(np.clip(np.dot(DUCK_FORWARD, v), -1.0, 1.0))
        angle = math.acos(cosine)
        axis = np.cross(DUCK_FORWARD, v)
        if np.linalg.norm(axis) < 1e-12:
            rotation = np.identity(3) if cosine > 0.0 else _rotation(math.pi, np.array([0.0, 1.0, 0.0]))
        else:
            rotation = _rotation(angle, axis)
        model = np.identity(4)
        model[:3, :3] = rotation * DUCK_SCALE
        model[:3, 3] = self.position
        return model