"""A damped wave-equation height field for the pond surface."""

from __future__ import annotations

import random

import numpy as np

from duckpond.vertex import POSITION_TEXTURE, Mesh

DEFAULT_SIZE = 256
DAMPING = 0.95
EDGE_FALLOFF = 0.2
RAIN_DROP = 0.5
BUMP_HEIGHT = 0.25


def damping_grid(size: int) -> np.ndarray:
    """Per-cell damping factors for a size x size grid spanning [-1, 1]^2."""
    if size < 2:
        raise ValueError(f"grid size must be at least 2, got {size}")
    coords = np.arange(size, dtype=float) / (size - 1) * 2.0 - 1.0
    x = coords[:, np.newaxis]
    y = coords[np.newaxis, :]
    farthest = np.maximum.reduce(
        [
            np.broadcast_to(x + 1.0, (size, size)),
            np.broadcast_to(1.0 - x, (size, size)),
            np.broadcast_to(1.0 - y, (size, size)),
            np.broadcast_to(y + 1.0, (size, size)),
        ]
    )
    return DAMPING * np.minimum(1.0, farthest / EDGE_FALLOFF)


def square_mesh() -> Mesh:
    """The flat water quad on y = 0, visible from both sides."""
    return Mesh(
        POSITION_TEXTURE,
        vertices=[
            ((-1.0, 0.0, -1.0, 1.0), (0.0, 0.0)),
            ((1.0, 0.0, -1.0, 1.0), (1.0, 0.0)),
            ((-1.0, 0.0, 1.0, 1.0), (0.0, 1.0)),
            ((1.0, 0.0, 1.0, 1.0), (1.0, 1.0)),
        ],
        indices=[0, 1, 2, 2, 1, 3, 0, 2, 1, 2, 3, 1],
    )


class WaterSurface:
    """Height map driven by rain drops and bumps, advanced by a wave equation."""

    def __init__(self, size: int = DEFAULT_SIZE, rng: random.Random | None = None) -> None:
        self.damping = damping_grid(size)
        self.size = size
        self.rng = rng if rng is not None else random.Random()
        self.cell = 2.0 / (size - 1)
        self.heights = np.zeros((size, size))
        self.previous = np.zeros((size, size))

    def make_rain(self) -> None:
        """With a chance of four in ten, drop rain on a random cell."""
        if self.rng.randrange(10) < 6:
            return
        i = self.rng.randrange(self.size)
        j = self.rng.randrange(self.size)
        self.heights[i, j] += RAIN_DROP

    def step(self, dt: float) -> None:
        """Advance the waves by dt seconds, capped at one step per grid cell."""
        dt = min(dt, 1.0 / self.size)
        a = dt * dt / self.cell / self.cell
        b = 2.0 - 4.0 * a
        h = self.heights
        interior = (slice(1, -1), slice(1, -1))
        self.previous[interior] = (
            a * (h[:-2, 1:-1] + h[2:, 1:-1] + h[1:-1, :-2] + h[1:-1, 2:])
            + b * h[interior]
            - self.previous[interior]
        ) * self.damping[interior]
        self.heights, self.previous = self.previous, self.heights

    def _cell_index(self, coordinate: float) -> int:
        index = int((coordinate + 1.0) / 2.0 * self.size)
        return min(max(index, 0), self.size - 1)

    def bump(self, x: float, y: float) -> None:
        """Raise the water at a point of the [-1, 1] square."""
        self.heights[self._cell_index(x), self._cell_index(y)] += BUMP_HEIGHT

    def normal(self, x: int, y: int) -> np.ndarray:
        """Unit surface normal at grid column x, row y."""
        last = self.size - 1
        h = self.heights
        left = h[y, max(x - 1, 0)]
        right = h[y, min(x + 1, last)]
        down = h[min(y + 1, last), x]
        up = h[max(y - 1, 0), x]
        dx = np.array([2.0, 0.0, right - left])
        dy = np.array([0.0, 2.0, down - up])
        n = np.cross(dy, dx)
        return n / np.linalg.norm(n)

    def normal_map(self) -> np.ndarray:
        """RGBA bytes of all normals, shape (size, size, 4), indexed [row, column]."""
        n = self.size
        idx = np.arange(n)
        before = np.maximum(idx - 1, 0)
        after = np.minimum(idx + 1, n - 1)
        h = self.heights
        horizontal = h[:, after] - h[:, before]
        vertical = h[after, :] - h[before, :]
        normals = np.stack(
            [2.0 * horizontal, 2.0 * vertical, np.full((n, n), -4.0)], axis=-1
        )
        normals /= np.linalg.norm(normals, axis=-1, keepdims=True)
        rgba = np.full((n, n, 4), 255, dtype=np.uint8)
        rgba[..., :3] = ((normals * 0.5 + 0.5) * 255.0).astype(np.uint8)
        return rgba