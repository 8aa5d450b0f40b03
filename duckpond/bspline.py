"""Cubic Bezier segments chained into a random wandering path inside a box."""

from __future__ import annotations

import random
from collections.abc import Sequence

import numpy as np

MAX_ATTEMPTS = 100


def _vec(value: Sequence[float]) -> np.ndarray:
    return np.array(value, dtype=float)


def de_casteljau(points: Sequence[Sequence[float]], t: float) -> np.ndarray:
    """Evaluate the Bezier curve with the given control points at parameter t."""
    pts = np.array(points, dtype=float)
    if len(pts) == 0:
        raise ValueError("at least one control point is required")
    one_t = 1.0 - t
    while len(pts) > 1:
        pts = one_t * pts[:-1] + t * pts[1:]
    return pts[0]


def ray_box_intersection(
    p: Sequence[float],
    d: Sequence[float],
    p_min: Sequence[float],
    p_max: Sequence[float],
) -> np.ndarray:
    """Point where the ray from p along d leaves the axis-aligned box [p_min, p_max].

    Axes along which the ray is undefined (zero direction on a flat box axis) are ignored.
    """
    p = _vec(p)
    d = _vec(d)
    with np.errstate(divide="ignore", invalid="ignore"):
        t1 = (_vec(p_max) - p) / d
        t2 = (_vec(p_min) - p) / d
    tm = np.fmax(t1, t2)
    candidates = tm[~np.isnan(tm)]
    if candidates.size == 0 or not np.isfinite(candidates.min()):
        raise ValueError("ray direction does not leave the box")
    return p + candidates.min() * d


class BSpline:
    """A cubic segment that can be continued smoothly by a random next segment."""

    def __init__(self, p0, p1, p2, p3, p_min, p_max, rng: random.Random | None = None):
        self.p0 = _vec(p0)
        self.p1 = _vec(p1)
        self.p2 = _vec(p2)
        self.p3 = _vec(p3)
        self.p_min = _vec(p_min)
        self.p_max = _vec(p_max)
        self.rng = rng if rng is not None else random.Random()

    @property
    def control_points(self) -> tuple[np.ndarray, ...]:
        return (self.p0, self.p1, self.p2, self.p3)

    def position(self, t: float) -> np.ndarray:
        """Point on the segment at parameter t."""
        return de_casteljau(self.control_points, t)

    def tangent(self, t: float) -> np.ndarray:
        """First derivative of the segment at parameter t."""
        pts = np.array(self.control_points)
        return de_casteljau(3.0 * (pts[1:] - pts[:-1]), t)

    def _random_in_box(self) -> np.ndarray:
        u = np.array([self.rng.random() for _ in range(3)])
        return self.p_min + (self.p_max - self.p_min) * u

    def generate_subsequent_curve(self) -> None:
        """Replace the segment with a new one that continues it smoothly."""
        n0 = ray_box_intersection(self.p2, self.p2 - self.p1, self.p_min, self.p_max)

        n1_int = ray_box_intersection(self.p3, self.p3 - self.p2, self.p_min, self.p_max)
        t = self.rng.random()
        n1 = t * self.p3 + (1.0 - t) * n1_int

        n2_int = ray_box_intersection(n1, n1 - n0, self.p_min, self.p_max)
        n2 = (n1 + n2_int) / 2.0

        limit = np.linalg.norm(n2 - n1)
        best: np.ndarray | None = None
        best_length = 0.0
        n3: np.ndarray | None = None
        for _ in range(MAX_ATTEMPTS):
            candidate = self._random_in_box()
            length = np.linalg.norm(candidate - n2)
            if length < limit:
                n3 = candidate
                break
            if best is None or length < best_length:
                best, best_length = candidate, length
        if n3 is None:
            n3 = best

        self.p0, self.p1, self.p2, self.p3 = self.p3, n1, n2, n3