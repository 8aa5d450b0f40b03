import random

import numpy as np
import pytest

from duckpond.vertex import POSITION_TEXTURE
from duckpond.water import WaterSurface, damping_grid, square_mesh


class _ScriptedRng:
    def __init__(self, values):
        self.values = list(values)

    def randrange(self, stop):
        value = self.values.pop(0)
        assert 0 <= value < stop
        return value


def test_damping_grid_is_uniform_inside_square():
    grid = damping_grid(16)
    assert grid.shape == (16, 16)
    assert np.allclose(grid, 0.95)


def test_damping_grid_rejects_tiny_size():
    with pytest.raises(ValueError):
        damping_grid(1)


def test_square_mesh_layout():
    mesh = square_mesh()
    assert mesh.vertex_format is POSITION_TEXTURE
    assert len(mesh.vertices) == 4
    assert mesh.indices == [0, 1, 2, 2, 1, 3, 0, 2, 1, 2, 3, 1]
    packed = mesh.vertex_format.pack(mesh.vertices)
    assert packed.shape == (4, 6)
    assert np.all(packed[:, 1] == 0.0)


def test_rain_skipped_when_roll_low():
    water = WaterSurface(8, _ScriptedRng([5]))
    water.make_rain()
    assert water.heights.sum() == 0.0


def test_rain_drops_on_chosen_cell():
    water = WaterSurface(8, _ScriptedRng([6, 3, 4]))
    water.make_rain()
    assert water.heights[3, 4] == pytest.approx(0.5)
    assert water.heights.sum() == pytest.approx(0.5)


def test_bump_centre_and_clamped_edges():
    water = WaterSurface(256, random.Random(1))
    water.bump(0.0, 0.0)
    assert water.heights[128, 128] == pytest.approx(0.25)
    water.bump(1.0, -1.0)
    assert water.heights[255, 0] == pytest.approx(0.25)
    water.bump(5.0, 5.0)
    assert water.heights[255, 255] == pytest.approx(0.25)


def test_flat_surface_stays_flat():
    water = WaterSurface(16, random.Random(0))
    water.step(0.01)
    rgba = water.normal_map()
    assert rgba.shape == (16, 16, 4)
    assert rgba[..., 0].tolist() == [[127] * 16] * 16
    assert rgba[..., 1].tolist() == [[127] * 16] * 16
    assert rgba[..., 2].tolist() == [[0] * 16] * 16
    assert water.heights.max() == 0.0
    assert water.heights.min() == 0.0


def test_step_spreads_symmetrically():
    water = WaterSurface(17, random.Random(0))
    water.heights[8, 8] = 1.0
    water.step(0.05)
    h = water.heights
    assert h[7, 8] > 0.0
    assert h[7, 8] == pytest.approx(h[9, 8])
    assert h[7, 8] == pytest.approx(h[8, 7])
    assert h[8, 9] == pytest.approx(h[8, 7])
    assert h[0, 0] == 0.0


def test_step_caps_time_step():
    a = WaterSurface(16, random.Random(0))
    b = WaterSurface(16, random.Random(0))
    a.heights[5, 6] = 1.0
    b.heights[5, 6] = 1.0
    a.step(10.0)
    b.step(1.0 / 16)
    assert np.allclose(a.heights, b.heights)


def test_flat_normal_points_down():
    water = WaterSurface(8, random.Random(0))
    assert np.allclose(water.normal(3, 3), [0.0, 0.0, -1.0])


def test_normals_are_unit_length_after_bumps():
    water = WaterSurface(16, random.Random(0))
    water.bump(0.1, -0.3)
    water.bump(-0.5, 0.5)
    water.step(0.05)
    for x, y in [(0, 0), (7, 9), (15, 15), (4, 12)]:
        assert np.linalg.norm(water.normal(x, y)) == pytest.approx(1.0)


def test_flat_normal_map_bytes():
    water = WaterSurface(8, random.Random(0))
    rgba = water.normal_map()
    assert rgba.shape == (8, 8, 4)
    assert rgba.dtype == np.uint8
    assert np.all(rgba[..., 3] == 255)
    assert np.all(rgba[..., 0] == 127)
    assert np.all(rgba[..., 2] == 0)


def test_normal_map_matches_single_normals():
    water = WaterSurface(12, random.Random(0))
    water.heights[4, 7] = 0.8
    water.heights[5, 2] = -0.4
    rgba = water.normal_map()
    for x, y in [(7, 4), (6, 4), (7, 5), (2, 5), (0, 11)]:
        expected = ((water.normal(x, y) * 0.5 + 0.5) * 255.0).astype(np.uint8)
        assert np.array_equal(rgba[y, x, :3], expected)