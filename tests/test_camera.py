import math

import numpy as np
import pytest

from duckpond.camera import Camera, look_at, perspective


def test_initial_distance_is_radius():
    camera = Camera()
    assert math.isclose(np.linalg.norm(camera.position), 5.0)
    assert math.isclose(camera.position[1], 0.0, abs_tol=1e-12)


def test_zoom_in_scales_radius():
    camera = Camera()
    before = np.linalg.norm(camera.position)
    camera.zoom(-3.0)
    assert math.isclose(np.linalg.norm(camera.position) / before, 0.9)


def test_zoom_out_scales_radius():
    camera = Camera()
    before = camera.radius
    camera.zoom(2.0)
    assert math.isclose(camera.radius / before, 1.1)


def test_zoom_zero_does_nothing():
    camera = Camera()
    before = camera.position
    camera.zoom(0.0)
    assert np.array_equal(camera.position, before)


def test_zoom_is_clamped():
    camera = Camera()
    for _ in range(200):
        camera.zoom(-1.0)
    assert camera.radius == Camera.MIN_RADIUS
    for _ in range(200):
        camera.zoom(1.0)
    assert camera.radius == Camera.MAX_RADIUS


def test_rotation_keeps_distance():
    camera = Camera()
    camera.rotate(120.0, -80.0)
    assert math.isclose(np.linalg.norm(camera.position), camera.radius)


def test_pitch_is_clamped():
    camera = Camera()
    camera.rotate(0.0, -1e6)
    assert camera.pitch == Camera.PITCH_LIMIT
    camera.rotate(0.0, 1e6)
    assert camera.pitch == -Camera.PITCH_LIMIT
    assert camera.position[1] < 0.0


def test_view_matrix_moves_eye_to_origin():
    camera = Camera()
    camera.rotate(37.0, 21.0)
    view = camera.view_matrix()
    eye = np.append(camera.position, 1.0)
    assert np.allclose(view @ eye, (0.0, 0.0, 0.0, 1.0))
    target = view @ np.array([0.0, 0.0, 0.0, 1.0])
    assert np.allclose(target[:3], (0.0, 0.0, -camera.radius))


def test_look_at_rotation_is_orthonormal():
    view = look_at((3.0, 2.0, 1.0), (0.0, 0.0, 0.0), (0.0, 1.0, 0.0))
    rotation = view[:3, :3]
    assert np.allclose(rotation @ rotation.T, np.identity(3))


def test_perspective_maps_near_and_far():
    near, far = 0.1, 200.0
    projection = perspective(math.radians(45.0), 800.0 / 600.0, near, far)
    near_clip = projection @ np.array([0.0, 0.0, -near, 1.0])
    far_clip = projection @ np.array([0.0, 0.0, -far, 1.0])
    assert math.isclose(near_clip[2] / near_clip[3], -1.0)
    assert math.isclose(far_clip[2] / far_clip[3], 1.0)


def test_perspective_rejects_bad_arguments():
    with pytest.raises(ValueError):
        perspective(1.0, 0.0, 0.1, 10.0)
    with pytest.raises(ValueError):
        perspective(1.0, 1.0, 1.0, 1.0)