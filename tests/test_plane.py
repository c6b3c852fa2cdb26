import math

import numpy as np
import pytest

from twoviewslam.plane import (
    Plane,
    detect_plane,
    exp_so3,
    pose_to_gl,
    status_message,
)

UP = np.array([0.0, 1.0, 0.0])


def _grid_points(y=2.0):
    xs, zs = np.meshgrid(np.linspace(-1, 1, 5), np.linspace(3, 5, 5))
    return np.column_stack((xs.ravel(), np.full(xs.size, y), zs.ravel()))


def test_exp_so3_zero_is_identity():
    assert np.allclose(exp_so3([0.0, 0.0, 0.0]), np.eye(3))


def test_exp_so3_quarter_turn_about_z():
    R = exp_so3([0.0, 0.0, math.pi / 2])
    assert np.allclose(R @ np.array([1.0, 0.0, 0.0]), [0.0, 1.0, 0.0], atol=1e-12)


@pytest.mark.parametrize("v", [[0.3, -0.2, 1.1], [2.0, 0.5, -0.7], [1e-5, 0.0, 0.0]])
def test_exp_so3_is_rotation(v):
    R = exp_so3(v)
    assert np.allclose(R @ R.T, np.eye(3), atol=1e-8)
    assert np.linalg.det(R) == pytest.approx(1.0, abs=1e-8)


def test_pose_to_gl_identity_and_translation():
    T = np.eye(4)
    T[:3, 3] = [1.0, 2.0, 3.0]
    m = pose_to_gl(T)
    assert len(m) == 16
    assert m[0] == 1.0 and m[5] == 1.0 and m[10] == 1.0 and m[15] == 1.0
    assert m[12:15] == [1.0, 2.0, 3.0]
    assert m[3] == 0.0 and m[7] == 0.0 and m[11] == 0.0


def test_pose_to_gl_is_column_major():
    T = np.eye(4)
    T[0, 1] = 7.0
    m = pose_to_gl(T)
    assert m[4] == 7.0
    assert m[1] == 0.0


def test_pose_to_gl_without_pose():
    assert pose_to_gl(None) is None
    assert pose_to_gl(np.zeros((0,))) is None


def test_pose_to_gl_rejects_bad_shape():
    with pytest.raises(ValueError):
        pose_to_gl(np.eye(3))


def test_plane_fit_normal_points_away_from_camera():
    pts = _grid_points()
    plane = Plane(pts, np.eye(4), 0.0)
    assert np.allclose(plane.normal, UP, atol=1e-8)
    assert np.allclose(plane.origin, pts.mean(axis=0))
    assert np.allclose(plane.Tpw[:3, 3], pts.mean(axis=0))


def test_plane_pose_maps_up_to_normal_for_tilted_plane():
    pts = _grid_points()
    tilt = exp_so3([0.3, 0.0, 0.2])
    pts = pts @ tilt.T
    plane = Plane(pts, np.eye(4), 0.7)
    R = plane.Tpw[:3, :3]
    assert np.allclose(R @ R.T, np.eye(3), atol=1e-8)
    assert np.allclose(R @ UP, plane.normal, atol=1e-8)
    assert np.linalg.norm(plane.normal) == pytest.approx(1.0)
    centred = pts - plane.origin
    assert np.allclose(centred @ plane.normal, 0.0, atol=1e-8)


def test_recompute_keeps_first_camera_side():
    pts = _grid_points()
    plane = Plane(pts, np.eye(4), 0.0)
    moved = pts + np.array([0.0, -5.0, 0.0])
    plane.recompute(moved)
    assert np.allclose(plane.origin, moved.mean(axis=0))
    assert np.allclose(plane.normal, UP, atol=1e-8)


def test_recompute_without_points_raises():
    plane = Plane(_grid_points(), np.eye(4), 0.0)
    with pytest.raises(ValueError):
        plane.recompute(np.zeros((0, 3)))


def test_plane_rejects_bad_pose():
    with pytest.raises(ValueError):
        Plane(_grid_points(), np.eye(3), 0.0)


def test_from_normal():
    normal = np.array([0.0, 0.0, 1.0])
    origin = np.array([1.0, 2.0, 3.0])
    plane = Plane.from_normal(normal, origin, 0.4)
    assert np.allclose(plane.Tpw[:3, :3] @ UP, normal, atol=1e-8)
    assert np.allclose(plane.Tpw[:3, 3], origin)
    m = plane.gl_matrix()
    assert np.allclose(m[12:15], origin)
    assert m[15] == 1.0


def test_from_normal_plane_cannot_recompute_without_points():
    plane = Plane.from_normal([0.0, 1.0, 0.0], [0.0, 0.0, 0.0], 0.0)
    with pytest.raises(ValueError):
        plane.recompute()


def test_gl_matrix_matches_pose():
    plane = Plane(_grid_points(), np.eye(4), 0.5)
    assert plane.gl_matrix() == pose_to_gl(plane.Tpw)


def test_detect_plane_too_few_points():
    pts = np.random.default_rng(1).normal(size=(60, 3))
    obs = [10] * 40 + [3] * 20
    assert detect_plane(pts, obs, np.eye(4), 50, np.random.default_rng(0)) is None


def test_detect_plane_skips_missing_points():
    pts = [None] * 60
    assert detect_plane(pts, [10] * 60, np.eye(4), 50, np.random.default_rng(0)) is None


def test_detect_plane_finds_plane_and_rejects_outliers():
    gen = np.random.default_rng(3)
    inliers = np.column_stack(
        (
            gen.uniform(-2, 2, 60),
            1.0 + gen.normal(scale=1e-3, size=60),
            gen.uniform(3, 6, 60),
        )
    )
    outliers = np.column_stack(
        (gen.uniform(-2, 2, 10), gen.uniform(4, 6, 10), gen.uniform(3, 6, 10))
    )
    pts = np.vstack((inliers, outliers))
    plane = detect_plane(pts, [10] * len(pts), np.eye(4), 50, np.random.default_rng(0))
    assert plane is not None
    assert len(plane.points) >= 3
    assert np.all(np.abs(plane.points[:, 1] - 1.0) < 0.01)
    assert abs(plane.normal @ UP) == pytest.approx(1.0, abs=1e-2)


def test_detect_plane_length_mismatch():
    with pytest.raises(ValueError):
        detect_plane(np.zeros((3, 3)), [10, 10], np.eye(4))


def test_detect_plane_needs_iterations():
    with pytest.raises(ValueError):
        detect_plane(np.zeros((3, 3)), [10, 10, 10], np.eye(4), 0)


@pytest.mark.parametrize(
    "status, loc, expected",
    [
        (1, False, ("SLAM NOT INITIALIZED", (255, 0, 0))),
        (2, False, ("SLAM ON", (0, 255, 0))),
        (3, False, ("SLAM LOST", (255, 0, 0))),
        (1, True, ("SLAM NOT INITIALIZED", (255, 0, 0))),
        (2, True, ("LOCALIZATION ON", (0, 255, 0))),
        (3, True, ("LOCALIZATION LOST", (255, 0, 0))),
    ],
)
def test_status_message(status, loc, expected):
    assert status_message(status, loc) == expected


def test_status_message_other_states():
    assert status_message(0, False) is None
    assert status_message(-1, True) is None