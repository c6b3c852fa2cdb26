"""Planes fitted to map points, used to anchor virtual objects in the scene."""

from __future__ import annotations

import math
import random

import numpy as np

_EPS = 1e-4
_MIN_OBSERVATIONS = 5
_MIN_POINTS = 50
_MIN_RANK = 20
_INLIER_FACTOR = 1.4
_HALF_TURN = 3.14
_UP = np.array([0.0, 1.0, 0.0])

_RED = (255, 0, 0)
_GREEN = (0, 255, 0)


def exp_so3(v) -> np.ndarray:
    """Rotation matrix of an axis-angle vector (exponential map of so(3))."""
    x, y, z = (float(c) for c in np.asarray(v, dtype=np.float64).reshape(3))
    identity = np.eye(3)
    d2 = x * x + y * y + z * z
    d = math.sqrt(d2)
    W = np.array([[0.0, -z, y], [z, 0.0, -x], [-y, x, 0.0]])
    if d < _EPS:
        return identity + W + 0.5 * W @ W
    return identity + W * math.sin(d) / d + W @ W * (1.0 - math.cos(d)) / d2


def _to_gl(T: np.ndarray) -> list[float]:
    m = T.flatten(order="F").tolist()
    m[3] = m[7] = m[11] = 0.0
    m[15] = 1.0
    return m


def pose_to_gl(Tcw) -> list[float] | None:
    """Column-major 16-element matrix of a 4x4 pose, or None when there is no pose."""
    if Tcw is None:
        return None
    T = np.asarray(Tcw, dtype=np.float64)
    if T.size == 0:
        return None
    if T.shape != (4, 4):
        raise ValueError(f"pose must be 4x4, got {T.shape}")
    return _to_gl(T)


def _random_rang() -> float:
    return -_HALF_TURN / 2 + random.random() * _HALF_TURN


def _plane_pose(normal: np.ndarray, origin: np.ndarray, rang: float) -> np.ndarray:
    v = np.cross(_UP, normal)
    sa = float(np.linalg.norm(v))
    ca = float(_UP @ normal)
    ang = math.atan2(sa, ca)
    if sa > 0.0:
        axis = v * ang / sa
    else:
        # Normal parallel to up: either no rotation or a half turn about x.
        axis = np.array([ang, 0.0, 0.0])
    T = np.eye(4)
    T[:3, :3] = exp_so3(axis) @ exp_so3(_UP * rang)
    T[:3, 3] = origin
    return T


def _as_points(points) -> np.ndarray:
    arr = np.asarray(points, dtype=np.float64)
    if arr.size == 0:
        return np.zeros((0, 3))
    return arr.reshape(-1, 3)


class Plane:
    """A plane through map points, with a pose placing its y axis along the normal."""

    def __init__(self, points, Tcw, rang=None) -> None:
        T = np.array(Tcw, dtype=np.float64)
        if T.shape != (4, 4):
            raise ValueError(f"pose must be 4x4, got {T.shape}")
        self.Tcw: np.ndarray | None = T
        self.rang = _random_rang() if rang is None else float(rang)
        self.points = _as_points(points)
        self.XC: np.ndarray | None = None
        self.normal = np.zeros(3)
        self.origin = np.zeros(3)
        self.Tpw = np.eye(4)
        self.recompute()

    @classmethod
    def from_normal(cls, normal, origin, rang=None) -> "Plane":
        """Plane given directly by its normal and a point on it."""
        plane = cls.__new__(cls)
        plane.Tcw = None
        plane.XC = None
        plane.points = np.zeros((0, 3))
        plane.rang = _random_rang() if rang is None else float(rang)
        plane.normal = np.asarray(normal, dtype=np.float64).reshape(3).copy()
        plane.origin = np.asarray(origin, dtype=np.float64).reshape(3).copy()
        plane.Tpw = _plane_pose(plane.normal, plane.origin, plane.rang)
        return plane

    def recompute(self, points=None) -> None:
        """Refit the plane to the given point positions, or to the stored ones."""
        if points is not None:
            self.points = _as_points(points)
        pts = self.points
        if len(pts) == 0:
            raise ValueError("cannot fit a plane without points")

        A = np.column_stack((pts, np.ones(len(pts))))
        _, _, vt = np.linalg.svd(A, full_matrices=True)
        a, b, c = vt[3, 0], vt[3, 1], vt[3, 2]
        self.origin = pts.mean(axis=0)
        f = 1.0 / math.sqrt(a * a + b * b + c * c)

        if self.XC is None:
            if self.Tcw is None:
                raise ValueError("plane has no camera pose to orient its normal")
            R = self.Tcw[:3, :3]
            t = self.Tcw[:3, 3]
            self.XC = -R.T @ t - self.origin

        abc = np.array([a, b, c])
        if float(self.XC @ abc) > 0:
            abc = -abc
        self.normal = abc * f
        self.Tpw = _plane_pose(self.normal, self.origin, self.rang)

    def gl_matrix(self) -> list[float]:
        """The plane pose as a column-major 16-element matrix."""
        return _to_gl(self.Tpw)


def detect_plane(positions, observations, Tcw, iterations=50, rng=None) -> Plane | None:
    """Fit a plane by RANSAC to points seen more than five times; None if too few."""
    positions = list(positions)
    observations = list(observations)
    if len(positions) != len(observations):
        raise ValueError("need one observation count per position")
    if iterations < 1:
        raise ValueError("at least one iteration is needed")
    if rng is None:
        rng = np.random.default_rng()

    kept = [
        np.asarray(p, dtype=np.float64).reshape(3)
        for p, obs in zip(positions, observations)
        if p is not None and obs > _MIN_OBSERVATIONS
    ]
    n = len(kept)
    if n < _MIN_POINTS:
        return None
    pts = np.vstack(kept)
    homogeneous = np.column_stack((pts, np.ones(n)))
    nth = max(int(0.2 * n), _MIN_RANK)

    best_dist = 1e10
    best_distances: np.ndarray | None = None
    for _ in range(iterations):
        sample = rng.choice(n, 3, replace=False)
        A = homogeneous[sample]
        _, _, vt = np.linalg.svd(A, full_matrices=True)
        plane = vt[3]
        f = 1.0 / float(np.linalg.norm(plane))
        distances = np.abs(homogeneous @ plane) * f
        median = float(np.sort(distances)[nth])
        if median < best_dist:
            best_dist = median
            best_distances = distances

    if best_distances is None:
        return None
    inliers = best_distances < _INLIER_FACTOR * best_dist
    rang = -_HALF_TURN / 2 + float(rng.random()) * _HALF_TURN
    return Plane(pts[inliers], Tcw, rang)


def status_message(status, localization_mode) -> tuple[str, tuple[int, int, int]] | None:
    """Overlay text and its colour for a tracking status, or None for other states."""
    status = int(status)
    if status == 1:
        return "SLAM NOT INITIALIZED", _RED
    if status == 2:
        return ("LOCALIZATION ON" if localization_mode else "SLAM ON"), _GREEN
    if status == 3:
        return ("LOCALIZATION LOST" if localization_mode else "SLAM LOST"), _RED
    return None