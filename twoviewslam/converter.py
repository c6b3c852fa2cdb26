"""Conversions between pose representations: homogeneous matrices, rotation/translation pairs and quaternions."""

from __future__ import annotations

import math

import numpy as np


def _as_array(m, shape: tuple[int, ...], name: str) -> np.ndarray:
    arr = np.asarray(m, dtype=np.float64)
    if arr.shape != shape:
        raise ValueError(f"{name} must have shape {shape}, got {arr.shape}")
    return arr


def to_descriptor_list(descriptors) -> list[np.ndarray]:
    """Split a descriptor matrix into one array per row."""
    arr = np.asarray(descriptors)
    if arr.ndim != 2:
        raise ValueError(f"descriptors must be a 2-D array, got {arr.ndim} dimensions")
    return [row.copy() for row in arr]


def to_se3(T) -> tuple[np.ndarray, np.ndarray]:
    """Return the rotation and translation of a 3x4 or 4x4 rigid transform."""
    arr = np.asarray(T, dtype=np.float64)
    if arr.shape not in ((3, 4), (4, 4)):
        raise ValueError(f"transform must be 3x4 or 4x4, got {arr.shape}")
    return arr[:3, :3].copy(), arr[:3, 3].copy()


def se3_to_matrix(R, t) -> np.ndarray:
    """Build a 4x4 single-precision homogeneous matrix from a rotation and translation."""
    rot = _as_array(R, (3, 3), "R")
    trans = np.asarray(t, dtype=np.float64).reshape(-1)
    if trans.size != 3:
        raise ValueError(f"t must have 3 elements, got {trans.size}")
    out = np.eye(4, dtype=np.float32)
    out[:3, :3] = rot
    out[:3, 3] = trans
    return out


def sim3_to_matrix(R, t, s) -> np.ndarray:
    """Build a 4x4 matrix for a similarity transform: scaled rotation and translation."""
    return se3_to_matrix(float(s) * _as_array(R, (3, 3), "R"), t)


def to_matrix3(m) -> np.ndarray:
    """Return a 3x3 matrix in double precision."""
    return _as_array(m, (3, 3), "matrix").copy()


def to_vector3(v) -> np.ndarray:
    """Return a 3-vector in double precision from an array or a point with x, y, z."""
    if all(hasattr(v, attr) for attr in ("x", "y", "z")):
        return np.array([v.x, v.y, v.z], dtype=np.float64)
    arr = np.asarray(v, dtype=np.float64).reshape(-1)
    if arr.size != 3:
        raise ValueError(f"vector must have 3 elements, got {arr.size}")
    return arr.copy()


def to_quaternion(R) -> np.ndarray:
    """Return the quaternion of a rotation matrix as [x, y, z, w]."""
    m = to_matrix3(R)
    trace = m[0, 0] + m[1, 1] + m[2, 2]
    q = [0.0, 0.0, 0.0]
    if trace > 0.0:
        root = math.sqrt(trace + 1.0)
        w = 0.5 * root
        root = 0.5 / root
        q = [
            (m[2, 1] - m[1, 2]) * root,
            (m[0, 2] - m[2, 0]) * root,
            (m[1, 0] - m[0, 1]) * root,
        ]
    else:
        i = 0
        if m[1, 1] > m[0, 0]:
            i = 1
        if m[2, 2] > m[i, i]:
            i = 2
        j = (i + 1) % 3
        k = (j + 1) % 3
        root = math.sqrt(m[i, i] - m[j, j] - m[k, k] + 1.0)
        q[i] = 0.5 * root
        root = 0.5 / root
        w = (m[k, j] - m[j, k]) * root
        q[j] = (m[j, i] + m[i, j]) * root
        q[k] = (m[k, i] + m[i, k]) * root
    return np.array([q[0], q[1], q[2], w], dtype=np.float32)