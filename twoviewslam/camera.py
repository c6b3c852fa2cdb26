"""Pinhole camera with radial-tangential lens distortion."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

_UNDISTORT_ITERATIONS = 5


@dataclass(frozen=True)
class PinholeCamera:
    """Intrinsics fx, fy, cx, cy and distortion coefficients (k1, k2, p1, p2[, k3])."""

    fx: float
    fy: float
    cx: float
    cy: float
    dist_coef: tuple[float, ...] = (0.0, 0.0, 0.0, 0.0)

    def __post_init__(self) -> None:
        if len(self.dist_coef) not in (4, 5):
            raise ValueError(
                f"distortion needs 4 or 5 coefficients, got {len(self.dist_coef)}"
            )
        if self.fx == 0 or self.fy == 0:
            raise ValueError("focal lengths must be non-zero")

    @classmethod
    def from_matrix(cls, K, dist_coef) -> "PinholeCamera":
        """Build a camera from a 3x3 calibration matrix and distortion coefficients."""
        k = np.asarray(K, dtype=np.float64)
        if k.shape != (3, 3):
            raise ValueError(f"calibration matrix must be 3x3, got {k.shape}")
        coef = tuple(float(c) for c in np.asarray(dist_coef, dtype=np.float64).reshape(-1))
        return cls(float(k[0, 0]), float(k[1, 1]), float(k[0, 2]), float(k[1, 2]), coef)

    def matrix(self) -> np.ndarray:
        """The 3x3 calibration matrix in single precision."""
        return np.array(
            [[self.fx, 0.0, self.cx], [0.0, self.fy, self.cy], [0.0, 0.0, 1.0]],
            dtype=np.float32,
        )

    def is_distorted(self) -> bool:
        """True when the first distortion coefficient is non-zero."""
        return self.dist_coef[0] != 0.0

    def undistort_points(self, points) -> np.ndarray:
        """Map distorted pixel coordinates (N x 2) to ideal pixel coordinates."""
        pts = np.asarray(points, dtype=np.float64)
        if pts.size == 0:
            return np.zeros((0, 2), dtype=np.float64)
        pts = pts.reshape(-1, 2)
        k1, k2, p1, p2 = self.dist_coef[:4]
        k3 = self.dist_coef[4] if len(self.dist_coef) == 5 else 0.0

        x0 = (pts[:, 0] - self.cx) / self.fx
        y0 = (pts[:, 1] - self.cy) / self.fy
        x, y = x0.copy(), y0.copy()
        for _ in range(_UNDISTORT_ITERATIONS):
            r2 = x * x + y * y
            icdist = 1.0 / (1.0 + ((k3 * r2 + k2) * r2 + k1) * r2)
            dx = 2.0 * p1 * x * y + p2 * (r2 + 2.0 * x * x)
            dy = p1 * (r2 + 2.0 * y * y) + 2.0 * p2 * x * y
            x = (x0 - dx) * icdist
            y = (y0 - dy) * icdist
        return np.column_stack((x * self.fx + self.cx, y * self.fy + self.cy))

    def image_bounds(self, width: float, height: float) -> tuple[float, float, float, float]:
        """Return (min_x, max_x, min_y, max_y) of the undistorted image area."""
        if not self.is_distorted():
            return 0.0, float(width), 0.0, float(height)
        corners = self.undistort_points(
            [[0.0, 0.0], [width, 0.0], [0.0, height], [width, height]]
        )
        min_x = min(corners[0, 0], corners[2, 0])
        max_x = max(corners[1, 0], corners[3, 0])
        min_y = min(corners[0, 1], corners[1, 1])
        max_y = max(corners[2, 1], corners[3, 1])
        return float(min_x), float(max_x), float(min_y), float(max_y)