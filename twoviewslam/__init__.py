"""Pose conversions, pinhole camera undistortion, dataset loaders and plane fitting for visual SLAM."""

__version__ = "0.1.0"