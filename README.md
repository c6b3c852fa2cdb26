# twoviewslam

Small numpy building blocks for feature-based visual SLAM.

## Modules

- `twoviewslam.converter`: pose conversions.
  - `to_se3(T)` splits a 3x4 or 4x4 transform into rotation and translation.
  - `se3_to_matrix(R, t)` and `sim3_to_matrix(R, t, s)` build a 4x4
    single-precision homogeneous matrix. The Sim(3) form scales the rotation
    by `s`.
  - `to_matrix3`, `to_vector3` (also accepts objects with `x`, `y`, `z`) and
    `to_descriptor_list` reshape and copy arrays.
  - `to_quaternion(R)` returns `[x, y, z, w]` in single precision.
- `twoviewslam.camera`: `PinholeCamera` holds `fx`, `fy`, `cx`, `cy` and 4 or 5
  radial-tangential distortion coefficients.
  - Build one directly or with `PinholeCamera.from_matrix(K, dist_coef)`.
  - `matrix()` returns the calibration matrix.
  - `is_distorted()` is true when the first distortion coefficient is
    non-zero.
  - `undistort_points(points)` undistorts iteratively, with five iterations.
  - `image_bounds(width, height)` gives `(min_x, max_x, min_y, max_y)` of the
    undistorted image area.
- `twoviewslam.sequences`: monocular dataset listings and timing.
  - `load_euroc(image_dir, times_file)` reads nanosecond stamps and converts
    them to seconds.
  - `load_kitti(sequence_dir)` reads `times.txt` and names the images
    `image_0/000000.png` onwards.
  - `load_tum(sequence_dir)` reads `rgb.txt` and skips its three header lines.
  - Each loader returns a list of `ImageEntry(path, timestamp)`.
  - `TrackingTimes` collects per-frame durations and gives their `median()`
    and `mean()`.
  - `frame_wait(timestamps, index, track_time)` returns how long to sleep so
    that playback keeps the recorded rate.
- `twoviewslam.paired_sequences`: stereo and RGB-D listings.
  - `load_euroc_stereo(left_dir, right_dir, times_file)` and
    `load_kitti_stereo(sequence_dir)` return `StereoEntry(left, right, timestamp)`.
  - `load_tum_rgbd(association_file)` returns `RgbdEntry(rgb, depth, timestamp)`.
  - `check_pairs(left, right)` raises `ValueError` when either list is empty or
    when the two differ in length.
- `twoviewslam.plane`: planes anchored in a map.
  - `detect_plane(positions, observations, Tcw, iterations, rng)` fits a plane
    by RANSAC to the points seen more than five times. It returns `None` when
    fewer than 50 such points remain.
  - `Plane` refits itself to its points with `recompute()` and orients its
    normal towards the camera.
  - `Plane.from_normal(normal, origin, rang)` builds a plane directly from a
    normal and an origin.
  - `gl_matrix()` and `pose_to_gl(Tcw)` return column-major 16-element
    matrices.
  - `exp_so3(v)` is the rotation exponential map.
  - `status_message(status, localization_mode)` gives the overlay text and
    RGB colour for a tracking status.

## Installation

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

## Examples

```python
from twoviewslam.sequences import load_tum, TrackingTimes, frame_wait

entries = load_tum("rgbd_dataset_freiburg1_xyz")
stamps = [e.timestamp for e in entries]
times = TrackingTimes()
for i, entry in enumerate(entries):
    track_time = 0.02  # time spent processing entry.path
    times.add(track_time)
    wait = frame_wait(stamps, i, track_time)
print(times.median(), times.mean())
```

```python
import numpy as np
from twoviewslam.camera import PinholeCamera

cam = PinholeCamera(500.0, 500.0, 320.0, 240.0, (-0.28, 0.07, 0.0, 0.0))
print(cam.undistort_points(np.array([[10.0, 20.0]])))
print(cam.image_bounds(640, 480))
```

## What this package does not do

This package does not detect or describe features. It does not initialize
from two views, track frames, build or optimize a map, or draw frames. It
reads no images and opens no windows. It provides no command-line program.
The loaders only list file paths and timestamps, and reading and processing
the images is left to the caller.