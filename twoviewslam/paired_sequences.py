"""Image-pair listings for stereo and RGB-D datasets."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Sequence

_NANOSECONDS = 1e9


@dataclass(frozen=True)
class StereoEntry:
    """A rectified stereo pair: left and right image paths and a timestamp in seconds."""

    left: str
    right: str
    timestamp: float


@dataclass(frozen=True)
class RgbdEntry:
    """A colour image and its registered depth map, named as in the association file."""

    rgb: str
    depth: str
    timestamp: float


def _lines(path) -> Iterator[str]:
    with open(path, encoding="utf-8") as handle:
        for raw in handle:
            line = raw.rstrip("\n")
            if line:
                yield line


def _number(text: str, line: str) -> float:
    try:
        return float(text)
    except ValueError as exc:
        raise ValueError(f"bad timestamp in line {line!r}") from exc


def _stamp(line: str) -> float:
    fields = line.split()
    if not fields:
        raise ValueError(f"no timestamp in line {line!r}")
    return _number(fields[0], line)


def load_euroc_stereo(left_dir, right_dir, times_file) -> list[StereoEntry]:
    """Read nanosecond stamps; each names <stamp>.png in both camera folders."""
    return [
        StereoEntry(
            f"{left_dir}/{line}.png",
            f"{right_dir}/{line}.png",
            _stamp(line) / _NANOSECONDS,
        )
        for line in _lines(times_file)
    ]


def load_kitti_stereo(sequence_dir) -> list[StereoEntry]:
    """Read times.txt; images are image_0/ and image_1/ numbered from 000000.png."""
    times = [_stamp(line) for line in _lines(Path(sequence_dir) / "times.txt")]
    left = f"{sequence_dir}/image_0/"
    right = f"{sequence_dir}/image_1/"
    return [
        StereoEntry(f"{left}{i:06d}.png", f"{right}{i:06d}.png", t)
        for i, t in enumerate(times)
    ]


def load_tum_rgbd(association_file) -> list[RgbdEntry]:
    """Read lines of 'stamp rgb_name stamp depth_name'; the first stamp is kept."""
    entries = []
    for line in _lines(association_file):
        fields = line.split()
        if len(fields) < 4:
            raise ValueError(f"association line needs four fields: {line!r}")
        entries.append(RgbdEntry(fields[1], fields[3], _number(fields[0], line)))
    return entries


def check_pairs(left: Sequence, right: Sequence) -> int:
    """Check that two image lists are non-empty and equally long; return their length."""
    if len(left) == 0 or len(right) == 0:
        raise ValueError("no images found in provided path")
    if len(left) != len(right):
        raise ValueError(
            f"different number of images: {len(left)} and {len(right)}"
        )
    return len(left)