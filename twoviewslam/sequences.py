"""Image sequence listings for monocular datasets and tracking-time statistics."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator

_TUM_HEADER_LINES = 3
_NANOSECONDS = 1e9


@dataclass(frozen=True)
class ImageEntry:
    """One image of a sequence: its file path and timestamp in seconds."""

    path: str
    timestamp: float


@dataclass
class TrackingTimes:
    """Collects per-frame tracking durations and summarises them."""

    samples: list[float] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.samples)

    def add(self, seconds) -> None:
        """Record the time one frame took to track."""
        self.samples.append(float(seconds))

    def _require_samples(self) -> None:
        if not self.samples:
            raise ValueError("no tracking times recorded")

    def median(self) -> float:
        """Element at position n // 2 of the sorted durations."""
        self._require_samples()
        ordered = sorted(self.samples)
        return ordered[len(ordered) // 2]

    def mean(self) -> float:
        """Average duration."""
        self._require_samples()
        return sum(self.samples) / len(self.samples)


def _non_empty_lines(path, skip: int = 0) -> Iterator[str]:
    with open(path, encoding="utf-8") as handle:
        for number, raw in enumerate(handle):
            if number < skip:
                continue
            line = raw.rstrip("\n")
            if line:
                yield line


def _leading_number(line: str) -> float:
    fields = line.split()
    if not fields:
        raise ValueError(f"no timestamp in line {line!r}")
    try:
        return float(fields[0])
    except ValueError as exc:
        raise ValueError(f"bad timestamp in line {line!r}") from exc


def load_euroc(image_dir, times_file) -> list[ImageEntry]:
    """Read a times file of nanosecond stamps; each names the image <stamp>.png."""
    entries = []
    for line in _non_empty_lines(times_file):
        stamp = _leading_number(line)
        entries.append(ImageEntry(f"{image_dir}/{line}.png", stamp / _NANOSECONDS))
    return entries


def load_kitti(sequence_dir) -> list[ImageEntry]:
    """Read times.txt of a sequence; images are image_0/000000.png onwards."""
    times = [_leading_number(line) for line in _non_empty_lines(Path(sequence_dir) / "times.txt")]
    prefix = f"{sequence_dir}/image_0/"
    return [ImageEntry(f"{prefix}{i:06d}.png", t) for i, t in enumerate(times)]


def load_tum(sequence_dir) -> list[ImageEntry]:
    """Read rgb.txt of a sequence, skipping its three header lines."""
    entries = []
    for line in _non_empty_lines(Path(sequence_dir) / "rgb.txt", skip=_TUM_HEADER_LINES):
        stamp = _leading_number(line)
        fields = line.split()
        if len(fields) < 2:
            raise ValueError(f"no image name in line {line!r}")
        entries.append(ImageEntry(f"{sequence_dir}/{fields[1]}", stamp))
    return entries


def frame_wait(timestamps, index, track_time) -> float:
    """Seconds to wait before the next frame so playback keeps the recorded rate."""
    stamps = list(timestamps)
    if not 0 <= index < len(stamps):
        raise IndexError(f"frame index {index} out of range")
    period = 0.0
    if index < len(stamps) - 1:
        period = stamps[index + 1] - stamps[index]
    elif index > 0:
        period = stamps[index] - stamps[index - 1]
    return period - track_time if track_time < period else 0.0