"""Grid sizing configuration and the clamps applied at the settings boundary."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from .constants import (
    DEFAULT_CONTROLLER_HEIGHT,
    DEFAULT_FPS,
    DEFAULT_FRAME_SIZE,
    DEFAULT_PREPARE_SECONDS,
    DEFAULT_TOTAL_SECONDS,
    FPS_MAX,
    FPS_MIN,
    FRAME_HEIGHT,
    FRAME_WIDTH,
    PREPARE_SECONDS_MAX,
    PREPARE_SECONDS_MIN,
    ROW_GAP,
    TOTAL_SECONDS_MAX,
    TOTAL_SECONDS_MIN,
)


class FrameSize(str, Enum):
    SMALL = "small"
    NORMAL = "normal"
    LARGE = "large"

    @classmethod
    def parse(cls, value: str | FrameSize) -> FrameSize:
        """Return the matching size, or ``NORMAL`` for anything unknown."""
        try:
            return cls(value)
        except ValueError:
            return cls(DEFAULT_FRAME_SIZE)


def _clamp(value: int, low: int, high: int) -> int:
    return min(high, max(low, int(value)))


def clamp_total_seconds(value: int) -> int:
    return _clamp(value, TOTAL_SECONDS_MIN, TOTAL_SECONDS_MAX)


def clamp_fps(value: int) -> int:
    return _clamp(value, FPS_MIN, FPS_MAX)


def clamp_prepare_seconds(value: int) -> int:
    return _clamp(value, PREPARE_SECONDS_MIN, PREPARE_SECONDS_MAX)


def major_stride_for(fps: int) -> int:
    """Frames between emphasised grid lines."""
    return fps // 5 if fps % 5 == 0 else fps // 4


@dataclass(frozen=True, slots=True)
class DisplayValues:
    """Settings as the settings form shows them."""

    total_seconds: int
    frames_per_second: int
    prepare_seconds: int
    frame_width: FrameSize
    frame_thickness: FrameSize


@dataclass(frozen=True, slots=True)
class GridSnapshot:
    """Immutable copy of the grid configuration taken once per render tick."""

    total_seconds: int
    frames_per_second: int
    block_width: int
    block_height: int
    major_stride: int
    one_second_height: int
    row_width: int
    controller_height: int


class GridConfig:
    """Scalar grid settings plus the values derived from them.

    Setters replace whole fields only. The renderer reads a
    :class:`GridSnapshot`, so a setter called between ticks is never
    observed half applied.
    """

    def __init__(self) -> None:
        self._snapshot = GridSnapshot(
            total_seconds=DEFAULT_TOTAL_SECONDS,
            frames_per_second=DEFAULT_FPS,
            block_width=FRAME_WIDTH[DEFAULT_FRAME_SIZE],
            block_height=FRAME_HEIGHT[DEFAULT_FRAME_SIZE],
            major_stride=major_stride_for(DEFAULT_FPS),
            one_second_height=DEFAULT_FPS * FRAME_HEIGHT[DEFAULT_FRAME_SIZE],
            row_width=FRAME_WIDTH[DEFAULT_FRAME_SIZE] + ROW_GAP,
            controller_height=DEFAULT_CONTROLLER_HEIGHT,
        )
        self.prepare_seconds = DEFAULT_PREPARE_SECONDS

    def snapshot(self) -> GridSnapshot:
        return self._snapshot

    # ── Accessors ───────────────────────────────────────────

    @property
    def total_seconds(self) -> int:
        return self._snapshot.total_seconds

    @property
    def frames_per_second(self) -> int:
        return self._snapshot.frames_per_second

    @property
    def block_width(self) -> int:
        return self._snapshot.block_width

    @property
    def block_height(self) -> int:
        return self._snapshot.block_height

    @property
    def major_stride(self) -> int:
        return self._snapshot.major_stride

    @property
    def one_second_height(self) -> int:
        return self._snapshot.one_second_height

    @property
    def row_width(self) -> int:
        return self._snapshot.row_width

    @property
    def controller_height(self) -> int:
        return self._snapshot.controller_height

    # ── Setters ─────────────────────────────────────────────

    def set_total_seconds(self, seconds: int) -> None:
        self._snapshot = replace(self._snapshot, total_seconds=int(seconds))

    def set_frames_per_second(self, fps: int) -> None:
        fps = int(fps)
        self._snapshot = replace(
            self._snapshot,
            frames_per_second=fps,
            major_stride=major_stride_for(fps),
            one_second_height=fps * self._snapshot.block_height,
        )

    def set_prepare_seconds(self, seconds: int) -> None:
        self.prepare_seconds = int(seconds)

    def set_frame_width(self, size: str | FrameSize) -> None:
        width = FRAME_WIDTH[FrameSize.parse(size).value]
        self._snapshot = replace(self._snapshot, block_width=width, row_width=width + ROW_GAP)

    def set_frame_thickness(self, size: str | FrameSize) -> None:
        height = FRAME_HEIGHT[FrameSize.parse(size).value]
        self._snapshot = replace(
            self._snapshot,
            block_height=height,
            one_second_height=self._snapshot.frames_per_second * height,
        )

    def set_controller_height(self, height: int) -> None:
        self._snapshot = replace(self._snapshot, controller_height=int(height))

    # ── Display ─────────────────────────────────────────────

    def display_values(self) -> DisplayValues:
        """Map pixel sizes back to their preset names (``normal`` if none match)."""
        width = next(
            (name for name, px in FRAME_WIDTH.items() if px == self.block_width),
            DEFAULT_FRAME_SIZE,
        )
        thickness = next(
            (name for name, px in FRAME_HEIGHT.items() if px == self.block_height),
            DEFAULT_FRAME_SIZE,
        )
        return DisplayValues(
            total_seconds=self.total_seconds,
            frames_per_second=self.frames_per_second,
            prepare_seconds=self.prepare_seconds,
            frame_width=FrameSize(width),
            frame_thickness=FrameSize(thickness),
        )
