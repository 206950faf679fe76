"""Grid geometry: maps seconds and elapsed time onto block coordinates.

Pure functions of a :class:`GridSnapshot` and the viewport size.
The grid is laid out in vertical rows. Each row is a column of
``columns`` one-second blocks stacked top to bottom, and rows run left
to right.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass

from .constants import LEFT_MARGIN
from .grid_config import GridSnapshot
from .time_keeper import MarkInterval


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


@dataclass(frozen=True, slots=True)
class GridGeometry:
    total_seconds: int
    columns: int  # blocks per row
    rows: int
    row_height: int
    one_second_height: int
    row_width: int
    origin_x: float
    origin_y: float

    def cell(self, block: int) -> tuple[int, int]:
        """Return ``(row, column)`` for a 0-based block index."""
        return block // self.columns, block % self.columns

    def block_origin(self, block: int) -> tuple[float, float]:
        row, column = self.cell(block)
        return (
            self.origin_x + row * self.row_width,
            self.origin_y + column * self.one_second_height,
        )

    def column_height(self, row: int) -> int:
        """Height of *row*, clipped when the last row is only partly filled."""
        remainder = self.total_seconds % self.columns
        if row + 1 == self.rows and remainder:
            return self.one_second_height * remainder
        return self.row_height

    def is_row_end(self, block: int) -> bool:
        return block % self.columns + 1 == self.columns or block + 1 == self.total_seconds

    def position(self, cnt: float) -> tuple[int, float]:
        """Convert accumulated block height to ``(row, offset within row)``."""
        return math.floor(cnt / self.row_height), math.fmod(cnt, self.row_height)

    def seam_position(self, cnt: float) -> tuple[int, float]:
        """Like :meth:`position`, but an offset of 0 is the end of the previous row."""
        row, pos = self.position(cnt)
        if pos == 0:
            return row - 1, float(self.row_height)
        return row, pos

    def elapsed_to_height(self, seconds: float) -> float:
        return seconds * self.one_second_height

    @property
    def total_height(self) -> int:
        return self.one_second_height * self.total_seconds


def compute_geometry(config: GridSnapshot, width: int, height: int) -> GridGeometry:
    """Lay out ``config.total_seconds`` blocks inside a *width* x *height* viewport."""
    one_sec = config.one_second_height
    available = height - config.controller_height
    columns = max(1, math.floor(available / one_sec)) if one_sec > 0 else 1
    rows = math.ceil(config.total_seconds / columns)
    center = math.floor(width / 2)

    origin_x = LEFT_MARGIN + max(0, center - _round_half_up(config.row_width * rows / 2))
    origin_y = max(0, (math.floor(available) - columns * one_sec) / 2)

    return GridGeometry(
        total_seconds=config.total_seconds,
        columns=columns,
        rows=rows,
        row_height=one_sec * columns,
        one_second_height=one_sec,
        row_width=config.row_width,
        origin_x=origin_x,
        origin_y=origin_y,
    )


def clip_marks(intervals: Iterable[MarkInterval], block: int) -> list[tuple[float, float]]:
    """Return the ``(from, to)`` fractions of *block* covered by *intervals*.

    An interval spanning several seconds yields one slice per block it
    overlaps. The intervals do not need to be sorted.
    """
    slices = []
    for interval in intervals:
        if interval.end <= block or interval.start >= block + 1:
            continue
        lo = max(0.0, interval.start - block)
        hi = min(1.0, interval.end - block)
        if hi > lo:
            slices.append((lo, hi))
    return slices


def format_time(seconds: float) -> str:
    """Format *seconds* as ``MM:SS.mmm``. The sign is never shown."""
    ms = round(abs(seconds) * 1000)
    minutes, ms = divmod(ms, 60_000)
    return f"{minutes:02d}:{ms / 1000:06.3f}"
