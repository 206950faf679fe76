"""Per-tick layout and draw-command emission for the timing grid.

Pure Python, no Qt dependency. ``GridRenderer.render`` turns the time
keeper's state and the sampled clock into a flat list of draw commands
that a painter replays in order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from .constants import (
    BLOCK_BORDER,
    BLOCK_FILL,
    BLOCK_INNER_BORDER,
    FRAME_LABEL,
    FRAME_LABEL_FONT_SIZE,
    FRAME_LINE,
    FRAME_LINE_MAJOR,
    LABEL_FONT_SIZE,
    MARK_FILL,
    PLAYHEAD_OVERHANG,
    PLAYHEAD_PLAY,
    PLAYHEAD_RECORD,
    SECOND_LABEL,
    TIME_FONT_SIZE,
    TIME_LABEL_OFFSET,
)
from .grid_config import GridConfig, GridSnapshot
from .grid_layout import GridGeometry, clip_marks, compute_geometry, format_time
from .time_keeper import PlaybackState, TimeKeeper

log = logging.getLogger(__name__)


# ── Draw commands ────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class FillRect:
    x: float
    y: float
    width: float
    height: float
    color: str


@dataclass(frozen=True, slots=True)
class StrokeRect:
    x: float
    y: float
    width: float
    height: float
    color: str
    line_width: float = 1.0


@dataclass(frozen=True, slots=True)
class Line:
    x1: float
    y1: float
    x2: float
    y2: float
    color: str
    line_width: float = 1.0


@dataclass(frozen=True, slots=True)
class Text:
    x: float
    y: float
    text: str
    color: str
    size: int = LABEL_FONT_SIZE
    align: str = "left"  # "left", "right" or "center" relative to x


DrawCommand = FillRect | StrokeRect | Line | Text


class ReadyListener(Protocol):
    """Told when the renderer ends a session on its own."""

    def force_ready(self) -> None: ...


# ── Renderer ─────────────────────────────────────────────────


class GridRenderer:
    """Builds the draw-command list for one animation tick."""

    def __init__(self, keeper: TimeKeeper, config: GridConfig, listener: ReadyListener) -> None:
        self._keeper = keeper
        self._config = config
        self._listener = listener
        self._viewport: tuple[int, int] | None = None
        self._geometry: GridGeometry | None = None

    @property
    def viewport(self) -> tuple[int, int] | None:
        return self._viewport

    @property
    def geometry(self) -> GridGeometry | None:
        """Geometry computed by the last tick that had a viewport."""
        return self._geometry

    def set_viewport(self, width: int, height: int) -> None:
        self._viewport = (int(width), int(height))

    def detach(self) -> None:
        """Forget the drawing surface. Later ticks draw nothing."""
        self._viewport = None

    def render(self, now: float) -> list[DrawCommand]:
        viewport = self._viewport
        if viewport is None:
            return []
        width, height = viewport

        keeper = self._keeper
        keeper.tick(now)
        config = self._config.snapshot()
        geo = compute_geometry(config, width, height)
        self._geometry = geo

        elapsed = keeper.elapsed_seconds(now)
        commands: list[DrawCommand] = []
        self._draw_blocks(commands, geo, config, keeper.marks.visible(elapsed))
        self._draw_playhead(commands, geo, config, elapsed)
        self._draw_static_indicators(commands, geo, config)

        commands.append(Text(
            width / 2,
            height - TIME_LABEL_OFFSET,
            format_time(keeper.display_seconds(now)),
            SECOND_LABEL,
            TIME_FONT_SIZE,
            "center",
        ))
        return commands

    # ── Blocks ───────────────────────────────────────────────

    def _draw_blocks(self, commands, geo: GridGeometry, config: GridSnapshot, marks) -> None:
        block_w = config.block_width
        frame_h = config.block_height
        one_sec = config.one_second_height
        stride = max(1, config.major_stride)

        for i in range(config.total_seconds):
            row, column = geo.cell(i)
            x, y = geo.block_origin(i)

            if column == 0:
                rect_h = geo.column_height(row)
                commands.append(FillRect(x, y, block_w, rect_h, BLOCK_FILL))
                commands.append(StrokeRect(x + 1, y + 1, block_w - 1, rect_h - 1, BLOCK_INNER_BORDER))
                commands.append(StrokeRect(x, y, block_w, rect_h, BLOCK_BORDER))

            for lo, hi in clip_marks(marks, i):
                commands.append(FillRect(x + 1, y + lo * one_sec, block_w - 2, (hi - lo) * one_sec, MARK_FILL))

            commands.append(Text(x - 2, y + 5, str(i), SECOND_LABEL, LABEL_FONT_SIZE, "right"))
            if geo.is_row_end(i):
                commands.append(Text(x - 2, y + one_sec + 5, str(i + 1), SECOND_LABEL, LABEL_FONT_SIZE, "right"))

            for j in range(config.frames_per_second):
                line_y = y + frame_h * j
                if j % 2:
                    commands.append(Text(
                        x + block_w + 1,
                        line_y + frame_h / 2 + 3,
                        str(j + 1),
                        FRAME_LABEL,
                        FRAME_LABEL_FONT_SIZE,
                    ))
                major = j % stride == 0
                commands.append(Line(
                    x, line_y, x + block_w, line_y,
                    FRAME_LINE_MAJOR if major else FRAME_LINE,
                    2.0 if major else 1.0,
                ))

    # ── Playhead ─────────────────────────────────────────────

    def _indicator(self, geo: GridGeometry, config: GridSnapshot, row: int, pos: float, color: str) -> StrokeRect:
        return StrokeRect(
            geo.origin_x + geo.row_width * row - PLAYHEAD_OVERHANG,
            geo.origin_y + pos,
            config.block_width + 2 * PLAYHEAD_OVERHANG,
            1,
            color,
        )

    def _draw_playhead(self, commands, geo: GridGeometry, config: GridSnapshot, elapsed: float) -> None:
        keeper = self._keeper
        state = keeper.state
        if not keeper.is_running:
            return

        cnt = geo.elapsed_to_height(elapsed)
        if cnt > geo.total_height:
            keeper.finish_overrun(config.total_seconds)
            self._listener.force_ready()
            return

        row, pos = geo.position(cnt)
        color = PLAYHEAD_PLAY if state == PlaybackState.PLAY else PLAYHEAD_RECORD
        commands.append(self._indicator(geo, config, row, pos, color))

        clock = keeper.clock
        if state == PlaybackState.PLAY and 0 < clock.record_elapsed <= clock.now - clock.start:
            keeper.finish_take()
            self._listener.force_ready()

    def _draw_static_indicators(self, commands, geo: GridGeometry, config: GridSnapshot) -> None:
        clock = self._keeper.clock
        if clock.pause_at > 0:
            cnt = geo.elapsed_to_height((clock.pause_at - clock.start) / 1000)
            row, pos = geo.seam_position(cnt)
            commands.append(self._indicator(geo, config, row, pos, PLAYHEAD_PLAY))
        if clock.record_elapsed > 0:
            cnt = geo.elapsed_to_height(clock.record_elapsed / 1000)
            row, pos = geo.seam_position(cnt)
            commands.append(self._indicator(geo, config, row, pos, PLAYHEAD_RECORD))
