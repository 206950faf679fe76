"""Command/query surface the controls use to drive the timing grid."""

from __future__ import annotations

import time
from collections.abc import Callable

from .grid_config import DisplayValues, FrameSize, GridConfig
from .grid_renderer import DrawCommand, GridRenderer, ReadyListener
from .time_keeper import MarkInterval, PlaybackState, TimeKeeper


def perf_counter_ms() -> float:
    return time.perf_counter() * 1000


class TimingSheet:
    """Owns the time keeper, the grid configuration and the renderer.

    *listener* is told (via ``force_ready``) when the renderer ends a
    session by itself. *clock* returns monotonic milliseconds.
    """

    def __init__(
        self,
        listener: ReadyListener,
        clock: Callable[[], float] = perf_counter_ms,
    ) -> None:
        self._clock = clock
        self.keeper = TimeKeeper()
        self.config = GridConfig()
        self.renderer = GridRenderer(self.keeper, self.config, listener)
        self.keeper.tick(clock())

    @property
    def state(self) -> PlaybackState:
        return self.keeper.state

    def now_ms(self) -> float:
        return self._clock()

    # ── Queries ──────────────────────────────────────────────

    def display_values(self) -> DisplayValues:
        return self.config.display_values()

    def marks(self) -> list[MarkInterval]:
        return self.keeper.marks.intervals

    # ── Settings ─────────────────────────────────────────────

    def set_total_seconds(self, seconds: int) -> None:
        self.config.set_total_seconds(seconds)

    def set_frames_per_second(self, fps: int) -> None:
        self.config.set_frames_per_second(fps)

    def set_prepare_seconds(self, seconds: int) -> None:
        self.config.set_prepare_seconds(seconds)

    def set_frame_width(self, size: str | FrameSize) -> None:
        self.config.set_frame_width(size)

    def set_frame_thickness(self, size: str | FrameSize) -> None:
        self.config.set_frame_thickness(size)

    def set_controller_height(self, height: int) -> None:
        self.config.set_controller_height(height)

    # ── Commands ─────────────────────────────────────────────

    def start_mark(self) -> None:
        """Open a mark at the last rendered tick."""
        self.keeper.start_mark()

    def end_mark(self) -> MarkInterval | None:
        return self.keeper.end_mark()

    def request_transition(self, state: PlaybackState) -> PlaybackState:
        return self.keeper.transition(state)

    # ── Rendering ────────────────────────────────────────────

    def set_viewport(self, width: int, height: int) -> None:
        self.renderer.set_viewport(width, height)

    def detach(self) -> None:
        self.renderer.detach()

    def render(self, now: float | None = None) -> list[DrawCommand]:
        if now is None:
            now = self._clock()
        return self.renderer.render(now)
