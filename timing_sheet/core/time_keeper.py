"""Playback state machine and clock bookkeeping.

Pure Python, no Qt dependency. All timestamps are milliseconds in the
monotonic clock domain; elapsed values handed out are seconds.

``plan_transition`` is a pure function that computes the next stored state,
the next :class:`ClockState` and the mark-log effects for a requested
transition. :class:`TimeKeeper` applies those plans and is the only writer
of the state, the clock and the mark log.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import IntEnum, auto

log = logging.getLogger(__name__)

NO_MARK = -1.0


class PlaybackState(IntEnum):
    INIT = auto()
    READY = auto()
    PLAY = auto()
    PAUSE = auto()
    REPLAY = auto()  # request only, stored as PLAY
    RESET = auto()  # request only, stored as INIT
    MARK = auto()
    RECORD = auto()
    STOP = auto()  # request only, stored as READY


class MarkEffect(IntEnum):
    """Side effects a transition has on the mark log."""

    CLEAR_LOG = auto()
    DROP_OPEN = auto()


@dataclass(frozen=True, slots=True)
class ClockState:
    start: float = 0.0
    pause_at: float = 0.0  # 0 = not paused
    record_elapsed: float = 0.0  # ms of the last completed recording
    now: float = 0.0

    @property
    def paused(self) -> bool:
        return self.pause_at != 0


@dataclass(frozen=True, slots=True)
class MarkInterval:
    """A marked span of recorded time, in seconds from the record origin."""

    start: float
    end: float

    @property
    def duration(self) -> float:
        return self.end - self.start


@dataclass(frozen=True, slots=True)
class Transition:
    state: PlaybackState
    clock: ClockState
    effects: tuple[MarkEffect, ...] = ()


class MarkLog:
    """Completed mark intervals plus at most one open mark."""

    def __init__(self) -> None:
        self._intervals: list[MarkInterval] = []
        self._open_start: float = NO_MARK

    @property
    def intervals(self) -> list[MarkInterval]:
        """Return a copy of the completed intervals."""
        return list(self._intervals)

    @property
    def open_start(self) -> float:
        return self._open_start

    @property
    def has_open(self) -> bool:
        return self._open_start != NO_MARK

    def __len__(self) -> int:
        return len(self._intervals)

    def open(self, start: float) -> None:
        self._open_start = start

    def close(self, end: float) -> MarkInterval | None:
        """Append the open mark ending at *end*. Returns ``None`` if none is open."""
        if not self.has_open:
            return None
        interval = MarkInterval(self._open_start, end)
        self._intervals.append(interval)
        self._open_start = NO_MARK
        return interval

    def drop_open(self) -> None:
        self._open_start = NO_MARK

    def clear(self) -> None:
        self._intervals.clear()
        self._open_start = NO_MARK

    def visible(self, elapsed: float) -> list[MarkInterval]:
        """Completed intervals plus the provisional open one, if it has grown."""
        result = list(self._intervals)
        if self.has_open and self._open_start < elapsed:
            result.append(MarkInterval(self._open_start, elapsed))
        return result


def plan_transition(
    state: PlaybackState,
    clock: ClockState,
    requested: PlaybackState,
) -> Transition:
    """Compute the effect of *requested* on *clock* without mutating anything.

    ``REPLAY``, ``RESET`` and ``STOP`` never come back as the stored state.
    *state* is the currently stored state. The clock arithmetic does not
    depend on it, but it is part of the signature so that callers always
    plan from a complete snapshot.
    """
    now = clock.now

    if requested == PlaybackState.READY:
        return Transition(PlaybackState.READY, replace(clock, pause_at=0.0))

    if requested == PlaybackState.PLAY:
        if clock.pause_at == 0:
            start = now
        else:
            # Shift the origin by the paused span so elapsed time is preserved
            start = clock.start + (now - clock.pause_at)
        return Transition(PlaybackState.PLAY, replace(clock, start=start, pause_at=0.0))

    if requested == PlaybackState.PAUSE:
        return Transition(PlaybackState.PAUSE, replace(clock, pause_at=now))

    if requested == PlaybackState.REPLAY:
        return Transition(PlaybackState.PLAY, replace(clock, start=now, pause_at=0.0))

    if requested == PlaybackState.RESET:
        return Transition(
            PlaybackState.INIT,
            ClockState(now=now),
            (MarkEffect.CLEAR_LOG, MarkEffect.DROP_OPEN),
        )

    if requested == PlaybackState.RECORD:
        # Completed marks survive a new take; only RESET clears them.
        return Transition(
            PlaybackState.RECORD,
            replace(clock, start=now, pause_at=0.0, record_elapsed=0.0),
            (MarkEffect.DROP_OPEN,),
        )

    if requested == PlaybackState.STOP:
        return Transition(
            PlaybackState.READY,
            replace(clock, pause_at=0.0, record_elapsed=now - clock.start),
            (MarkEffect.DROP_OPEN,),
        )

    # INIT and MARK carry no clock effect
    return Transition(requested, clock)


class TimeKeeper:
    """Owns the playback state, the clock and the mark log.

    Usage::

        keeper = TimeKeeper()
        keeper.tick(now_ms)
        keeper.transition(PlaybackState.RECORD)
        ...
        keeper.tick(later_ms)
        keeper.start_mark()
    """

    def __init__(self) -> None:
        self._state = PlaybackState.INIT
        self._clock = ClockState()
        self._marks = MarkLog()

    # ── Queries ──────────────────────────────────────────────

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def clock(self) -> ClockState:
        return self._clock

    @property
    def marks(self) -> MarkLog:
        return self._marks

    @property
    def is_running(self) -> bool:
        """True while the playhead moves (playing or recording)."""
        return self._state in (PlaybackState.PLAY, PlaybackState.RECORD)

    def elapsed_seconds(self, now: float | None = None) -> float:
        if now is None:
            now = self._clock.now
        return (now - self._clock.start) / 1000

    def display_seconds(self, now: float | None = None) -> float:
        """Seconds shown on the time readout."""
        if self.is_running:
            return self.elapsed_seconds(now)
        clock = self._clock
        if clock.pause_at == 0:
            return clock.record_elapsed / 1000
        return (clock.pause_at - clock.start) / 1000

    # ── Mutators ─────────────────────────────────────────────

    def tick(self, now: float) -> None:
        """Record the timestamp sampled for the current render tick."""
        self._clock = replace(self._clock, now=now)

    def transition(self, requested: PlaybackState) -> PlaybackState:
        """Apply *requested* and return the state actually stored."""
        plan = plan_transition(self._state, self._clock, requested)
        for effect in plan.effects:
            if effect == MarkEffect.CLEAR_LOG:
                self._marks.clear()
            elif effect == MarkEffect.DROP_OPEN:
                self._marks.drop_open()
        log.debug("Transition %s -> %s (requested %s)", self._state.name, plan.state.name, requested.name)
        self._state = plan.state
        self._clock = plan.clock
        return plan.state

    def start_mark(self, now: float | None = None) -> None:
        self._marks.open(self.elapsed_seconds(now))

    def end_mark(self, now: float | None = None) -> MarkInterval | None:
        interval = self._marks.close(self.elapsed_seconds(now))
        if interval is None:
            log.debug("end_mark ignored: no open mark")
        return interval

    def finish_overrun(self, total_seconds: int) -> None:
        """Stop a play or record session that ran past *total_seconds*."""
        if self._state == PlaybackState.RECORD:
            self._clock = replace(self._clock, record_elapsed=total_seconds * 1000.0)
            self._marks.drop_open()
        else:
            self._clock = replace(self._clock, pause_at=0.0)
        log.info("%s overran %d s, forcing READY", self._state.name, total_seconds)
        self._state = PlaybackState.READY

    def finish_take(self) -> None:
        """Stop playback that reached the length of the recorded take."""
        self._clock = replace(self._clock, pause_at=0.0)
        log.info("Playback reached recorded length %.3f s", self._clock.record_elapsed / 1000)
        self._state = PlaybackState.READY
