"""Tests for the playback state machine. Pure Python, no Qt dependency."""

import dataclasses

import pytest

from timing_sheet.core.time_keeper import (
    NO_MARK,
    ClockState,
    MarkEffect,
    MarkInterval,
    MarkLog,
    PlaybackState,
    TimeKeeper,
    plan_transition,
)


def at(keeper: TimeKeeper, now: float, requested: PlaybackState) -> PlaybackState:
    keeper.tick(now)
    return keeper.transition(requested)


# ── Transitions ────────────────────────────────────────────


class TestTransitions:
    def test_initial_state(self):
        keeper = TimeKeeper()
        assert keeper.state == PlaybackState.INIT
        assert keeper.clock == ClockState()
        assert len(keeper.marks) == 0
        assert not keeper.marks.has_open

    def test_ready_clears_pause(self):
        keeper = TimeKeeper()
        at(keeper, 1000, PlaybackState.PLAY)
        at(keeper, 2000, PlaybackState.PAUSE)
        assert at(keeper, 3000, PlaybackState.READY) == PlaybackState.READY
        assert keeper.clock.pause_at == 0

    def test_fresh_play_sets_start(self):
        keeper = TimeKeeper()
        at(keeper, 1500, PlaybackState.PLAY)
        assert keeper.state == PlaybackState.PLAY
        assert keeper.clock.start == 1500
        assert keeper.clock.pause_at == 0

    def test_pause_records_timestamp(self):
        keeper = TimeKeeper()
        at(keeper, 1000, PlaybackState.PLAY)
        at(keeper, 2500, PlaybackState.PAUSE)
        assert keeper.state == PlaybackState.PAUSE
        assert keeper.clock.pause_at == 2500
        assert keeper.display_seconds(9999) == pytest.approx(1.5)

    def test_resume_preserves_elapsed(self):
        keeper = TimeKeeper()
        at(keeper, 1000, PlaybackState.PLAY)
        at(keeper, 3000, PlaybackState.PAUSE)  # 2 s played
        at(keeper, 10000, PlaybackState.PLAY)  # 7 s paused
        assert keeper.clock.start == 8000
        assert keeper.elapsed_seconds(11500) == pytest.approx(3.5)

    def test_elapsed_independent_of_pause_lengths(self):
        keeper = TimeKeeper()
        now = 1000.0
        played = 0.0
        at(keeper, now, PlaybackState.PLAY)
        for play_ms, pause_ms in [(400, 50), (1200, 9000), (75, 1), (2000, 333)]:
            now += play_ms
            played += play_ms
            at(keeper, now, PlaybackState.PAUSE)
            now += pause_ms
            at(keeper, now, PlaybackState.PLAY)
        assert keeper.elapsed_seconds(now) == pytest.approx(played / 1000)

    def test_replay_restarts_play(self):
        keeper = TimeKeeper()
        at(keeper, 1000, PlaybackState.PLAY)
        at(keeper, 2000, PlaybackState.PAUSE)
        assert at(keeper, 5000, PlaybackState.REPLAY) == PlaybackState.PLAY
        assert keeper.state == PlaybackState.PLAY
        assert keeper.clock.start == 5000
        assert keeper.clock.pause_at == 0

    def test_replay_matches_reset_then_play(self):
        a = TimeKeeper()
        b = TimeKeeper()
        for keeper in (a, b):
            at(keeper, 1000, PlaybackState.PLAY)
            at(keeper, 4000, PlaybackState.PAUSE)
        at(a, 7000, PlaybackState.REPLAY)
        b.tick(7000)
        b.transition(PlaybackState.RESET)
        b.transition(PlaybackState.PLAY)
        assert a.state == b.state == PlaybackState.PLAY
        assert a.clock.start == b.clock.start == 7000

    @pytest.mark.parametrize("prior", [
        PlaybackState.INIT,
        PlaybackState.READY,
        PlaybackState.PLAY,
        PlaybackState.PAUSE,
        PlaybackState.RECORD,
    ])
    def test_reset_restores_initial_values(self, prior):
        keeper = TimeKeeper()
        at(keeper, 1000, PlaybackState.RECORD)
        keeper.tick(2000)
        keeper.start_mark()
        keeper.tick(2500)
        keeper.end_mark()
        keeper.tick(2600)
        keeper.start_mark()
        at(keeper, 3000, PlaybackState.STOP)
        at(keeper, 3100, prior)

        at(keeper, 4000, PlaybackState.RESET)
        assert keeper.state == PlaybackState.INIT
        assert dataclasses.replace(keeper.clock, now=0.0) == ClockState()
        assert keeper.marks.intervals == []
        assert keeper.marks.open_start == NO_MARK

    def test_record_resets_origin(self):
        keeper = TimeKeeper()
        at(keeper, 1000, PlaybackState.PLAY)
        at(keeper, 1500, PlaybackState.PAUSE)
        at(keeper, 2000, PlaybackState.RECORD)
        assert keeper.state == PlaybackState.RECORD
        assert keeper.clock.start == 2000
        assert keeper.clock.record_elapsed == 0
        assert keeper.clock.pause_at == 0

    def test_record_keeps_completed_marks(self):
        keeper = TimeKeeper()
        at(keeper, 1000, PlaybackState.RECORD)
        keeper.tick(1500)
        keeper.start_mark()
        keeper.tick(2000)
        keeper.end_mark()
        keeper.tick(2200)
        keeper.start_mark()
        at(keeper, 3000, PlaybackState.STOP)
        at(keeper, 4000, PlaybackState.RECORD)
        assert keeper.marks.intervals == [MarkInterval(0.5, 1.0)]
        assert not keeper.marks.has_open

    def test_stop_stores_recorded_length(self):
        keeper = TimeKeeper()
        at(keeper, 5000, PlaybackState.RECORD)
        keeper.tick(6000)
        keeper.start_mark()
        assert at(keeper, 9250, PlaybackState.STOP) == PlaybackState.READY
        assert keeper.state == PlaybackState.READY
        assert keeper.clock.record_elapsed == 4250
        assert keeper.clock.pause_at == 0
        assert not keeper.marks.has_open
        assert keeper.marks.intervals == []
        assert keeper.display_seconds(20000) == pytest.approx(4.25)

    def test_transient_states_never_stored(self):
        keeper = TimeKeeper()
        at(keeper, 1000, PlaybackState.RECORD)
        at(keeper, 2000, PlaybackState.STOP)
        assert keeper.state != PlaybackState.STOP
        at(keeper, 3000, PlaybackState.REPLAY)
        assert keeper.state != PlaybackState.REPLAY
        at(keeper, 4000, PlaybackState.RESET)
        assert keeper.state != PlaybackState.RESET

    def test_mark_request_has_no_clock_effect(self):
        keeper = TimeKeeper()
        at(keeper, 1000, PlaybackState.PLAY)
        before = keeper.clock
        at(keeper, 1000, PlaybackState.MARK)
        assert keeper.state == PlaybackState.MARK
        assert keeper.clock == before


# ── plan_transition ────────────────────────────────────────


class TestPlanTransition:
    def test_does_not_mutate_input(self):
        clock = ClockState(start=100.0, pause_at=300.0, record_elapsed=0.0, now=900.0)
        plan = plan_transition(PlaybackState.PAUSE, clock, PlaybackState.PLAY)
        assert clock.start == 100.0
        assert plan.clock.start == 700.0
        assert plan.state == PlaybackState.PLAY

    def test_reset_effects(self):
        plan = plan_transition(PlaybackState.PLAY, ClockState(now=5.0), PlaybackState.RESET)
        assert plan.state == PlaybackState.INIT
        assert MarkEffect.CLEAR_LOG in plan.effects
        assert MarkEffect.DROP_OPEN in plan.effects

    def test_record_only_drops_open_mark(self):
        plan = plan_transition(PlaybackState.READY, ClockState(now=5.0), PlaybackState.RECORD)
        assert plan.effects == (MarkEffect.DROP_OPEN,)

    def test_play_has_no_effects(self):
        plan = plan_transition(PlaybackState.READY, ClockState(now=5.0), PlaybackState.PLAY)
        assert plan.effects == ()

    def test_clock_is_frozen(self):
        clock = ClockState()
        with pytest.raises(dataclasses.FrozenInstanceError):
            clock.start = 1.0


# ── Marks ──────────────────────────────────────────────────


class TestMarks:
    def test_mark_uses_elapsed_seconds(self):
        keeper = TimeKeeper()
        at(keeper, 1000, PlaybackState.RECORD)
        keeper.start_mark(2500)
        interval = keeper.end_mark(4200)
        assert interval == MarkInterval(1.5, 3.2)
        assert keeper.marks.intervals == [MarkInterval(1.5, 3.2)]
        assert not keeper.marks.has_open

    def test_marks_default_to_last_tick(self):
        keeper = TimeKeeper()
        at(keeper, 1000, PlaybackState.RECORD)
        keeper.tick(1250)
        keeper.start_mark()
        keeper.tick(1750)
        assert keeper.end_mark() == MarkInterval(0.25, 0.75)

    def test_end_without_open_mark_is_ignored(self):
        keeper = TimeKeeper()
        at(keeper, 1000, PlaybackState.RECORD)
        assert keeper.end_mark(2000) is None
        assert keeper.marks.intervals == []

    def test_marks_non_decreasing_within_session(self):
        keeper = TimeKeeper()
        at(keeper, 0.5, PlaybackState.RECORD)
        now = 0.5
        for press, hold in [(100, 50), (10, 300), (0, 0), (250, 1)]:
            now += press
            keeper.start_mark(now)
            now += hold
            keeper.end_mark(now)
        starts = [m.start for m in keeper.marks.intervals]
        assert starts == sorted(starts)
        intervals = keeper.marks.intervals
        for prev, nxt in zip(intervals, intervals[1:]):
            assert nxt.start >= prev.end

    def test_intervals_property_returns_copy(self):
        keeper = TimeKeeper()
        at(keeper, 1000, PlaybackState.RECORD)
        keeper.start_mark(1100)
        keeper.end_mark(1200)
        keeper.marks.intervals.clear()
        assert len(keeper.marks) == 1


class TestMarkLog:
    def test_visible_includes_grown_open_mark(self):
        log = MarkLog()
        log.open(2.0)
        assert log.visible(1.5) == []
        assert log.visible(2.0) == []
        assert log.visible(2.5) == [MarkInterval(2.0, 2.5)]

    def test_visible_keeps_completed(self):
        log = MarkLog()
        log.open(0.5)
        log.close(1.0)
        log.open(1.5)
        assert log.visible(3.0) == [MarkInterval(0.5, 1.0), MarkInterval(1.5, 3.0)]

    def test_drop_open_keeps_completed(self):
        log = MarkLog()
        log.open(0.5)
        log.close(1.0)
        log.open(2.0)
        log.drop_open()
        assert not log.has_open
        assert len(log) == 1

    def test_interval_duration(self):
        assert MarkInterval(1.5, 3.25).duration == pytest.approx(1.75)


# ── Queries and forced stops ───────────────────────────────


class TestDisplayAndOverrun:
    def test_display_live_while_playing(self):
        keeper = TimeKeeper()
        at(keeper, 1000, PlaybackState.PLAY)
        assert keeper.display_seconds(3500) == pytest.approx(2.5)

    def test_display_zero_before_anything(self):
        assert TimeKeeper().display_seconds(12345) == 0.0

    def test_finish_overrun_during_play(self):
        keeper = TimeKeeper()
        at(keeper, 1000, PlaybackState.PLAY)
        at(keeper, 2000, PlaybackState.PAUSE)
        at(keeper, 3000, PlaybackState.PLAY)
        keeper.finish_overrun(21)
        assert keeper.state == PlaybackState.READY
        assert keeper.clock.pause_at == 0
        assert keeper.clock.record_elapsed == 0

    def test_finish_overrun_during_record_clamps_length(self):
        keeper = TimeKeeper()
        at(keeper, 1000, PlaybackState.RECORD)
        keeper.tick(30000)
        keeper.finish_overrun(21)
        assert keeper.state == PlaybackState.READY
        assert keeper.clock.record_elapsed == 21000
        assert keeper.display_seconds() == pytest.approx(21.0)

    def test_finish_take(self):
        keeper = TimeKeeper()
        at(keeper, 1000, PlaybackState.RECORD)
        at(keeper, 3000, PlaybackState.STOP)
        at(keeper, 4000, PlaybackState.PLAY)
        keeper.finish_take()
        assert keeper.state == PlaybackState.READY
        assert keeper.clock.record_elapsed == 2000

    def test_record_overrun_drops_open_mark(self):
        keeper = TimeKeeper()
        at(keeper, 1000, PlaybackState.RECORD)
        keeper.start_mark(2000)
        keeper.end_mark(3000)
        keeper.start_mark(20000)
        keeper.tick(30000)
        keeper.finish_overrun(21)
        assert not keeper.marks.has_open
        assert keeper.marks.intervals == [MarkInterval(1.0, 2.0)]
