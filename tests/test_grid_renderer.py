"""Tests for the draw-command renderer. Pure Python, no Qt dependency."""

import pytest

from timing_sheet.core.constants import (
    BLOCK_FILL,
    FRAME_LABEL,
    FRAME_LINE_MAJOR,
    MARK_FILL,
    PLAYHEAD_PLAY,
    PLAYHEAD_RECORD,
    SECOND_LABEL,
)
from timing_sheet.core.grid_config import GridConfig
from timing_sheet.core.grid_renderer import FillRect, GridRenderer, Line, StrokeRect, Text
from timing_sheet.core.time_keeper import PlaybackState, TimeKeeper


@pytest.fixture
def keeper():
    return TimeKeeper()


@pytest.fixture
def config():
    return GridConfig()


@pytest.fixture
def renderer(keeper, config, listener):
    r = GridRenderer(keeper, config, listener)
    r.set_viewport(1000, 1280)
    return r


def request(keeper, now, state):
    keeper.tick(now)
    return keeper.transition(state)


def playheads(commands, color=None):
    heads = [c for c in commands if isinstance(c, StrokeRect) and c.height == 1]
    if color is not None:
        heads = [c for c in heads if c.color == color]
    return heads


class TestStaticGrid:
    def test_no_viewport_draws_nothing(self, keeper, config, listener):
        r = GridRenderer(keeper, config, listener)
        assert r.render(5000) == []
        assert keeper.clock.now == 0
        assert r.geometry is None

    def test_detach_stops_drawing(self, renderer):
        assert renderer.render(1000)
        renderer.detach()
        assert renderer.viewport is None
        assert renderer.render(2000) == []

    def test_one_fill_per_row(self, renderer):
        fills = [c for c in renderer.render(1000) if isinstance(c, FillRect) and c.color == BLOCK_FILL]
        assert len(fills) == 5
        assert fills[0] == FillRect(293, 0, 60, 1200, BLOCK_FILL)
        assert fills[-1].height == 240

    def test_frame_lines(self, renderer):
        lines = [c for c in renderer.render(1000) if isinstance(c, Line)]
        assert len(lines) == 21 * 24
        majors = [c for c in lines[:24] if c.color == FRAME_LINE_MAJOR]
        assert len(majors) == 4
        assert all(c.line_width == 2.0 for c in majors)
        assert lines[1] == Line(293, 10, 353, 10, "#333333", 1.0)

    def test_frame_labels_on_odd_frames(self, renderer):
        labels = [c for c in renderer.render(1000) if isinstance(c, Text) and c.color == FRAME_LABEL]
        assert len(labels) == 21 * 12
        assert [c.text for c in labels[:3]] == ["2", "4", "6"]

    def test_second_labels(self, renderer):
        labels = [c for c in renderer.render(1000) if isinstance(c, Text) and c.align == "right"]
        assert len(labels) == 21 + 5
        assert labels[0] == Text(291, 5, "0", SECOND_LABEL, 11, "right")
        texts = [c.text for c in labels]
        assert texts.count("5") == 2  # end of row 0 and start of row 1
        assert texts[-1] == "21"

    def test_time_readout(self, renderer):
        readout = renderer.render(1000)[-1]
        assert readout == Text(500, 1210, "00:00.000", SECOND_LABEL, 11, "center")

    def test_low_fps_draws_every_line_major(self, renderer, config):
        config.set_frames_per_second(3)
        lines = [c for c in renderer.render(1000) if isinstance(c, Line)]
        assert len(lines) == 21 * 3
        assert all(c.color == FRAME_LINE_MAJOR for c in lines)

    def test_idle_has_no_playhead(self, renderer):
        assert playheads(renderer.render(1000)) == []


class TestPlayhead:
    def test_play_indicator(self, renderer, keeper):
        request(keeper, 1000, PlaybackState.PLAY)
        commands = renderer.render(7500)
        assert playheads(commands) == [StrokeRect(373, 360, 80, 1, PLAYHEAD_PLAY)]
        assert commands[-1].text == "00:06.500"

    def test_record_indicator_is_red(self, renderer, keeper):
        request(keeper, 1000, PlaybackState.RECORD)
        heads = playheads(renderer.render(2000))
        assert heads == [StrokeRect(283, 240, 80, 1, PLAYHEAD_RECORD)]

    def test_pause_at_seam_drawn_at_end_of_row(self, renderer, keeper):
        request(keeper, 1000, PlaybackState.PLAY)
        request(keeper, 6000, PlaybackState.PAUSE)
        commands = renderer.render(9000)
        assert playheads(commands) == [StrokeRect(283, 1200, 80, 1, PLAYHEAD_PLAY)]
        assert commands[-1].text == "00:05.000"

    def test_recorded_length_indicator(self, renderer, keeper):
        request(keeper, 1000, PlaybackState.RECORD)
        request(keeper, 3000, PlaybackState.STOP)
        heads = playheads(renderer.render(4000))
        assert heads == [StrokeRect(283, 480, 80, 1, PLAYHEAD_RECORD)]

    def test_overrun_forces_ready_once(self, renderer, keeper, listener):
        request(keeper, 1000, PlaybackState.PLAY)
        commands = renderer.render(1000 + 21_001)
        assert listener.calls == 1
        assert keeper.state == PlaybackState.READY
        assert playheads(commands) == []
        renderer.render(1000 + 30_000)
        assert listener.calls == 1

    def test_record_overrun_keeps_full_length(self, renderer, keeper, listener):
        request(keeper, 1000, PlaybackState.RECORD)
        renderer.render(1000 + 25_000)
        assert listener.calls == 1
        assert keeper.clock.record_elapsed == 21_000
        assert renderer.render(40_000)[-1].text == "00:21.000"

    def test_exact_end_is_not_overrun(self, renderer, keeper, listener):
        request(keeper, 1000, PlaybackState.PLAY)
        renderer.render(1000 + 21_000)
        assert listener.calls == 0
        assert keeper.state == PlaybackState.PLAY

    def test_playback_stops_at_recorded_length(self, renderer, keeper, listener):
        request(keeper, 1000, PlaybackState.RECORD)
        request(keeper, 3000, PlaybackState.STOP)
        request(keeper, 4000, PlaybackState.PLAY)
        renderer.render(5000)
        assert listener.calls == 0
        renderer.render(6000)
        assert listener.calls == 1
        assert keeper.state == PlaybackState.READY


class TestMarks:
    def test_completed_mark_fills(self, renderer, keeper):
        request(keeper, 1000, PlaybackState.RECORD)
        keeper.start_mark(2500)
        keeper.end_mark(4200)
        marks = [c for c in renderer.render(5000) if isinstance(c, FillRect) and c.color == MARK_FILL]
        assert len(marks) == 3
        assert marks[0] == FillRect(294, 240 + 120, 58, 120, MARK_FILL)
        assert marks[1] == FillRect(294, 480, 58, 240, MARK_FILL)
        assert marks[2].y == 720
        assert marks[2].height == pytest.approx(48)

    def test_open_mark_grows_with_playhead(self, renderer, keeper):
        request(keeper, 1000, PlaybackState.RECORD)
        keeper.start_mark(1250)
        marks = [c for c in renderer.render(1750) if isinstance(c, FillRect) and c.color == MARK_FILL]
        assert marks == [FillRect(294, 60, 58, 120, MARK_FILL)]

    def test_open_mark_dropped_when_recording_overruns(self, renderer, keeper, listener):
        request(keeper, 1000, PlaybackState.RECORD)
        keeper.start_mark(21_000)
        renderer.render(1000 + 25_000)
        assert listener.calls == 1
        request(keeper, 30_000, PlaybackState.PLAY)
        commands = renderer.render(50_500)
        assert [c for c in commands if isinstance(c, FillRect) and c.color == MARK_FILL] == []
