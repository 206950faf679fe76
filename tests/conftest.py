"""Shared test fixtures."""

from __future__ import annotations

import os

import pytest

# Run Qt headless unless a platform is explicitly chosen.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture(scope="session")
def qapp():
    """Provide a QApplication instance for the entire test session."""
    from PyQt6.QtWidgets import QApplication

    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


class FakeClock:
    """Settable millisecond clock for deterministic timing."""

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> float:
        self.now += ms
        return self.now


class ReadyRecorder:
    """ReadyListener that counts force_ready calls."""

    def __init__(self) -> None:
        self.calls = 0

    def force_ready(self) -> None:
        self.calls += 1


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def listener():
    return ReadyRecorder()


@pytest.fixture
def english():
    """Run a test in English and restore the language afterwards."""
    from timing_sheet.core.translator import translator

    previous = translator.current_language
    translator.set_language("en")
    yield translator
    translator.set_language(previous)
