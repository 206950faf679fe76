"""Timing grid canvas: replays GridRenderer draw commands with QPainter at ~60fps."""

from __future__ import annotations

from PyQt6.QtCore import QPointF, QRectF, Qt, QTimer, pyqtSignal
from PyQt6.QtGui import QColor, QFont, QFontMetricsF, QPainter, QPen
from PyQt6.QtWidgets import QWidget

from ...core.grid_renderer import DrawCommand, FillRect, Line, StrokeRect, Text
from ...core.timing_sheet import TimingSheet
from ..theme import BG_DARK

_TICK_MS = 16  # ~60fps
_FONT_FAMILY = "Verdana"


def paint_command(painter: QPainter, cmd: DrawCommand) -> None:
    """Draw a single command. Text is positioned by its baseline."""
    if isinstance(cmd, FillRect):
        painter.fillRect(QRectF(cmd.x, cmd.y, cmd.width, cmd.height), QColor(cmd.color))
    elif isinstance(cmd, StrokeRect):
        painter.setPen(QPen(QColor(cmd.color), cmd.line_width))
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.drawRect(QRectF(cmd.x, cmd.y, cmd.width, cmd.height))
    elif isinstance(cmd, Line):
        painter.setPen(QPen(QColor(cmd.color), cmd.line_width))
        painter.drawLine(QPointF(cmd.x1, cmd.y1), QPointF(cmd.x2, cmd.y2))
    elif isinstance(cmd, Text):
        font = QFont(_FONT_FAMILY)
        font.setPixelSize(cmd.size)
        painter.setFont(font)
        painter.setPen(QColor(cmd.color))
        x = cmd.x
        if cmd.align != "left":
            advance = QFontMetricsF(font).horizontalAdvance(cmd.text)
            x -= advance if cmd.align == "right" else advance / 2
        painter.drawText(QPointF(x, cmd.y), cmd.text)


class GridCanvas(QWidget):
    """Full-window drawing surface for the timing grid.

    The timer only schedules repaints; the clock is sampled in
    ``paintEvent`` so a late frame still shows the true elapsed time.
    """

    resized = pyqtSignal(int, int)

    def __init__(self, sheet: TimingSheet, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._sheet = sheet
        self._last_commands: list[DrawCommand] = []

        self._timer = QTimer(self)
        self._timer.setInterval(_TICK_MS)
        self._timer.timeout.connect(self.update)

        self.setFocusPolicy(Qt.FocusPolicy.NoFocus)
        self.setMinimumSize(320, 240)

    # ── Lifecycle ───────────────────────────────────────────

    def start(self) -> None:
        """Attach the viewport and begin ticking."""
        self._sheet.set_viewport(self.width(), self.height())
        self._timer.start()

    def teardown(self) -> None:
        """Stop ticking and detach, so no later paint draws the grid."""
        self._timer.stop()
        self._sheet.detach()

    @property
    def is_ticking(self) -> bool:
        return self._timer.isActive()

    @property
    def last_commands(self) -> list[DrawCommand]:
        return list(self._last_commands)

    # ── Events ──────────────────────────────────────────────

    def resizeEvent(self, event) -> None:  # noqa: N802
        super().resizeEvent(event)
        if self._timer.isActive():
            self._sheet.set_viewport(self.width(), self.height())
        self.resized.emit(self.width(), self.height())

    def paintEvent(self, event) -> None:  # noqa: N802
        painter = QPainter(self)
        painter.fillRect(self.rect(), QColor(BG_DARK))
        self._last_commands = self._sheet.render()
        for cmd in self._last_commands:
            paint_command(painter, cmd)
        painter.end()
