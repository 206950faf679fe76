"""Top-level window: full-size timing grid with the transport bar and settings overlaid."""

from __future__ import annotations

import logging

from PyQt6.QtCore import QByteArray, Qt
from PyQt6.QtWidgets import QMainWindow

from ..core.config import ConfigManager, get_config
from ..core.constants import (
    DEFAULT_FPS,
    DEFAULT_FRAME_SIZE,
    DEFAULT_PREPARE_SECONDS,
    DEFAULT_TOTAL_SECONDS,
)
from ..core.grid_config import FrameSize, clamp_fps, clamp_prepare_seconds, clamp_total_seconds
from ..core.time_keeper import PlaybackState
from ..core.timing_sheet import TimingSheet
from ..core.translator import translator
from .widgets.controller_bar import ControllerBar
from .widgets.grid_canvas import GridCanvas
from .widgets.settings_panel import SettingsPanel

log = logging.getLogger(__name__)

_CONTROLLER_BAR_HEIGHT = 48
_TIME_LABEL_SPACE = 32  # time readout sits just above the bar
_SETTINGS_MAX_WIDTH = 720
_OVERLAY_MARGIN = 8


class AppShell(QMainWindow):
    """Main application window.

    Layout::

        ┌──────────────────────────────────────────┐
        │  GridCanvas (timing grid, fills window)  │
        │        ┌────────────────────────┐        │
        │        │ SettingsPanel (toggle) │        │
        │        └────────────────────────┘        │
        │               00:00.000                  │
        │   Replay  Play  Reset  Rec  ▴            │
        └──────────────────────────────────────────┘
    """

    def __init__(self, config: ConfigManager | None = None) -> None:
        super().__init__()
        self._config = config if config is not None else get_config()
        self.setWindowTitle(translator.tr("app.title"))
        self.setMinimumSize(640, 480)
        self.resize(1280, 800)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)

        self._sheet = TimingSheet(self)
        self._apply_saved_settings()

        self._build_ui()
        self._restore_window_state()
        translator.language_changed.connect(self._update_text)

        self._canvas.start()

    def _build_ui(self) -> None:
        self._canvas = GridCanvas(self._sheet)
        self.setCentralWidget(self._canvas)

        self._settings = SettingsPanel(self._sheet, self._config, self._canvas)
        self._settings.hide()

        self._controller = ControllerBar(self._sheet, self._canvas)
        self._controller.setFixedHeight(_CONTROLLER_BAR_HEIGHT)
        self._sheet.set_controller_height(_CONTROLLER_BAR_HEIGHT + _TIME_LABEL_SPACE)

        self._controller.settings_toggled.connect(self._on_settings_toggled)
        self._controller.state_changed.connect(self._on_state_changed)
        self._canvas.resized.connect(self._layout_overlays)

    def _apply_saved_settings(self) -> None:
        """Push saved preferences into the sheet, clamped to their valid ranges."""
        cfg = self._config
        self._sheet.set_total_seconds(clamp_total_seconds(cfg.get("grid.total_seconds", DEFAULT_TOTAL_SECONDS)))
        self._sheet.set_frames_per_second(clamp_fps(cfg.get("grid.frames_per_second", DEFAULT_FPS)))
        self._sheet.set_prepare_seconds(clamp_prepare_seconds(cfg.get("grid.prepare_seconds", DEFAULT_PREPARE_SECONDS)))
        self._sheet.set_frame_width(FrameSize.parse(cfg.get("grid.frame_width", DEFAULT_FRAME_SIZE)))
        self._sheet.set_frame_thickness(FrameSize.parse(cfg.get("grid.frame_thickness", DEFAULT_FRAME_SIZE)))
        translator.set_language(cfg.get("ui.language", "en"))

    def _restore_window_state(self) -> None:
        geometry_b64 = self._config.get("window.geometry")
        if geometry_b64:
            self.restoreGeometry(QByteArray.fromBase64(geometry_b64.encode("ascii")))

    def _update_text(self) -> None:
        self.setWindowTitle(translator.tr("app.title"))

    # ── ReadyListener ───────────────────────────────────────

    def force_ready(self) -> None:
        self._controller.force_ready()

    # ── Accessors ───────────────────────────────────────────

    @property
    def sheet(self) -> TimingSheet:
        return self._sheet

    @property
    def controller(self) -> ControllerBar:
        return self._controller

    @property
    def canvas(self) -> GridCanvas:
        return self._canvas

    @property
    def settings_panel(self) -> SettingsPanel:
        return self._settings

    # ── Overlays ────────────────────────────────────────────

    def _on_settings_toggled(self, visible: bool) -> None:
        if visible:
            self._settings.refresh()
        self._settings.setVisible(visible)
        self._layout_overlays()
        if not visible:
            self.setFocus()

    def _on_state_changed(self, state: PlaybackState) -> None:
        log.debug("Controller state %s", state.name)
        self._canvas.update()

    def _layout_overlays(self, *_args) -> None:
        w, h = self._canvas.width(), self._canvas.height()

        bar_w = min(w, self._controller.sizeHint().width())
        bar_y = h - _CONTROLLER_BAR_HEIGHT
        self._controller.setGeometry((w - bar_w) // 2, bar_y, bar_w, _CONTROLLER_BAR_HEIGHT)

        if not self._settings.isHidden():
            panel_w = min(w - 2 * _OVERLAY_MARGIN, _SETTINGS_MAX_WIDTH)
            panel_h = min(self._settings.sizeHint().height(), bar_y - _TIME_LABEL_SPACE - _OVERLAY_MARGIN)
            self._settings.setGeometry(
                (w - panel_w) // 2,
                bar_y - _TIME_LABEL_SPACE - panel_h,
                panel_w,
                max(0, panel_h),
            )
            self._settings.raise_()
        self._controller.raise_()

    # ── Events ──────────────────────────────────────────────

    def keyPressEvent(self, event) -> None:  # noqa: N802
        if not self._controller.handle_key_press(event):
            super().keyPressEvent(event)

    def keyReleaseEvent(self, event) -> None:  # noqa: N802
        if not self._controller.handle_key_release(event):
            super().keyReleaseEvent(event)

    def focusOutEvent(self, event) -> None:  # noqa: N802
        self._controller.release_keys()
        super().focusOutEvent(event)

    def closeEvent(self, event) -> None:  # noqa: N802
        self._canvas.teardown()
        geometry_b64 = self.saveGeometry().toBase64().data().decode("ascii")
        self._config.set("window.geometry", geometry_b64)
        super().closeEvent(event)
