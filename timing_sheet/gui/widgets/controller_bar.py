"""Transport controls and hotkeys for the timing grid."""

from __future__ import annotations

import logging

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import QHBoxLayout, QPushButton, QWidget

from ...core.time_keeper import PlaybackState
from ...core.timing_sheet import TimingSheet
from ...core.translator import translator
from ..theme import MARK_COLOR, PAUSE_COLOR, PLAY_COLOR, REC_COLOR, REPLAY_COLOR, TEXT_PRIMARY

log = logging.getLogger(__name__)

# Marking display states
MARK_NONE = "none"
MARK_MARKING = "marking"
MARK_MARKED = "marked"

_REPLAY_STATES = (PlaybackState.PLAY, PlaybackState.PAUSE)
_PLAY_STATES = (PlaybackState.READY, PlaybackState.PLAY, PlaybackState.PAUSE)
_REC_STATES = (PlaybackState.INIT, PlaybackState.READY, PlaybackState.PAUSE, PlaybackState.RECORD)
_HOTKEYS = (Qt.Key.Key_R, Qt.Key.Key_Space, Qt.Key.Key_E, Qt.Key.Key_Shift, Qt.Key.Key_C)


def _transport_button() -> QPushButton:
    btn = QPushButton()
    btn.setCursor(Qt.CursorShape.PointingHandCursor)
    btn.setFocusPolicy(Qt.FocusPolicy.NoFocus)
    return btn


class ControllerBar(QWidget):
    """Replay / Play / Mark / Rec buttons plus the settings toggle.

    Requests go to the :class:`TimingSheet`. The bar shows the state the
    sheet stored. Hotkeys fire the same actions as the buttons whether
    or not the matching button is enabled.
    """

    state_changed = pyqtSignal(object)  # PlaybackState
    settings_toggled = pyqtSignal(bool)

    def __init__(self, sheet: TimingSheet, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._sheet = sheet
        self._state = sheet.state
        self._marking = MARK_NONE
        self._settings_visible = False
        self._key_held = False

        layout = QHBoxLayout(self)
        layout.setContentsMargins(8, 4, 8, 4)
        layout.setSpacing(4)

        self._replay_btn = _transport_button()
        self._replay_btn.clicked.connect(self.replay)
        layout.addWidget(self._replay_btn)

        self._play_btn = _transport_button()
        self._play_btn.clicked.connect(self.play_pause_resume)
        layout.addWidget(self._play_btn)

        self._mark_btn = _transport_button()
        self._mark_btn.pressed.connect(self.mark_start)
        self._mark_btn.released.connect(self.mark_end)
        layout.addWidget(self._mark_btn)

        self._rec_btn = _transport_button()
        self._rec_btn.clicked.connect(self.rec_stop)
        layout.addWidget(self._rec_btn)

        self._settings_btn = _transport_button()
        self._settings_btn.clicked.connect(self.toggle_settings)
        layout.addWidget(self._settings_btn)

        self._refresh()
        translator.language_changed.connect(self._refresh)

    # ── State ───────────────────────────────────────────────

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def marking(self) -> str:
        return self._marking

    @property
    def settings_visible(self) -> bool:
        return self._settings_visible

    def force_ready(self) -> None:
        """The grid ended the session by itself; the core is already READY."""
        if self._marking == MARK_MARKING:
            self._marking = MARK_MARKED
        self._set_state(PlaybackState.READY)

    def _set_state(self, state: PlaybackState) -> None:
        self._state = state
        self._refresh()
        self.state_changed.emit(state)

    def _change_state(self, requested: PlaybackState) -> None:
        stored = self._sheet.request_transition(requested)
        log.debug("Requested %s, now %s", requested.name, stored.name)
        self._set_state(stored)
        self.set_settings_visible(False)

    # ── Actions ─────────────────────────────────────────────

    def replay(self) -> None:
        self._change_state(PlaybackState.REPLAY)

    def play_pause_resume(self) -> None:
        if self._state == PlaybackState.PLAY:
            self._change_state(PlaybackState.PAUSE)
        else:
            self._change_state(PlaybackState.PLAY)

    def mark_start(self) -> None:
        """Open a mark while recording, otherwise reset."""
        if self._state == PlaybackState.RECORD:
            self._marking = MARK_MARKING
            self._sheet.start_mark()
            self._refresh()
        else:
            self._marking = MARK_NONE
            self._change_state(PlaybackState.RESET)

    def mark_end(self) -> None:
        if self._state != PlaybackState.RECORD:
            return
        self._marking = MARK_MARKED
        self._sheet.end_mark()
        self._refresh()

    def rec_stop(self) -> None:
        if self._state == PlaybackState.RECORD:
            # STOP discards an open mark
            if self._marking == MARK_MARKING:
                self._marking = MARK_MARKED
            self._change_state(PlaybackState.STOP)
        else:
            self._change_state(PlaybackState.RECORD)

    def toggle_settings(self) -> None:
        self.set_settings_visible(not self._settings_visible)

    def set_settings_visible(self, visible: bool) -> None:
        if visible == self._settings_visible:
            return
        self._settings_visible = visible
        self._refresh()
        self.settings_toggled.emit(visible)

    # ── Keyboard ────────────────────────────────────────────

    def handle_key_press(self, event) -> bool:
        """Handle a hotkey press. Returns True if the key was consumed.

        Only one key acts at a time: after a press, further presses are
        ignored until a key is released.
        """
        key = event.key()
        if event.isAutoRepeat() or self._key_held:
            return key in _HOTKEYS
        self._key_held = True
        if key == Qt.Key.Key_R:
            self.replay()
        elif key == Qt.Key.Key_Space:
            self.play_pause_resume()
        elif key in (Qt.Key.Key_E, Qt.Key.Key_Shift):
            self.mark_start()
        elif key == Qt.Key.Key_C:
            self.rec_stop()
        else:
            return False
        return True

    def handle_key_release(self, event) -> bool:
        if event.isAutoRepeat():
            return False
        self._key_held = False
        if event.key() != Qt.Key.Key_Shift:
            return False
        self.mark_end()
        return True

    def release_keys(self) -> None:
        """Forget a held key whose release will not be delivered."""
        self._key_held = False

    # ── Display ─────────────────────────────────────────────

    def _refresh(self) -> None:
        state = self._state
        recording = state == PlaybackState.RECORD

        self._replay_btn.setText("↻ " + translator.tr("controls.replay"))
        self._replay_btn.setEnabled(state in _REPLAY_STATES)
        self._replay_btn.setStyleSheet(f"color: {REPLAY_COLOR};")

        if state == PlaybackState.PAUSE:
            play_text = "▶ " + translator.tr("controls.resume")
        elif state == PlaybackState.PLAY:
            play_text = "❚❚ " + translator.tr("controls.pause")
        else:
            play_text = "▶ " + translator.tr("controls.play")
        self._play_btn.setText(play_text)
        self._play_btn.setEnabled(state in _PLAY_STATES)
        play_color = PAUSE_COLOR if state == PlaybackState.PLAY else PLAY_COLOR
        self._play_btn.setStyleSheet(f"color: {play_color};")

        if self._marking == MARK_MARKING:
            mark_text = "✎ " + translator.tr("controls.marking")
        elif recording:
            mark_text = "✎ " + translator.tr("controls.mark")
        else:
            mark_text = "⟲ " + translator.tr("controls.reset")
        self._mark_btn.setText(mark_text)
        self._mark_btn.setEnabled(recording or self._marking != MARK_NONE)
        self._mark_btn.setStyleSheet(f"color: {MARK_COLOR};")

        if recording:
            self._rec_btn.setText("■ " + translator.tr("controls.stop"))
        else:
            self._rec_btn.setText("● " + translator.tr("controls.rec"))
        self._rec_btn.setEnabled(state in _REC_STATES)
        self._rec_btn.setStyleSheet(f"color: {REC_COLOR};")

        self._settings_btn.setText("▾" if self._settings_visible else "▴")
        self._settings_btn.setToolTip(translator.tr("controls.settings"))
        self._settings_btn.setStyleSheet(f"color: {TEXT_PRIMARY};")

