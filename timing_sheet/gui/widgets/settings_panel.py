"""Settings card: grid sizing, language, and the hotkey reference."""

from __future__ import annotations

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import (
    QComboBox,
    QFormLayout,
    QFrame,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from ...core.config import ConfigManager
from ...core.constants import (
    FPS_MAX,
    FPS_MIN,
    PREPARE_SECONDS_MAX,
    PREPARE_SECONDS_MIN,
    TOTAL_SECONDS_MAX,
    TOTAL_SECONDS_MIN,
)
from ...core.grid_config import (
    FrameSize,
    clamp_fps,
    clamp_prepare_seconds,
    clamp_total_seconds,
)
from ...core.timing_sheet import TimingSheet
from ...core.translator import LANGUAGES, translator

# (translation key, key caption)
HOTKEYS = [
    ("hotkeys.replay", "R"),
    ("hotkeys.play_pause", "Space"),
    ("hotkeys.reset", "E"),
    ("hotkeys.marking", "Shift"),
    ("hotkeys.rec_stop", "C"),
]


def _hotkey_chip(caption: str) -> QLabel:
    chip = QLabel(caption)
    chip.setProperty("class", "hotkey")
    return chip


class SettingsPanel(QFrame):
    """Form that pushes clamped values into the sheet and saves them."""

    settings_changed = pyqtSignal()

    def __init__(
        self,
        sheet: TimingSheet,
        config: ConfigManager,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._sheet = sheet
        self._config = config
        self._loading = False
        self.setProperty("class", "card")

        root = QVBoxLayout(self)
        root.setContentsMargins(16, 12, 16, 12)
        root.setSpacing(8)

        self._title = QLabel()
        self._title.setProperty("class", "title")
        root.addWidget(self._title)
        self._subtitle = QLabel()
        self._subtitle.setProperty("class", "secondary")
        root.addWidget(self._subtitle)

        form = QFormLayout()
        self._field_labels: list[tuple[QLabel, str]] = []

        self._language = QComboBox()
        for code, name in LANGUAGES.items():
            self._language.addItem(name, code)
        self._language.currentIndexChanged.connect(self._on_language)
        self._add_row(form, "settings.language", self._language)

        self._seconds = QSpinBox()
        self._seconds.setRange(TOTAL_SECONDS_MIN, TOTAL_SECONDS_MAX)
        self._seconds.valueChanged.connect(self._on_seconds)
        self._add_row(form, "settings.seconds", self._seconds)

        self._fps = QSpinBox()
        self._fps.setRange(FPS_MIN, FPS_MAX)
        self._fps.valueChanged.connect(self._on_fps)
        self._add_row(form, "settings.fps", self._fps)

        self._prepare = QSpinBox()
        self._prepare.setRange(PREPARE_SECONDS_MIN, PREPARE_SECONDS_MAX)
        self._prepare.valueChanged.connect(self._on_prepare)
        self._add_row(form, "settings.prepare", self._prepare)

        self._frame_width = QComboBox()
        self._frame_width.currentIndexChanged.connect(self._on_frame_width)
        self._add_row(form, "settings.frame_size", self._frame_width)

        self._thickness = QComboBox()
        self._thickness.currentIndexChanged.connect(self._on_thickness)
        self._add_row(form, "settings.thickness", self._thickness)

        root.addLayout(form)

        self._hotkey_title = QLabel()
        self._hotkey_title.setProperty("class", "title")
        root.addWidget(self._hotkey_title)
        self._hotkey_subtitle = QLabel()
        self._hotkey_subtitle.setProperty("class", "secondary")
        root.addWidget(self._hotkey_subtitle)

        hotkeys = QGridLayout()
        self._hotkey_labels: list[QLabel] = []
        for i, (_key, caption) in enumerate(HOTKEYS):
            cell = QHBoxLayout()
            label = QLabel()
            self._hotkey_labels.append(label)
            cell.addWidget(label)
            cell.addWidget(_hotkey_chip(caption))
            cell.addStretch()
            hotkeys.addLayout(cell, i // 3, i % 3)
        root.addLayout(hotkeys)

        self._retranslate()
        self.refresh()
        translator.language_changed.connect(self._retranslate)

    # ── Public API ──────────────────────────────────────────

    def refresh(self) -> None:
        """Load the form from the sheet's current values."""
        values = self._sheet.display_values()
        self._loading = True
        try:
            self._seconds.setValue(values.total_seconds)
            self._fps.setValue(values.frames_per_second)
            self._prepare.setValue(values.prepare_seconds)
            self._select(self._frame_width, values.frame_width.value)
            self._select(self._thickness, values.frame_thickness.value)
            self._select(self._language, translator.current_language)
        finally:
            self._loading = False

    # ── Handlers ────────────────────────────────────────────

    def _on_language(self, index: int) -> None:
        code = self._language.itemData(index)
        if self._loading or code is None:
            return
        translator.set_language(code)
        self._config.set("ui.language", code)

    def _on_seconds(self, value: int) -> None:
        if self._loading:
            return
        value = clamp_total_seconds(value)
        self._sheet.set_total_seconds(value)
        self._config.set("grid.total_seconds", value)
        self.settings_changed.emit()

    def _on_fps(self, value: int) -> None:
        if self._loading:
            return
        value = clamp_fps(value)
        self._sheet.set_frames_per_second(value)
        self._config.set("grid.frames_per_second", value)
        self.settings_changed.emit()

    def _on_prepare(self, value: int) -> None:
        if self._loading:
            return
        value = clamp_prepare_seconds(value)
        self._sheet.set_prepare_seconds(value)
        self._config.set("grid.prepare_seconds", value)
        self.settings_changed.emit()

    def _on_frame_width(self, index: int) -> None:
        size = self._frame_width.itemData(index)
        if self._loading or size is None:
            return
        self._sheet.set_frame_width(size)
        self._config.set("grid.frame_width", size)
        self.settings_changed.emit()

    def _on_thickness(self, index: int) -> None:
        size = self._thickness.itemData(index)
        if self._loading or size is None:
            return
        self._sheet.set_frame_thickness(size)
        self._config.set("grid.frame_thickness", size)
        self.settings_changed.emit()

    # ── Helpers ─────────────────────────────────────────────

    def _add_row(self, form: QFormLayout, key: str, field: QWidget) -> None:
        label = QLabel()
        self._field_labels.append((label, key))
        form.addRow(label, field)

    @staticmethod
    def _select(combo: QComboBox, data: str) -> None:
        index = combo.findData(data)
        if index >= 0:
            combo.setCurrentIndex(index)

    def _fill_sizes(self, combo: QComboBox) -> None:
        current = combo.currentData()
        combo.blockSignals(True)
        combo.clear()
        for size in FrameSize:
            combo.addItem(translator.tr(f"settings.size.{size.value}"), size.value)
        if current is not None:
            self._select(combo, current)
        combo.blockSignals(False)

    def _retranslate(self) -> None:
        self._title.setText(translator.tr("settings.title"))
        self._subtitle.setText(translator.tr("settings.subtitle"))
        self._hotkey_title.setText(translator.tr("hotkeys.title"))
        self._hotkey_subtitle.setText(translator.tr("hotkeys.subtitle"))

        for label, key in self._field_labels:
            label.setText(translator.tr(key))

        self._fill_sizes(self._frame_width)
        self._fill_sizes(self._thickness)

        for label, (key, _caption) in zip(self._hotkey_labels, HOTKEYS):
            label.setText(translator.tr(key) + ":")
