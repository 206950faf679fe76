"""Dark theme for the timing sheet window."""

from __future__ import annotations

import ctypes
import logging
import sys

from PyQt6.QtWidgets import QApplication

log = logging.getLogger(__name__)

# --- Surfaces ---
BG_DARK = "#121212"
BG_CARD = "#1E1E1E"
BG_HOVER = "#2A2A2A"
BORDER = "#3A3A3A"
DIVIDER = "#2C2C2C"

# --- Text ---
TEXT_PRIMARY = "#FFFFFF"
TEXT_SECONDARY = "#B0B0B0"
TEXT_DISABLED = "#5A5A5A"

# --- Transport colours ---
REPLAY_COLOR = "#ADD8E6"  # lightblue
PLAY_COLOR = "#2E9E3E"
PAUSE_COLOR = "#FFA500"
MARK_COLOR = "#FFFFFF"
REC_COLOR = "#E53935"
INFO = "#29B6F6"

# --- Hotkey chips ---
HOTKEY_BG = "#333333"
HOTKEY_BORDER = "#555555"

FONT_FAMILY = '"Segoe UI", "Noto Sans KR", "Noto Sans JP", sans-serif'
FONT_MONO = '"Cascadia Code", Consolas, monospace'


def get_stylesheet() -> str:
    """Generate the application stylesheet."""
    return f"""
    QMainWindow, QWidget {{
        background-color: {BG_DARK};
        color: {TEXT_PRIMARY};
        font-family: {FONT_FAMILY};
        font-size: 14px;
    }}

    QLabel {{
        background: transparent;
        color: {TEXT_PRIMARY};
    }}
    QLabel[class="secondary"] {{
        color: {TEXT_SECONDARY};
        font-size: 12px;
    }}
    QLabel[class="title"] {{
        font-size: 18px;
        font-weight: 600;
    }}
    QLabel[class="hotkey"] {{
        background-color: {HOTKEY_BG};
        border: 1px solid {HOTKEY_BORDER};
        border-radius: 4px;
        padding: 1px 6px;
        font-family: {FONT_MONO};
        font-size: 12px;
    }}

    QFrame[class="card"] {{
        background-color: {BG_CARD};
        border: 1px solid {BORDER};
        border-radius: 8px;
    }}

    QPushButton {{
        background: transparent;
        color: {TEXT_PRIMARY};
        border: none;
        border-radius: 4px;
        padding: 6px 14px;
        font-size: 14px;
        font-weight: 600;
        text-transform: uppercase;
    }}
    QPushButton:hover {{
        background-color: {BG_HOVER};
    }}
    QPushButton:disabled {{
        color: {TEXT_DISABLED};
    }}

    QComboBox, QSpinBox {{
        background-color: {BG_CARD};
        color: {TEXT_PRIMARY};
        border: 1px solid {BORDER};
        border-radius: 4px;
        padding: 4px 8px;
        font-size: 13px;
    }}
    QComboBox:hover, QSpinBox:hover {{
        border-color: {INFO};
    }}
    QComboBox QAbstractItemView {{
        background-color: {BG_CARD};
        color: {TEXT_PRIMARY};
        selection-background-color: {BG_HOVER};
        border: 1px solid {BORDER};
        outline: none;
    }}
    """


def enable_dark_title_bar(hwnd: int) -> None:
    """Enable Windows 10/11 dark title bar via DwmSetWindowAttribute."""
    if sys.platform != "win32":
        return
    try:
        DWMWA_USE_IMMERSIVE_DARK_MODE = 20
        ctypes.windll.dwmapi.DwmSetWindowAttribute(
            hwnd,
            DWMWA_USE_IMMERSIVE_DARK_MODE,
            ctypes.byref(ctypes.c_int(1)),
            4,
        )
    except (AttributeError, OSError):
        log.debug("Dark title bar not available", exc_info=True)


def apply_theme(app: QApplication) -> None:
    app.setStyle("Fusion")
    app.setStyleSheet(get_stylesheet())
