"""Entry point: logging setup + QApplication startup."""

from __future__ import annotations

import logging
import sys

from PyQt6.QtWidgets import QApplication, QMessageBox

from .core.translator import translator


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )

    app = QApplication(sys.argv)
    app.setApplicationName("Timing Sheet")
    app.setOrganizationName("TimingSheet")

    from .gui.theme import apply_theme
    apply_theme(app)

    from .gui.app_shell import AppShell

    window = AppShell()

    # Enable Windows dark title bar
    if sys.platform == "win32":
        from .gui.theme import enable_dark_title_bar
        enable_dark_title_bar(int(window.winId()))

    window.show()

    # Global exception handler
    def exception_hook(exctype, value, tb):
        import traceback
        traceback_str = "".join(traceback.format_exception(exctype, value, tb))
        logging.error("Unhandled exception:\n%s", traceback_str)

        msg = QMessageBox()
        msg.setIcon(QMessageBox.Icon.Critical)
        msg.setWindowTitle(translator.tr("error.title"))
        msg.setText(translator.tr("error.text"))
        msg.setInformativeText(str(value))
        msg.setDetailedText(traceback_str)
        msg.exec()

        sys.__excepthook__(exctype, value, tb)
        sys.exit(1)

    sys.excepthook = exception_hook

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
