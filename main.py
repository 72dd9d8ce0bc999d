#!/usr/bin/env python3
"""Entry point for the Panel Cutter."""

import logging
import sys

from PyQt6.QtWidgets import QApplication

from panelcut.main_window import MainWindow

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def main() -> None:
    app = QApplication(sys.argv)
    app.setApplicationName("Panel Cutter")
    app.setStyle("Fusion")

    window = MainWindow()
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
