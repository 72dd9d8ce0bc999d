"""Main application window – assembles the panels and coordinates behaviour."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QKeySequence, QShortcut
from PyQt6.QtWidgets import (
    QFileDialog,
    QMainWindow,
    QMessageBox,
    QSplitter,
    QStatusBar,
)

from panelcut.canvas import CanvasView
from panelcut.config import ConfigError, EditorConfig
from panelcut.export import load_template, make_svg, render_png, save_png, save_svg, save_template
from panelcut.session import EditorSession
from panelcut.settings_panel import SettingsPanel

logger = logging.getLogger(__name__)

TEMPLATE_FILTER = "Panel Templates (*.json);;All Files (*)"


class MainWindow(QMainWindow):
    """Top-level window for the Panel Cutter."""

    def __init__(self, config: Optional[EditorConfig] = None) -> None:
        super().__init__()
        self.setWindowTitle("Panel Cutter")
        self.resize(1200, 900)

        self._session = EditorSession(config)
        self._last_template_file: Optional[str] = None

        self._build_ui()
        self._connect_signals()
        self._setup_shortcuts()

    # ── UI construction ──────────────────────────────────────────────────

    def _build_ui(self) -> None:
        self._splitter = QSplitter(Qt.Orientation.Horizontal)

        self._settings = SettingsPanel(self._session.config)
        self._canvas = CanvasView(self._session)

        self._splitter.addWidget(self._settings)
        self._splitter.addWidget(self._canvas)
        self._splitter.setStretchFactor(0, 0)  # settings panel fixed-ish
        self._splitter.setStretchFactor(1, 1)  # canvas stretches

        self.setCentralWidget(self._splitter)

        self._status = QStatusBar()
        self.setStatusBar(self._status)
        self._status.showMessage("Ready – pick a mode and hover a panel to cut it.")

    # ── signal wiring ────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        # Settings → session / canvas
        self._settings.mode_changed.connect(self._on_mode_changed)
        self._settings.angle_changed.connect(self._on_angle_changed)
        self._settings.grid_div_changed.connect(self._on_grid_div_changed)
        self._settings.snap_to_points_changed.connect(self._on_snap_changed)
        self._settings.reset_clicked.connect(self._on_reset)
        self._settings.export_png_clicked.connect(self._on_export_png)
        self._settings.export_svg_clicked.connect(self._on_export_svg)
        self._settings.save_template_clicked.connect(self._on_save_template)
        self._settings.load_template_clicked.connect(self._on_load_template)

        # Canvas → settings / status
        self._canvas.polygons_changed.connect(self._on_polygons_changed)
        self._canvas.angle_changed.connect(self._settings.set_angle)
        self._canvas.status_message.connect(lambda msg: self._status.showMessage(msg, 4000))

    def _setup_shortcuts(self) -> None:
        """Set up keyboard shortcuts for the main window."""
        # Ctrl+S to quick-save the template
        save_shortcut = QShortcut(QKeySequence.StandardKey.Save, self)
        save_shortcut.activated.connect(self._on_quick_save)

    # ── slots ────────────────────────────────────────────────────────────

    def _on_mode_changed(self, name: str) -> None:
        self._canvas.set_tool(name)
        self._canvas.setFocus()
        self._status.showMessage(f"Mode: {name.replace('_', ' ')}")

    def _on_angle_changed(self, angle: float) -> None:
        self._session.set_angle(angle)
        self._canvas.viewport().update()

    def _on_grid_div_changed(self, grid_div: int) -> None:
        try:
            self._session.set_grid_div(grid_div)
        except ConfigError as exc:
            QMessageBox.warning(self, "Invalid Setting", str(exc))
            return
        self._canvas.viewport().update()

    def _on_snap_changed(self, enabled: bool) -> None:
        self._session.set_snap_to_points(enabled)
        self._canvas.viewport().update()

    def _on_polygons_changed(self) -> None:
        count = len(self._session.polygons)
        self._status.showMessage(f"{count} panel{'s' if count != 1 else ''}")

    def _on_reset(self) -> None:
        reply = QMessageBox.question(
            self, "Reset", "Are you sure you want to reset?",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
        )
        if reply != QMessageBox.StandardButton.Yes:
            return

        config = self._settings.page_config(self._session.config)
        try:
            self._session.set_config(config)
        except ConfigError as exc:
            QMessageBox.warning(self, "Invalid Page Settings", str(exc))
            return

        self._session.reset()
        self._canvas.reset_page()
        cfg = self._session.config
        self._status.showMessage(f"New page: {cfg.width_px} × {cfg.height_px} px")

    def _on_export_png(self) -> None:
        file_path, _ = QFileDialog.getSaveFileName(
            self, "Export PNG", "Template.png", "PNG Images (*.png)"
        )
        if not file_path:
            return
        if not file_path.lower().endswith(".png"):
            file_path += ".png"

        cfg = self._session.config
        try:
            image = render_png(self._session.polygons, cfg.width_px, cfg.height_px, cfg.line_width_px)
            save_png(image, file_path, dpi=cfg.res_dpi)
        except (OSError, ValueError) as exc:
            logger.exception("PNG export failed")
            QMessageBox.critical(self, "Export Error", f"An error occurred:\n{exc}")
            return
        self._status.showMessage(f"Exported {Path(file_path).name}", 5000)

    def _on_export_svg(self) -> None:
        file_path, _ = QFileDialog.getSaveFileName(
            self, "Export SVG", "Template.svg", "SVG Images (*.svg)"
        )
        if not file_path:
            return
        if not file_path.lower().endswith(".svg"):
            file_path += ".svg"

        cfg = self._session.config
        svg = make_svg(self._session.polygons, cfg.width_px, cfg.height_px, cfg.line_width_px)
        try:
            save_svg(svg, file_path)
        except OSError as exc:
            logger.exception("SVG export failed")
            QMessageBox.critical(self, "Export Error", f"An error occurred:\n{exc}")
            return
        self._status.showMessage(f"Exported {Path(file_path).name}", 5000)

    def _on_save_template(self) -> None:
        """Save the current panels to a template file (with file dialog)."""
        file_path, _ = QFileDialog.getSaveFileName(
            self, "Save Template", self._last_template_file or "", TEMPLATE_FILTER
        )
        if not file_path:
            return
        if not file_path.lower().endswith(".json"):
            file_path += ".json"

        if self._save_template_to_file(file_path):
            self._last_template_file = file_path

    def _on_quick_save(self) -> None:
        """Quick save (Ctrl+S) – save to last file or prompt if none."""
        if self._last_template_file:
            self._save_template_to_file(self._last_template_file)
        else:
            self._on_save_template()

    def _save_template_to_file(self, file_path: str) -> bool:
        """Write the template. Returns True on success."""
        try:
            save_template(file_path, self._session.config, self._session.polygons)
        except OSError as exc:
            QMessageBox.critical(self, "Save Error", f"Failed to save: {exc}")
            return False
        self._status.showMessage(f"Saved: {Path(file_path).name}", 5000)
        return True

    def _on_load_template(self) -> None:
        """Load panels and page settings from a template file."""
        file_path, _ = QFileDialog.getOpenFileName(self, "Load Template", "", TEMPLATE_FILTER)
        if not file_path:
            return

        try:
            config, polygons = load_template(file_path)
        except (OSError, ValueError) as exc:
            QMessageBox.critical(self, "Load Error", f"Failed to load: {exc}")
            return

        self._session.set_config(config)
        self._session.load_polygons(polygons)
        self._settings.show_config(config)
        self._canvas.reset_page()
        self._last_template_file = file_path

        total = len(polygons)
        self._status.showMessage(
            f"Loaded {total} panel{'s' if total != 1 else ''} from {Path(file_path).name}"
        )
