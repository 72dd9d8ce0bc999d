"""Settings / controls panel (left side): page setup, cutting mode, knife options, actions."""

from __future__ import annotations

from dataclasses import replace

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QDoubleSpinBox,
    QFormLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QSlider,
    QVBoxLayout,
    QWidget,
)

from panelcut.config import ANGLE_MAX, ANGLE_MIN, GRID_DIV_MAX, GRID_DIV_MIN, EditorConfig
from panelcut.modes import MODE_LABELS


CONTROLS_HELP = (
    "<b>Controls:</b><br>"
    "F – apply / cut<br>"
    "R – reset selection<br>"
    "Delete – remove panel (Select mode)<br>"
    "LMB – freeze grid (Grid Snapper)<br>"
    "scroll – change angle"
)


def _mm_spin(value: float) -> QDoubleSpinBox:
    spin = QDoubleSpinBox()
    spin.setRange(0.0, 1000.0)
    spin.setSingleStep(0.5)
    spin.setDecimals(1)
    spin.setValue(value)
    return spin


class SettingsPanel(QWidget):
    """Panel with page settings, knife settings and action buttons."""

    mode_changed = pyqtSignal(str)
    angle_changed = pyqtSignal(float)
    grid_div_changed = pyqtSignal(int)
    snap_to_points_changed = pyqtSignal(bool)
    reset_clicked = pyqtSignal()
    export_png_clicked = pyqtSignal()
    export_svg_clicked = pyqtSignal()
    save_template_clicked = pyqtSignal()
    load_template_clicked = pyqtSignal()

    def __init__(self, config: EditorConfig, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._build_ui(config)

    # ── UI ───────────────────────────────────────────────────────────────

    def _build_ui(self, config: EditorConfig) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(6, 6, 6, 6)

        # ── Page settings ───────────────────────────────────────────────
        page_group = QGroupBox("Page")
        form = QFormLayout(page_group)

        self._spin_width = _mm_spin(config.width_mm)
        form.addRow("Width (mm):", self._spin_width)
        self._spin_height = _mm_spin(config.height_mm)
        form.addRow("Height (mm):", self._spin_height)
        self._spin_dpi = _mm_spin(config.res_dpi)
        form.addRow("Resolution (dpi):", self._spin_dpi)
        self._spin_page_margin = _mm_spin(config.page_margin_mm)
        form.addRow("Page margin (mm):", self._spin_page_margin)
        self._spin_panel_margin = _mm_spin(config.panel_margin_mm)
        form.addRow("Panel margin (mm):", self._spin_panel_margin)
        self._spin_line_width = _mm_spin(config.line_width_mm)
        form.addRow("Line width (mm):", self._spin_line_width)

        self._btn_reset = QPushButton("Reset")
        self._btn_reset.setToolTip(
            "Discard every panel and start again from a blank page\n"
            "using the page settings above."
        )
        self._btn_reset.clicked.connect(self.reset_clicked.emit)
        form.addRow(self._btn_reset)

        layout.addWidget(page_group)

        # ── Knife settings ──────────────────────────────────────────────
        knife_group = QGroupBox("Knife")
        knife_form = QFormLayout(knife_group)

        self._combo_mode = QComboBox()
        for label, name in MODE_LABELS:
            self._combo_mode.addItem(label, name)
        self._combo_mode.currentIndexChanged.connect(
            lambda _: self.mode_changed.emit(self.mode)
        )
        knife_form.addRow("Mode:", self._combo_mode)

        self._slider_angle = QSlider(Qt.Orientation.Horizontal)
        self._slider_angle.setRange(int(ANGLE_MIN), int(ANGLE_MAX))
        self._slider_angle.setValue(int(round(config.angle)))
        self._lbl_angle = QLabel(f"{config.angle:g}°")
        self._slider_angle.valueChanged.connect(self._on_angle_slider)
        angle_row = QHBoxLayout()
        angle_row.addWidget(self._slider_angle)
        angle_row.addWidget(self._lbl_angle)
        knife_form.addRow("Angle:", angle_row)

        self._slider_grid = QSlider(Qt.Orientation.Horizontal)
        self._slider_grid.setRange(GRID_DIV_MIN, GRID_DIV_MAX)
        self._slider_grid.setValue(config.grid_div)
        self._slider_grid.setTickInterval(1)
        self._slider_grid.setTickPosition(QSlider.TickPosition.TicksBelow)
        self._lbl_grid = QLabel(str(config.grid_div))
        self._slider_grid.valueChanged.connect(self._on_grid_slider)
        grid_row = QHBoxLayout()
        grid_row.addWidget(self._slider_grid)
        grid_row.addWidget(self._lbl_grid)
        knife_form.addRow("Grid divider:", grid_row)

        self._chk_snap = QCheckBox("Snap to points")
        self._chk_snap.setChecked(config.snap_to_points)
        self._chk_snap.setToolTip("Anchor mode: snap to panel corners instead of edges.")
        self._chk_snap.toggled.connect(self.snap_to_points_changed.emit)
        knife_form.addRow(self._chk_snap)

        layout.addWidget(knife_group)

        # ── File actions ────────────────────────────────────────────────
        file_group = QGroupBox()
        file_group.setFlat(True)
        file_layout = QVBoxLayout(file_group)
        file_layout.setContentsMargins(0, 4, 0, 4)

        self._btn_save_template = QPushButton("Save Template…")
        self._btn_save_template.clicked.connect(self.save_template_clicked.emit)
        file_layout.addWidget(self._btn_save_template)

        self._btn_load_template = QPushButton("Load Template…")
        self._btn_load_template.clicked.connect(self.load_template_clicked.emit)
        file_layout.addWidget(self._btn_load_template)

        _export_btn_style = (
            "QPushButton { background-color: #0078D4; color: white; padding: 6px; font-weight: bold; }"
        )

        self._btn_export_png = QPushButton("Export PNG…")
        self._btn_export_png.setStyleSheet(_export_btn_style)
        self._btn_export_png.clicked.connect(self.export_png_clicked.emit)
        file_layout.addWidget(self._btn_export_png)

        self._btn_export_svg = QPushButton("Export SVG…")
        self._btn_export_svg.setStyleSheet(_export_btn_style)
        self._btn_export_svg.clicked.connect(self.export_svg_clicked.emit)
        file_layout.addWidget(self._btn_export_svg)

        layout.addWidget(file_group)

        help_label = QLabel(CONTROLS_HELP)
        help_label.setTextFormat(Qt.TextFormat.RichText)
        help_label.setWordWrap(True)
        layout.addWidget(help_label)

        layout.addStretch(1)

        self.setMinimumWidth(220)
        self.setMaximumWidth(300)

    # ── public API ───────────────────────────────────────────────────────

    @property
    def mode(self) -> str:
        return self._combo_mode.currentData()

    def page_config(self, base: EditorConfig) -> EditorConfig:
        """*base* with the page fields replaced by the spin box values (not validated)."""
        return replace(
            base,
            width_mm=self._spin_width.value(),
            height_mm=self._spin_height.value(),
            res_dpi=self._spin_dpi.value(),
            page_margin_mm=self._spin_page_margin.value(),
            panel_margin_mm=self._spin_panel_margin.value(),
            line_width_mm=self._spin_line_width.value(),
        )

    def show_config(self, config: EditorConfig) -> None:
        """Reflect *config* in every widget without emitting change signals."""
        spins = (
            (self._spin_width, config.width_mm),
            (self._spin_height, config.height_mm),
            (self._spin_dpi, config.res_dpi),
            (self._spin_page_margin, config.page_margin_mm),
            (self._spin_panel_margin, config.panel_margin_mm),
            (self._spin_line_width, config.line_width_mm),
        )
        for spin, value in spins:
            spin.setValue(value)
        self.set_angle(config.angle)
        for widget, setter, value in (
            (self._slider_grid, self._slider_grid.setValue, config.grid_div),
            (self._chk_snap, self._chk_snap.setChecked, config.snap_to_points),
        ):
            widget.blockSignals(True)
            setter(value)
            widget.blockSignals(False)
        self._lbl_grid.setText(str(config.grid_div))

    def set_angle(self, angle: float) -> None:
        """Update the angle slider, e.g. after the canvas wheel rotated the knife."""
        self._slider_angle.blockSignals(True)
        self._slider_angle.setValue(int(round(angle)))
        self._slider_angle.blockSignals(False)
        self._lbl_angle.setText(f"{angle:g}°")

    # ── slots ────────────────────────────────────────────────────────────

    def _on_angle_slider(self, value: int) -> None:
        self._lbl_angle.setText(f"{value}°")
        self.angle_changed.emit(float(value))

    def _on_grid_slider(self, value: int) -> None:
        self._lbl_grid.setText(str(value))
        self.grid_div_changed.emit(value)
