"""Editor configuration: page size, margins, resolution and cutting options."""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict

from panelcut.geometry import clamp
from panelcut.units import mm_to_px

ANGLE_MIN = -180.0
ANGLE_MAX = 180.0
GRID_DIV_MIN = 2
GRID_DIV_MAX = 9


class ConfigError(ValueError):
    """Raised when a configuration cannot be used for cutting."""


@dataclass(frozen=True)
class EditorConfig:
    width_mm: float = 210.0
    height_mm: float = 297.0
    page_margin_mm: float = 4.0
    panel_margin_mm: float = 2.0  # full width of the strip removed by a cut
    line_width_mm: float = 0.5
    res_dpi: float = 300.0
    angle: float = 45.0  # degrees
    grid_div: int = 3
    snap_to_points: bool = False

    # ── derived pixel sizes ──────────────────────────────────────────────

    @property
    def width_px(self) -> int:
        return mm_to_px(self.width_mm, self.res_dpi)

    @property
    def height_px(self) -> int:
        return mm_to_px(self.height_mm, self.res_dpi)

    @property
    def page_margin_px(self) -> int:
        return mm_to_px(self.page_margin_mm, self.res_dpi)

    @property
    def panel_margin_px(self) -> int:
        return mm_to_px(self.panel_margin_mm, self.res_dpi)

    @property
    def line_width_px(self) -> int:
        return mm_to_px(self.line_width_mm, self.res_dpi)

    # ── validation ───────────────────────────────────────────────────────

    def validate(self) -> "EditorConfig":
        """Return self, or raise ConfigError if the values cannot be used."""
        if self.res_dpi <= 0:
            raise ConfigError("Resolution must be positive.")
        if self.width_px <= 0 or self.height_px <= 0:
            raise ConfigError("Page width and height must be at least one pixel.")
        if self.page_margin_mm < 0:
            raise ConfigError("Page margin cannot be negative.")
        if 2 * self.page_margin_px >= min(self.width_px, self.height_px):
            raise ConfigError("Page margin leaves no room for panels.")
        if self.panel_margin_px <= 0:
            raise ConfigError(
                "Panel margin must be at least one pixel at the current resolution."
            )
        if self.line_width_mm < 0:
            raise ConfigError("Line width cannot be negative.")
        if int(self.grid_div) != self.grid_div or not GRID_DIV_MIN <= self.grid_div <= GRID_DIV_MAX:
            raise ConfigError(
                f"Grid divider must be a whole number from {GRID_DIV_MIN} to {GRID_DIV_MAX}."
            )
        if not ANGLE_MIN <= self.angle <= ANGLE_MAX:
            raise ConfigError(f"Angle must lie within [{ANGLE_MIN:g}, {ANGLE_MAX:g}] degrees.")
        return self

    def with_angle(self, angle: float) -> "EditorConfig":
        """Copy with *angle* clamped into the allowed range."""
        return replace(self, angle=clamp(angle, ANGLE_MIN, ANGLE_MAX))

    # ── (de)serialisation ────────────────────────────────────────────────

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EditorConfig":
        """Build a config from *data*; unknown keys are ignored, missing ones defaulted.

        Raises ConfigError if *data* is not a mapping or a value has the wrong type.
        """
        if not isinstance(data, dict):
            raise ConfigError(f"Configuration must be an object, got {type(data).__name__}.")
        values: Dict[str, Any] = {}
        for f in fields(cls):
            if f.name not in data:
                continue
            value = data[f.name]
            if f.name == "snap_to_points":
                values[f.name] = bool(value)
                continue
            if (
                isinstance(value, bool)
                or not isinstance(value, (int, float))
                or not math.isfinite(value)
            ):
                raise ConfigError(f"{f.name} must be a finite number, got {value!r}.")
            if f.name == "grid_div" and float(value).is_integer():
                value = int(value)
            values[f.name] = value
        return cls(**values)
