"""Unit conversion between millimetres, inches and device pixels."""

from __future__ import annotations

import math

INCH_MM = 25.4


def mm_to_in(mm: float) -> float:
    return mm / INCH_MM


def mm_to_px(mm: float, dpi: float) -> int:
    """Convert a length in millimetres to whole pixels at *dpi*.

    Halves round up, so a 0.5 px margin still becomes one pixel.
    """
    return math.floor(mm_to_in(mm) * dpi + 0.5)
