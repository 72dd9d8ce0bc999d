"""Editor session: the single context every input event and cut goes through."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, Optional, Tuple

from panelcut.config import EditorConfig
from panelcut.cut import cut
from panelcut.geometry import Point
from panelcut.modes import (
    NO_GUIDES,
    AnchorMode,
    GridSnapperMode,
    Guides,
    Mode,
    SelectMode,
    clear_mode,
    compute_guides,
    confirm_anchor,
    freeze_box,
    mode_from_name,
)
from panelcut.polygon import BoundingBox, PanelStore, Polygon

logger = logging.getLogger(__name__)

# Degrees of rotation per wheel notch.
WHEEL_ANGLE_STEP = 5.0


class EditorSession:
    """Current mode, configuration, panels, pointer and selection.

    Every method runs to completion synchronously and leaves the session in a
    consistent state. Operations that cannot happen (no selection, no clean
    cut, wrong mode) change nothing and return False.
    """

    def __init__(self, config: Optional[EditorConfig] = None) -> None:
        self._config = (config or EditorConfig()).validate()
        self._store = PanelStore()
        self._mode: Mode = SelectMode()
        self._cursor: Point = (0.0, 0.0)
        self._selected: Optional[Polygon] = None
        self._guides: Guides = NO_GUIDES
        self.reset()

    # ── read-only state ──────────────────────────────────────────────────

    @property
    def config(self) -> EditorConfig:
        return self._config

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def store(self) -> PanelStore:
        return self._store

    @property
    def polygons(self) -> Tuple[Polygon, ...]:
        return self._store.polygons

    @property
    def cursor(self) -> Point:
        return self._cursor

    @property
    def selected(self) -> Optional[Polygon]:
        return self._selected

    @property
    def guides(self) -> Guides:
        return self._guides

    @property
    def frozen_box(self) -> Optional[BoundingBox]:
        if isinstance(self._mode, GridSnapperMode):
            return self._mode.frozen_box
        return None

    @property
    def anchor_start(self) -> Optional[Point]:
        if isinstance(self._mode, AnchorMode):
            return self._mode.start
        return None

    # ── configuration ────────────────────────────────────────────────────

    def set_config(self, config: EditorConfig) -> None:
        """Adopt *config*; page size and margin take effect on the next reset().

        Raises ConfigError and keeps the current configuration if *config*
        is invalid.
        """
        self._config = config.validate()
        self.recompute()

    def set_angle(self, degrees: float) -> None:
        self._config = self._config.with_angle(degrees)
        self.recompute()

    def set_grid_div(self, grid_div: int) -> None:
        self._config = replace(self._config, grid_div=grid_div).validate()
        self.recompute()

    def set_snap_to_points(self, enabled: bool) -> None:
        self._config = replace(self._config, snap_to_points=bool(enabled))
        self.recompute()

    def set_mode(self, name: str) -> None:
        if name == self._mode.name:
            return
        self._mode = mode_from_name(name)
        logger.debug("Mode switched to %s", name)
        self.recompute()

    # ── panels ───────────────────────────────────────────────────────────

    def reset(self) -> None:
        """Start over with one page-sized panel inset by the page margin."""
        cfg = self._config
        m = cfg.page_margin_px
        page = self._store.reset_page((m, m), (cfg.width_px - m, cfg.height_px - m))
        self._selected = None
        self._mode = clear_mode(self._mode)
        self._guides = NO_GUIDES
        logger.info("Page reset to %s", page.points)

    def load_polygons(self, polygons: Iterable[Polygon]) -> None:
        """Replace every panel with *polygons* (e.g. from a saved template)."""
        self._store.clear()
        for polygon in polygons:
            self._store.add(polygon)
        self._selected = None
        self._mode = clear_mode(self._mode)
        self._guides = NO_GUIDES

    # ── input events ─────────────────────────────────────────────────────

    def pointer_move(self, x: float, y: float) -> None:
        self._cursor = (float(x), float(y))
        if self._selected is not None and not self._selected.contains_point(self._cursor):
            self._selected = None
        if self._selected is None:
            self._selected = self._store.hit_test(self._cursor)
        self.recompute()

    def pointer_leave(self) -> None:
        self._selected = None
        self.recompute()

    def pointer_down(self) -> bool:
        """Freeze the snap grid on the selected panel (Grid Snapper only)."""
        new_mode = freeze_box(self._mode, self._selected)
        if new_mode is self._mode:
            return False
        self._mode = new_mode
        self.recompute()
        return True

    def wheel(self, yd: float) -> bool:
        """Rotate the cutting angle by ``5 * yd`` degrees, except in Select mode."""
        if isinstance(self._mode, SelectMode):
            return False
        self.set_angle(self._config.angle + WHEEL_ANGLE_STEP * yd)
        return True

    def apply(self) -> bool:
        """Advance the current cut gesture.

        In Anchor mode the first call confirms the anchor as the start point
        and the second one cuts; the start point is dropped after the second
        call whether or not the cut succeeded.
        """
        if isinstance(self._mode, SelectMode):
            return False
        if isinstance(self._mode, AnchorMode):
            if self._mode.start is None:
                new_mode = confirm_anchor(self._mode, self._guides.anchor_point)
                if new_mode is self._mode:
                    return False
                self._mode = new_mode
                self.recompute()
                return True
            applied = self._cut()
            self._mode = AnchorMode()
            self.recompute()
            return applied
        return self._cut()

    def clear(self) -> bool:
        """Drop the frozen snap box or cancel an in-progress anchor."""
        new_mode = clear_mode(self._mode)
        if new_mode == self._mode:
            return False
        self._mode = new_mode
        self.recompute()
        return True

    def delete(self) -> bool:
        """Remove the hovered panel entirely (Select mode only)."""
        if not isinstance(self._mode, SelectMode) or self._selected is None:
            return False
        self._store.remove(self._selected)
        logger.info("Deleted panel with %d points", len(self._selected))
        self._selected = None
        self._guides = NO_GUIDES
        return True

    # ── engine ───────────────────────────────────────────────────────────

    def recompute(self) -> Guides:
        self._guides = compute_guides(self._mode, self._config, self._cursor, self._selected)
        return self._guides

    def _cut(self) -> bool:
        polygon = self._selected
        if polygon is None or not self._guides.cuttable:
            return False
        result = cut(polygon, self._guides.left, self._guides.right, self._config.panel_margin_px)
        if result is None:
            return False
        self._store.replace(polygon, result)
        logger.info(
            "Cut panel of %d points into %d + %d points",
            len(polygon), len(result[0]), len(result[1]),
        )
        self._selected = None
        self._guides = NO_GUIDES
        return True
