"""Cutting modes and the guide lines each one derives from the pointer.

Every mode is a small frozen dataclass carrying only its own transient state
(Anchor's start point, Grid Snapper's frozen box). Transitions return a new
mode value, and :func:`compute_guides` is a pure function of
``(mode, config, cursor, polygon)`` that is re-run on every input tick.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Dict, List, Optional, Tuple, Type, Union

from panelcut.config import EditorConfig
from panelcut.geometry import (
    Point,
    angle_of,
    clamp,
    closest_point_on_segment,
    distance,
    rad,
    sub,
)
from panelcut.intersect import Intersection, guide_pair
from panelcut.polygon import BoundingBox, Polygon


@dataclass(frozen=True)
class SelectMode:
    """Hover selection and deletion only; never cuts."""

    name: ClassVar[str] = "select"


@dataclass(frozen=True)
class KnifeMode:
    """Cut through the cursor at the configured angle."""

    name: ClassVar[str] = "knife"


@dataclass(frozen=True)
class AnchorMode:
    """Two-stage cut from a boundary point towards the cursor.

    ``start`` is None while awaiting the first confirmation; once set, the
    next confirmation applies the cut.
    """

    name: ClassVar[str] = "anchor"
    start: Optional[Point] = None

    @property
    def stage(self) -> str:
        return "awaiting_start" if self.start is None else "awaiting_apply"


@dataclass(frozen=True)
class HalfSplitterMode:
    """Cut through the panel's vertex centroid at the configured angle."""

    name: ClassVar[str] = "half_splitter"


@dataclass(frozen=True)
class GridSnapperMode:
    """Cut through the grid point nearest the cursor.

    The grid spans ``frozen_box`` when one has been captured, otherwise the
    live bounding box of the selected panel.
    """

    name: ClassVar[str] = "grid_snapper"
    frozen_box: Optional[BoundingBox] = None


Mode = Union[SelectMode, KnifeMode, AnchorMode, HalfSplitterMode, GridSnapperMode]

MODES: Dict[str, Type] = {
    cls.name: cls
    for cls in (SelectMode, KnifeMode, AnchorMode, HalfSplitterMode, GridSnapperMode)
}

# (label, name) pairs in the order they are offered to the user.
MODE_LABELS: List[Tuple[str, str]] = [
    ("Select", SelectMode.name),
    ("Knife", KnifeMode.name),
    ("Anchor", AnchorMode.name),
    ("Half Splitter", HalfSplitterMode.name),
    ("Grid Snapper", GridSnapperMode.name),
]


@dataclass(frozen=True)
class Guides:
    """Result of one recomputation, consumed by the cut and by the preview."""

    left: Tuple[Intersection, ...] = ()
    right: Tuple[Intersection, ...] = ()
    origin: Optional[Point] = None
    angle: Optional[float] = None  # radians
    anchor_point: Optional[Point] = None
    snapped: Optional[Point] = None

    @property
    def cuttable(self) -> bool:
        return len(self.left) == 2 and len(self.right) == 2


NO_GUIDES = Guides()


# ── transitions ──────────────────────────────────────────────────────────

def mode_from_name(name: str) -> Mode:
    """Fresh state for the mode called *name*."""
    try:
        return MODES[name]()
    except KeyError:
        raise ValueError(f"Unknown mode: {name!r}") from None


def confirm_anchor(mode: Mode, anchor_point: Optional[Point]) -> Mode:
    """Freeze *anchor_point* as the start of an anchor cut."""
    if isinstance(mode, AnchorMode) and mode.start is None and anchor_point is not None:
        return AnchorMode(start=anchor_point)
    return mode


def freeze_box(mode: Mode, polygon: Optional[Polygon]) -> Mode:
    """Capture *polygon*'s bounding box so the snap grid stops following it."""
    if isinstance(mode, GridSnapperMode) and polygon is not None:
        return GridSnapperMode(frozen_box=polygon.bounding_box())
    return mode


def clear_mode(mode: Mode) -> Mode:
    """Drop the frozen box or an in-progress anchor start."""
    if isinstance(mode, (AnchorMode, GridSnapperMode)):
        return type(mode)()
    return mode


# ── origin derivation ────────────────────────────────────────────────────

def nearest_anchor(
    polygon: Polygon, cursor: Point, snap_to_points: bool
) -> Tuple[Point, float]:
    """Boundary point nearest *cursor* and its distance.

    With *snap_to_points* only vertices are candidates; otherwise each edge
    contributes the closest point on that edge.
    """
    candidates = [
        a if snap_to_points else closest_point_on_segment(a, b, cursor)
        for a, b in polygon.edges()
    ]
    best = min(candidates, key=lambda c: distance(c, cursor))
    return best, distance(best, cursor)


def snap_to_grid(box: BoundingBox, cursor: Point, grid_div: int) -> Point:
    """Interior grid point of *box* nearest to *cursor*.

    The box is divided into ``grid_div`` cells per axis. Only the interior
    grid lines are candidates, since a cut along the box border would run
    along the panel edge.
    """
    size = box.size
    snapped = []
    for axis in (0, 1):
        lo = box.min[axis]
        step = size[axis] / grid_div
        if step == 0:
            snapped.append(lo)
            continue
        k = clamp(round((cursor[axis] - lo) / step), 1, grid_div - 1)
        snapped.append(lo + k * step)
    return (snapped[0], snapped[1])


def compute_guides(
    mode: Mode,
    config: EditorConfig,
    cursor: Point,
    polygon: Optional[Polygon],
) -> Guides:
    """Guide lines for *polygon* as seen from the current mode and cursor."""
    if polygon is None or isinstance(mode, SelectMode):
        return NO_GUIDES

    margin = config.panel_margin_px
    anchor_point = None
    snapped = None

    if isinstance(mode, KnifeMode):
        origin, angle = cursor, rad(config.angle)
    elif isinstance(mode, AnchorMode):
        anchor_point, _ = nearest_anchor(polygon, cursor, config.snap_to_points)
        if mode.start is None:
            return Guides(anchor_point=anchor_point)
        origin, angle = mode.start, angle_of(sub(mode.start, cursor))
    elif isinstance(mode, HalfSplitterMode):
        origin, angle = polygon.centroid(), rad(config.angle)
    elif isinstance(mode, GridSnapperMode):
        box = mode.frozen_box or polygon.bounding_box()
        snapped = snap_to_grid(box, cursor, config.grid_div)
        origin, angle = snapped, rad(config.angle)
    else:
        raise TypeError(f"Unsupported mode: {mode!r}")

    left, right = guide_pair(polygon, origin, angle, margin)
    return Guides(
        left=tuple(left),
        right=tuple(right),
        origin=origin,
        angle=angle,
        anchor_point=anchor_point,
        snapped=snapped,
    )
