"""Splitting a panel in two along a margin strip."""

from __future__ import annotations

import logging
import math
from typing import List, Optional, Sequence, Tuple

from panelcut.geometry import Line, Point, side_of_line
from panelcut.intersect import Intersection
from panelcut.polygon import Polygon

logger = logging.getLogger(__name__)


def _guide_line(crossings: Sequence[Intersection]) -> Optional[Line]:
    a, b = crossings[0].point, crossings[1].point
    if a == b:
        return None
    return Line.from_points(a, b)


def cut(
    polygon: Polygon,
    left: Sequence[Intersection],
    right: Sequence[Intersection],
    margin: float,
) -> Optional[Tuple[Polygon, Polygon]]:
    """Split *polygon* between the *left* and *right* guide lines.

    *margin* is the full width of the strip between the two guide lines.
    Vertices inside the strip are dropped; each remaining vertex goes to the
    side whose guide line it is closer to. Guide crossings are spliced in
    right after the vertex that starts their edge, so both outputs keep the
    original winding.

    Returns None when either guide does not cross exactly twice or when either
    output would have fewer than 3 points.
    """
    if len(left) != 2 or len(right) != 2:
        return None
    left_line = _guide_line(left)
    right_line = _guide_line(right)
    if left_line is None or right_line is None:
        return None

    points_left: List[Point] = []
    points_right: List[Point] = []

    for a, point in enumerate(polygon.points):
        l1 = abs(side_of_line(left_line, point))
        l2 = abs(side_of_line(right_line, point))

        if math.floor(l1 + l2) > margin:
            if l1 < l2:
                points_left.append(point)
            else:
                points_right.append(point)

        for crossing in left:
            if crossing.index == a:
                points_left.append(crossing.point)
        for crossing in right:
            if crossing.index == a:
                points_right.append(crossing.point)

    if len(points_left) < 3 or len(points_right) < 3:
        logger.debug(
            "Rejected degenerate cut (%d / %d points)", len(points_left), len(points_right)
        )
        return None
    return Polygon(points_left), Polygon(points_right)
