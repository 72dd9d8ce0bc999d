"""Crossings between an offset cutting line and a panel's boundary."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Tuple

from panelcut.geometry import Line, Point, add, direction, line_intersection, scale, side_of_line
from panelcut.polygon import Polygon


@dataclass(frozen=True)
class Intersection:
    """A boundary crossing lying on edge ``index`` → ``index + 1``."""

    point: Point
    index: int


def offset_line(origin: Point, angle: float, perpendicular_offset: float) -> Line:
    """Line along *angle* through *origin* shifted sideways by *perpendicular_offset*."""
    normal = direction(angle + math.pi / 2)
    return Line.from_angle(add(origin, scale(normal, perpendicular_offset)), angle)


def find_offset_intersections(
    polygon: Polygon,
    origin: Point,
    angle: float,
    perpendicular_offset: float,
) -> List[Intersection]:
    """Every edge crossing of the offset line, in edge-index order.

    An edge counts as crossed when its endpoints lie on opposite sides of the
    line or exactly one of them lies on it. Edges running along the line have
    no single crossing and are skipped. Results are not deduplicated, so a
    line through a vertex reports that vertex twice; anything other than two
    results means there is no clean cut.
    """
    line = offset_line(origin, angle, perpendicular_offset)
    found: List[Intersection] = []
    for i, (a, b) in enumerate(polygon.edges()):
        sa = side_of_line(line, a)
        sb = side_of_line(line, b)
        if sa == 0 and sb == 0:
            continue
        if sa == 0:
            found.append(Intersection(a, i))
        elif sb == 0:
            found.append(Intersection(b, i))
        elif (sa < 0) != (sb < 0):
            point = line_intersection(line, Line.from_points(a, b))
            if point is not None:
                found.append(Intersection(point, i))
    return found


def guide_pair(
    polygon: Polygon,
    origin: Point,
    angle: float,
    margin: float,
) -> Tuple[List[Intersection], List[Intersection]]:
    """The left (``-margin / 2``) and right (``+margin / 2``) guide-line crossings."""
    half = margin / 2
    return (
        find_offset_intersections(polygon, origin, angle, -half),
        find_offset_intersections(polygon, origin, angle, half),
    )
