"""2D point arithmetic and infinite-line helpers used by the cutting engine."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple

# A point is (x, y) in page-pixel coordinates.
Point = Tuple[float, float]


# ── vector arithmetic ────────────────────────────────────────────────────

def add(p: Point, q: Point) -> Point:
    return (p[0] + q[0], p[1] + q[1])


def sub(p: Point, q: Point) -> Point:
    return (p[0] - q[0], p[1] - q[1])


def scale(p: Point, s: float) -> Point:
    return (p[0] * s, p[1] * s)


def dot(p: Point, q: Point) -> float:
    return p[0] * q[0] + p[1] * q[1]


def cross(p: Point, q: Point) -> float:
    return p[0] * q[1] - p[1] * q[0]


def length(p: Point) -> float:
    return math.hypot(p[0], p[1])


def distance(p: Point, q: Point) -> float:
    return math.hypot(p[0] - q[0], p[1] - q[1])


def rad(degrees: float) -> float:
    return degrees * math.pi / 180.0


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(value, hi))


def direction(angle: float) -> Point:
    """Unit vector pointing along *angle* (radians)."""
    return (math.cos(angle), math.sin(angle))


def angle_of(vector: Point) -> float:
    return math.atan2(vector[1], vector[0])


# ── lines ────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Line:
    """Infinite line through *origin* running along *direction*.

    The direction vector is not required to be unit length, but it must not
    be the zero vector for projections and side tests to be meaningful.
    """

    origin: Point
    direction: Point

    @classmethod
    def from_points(cls, a: Point, b: Point) -> "Line":
        return cls(a, sub(b, a))

    @classmethod
    def from_angle(cls, origin: Point, angle: float) -> "Line":
        return cls(origin, direction(angle))

    @property
    def angle(self) -> float:
        return angle_of(self.direction)


def point_on_line(line: Line, query: Point) -> Point:
    """Orthogonal projection of *query* onto the infinite *line*."""
    d = line.direction
    denom = dot(d, d)
    if denom == 0:
        return line.origin
    t = dot(sub(query, line.origin), d) / denom
    return add(line.origin, scale(d, t))


def closest_point_on_segment(a: Point, b: Point, query: Point) -> Point:
    """Like :func:`point_on_line` but clamped to the segment a→b."""
    d = sub(b, a)
    denom = dot(d, d)
    if denom == 0:
        return a
    t = clamp(dot(sub(query, a), d) / denom, 0.0, 1.0)
    return add(a, scale(d, t))


def side_of_line(line: Line, point: Point) -> float:
    """Signed perpendicular distance from *line* to *point*.

    Positive when *point* lies to the left of the line direction (in a y-up
    frame; y-down screens mirror this), negative on the right, zero on it.
    """
    d = line.direction
    n = length(d)
    if n == 0:
        return 0.0
    return cross(d, sub(point, line.origin)) / n


def line_intersection(l1: Line, l2: Line) -> Optional[Point]:
    """Intersection point of two infinite lines, or None if they are parallel."""
    denom = cross(l1.direction, l2.direction)
    if denom == 0:
        return None
    t = cross(sub(l2.origin, l1.origin), l2.direction) / denom
    return add(l1.origin, scale(l1.direction, t))
