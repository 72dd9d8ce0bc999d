"""Data model for panels (ordered-vertex polygons) and the working panel set."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence, Tuple

from panelcut.geometry import Point, closest_point_on_segment, distance, sub

# Points closer than this to an edge count as lying on it.
EDGE_TOLERANCE = 1e-9


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned bounding box given by its min and max corners."""

    min: Point
    max: Point

    @property
    def size(self) -> Point:
        return sub(self.max, self.min)


@dataclass
class Polygon:
    """One panel of the template.

    Vertex *i* connects to vertex *(i + 1) mod n*; the insertion order defines
    the edge order and is relied upon when a panel is cut.
    """

    points: List[Point] = field(default_factory=list)

    def __post_init__(self) -> None:
        if len(self.points) < 3:
            raise ValueError(f"A polygon needs at least 3 points, got {len(self.points)}.")
        self.points = [(float(x), float(y)) for x, y in self.points]

    @classmethod
    def from_aabb(cls, lo: Point, hi: Point) -> "Polygon":
        """Rectangle spanning *lo*..*hi*, clockwise on a y-down screen."""
        return cls([lo, (hi[0], lo[1]), hi, (lo[0], hi[1])])

    # ── helpers ──────────────────────────────────────────────────────────

    def __len__(self) -> int:
        return len(self.points)

    def edges(self) -> Iterator[Tuple[Point, Point]]:
        """Yield (p_i, p_i+1) for every edge, wrapping around at the end."""
        n = len(self.points)
        for i in range(n):
            yield self.points[i], self.points[(i + 1) % n]

    def bounding_box(self) -> BoundingBox:
        xs = [p[0] for p in self.points]
        ys = [p[1] for p in self.points]
        return BoundingBox((min(xs), min(ys)), (max(xs), max(ys)))

    def centroid(self) -> Point:
        """Arithmetic mean of the vertices (not area-weighted)."""
        n = len(self.points)
        return (
            sum(p[0] for p in self.points) / n,
            sum(p[1] for p in self.points) / n,
        )

    def on_boundary(self, point: Point) -> bool:
        return any(
            distance(closest_point_on_segment(a, b, point), point) <= EDGE_TOLERANCE
            for a, b in self.edges()
        )

    def contains_point(self, point: Point) -> bool:
        """Even-odd ray-casting test; points on an edge or vertex count as inside."""
        if self.on_boundary(point):
            return True
        px, py = point
        n = len(self.points)
        inside = False
        j = n - 1
        for i in range(n):
            xi, yi = self.points[i]
            xj, yj = self.points[j]
            if ((yi > py) != (yj > py)) and (px < (xj - xi) * (py - yi) / (yj - yi) + xi):
                inside = not inside
            j = i
        return inside

    def coords(self) -> List[List[float]]:
        """Plain ``[[x, y], ...]`` copy of the vertices."""
        return [[x, y] for x, y in self.points]


class PanelStore:
    """Owns the working set of panels.

    Membership is by identity: two panels with equal vertices are still two
    distinct slots, and removal never touches a look-alike.
    """

    def __init__(self, polygons: Sequence[Polygon] = ()) -> None:
        self._polygons: List[Polygon] = []
        for polygon in polygons:
            self.add(polygon)

    def __len__(self) -> int:
        return len(self._polygons)

    def __iter__(self) -> Iterator[Polygon]:
        return iter(tuple(self._polygons))

    def __contains__(self, polygon: object) -> bool:
        return any(p is polygon for p in self._polygons)

    @property
    def polygons(self) -> Tuple[Polygon, ...]:
        return tuple(self._polygons)

    def index(self, polygon: Polygon) -> int:
        for i, p in enumerate(self._polygons):
            if p is polygon:
                return i
        raise ValueError("Polygon is not in the store.")

    def add(self, polygon: Polygon) -> None:
        if polygon in self:
            raise ValueError("Polygon is already in the store.")
        self._polygons.append(polygon)

    def remove(self, polygon: Polygon) -> None:
        del self._polygons[self.index(polygon)]

    def replace(self, old: Polygon, new: Sequence[Polygon]) -> None:
        """Swap *old* for *new* in a single step, keeping *old*'s slot position."""
        idx = self.index(old)
        if len({id(p) for p in new}) != len(new) or any(p in self for p in new):
            raise ValueError("Replacement polygons must be new, distinct objects.")
        self._polygons[idx:idx + 1] = list(new)

    def clear(self) -> None:
        self._polygons.clear()

    def reset_page(self, lo: Point, hi: Point) -> Polygon:
        """Drop every panel and seed a single rectangular page panel."""
        page = Polygon.from_aabb(lo, hi)
        self._polygons = [page]
        return page

    def hit_test(self, point: Point) -> Optional[Polygon]:
        """Topmost (last drawn) panel containing *point*, or None."""
        for polygon in reversed(self._polygons):
            if polygon.contains_point(point):
                return polygon
        return None
