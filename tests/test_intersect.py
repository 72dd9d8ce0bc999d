"""Tests for guide-line / boundary crossings."""

import math

import pytest

from panelcut.geometry import closest_point_on_segment, distance, rad
from panelcut.intersect import find_offset_intersections, guide_pair, offset_line
from panelcut.polygon import Polygon


def _hexagon() -> Polygon:
    return Polygon([
        (100.0 + 50.0 * math.cos(math.pi / 3 * k), 100.0 + 50.0 * math.sin(math.pi / 3 * k))
        for k in range(6)
    ])


def _distance_to_boundary(poly: Polygon, point) -> float:
    return min(distance(closest_point_on_segment(a, b, point), point) for a, b in poly.edges())


def test_horizontal_line_through_rectangle() -> None:
    """A 100x200 page cut at y=100 crosses the two vertical edges."""
    rect = Polygon.from_aabb((0.0, 0.0), (100.0, 200.0))

    found = find_offset_intersections(rect, (37.0, 100.0), 0.0, 0.0)

    assert len(found) == 2
    assert [f.index for f in found] == [1, 3]
    assert found[0].point == pytest.approx((100.0, 100.0))
    assert found[1].point == pytest.approx((0.0, 100.0))


def test_offset_moves_line_perpendicular_to_angle() -> None:
    """For angle 0 a negative offset moves the line towards smaller y."""
    rect = Polygon.from_aabb((0.0, 0.0), (100.0, 200.0))

    left, right = guide_pair(rect, (50.0, 100.0), 0.0, 2.0)

    assert [c.point[1] for c in left] == pytest.approx([99.0, 99.0])
    assert [c.point[1] for c in right] == pytest.approx([101.0, 101.0])


def test_offset_line_for_vertical_angle() -> None:
    line = offset_line((50.0, 50.0), rad(90.0), 3.0)

    assert line.origin == pytest.approx((47.0, 50.0))
    assert line.angle == pytest.approx(math.pi / 2)


def test_vertical_line_crosses_top_and_bottom() -> None:
    rect = Polygon.from_aabb((0.0, 0.0), (100.0, 200.0))

    found = find_offset_intersections(rect, (30.0, 10.0), rad(90.0), 0.0)

    assert [f.index for f in found] == [0, 2]
    assert found[0].point == pytest.approx((30.0, 0.0))
    assert found[1].point == pytest.approx((30.0, 200.0))


def test_line_missing_polygon_yields_nothing() -> None:
    """No exception for a line that never touches the panel, just no crossings."""
    rect = Polygon.from_aabb((0.0, 0.0), (100.0, 200.0))

    assert find_offset_intersections(rect, (50.0, 300.0), 0.0, 0.0) == []
    assert find_offset_intersections(rect, (50.0, 100.0), 0.0, 250.0) == []


def test_line_through_vertex_is_reported_twice() -> None:
    """Crossings are not deduplicated, so a vertex hit makes the cut unavailable."""
    diamond = Polygon([(50.0, 0.0), (100.0, 50.0), (50.0, 100.0), (0.0, 50.0)])

    found = find_offset_intersections(diamond, (30.0, 50.0), 0.0, 0.0)

    assert [f.index for f in found] == [0, 1, 2, 3]
    assert [f.point for f in found] == [(100.0, 50.0), (100.0, 50.0), (0.0, 50.0), (0.0, 50.0)]


@pytest.mark.parametrize("degrees", [15.0, 45.0, 75.0, 105.0, 135.0, 165.0])
@pytest.mark.parametrize("offset", [-3.0, 0.0, 3.0])
def test_convex_polygon_yields_two_boundary_crossings(degrees: float, offset: float) -> None:
    hexagon = _hexagon()

    found = find_offset_intersections(hexagon, (100.0, 100.0), rad(degrees), offset)

    assert len(found) == 2
    assert found[0].index != found[1].index
    for crossing in found:
        assert _distance_to_boundary(hexagon, crossing.point) == pytest.approx(0.0, abs=1e-9)
