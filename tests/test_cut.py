"""Tests for splitting a panel along the margin strip."""

import math

import pytest

from panelcut.cut import cut
from panelcut.geometry import rad
from panelcut.intersect import Intersection, guide_pair
from panelcut.polygon import Polygon


def _flat(points):
    return [c for p in points for c in p]


def test_horizontal_cut_through_rectangle() -> None:
    """Top half keeps the upper corners, bottom half the lower ones, strip removed."""
    rect = Polygon.from_aabb((0.0, 0.0), (100.0, 200.0))
    left, right = guide_pair(rect, (50.0, 100.0), 0.0, 2.0)

    result = cut(rect, left, right, 2.0)

    assert result is not None
    top, bottom = result
    assert _flat(top.points) == pytest.approx(
        _flat([(0.0, 0.0), (100.0, 0.0), (100.0, 99.0), (0.0, 99.0)])
    )
    assert _flat(bottom.points) == pytest.approx(
        _flat([(100.0, 101.0), (100.0, 200.0), (0.0, 200.0), (0.0, 101.0)])
    )


def test_cut_partitions_corners_and_crossings() -> None:
    """Outputs hold exactly the original corners plus the four guide crossings."""
    rect = Polygon.from_aabb((0.0, 0.0), (100.0, 200.0))
    left, right = guide_pair(rect, (50.0, 100.0), 0.0, 4.0)

    top, bottom = cut(rect, left, right, 4.0)

    assert len(top) >= 3 and len(bottom) >= 3
    expected = set(rect.points) | {c.point for c in left} | {c.point for c in right}
    assert set(top.points) | set(bottom.points) == expected
    assert not set(top.points) & set(bottom.points)
    # Bounding boxes only differ by the removed strip.
    assert top.bounding_box().max[1] == pytest.approx(98.0)
    assert bottom.bounding_box().min[1] == pytest.approx(102.0)


def test_diagonal_cut_keeps_points_out_of_strip() -> None:
    """No output vertex lies strictly inside the discarded strip."""
    rect = Polygon.from_aabb((0.0, 0.0), (300.0, 200.0))
    margin = 10.0
    angle = rad(30.0)
    left, right = guide_pair(rect, (150.0, 100.0), angle, margin)

    a, b = cut(rect, left, right, margin)

    normal = (-math.sin(angle), math.cos(angle))
    for poly, sign in ((a, -1), (b, 1)):
        for x, y in poly.points:
            offset = (x - 150.0) * normal[0] + (y - 100.0) * normal[1]
            assert sign * offset >= margin / 2 - 1e-6
    assert len(a) + len(b) == 4 + 4


def test_cut_requires_two_crossings_per_guide() -> None:
    rect = Polygon.from_aabb((0.0, 0.0), (100.0, 200.0))
    left, right = guide_pair(rect, (50.0, 100.0), 0.0, 2.0)

    assert cut(rect, left[:1], right, 2.0) is None
    assert cut(rect, left, [], 2.0) is None
    assert cut(rect, left + right, right, 2.0) is None


def test_cut_rejects_coincident_crossings() -> None:
    rect = Polygon.from_aabb((0.0, 0.0), (100.0, 200.0))
    same = [Intersection((0.0, 100.0), 3), Intersection((0.0, 100.0), 3)]
    _, right = guide_pair(rect, (50.0, 100.0), 0.0, 2.0)

    assert cut(rect, same, right, 2.0) is None


def test_cut_rejects_result_with_fewer_than_three_points() -> None:
    """An apex just past the strip is dropped, leaving only two crossings on that side."""
    triangle = Polygon([(0.0, 0.0), (100.0, 0.0), (50.0, 51.3)])
    left, right = guide_pair(triangle, (50.0, 50.0), 0.0, 2.0)
    assert len(left) == 2 and len(right) == 2

    assert cut(triangle, left, right, 2.0) is None


def test_cut_preserves_input_polygon() -> None:
    rect = Polygon.from_aabb((0.0, 0.0), (100.0, 200.0))
    before = list(rect.points)
    left, right = guide_pair(rect, (50.0, 100.0), 0.0, 2.0)

    cut(rect, left, right, 2.0)

    assert rect.points == before
