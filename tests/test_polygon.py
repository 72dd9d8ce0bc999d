"""Tests for the polygon model and the panel store."""

import math

import pytest

from panelcut.polygon import BoundingBox, PanelStore, Polygon


def _regular(n: int, radius: float = 50.0, center=(100.0, 100.0)) -> Polygon:
    return Polygon([
        (center[0] + radius * math.cos(2 * math.pi * k / n),
         center[1] + radius * math.sin(2 * math.pi * k / n))
        for k in range(n)
    ])


def test_from_aabb_vertex_order() -> None:
    """Rectangles start at the min corner and walk clockwise on a y-down screen."""
    rect = Polygon.from_aabb((0.0, 0.0), (100.0, 200.0))

    assert rect.points == [(0.0, 0.0), (100.0, 0.0), (100.0, 200.0), (0.0, 200.0)]


def test_polygon_needs_three_points() -> None:
    with pytest.raises(ValueError):
        Polygon([(0.0, 0.0), (1.0, 1.0)])


def test_bounding_box() -> None:
    poly = Polygon([(10.0, 5.0), (40.0, 20.0), (-3.0, 30.0)])

    assert poly.bounding_box() == BoundingBox((-3.0, 5.0), (40.0, 30.0))
    assert poly.bounding_box().size == (43.0, 25.0)


def test_centroid_is_vertex_mean_not_area_weighted() -> None:
    """An extra collinear vertex on the left edge pulls the mean, not the area centre."""
    poly = Polygon([(0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 10.0), (0.0, 5.0)])

    assert poly.centroid() == pytest.approx((4.0, 5.0))


def test_contains_point_inside_and_outside() -> None:
    rect = Polygon.from_aabb((0.0, 0.0), (100.0, 200.0))

    assert rect.contains_point((50.0, 100.0))
    assert not rect.contains_point((150.0, 100.0))
    assert not rect.contains_point((50.0, -0.5))


def test_contains_point_is_inclusive_on_edges_and_vertices() -> None:
    """Every edge and every corner of the rectangle counts as inside."""
    rect = Polygon.from_aabb((0.0, 0.0), (100.0, 200.0))

    for point in [(50.0, 0.0), (100.0, 80.0), (30.0, 200.0), (0.0, 120.0)]:
        assert rect.contains_point(point), point
    for corner in rect.points:
        assert rect.contains_point(corner), corner


@pytest.mark.parametrize("poly", [
    Polygon([(0.0, 0.0), (6.0, 0.0), (0.0, 3.0)]),
    Polygon.from_aabb((4.0, 4.0), (96.0, 196.0)),
    _regular(5),
    _regular(11, radius=3.0),
])
def test_centroid_is_inside_convex_polygons(poly: Polygon) -> None:
    assert poly.contains_point(poly.centroid())


def test_store_replace_keeps_slot_position() -> None:
    """The two halves of a cut take the original's place in draw order."""
    a = Polygon.from_aabb((0.0, 0.0), (1.0, 1.0))
    b = Polygon.from_aabb((2.0, 0.0), (3.0, 1.0))
    c = Polygon.from_aabb((4.0, 0.0), (5.0, 1.0))
    store = PanelStore([a, b, c])
    left = Polygon.from_aabb((2.0, 0.0), (3.0, 0.4))
    right = Polygon.from_aabb((2.0, 0.6), (3.0, 1.0))

    store.replace(b, [left, right])

    assert store.polygons == (a, left, right, c)
    assert b not in store


def test_store_membership_is_by_identity() -> None:
    """Removing one of two look-alike panels leaves the other in place."""
    first = Polygon.from_aabb((0.0, 0.0), (1.0, 1.0))
    twin = Polygon.from_aabb((0.0, 0.0), (1.0, 1.0))
    store = PanelStore([first, twin])

    store.remove(twin)

    assert len(store) == 1
    assert store.polygons[0] is first


def test_store_rejects_aliasing() -> None:
    poly = Polygon.from_aabb((0.0, 0.0), (1.0, 1.0))
    store = PanelStore([poly])

    with pytest.raises(ValueError):
        store.add(poly)
    with pytest.raises(ValueError):
        store.replace(poly, [poly, Polygon.from_aabb((0.0, 0.0), (1.0, 1.0))])


def test_hit_test_prefers_last_drawn() -> None:
    under = Polygon.from_aabb((0.0, 0.0), (10.0, 10.0))
    over = Polygon.from_aabb((5.0, 5.0), (15.0, 15.0))
    store = PanelStore([under, over])

    assert store.hit_test((7.0, 7.0)) is over
    assert store.hit_test((2.0, 2.0)) is under
    assert store.hit_test((20.0, 20.0)) is None


def test_reset_page_seeds_single_panel() -> None:
    store = PanelStore([Polygon.from_aabb((0.0, 0.0), (1.0, 1.0))])

    page = store.reset_page((4.0, 4.0), (96.0, 196.0))

    assert store.polygons == (page,)
    assert page.points[0] == (4.0, 4.0)
    assert page.points[2] == (96.0, 196.0)
