from __future__ import annotations

import pytest

from domain.models import Cell, CellId, Point
from domain.services.geometry import (
    angle_between_points,
    calculate_bounding_box,
    cartesian_to_polar,
    clamp,
    distance,
    inverse_transform_point,
    lerp,
    mirror_x_for_rtl,
    normalize_angle,
    point_in_rect,
    polar_to_cartesian,
    transform_point,
)


def _cell(x: float, y: float, size: float = 20.0) -> Cell:
    return Cell(id=CellId(), kind="seat", x=x, y=y, w=size, h=size)


def test_polar_to_cartesian_measures_angles_clockwise_from_x_axis() -> None:
    right = polar_to_cartesian(Point(0, 0), 100, 0)
    down = polar_to_cartesian(Point(0, 0), 100, 90)
    left = polar_to_cartesian(Point(0, 0), 100, 180)

    assert (right.x, right.y) == pytest.approx((100, 0), abs=1e-9)
    assert (down.x, down.y) == pytest.approx((0, 100), abs=1e-9)
    assert (left.x, left.y) == pytest.approx((-100, 0), abs=1e-9)


def test_polar_to_cartesian_offsets_by_center() -> None:
    point = polar_to_cartesian(Point(10, 20), 5, 0)
    assert (point.x, point.y) == pytest.approx((15, 20))


def test_cartesian_to_polar_inverts_polar_to_cartesian() -> None:
    center = Point(3, -4)
    for angle in (-135.0, -90.0, 0.0, 45.0, 170.0):
        polar = cartesian_to_polar(center, polar_to_cartesian(center, 42, angle))
        assert polar.radius == pytest.approx(42)
        assert polar.angle_degrees == pytest.approx(angle)


def test_cartesian_to_polar_reports_half_turn_as_positive() -> None:
    polar = cartesian_to_polar(Point(0.0, 0.0), Point(-100.0, -0.0))
    assert polar.radius == pytest.approx(100)
    assert polar.angle_degrees == 180.0


def test_bounding_box_spans_cell_extents() -> None:
    bbox = calculate_bounding_box([_cell(10, 10), _cell(40, 10)])

    assert bbox.min_x == 0
    assert bbox.min_y == 0
    assert bbox.max_x == 50
    assert bbox.max_y == 20
    assert bbox.width == 50
    assert bbox.height == 20


def test_bounding_box_of_nothing_is_empty_at_origin() -> None:
    bbox = calculate_bounding_box([])
    assert (bbox.min_x, bbox.min_y, bbox.width, bbox.height) == (0, 0, 0, 0)


@pytest.mark.parametrize(
    ("value", "expected"),
    [(390, 30), (720, 0), (-90, 270), (-360, 0), (45, 45), (180, 180), (359.5, 359.5)],
)
def test_normalize_angle_maps_into_full_turn(value: float, expected: float) -> None:
    result = normalize_angle(value)
    assert result == pytest.approx(expected)
    assert 0 <= result < 360


def test_scalar_helpers() -> None:
    assert distance(Point(0, 0), Point(3, 4)) == 5
    assert clamp(7, 0, 5) == 5
    assert clamp(-1, 0, 5) == 0
    assert clamp(3, 0, 5) == 3
    assert lerp(10, 20, 0.25) == 12.5
    assert angle_between_points(Point(0, 0), Point(0, 10)) == pytest.approx(90)
    assert mirror_x_for_rtl(30, 200, rtl=True) == 170
    assert mirror_x_for_rtl(30, 200, rtl=False) == 30
    assert point_in_rect(Point(5, 5), 0, 0, 10, 10)
    assert not point_in_rect(Point(11, 5), 0, 0, 10, 10)


def test_inverse_transform_undoes_transform() -> None:
    world = Point(12.5, -3)
    screen = transform_point(world, 2.5, 40, -10)
    assert (screen.x, screen.y) == pytest.approx((71.25, -17.5))
    back = inverse_transform_point(screen, 2.5, 40, -10)
    assert (back.x, back.y) == pytest.approx((world.x, world.y))
