from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass

from domain.models import BoundingBox, Cell, Point


@dataclass(frozen=True)
class PolarCoordinate:
    radius: float
    angle_degrees: float


def polar_to_cartesian(center: Point, radius: float, angle_degrees: float) -> Point:
    # Screen space: y grows downwards, so positive angles run clockwise from +x.
    angle_radians = math.radians(angle_degrees)
    return Point(
        center.x + radius * math.cos(angle_radians),
        center.y + radius * math.sin(angle_radians),
    )


def cartesian_to_polar(center: Point, point: Point) -> PolarCoordinate:
    dx = point.x - center.x
    dy = point.y - center.y
    angle = math.degrees(math.atan2(dy, dx))
    if angle <= -180.0:
        angle = 180.0
    return PolarCoordinate(radius=math.hypot(dx, dy), angle_degrees=angle)


def angle_between_points(start: Point, end: Point) -> float:
    return math.degrees(math.atan2(end.y - start.y, end.x - start.x))


def calculate_bounding_box(cells: Iterable[Cell]) -> BoundingBox:
    min_x = min_y = math.inf
    max_x = max_y = -math.inf
    found = False
    for cell in cells:
        found = True
        half_w = cell.w / 2
        half_h = cell.h / 2
        min_x = min(min_x, cell.x - half_w)
        min_y = min(min_y, cell.y - half_h)
        max_x = max(max_x, cell.x + half_w)
        max_y = max(max_y, cell.y + half_h)
    if not found:
        return BoundingBox.empty()
    return BoundingBox(
        min_x=min_x,
        min_y=min_y,
        max_x=max_x,
        max_y=max_y,
        width=max_x - min_x,
        height=max_y - min_y,
    )


def normalize_angle(degrees: float) -> float:
    normalized = math.fmod(degrees, 360.0)
    if normalized < 0:
        normalized += 360.0
    # fmod of a tiny negative value can round up to exactly 360.
    return 0.0 if normalized >= 360.0 else normalized


def distance(a: Point, b: Point) -> float:
    return math.hypot(b.x - a.x, b.y - a.y)


def clamp(value: float, minimum: float, maximum: float) -> float:
    return min(max(value, minimum), maximum)


def lerp(start: float, end: float, t: float) -> float:
    return start + (end - start) * t


def mirror_x_for_rtl(x: float, container_width: float, rtl: bool) -> float:
    return container_width - x if rtl else x


def point_in_rect(point: Point, x: float, y: float, width: float, height: float) -> bool:
    return x <= point.x <= x + width and y <= point.y <= y + height


def transform_point(point: Point, zoom: float, pan_x: float, pan_y: float) -> Point:
    return Point(point.x * zoom + pan_x, point.y * zoom + pan_y)


def inverse_transform_point(screen: Point, zoom: float, pan_x: float, pan_y: float) -> Point:
    return Point((screen.x - pan_x) / zoom, (screen.y - pan_y) / zoom)
