from __future__ import annotations

import math
from collections.abc import Sequence

from domain.models import Cell, Direction, LayoutType

# Displacements at or below this many pixels do not count as movement.
DIRECTION_THRESHOLD = 5.0

_MIRRORED: dict[Direction, Direction] = {"left": "right", "right": "left"}


def _apply_rtl(direction: Direction, rtl: bool) -> Direction:
    if rtl:
        return _MIRRORED.get(direction, direction)
    return direction


def _is_in_direction(dx: float, dy: float, direction: Direction) -> bool:
    if direction == "up":
        return dy < -DIRECTION_THRESHOLD and abs(dx) < abs(dy)
    if direction == "down":
        return dy > DIRECTION_THRESHOLD and abs(dx) < abs(dy)
    if direction == "left":
        return dx < -DIRECTION_THRESHOLD and abs(dy) < abs(dx)
    return dx > DIRECTION_THRESHOLD and abs(dy) < abs(dx)


def find_neighbor_in_direction(
    cells: Sequence[Cell], current: Cell, direction: Direction, rtl: bool = False
) -> Cell | None:
    adjusted = _apply_rtl(direction, rtl)
    best: Cell | None = None
    best_distance = math.inf
    for cell in cells:
        if cell is current:
            continue
        dx = cell.x - current.x
        dy = cell.y - current.y
        if not _is_in_direction(dx, dy, adjusted):
            continue
        candidate_distance = math.hypot(dx, dy)
        if candidate_distance < best_distance:
            best_distance = candidate_distance
            best = cell
    return best


def find_grid_neighbor(
    cells: Sequence[Cell], current: Cell, direction: Direction, rtl: bool = False
) -> Cell | None:
    row = current.id.row
    col = current.id.col
    if row is None or col is None:
        return find_neighbor_in_direction(cells, current, direction, rtl)

    adjusted = _apply_rtl(direction, rtl)
    if adjusted == "up":
        row -= 1
    elif adjusted == "down":
        row += 1
    elif adjusted == "left":
        col -= 1
    else:
        col += 1

    section_id = current.id.section_id
    for cell in cells:
        if cell.id.row == row and cell.id.col == col and cell.id.section_id == section_id:
            return cell
    return None


def find_angular_neighbor(
    cells: Sequence[Cell], current: Cell, direction: Direction, rtl: bool = False
) -> Cell | None:
    index = current.id.index
    if index is None or direction in ("up", "down"):
        return find_neighbor_in_direction(cells, current, direction, rtl)

    delta = -1 if _apply_rtl(direction, rtl) == "left" else 1
    target = index + delta
    for cell in cells:
        if cell.id.index == target:
            return cell
    return None


def find_layout_neighbor(
    layout_type: LayoutType,
    cells: Sequence[Cell],
    current: Cell,
    direction: Direction,
    rtl: bool = False,
) -> Cell | None:
    if layout_type in ("grid", "sections"):
        return find_grid_neighbor(cells, current, direction, rtl)
    return find_angular_neighbor(cells, current, direction, rtl)
