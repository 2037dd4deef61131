from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Dict, List, Literal, Tuple

from domain.models import BoundingBox, Cell, LayoutObject, LayoutType, ViewBox
from domain.services.geometry import calculate_bounding_box

VIEW_BOX_PADDING = 20.0
AXIS_LABEL_ALLOWANCE = 30.0
DEFAULT_SECTION_KEY = "default"


@dataclass(frozen=True)
class AxisLabelsConfig:
    enabled: bool = False
    show_x: bool = True
    show_y: bool = True
    position_x: Literal["top", "bottom"] = "top"
    position_y: Literal["left", "right"] = "left"
    offset: float = 36.0

    @property
    def x_visible(self) -> bool:
        return self.enabled and self.show_x

    @property
    def y_visible(self) -> bool:
        return self.enabled and self.show_y


@dataclass(frozen=True)
class AxisTick:
    key: str
    label: str
    position: float


def calculate_content_bounds(
    cells: Sequence[Cell], objects: Sequence[LayoutObject] = ()
) -> BoundingBox:
    if not cells and not objects:
        return BoundingBox.empty()

    min_x = min_y = math.inf
    max_x = max_y = -math.inf
    if cells:
        box = calculate_bounding_box(cells)
        min_x, min_y, max_x, max_y = box.min_x, box.min_y, box.max_x, box.max_y
    for obj in objects:
        min_x = min(min_x, obj.x - obj.width / 2)
        min_y = min(min_y, obj.y - obj.height / 2)
        max_x = max(max_x, obj.x + obj.width / 2)
        max_y = max(max_y, obj.y + obj.height / 2)

    return BoundingBox(
        min_x=min_x,
        min_y=min_y,
        max_x=max_x,
        max_y=max_y,
        width=max(1.0, max_x - min_x),
        height=max(1.0, max_y - min_y),
    )


def compute_view_box(
    bounds: BoundingBox,
    axis: AxisLabelsConfig | None = None,
    padding: float = VIEW_BOX_PADDING,
) -> ViewBox:
    settings = axis or AxisLabelsConfig()
    extra = settings.offset + AXIS_LABEL_ALLOWANCE
    extra_left = extra if settings.y_visible and settings.position_y == "left" else 0.0
    extra_right = extra if settings.y_visible and settings.position_y == "right" else 0.0
    extra_top = extra if settings.x_visible and settings.position_x == "top" else 0.0
    extra_bottom = extra if settings.x_visible and settings.position_x == "bottom" else 0.0
    return ViewBox(
        x=bounds.min_x - padding - extra_left,
        y=bounds.min_y - padding - extra_top,
        width=bounds.width + padding * 2 + extra_left + extra_right,
        height=bounds.height + padding * 2 + extra_top + extra_bottom,
    )


def row_axis_data(layout_type: LayoutType, cells: Sequence[Cell]) -> List[AxisTick]:
    if layout_type not in ("grid", "sections"):
        return []
    grouped: Dict[str, Tuple[str, List[float]]] = {}
    for cell in cells:
        label = cell.meta.row_label if cell.meta else None
        if cell.id.row is None or not label:
            continue
        key = f"{cell.id.section_id or DEFAULT_SECTION_KEY}:{cell.id.row}"
        grouped.setdefault(key, (label, []))[1].append(cell.y)
    return _ticks(grouped)


def col_axis_data(layout_type: LayoutType, cells: Sequence[Cell]) -> List[AxisTick]:
    if layout_type not in ("grid", "sections"):
        return []
    grouped: Dict[str, Tuple[str, List[float]]] = {}
    for cell in cells:
        label = cell.meta.col_label if cell.meta else None
        if cell.id.col is None or not label:
            continue
        key = f"{cell.id.section_id or DEFAULT_SECTION_KEY}:{cell.id.col}"
        grouped.setdefault(key, (label, []))[1].append(cell.x)
    return _ticks(grouped)


def axis_line_positions(bounds: BoundingBox, axis: AxisLabelsConfig) -> Tuple[float, float]:
    """Return the x of the row-label column and the y of the column-label row."""
    if axis.position_y == "left":
        row_axis_x = bounds.min_x - axis.offset
    else:
        row_axis_x = bounds.max_x + axis.offset
    if axis.position_x == "top":
        col_axis_y = bounds.min_y - axis.offset
    else:
        col_axis_y = bounds.max_y + axis.offset
    return row_axis_x, col_axis_y


def _ticks(grouped: Dict[str, Tuple[str, List[float]]]) -> List[AxisTick]:
    ticks = [
        AxisTick(key=key, label=label, position=sum(values) / len(values))
        for key, (label, values) in grouped.items()
    ]
    return sorted(ticks, key=lambda tick: tick.position)
