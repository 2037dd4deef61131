from __future__ import annotations

from collections.abc import Callable

import pytest

from adapters.layout.arc import ArcLayoutEngine
from adapters.layout.grid import GridLayoutEngine
from adapters.layout.sections import SectionsLayoutEngine
from domain.models import (
    ArcLayoutConfig,
    BoundingBox,
    Cell,
    GridLayoutConfig,
    LayoutObject,
    SectionBlock,
    SectionsLayoutConfig,
    ViewBox,
)
from domain.services.content_bounds import (
    AxisLabelsConfig,
    AxisTick,
    axis_line_positions,
    calculate_content_bounds,
    col_axis_data,
    compute_view_box,
    row_axis_data,
)


@pytest.fixture
def small_grid(grid_config_factory: Callable[..., GridLayoutConfig]) -> list[Cell]:
    return GridLayoutEngine().build_cells(grid_config_factory(rows=2, cols=2))


def test_content_bounds_cover_cells(small_grid: list[Cell]) -> None:
    assert calculate_content_bounds(small_grid) == BoundingBox(0, 0, 40, 40, 40, 40)


def test_content_bounds_include_objects(small_grid: list[Cell]) -> None:
    stage = LayoutObject(id="stage", type="stage", x=20, y=-30, width=100, height=20)

    bounds = calculate_content_bounds(small_grid, [stage])

    assert bounds == BoundingBox(min_x=-30, min_y=-40, max_x=70, max_y=40, width=100, height=80)


def test_content_bounds_edge_cases() -> None:
    marker = LayoutObject(id="pin", x=5, y=5, width=0, height=0)

    assert calculate_content_bounds([]) == BoundingBox.empty()
    assert calculate_content_bounds([], [marker]) == BoundingBox(5, 5, 5, 5, 1, 1)


def test_view_box_without_axis_labels_adds_padding(small_grid: list[Cell]) -> None:
    bounds = calculate_content_bounds(small_grid)

    assert compute_view_box(bounds) == ViewBox(x=-20, y=-20, width=80, height=80)


def test_view_box_reserves_room_for_axis_labels(small_grid: list[Cell]) -> None:
    bounds = calculate_content_bounds(small_grid)

    top_left = compute_view_box(bounds, AxisLabelsConfig(enabled=True))
    bottom_right = compute_view_box(
        bounds, AxisLabelsConfig(enabled=True, position_x="bottom", position_y="right")
    )
    rows_only = compute_view_box(bounds, AxisLabelsConfig(enabled=True, show_x=False))

    assert top_left == ViewBox(x=-86, y=-86, width=146, height=146)
    assert bottom_right == ViewBox(x=-20, y=-20, width=146, height=146)
    assert rows_only == ViewBox(x=-86, y=-20, width=146, height=80)


def test_axis_data_groups_rows_and_columns(small_grid: list[Cell]) -> None:
    assert row_axis_data("grid", small_grid) == [
        AxisTick(key="default:0", label="A", position=10),
        AxisTick(key="default:1", label="B", position=30),
    ]
    assert col_axis_data("grid", small_grid) == [
        AxisTick(key="default:0", label="1", position=10),
        AxisTick(key="default:1", label="2", position=30),
    ]


def test_axis_data_is_keyed_per_section(
    section_block_factory: Callable[..., SectionBlock],
) -> None:
    config = SectionsLayoutConfig(
        blocks=[
            section_block_factory("a", rows=1, cols=1),
            section_block_factory("b", x=100.0, rows=1, cols=1),
        ]
    )
    cells = SectionsLayoutEngine().build_cells(config)

    ticks = col_axis_data("sections", cells)

    assert [(tick.key, tick.position) for tick in ticks] == [("a:0", 10), ("b:0", 110)]
    assert [tick.label for tick in row_axis_data("sections", cells)] == ["A1", "B1"]


def test_axis_data_is_empty_for_angular_layouts() -> None:
    cells = ArcLayoutEngine().build_cells(
        ArcLayoutConfig(radius=50, sweep_degrees=90, count=3, cell_size=10)
    )

    assert row_axis_data("arc", cells) == []
    assert col_axis_data("circle", cells) == []


def test_axis_line_positions_follow_label_sides(small_grid: list[Cell]) -> None:
    bounds = calculate_content_bounds(small_grid)

    assert axis_line_positions(bounds, AxisLabelsConfig(enabled=True)) == (-36, -36)
    assert axis_line_positions(
        bounds, AxisLabelsConfig(enabled=True, position_x="bottom", position_y="right")
    ) == (76, 76)
