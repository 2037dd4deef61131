from __future__ import annotations

import logging
import math
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import List, Tuple, assert_never

from domain.models import (
    BoundingBox,
    Cell,
    Point,
    Rectangle,
    SectionBlock,
    SectionLayoutDirection,
    SectionLayoutStrategy,
)

logger = logging.getLogger(__name__)

DEFAULT_MIN_SPACING = 2.0
DEFAULT_MIN_SECTION_SPACING = 20.0
RING_STEP = 50.0
RING_MAX_RADIUS = 5000.0
MAX_RELAXATION_ITERATIONS = 100


@dataclass(frozen=True)
class OverlapDetectionConfig:
    min_spacing: float = DEFAULT_MIN_SPACING


@dataclass(frozen=True)
class OverlapResult:
    has_overlaps: bool
    overlapping_pairs: List[Tuple[Cell, Cell]]
    overlap_count: int


@dataclass(frozen=True)
class SectionOverlapResult:
    has_overlaps: bool
    overlapping_pairs: List[Tuple[SectionBlock, SectionBlock]]
    overlap_count: int


@dataclass(frozen=True)
class SectionAdjustmentConfig:
    strategy: SectionLayoutStrategy = "compact"
    preferred_direction: SectionLayoutDirection = "horizontal"
    max_iterations: int = MAX_RELAXATION_ITERATIONS


@dataclass(frozen=True)
class GridAdjustment:
    gap: float
    scale_factor: float = 1.0
    cell_size: float | None = None


@dataclass(frozen=True)
class ArcAdjustment:
    radius: float
    scale_factor: float = 1.0


# Cell level


def cell_to_rectangle(cell: Cell, padding: float = 0.0) -> Rectangle:
    return Rectangle(
        x=cell.x - cell.w / 2 - padding,
        y=cell.y - cell.h / 2 - padding,
        width=cell.w + padding * 2,
        height=cell.h + padding * 2,
    )


def rectangles_intersect(first: Rectangle, second: Rectangle) -> bool:
    # Half-open intervals: shared edges do not count as intersection.
    return not (
        first.right <= second.x
        or second.right <= first.x
        or first.bottom <= second.y
        or second.bottom <= first.y
    )


def cells_overlap(first: Cell, second: Cell, min_spacing: float = DEFAULT_MIN_SPACING) -> bool:
    padding = min_spacing / 2
    return rectangles_intersect(
        cell_to_rectangle(first, padding), cell_to_rectangle(second, padding)
    )


def detect_overlaps(
    cells: Sequence[Cell], config: OverlapDetectionConfig | None = None
) -> OverlapResult:
    min_spacing = (config or OverlapDetectionConfig()).min_spacing
    pairs: List[Tuple[Cell, Cell]] = []
    for i, first in enumerate(cells):
        for second in cells[i + 1 :]:
            if cells_overlap(first, second, min_spacing):
                pairs.append((first, second))
    return OverlapResult(
        has_overlaps=bool(pairs), overlapping_pairs=pairs, overlap_count=len(pairs)
    )


def is_cell_in_bounds(cell: Cell, bounds: BoundingBox) -> bool:
    rect = cell_to_rectangle(cell)
    return (
        rect.x >= bounds.min_x
        and rect.y >= bounds.min_y
        and rect.right <= bounds.max_x
        and rect.bottom <= bounds.max_y
    )


def calculate_optimal_scale(
    cells: Sequence[Cell],
    viewport_width: float,
    viewport_height: float,
    padding: float = 20.0,
) -> float:
    if not cells:
        return 1.0
    rects = [cell_to_rectangle(cell) for cell in cells]
    content_width = max(rect.right for rect in rects) - min(rect.x for rect in rects)
    content_height = max(rect.bottom for rect in rects) - min(rect.y for rect in rects)
    scale_x = _safe_ratio(viewport_width - padding * 2, content_width)
    scale_y = _safe_ratio(viewport_height - padding * 2, content_height)
    # Never upscale beyond the natural size.
    return min(scale_x, scale_y, 1.0)


# Spacing solvers


def calculate_minimum_grid_gap(
    cell_width: float, cell_height: float, min_spacing: float = DEFAULT_MIN_SPACING
) -> float:
    return max(0.0, min_spacing)


def calculate_minimum_arc_radius(
    seat_count: int,
    cell_width: float,
    sweep_degrees: float,
    min_spacing: float = DEFAULT_MIN_SPACING,
) -> float:
    """Smallest radius keeping adjacent seat chords at least ``cell_width + min_spacing``.

    Solves ``chord = 2 * r * sin(step / 2)`` for ``r`` where ``step`` is the
    angular distance between neighbouring seats, then pads by half a seat so
    the seat body clears the chord. Steps wider than a half turn are treated
    as a half turn: a chord never gets longer than the diameter.
    """
    if seat_count <= 1:
        return cell_width
    angular_step = math.radians(abs(sweep_degrees)) / (seat_count - 1)
    half_step = min(angular_step / 2, math.pi / 2)
    sine = math.sin(half_step)
    if sine <= 0:
        # Zero sweep stacks every seat on one point; no radius separates them.
        return cell_width
    min_chord = cell_width + min_spacing
    min_radius = min_chord / (2 * sine)
    return max(min_radius, cell_width) + cell_width / 2


def adjust_grid_layout_for_overlaps(
    rows: int,
    cols: int,
    cell_width: float,
    cell_height: float,
    current_gap: float,
    min_spacing: float = DEFAULT_MIN_SPACING,
) -> GridAdjustment:
    min_gap = calculate_minimum_grid_gap(cell_width, cell_height, min_spacing)
    return GridAdjustment(gap=max(current_gap, min_gap))


def adjust_arc_layout_for_overlaps(
    seat_count: int,
    cell_width: float,
    cell_height: float,
    current_radius: float,
    sweep_degrees: float,
    min_spacing: float = DEFAULT_MIN_SPACING,
) -> ArcAdjustment:
    min_radius = calculate_minimum_arc_radius(seat_count, cell_width, sweep_degrees, min_spacing)
    if current_radius >= min_radius:
        return ArcAdjustment(radius=current_radius)
    return ArcAdjustment(radius=min_radius, scale_factor=_safe_ratio(min_radius, current_radius))


# Section level


def section_size(block: SectionBlock) -> Tuple[float, float]:
    width = block.cols * block.cell_size + max(block.cols - 1, 0) * block.gap
    height = block.rows * block.cell_size + max(block.rows - 1, 0) * block.gap
    return width, height


def calculate_section_bounds(
    block: SectionBlock, min_section_spacing: float = DEFAULT_MIN_SECTION_SPACING
) -> Rectangle:
    """Occupied area of a block grown by half the spacing on every side.

    Two blocks whose grown bounds do not intersect are at least
    ``min_section_spacing`` apart.
    """
    width, height = section_size(block)
    buffer = min_section_spacing / 2
    return Rectangle(
        x=block.origin.x - buffer,
        y=block.origin.y - buffer,
        width=width + min_section_spacing,
        height=height + min_section_spacing,
    )


def detect_section_overlaps(
    blocks: Sequence[SectionBlock], min_section_spacing: float = DEFAULT_MIN_SECTION_SPACING
) -> SectionOverlapResult:
    bounds = [calculate_section_bounds(block, min_section_spacing) for block in blocks]
    pairs = [(blocks[i], blocks[j]) for i, j in _overlapping_index_pairs(bounds)]
    return SectionOverlapResult(
        has_overlaps=bool(pairs), overlapping_pairs=pairs, overlap_count=len(pairs)
    )


def square_ring_offsets(
    step: float = RING_STEP, max_radius: float = RING_MAX_RADIUS
) -> Iterator[Tuple[float, float]]:
    """Candidate offsets on growing square rings around ``(0, 0)``.

    Yields the origin first, then each ring's perimeter walked along the top
    edge, the right edge, the bottom edge and the left edge.
    """
    yield (0.0, 0.0)
    ring = 1
    while ring * step <= max_radius:
        radius = ring * step
        for i in range(-ring, ring + 1):
            yield (i * step, -radius)
        for i in range(-ring + 1, ring + 1):
            yield (radius, i * step)
        for i in range(ring - 1, -ring - 1, -1):
            yield (i * step, radius)
        for i in range(ring - 1, -ring, -1):
            yield (-radius, i * step)
        ring += 1


def auto_adjust_section_positions(
    blocks: Sequence[SectionBlock],
    min_section_spacing: float = DEFAULT_MIN_SECTION_SPACING,
    config: SectionAdjustmentConfig | None = None,
) -> List[SectionBlock]:
    settings = config or SectionAdjustmentConfig()
    if not detect_section_overlaps(blocks, min_section_spacing).has_overlaps:
        return list(blocks)

    strategy = settings.strategy
    if strategy == "compact":
        return _compact_sections(blocks, min_section_spacing)
    if strategy == "distribute":
        return _distribute_sections(blocks, min_section_spacing, settings.preferred_direction)
    if strategy == "preserve-relative":
        return _relax_sections(blocks, min_section_spacing, settings.max_iterations)
    assert_never(strategy)


def _compact_sections(
    blocks: Sequence[SectionBlock], min_section_spacing: float
) -> List[SectionBlock]:
    bounds = [calculate_section_bounds(block, min_section_spacing) for block in blocks]
    # sorted() is stable, so equal areas keep their input order.
    order = sorted(range(len(blocks)), key=lambda idx: -bounds[idx].area)
    placed: List[Rectangle] = []
    adjusted: List[SectionBlock] = list(blocks)

    for idx in order:
        block = blocks[idx]
        rect = bounds[idx]
        offset = None
        for dx, dy in square_ring_offsets():
            candidate = rect.translate(dx, dy)
            if not any(rectangles_intersect(candidate, other) for other in placed):
                offset = (dx, dy)
                break
        if offset is None:
            far_right = max(other.right for other in placed)
            offset = (far_right - rect.x, 0.0)
            logger.warning(
                "Section %r found no free slot within %spx, placing it to the right.",
                block.display_name,
                RING_MAX_RADIUS,
            )
        adjusted[idx] = _moved(block, offset[0], offset[1])
        placed.append(rect.translate(*offset))

    return adjusted


def _distribute_sections(
    blocks: Sequence[SectionBlock],
    min_section_spacing: float,
    direction: SectionLayoutDirection,
) -> List[SectionBlock]:
    if not blocks:
        return []
    min_x = min(block.origin.x for block in blocks)
    min_y = min(block.origin.y for block in blocks)
    adjusted: List[SectionBlock] = []
    cursor = min_x if direction == "horizontal" else min_y
    for block in blocks:
        width, height = section_size(block)
        if direction == "horizontal":
            origin = Point(cursor, min_y)
            cursor += width + min_section_spacing
        else:
            origin = Point(min_x, cursor)
            cursor += height + min_section_spacing
        adjusted.append(block.model_copy(update={"origin": origin}))
    return adjusted


def _relax_sections(
    blocks: Sequence[SectionBlock], min_section_spacing: float, max_iterations: int
) -> List[SectionBlock]:
    adjusted: List[SectionBlock] = list(blocks)
    for iteration in range(max_iterations):
        bounds = [calculate_section_bounds(block, min_section_spacing) for block in adjusted]
        pairs = _overlapping_index_pairs(bounds)
        if not pairs:
            logger.debug("Section relaxation converged after %d iteration(s).", iteration)
            return adjusted
        for i, j in pairs:
            first = calculate_section_bounds(adjusted[i], min_section_spacing)
            second = calculate_section_bounds(adjusted[j], min_section_spacing)
            overlap_x = min(first.right, second.right) - max(first.x, second.x)
            overlap_y = min(first.bottom, second.bottom) - max(first.y, second.y)
            if overlap_x <= 0 or overlap_y <= 0:
                # An earlier nudge in this pass already separated the pair.
                continue
            if overlap_x < overlap_y:
                push = overlap_x / 2 + min_section_spacing
                sign = 1.0 if adjusted[i].origin.x <= adjusted[j].origin.x else -1.0
                adjusted[i] = _moved(adjusted[i], -push * sign, 0.0)
                adjusted[j] = _moved(adjusted[j], push * sign, 0.0)
            else:
                push = overlap_y / 2 + min_section_spacing
                sign = 1.0 if adjusted[i].origin.y <= adjusted[j].origin.y else -1.0
                adjusted[i] = _moved(adjusted[i], 0.0, -push * sign)
                adjusted[j] = _moved(adjusted[j], 0.0, push * sign)
    return adjusted


def _overlapping_index_pairs(bounds: Sequence[Rectangle]) -> List[Tuple[int, int]]:
    pairs: List[Tuple[int, int]] = []
    for i in range(len(bounds)):
        for j in range(i + 1, len(bounds)):
            if rectangles_intersect(bounds[i], bounds[j]):
                pairs.append((i, j))
    return pairs


def _moved(block: SectionBlock, dx: float, dy: float) -> SectionBlock:
    origin = Point(block.origin.x + dx, block.origin.y + dy)
    return block.model_copy(update={"origin": origin})


def _safe_ratio(numerator: float, denominator: float) -> float:
    if denominator == 0:
        return math.inf if numerator > 0 else 0.0
    return numerator / denominator

