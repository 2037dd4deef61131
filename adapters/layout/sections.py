from __future__ import annotations

import logging
from dataclasses import replace
from typing import List, Sequence

from adapters.layout.base import BaseLayoutEngine
from adapters.layout.grid import GridLayoutEngine
from domain.models import Cell, SectionBlock, SectionsLayoutConfig
from domain.services.collision import (
    SectionAdjustmentConfig,
    adjust_grid_layout_for_overlaps,
    auto_adjust_section_positions,
    detect_section_overlaps,
)

logger = logging.getLogger(__name__)


class SectionsLayoutEngine(BaseLayoutEngine[SectionsLayoutConfig]):
    def __init__(self, grid_engine: GridLayoutEngine | None = None) -> None:
        self.grid_engine = grid_engine or GridLayoutEngine()

    def build_cells(self, config: SectionsLayoutConfig) -> List[Cell]:
        blocks = self.position_blocks(config)
        cells: List[Cell] = []
        # position_blocks keeps input order, so cells follow the configured block order.
        for block in blocks:
            for cell in self.grid_engine.build_cells(block.to_grid_config()):
                cells.append(replace(cell, id=replace(cell.id, section_id=block.id)))
        return cells

    def position_blocks(self, config: SectionsLayoutConfig) -> List[SectionBlock]:
        blocks = [self._resolve_block(block, config) for block in config.blocks]
        if not config.auto_prevent_section_overlaps or len(blocks) < 2:
            return blocks

        spacing = config.min_section_spacing
        overlaps = detect_section_overlaps(blocks, spacing)
        if not overlaps.has_overlaps:
            return blocks

        logger.info(
            "Detected %d section overlap(s), adjusting positions with the '%s' strategy.",
            overlaps.overlap_count,
            config.section_layout_strategy,
        )
        for first, second in overlaps.overlapping_pairs:
            logger.info("Section %r overlaps with %r.", first.display_name, second.display_name)

        adjusted = auto_adjust_section_positions(
            blocks,
            spacing,
            SectionAdjustmentConfig(
                strategy=config.section_layout_strategy,
                preferred_direction=config.section_layout_direction,
            ),
        )
        self._report_residual_overlaps(adjusted, spacing)
        return adjusted

    def _resolve_block(self, block: SectionBlock, config: SectionsLayoutConfig) -> SectionBlock:
        auto_prevent = (
            config.auto_prevent_overlap
            if block.auto_prevent_overlap is None
            else block.auto_prevent_overlap
        )
        min_spacing = config.min_spacing if block.min_spacing is None else block.min_spacing
        gap = block.gap
        if auto_prevent:
            # Widen the gap up front so section bounds match the generated cells.
            gap = adjust_grid_layout_for_overlaps(
                block.rows, block.cols, block.cell_size, block.cell_size, gap, min_spacing
            ).gap
        return block.model_copy(
            update={"gap": gap, "auto_prevent_overlap": auto_prevent, "min_spacing": min_spacing}
        )

    def _report_residual_overlaps(self, blocks: Sequence[SectionBlock], spacing: float) -> None:
        remaining = detect_section_overlaps(blocks, spacing)
        if remaining.has_overlaps:
            logger.warning(
                "Could not resolve %d section overlap(s); the layout may still overlap.",
                remaining.overlap_count,
            )
        else:
            logger.info("Section positions adjusted, all sections keep %spx spacing.", spacing)
