from __future__ import annotations

from typing import List

from adapters.layout.base import BaseLayoutEngine
from domain.models import Cell, CellId, CellMeta, GridLayoutConfig, NumberingConfig
from domain.services.collision import adjust_grid_layout_for_overlaps
from domain.services.numbering import compute_axis_labels, generate_label


class GridLayoutEngine(BaseLayoutEngine[GridLayoutConfig]):
    def build_cells(self, config: GridLayoutConfig) -> List[Cell]:
        gap = config.gap
        if config.auto_prevent_overlap:
            gap = adjust_grid_layout_for_overlaps(
                config.rows,
                config.cols,
                config.cell_size,
                config.cell_size,
                gap,
                config.min_spacing,
            ).gap

        numbering = config.numbering or NumberingConfig()
        pitch = config.cell_size + gap
        half = config.cell_size / 2
        cells: List[Cell] = []
        for row in range(config.rows):
            y = config.origin.y + row * pitch + half
            for col in range(config.cols):
                axis = compute_axis_labels(row, col, numbering, config.label_prefix)
                label = generate_label(row, col, numbering, config.label_prefix, cols=config.cols)
                cells.append(
                    Cell(
                        id=CellId(row=row, col=col),
                        kind="seat",
                        x=config.origin.x + col * pitch + half,
                        y=y,
                        w=config.cell_size,
                        h=config.cell_size,
                        meta=CellMeta(
                            label=label,
                            row_label=axis.row_label,
                            col_label=axis.col_label,
                        ),
                    )
                )
        return cells
