from __future__ import annotations

from typing import List

from adapters.layout.base import BaseLayoutEngine
from domain.models import ArcLayoutConfig, Cell, CellId, CellMeta
from domain.services.collision import adjust_arc_layout_for_overlaps
from domain.services.geometry import polar_to_cartesian
from domain.services.numbering import generate_angular_label

# -90 degrees points at the top of the circle in screen coordinates.
ARC_CENTER_ANGLE = -90.0


class ArcLayoutEngine(BaseLayoutEngine[ArcLayoutConfig]):
    def build_cells(self, config: ArcLayoutConfig) -> List[Cell]:
        radius = config.radius
        if config.auto_prevent_overlap:
            radius = adjust_arc_layout_for_overlaps(
                config.count,
                config.cell_size,
                config.cell_size,
                radius,
                config.sweep_degrees,
                config.min_spacing,
            ).radius

        start_angle = ARC_CENTER_ANGLE - config.sweep_degrees / 2
        angle_step = config.sweep_degrees / (config.count - 1) if config.count > 1 else 0.0
        cells: List[Cell] = []
        for index in range(config.count):
            angle = start_angle + index * angle_step
            position = polar_to_cartesian(config.origin, radius, angle)
            cells.append(
                Cell(
                    id=CellId(index=index),
                    kind="seat",
                    x=position.x,
                    y=position.y,
                    w=config.cell_size,
                    h=config.cell_size,
                    # Seats face the arc center.
                    rotation=angle + 90.0,
                    meta=CellMeta(
                        label=generate_angular_label(index, config.numbering, config.label_prefix)
                    ),
                )
            )
        return cells
