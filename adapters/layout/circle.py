from __future__ import annotations

from typing import List

from adapters.layout.arc import ArcLayoutEngine
from adapters.layout.base import BaseLayoutEngine
from domain.models import Cell, CircleLayoutConfig


class CircleLayoutEngine(BaseLayoutEngine[CircleLayoutConfig]):
    def __init__(self, arc_engine: ArcLayoutEngine | None = None) -> None:
        self.arc_engine = arc_engine or ArcLayoutEngine()

    def build_cells(self, config: CircleLayoutConfig) -> List[Cell]:
        return self.arc_engine.build_cells(config.to_arc())
