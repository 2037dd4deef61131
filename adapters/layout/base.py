from __future__ import annotations

from domain.models import Cell, LayoutResult
from domain.ports.layout import ConfigT, LayoutEngine


class BaseLayoutEngine(LayoutEngine[ConfigT]):
    def build_cells(self, config: ConfigT) -> list[Cell]:
        raise NotImplementedError

    def build(self, config: ConfigT) -> LayoutResult:
        return LayoutResult(
            layout_type=config.type,
            cells=self.build_cells(config),
            objects=list(config.objects),
        )
