from __future__ import annotations

from typing import Protocol, TypeVar

from domain.models import BaseLayoutConfig, Cell, LayoutResult

ConfigT = TypeVar("ConfigT", bound=BaseLayoutConfig, contravariant=True)


class LayoutEngine(Protocol[ConfigT]):
    def build_cells(self, config: ConfigT) -> list[Cell]: ...

    def build(self, config: ConfigT) -> LayoutResult: ...
