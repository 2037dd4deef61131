from __future__ import annotations

from typing import assert_never

from adapters.layout.arc import ArcLayoutEngine
from adapters.layout.circle import CircleLayoutEngine
from adapters.layout.grid import GridLayoutEngine
from adapters.layout.sections import SectionsLayoutEngine
from domain.models import (
    ArcLayoutConfig,
    CircleLayoutConfig,
    GridLayoutConfig,
    LayoutConfig,
    LayoutResult,
    SectionsLayoutConfig,
)


def build_layout(config: LayoutConfig) -> LayoutResult:
    if isinstance(config, GridLayoutConfig):
        return GridLayoutEngine().build(config)
    if isinstance(config, ArcLayoutConfig):
        return ArcLayoutEngine().build(config)
    if isinstance(config, CircleLayoutConfig):
        return CircleLayoutEngine().build(config)
    if isinstance(config, SectionsLayoutConfig):
        return SectionsLayoutEngine().build(config)
    assert_never(config)
