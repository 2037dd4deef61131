from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from domain.models import LayoutConfig, LayoutResult


class LayoutConfigRepository(Protocol):
    def load_by_path(self, path: Path) -> LayoutConfig: ...

    def load_all_with_paths(self, directory: Path) -> Sequence[tuple[Path, LayoutConfig]]: ...


class LayoutExportRepository(Protocol):
    def save(self, result: LayoutResult, path: Path) -> None: ...
