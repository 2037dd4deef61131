from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

from filelock import FileLock

from adapters.filesystem.json_utils import load_json, write_json_atomic
from domain.models import LayoutConfig, LayoutResult, parse_layout_config
from domain.ports.repositories import LayoutConfigRepository, LayoutExportRepository


class FileSystemLayoutConfigRepository(LayoutConfigRepository):
    def load_by_path(self, path: Path) -> LayoutConfig:
        return parse_layout_config(load_json(path))

    def load_all_with_paths(self, directory: Path) -> List[tuple[Path, LayoutConfig]]:
        return [(path, self.load_by_path(path)) for path in sorted(self._iter_paths(directory))]

    def _iter_paths(self, directory: Path) -> Iterable[Path]:
        if not directory.exists():
            return []
        return (path for path in directory.glob("*.json") if path.is_file())


class FileSystemLayoutExportRepository(LayoutExportRepository):
    def save(self, result: LayoutResult, path: Path) -> None:
        lock_path = path.with_suffix(f"{path.suffix}.lock")
        with FileLock(str(lock_path)):
            write_json_atomic(path, result.to_dict())
