from __future__ import annotations

import os
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from app.config import AppSettings, LayoutDefaults, ViewportSettings
from domain.models import GridLayoutConfig, NumberingConfig, SectionBlock


def _clear_venue_env() -> None:
    for key in list(os.environ):
        if key.startswith("VENUE_"):
            os.environ.pop(key, None)


_clear_venue_env()


@pytest.fixture(autouse=True)
def clear_venue_env() -> Generator[None, None, None]:
    _clear_venue_env()
    yield
    _clear_venue_env()


@pytest.fixture
def examples_dir() -> Path:
    for parent in Path(__file__).resolve().parents:
        if (parent / "pyproject.toml").exists():
            return parent / "examples" / "layouts"
    raise RuntimeError("Repository root not found")


@pytest.fixture
def grid_config_factory() -> Callable[..., GridLayoutConfig]:
    def _factory(**overrides: object) -> GridLayoutConfig:
        payload: dict[str, object] = {"rows": 3, "cols": 3, "cell_size": 20.0}
        payload.update(overrides)
        return GridLayoutConfig.model_validate(payload)

    return _factory


@pytest.fixture
def section_block_factory() -> Callable[..., SectionBlock]:
    def _factory(
        block_id: str, x: float = 0.0, y: float = 0.0, **overrides: object
    ) -> SectionBlock:
        payload: dict[str, object] = {
            "id": block_id,
            "origin": {"x": x, "y": y},
            "rows": 3,
            "cols": 3,
            "cell_size": 20.0,
            "gap": 0.0,
            "numbering": NumberingConfig(scheme="row-col"),
            "label_prefix": block_id.upper(),
        }
        payload.update(overrides)
        return SectionBlock.model_validate(payload)

    return _factory


@pytest.fixture
def app_settings_factory() -> Callable[..., AppSettings]:
    def _factory(**layout_overrides: object) -> AppSettings:
        return AppSettings(
            layout=LayoutDefaults(**layout_overrides),
            viewport=ViewportSettings(),
        )

    return _factory
