from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import ClassVar

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic_settings.sources import PydanticBaseSettingsSource, YamlConfigSettingsSource

from domain.models import (
    LayoutConfig,
    SectionLayoutDirection,
    SectionLayoutStrategy,
    SectionsLayoutConfig,
)
from domain.services.zoom_pan import ZoomPanConfig

DEFAULT_CONFIG_PATH = Path("config/venue.yaml")


class LayoutDefaults(BaseModel):
    min_spacing: float = Field(2.0, ge=0)
    min_section_spacing: float = Field(20.0, ge=0)
    section_layout_strategy: SectionLayoutStrategy = "compact"
    section_layout_direction: SectionLayoutDirection = "horizontal"
    force_auto_prevent_overlap: bool = False

    def apply(self, config: LayoutConfig) -> LayoutConfig:
        """Fill settings-level defaults into fields the layout left unset."""
        explicit = config.model_fields_set
        updates: dict[str, object] = {}
        if "min_spacing" not in explicit:
            updates["min_spacing"] = self.min_spacing
        if self.force_auto_prevent_overlap and "auto_prevent_overlap" not in explicit:
            updates["auto_prevent_overlap"] = True
        if isinstance(config, SectionsLayoutConfig):
            if "min_section_spacing" not in explicit:
                updates["min_section_spacing"] = self.min_section_spacing
            if "section_layout_strategy" not in explicit:
                updates["section_layout_strategy"] = self.section_layout_strategy
            if "section_layout_direction" not in explicit:
                updates["section_layout_direction"] = self.section_layout_direction
        if not updates:
            return config
        return config.model_copy(update=updates)


class ViewportSettings(BaseModel):
    min_zoom: float = Field(0.1, gt=0)
    max_zoom: float = Field(5.0, gt=0)
    zoom_speed: float = Field(0.1, gt=0, lt=1)
    fit_padding: float = Field(40.0, ge=0)

    @model_validator(mode="after")
    def ensure_zoom_range(self) -> ViewportSettings:
        if self.max_zoom < self.min_zoom:
            msg = "viewport.max_zoom must not be below viewport.min_zoom"
            raise ValueError(msg)
        return self

    def to_zoom_pan_config(self) -> ZoomPanConfig:
        return ZoomPanConfig(
            min_zoom=self.min_zoom, max_zoom=self.max_zoom, zoom_speed=self.zoom_speed
        )


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="VENUE_", env_nested_delimiter="__")

    layout: LayoutDefaults = LayoutDefaults()
    viewport: ViewportSettings = ViewportSettings()
    log_level: str = "INFO"

    _yaml_path: ClassVar[Path | None] = None

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: object) -> str:
        level = str(value or "INFO").strip().upper()
        if level not in logging.getLevelNamesMapping():
            msg = f"Unknown log level: {value}"
            raise ValueError(msg)
        return level

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        sources: list[PydanticBaseSettingsSource] = [
            init_settings,
            env_settings,
            dotenv_settings,
            file_secret_settings,
        ]
        if cls._yaml_path:
            sources.append(YamlConfigSettingsSource(settings_cls, yaml_file=cls._yaml_path))
        return tuple(sources)


def load_settings(config_path: Path | None = None) -> AppSettings:
    env_path = os.getenv("VENUE_CONFIG_PATH")
    resolved_path: Path | None = None

    if config_path is not None:
        resolved_path = config_path
    elif env_path:
        resolved_path = Path(env_path)
    elif DEFAULT_CONFIG_PATH.exists():
        resolved_path = DEFAULT_CONFIG_PATH

    previous = AppSettings._yaml_path
    try:
        if resolved_path is not None:
            if not resolved_path.exists():
                msg = f"Config file not found: {resolved_path}"
                raise FileNotFoundError(msg)
            AppSettings._yaml_path = resolved_path
        return AppSettings()
    finally:
        AppSettings._yaml_path = previous


def configure_logging(settings: AppSettings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
