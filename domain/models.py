from __future__ import annotations

from dataclasses import dataclass, field
from typing import Annotated, Any, Dict, List, Literal, Optional, Set, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator
from pydantic.alias_generators import to_camel

CellKind = Literal["seat", "booth"]
CellStatus = Literal["available", "unavailable", "held", "sold", "booked"]
NumberingScheme = Literal["row-col", "snake", "index", "alpha-rows"]
LayoutType = Literal["grid", "arc", "circle", "sections"]
LayoutObjectType = Literal["stage", "screen", "custom"]
SectionLayoutStrategy = Literal["compact", "distribute", "preserve-relative"]
SectionLayoutDirection = Literal["horizontal", "vertical"]
Direction = Literal["up", "down", "left", "right"]

STATUS_DEFAULT: CellStatus = "available"


@dataclass(frozen=True)
class Point:
    x: float = 0.0
    y: float = 0.0


ORIGIN = Point(0.0, 0.0)


@dataclass(frozen=True)
class Rectangle:
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def area(self) -> float:
        return self.width * self.height

    def translate(self, dx: float, dy: float) -> Rectangle:
        return Rectangle(self.x + dx, self.y + dy, self.width, self.height)


@dataclass(frozen=True)
class BoundingBox:
    min_x: float
    min_y: float
    max_x: float
    max_y: float
    width: float
    height: float

    @classmethod
    def empty(cls) -> BoundingBox:
        return cls(min_x=0.0, min_y=0.0, max_x=0.0, max_y=0.0, width=0.0, height=0.0)


@dataclass(frozen=True)
class ViewBox:
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class CellId:
    section_id: str | None = None
    row: int | None = None
    col: int | None = None
    index: int | None = None

    def to_dict(self) -> dict:
        payload: dict = {}
        if self.section_id is not None:
            payload["sectionId"] = self.section_id
        if self.row is not None:
            payload["row"] = self.row
        if self.col is not None:
            payload["col"] = self.col
        if self.index is not None:
            payload["index"] = self.index
        return payload


@dataclass(frozen=True)
class CellMeta:
    label: str | None = None
    row_label: str | None = None
    col_label: str | None = None
    price: float | None = None
    status: CellStatus = STATUS_DEFAULT
    data: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        payload: dict = {"status": self.status}
        if self.label is not None:
            payload["label"] = self.label
        if self.row_label is not None:
            payload["rowLabel"] = self.row_label
        if self.col_label is not None:
            payload["colLabel"] = self.col_label
        if self.price is not None:
            payload["price"] = self.price
        if self.data:
            payload["data"] = dict(self.data)
        return payload


@dataclass(frozen=True, eq=False)
class Cell:
    id: CellId
    kind: CellKind
    x: float
    y: float
    w: float
    h: float
    rotation: float | None = None
    meta: CellMeta | None = None

    @property
    def label(self) -> str | None:
        return self.meta.label if self.meta else None

    def to_dict(self) -> dict:
        payload: dict = {
            "id": self.id.to_dict(),
            "kind": self.kind,
            "x": self.x,
            "y": self.y,
            "w": self.w,
            "h": self.h,
        }
        if self.rotation is not None:
            payload["rotation"] = self.rotation
        if self.meta is not None:
            payload["meta"] = self.meta.to_dict()
        return payload


class ConfigModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LayoutObject(ConfigModel):
    id: str = Field(..., min_length=1)
    type: LayoutObjectType = "custom"
    x: float
    y: float
    width: float = Field(..., ge=0)
    height: float = Field(..., ge=0)
    rotation: float = 0.0
    label: Optional[str] = None


class NumberingConfig(ConfigModel):
    scheme: NumberingScheme = "row-col"
    start_index: int = 1
    row_labels: Optional[List[str]] = None
    col_start: int = 1


class BaseLayoutConfig(ConfigModel):
    objects: List[LayoutObject] = Field(default_factory=list)
    auto_prevent_overlap: bool = False
    min_spacing: float = Field(2.0, ge=0)


class GridLayoutConfig(BaseLayoutConfig):
    type: Literal["grid"] = "grid"
    rows: int = Field(..., ge=0)
    cols: int = Field(..., ge=0)
    cell_size: float = Field(..., gt=0)
    gap: float = Field(0.0, ge=0)
    origin: Point = ORIGIN
    numbering: Optional[NumberingConfig] = None
    label_prefix: Optional[str] = None


class ArcLayoutConfig(BaseLayoutConfig):
    type: Literal["arc"] = "arc"
    radius: float = Field(..., ge=0)
    sweep_degrees: float
    count: int = Field(..., ge=0)
    cell_size: float = Field(..., gt=0)
    origin: Point = ORIGIN
    numbering: Optional[NumberingConfig] = None
    label_prefix: Optional[str] = None


class CircleLayoutConfig(BaseLayoutConfig):
    type: Literal["circle"] = "circle"
    radius: float = Field(..., ge=0)
    count: int = Field(..., ge=0)
    cell_size: float = Field(..., gt=0)
    origin: Point = ORIGIN
    numbering: Optional[NumberingConfig] = None
    label_prefix: Optional[str] = None

    def to_arc(self) -> ArcLayoutConfig:
        return ArcLayoutConfig(
            radius=self.radius,
            sweep_degrees=360.0,
            count=self.count,
            cell_size=self.cell_size,
            origin=self.origin,
            numbering=self.numbering,
            label_prefix=self.label_prefix,
            objects=list(self.objects),
            auto_prevent_overlap=self.auto_prevent_overlap,
            min_spacing=self.min_spacing,
        )


class SectionBlock(ConfigModel):
    id: str = Field(..., min_length=1)
    name: Optional[str] = None
    origin: Point = ORIGIN
    rows: int = Field(..., ge=0)
    cols: int = Field(..., ge=0)
    cell_size: float = Field(..., gt=0)
    gap: float = Field(0.0, ge=0)
    numbering: Optional[NumberingConfig] = None
    label_prefix: Optional[str] = None
    # None inherits the value of the enclosing sections layout.
    auto_prevent_overlap: Optional[bool] = None
    min_spacing: Optional[float] = Field(None, ge=0)

    @property
    def display_name(self) -> str:
        return self.name or self.id

    def to_grid_config(self) -> GridLayoutConfig:
        return GridLayoutConfig(
            rows=self.rows,
            cols=self.cols,
            cell_size=self.cell_size,
            gap=self.gap,
            origin=self.origin,
            numbering=self.numbering,
            label_prefix=self.label_prefix,
            auto_prevent_overlap=bool(self.auto_prevent_overlap),
            min_spacing=2.0 if self.min_spacing is None else self.min_spacing,
        )


class SectionsLayoutConfig(BaseLayoutConfig):
    type: Literal["sections"] = "sections"
    blocks: List[SectionBlock] = Field(default_factory=list)
    auto_prevent_section_overlaps: bool = True
    min_section_spacing: float = Field(20.0, ge=0)
    section_layout_strategy: SectionLayoutStrategy = "compact"
    section_layout_direction: SectionLayoutDirection = "horizontal"

    @field_validator("blocks", mode="after")
    @classmethod
    def ensure_unique_block_ids(cls, blocks: List[SectionBlock]) -> List[SectionBlock]:
        seen: Set[str] = set()
        for block in blocks:
            if block.id in seen:
                msg = f"Duplicate section block id found: {block.id}"
                raise ValueError(msg)
            seen.add(block.id)
        return blocks


LayoutConfig = Annotated[
    Union[GridLayoutConfig, ArcLayoutConfig, CircleLayoutConfig, SectionsLayoutConfig],
    Field(discriminator="type"),
]

_LAYOUT_CONFIG_ADAPTER: TypeAdapter[LayoutConfig] = TypeAdapter(LayoutConfig)


def parse_layout_config(payload: Any) -> LayoutConfig:
    return _LAYOUT_CONFIG_ADAPTER.validate_python(payload)


@dataclass(frozen=True)
class LayoutResult:
    layout_type: LayoutType
    cells: List[Cell]
    objects: List[LayoutObject]

    def to_dict(self) -> dict:
        return {
            "type": self.layout_type,
            "cells": [cell.to_dict() for cell in self.cells],
            "objects": [
                obj.model_dump(mode="json", by_alias=True, exclude_none=True)
                for obj in self.objects
            ],
        }
