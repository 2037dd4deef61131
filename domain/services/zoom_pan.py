from __future__ import annotations

import math
from dataclasses import dataclass

from domain.models import Point, ViewBox
from domain.services.geometry import clamp, inverse_transform_point

WHEEL_DELTA_SCALE = 0.001


@dataclass(frozen=True)
class ZoomPanConfig:
    min_zoom: float = 0.1
    max_zoom: float = 5.0
    zoom_speed: float = 0.1
    initial_zoom: float = 1.0
    initial_pan_x: float = 0.0
    initial_pan_y: float = 0.0

    def __post_init__(self) -> None:
        if self.min_zoom <= 0:
            msg = f"min_zoom must be positive, got {self.min_zoom}"
            raise ValueError(msg)
        if self.max_zoom < self.min_zoom:
            msg = f"max_zoom ({self.max_zoom}) must not be below min_zoom ({self.min_zoom})"
            raise ValueError(msg)


@dataclass(frozen=True)
class ZoomPanState:
    zoom: float
    pan_x: float
    pan_y: float
    is_panning: bool = False


@dataclass
class _PanSession:
    pointer_x: float
    pointer_y: float
    pan_x: float
    pan_y: float


class ZoomPanController:
    """Viewport transform ``screen = world * zoom + pan`` with clamped zoom.

    Holds the state of one pointer-drag at a time; ``start_pan``,
    ``update_pan`` and ``end_pan`` must come from the same drag.
    """

    def __init__(self, config: ZoomPanConfig | None = None) -> None:
        self.config = config or ZoomPanConfig()
        self._zoom = self._clamp(self.config.initial_zoom)
        self._pan_x = self.config.initial_pan_x
        self._pan_y = self.config.initial_pan_y
        self._session: _PanSession | None = None

    @property
    def zoom(self) -> float:
        return self._zoom

    @property
    def pan_x(self) -> float:
        return self._pan_x

    @property
    def pan_y(self) -> float:
        return self._pan_y

    @property
    def is_panning(self) -> bool:
        return self._session is not None

    def state(self) -> ZoomPanState:
        return ZoomPanState(
            zoom=self._zoom, pan_x=self._pan_x, pan_y=self._pan_y, is_panning=self.is_panning
        )

    def set_zoom(self, zoom: float) -> None:
        self._zoom = self._clamp(zoom)

    def zoom_in(self) -> None:
        self.set_zoom(self._zoom * (1 + self.config.zoom_speed))

    def zoom_out(self) -> None:
        self.set_zoom(self._zoom * (1 - self.config.zoom_speed))

    def reset_zoom(self) -> None:
        self._zoom = self._clamp(1.0)
        self._pan_x = 0.0
        self._pan_y = 0.0

    def fit_to_view(
        self,
        content_width: float,
        content_height: float,
        viewport_width: float,
        viewport_height: float,
        padding: float = 40.0,
    ) -> None:
        scale_x = _fit_scale(viewport_width - padding * 2, content_width)
        scale_y = _fit_scale(viewport_height - padding * 2, content_height)
        self._zoom = self._clamp(min(scale_x, scale_y))
        self._pan_x = 0.0
        self._pan_y = 0.0

    def zoom_to_point(self, client_x: float, client_y: float, delta_zoom: float) -> None:
        """Change zoom by ``delta_zoom`` keeping the point under the cursor fixed."""
        new_zoom = self._clamp(self._zoom + delta_zoom)
        ratio = new_zoom / self._zoom
        self._pan_x = client_x - (client_x - self._pan_x) * ratio
        self._pan_y = client_y - (client_y - self._pan_y) * ratio
        self._zoom = new_zoom

    def handle_wheel(self, delta_y: float, client_x: float, client_y: float) -> None:
        # Scrolling up (negative delta) zooms in.
        delta = -delta_y * WHEEL_DELTA_SCALE
        self.zoom_to_point(client_x, client_y, self._zoom * delta * self.config.zoom_speed)

    def start_pan(self, client_x: float, client_y: float) -> None:
        self._session = _PanSession(
            pointer_x=client_x, pointer_y=client_y, pan_x=self._pan_x, pan_y=self._pan_y
        )

    def update_pan(self, client_x: float, client_y: float) -> None:
        session = self._session
        if session is None:
            return
        self._pan_x = session.pan_x + (client_x - session.pointer_x)
        self._pan_y = session.pan_y + (client_y - session.pointer_y)

    def end_pan(self) -> None:
        self._session = None

    def screen_to_world(self, screen: Point) -> Point:
        return inverse_transform_point(screen, self._zoom, self._pan_x, self._pan_y)

    def to_view_box(self, base: ViewBox) -> ViewBox:
        return ViewBox(
            x=base.x - self._pan_x / self._zoom,
            y=base.y - self._pan_y / self._zoom,
            width=base.width / self._zoom,
            height=base.height / self._zoom,
        )

    def _clamp(self, zoom: float) -> float:
        return clamp(zoom, self.config.min_zoom, self.config.max_zoom)


def _fit_scale(available: float, content: float) -> float:
    if content <= 0:
        return math.inf
    return available / content
