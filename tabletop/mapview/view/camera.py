# mapview/view/camera.py
from __future__ import annotations
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import pygame

from mapview import settings

if TYPE_CHECKING:
    from mapview.world.grid import MapGrid


@dataclass(frozen=True, slots=True)
class CameraState:
    """Read-only camera snapshot handed to the engine. ``position`` is a tile coordinate."""

    position: Any = None
    zoom: float = 1.0

    def __post_init__(self) -> None:
        if isinstance(self.zoom, bool) or not isinstance(self.zoom, (int, float)) or not self.zoom > 0:
            raise ValueError(f"zoom must be > 0, got {self.zoom!r}")


def as_camera_state(camera: Any) -> CameraState | None:
    """Accept a CameraState, a ``{"position", "zoom"}`` mapping or None."""
    if camera is None or isinstance(camera, CameraState):
        return camera
    if isinstance(camera, Mapping):
        return CameraState(position=camera.get("position"), zoom=camera.get("zoom", 1.0))
    raise TypeError(f"expected CameraState, mapping or None, got {type(camera).__name__}")


@dataclass(slots=True)
class Camera2D:
    """Pixel-space camera. ``offset`` is the world px at the screen's top-left."""
    world_w: int
    world_h: int
    screen_w: int
    screen_h: int
    offset_x: float = 0.0
    offset_y: float = 0.0
    zoom: float = 1.0

    def _view_size(self) -> tuple[float, float]:
        return self.screen_w / self.zoom, self.screen_h / self.zoom

    def _clamp(self) -> None:
        vw, vh = self._view_size()
        max_x = max(0.0, self.world_w - vw)
        max_y = max(0.0, self.world_h - vh)
        self.offset_x = min(max(0.0, self.offset_x), max_x)
        self.offset_y = min(max(0.0, self.offset_y), max_y)

    def set_offset(self, x: float, y: float) -> None:
        self.offset_x, self.offset_y = x, y
        self._clamp()

    def move(self, dx: float, dy: float) -> None:
        self.offset_x += dx
        self.offset_y += dy
        self._clamp()

    def zoom_by(self, factor: float, anchor: tuple[int, int] | None = None) -> None:
        """Scale zoom, keeping the world point under ``anchor`` (screen px) fixed."""
        if anchor is None:
            anchor = (self.screen_w // 2, self.screen_h // 2)
        wx, wy = self.screen_to_world(*anchor)
        self.zoom = min(settings.ZOOM_MAX, max(settings.ZOOM_MIN, self.zoom * factor))
        self.set_offset(wx - anchor[0] / self.zoom, wy - anchor[1] / self.zoom)

    # Conversions
    def world_to_screen(self, x: float, y: float) -> tuple[int, int]:
        return int((x - self.offset_x) * self.zoom), int((y - self.offset_y) * self.zoom)

    def screen_to_world(self, x: float, y: float) -> tuple[float, float]:
        return x / self.zoom + self.offset_x, y / self.zoom + self.offset_y

    def view_rect(self) -> pygame.Rect:
        vw, vh = self._view_size()
        return pygame.Rect(int(self.offset_x), int(self.offset_y), int(vw), int(vh))

    def center_px(self) -> tuple[float, float]:
        vw, vh = self._view_size()
        return self.offset_x + vw / 2, self.offset_y + vh / 2

    def center_on_px(self, cx: float, cy: float) -> None:
        vw, vh = self._view_size()
        self.set_offset(cx - vw / 2, cy - vh / 2)

    def snapshot(self, grid: MapGrid) -> CameraState:
        """Freeze the camera as a CameraState centred on the tile under the view centre."""
        return CameraState(position=grid.from_px(*self.center_px()), zoom=self.zoom)
